# =============================================================================
# File: membership/api/routers/user_account_router.py
# Description: Registration and verification-cancellation endpoints
# =============================================================================

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from membership.api.dependencies import get_user_account_service
from membership.api.models.user_account_api_models import (
    CancelVerificationResponse,
    FormErrorDetail,
    FormErrorResponse,
    RegisterRequest,
    RegisterResponse,
    VerifyEmailResponse,
)
from membership.common.exceptions.exceptions import ValidationError
from membership.user_account.service import UserAccountService

log = logging.getLogger("membership.api.user_account_router")
router = APIRouter()


def _form_error(exc: ValidationError, **redisplay) -> HTTPException:
    detail = FormErrorDetail(form_errors=[exc.message], input=redisplay)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail.model_dump())


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=RegisterResponse,
    responses={400: {"model": FormErrorResponse}},
)
def register(
        payload: RegisterRequest,
        service: UserAccountService = Depends(get_user_account_service),
) -> RegisterResponse:
    """Create an account; validation problems come back as one form-level error."""
    log.info("Registration attempt username=%s email=%s", payload.username, payload.email)

    try:
        account = service.create_account(payload.username, payload.password, payload.email)
    except ValidationError as exc:
        log.warning("Registration failed: %s", exc.message)
        # Password is never echoed back
        raise _form_error(exc, username=payload.username, email=payload.email) from exc

    return RegisterResponse(
        account_id=account.account_id,
        require_account_verification=service.config.require_account_verification,
    )


@router.get(
    "/verify/{key}",
    response_model=VerifyEmailResponse,
    responses={400: {"model": FormErrorResponse}},
)
def verify_email(
        key: str,
        service: UserAccountService = Depends(get_user_account_service),
) -> VerifyEmailResponse:
    """Confirm the registration, reopen or email change pending on ``key``."""
    try:
        account = service.verify_email_from_key(key)
    except ValidationError as exc:
        log.info("Verification rejected: %s", exc.message)
        raise _form_error(exc) from exc

    return VerifyEmailResponse(account_id=account.account_id, email=account.email)


@router.get(
    "/cancel/{key}",
    response_model=CancelVerificationResponse,
    responses={400: {"model": FormErrorResponse}},
)
def cancel_verification(
        key: str,
        silent: bool = False,
        service: UserAccountService = Depends(get_user_account_service),
) -> CancelVerificationResponse:
    """
    Cancel the action pending on ``key``.

    An invalid key is reported as a form error unless the caller opts into
    ``silent=true``, in which case the outcome is simply "not closed".
    """
    try:
        closed = service.cancel_verification(key)
    except ValidationError as exc:
        if silent:
            log.info("Cancel verification ignored invalid key: %s", exc.message)
            return CancelVerificationResponse(closed=False)
        raise _form_error(exc) from exc

    return CancelVerificationResponse(closed=closed)
