# =============================================================================
# File: membership/core/exceptions.py
# Description: FastAPI exception handlers. Account rule violations become
#              form-level errors; anything unexpected is a 500.
# =============================================================================

import logging
import os

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette import status
from starlette.responses import JSONResponse

from membership.common.exceptions.exceptions import NotFoundError, ValidationError

logger = logging.getLogger("membership.exceptions")


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application"""
    app.add_exception_handler(ValidationError, form_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


async def form_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Same shape the routers use for errors they catch themselves"""
    logger.warning(f"Form error on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": {"form_errors": [exc.message], "input": {}}},
    )


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info(f"Not found on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc) or "Not found."},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed request bodies, not account rules
    errors = [
        {"loc": error["loc"], "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]
    logger.warning(f"Malformed request on {request.url.path}: {errors}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_encoder(errors)},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)

    if os.getenv("ENVIRONMENT", "development") == "production":
        detail = "Internal server error"
    else:
        detail = f"{type(exc).__name__}: {exc}"

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": detail},
    )
