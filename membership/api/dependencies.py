# =============================================================================
# File: membership/api/dependencies.py
# Description: FastAPI dependencies resolving services from application state
# =============================================================================

from fastapi import Request

from membership.user_account.service import UserAccountService


def get_user_account_service(request: Request) -> UserAccountService:
    """Get the account service from application state"""
    if not hasattr(request.app.state, 'user_account_service'):
        raise RuntimeError("UserAccountService not configured")
    return request.app.state.user_account_service

