# membership/server.py
# =============================================================================
# File: membership/server.py
# Description: FastAPI application factory
# =============================================================================

from __future__ import annotations

import logging
import os
from typing import Optional

from fastapi import FastAPI

from membership import __version__
from membership.api.routers.user_account_router import router as user_account_router
from membership.config.logging_config import log_section, setup_logging
from membership.core.bootstrap import build_user_account_service
from membership.core.exceptions import setup_exception_handlers
from membership.user_account.service import UserAccountService

logger = logging.getLogger("membership.server")


def create_app(
        user_account_service: Optional[UserAccountService] = None,
        configure_logging: bool = False,
) -> FastAPI:
    if configure_logging:
        setup_logging(
            service_name="api",
            log_file=os.getenv("LOG_FILE") or None,
            enable_json=os.getenv("ENVIRONMENT") == "production",
        )
        log_section(logger, f"Membership API v{__version__}")

    app = FastAPI(
        title=f"Membership API v{__version__}",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.user_account_service = user_account_service or build_user_account_service()

    app.include_router(user_account_router, prefix="/user-account", tags=["user-account"])
    setup_exception_handlers(app)
    return app
