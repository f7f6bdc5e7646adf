# membership/user_account/enums.py
# =============================================================================
# File: membership/user_account/enums.py
# Description: Domain enums for User Account
# =============================================================================

from enum import Enum


class VerificationPurpose(str, Enum):
    """
    What a pending verification key will confirm (or cancel).

    A key with no purpose is resolved: it is still recognised, but there is
    nothing left to confirm or cancel.
    """
    CREATE_ACCOUNT = "create_account"
    CHANGE_EMAIL = "change_email"
    RESET_PASSWORD = "reset_password"
    REOPEN_ACCOUNT = "reopen_account"
