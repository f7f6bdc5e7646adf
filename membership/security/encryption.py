# =============================================================================
# File: membership/security/encryption.py
# Description: Account password hashing (bcrypt)
# =============================================================================

import logging

import bcrypt

log = logging.getLogger("membership.security")

# bcrypt only reads the first 72 bytes; longer secrets are rejected, not truncated
MAX_PASSWORD_BYTES = 72


def password_fits(password: str) -> bool:
    return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES


def hash_password(password: str) -> str:
    """Hash an account password; the result is what UserAccount.hashed_password stores."""
    if not password:
        raise ValueError("Password cannot be empty.")
    if not password_fits(password):
        raise ValueError(f"Password exceeds {MAX_PASSWORD_BYTES} bytes.")
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    if not password or not hashed_password or not password_fits(password):
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError as e:
        # Stored value is not a bcrypt hash
        log.warning(f"Password check failed for malformed hash: {e}")
        return False
