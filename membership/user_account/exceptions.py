# =============================================================================
# File: membership/user_account/exceptions.py
# Description: Domain-specific exceptions for UserAccount domain
# =============================================================================

from membership.common.exceptions.exceptions import NotFoundError, ValidationError


class UserAccountNotFoundError(NotFoundError):
    """Raised when an account is not found by ID"""
    pass


class UsernameAlreadyExistsError(ValidationError):
    """Raised when attempting to register a username that is taken"""

    def __init__(self, message: str = "Username already in use."):
        super().__init__(message)


class EmailAlreadyInUseError(ValidationError):
    """Raised when an email address already belongs to another account"""

    def __init__(self, message: str = "Email already in use."):
        super().__init__(message)


class InvalidEmailError(ValidationError):
    """Raised when an email address is missing or malformed"""

    def __init__(self, message: str = "Email is invalid."):
        super().__init__(message)


class InvalidVerificationKeyError(ValidationError):
    """Raised when a verification key is malformed or unknown"""

    def __init__(self, message: str = "Key invalid."):
        super().__init__(message)


class InvalidPasswordError(ValidationError):
    """Raised when a password is missing or does not match"""

    def __init__(self, message: str = "Invalid password."):
        super().__init__(message)


class AccountClosedError(ValidationError):
    """Raised when attempting an operation on a closed account"""

    def __init__(self, message: str = "Account is closed."):
        super().__init__(message)


# =============================================================================
# EOF
# =============================================================================
