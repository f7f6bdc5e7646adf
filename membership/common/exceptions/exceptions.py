# membership/common/exceptions/exceptions.py
# =============================================================================
# Custom exceptions for the Membership platform
# =============================================================================


class MembershipException(Exception):
    """Base exception for Membership platform"""
    pass


class ValidationError(MembershipException):
    """
    Raised when validation fails.

    Carries a human-readable ``message`` that the web layer shows as a
    form-level error.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(MembershipException):
    """Raised when a resource is not found"""
    pass


class ConfigurationError(MembershipException):
    """Raised when a component is constructed without a required dependency"""
    pass


class DeliveryError(MembershipException):
    """Raised when an outbound message cannot be handed to its transport"""
    pass
