# =============================================================================
# File: membership/notifications/templates.py
# Description: Default plain-text email templates, one per account event type.
#              Placeholders are field-map keys plus the values the formatter
#              adds (Username, Email, ApplicationName, ApplicationUrl,
#              VerificationUrl, CancelVerificationUrl).
# =============================================================================

from typing import Dict, NamedTuple, Optional


class MessageTemplate(NamedTuple):
    subject: str
    body: str
    # Used instead of body when the event carries no VerificationKey
    keyless_body: Optional[str] = None


DEFAULT_TEMPLATES: Dict[str, MessageTemplate] = {
    "AccountCreated": MessageTemplate(
        "[{ApplicationName}] Account created",
        "Hello {Username},\n\n"
        "Your {ApplicationName} account has been created.\n"
        "Please confirm your email address by visiting:\n{VerificationUrl}\n\n"
        "If you did not create this account, cancel it here:\n{CancelVerificationUrl}\n",
        "Hello {Username},\n\nYour {ApplicationName} account has been created. You can sign in at {ApplicationUrl}.\n",
    ),
    "AccountApproved": MessageTemplate(
        "[{ApplicationName}] Account approved",
        "Hello {Username},\n\nYour account has been approved. You can now sign in at {ApplicationUrl}.\n",
    ),
    "AccountRejected": MessageTemplate(
        "[{ApplicationName}] Account request declined",
        "Hello {Username},\n\nYour account request was not approved.\n",
    ),
    "AccountClosed": MessageTemplate(
        "[{ApplicationName}] Account closed",
        "Hello {Username},\n\nYour account has been closed.\n",
    ),
    "AccountReopened": MessageTemplate(
        "[{ApplicationName}] Account reopened",
        "Hello {Username},\n\n"
        "Your account has been reopened. Please confirm by visiting:\n{VerificationUrl}\n",
        "Hello {Username},\n\nYour account has been reopened. You can sign in at {ApplicationUrl}.\n",
    ),
    "AccountUnlocked": MessageTemplate(
        "[{ApplicationName}] Account unlocked",
        "Hello {Username},\n\nYour account has been unlocked and you can sign in again.\n",
    ),
    "PasswordResetRequested": MessageTemplate(
        "[{ApplicationName}] Password reset request",
        "Hello {Username},\n\n"
        "A password reset was requested for your account. To choose a new password visit:\n"
        "{VerificationUrl}\n\n"
        "If you did not ask for this, cancel the request here:\n{CancelVerificationUrl}\n",
    ),
    "PasswordChanged": MessageTemplate(
        "[{ApplicationName}] Password changed",
        "Hello {Username},\n\nThe password for your account was changed.\n",
    ),
    "PasswordResetSecretAdded": MessageTemplate(
        "[{ApplicationName}] Password reset question added",
        "Hello {Username},\n\nA password reset question was added to your account.\n",
    ),
    "PasswordResetSecretRemoved": MessageTemplate(
        "[{ApplicationName}] Password reset question removed",
        "Hello {Username},\n\nA password reset question was removed from your account.\n",
    ),
    "UsernameReminderRequested": MessageTemplate(
        "[{ApplicationName}] Username reminder",
        "Hello,\n\nYour username is: {Username}\n",
    ),
    "UsernameChanged": MessageTemplate(
        "[{ApplicationName}] Username changed",
        "Hello,\n\nYour username is now: {Username}\n",
    ),
    "EmailChangeRequested": MessageTemplate(
        "[{ApplicationName}] Confirm your new email address",
        "Hello {Username},\n\n"
        "A request was made to change the email on your account from {OldEmail} to {NewEmail}.\n"
        "Confirm the change by visiting:\n{VerificationUrl}\n\n"
        "If you did not ask for this, cancel the request here:\n{CancelVerificationUrl}\n",
    ),
    "EmailChanged": MessageTemplate(
        "[{ApplicationName}] Email changed",
        "Hello {Username},\n\nThe email on your account was changed from {OldEmail} to {Email}.\n",
    ),
    "EmailVerified": MessageTemplate(
        "[{ApplicationName}] Email verified",
        "Hello {Username},\n\nYour email address has been verified.\n",
    ),
    "MobilePhoneChanged": MessageTemplate(
        "[{ApplicationName}] Mobile phone changed",
        "Hello {Username},\n\nThe mobile phone number on your account was changed.\n",
    ),
    "MobilePhoneRemoved": MessageTemplate(
        "[{ApplicationName}] Mobile phone removed",
        "Hello {Username},\n\nThe mobile phone number was removed from your account.\n",
    ),
    "CertificateAdded": MessageTemplate(
        "[{ApplicationName}] Certificate added",
        "Hello {Username},\n\n"
        "A certificate was added to your account.\nSubject: {Subject}\nThumbprint: {Thumbprint}\n",
    ),
    "CertificateRemoved": MessageTemplate(
        "[{ApplicationName}] Certificate removed",
        "Hello {Username},\n\n"
        "A certificate was removed from your account.\nSubject: {Subject}\nThumbprint: {Thumbprint}\n",
    ),
    "LinkedAccountAdded": MessageTemplate(
        "[{ApplicationName}] {ProviderName} login linked",
        "Hello {Username},\n\nYou can now sign in with {ProviderName}.\n",
    ),
    "LinkedAccountRemoved": MessageTemplate(
        "[{ApplicationName}] {ProviderName} login removed",
        "Hello {Username},\n\nSigning in with {ProviderName} is no longer linked to your account.\n",
    ),
}
