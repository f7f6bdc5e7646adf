# =============================================================================
# File: membership/user_account/events.py
# Description: Account lifecycle events. Every event carries a snapshot of the
#              affected account plus kind-specific payload. The decorator
#              declares which attributes become notification fields.
# =============================================================================

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from membership.infra.event_bus.event_decorators import account_event
from membership.user_account.read_models import AccountSnapshot, LinkedAccount, UserAccount, UserCertificate

# =============================================================================
# SECTION: Base Event Contract (shared for all events)
# =============================================================================

class BaseEvent(BaseModel):
    event_id: uuid.UUID = Field(default_factory=uuid.uuid4)
    event_type: str  # Each subclass sets its Literal value
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    # Events are immutable facts
    model_config = ConfigDict(frozen=True, from_attributes=True)


class UserAccountEvent(BaseEvent):
    account: AccountSnapshot

    @field_validator("account", mode="before")
    @classmethod
    def _freeze_account(cls, value):
        if isinstance(value, UserAccount) and not isinstance(value, AccountSnapshot):
            return value.freeze()
        return value

# =============================================================================
# SECTION: Account Creation and Approval
# =============================================================================

@account_event(fields={"InitialPassword": "initial_password", "VerificationKey": "verification_key"})
class AccountCreated(UserAccountEvent):
    event_type: Literal["AccountCreated"] = "AccountCreated"
    initial_password: Optional[str] = None
    verification_key: Optional[str] = None

@account_event()
class AccountApproved(UserAccountEvent):
    event_type: Literal["AccountApproved"] = "AccountApproved"

@account_event()
class AccountRejected(UserAccountEvent):
    event_type: Literal["AccountRejected"] = "AccountRejected"

@account_event()
class AccountClosed(UserAccountEvent):
    event_type: Literal["AccountClosed"] = "AccountClosed"

@account_event(fields={"VerificationKey": "verification_key"})
class AccountReopened(UserAccountEvent):
    event_type: Literal["AccountReopened"] = "AccountReopened"
    verification_key: Optional[str] = None

@account_event()
class AccountUnlocked(UserAccountEvent):
    event_type: Literal["AccountUnlocked"] = "AccountUnlocked"

# =============================================================================
# SECTION: Credentials
# =============================================================================

@account_event(fields={"VerificationKey": "verification_key"})
class PasswordResetRequested(UserAccountEvent):
    event_type: Literal["PasswordResetRequested"] = "PasswordResetRequested"
    verification_key: str

@account_event()
class PasswordChanged(UserAccountEvent):
    event_type: Literal["PasswordChanged"] = "PasswordChanged"

@account_event()
class PasswordResetSecretAdded(UserAccountEvent):
    event_type: Literal["PasswordResetSecretAdded"] = "PasswordResetSecretAdded"
    secret_id: uuid.UUID = Field(default_factory=uuid.uuid4)
    question: Optional[str] = None

@account_event()
class PasswordResetSecretRemoved(UserAccountEvent):
    event_type: Literal["PasswordResetSecretRemoved"] = "PasswordResetSecretRemoved"
    secret_id: uuid.UUID
    question: Optional[str] = None

@account_event()
class UsernameReminderRequested(UserAccountEvent):
    event_type: Literal["UsernameReminderRequested"] = "UsernameReminderRequested"

@account_event()
class UsernameChanged(UserAccountEvent):
    event_type: Literal["UsernameChanged"] = "UsernameChanged"

# =============================================================================
# SECTION: Email and Mobile
# =============================================================================

@account_event(fields={"OldEmail": "old_email", "NewEmail": "new_email", "VerificationKey": "verification_key"})
class EmailChangeRequested(UserAccountEvent):
    event_type: Literal["EmailChangeRequested"] = "EmailChangeRequested"
    old_email: Optional[str] = None
    new_email: str
    verification_key: str

@account_event(fields={"OldEmail": "old_email", "VerificationKey": "verification_key"})
class EmailChanged(UserAccountEvent):
    event_type: Literal["EmailChanged"] = "EmailChanged"
    old_email: Optional[str] = None
    verification_key: Optional[str] = None

@account_event()
class EmailVerified(UserAccountEvent):
    event_type: Literal["EmailVerified"] = "EmailVerified"

@account_event()
class MobilePhoneChanged(UserAccountEvent):
    event_type: Literal["MobilePhoneChanged"] = "MobilePhoneChanged"

@account_event()
class MobilePhoneRemoved(UserAccountEvent):
    event_type: Literal["MobilePhoneRemoved"] = "MobilePhoneRemoved"

# =============================================================================
# SECTION: Certificates and Linked Accounts
# =============================================================================

@account_event(fields={"Thumbprint": "certificate.thumbprint", "Subject": "certificate.subject"})
class CertificateAdded(UserAccountEvent):
    event_type: Literal["CertificateAdded"] = "CertificateAdded"
    certificate: UserCertificate

@account_event(fields={"Thumbprint": "certificate.thumbprint", "Subject": "certificate.subject"})
class CertificateRemoved(UserAccountEvent):
    event_type: Literal["CertificateRemoved"] = "CertificateRemoved"
    certificate: UserCertificate

@account_event(fields={"ProviderName": "linked_account.provider_name"})
class LinkedAccountAdded(UserAccountEvent):
    event_type: Literal["LinkedAccountAdded"] = "LinkedAccountAdded"
    linked_account: LinkedAccount

@account_event(fields={"ProviderName": "linked_account.provider_name"})
class LinkedAccountRemoved(UserAccountEvent):
    event_type: Literal["LinkedAccountRemoved"] = "LinkedAccountRemoved"
    linked_account: LinkedAccount

# =============================================================================
# EOF
# =============================================================================
