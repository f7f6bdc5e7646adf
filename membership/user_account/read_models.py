# =============================================================================
# File: membership/user_account/read_models.py
# Description: Account record as held by the account service and carried
#              (as a snapshot) on every lifecycle event
# =============================================================================

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from membership.user_account.enums import VerificationPurpose


class UserCertificate(BaseModel):
    """Client certificate registered against an account."""
    model_config = ConfigDict(frozen=True)

    thumbprint: str
    subject: Optional[str] = None


class LinkedAccount(BaseModel):
    """External identity provider login linked to an account."""
    model_config = ConfigDict(frozen=True)

    provider_name: str
    provider_account_id: str


class UserAccount(BaseModel):
    """
    Account record.

    The service mutates its own copy; events carry a ``snapshot()`` so a
    notification always reflects the state at the moment of the transition.
    """
    model_config = ConfigDict(validate_assignment=True)

    account_id: uuid.UUID = Field(default_factory=uuid.uuid4)
    username: str
    email: str
    mobile_phone_number: Optional[str] = None
    hashed_password: Optional[str] = None

    is_account_verified: bool = False
    is_login_allowed: bool = True
    is_account_closed: bool = False
    failed_login_count: int = 0

    verification_key: Optional[str] = None
    verification_purpose: Optional[VerificationPurpose] = None
    # Pending new email while a change-email verification is outstanding
    verification_storage: Optional[str] = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    password_changed_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None

    certificates: List[UserCertificate] = Field(default_factory=list)
    linked_accounts: List[LinkedAccount] = Field(default_factory=list)

    @property
    def has_pending_verification(self) -> bool:
        return self.verification_purpose is not None

    def snapshot(self) -> UserAccount:
        return self.model_copy(deep=True)

    def freeze(self) -> AccountSnapshot:
        """Read-only copy for lifecycle events."""
        return AccountSnapshot.model_validate(self.model_dump())


class AccountSnapshot(UserAccount):
    """Account state at the moment a lifecycle event was raised. Immutable."""
    model_config = ConfigDict(frozen=True)

    certificates: Tuple[UserCertificate, ...] = ()
    linked_accounts: Tuple[LinkedAccount, ...] = ()
