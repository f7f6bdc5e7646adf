# =============================================================================
# File: membership/user_account/service.py
# Description: Account lifecycle service. Validates each operation, updates
#              the stored account and publishes exactly one lifecycle event
#              per successful transition.
# =============================================================================

from __future__ import annotations

import logging
import re
import secrets
import uuid
from datetime import datetime, timezone
from typing import Optional

from email_validator import EmailNotValidError, validate_email

from membership.common.exceptions.exceptions import ValidationError
from membership.config.membership_config import MembershipConfig, get_membership_config
from membership.infra.event_bus.event_bus import EventBus
from membership.security.encryption import hash_password, password_fits, verify_password
from membership.user_account.enums import VerificationPurpose
from membership.user_account.events import (
    AccountClosed,
    AccountCreated,
    AccountReopened,
    CertificateAdded,
    CertificateRemoved,
    EmailChanged,
    EmailChangeRequested,
    EmailVerified,
    LinkedAccountAdded,
    LinkedAccountRemoved,
    MobilePhoneChanged,
    MobilePhoneRemoved,
    PasswordChanged,
    PasswordResetRequested,
    UserAccountEvent,
    UsernameChanged,
)
from membership.user_account.exceptions import (
    AccountClosedError,
    EmailAlreadyInUseError,
    InvalidEmailError,
    InvalidPasswordError,
    InvalidVerificationKeyError,
    UserAccountNotFoundError,
    UsernameAlreadyExistsError,
)
from membership.user_account.ports.user_account_repository_port import UserAccountRepositoryPort
from membership.user_account.read_models import LinkedAccount, UserAccount, UserCertificate

log = logging.getLogger("membership.user_account.service")

# token_urlsafe alphabet; anything else cannot be a key we issued
_VERIFICATION_KEY_RE = re.compile(r"^[A-Za-z0-9_-]{16,128}$")
# E.164: optional "+", 7 to 15 digits
_PHONE_RE = re.compile(r"^\+?[0-9]{7,15}$")
MAX_USERNAME_LENGTH = 100


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserAccountService:
    """
    Account state machine.

    State is written to the repository before the event is published, so
    handlers always observe the committed account.
    """

    def __init__(
            self,
            repository: UserAccountRepositoryPort,
            event_bus: EventBus,
            config: Optional[MembershipConfig] = None,
    ):
        self.repository = repository
        self.event_bus = event_bus
        self.config = config or get_membership_config()

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------
    def _publish(self, event: UserAccountEvent) -> None:
        log.debug(f"Emitting {event.event_type} for account {event.account.account_id}")
        self.event_bus.publish(event)

    def _new_verification_key(self) -> str:
        return secrets.token_urlsafe(self.config.verification_key_bytes)

    def _get_open_account(self, account_id: uuid.UUID) -> UserAccount:
        account = self.repository.get_by_id(account_id)
        if account is None:
            raise UserAccountNotFoundError(f"Account {account_id} not found")
        if account.is_account_closed:
            raise AccountClosedError()
        return account

    def _get_by_key(self, key: Optional[str], current_only: bool = True) -> UserAccount:
        if not key or not _VERIFICATION_KEY_RE.match(key):
            raise InvalidVerificationKeyError()
        account = self.repository.get_by_verification_key(key)
        if account is None:
            raise InvalidVerificationKeyError()
        # Superseded keys stay indexed but no longer authorize anything
        if current_only and account.verification_key != key:
            raise InvalidVerificationKeyError()
        return account

    @staticmethod
    def _normalize_email(email: Optional[str]) -> str:
        if not email or not email.strip():
            raise InvalidEmailError("Email is required.")
        try:
            return validate_email(email.strip(), check_deliverability=False).normalized
        except EmailNotValidError as exc:
            raise InvalidEmailError() from exc

    @staticmethod
    def _normalize_username(username: Optional[str]) -> str:
        if not username or not username.strip():
            raise ValidationError("Username is required.")
        username = username.strip()
        if len(username) > MAX_USERNAME_LENGTH or any(ch.isspace() for ch in username):
            raise ValidationError("Username is invalid.")
        return username

    @staticmethod
    def _check_new_password(password: Optional[str]) -> None:
        if not password:
            raise InvalidPasswordError("Password is required.")
        if not password_fits(password):
            raise InvalidPasswordError("Password is too long.")

    def _ensure_email_available(self, email: str, account_id: Optional[uuid.UUID] = None) -> None:
        existing = self.repository.get_by_email(email)
        if existing is not None and existing.account_id != account_id:
            raise EmailAlreadyInUseError()

    def _ensure_username_available(self, username: str, account_id: Optional[uuid.UUID] = None) -> None:
        existing = self.repository.get_by_username(username)
        if existing is not None and existing.account_id != account_id:
            raise UsernameAlreadyExistsError()

    # -------------------------------------------------------------------------
    # Registration and verification
    # -------------------------------------------------------------------------
    def create_account(self, username: Optional[str], password: Optional[str], email: Optional[str]) -> UserAccount:
        email = self._normalize_email(email)
        username = email if self.config.email_is_username else self._normalize_username(username)
        self._check_new_password(password)

        self._ensure_username_available(username)
        self._ensure_email_available(email)

        account = UserAccount(
            username=username,
            email=email,
            hashed_password=hash_password(password),
            password_changed_at=_utcnow(),
        )
        if self.config.require_account_verification:
            account.verification_key = self._new_verification_key()
            account.verification_purpose = VerificationPurpose.CREATE_ACCOUNT
        else:
            account.is_account_verified = True

        self.repository.add(account)
        log.info(f"Account created: {account.account_id} ({username})")

        self._publish(AccountCreated(
            account=account.freeze(),
            initial_password=password,
            verification_key=account.verification_key,
        ))
        return account

    def verify_email_from_key(self, key: str) -> UserAccount:
        account = self._get_by_key(key)
        purpose = account.verification_purpose
        if account.is_account_closed or purpose not in (
                VerificationPurpose.CREATE_ACCOUNT,
                VerificationPurpose.REOPEN_ACCOUNT,
                VerificationPurpose.CHANGE_EMAIL,
        ):
            raise InvalidVerificationKeyError()

        if purpose == VerificationPurpose.CHANGE_EMAIL:
            new_email = account.verification_storage
            if not new_email:
                raise InvalidVerificationKeyError()
            self._ensure_email_available(new_email, account.account_id)
            if self.config.email_is_username:
                self._ensure_username_available(new_email, account.account_id)
                account.username = new_email
            old_email = account.email
            account.email = new_email
            account.verification_storage = None
            account.verification_purpose = None
            account.is_account_verified = True
            self.repository.update(account)
            self._publish(EmailChanged(account=account.freeze(), old_email=old_email, verification_key=key))
            return account

        account.verification_purpose = None
        account.is_account_verified = True
        self.repository.update(account)
        self._publish(EmailVerified(account=account.freeze()))
        return account

    def cancel_verification(self, key: str) -> bool:
        """
        Void the action pending on ``key``.

        Returns True only when cancelling closed the account (an unconfirmed
        registration). A key that was already resolved returns False.
        Raises InvalidVerificationKeyError for a malformed or unknown key.
        """
        account = self._get_by_key(key, current_only=False)

        if account.verification_key != key or not account.has_pending_verification:
            log.info(f"Nothing to cancel for account {account.account_id}")
            return False

        purpose = account.verification_purpose
        account.verification_purpose = None
        account.verification_storage = None

        closed = False
        if purpose == VerificationPurpose.CREATE_ACCOUNT and not account.is_account_verified:
            account.is_account_closed = True
            account.is_login_allowed = False
            account.closed_at = _utcnow()
            closed = True

        self.repository.update(account)
        log.info(f"Verification cancelled for account {account.account_id} (purpose={purpose.value}, closed={closed})")

        if closed:
            self._publish(AccountClosed(account=account.freeze()))
        return closed

    # -------------------------------------------------------------------------
    # Credentials
    # -------------------------------------------------------------------------
    def request_password_reset(self, email: str) -> None:
        account = self.repository.get_by_email(self._normalize_email(email))
        if account is None:
            raise InvalidEmailError("Invalid email.")
        if account.is_account_closed:
            raise AccountClosedError()

        account.verification_key = self._new_verification_key()
        account.verification_purpose = VerificationPurpose.RESET_PASSWORD
        self.repository.update(account)
        self._publish(PasswordResetRequested(account=account.freeze(), verification_key=account.verification_key))

    def reset_password_from_key(self, key: str, new_password: str) -> UserAccount:
        account = self._get_by_key(key)
        if account.is_account_closed or account.verification_purpose != VerificationPurpose.RESET_PASSWORD:
            raise InvalidVerificationKeyError()
        self._check_new_password(new_password)

        account.hashed_password = hash_password(new_password)
        account.password_changed_at = _utcnow()
        account.verification_purpose = None
        account.failed_login_count = 0
        self.repository.update(account)
        self._publish(PasswordChanged(account=account.freeze()))
        return account

    def change_password(self, account_id: uuid.UUID, old_password: str, new_password: str) -> None:
        account = self._get_open_account(account_id)
        if not verify_password(old_password, account.hashed_password or ""):
            raise InvalidPasswordError()
        self._check_new_password(new_password)

        account.hashed_password = hash_password(new_password)
        account.password_changed_at = _utcnow()
        self.repository.update(account)
        self._publish(PasswordChanged(account=account.freeze()))

    # -------------------------------------------------------------------------
    # Identity changes
    # -------------------------------------------------------------------------
    def change_email_request(self, account_id: uuid.UUID, new_email: str) -> str:
        """Start an email change; returns the verification key sent to the new address."""
        account = self._get_open_account(account_id)
        new_email = self._normalize_email(new_email)
        if new_email.lower() == account.email.lower():
            raise ValidationError("Email is unchanged.")
        self._ensure_email_available(new_email, account.account_id)

        key = self._new_verification_key()
        account.verification_key = key
        account.verification_purpose = VerificationPurpose.CHANGE_EMAIL
        account.verification_storage = new_email
        self.repository.update(account)

        self._publish(EmailChangeRequested(
            account=account.freeze(),
            old_email=account.email,
            new_email=new_email,
            verification_key=key,
        ))
        return key

    def change_username(self, account_id: uuid.UUID, new_username: str) -> None:
        if self.config.email_is_username:
            raise ValidationError("Username cannot be changed when email is used as username.")
        account = self._get_open_account(account_id)
        new_username = self._normalize_username(new_username)
        self._ensure_username_available(new_username, account.account_id)

        account.username = new_username
        self.repository.update(account)
        self._publish(UsernameChanged(account=account.freeze()))

    def change_mobile_phone_number(self, account_id: uuid.UUID, number: str) -> None:
        account = self._get_open_account(account_id)
        number = (number or "").replace(" ", "").replace("-", "")
        if not _PHONE_RE.match(number):
            raise ValidationError("Mobile phone number is invalid.")
        if number == account.mobile_phone_number:
            return

        account.mobile_phone_number = number
        self.repository.update(account)
        self._publish(MobilePhoneChanged(account=account.freeze()))

    def remove_mobile_phone_number(self, account_id: uuid.UUID) -> None:
        account = self._get_open_account(account_id)
        if account.mobile_phone_number is None:
            return

        account.mobile_phone_number = None
        self.repository.update(account)
        self._publish(MobilePhoneRemoved(account=account.freeze()))

    # -------------------------------------------------------------------------
    # Close / reopen
    # -------------------------------------------------------------------------
    def close_account(self, account_id: uuid.UUID) -> None:
        account = self.repository.get_by_id(account_id)
        if account is None:
            raise UserAccountNotFoundError(f"Account {account_id} not found")
        if account.is_account_closed:
            return

        account.is_account_closed = True
        account.is_login_allowed = False
        account.closed_at = _utcnow()
        account.verification_purpose = None
        account.verification_storage = None
        self.repository.update(account)
        self._publish(AccountClosed(account=account.freeze()))

    def reopen_account(self, account_id: uuid.UUID) -> None:
        account = self.repository.get_by_id(account_id)
        if account is None:
            raise UserAccountNotFoundError(f"Account {account_id} not found")
        if not account.is_account_closed:
            raise ValidationError("Account is not closed.")
        self._ensure_email_available(account.email, account.account_id)

        account.is_account_closed = False
        account.is_login_allowed = True
        account.closed_at = None
        key = None
        if self.config.require_account_verification:
            key = self._new_verification_key()
            account.verification_key = key
            account.verification_purpose = VerificationPurpose.REOPEN_ACCOUNT
            account.is_account_verified = False
        self.repository.update(account)
        self._publish(AccountReopened(account=account.freeze(), verification_key=key))

    # -------------------------------------------------------------------------
    # Certificates and linked accounts
    # -------------------------------------------------------------------------
    def add_certificate(self, account_id: uuid.UUID, thumbprint: str, subject: Optional[str] = None) -> None:
        account = self._get_open_account(account_id)
        if not thumbprint or not thumbprint.strip():
            raise ValidationError("Certificate thumbprint is required.")
        if any(cert.thumbprint == thumbprint for cert in account.certificates):
            raise ValidationError("Certificate already added.")

        certificate = UserCertificate(thumbprint=thumbprint, subject=subject)
        account.certificates = [*account.certificates, certificate]
        self.repository.update(account)
        self._publish(CertificateAdded(account=account.freeze(), certificate=certificate))

    def remove_certificate(self, account_id: uuid.UUID, thumbprint: str) -> None:
        account = self._get_open_account(account_id)
        certificate = next((c for c in account.certificates if c.thumbprint == thumbprint), None)
        if certificate is None:
            raise ValidationError("Certificate not found.")

        account.certificates = [c for c in account.certificates if c.thumbprint != thumbprint]
        self.repository.update(account)
        self._publish(CertificateRemoved(account=account.freeze(), certificate=certificate))

    def add_linked_account(self, account_id: uuid.UUID, provider_name: str, provider_account_id: str) -> None:
        account = self._get_open_account(account_id)
        if not provider_name or not provider_account_id:
            raise ValidationError("Provider name and provider account id are required.")
        if any(
                la.provider_name == provider_name and la.provider_account_id == provider_account_id
                for la in account.linked_accounts
        ):
            raise ValidationError("Linked account already added.")

        linked = LinkedAccount(provider_name=provider_name, provider_account_id=provider_account_id)
        account.linked_accounts = [*account.linked_accounts, linked]
        self.repository.update(account)
        self._publish(LinkedAccountAdded(account=account.freeze(), linked_account=linked))

    def remove_linked_account(self, account_id: uuid.UUID, provider_name: str, provider_account_id: str) -> None:
        account = self._get_open_account(account_id)
        linked = next(
            (la for la in account.linked_accounts
             if la.provider_name == provider_name and la.provider_account_id == provider_account_id),
            None,
        )
        if linked is None:
            raise ValidationError("Linked account not found.")

        account.linked_accounts = [la for la in account.linked_accounts if la is not linked]
        self.repository.update(account)
        self._publish(LinkedAccountRemoved(account=account.freeze(), linked_account=linked))
