# =============================================================================
# File: tests/unit/test_user_account_service.py
# =============================================================================

import pytest

from membership.common.exceptions.exceptions import ValidationError
from membership.config.membership_config import MembershipConfig
from membership.user_account.enums import VerificationPurpose
from membership.user_account.exceptions import (
    AccountClosedError,
    EmailAlreadyInUseError,
    InvalidEmailError,
    InvalidPasswordError,
    InvalidVerificationKeyError,
    UsernameAlreadyExistsError,
)
from membership.user_account.service import UserAccountService


def _types(events):
    return [e.event_type for e in events]


@pytest.fixture
def alice(service):
    return service.create_account("alice", "p@ssw0rd", "u@x.com")


# -----------------------------------------------------------------------------
# Registration
# -----------------------------------------------------------------------------
def test_registration_notifies_account_email(service, published, fake_delivery):
    account = service.create_account("alice", "p@ssw0rd", "u@x.com")

    assert _types(published) == ["AccountCreated"]
    event = published[0]
    assert event.initial_password == "p@ssw0rd"
    assert event.verification_key == account.verification_key
    assert event.account.account_id == account.account_id

    assert [m.to for m in fake_delivery.sent] == ["u@x.com"]
    assert account.verification_key in fake_delivery.sent[0].body


def test_registration_stores_hashed_password(service, repository, alice):
    stored = repository.get_by_id(alice.account_id)
    assert stored.hashed_password and stored.hashed_password != "p@ssw0rd"
    assert stored.verification_purpose == VerificationPurpose.CREATE_ACCOUNT
    assert not stored.is_account_verified


def test_duplicate_username_is_a_form_error(service, published, alice):
    with pytest.raises(ValidationError) as exc_info:
        service.create_account("alice", "other", "v@x.com")

    assert isinstance(exc_info.value, UsernameAlreadyExistsError)
    assert exc_info.value.message == "Username already in use."
    assert _types(published) == ["AccountCreated"]


def test_duplicate_email_is_a_form_error(service, alice):
    with pytest.raises(EmailAlreadyInUseError):
        service.create_account("bob", "other", "U@x.com")


@pytest.mark.parametrize("username,password,email,error", [
    ("bob", "pw", "", InvalidEmailError),
    ("bob", "pw", "not-an-email", InvalidEmailError),
    ("bob", "", "b@x.com", InvalidPasswordError),
    ("bob", "p" * 73, "b@x.com", InvalidPasswordError),
    ("", "pw", "b@x.com", ValidationError),
])
def test_registration_input_errors(service, published, username, password, email, error):
    with pytest.raises(error):
        service.create_account(username, password, email)
    assert published == []


def test_registration_without_verification(repository, event_bus, published):
    service = UserAccountService(repository, event_bus, MembershipConfig(require_account_verification=False))

    account = service.create_account("alice", "p@ssw0rd", "u@x.com")

    assert account.is_account_verified
    assert account.verification_key is None
    assert published[0].verification_key is None


def test_email_as_username(repository, event_bus):
    config = MembershipConfig(email_is_username=True)
    service = UserAccountService(repository, event_bus, config)

    account = service.create_account(None, "p@ssw0rd", "u@x.com")

    assert account.username == "u@x.com"


# -----------------------------------------------------------------------------
# Verification and cancellation
# -----------------------------------------------------------------------------
def test_verify_registration(service, published, repository, alice):
    service.verify_email_from_key(alice.verification_key)

    assert _types(published) == ["AccountCreated", "EmailVerified"]
    assert repository.get_by_id(alice.account_id).is_account_verified


def test_cancel_registration_closes_account_once(service, published, repository, alice):
    key = alice.verification_key

    assert service.cancel_verification(key) is True
    assert service.cancel_verification(key) is False

    stored = repository.get_by_id(alice.account_id)
    assert stored.is_account_closed
    assert _types(published) == ["AccountCreated", "AccountClosed"]


@pytest.mark.parametrize("key", ["", "bad key!", "short", "x" * 300])
def test_malformed_key_is_rejected(service, key):
    with pytest.raises(InvalidVerificationKeyError) as exc_info:
        service.cancel_verification(key)
    assert exc_info.value.message == "Key invalid."


def test_unknown_key_is_rejected(service, alice):
    with pytest.raises(InvalidVerificationKeyError):
        service.cancel_verification("A" * 32)


def test_cancel_after_verification_does_not_close(service, repository, alice):
    service.verify_email_from_key(alice.verification_key)

    assert service.cancel_verification(alice.verification_key) is False
    assert not repository.get_by_id(alice.account_id).is_account_closed


def test_cancel_password_reset_keeps_account_open(service, published, repository, alice):
    service.request_password_reset("u@x.com")
    key = published[-1].verification_key

    assert service.cancel_verification(key) is False

    stored = repository.get_by_id(alice.account_id)
    assert not stored.is_account_closed
    assert stored.verification_purpose is None
    with pytest.raises(InvalidVerificationKeyError):
        service.reset_password_from_key(key, "new-password")


# -----------------------------------------------------------------------------
# Credentials
# -----------------------------------------------------------------------------
def test_password_reset_flow(service, published, fake_delivery, alice):
    service.request_password_reset("u@x.com")
    key = published[-1].verification_key
    assert key in fake_delivery.sent[-1].body

    service.reset_password_from_key(key, "new-password")

    assert _types(published)[-2:] == ["PasswordResetRequested", "PasswordChanged"]
    service.change_password(alice.account_id, "new-password", "newer-password")
    assert _types(published)[-1] == "PasswordChanged"


def test_password_reset_unknown_email(service):
    with pytest.raises(InvalidEmailError):
        service.request_password_reset("nobody@x.com")


def test_change_password_requires_old_password(service, published, alice):
    with pytest.raises(InvalidPasswordError):
        service.change_password(alice.account_id, "wrong", "new-password")
    assert _types(published) == ["AccountCreated"]


# -----------------------------------------------------------------------------
# Identity changes
# -----------------------------------------------------------------------------
def test_email_change_flow(service, published, fake_delivery, repository, alice):
    key = service.change_email_request(alice.account_id, "new@x.com")

    requested = published[-1]
    assert requested.event_type == "EmailChangeRequested"
    assert (requested.old_email, requested.new_email) == ("u@x.com", "new@x.com")
    assert fake_delivery.sent[-1].to == "new@x.com"
    assert repository.get_by_id(alice.account_id).email == "u@x.com"

    service.verify_email_from_key(key)

    changed = published[-1]
    assert changed.event_type == "EmailChanged"
    assert changed.old_email == "u@x.com"
    assert changed.account.email == "new@x.com"
    assert fake_delivery.sent[-1].to == "new@x.com"
    assert repository.get_by_email("new@x.com").account_id == alice.account_id


def test_cancel_email_change(service, repository, alice):
    key = service.change_email_request(alice.account_id, "new@x.com")

    assert service.cancel_verification(key) is False
    with pytest.raises(InvalidVerificationKeyError):
        service.verify_email_from_key(key)
    assert repository.get_by_id(alice.account_id).email == "u@x.com"


def test_email_change_to_taken_address(service, alice):
    service.create_account("bob", "pw", "b@x.com")
    with pytest.raises(EmailAlreadyInUseError):
        service.change_email_request(alice.account_id, "b@x.com")


def test_change_username(service, published, repository, alice):
    service.change_username(alice.account_id, "alicia")

    assert published[-1].event_type == "UsernameChanged"
    assert repository.get_by_username("ALICIA").account_id == alice.account_id


# -----------------------------------------------------------------------------
# Close / reopen
# -----------------------------------------------------------------------------
def test_close_and_reopen(service, published, fake_delivery, alice):
    service.close_account(alice.account_id)
    service.close_account(alice.account_id)
    assert _types(published) == ["AccountCreated", "AccountClosed"]

    with pytest.raises(AccountClosedError):
        service.change_username(alice.account_id, "alicia")

    service.reopen_account(alice.account_id)

    reopened = published[-1]
    assert reopened.event_type == "AccountReopened"
    assert reopened.verification_key
    assert reopened.verification_key in fake_delivery.sent[-1].body

    service.verify_email_from_key(reopened.verification_key)
    assert published[-1].event_type == "EmailVerified"


# -----------------------------------------------------------------------------
# Certificates and linked accounts
# -----------------------------------------------------------------------------
def test_certificate_lifecycle(service, published, fake_delivery, alice):
    service.add_certificate(alice.account_id, "AB12", "CN=alice")
    assert "Thumbprint: AB12" in fake_delivery.sent[-1].body

    with pytest.raises(ValidationError):
        service.add_certificate(alice.account_id, "AB12")

    service.remove_certificate(alice.account_id, "AB12")
    assert _types(published)[-2:] == ["CertificateAdded", "CertificateRemoved"]
    assert published[-1].certificate.subject == "CN=alice"


def test_linked_account_lifecycle(service, published, fake_delivery, alice):
    service.add_linked_account(alice.account_id, "github", "42")
    assert fake_delivery.sent[-1].subject == "[Acme] github login linked"

    service.remove_linked_account(alice.account_id, "github", "42")
    assert _types(published)[-2:] == ["LinkedAccountAdded", "LinkedAccountRemoved"]

    with pytest.raises(ValidationError):
        service.remove_linked_account(alice.account_id, "github", "42")


def test_events_carry_snapshots(service, published, alice):
    service.change_username(alice.account_id, "alicia")

    assert published[0].account.username == "alice"
    assert published[-1].account.username == "alicia"


# -----------------------------------------------------------------------------
# Superseded keys
# -----------------------------------------------------------------------------
def test_replaced_email_change_key_is_rejected(service, repository, alice):
    mistyped_key = service.change_email_request(alice.account_id, "typo@x.com")
    key = service.change_email_request(alice.account_id, "new@x.com")

    with pytest.raises(InvalidVerificationKeyError):
        service.verify_email_from_key(mistyped_key)
    assert repository.get_by_id(alice.account_id).email == "u@x.com"

    service.verify_email_from_key(key)
    assert repository.get_by_id(alice.account_id).email == "new@x.com"


def test_replaced_password_reset_key_is_rejected(service, published, alice):
    service.request_password_reset("u@x.com")
    old_key = published[-1].verification_key
    service.request_password_reset("u@x.com")
    key = published[-1].verification_key

    with pytest.raises(InvalidVerificationKeyError):
        service.reset_password_from_key(old_key, "new-password")

    service.reset_password_from_key(key, "new-password")
    assert published[-1].event_type == "PasswordChanged"


def test_cancel_with_replaced_key_changes_nothing(service, published, repository, alice):
    service.request_password_reset("u@x.com")

    assert service.cancel_verification(alice.verification_key) is False
    stored = repository.get_by_id(alice.account_id)
    assert not stored.is_account_closed
    assert stored.verification_purpose == VerificationPurpose.RESET_PASSWORD


# -----------------------------------------------------------------------------
# Email as username
# -----------------------------------------------------------------------------
def test_email_change_moves_username_when_email_is_username(repository, event_bus, published):
    service = UserAccountService(repository, event_bus, MembershipConfig(email_is_username=True))
    account = service.create_account(None, "p@ssw0rd", "a@x.com")

    key = service.change_email_request(account.account_id, "b@x.com")
    service.verify_email_from_key(key)

    stored = repository.get_by_id(account.account_id)
    assert stored.username == "b@x.com"
    assert published[-1].account.username == "b@x.com"

    other = service.create_account(None, "p@ssw0rd", "a@x.com")
    assert other.username == "a@x.com"


# -----------------------------------------------------------------------------
# Mobile phone
# -----------------------------------------------------------------------------
def test_mobile_phone_lifecycle(service, published, repository, fake_delivery, alice):
    service.change_mobile_phone_number(alice.account_id, "+1 555-0100-200")
    assert repository.get_by_id(alice.account_id).mobile_phone_number == "+15550100200"
    assert fake_delivery.sent[-1].subject == "[Acme] Mobile phone changed"

    service.change_mobile_phone_number(alice.account_id, "+15550100200")
    service.remove_mobile_phone_number(alice.account_id)
    service.remove_mobile_phone_number(alice.account_id)

    assert _types(published) == ["AccountCreated", "MobilePhoneChanged", "MobilePhoneRemoved"]
    assert repository.get_by_id(alice.account_id).mobile_phone_number is None


@pytest.mark.parametrize("number", ["", "12345", "call me", "+1234567890123456"])
def test_invalid_mobile_phone(service, published, alice, number):
    with pytest.raises(ValidationError):
        service.change_mobile_phone_number(alice.account_id, number)
    assert _types(published) == ["AccountCreated"]
