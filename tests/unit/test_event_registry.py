# =============================================================================
# File: tests/unit/test_event_registry.py
# =============================================================================

from typing import Literal, Optional

import pytest
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from membership.infra.event_bus.event_decorators import account_event, get_event_metadata
from membership.infra.event_bus.event_registry import (
    get_account_event_types,
    get_all_event_types,
    get_event_model,
    get_registry_stats,
    is_registered_event,
)
from membership.user_account.events import AccountCreated, CertificateAdded, UserAccountEvent
from membership.user_account.read_models import AccountSnapshot, UserCertificate


def test_lookup_by_type():
    assert get_event_model("AccountCreated") is AccountCreated
    assert get_event_model("NoSuchEvent") is None
    assert is_registered_event("CertificateAdded")
    assert not is_registered_event("NoSuchEvent")


def test_account_events_are_in_declaration_order():
    account_types = get_account_event_types()
    assert account_types[0] == "AccountCreated"
    assert account_types.index("EmailChangeRequested") < account_types.index("EmailChanged")
    assert set(account_types) <= set(get_all_event_types())


def test_metadata_records_domain_and_fields():
    metadata = get_event_metadata("CertificateAdded")
    assert metadata["event_class"] is CertificateAdded
    assert metadata["domain"] == "user_account"
    assert metadata["fields"] == ["Thumbprint", "Subject"]


def test_stats():
    stats = get_registry_stats()
    assert stats["account_events"] == 21
    assert stats["total_events"] >= 21
    assert stats["events_with_notification_fields"] == 9


def test_unknown_attribute_path_is_rejected_at_definition():
    with pytest.raises(TypeError):
        @account_event(fields={"Token": "token"})
        class BrokenEvent(UserAccountEvent):
            event_type: Literal["BrokenEvent"] = "BrokenEvent"


def test_blank_binding_is_rejected():
    with pytest.raises(ValueError):
        account_event(fields={"": "verification_key"})


def test_only_pydantic_models_can_register():
    with pytest.raises(TypeError):
        @account_event()
        class PlainEvent:
            event_type: Optional[str] = "PlainEvent"


def test_event_is_immutable(account):
    event = AccountCreated(account=account, verification_key="abc123")
    with pytest.raises(Exception):
        event.verification_key = "other"
    assert isinstance(event, BaseModel)


def test_event_account_is_read_only(account):
    event = AccountCreated(account=account, verification_key="abc123")

    with pytest.raises(PydanticValidationError):
        event.account.email = "attacker@x.com"
    with pytest.raises(AttributeError):
        event.account.certificates.append(UserCertificate(thumbprint="AB12"))

    assert isinstance(event.account, AccountSnapshot)
    assert event.account.email == "u@x.com"


def test_event_account_is_detached_from_source(account):
    event = CertificateAdded(account=account, certificate=UserCertificate(thumbprint="AB12"))

    account.email = "changed@x.com"

    assert event.account.email == "u@x.com"
