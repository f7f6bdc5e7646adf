# =============================================================================
# File: tests/conftest.py
# Description: Shared fixtures
# =============================================================================

import pytest

from membership.config.membership_config import MembershipConfig
from membership.config.notification_config import NotificationConfig
from membership.infra.event_bus.event_bus import EventBus
from membership.infra.read_repos.user_account_read_repo import InMemoryUserAccountRepository
from membership.notifications.dispatcher import NotificationDispatcher
from membership.notifications.event_router import EmailAccountEventsRouter
from membership.notifications.formatters import TemplateMessageFormatter
from membership.user_account.read_models import UserAccount
from membership.user_account.service import UserAccountService
from tests.fakes.fake_notification_ports import FakeMessageDelivery, FakeMessageFormatter


@pytest.fixture
def account() -> UserAccount:
    return UserAccount(username="alice", email="u@x.com")


@pytest.fixture
def fake_formatter() -> FakeMessageFormatter:
    return FakeMessageFormatter()


@pytest.fixture
def fake_delivery() -> FakeMessageDelivery:
    return FakeMessageDelivery()


@pytest.fixture
def dispatcher(fake_formatter, fake_delivery) -> NotificationDispatcher:
    return NotificationDispatcher(fake_formatter, fake_delivery)


@pytest.fixture
def notification_config() -> NotificationConfig:
    return NotificationConfig(
        application_name="Acme",
        application_url="https://acme.example.com",
        email_signature="-- The Acme team",
    )


@pytest.fixture
def membership_config() -> MembershipConfig:
    return MembershipConfig(require_account_verification=True)


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def repository() -> InMemoryUserAccountRepository:
    return InMemoryUserAccountRepository()


@pytest.fixture
def published(event_bus):
    """Every event published on ``event_bus``, in order."""
    from membership.infra.event_bus.event_registry import get_account_event_types

    events = []
    for event_type in get_account_event_types():
        event_bus.subscribe(event_type, events.append)
    return events


@pytest.fixture
def service(repository, event_bus, membership_config, fake_delivery, notification_config, published) -> UserAccountService:
    """Account service wired to the real pipeline with an in-memory transport."""
    dispatcher = NotificationDispatcher(TemplateMessageFormatter(config=notification_config), fake_delivery)
    EmailAccountEventsRouter(dispatcher).subscribe(event_bus)
    return UserAccountService(repository, event_bus, membership_config)
