# =============================================================================
# File: membership/core/bootstrap.py
# Description: Wires repository, event bus, notification pipeline and the
#              account service into one ready-to-use object graph
# =============================================================================

from __future__ import annotations

import logging
from typing import Optional

from membership.config.membership_config import MembershipConfig
from membership.infra.event_bus.event_bus import EventBus
from membership.infra.event_bus.event_registry import get_registry_stats
from membership.infra.read_repos.user_account_read_repo import InMemoryUserAccountRepository
from membership.notifications.dispatcher import CustomizeHook, NotificationDispatcher, keep_message
from membership.notifications.event_router import EmailAccountEventsRouter
from membership.notifications.formatters import TemplateMessageFormatter
from membership.notifications.ports.message_delivery_port import MessageDeliveryPort
from membership.notifications.ports.message_formatter_port import MessageFormatterPort
from membership.user_account.ports.user_account_repository_port import UserAccountRepositoryPort
from membership.user_account.service import UserAccountService

log = logging.getLogger("membership.bootstrap")


def build_notification_dispatcher(
        formatter: Optional[MessageFormatterPort] = None,
        delivery: Optional[MessageDeliveryPort] = None,
        customize: CustomizeHook = keep_message,
) -> NotificationDispatcher:
    """Template formatter and SMTP delivery unless others are supplied."""
    formatter = formatter or TemplateMessageFormatter()
    if delivery is None:
        return NotificationDispatcher.with_smtp_delivery(formatter, customize=customize)
    return NotificationDispatcher(formatter, delivery, customize)


def build_user_account_service(
        dispatcher: Optional[NotificationDispatcher] = None,
        repository: Optional[UserAccountRepositoryPort] = None,
        config: Optional[MembershipConfig] = None,
) -> UserAccountService:
    event_bus = EventBus()
    dispatcher = dispatcher or build_notification_dispatcher()
    EmailAccountEventsRouter(dispatcher).subscribe(event_bus)

    service = UserAccountService(
        repository=repository or InMemoryUserAccountRepository(),
        event_bus=event_bus,
        config=config,
    )
    log.info(f"Account service ready (registry={get_registry_stats()}, "
             f"delivery={type(dispatcher.delivery).__name__})")
    return service
