# =============================================================================
# File: membership/notifications/event_router.py
# Description: Routes account lifecycle events to the notification pipeline
#              using each event's declared notification fields
# =============================================================================

from __future__ import annotations

import logging
from operator import attrgetter
from typing import Any, Dict, Optional

from membership.infra.event_bus.event_bus import EventBus
from membership.infra.event_bus.event_decorators import get_notification_fields
from membership.infra.event_bus.event_registry import get_account_event_types
from membership.notifications.dispatcher import NotificationDispatcher
from membership.notifications.message import DeliveryResult
from membership.user_account.events import UserAccountEvent

log = logging.getLogger("membership.notifications.router")


def _read_path(event: UserAccountEvent, path: str) -> Any:
    try:
        return attrgetter(path)(event)
    except AttributeError:
        # Absent sub-entity (e.g. certificate=None) is an absent field
        return None


class EmailAccountEventsRouter:
    """
    Email notifications for every account event kind.

    The router has no per-kind code: the field binding declared with
    ``@account_event(fields=...)`` decides what reaches the formatter.
    """

    def __init__(self, dispatcher: NotificationDispatcher):
        if dispatcher is None:
            raise ValueError("EmailAccountEventsRouter requires a dispatcher")
        self.dispatcher = dispatcher

    @staticmethod
    def build_payload(event: UserAccountEvent) -> Dict[str, Any]:
        binding = get_notification_fields(event.event_type)
        if binding is None:
            raise ValueError(f"No notification binding registered for '{event.event_type}'")
        return {name: _read_path(event, path) for name, path in binding}

    def handle(self, event: UserAccountEvent) -> Optional[DeliveryResult]:
        return self.dispatcher.process(event, self.build_payload(event))

    def subscribe(self, event_bus: EventBus) -> int:
        """Subscribe ``handle`` to every account event type. Returns the count."""
        event_types = get_account_event_types()
        for event_type in event_types:
            event_bus.subscribe(event_type, self.handle)
        log.info(f"Email notifications subscribed to {len(event_types)} account event types")
        return len(event_types)
