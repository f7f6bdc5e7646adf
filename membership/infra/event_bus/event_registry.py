# =============================================================================
# File: membership/infra/event_bus/event_registry.py
# Description: Read access to the event registry populated by @account_event.
#              Importing this module imports the event definitions so the
#              registry is complete before anyone queries it.
# =============================================================================

from __future__ import annotations

from typing import Any, Dict, Optional, Type

from pydantic import BaseModel

import membership.user_account.events  # noqa: F401  (registers account events)
from membership.infra.event_bus.event_decorators import (
    get_domain_events,
    get_notification_fields,
    get_registered_events,
)


def get_event_model(event_type: str) -> Optional[Type[BaseModel]]:
    """
    Get Pydantic model class for an event type.

    Args:
        event_type: The event type string (e.g., "AccountCreated")

    Returns:
        Pydantic model class or None if not found
    """
    return get_registered_events().get(event_type)


def is_registered_event(event_type: str) -> bool:
    """Check if an event type is registered"""
    return event_type in get_registered_events()


def get_all_event_types() -> list[str]:
    """Get list of all registered event types"""
    return list(get_registered_events().keys())


def get_account_event_types() -> list[str]:
    """Event types emitted by the account service, in registration order."""
    domain_events = get_domain_events("user_account")
    return [event_type for event_type in get_registered_events() if event_type in domain_events]


def get_registry_stats() -> Dict[str, Any]:
    """Get statistics about the event registry"""
    events = get_registered_events()
    with_fields = sum(1 for event_type in events if get_notification_fields(event_type))
    return {
        "total_events": len(events),
        "account_events": len(get_account_event_types()),
        "events_with_notification_fields": with_fields,
    }


# =============================================================================
# EOF
# =============================================================================
