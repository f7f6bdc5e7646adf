# =============================================================================
# File: membership/infra/event_bus/event_decorators.py
# Description: Registration decorator for account lifecycle events.
#              Each event class declares, at definition time, which of its
#              attributes feed the notification field map.
# =============================================================================

import inspect
import logging
import threading
from typing import Any, Dict, Mapping, Optional, Set, Tuple, Type

from pydantic import BaseModel

log = logging.getLogger("membership.event_bus.decorators")

# Thread-safe lock for registry access
_REGISTRY_LOCK = threading.Lock()

# event_type -> event class
_REGISTERED_EVENTS: Dict[str, Type[BaseModel]] = {}

# event_type -> ordered ((field_name, attribute_path), ...)
_NOTIFICATION_FIELDS: Dict[str, Tuple[Tuple[str, str], ...]] = {}

# domain -> event types
_DOMAIN_EVENTS: Dict[str, Set[str]] = {}

_EVENT_METADATA: Dict[str, Dict[str, Any]] = {}

_KNOWN_DOMAINS = ("user_account", "notifications")


def _extract_domain(event_class: type) -> str:
    module = inspect.getmodule(event_class)
    module_name = module.__name__ if module else ""
    for part in module_name.split("."):
        if part in _KNOWN_DOMAINS:
            return part
    return "unknown"


def _event_type_of(event_class: Type[BaseModel]) -> str:
    field_info = event_class.model_fields.get("event_type")
    if field_info is not None and isinstance(field_info.default, str):
        return field_info.default
    return event_class.__name__


def account_event(
        *,
        fields: Optional[Mapping[str, str]] = None,
        description: Optional[str] = None,
):
    """
    Register an account lifecycle event together with its notification fields.

    ``fields`` maps the field-map key (the placeholder name templates use) to
    a dotted attribute path on the event. Declaration order is kept.

    Usage:
        @account_event(fields={"OldEmail": "old_email", "NewEmail": "new_email"})
        class EmailChangeRequested(UserAccountEvent):
            event_type: Literal["EmailChangeRequested"] = "EmailChangeRequested"
            old_email: str
            new_email: str

        @account_event(fields={"Thumbprint": "certificate.thumbprint"})
        class CertificateAdded(UserAccountEvent):
            ...

    Events with nothing worth notifying still register, with no fields.
    """
    binding: Tuple[Tuple[str, str], ...] = tuple((fields or {}).items())

    for name, path in binding:
        if not name or not path:
            raise ValueError(f"Invalid notification field binding: {name!r} -> {path!r}")

    def decorator(event_class: Type[BaseModel]) -> Type[BaseModel]:
        if not issubclass(event_class, BaseModel):
            raise TypeError(
                f"@account_event can only be applied to Pydantic BaseModel classes. "
                f"{event_class.__name__} is not a BaseModel."
            )

        for _, path in binding:
            root = path.split(".", 1)[0]
            if root not in event_class.model_fields:
                raise TypeError(
                    f"{event_class.__name__} declares notification field path "
                    f"'{path}' but has no attribute '{root}'"
                )

        event_type = _event_type_of(event_class)
        domain = _extract_domain(event_class)

        with _REGISTRY_LOCK:
            existing_class = _REGISTERED_EVENTS.get(event_type)
            if existing_class is event_class:
                return event_class
            if existing_class is not None:
                log.warning(
                    f"Event type '{event_type}' collision: "
                    f"already registered by {existing_class.__module__}.{existing_class.__name__}, "
                    f"now registering {event_class.__module__}.{event_class.__name__}"
                )

            _REGISTERED_EVENTS[event_type] = event_class
            _NOTIFICATION_FIELDS[event_type] = binding
            _DOMAIN_EVENTS.setdefault(domain, set()).add(event_type)
            _EVENT_METADATA[event_type] = {
                "event_class": event_class,
                "domain": domain,
                "module": event_class.__module__,
                "description": description or event_class.__doc__,
                "fields": [name for name, _ in binding],
            }

            log.debug(
                f"Registered event: {event_type} "
                f"(domain={domain}, fields={[name for name, _ in binding]})"
            )

        return event_class

    return decorator


# =============================================================================
# Registry Access Functions
# =============================================================================

def get_registered_events() -> Dict[str, Type[BaseModel]]:
    """Get all registered events (event_type -> model class)."""
    with _REGISTRY_LOCK:
        return _REGISTERED_EVENTS.copy()


def get_notification_fields(event_type: str) -> Optional[Tuple[Tuple[str, str], ...]]:
    """
    Get the declared (field_name, attribute_path) pairs for an event type.

    Returns None for an unregistered type, an empty tuple for a registered
    type that contributes no fields.
    """
    with _REGISTRY_LOCK:
        return _NOTIFICATION_FIELDS.get(event_type)


def get_domain_events(domain: str) -> Set[str]:
    """Get all event types for a specific domain."""
    with _REGISTRY_LOCK:
        return _DOMAIN_EVENTS.get(domain, set()).copy()


def get_event_metadata(event_type: str) -> Optional[Dict[str, Any]]:
    with _REGISTRY_LOCK:
        return _EVENT_METADATA.get(event_type)
