# =============================================================================
# File: membership/infra/event_bus/event_bus.py
# Description: In-process synchronous EventBus for account lifecycle events.
#              Handlers run on the publisher's thread, in subscription order.
# =============================================================================

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, TypeAlias

from membership.infra.event_bus.event_registry import is_registered_event
from membership.user_account.events import BaseEvent

log = logging.getLogger("membership.event_bus")

Handler: TypeAlias = Callable[[BaseEvent], Any]


class EventBus:
    def __init__(self, validate_on_publish: bool = True):
        self._validate_on_publish = validate_on_publish
        self._handlers: Dict[str, List[Handler]] = {}
        self._lock = threading.Lock()

    def subscribe(self, event_type: str, handler: Handler) -> None:
        if not callable(handler):
            raise TypeError(f"Handler for '{event_type}' must be callable")
        if self._validate_on_publish and not is_registered_event(event_type):
            raise ValueError(f"Cannot subscribe to unregistered event type '{event_type}'")

        with self._lock:
            self._handlers.setdefault(event_type, []).append(handler)
        log.debug(f"Subscribed {getattr(handler, '__qualname__', handler)!s} to {event_type}")

    def unsubscribe(self, event_type: str, handler: Handler) -> None:
        with self._lock:
            handlers = self._handlers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)

    def publish(self, event: BaseEvent) -> int:
        """
        Deliver ``event`` to every handler subscribed to its type.

        Handler exceptions propagate to the publisher. Returns the number of
        handlers invoked.
        """
        event_type = event.event_type
        if self._validate_on_publish and not is_registered_event(event_type):
            raise ValueError(f"Refusing to publish unregistered event type '{event_type}'")

        with self._lock:
            handlers = list(self._handlers.get(event_type, ()))

        if not handlers:
            log.debug(f"No handlers for {event_type} (event_id={event.event_id})")
            return 0

        for handler in handlers:
            handler(event)

        log.debug(f"Published {event_type} to {len(handlers)} handler(s)")
        return len(handlers)

    def subscriber_count(self, event_type: str) -> int:
        with self._lock:
            return len(self._handlers.get(event_type, ()))
