# =============================================================================
# File: membership/notifications/ports/message_formatter_port.py
# Description: Port interface for turning an event into a message
# Pattern: Hexagonal Architecture / Ports & Adapters
# =============================================================================

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from membership.notifications.message import FieldMap, Message
from membership.user_account.events import UserAccountEvent


@runtime_checkable
class MessageFormatterPort(Protocol):
    """
    Port: Message Formatting

    Defined by: Notifications
    Implemented by: TemplateMessageFormatter, NullMessageFormatter
        (membership/notifications/formatters.py)

    Returning None means "do not notify for this event". The recipient on the
    returned message is a placeholder; the dispatcher resolves it.
    Implementations are shared across threads and must not keep per-call state.
    """

    def format(self, event: UserAccountEvent, fields: FieldMap) -> Optional[Message]:
        ...
