# =============================================================================
# File: membership/notifications/dispatcher.py
# Description: Notification pipeline for account lifecycle events:
#              extract -> format -> resolve recipient -> customize -> deliver
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional, TypeAlias

from membership.common.exceptions.exceptions import ConfigurationError
from membership.config.smtp_config import SmtpConfig
from membership.infra.email.smtp_delivery import SmtpMessageDelivery
from membership.notifications.field_extractor import extract_fields
from membership.notifications.message import DeliveryResult, FieldMap, Message
from membership.notifications.ports.message_delivery_port import MessageDeliveryPort
from membership.notifications.ports.message_formatter_port import MessageFormatterPort
from membership.user_account.events import UserAccountEvent

log = logging.getLogger("membership.notifications.dispatcher")

# Field-map key that redirects the message to a not-yet-confirmed address
NEW_EMAIL_FIELD = "NewEmail"

CustomizeHook: TypeAlias = Callable[[Message, UserAccountEvent, FieldMap], Optional[Message]]


def keep_message(message: Message, event: UserAccountEvent, fields: FieldMap) -> Optional[Message]:
    """Default customization hook: send the message as formatted."""
    return message


class NotificationDispatcher:
    """
    Turns one lifecycle event into at most one delivered message.

    Holds no per-call state; one instance can serve concurrent callers as
    long as the injected formatter, hook and delivery can.

    Args:
        formatter: Renders (event, fields) into a Message, or None to skip.
        delivery: Transport that sends the finished message.
        customize: Last chance to rewrite the message; returning None
            suppresses delivery.
    """

    def __init__(
            self,
            formatter: MessageFormatterPort,
            delivery: MessageDeliveryPort,
            customize: CustomizeHook = keep_message,
    ):
        if formatter is None:
            raise ConfigurationError("NotificationDispatcher requires a message formatter")
        if delivery is None:
            raise ConfigurationError("NotificationDispatcher requires a message delivery transport")
        if not callable(customize):
            raise ConfigurationError("customize hook must be callable")

        self.formatter = formatter
        self.delivery = delivery
        self.customize = customize

    @classmethod
    def with_smtp_delivery(
            cls,
            formatter: MessageFormatterPort,
            customize: CustomizeHook = keep_message,
            smtp_config: Optional[SmtpConfig] = None,
    ) -> NotificationDispatcher:
        """Build a dispatcher that sends through the default SMTP transport."""
        return cls(formatter, SmtpMessageDelivery(smtp_config), customize)

    def process(
            self,
            event: UserAccountEvent,
            payload: Optional[Mapping[str, Any]] = None,
    ) -> Optional[DeliveryResult]:
        """
        Run the pipeline for ``event``.

        Returns the transport's result, or None when nothing was sent
        (formatter or hook declined, or no recipient).
        """
        log.info(f"Processing event: {event.event_type} (event_id={event.event_id})")

        fields = extract_fields(payload)

        message = self.formatter.format(event, fields)
        if message is None:
            log.debug(f"Formatter produced no message for {event.event_type}")
            return None

        if NEW_EMAIL_FIELD in fields:
            recipient = fields[NEW_EMAIL_FIELD]
        else:
            recipient = event.account.email
        message = message.model_copy(update={"to": recipient or ""})

        message = self.customize(message, event, fields)
        if message is None:
            log.debug(f"Customization suppressed {event.event_type}")
            return None
        if not isinstance(message, Message):
            raise TypeError(
                f"customize hook must return Message or None, got {type(message).__name__}"
            )

        if not message.to or not message.to.strip():
            log.debug(f"No recipient for {event.event_type}; nothing sent")
            return None

        return self.delivery.send(message)
