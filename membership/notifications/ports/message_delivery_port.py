# =============================================================================
# File: membership/notifications/ports/message_delivery_port.py
# Description: Port interface for sending a finished message
# Pattern: Hexagonal Architecture / Ports & Adapters
# =============================================================================

from __future__ import annotations

from typing import Protocol, runtime_checkable

from membership.notifications.message import DeliveryResult, Message


@runtime_checkable
class MessageDeliveryPort(Protocol):
    """
    Port: Message Delivery

    Defined by: Notifications
    Implemented by: SmtpMessageDelivery (membership/infra/email/smtp_delivery.py)

    The transport owns retries, timeouts and its connection. It must be safe
    to call from several threads at once.
    """

    def send(self, message: Message) -> DeliveryResult:
        ...
