# =============================================================================
# File: tests/fakes/fake_notification_ports.py
# Description: Fake implementations of MessageFormatterPort and
#              MessageDeliveryPort for unit testing
# Pattern: Ports & Adapters - Fake/Stub adapter
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from membership.notifications.message import DeliveryResult, FieldMap, Message
from membership.user_account.events import UserAccountEvent


@dataclass
class CallRecord:
    """Record of a method call for verification."""
    method: str
    args: tuple
    kwargs: Dict[str, Any]
    result: Any = None


class _Recorder:
    def __init__(self):
        self._calls: List[CallRecord] = []

    def was_called(self, method: str) -> bool:
        """Check if a method was called."""
        return any(c.method == method for c in self._calls)

    def get_call_count(self, method: str) -> int:
        """Get number of times a method was called."""
        return sum(1 for c in self._calls if c.method == method)

    def get_calls(self, method: str) -> List[CallRecord]:
        return [c for c in self._calls if c.method == method]

    def get_last_call(self, method: str) -> Optional[CallRecord]:
        calls = self.get_calls(method)
        return calls[-1] if calls else None

    def clear(self) -> None:
        self._calls.clear()

    def _record_call(self, method: str, *args, result: Any = None, **kwargs) -> None:
        self._calls.append(CallRecord(method=method, args=args, kwargs=kwargs, result=result))


class FakeMessageFormatter(_Recorder):
    """
    Fake MessageFormatterPort.

    Produces a fixed message for every event unless told to decline.

    Usage:
        formatter = FakeMessageFormatter()
        formatter.decline()              # format() returns None from now on
        formatter.get_last_call("format").args  # (event, fields)
    """

    def __init__(self, subject: str = "Subject", body: str = "Body", to: str = "placeholder@example.com"):
        super().__init__()
        self.subject = subject
        self.body = body
        self.to = to
        self._declined = False

    def decline(self) -> None:
        self._declined = True

    def format(self, event: UserAccountEvent, fields: FieldMap) -> Optional[Message]:
        message = None
        if not self._declined:
            message = Message(to=self.to, subject=self.subject, body=f"{self.body} ({event.event_type})")
        self._record_call("format", event, dict(fields), result=message)
        return message


class FakeMessageDelivery(_Recorder):
    """
    Fake MessageDeliveryPort that keeps sent messages in memory.

    Usage:
        delivery = FakeMessageDelivery()
        ...
        assert delivery.sent[0].to == "new@x.com"
    """

    provider_name = "fake"

    def __init__(self):
        super().__init__()
        self.sent: List[Message] = []
        self._failure: Optional[str] = None

    def configure_failure(self, error_message: str) -> None:
        self._failure = error_message

    def clear(self) -> None:
        super().clear()
        self.sent.clear()
        self._failure = None

    def send(self, message: Message) -> DeliveryResult:
        if self._failure:
            result = DeliveryResult(
                success=False, provider=self.provider_name, recipient=message.to,
                error_message=self._failure, error_code="FAKE_FAILURE",
            )
        else:
            self.sent.append(message)
            result = DeliveryResult(
                success=True, provider=self.provider_name, recipient=message.to,
                message_id=f"fake-{len(self.sent)}",
            )
        self._record_call("send", message, result=result)
        return result


# =============================================================================
# EOF
# =============================================================================
