# =============================================================================
# File: membership/notifications/message.py
# Description: Outbound notification message and transport result models
# =============================================================================

from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

# Flattened string view of an event's payload, used as template input
FieldMap = Dict[str, str]


class Message(BaseModel):
    """
    A rendered notification.

    Frozen: pipeline stages that change a message return a new one
    (``message.model_copy(update={...})``). "No message" is ``None``.
    """
    model_config = ConfigDict(frozen=True)

    to: str = ""
    subject: str
    body: str
    html_body: Optional[str] = None
    from_address: Optional[str] = None


class DeliveryResult(BaseModel):
    """Outcome of a single transport send."""
    success: bool
    provider: str
    recipient: str = ""
    message_id: Optional[str] = None
    error_message: Optional[str] = None
    error_code: Optional[str] = None
    details: Dict[str, str] = Field(default_factory=dict)
