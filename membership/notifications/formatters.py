# =============================================================================
# File: membership/notifications/formatters.py
# Description: MessageFormatterPort implementations
# =============================================================================

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

from membership.config.notification_config import NotificationConfig, get_notification_config
from membership.notifications.message import FieldMap, Message
from membership.notifications.templates import DEFAULT_TEMPLATES, MessageTemplate
from membership.user_account.events import UserAccountEvent

log = logging.getLogger("membership.notifications.formatters")


class NullMessageFormatter:
    """Formats nothing; every event is skipped."""

    def format(self, event: UserAccountEvent, fields: FieldMap) -> Optional[Message]:
        return None


class _BlankMissing(dict):
    # Unknown placeholders render as ""
    def __missing__(self, key: str) -> str:
        return ""


class TemplateMessageFormatter:
    """
    Renders per-event-type templates with ``str.format_map``.

    The template context is the field map plus account and application
    values. Event types without a template produce no message.
    """

    def __init__(
            self,
            templates: Optional[Mapping[str, MessageTemplate]] = None,
            config: Optional[NotificationConfig] = None,
    ):
        self.templates: Dict[str, MessageTemplate] = dict(
            DEFAULT_TEMPLATES if templates is None else templates
        )
        self.config = config or get_notification_config()

    def build_context(self, event: UserAccountEvent, fields: FieldMap) -> Dict[str, str]:
        context = _BlankMissing(
            Username=event.account.username,
            Email=event.account.email,
            ApplicationName=self.config.application_name,
            ApplicationUrl=self.config.application_url,
            EmailSignature=self.config.email_signature,
        )
        key = fields.get("VerificationKey")
        if key:
            context["VerificationUrl"] = self.config.build_url(self.config.verify_path, key)
            context["CancelVerificationUrl"] = self.config.build_url(self.config.cancel_path, key)
        context.update(fields)
        return context

    def format(self, event: UserAccountEvent, fields: FieldMap) -> Optional[Message]:
        template = self.templates.get(event.event_type)
        if template is None:
            log.debug(f"No template for {event.event_type}")
            return None

        context = self.build_context(event, fields)
        body = template.body
        if template.keyless_body is not None and not fields.get("VerificationKey"):
            body = template.keyless_body
        body = body.format_map(context)
        if context["EmailSignature"]:
            body = f"{body.rstrip()}\n\n{context['EmailSignature']}\n"

        return Message(
            subject=template.subject.format_map(context),
            body=body,
        )
