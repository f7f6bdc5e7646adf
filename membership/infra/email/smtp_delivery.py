# =============================================================================
# File: membership/infra/email/smtp_delivery.py
# Description: Default notification transport - direct send to an SMTP server
# =============================================================================

from __future__ import annotations

import logging
import smtplib
import ssl
import uuid
from email.message import EmailMessage
from email.utils import formataddr, make_msgid
from typing import Optional

from membership.common.exceptions.exceptions import DeliveryError
from membership.config.smtp_config import SmtpConfig, get_smtp_config
from membership.notifications.message import DeliveryResult, Message

log = logging.getLogger("membership.smtp_delivery")


class SmtpMessageDelivery:
    """
    Sends each message over its own SMTP connection.

    Nothing is shared between calls, so concurrent sends are safe. Server and
    network failures come back as a failed DeliveryResult; no retries here.
    """

    provider_name = "smtp"

    def __init__(self, config: Optional[SmtpConfig] = None):
        self.config = config or get_smtp_config()

    def build_email(self, message: Message) -> EmailMessage:
        sender = message.from_address or formataddr(
            (self.config.from_name or "", self.config.from_email)
        )
        email = EmailMessage()
        email["From"] = sender
        email["To"] = message.to
        email["Subject"] = message.subject
        email["Message-ID"] = make_msgid(domain=self.config.from_email.rpartition("@")[2] or None)
        email.set_content(message.body)
        if message.html_body:
            email.add_alternative(message.html_body, subtype="html")
        return email

    def _connect(self) -> smtplib.SMTP:
        timeout = self.config.timeout_seconds
        if self.config.use_ssl:
            return smtplib.SMTP_SSL(
                self.config.host, self.config.port,
                timeout=timeout, context=ssl.create_default_context(),
            )
        server = smtplib.SMTP(self.config.host, self.config.port, timeout=timeout)
        if self.config.use_tls:
            server.starttls(context=ssl.create_default_context())
        return server

    def send(self, message: Message) -> DeliveryResult:
        if not message.to or not message.to.strip():
            raise DeliveryError("Cannot send a message without a recipient")

        if not self.config.is_configured:
            log.warning(f"SMTP not configured (missing SMTP_HOST); dropping mail to {message.to}")
            return DeliveryResult(
                success=False,
                provider=self.provider_name,
                recipient=message.to,
                error_message="SMTP not configured (missing SMTP_HOST)",
                error_code="NOT_CONFIGURED",
            )

        email = self.build_email(message)

        try:
            with self._connect() as server:
                if self.config.username and self.config.password:
                    server.login(self.config.username, self.config.password.get_secret_value())
                server.send_message(email)
        except smtplib.SMTPAuthenticationError as e:
            log.error(f"SMTP auth error: {e}")
            return self._failed(message, f"SMTP authentication failed: {e}", "AUTH_ERROR")
        except smtplib.SMTPRecipientsRefused as e:
            log.error(f"SMTP recipients refused: {e}")
            return self._failed(message, f"Recipients refused: {e}", "RECIPIENTS_REFUSED")
        except smtplib.SMTPException as e:
            log.error(f"SMTP error: {e}")
            return self._failed(message, str(e), "SMTP_ERROR")
        except OSError as e:
            log.error(f"SMTP connection error ({self.config.host}:{self.config.port}): {e}")
            return self._failed(message, str(e), "CONNECTION_ERROR")

        log.info(f"SMTP: email '{message.subject}' sent to {message.to}")
        return DeliveryResult(
            success=True,
            provider=self.provider_name,
            recipient=message.to,
            message_id=email["Message-ID"] or f"smtp-{uuid.uuid4()}",
        )

    def _failed(self, message: Message, error: str, code: str) -> DeliveryResult:
        return DeliveryResult(
            success=False,
            provider=self.provider_name,
            recipient=message.to,
            error_message=error,
            error_code=code,
        )
