# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Healthcare)
# Description: Email notification channel over SMTP.
# ============================================================================
"""
Email Notification Service.

Sends plain-text emails through SMTP. smtplib is blocking, so each send runs
in a worker thread. Without SMTP_HOST the message is only logged.
"""

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from typing import TYPE_CHECKING

from app.config.settings import Settings
from app.core.domain import NotificationException

if TYPE_CHECKING:
    from app.domains.healthcare.domain.entities import Patient

logger = logging.getLogger(__name__)


class EmailNotificationService:
    """Implements INotificationService for the email channel."""

    channel = "email"

    def __init__(self, settings: Settings):
        self.host = settings.SMTP_HOST
        self.port = settings.SMTP_PORT
        self.username = settings.SMTP_USER
        self.password = settings.SMTP_PASSWORD
        self.sender = settings.SMTP_FROM
        self.use_tls = settings.SMTP_USE_TLS
        self.timeout = settings.NOTIFICATION_TIMEOUT_SECONDS

    @property
    def is_configured(self) -> bool:
        return bool(self.host)

    def resolve_recipient(self, patient: "Patient") -> str | None:
        return patient.email or None

    async def notify(self, recipient: str, subject: str, body: str) -> None:
        if not self.is_configured:
            logger.info(f"[email:log-only] To: {recipient} | {subject} | {body}")
            return

        msg = EmailMessage()
        msg["From"] = self.sender
        msg["To"] = recipient
        msg["Subject"] = subject
        msg.set_content(body)

        try:
            await asyncio.to_thread(self._deliver, msg)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationException(self.channel, f"No se pudo enviar el email a {recipient}", e) from e

        logger.info(f"Email '{subject}' sent to {recipient}")

    def _deliver(self, msg: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.username:
                server.login(self.username, self.password or "")
            server.send_message(msg)

    async def close(self) -> None:
        """SMTP connections are per message; nothing to release."""
