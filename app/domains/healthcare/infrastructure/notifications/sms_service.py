# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Healthcare)
# Description: SMS notification channel over the Twilio REST API.
# ============================================================================
"""
SMS Notification Service.

Posts messages to Twilio's Messages endpoint with httpx. Without credentials
the message is only logged.
"""

import logging
from typing import TYPE_CHECKING

import httpx

from app.config.settings import Settings
from app.core.domain import NotificationException

if TYPE_CHECKING:
    from app.domains.healthcare.domain.entities import Patient

logger = logging.getLogger(__name__)


class SmsNotificationService:
    """Implements INotificationService for the SMS channel."""

    channel = "sms"

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None):
        self.account_sid = settings.TWILIO_ACCOUNT_SID
        self.auth_token = settings.TWILIO_AUTH_TOKEN
        self.from_number = settings.TWILIO_FROM_NUMBER
        self.base_url = settings.TWILIO_API_BASE.rstrip("/")
        self.timeout = settings.NOTIFICATION_TIMEOUT_SECONDS
        self._client = client

    @property
    def is_configured(self) -> bool:
        return bool(self.account_sid and self.auth_token and self.from_number)

    def resolve_recipient(self, patient: "Patient") -> str | None:
        return patient.phone or None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    def _get_message_url(self) -> str:
        return f"{self.base_url}/Accounts/{self.account_sid}/Messages.json"

    async def notify(self, recipient: str, subject: str, body: str) -> None:
        if not self.is_configured:
            logger.info(f"[sms:log-only] To: {recipient} | {subject}: {body}")
            return

        payload = {"To": recipient, "From": self.from_number, "Body": f"{subject}: {body}"}
        try:
            response = await self._get_client().post(
                self._get_message_url(),
                data=payload,
                auth=(self.account_sid or "", self.auth_token or ""),
            )
        except httpx.TimeoutException as e:
            raise NotificationException(self.channel, "Timeout al comunicarse con Twilio", e) from e
        except httpx.HTTPError as e:
            raise NotificationException(self.channel, "Error de conexión con Twilio", e) from e

        if response.status_code >= 400:
            logger.error(f"Error {response.status_code} de Twilio API: {response.text}")
            raise NotificationException(self.channel, f"Twilio respondió HTTP {response.status_code}")

        logger.info(f"SMS '{subject}' sent to {recipient}")

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
