# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Healthcare)
# Description: Notification channels and the factory selecting the active one.
# ============================================================================
"""Notification Services Module.

Components:
- EmailNotificationService: SMTP email channel
- SmsNotificationService: Twilio SMS channel
- create_notification_service: builds the channel named by NOTIFICATION_CHANNEL
"""

from app.config.settings import Settings
from app.domains.healthcare.application.ports import INotificationService

from .email_service import EmailNotificationService
from .sms_service import SmsNotificationService


def create_notification_service(settings: Settings) -> INotificationService:
    """Build the notification channel selected in configuration."""
    if settings.NOTIFICATION_CHANNEL == "sms":
        return SmsNotificationService(settings)
    return EmailNotificationService(settings)


__all__ = ["EmailNotificationService", "SmsNotificationService", "create_notification_service"]
