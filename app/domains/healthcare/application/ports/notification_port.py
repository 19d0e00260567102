# ============================================================================
# SCOPE: APPLICATION LAYER (Healthcare)
# Description: Notification service port (DIP compliant).
# ============================================================================
"""Notification Service Port.

Defines the interface of the pluggable patient notification channels
(email, SMS). Exactly one implementation is active per process.
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ...domain.entities.patient import Patient


@runtime_checkable
class INotificationService(Protocol):
    """Interface for notification services.

    Implementations: EmailNotificationService, SmsNotificationService

    ``notify`` raises ``NotificationException`` on delivery failure; callers
    decide what to do with it (booking and cancellation log and continue).
    """

    channel: str

    def resolve_recipient(self, patient: "Patient") -> str | None:
        """Address of the patient on this channel, or None if the patient has none."""
        ...

    async def notify(self, recipient: str, subject: str, body: str) -> None:
        """Deliver a message.

        Args:
            recipient: Channel-specific address (email or phone).
            subject: Message subject.
            body: Message text.
        """
        ...

    async def close(self) -> None:
        """Release transport resources."""
        ...
