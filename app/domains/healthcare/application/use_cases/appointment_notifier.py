"""
Best-effort patient notifications for booking and cancellation.

Delivery failures are logged and discarded: a booking or cancellation that
has been committed stays committed whatever happens here.
"""

import logging

from app.core.domain import NotificationException, format_utc
from app.domains.healthcare.application.ports.notification_port import INotificationService
from app.domains.healthcare.domain.entities import Appointment, Doctor, Patient

logger = logging.getLogger(__name__)

CONFIRMED_SUBJECT = "Cita Confirmada"
CANCELLED_SUBJECT = "Cita Cancelada"


class AppointmentNotifier:
    """Builds the patient messages and hands them to the active channel."""

    def __init__(self, notification_service: INotificationService):
        self.notification_service = notification_service

    async def appointment_confirmed(self, appointment: Appointment, doctor: Doctor, patient: Patient) -> bool:
        body = (
            f"Su cita con el {doctor.display_name} ha sido confirmada para el "
            f"{self._start(appointment)} por la razón: {appointment.reason or '-'}"
        )
        return await self._send(patient, CONFIRMED_SUBJECT, body, appointment)

    async def appointment_cancelled(self, appointment: Appointment, doctor: Doctor, patient: Patient) -> bool:
        body = f"Su cita con el {doctor.display_name} para el {self._start(appointment)} ha sido cancelada."
        return await self._send(patient, CANCELLED_SUBJECT, body, appointment)

    async def _send(self, patient: Patient, subject: str, body: str, appointment: Appointment) -> bool:
        channel = self.notification_service.channel
        recipient = self.notification_service.resolve_recipient(patient)
        if not recipient:
            logger.warning(f"Patient {patient.id} has no {channel} address, notification for {appointment.id} skipped")
            return False
        try:
            await self.notification_service.notify(recipient, subject, body)
        except NotificationException as e:
            logger.warning(f"Notification '{subject}' for appointment {appointment.id} via {channel} failed: {e}")
            return False
        logger.info(f"Notification '{subject}' sent for appointment {appointment.id} via {channel}")
        return True

    @staticmethod
    def _start(appointment: Appointment) -> str:
        return format_utc(appointment.start_time) if appointment.start_time else "-"
