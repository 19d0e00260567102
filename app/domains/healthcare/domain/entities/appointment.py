"""
Appointment Entity for Healthcare Domain

Represents a booked appointment: one patient, one doctor, one slot.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from app.core.domain import (
    AuditableEntity,
    InvalidOperationException,
    ValidationException,
    generate_uuid,
)

from ..value_objects.appointment_status import AppointmentStatus
from .availability_slot import AvailabilitySlot

MAX_REASON_LENGTH = 500


@dataclass
class Appointment(AuditableEntity[UUID]):
    """
    Appointment entity.

    The slot reference is fixed at booking time. ``start_time`` and
    ``end_time`` mirror the referenced slot and are read-only.

    Example:
        ```python
        appointment = Appointment.book(
            doctor_id=doctor.id,
            patient_id=patient.id,
            slot=slot,
            reason="Control anual",
            actor=patient.email,
        )
        appointment.cancel(actor=patient.email)
        ```
    """

    doctor_id: UUID | None = None
    patient_id: UUID | None = None
    slot_id: UUID | None = None
    reason: str | None = None
    status: AppointmentStatus = AppointmentStatus.CONFIRMED
    start_time: datetime | None = None
    end_time: datetime | None = None

    @classmethod
    def book(
        cls,
        doctor_id: UUID,
        patient_id: UUID,
        slot: AvailabilitySlot,
        reason: str | None,
        actor: str | None,
    ) -> "Appointment":
        """Create a confirmed appointment for an already reserved slot."""
        if reason and len(reason) > MAX_REASON_LENGTH:
            raise ValidationException(
                f"La razón de la visita no puede exceder los {MAX_REASON_LENGTH} caracteres.",
                field="reason",
            )
        appointment = cls(
            id=generate_uuid(),
            doctor_id=doctor_id,
            patient_id=patient_id,
            slot_id=slot.id,
            reason=reason,
            status=AppointmentStatus.CONFIRMED,
            start_time=slot.start_time,
            end_time=slot.end_time,
        )
        appointment.set_created_by(actor)
        return appointment

    def cancel(self, actor: str | None) -> None:
        """Move to CANCELLED; the caller releases the slot."""
        self._transition(AppointmentStatus.CANCELLED, "cancel", actor)

    def _transition(self, new_status: AppointmentStatus, operation: str, actor: str | None) -> None:
        if not self.status.can_transition_to(new_status):
            raise InvalidOperationException(
                operation=operation,
                current_state=self.status.value,
                message=(
                    "La cita ya está cancelada."
                    if self.status == AppointmentStatus.CANCELLED
                    else f"La cita ya está {self.status.display_name.lower()}."
                ),
            )
        self.status = new_status
        self.set_updated_by(actor)

    def involves(self, account_id: UUID) -> bool:
        """True when the account is this appointment's patient or doctor."""
        return account_id in (self.patient_id, self.doctor_id)
