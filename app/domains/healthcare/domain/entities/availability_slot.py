"""
Availability Slot Entity for Healthcare Domain

A doctor-owned time interval that at most one active appointment can claim.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from app.core.domain import AuditableEntity, TimeRange, ValidationException, as_utc, generate_uuid


@dataclass
class AvailabilitySlot(AuditableEntity[UUID]):
    """
    Availability slot entity.

    The ``is_reserved`` flag is only ever changed by the store's atomic
    reserve/release statements; the entity just carries the last read value.

    Example:
        ```python
        slot = AvailabilitySlot.open(
            doctor_id=doctor.id,
            start_time=datetime(2025, 3, 10, 10, 0, tzinfo=UTC),
            end_time=datetime(2025, 3, 10, 10, 30, tzinfo=UTC),
            actor=doctor.email,
        )
        ```
    """

    doctor_id: UUID | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    is_reserved: bool = False

    @classmethod
    def open(
        cls,
        doctor_id: UUID,
        start_time: datetime,
        end_time: datetime,
        actor: str | None,
    ) -> "AvailabilitySlot":
        """Create a new unreserved slot, validating that start < end."""
        start = as_utc(start_time)
        end = as_utc(end_time)
        if start >= end:
            raise ValidationException(
                "La hora de inicio debe ser anterior a la hora de fin.",
                field="startTime",
            )
        slot = cls(id=generate_uuid(), doctor_id=doctor_id, start_time=start, end_time=end)
        slot.set_created_by(actor)
        return slot

    @property
    def time_range(self) -> TimeRange:
        if self.start_time is None or self.end_time is None:
            raise ValidationException("El bloque de disponibilidad no tiene horario.", field="startTime")
        return TimeRange(start=self.start_time, end=self.end_time)

    def belongs_to(self, doctor_id: UUID) -> bool:
        return self.doctor_id == doctor_id
