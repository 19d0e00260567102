# ============================================================================
# SCOPE: APPLICATION LAYER (Healthcare)
# Description: Appointment store port (DIP compliant).
# ============================================================================
"""
Appointment Repository Port

Interface for appointment data access following Clean Architecture.
"""

from datetime import datetime
from typing import Protocol, runtime_checkable
from uuid import UUID

from app.domains.healthcare.application.dto import Page, PageRequest
from app.domains.healthcare.domain.entities.appointment import Appointment
from app.domains.healthcare.domain.value_objects.appointment_status import AppointmentStatus


@runtime_checkable
class IAppointmentRepository(Protocol):
    """
    Appointment repository interface.

    At most one active appointment may reference a slot; the storage layer
    enforces it with a unique index.
    """

    async def create(self, appointment: Appointment) -> Appointment:
        """
        Persist a new appointment.

        Raises:
            SlotUnavailableException: The slot is already referenced by an active appointment
        """
        ...

    async def find_by_id(self, appointment_id: UUID) -> Appointment | None:
        """Find appointment by ID."""
        ...

    async def get_by_id(self, appointment_id: UUID) -> Appointment:
        """
        Get appointment by ID.

        Raises:
            EntityNotFoundException: Appointment missing
        """
        ...

    async def update_state(
        self,
        appointment_id: UUID,
        new_state: AppointmentStatus,
        actor: str | None,
        expected_state: AppointmentStatus | None = None,
    ) -> Appointment:
        """
        Persist a state change without judging its legality.

        When ``expected_state`` is given the write only happens if the stored
        state still matches it (compare-and-set).

        Raises:
            EntityNotFoundException: Appointment missing
            InvalidOperationException: Stored state no longer equals ``expected_state``
        """
        ...

    async def list_by_patient(self, patient_id: UUID, page: PageRequest) -> Page[Appointment]:
        """Patient's appointments ordered by slot start ascending."""
        ...

    async def list_by_doctor(self, doctor_id: UUID, page: PageRequest) -> Page[Appointment]:
        """Doctor's appointments ordered by slot start ascending."""
        ...

    async def list_confirmed_by_doctor_in_range(
        self,
        doctor_id: UUID,
        start: datetime,
        end: datetime,
    ) -> list[Appointment]:
        """CONFIRMED appointments of a doctor whose slot starts in [start, end]."""
        ...

    async def list_all_by_patient(self, patient_id: UUID) -> list[Appointment]:
        """Every appointment of a patient ordered by slot start (reports)."""
        ...
