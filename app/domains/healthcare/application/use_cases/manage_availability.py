"""
Availability Use Cases

Doctors publish, list and withdraw availability slots.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable
from uuid import UUID

from app.core.domain import EntityNotFoundException, ValidationException, utc_now
from app.core.interfaces.transaction import SERIALIZABLE, ITransactionManager
from app.domains.healthcare.application.ports import IAvailabilityRepository, IDoctorRepository
from app.domains.healthcare.domain.entities import AvailabilitySlot

logger = logging.getLogger(__name__)


@dataclass
class CreateSlotRequest:
    """Request for publishing a slot."""

    doctor_id: UUID
    start_time: datetime
    end_time: datetime
    actor: str | None = None


class CreateSlotUseCase:
    """
    Publish a new availability slot.

    The overlap check and the insert share a SERIALIZABLE transaction so that
    two overlapping slots created concurrently cannot both be committed.
    """

    def __init__(
        self,
        availability_repository: IAvailabilityRepository,
        transaction_manager: ITransactionManager,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.availability_repo = availability_repository
        self.tx = transaction_manager
        self._clock = clock

    async def execute(self, request: CreateSlotRequest) -> AvailabilitySlot:
        """
        Raises:
            ValidationException: start_time is not before end_time, or lies in the past
            EntityNotFoundException: Doctor unknown
            SlotOverlapException: Overlaps an existing slot of the doctor
        """
        slot = AvailabilitySlot.open(
            doctor_id=request.doctor_id,
            start_time=request.start_time,
            end_time=request.end_time,
            actor=request.actor,
        )
        if slot.start_time < self._clock():
            raise ValidationException("La hora de inicio no puede estar en el pasado.", field="startTime")

        async def _create() -> AvailabilitySlot:
            return await self.availability_repo.create_slot(slot)

        created = await self.tx.run(_create, operation="create_slot", isolation_level=SERIALIZABLE, retry=True)
        logger.info(f"Slot created: {created.id} for doctor {created.doctor_id} ({created.time_range})")
        return created


class ListSlotsUseCase:
    """Slots of a doctor whose start falls inside a time range."""

    def __init__(self, doctor_repository: IDoctorRepository, availability_repository: IAvailabilityRepository):
        self.doctor_repo = doctor_repository
        self.availability_repo = availability_repository

    async def execute(self, doctor_id: UUID, start: datetime, end: datetime) -> list[AvailabilitySlot]:
        if end < start:
            raise ValidationException("La fecha de fin no puede ser anterior a la fecha de inicio.", field="endDate")
        if not await self.doctor_repo.exists(doctor_id):
            raise EntityNotFoundException(entity_type="Doctor", entity_id=doctor_id)
        return await self.availability_repo.list_by_doctor_in_range(doctor_id, start, end)


class GetSlotUseCase:
    """Get a slot by ID (used for ownership checks)."""

    def __init__(self, availability_repository: IAvailabilityRepository):
        self.availability_repo = availability_repository

    async def execute(self, slot_id: UUID) -> AvailabilitySlot:
        slot = await self.availability_repo.find_by_id(slot_id)
        if not slot:
            raise EntityNotFoundException(entity_type="AvailabilitySlot", entity_id=slot_id)
        return slot


class DeleteSlotUseCase:
    """Withdraw an unreserved slot."""

    def __init__(self, availability_repository: IAvailabilityRepository, transaction_manager: ITransactionManager):
        self.availability_repo = availability_repository
        self.tx = transaction_manager

    async def execute(self, slot_id: UUID) -> None:
        """
        Raises:
            EntityNotFoundException: Slot missing
            SlotReservedException: Slot reserved or referenced by an appointment
        """

        async def _delete() -> None:
            await self.availability_repo.delete_slot(slot_id)

        await self.tx.run(_delete, operation="delete_slot", isolation_level=SERIALIZABLE, retry=True)
        logger.info(f"Slot deleted: {slot_id}")
