"""
Availability Repository Implementation

SQLAlchemy implementation of IAvailabilityRepository.
"""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy import and_, delete, exists, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain import (
    EntityNotFoundException,
    SlotOverlapException,
    SlotReservedException,
    SlotUnavailableException,
    as_utc,
    utc_now,
)
from app.domains.healthcare.application.ports.availability_repository import IAvailabilityRepository
from app.domains.healthcare.domain.entities.availability_slot import AvailabilitySlot
from app.domains.healthcare.infrastructure.persistence.sqlalchemy.models import (
    AppointmentModel,
    AvailabilitySlotModel,
    DoctorModel,
)

logger = logging.getLogger(__name__)


class SQLAlchemyAvailabilityRepository(IAvailabilityRepository):
    """
    SQLAlchemy implementation of availability slot repository.

    ``reserve`` and ``release`` are single conditional UPDATE statements: the
    database decides which of several concurrent callers wins, so no read of
    the ``is_reserved`` flag is trusted before writing it.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create_slot(self, slot: AvailabilitySlot) -> AvailabilitySlot:
        """Insert a slot after checking the doctor exists and no slot overlaps it."""
        doctor_found = await self.session.scalar(select(exists().where(DoctorModel.id == slot.doctor_id)))
        if not doctor_found:
            raise EntityNotFoundException(entity_type="Doctor", entity_id=slot.doctor_id)

        # Half-open intervals: [a, b) and [c, d) overlap iff a < d and c < b
        overlapping = await self.session.scalar(
            select(
                exists().where(
                    and_(
                        AvailabilitySlotModel.doctor_id == slot.doctor_id,
                        AvailabilitySlotModel.start_time < slot.end_time,
                        AvailabilitySlotModel.end_time > slot.start_time,
                    )
                )
            )
        )
        if overlapping:
            raise SlotOverlapException(slot.doctor_id, slot.start_time, slot.end_time)

        model = self._to_model(slot)
        self.session.add(model)
        await self.session.flush()
        return self._to_entity(model)

    async def find_by_id(self, slot_id: UUID) -> AvailabilitySlot | None:
        """Find slot by ID."""
        model = await self.session.get(AvailabilitySlotModel, slot_id, populate_existing=True)
        return self._to_entity(model) if model else None

    async def get_available_slot(self, slot_id: UUID) -> AvailabilitySlot:
        """Get slot by ID only if it is not reserved."""
        result = await self.session.execute(
            select(AvailabilitySlotModel).where(
                and_(
                    AvailabilitySlotModel.id == slot_id,
                    AvailabilitySlotModel.is_reserved.is_(False),
                )
            )
        )
        model = result.scalar_one_or_none()
        if not model:
            raise EntityNotFoundException(
                entity_type="AvailabilitySlot",
                entity_id=slot_id,
                message="El horario seleccionado no existe o ya fue reservado.",
            )
        return self._to_entity(model)

    async def reserve(self, slot_id: UUID, actor: str | None) -> None:
        """Flip is_reserved false -> true; zero affected rows means someone else won."""
        result = await self.session.execute(
            update(AvailabilitySlotModel)
            .where(
                and_(
                    AvailabilitySlotModel.id == slot_id,
                    AvailabilitySlotModel.is_reserved.is_(False),
                )
            )
            .values(is_reserved=True, updated_by=actor, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            logger.info(f"Reserve lost for slot {slot_id}")
            raise SlotUnavailableException(
                slot_id=slot_id,
                message="El horario seleccionado ya fue reservado.",
            )

    async def release(self, slot_id: UUID, actor: str | None) -> bool:
        """Flip is_reserved true -> false; releasing a free slot is a no-op."""
        result = await self.session.execute(
            update(AvailabilitySlotModel)
            .where(
                and_(
                    AvailabilitySlotModel.id == slot_id,
                    AvailabilitySlotModel.is_reserved.is_(True),
                )
            )
            .values(is_reserved=False, updated_by=actor, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        released = result.rowcount == 1
        if not released:
            logger.warning(f"Release of slot {slot_id} was a no-op (not reserved)")
        return released

    async def list_by_doctor_in_range(
        self,
        doctor_id: UUID,
        start: datetime,
        end: datetime,
    ) -> list[AvailabilitySlot]:
        """Slots whose start lies in [start, end]."""
        result = await self.session.execute(
            select(AvailabilitySlotModel)
            .where(
                and_(
                    AvailabilitySlotModel.doctor_id == doctor_id,
                    AvailabilitySlotModel.start_time >= as_utc(start),
                    AvailabilitySlotModel.start_time <= as_utc(end),
                )
            )
            .order_by(AvailabilitySlotModel.start_time)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def delete_slot(self, slot_id: UUID) -> None:
        """Delete an unreserved slot that no appointment references."""
        model = await self.session.get(AvailabilitySlotModel, slot_id, populate_existing=True)
        if not model:
            raise EntityNotFoundException(entity_type="AvailabilitySlot", entity_id=slot_id)

        referenced = await self.session.scalar(select(exists().where(AppointmentModel.slot_id == slot_id)))
        if model.is_reserved or referenced:
            raise SlotReservedException(slot_id)

        # Conditional delete: a reservation committed in between leaves the row alone
        result = await self.session.execute(
            delete(AvailabilitySlotModel)
            .where(
                and_(
                    AvailabilitySlotModel.id == slot_id,
                    AvailabilitySlotModel.is_reserved.is_(False),
                )
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise SlotReservedException(slot_id)

    # Mapping methods

    def _to_entity(self, model: AvailabilitySlotModel) -> AvailabilitySlot:
        """Convert model to entity."""
        return AvailabilitySlot(
            id=model.id,  # type: ignore[arg-type]
            doctor_id=model.doctor_id,  # type: ignore[arg-type]
            start_time=model.start_time,  # type: ignore[arg-type]
            end_time=model.end_time,  # type: ignore[arg-type]
            is_reserved=bool(model.is_reserved),
            created_at=model.created_at,  # type: ignore[arg-type]
            updated_at=model.updated_at,  # type: ignore[arg-type]
            created_by=model.created_by,  # type: ignore[arg-type]
            updated_by=model.updated_by,  # type: ignore[arg-type]
        )

    def _to_model(self, slot: AvailabilitySlot) -> AvailabilitySlotModel:
        """Convert entity to model."""
        return AvailabilitySlotModel(
            id=slot.id,
            doctor_id=slot.doctor_id,
            start_time=slot.start_time,
            end_time=slot.end_time,
            is_reserved=slot.is_reserved,
            created_at=slot.created_at,
            updated_at=slot.updated_at,
            created_by=slot.created_by,
            updated_by=slot.updated_by,
        )
