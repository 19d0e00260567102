"""
Appointment Repository Implementation

SQLAlchemy implementation of IAppointmentRepository.
"""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy import and_, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from app.core.domain import (
    EntityNotFoundException,
    InvalidOperationException,
    SlotUnavailableException,
    as_utc,
    utc_now,
)
from app.domains.healthcare.application.dto import Page, PageRequest
from app.domains.healthcare.application.ports.appointment_repository import IAppointmentRepository
from app.domains.healthcare.domain.entities.appointment import Appointment
from app.domains.healthcare.domain.value_objects.appointment_status import AppointmentStatus
from app.domains.healthcare.infrastructure.persistence.sqlalchemy.models import (
    AppointmentModel,
    AvailabilitySlotModel,
)

logger = logging.getLogger(__name__)


class SQLAlchemyAppointmentRepository(IAppointmentRepository):
    """
    SQLAlchemy implementation of appointment repository.

    Listings are ordered by the start of the referenced slot.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _base_query(self):
        return (
            select(AppointmentModel)
            .join(AppointmentModel.slot)
            .options(contains_eager(AppointmentModel.slot))
            .execution_options(populate_existing=True)
        )

    async def create(self, appointment: Appointment) -> Appointment:
        """Insert appointment; the active-slot unique index rejects double bookings."""
        model = self._to_model(appointment)
        self.session.add(model)
        try:
            await self.session.flush()
        except IntegrityError as e:
            logger.warning(f"Slot {appointment.slot_id} already has an active appointment: {e.orig}")
            raise SlotUnavailableException(
                slot_id=appointment.slot_id,
                message="El horario seleccionado ya fue reservado.",
            ) from e
        return appointment

    async def find_by_id(self, appointment_id: UUID) -> Appointment | None:
        """Find appointment by ID."""
        result = await self.session.execute(self._base_query().where(AppointmentModel.id == appointment_id))
        model = result.unique().scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_id(self, appointment_id: UUID) -> Appointment:
        """Get appointment by ID or raise."""
        appointment = await self.find_by_id(appointment_id)
        if not appointment:
            raise EntityNotFoundException(entity_type="Appointment", entity_id=appointment_id)
        return appointment

    async def update_state(
        self,
        appointment_id: UUID,
        new_state: AppointmentStatus,
        actor: str | None,
        expected_state: AppointmentStatus | None = None,
    ) -> Appointment:
        """Write the new state, optionally only if the stored state is ``expected_state``."""
        conditions = [AppointmentModel.id == appointment_id]
        if expected_state is not None:
            conditions.append(AppointmentModel.status == expected_state.value)

        result = await self.session.execute(
            update(AppointmentModel)
            .where(and_(*conditions))
            .values(status=new_state.value, updated_by=actor, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )

        if result.rowcount != 1:
            current = await self.get_by_id(appointment_id)
            raise InvalidOperationException(
                operation=f"set_status_{new_state.value.lower()}",
                current_state=current.status.value,
                message=f"La cita cambió de estado a {current.status.value} durante la operación.",
            )

        return await self.get_by_id(appointment_id)

    async def list_by_patient(self, patient_id: UUID, page: PageRequest) -> Page[Appointment]:
        """Patient's appointments, earliest slot first."""
        return await self._paginate(AppointmentModel.patient_id == patient_id, page)

    async def list_by_doctor(self, doctor_id: UUID, page: PageRequest) -> Page[Appointment]:
        """Doctor's appointments, earliest slot first."""
        return await self._paginate(AppointmentModel.doctor_id == doctor_id, page)

    async def list_confirmed_by_doctor_in_range(
        self,
        doctor_id: UUID,
        start: datetime,
        end: datetime,
    ) -> list[Appointment]:
        """Confirmed appointments of a doctor whose slot starts in [start, end]."""
        result = await self.session.execute(
            self._base_query()
            .where(
                and_(
                    AppointmentModel.doctor_id == doctor_id,
                    AppointmentModel.status == AppointmentStatus.CONFIRMED.value,
                    AvailabilitySlotModel.start_time >= as_utc(start),
                    AvailabilitySlotModel.start_time <= as_utc(end),
                )
            )
            .order_by(AvailabilitySlotModel.start_time)
        )
        return [self._to_entity(m) for m in result.unique().scalars().all()]

    async def list_all_by_patient(self, patient_id: UUID) -> list[Appointment]:
        """Every appointment of a patient, earliest slot first."""
        result = await self.session.execute(
            self._base_query()
            .where(AppointmentModel.patient_id == patient_id)
            .order_by(AvailabilitySlotModel.start_time, AppointmentModel.created_at)
        )
        return [self._to_entity(m) for m in result.unique().scalars().all()]

    async def _paginate(self, condition, page: PageRequest) -> Page[Appointment]:
        total = await self.session.scalar(select(func.count()).select_from(AppointmentModel).where(condition))
        result = await self.session.execute(
            self._base_query()
            .where(condition)
            .order_by(AvailabilitySlotModel.start_time, AppointmentModel.created_at)
            .offset(page.offset)
            .limit(page.size)
        )
        items = [self._to_entity(m) for m in result.unique().scalars().all()]
        return Page(items=items, total=total or 0, page=page.page, size=page.size)

    # Mapping methods

    def _to_entity(self, model: AppointmentModel) -> Appointment:
        """Convert model (with its slot loaded) to entity."""
        return Appointment(
            id=model.id,  # type: ignore[arg-type]
            doctor_id=model.doctor_id,  # type: ignore[arg-type]
            patient_id=model.patient_id,  # type: ignore[arg-type]
            slot_id=model.slot_id,  # type: ignore[arg-type]
            reason=model.reason,  # type: ignore[arg-type]
            status=AppointmentStatus(model.status),
            start_time=model.slot.start_time,
            end_time=model.slot.end_time,
            created_at=model.created_at,  # type: ignore[arg-type]
            updated_at=model.updated_at,  # type: ignore[arg-type]
            created_by=model.created_by,  # type: ignore[arg-type]
            updated_by=model.updated_by,  # type: ignore[arg-type]
        )

    def _to_model(self, appointment: Appointment) -> AppointmentModel:
        """Convert entity to model."""
        return AppointmentModel(
            id=appointment.id,
            doctor_id=appointment.doctor_id,
            patient_id=appointment.patient_id,
            slot_id=appointment.slot_id,
            reason=appointment.reason,
            status=appointment.status.value,
            created_at=appointment.created_at,
            updated_at=appointment.updated_at,
            created_by=appointment.created_by,
            updated_by=appointment.updated_by,
        )
