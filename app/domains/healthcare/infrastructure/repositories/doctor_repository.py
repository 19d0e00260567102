"""
Doctor Repository Implementation

SQLAlchemy implementation of IDoctorRepository.
"""

import logging
from uuid import UUID

from sqlalchemy import delete, exists, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain import DuplicateEntityException
from app.domains.healthcare.application.dto import Page, PageRequest
from app.domains.healthcare.application.ports.doctor_repository import IDoctorRepository
from app.domains.healthcare.domain.entities.doctor import Doctor
from app.domains.healthcare.infrastructure.persistence.sqlalchemy.models import (
    AppointmentModel,
    AvailabilitySlotModel,
    DoctorModel,
)

logger = logging.getLogger(__name__)


class SQLAlchemyDoctorRepository(IDoctorRepository):
    """
    SQLAlchemy implementation of doctor repository.

    Handles all doctor data persistence operations.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _get_model(self, doctor_id: UUID) -> DoctorModel | None:
        result = await self.session.execute(
            select(DoctorModel).where(DoctorModel.id == doctor_id).execution_options(populate_existing=True)
        )
        return result.unique().scalar_one_or_none()

    async def find_by_id(self, id: UUID) -> Doctor | None:
        """Find doctor by ID."""
        model = await self._get_model(id)
        return self._to_entity(model) if model else None

    async def exists(self, id: UUID) -> bool:
        """Check if doctor exists."""
        return bool(await self.session.scalar(select(exists().where(DoctorModel.id == id))))

    async def find_by_email(self, email: str) -> Doctor | None:
        """Find doctor by (normalized) email."""
        result = await self.session.execute(select(DoctorModel).where(DoctorModel.email == email.lower()))
        model = result.unique().scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_paginated(self, page: PageRequest, specialty_id: UUID | None = None) -> Page[Doctor]:
        """Doctors ordered by last name, first name."""
        count_query = select(func.count()).select_from(DoctorModel)
        query = select(DoctorModel)
        if specialty_id:
            count_query = count_query.where(DoctorModel.specialty_id == specialty_id)
            query = query.where(DoctorModel.specialty_id == specialty_id)

        total = await self.session.scalar(count_query)
        result = await self.session.execute(
            query.order_by(DoctorModel.last_name, DoctorModel.first_name, DoctorModel.id)
            .offset(page.offset)
            .limit(page.size)
        )
        items = [self._to_entity(m) for m in result.unique().scalars().all()]
        return Page(items=items, total=total or 0, page=page.page, size=page.size)

    async def save(self, doctor: Doctor) -> Doctor:
        """Insert or update doctor."""
        model = await self._get_model(doctor.id)
        if model:
            self._update_model(model, doctor)
        else:
            self.session.add(self._to_model(doctor))

        try:
            await self.session.flush()
        except IntegrityError as e:
            raise DuplicateEntityException("Account", "email", doctor.email) from e

        saved = await self.find_by_id(doctor.id)
        if saved is None:
            raise RuntimeError(f"Doctor {doctor.id} vanished after flush")
        return saved

    async def delete(self, doctor_id: UUID) -> None:
        """Delete doctor."""
        await self.session.execute(delete(DoctorModel).where(DoctorModel.id == doctor_id))

    async def has_dependents(self, doctor_id: UUID) -> bool:
        """Check whether any slot or appointment references the doctor."""
        return bool(
            await self.session.scalar(
                select(
                    or_(
                        exists().where(AvailabilitySlotModel.doctor_id == doctor_id),
                        exists().where(AppointmentModel.doctor_id == doctor_id),
                    )
                )
            )
        )

    # Mapping methods

    def _to_entity(self, model: DoctorModel) -> Doctor:
        """Convert model to entity."""
        return Doctor(
            id=model.id,  # type: ignore[arg-type]
            first_name=model.first_name,  # type: ignore[arg-type]
            last_name=model.last_name,  # type: ignore[arg-type]
            email=model.email,  # type: ignore[arg-type]
            password_hash=model.password_hash,  # type: ignore[arg-type]
            specialty_id=model.specialty_id,  # type: ignore[arg-type]
            specialty_name=model.specialty.name if model.specialty else None,
            profile_photo_url=model.profile_photo_url,  # type: ignore[arg-type]
            biography=model.biography,  # type: ignore[arg-type]
            created_at=model.created_at,  # type: ignore[arg-type]
            updated_at=model.updated_at,  # type: ignore[arg-type]
            created_by=model.created_by,  # type: ignore[arg-type]
            updated_by=model.updated_by,  # type: ignore[arg-type]
        )

    def _to_model(self, doctor: Doctor) -> DoctorModel:
        """Convert entity to model."""
        return DoctorModel(
            id=doctor.id,
            first_name=doctor.first_name,
            last_name=doctor.last_name,
            email=doctor.email,
            password_hash=doctor.password_hash,
            specialty_id=doctor.specialty_id,
            profile_photo_url=doctor.profile_photo_url,
            biography=doctor.biography,
            created_at=doctor.created_at,
            updated_at=doctor.updated_at,
            created_by=doctor.created_by,
            updated_by=doctor.updated_by,
        )

    def _update_model(self, model: DoctorModel, doctor: Doctor) -> None:
        """Update model from entity."""
        model.first_name = doctor.first_name  # type: ignore[assignment]
        model.last_name = doctor.last_name  # type: ignore[assignment]
        model.email = doctor.email  # type: ignore[assignment]
        model.password_hash = doctor.password_hash  # type: ignore[assignment]
        model.specialty_id = doctor.specialty_id  # type: ignore[assignment]
        model.profile_photo_url = doctor.profile_photo_url  # type: ignore[assignment]
        model.biography = doctor.biography  # type: ignore[assignment]
        model.updated_at = doctor.updated_at  # type: ignore[assignment]
        model.updated_by = doctor.updated_by  # type: ignore[assignment]
