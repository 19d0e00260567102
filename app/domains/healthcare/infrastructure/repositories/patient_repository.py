"""
Patient Repository Implementation

SQLAlchemy implementation of IPatientRepository.
"""

import logging
from uuid import UUID

from sqlalchemy import delete, exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain import DuplicateEntityException
from app.domains.healthcare.application.dto import Page, PageRequest
from app.domains.healthcare.application.ports.patient_repository import IPatientRepository
from app.domains.healthcare.domain.entities.patient import Patient
from app.domains.healthcare.infrastructure.persistence.sqlalchemy.models import AppointmentModel, PatientModel

logger = logging.getLogger(__name__)


class SQLAlchemyPatientRepository(IPatientRepository):
    """
    SQLAlchemy implementation of patient repository.

    Handles all patient data persistence operations.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, id: UUID) -> Patient | None:
        """Find patient by ID."""
        model = await self.session.get(PatientModel, id, populate_existing=True)
        return self._to_entity(model) if model else None

    async def exists(self, id: UUID) -> bool:
        """Check if patient exists."""
        return bool(await self.session.scalar(select(exists().where(PatientModel.id == id))))

    async def find_by_email(self, email: str) -> Patient | None:
        """Find patient by (normalized) email."""
        result = await self.session.execute(select(PatientModel).where(PatientModel.email == email.lower()))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_paginated(self, page: PageRequest) -> Page[Patient]:
        """Patients ordered by last name, first name."""
        total = await self.session.scalar(select(func.count()).select_from(PatientModel))
        result = await self.session.execute(
            select(PatientModel)
            .order_by(PatientModel.last_name, PatientModel.first_name, PatientModel.id)
            .offset(page.offset)
            .limit(page.size)
        )
        items = [self._to_entity(m) for m in result.scalars().all()]
        return Page(items=items, total=total or 0, page=page.page, size=page.size)

    async def save(self, patient: Patient) -> Patient:
        """Insert or update patient."""
        model = await self.session.get(PatientModel, patient.id)
        if model:
            self._update_model(model, patient)
        else:
            model = self._to_model(patient)
            self.session.add(model)

        try:
            await self.session.flush()
        except IntegrityError as e:
            raise DuplicateEntityException("Account", "email", patient.email) from e

        return self._to_entity(model)

    async def delete(self, patient_id: UUID) -> None:
        """Delete patient."""
        await self.session.execute(delete(PatientModel).where(PatientModel.id == patient_id))

    async def has_appointments(self, patient_id: UUID) -> bool:
        """Check whether any appointment references the patient."""
        return bool(await self.session.scalar(select(exists().where(AppointmentModel.patient_id == patient_id))))

    # Mapping methods

    def _to_entity(self, model: PatientModel) -> Patient:
        """Convert model to entity."""
        return Patient(
            id=model.id,  # type: ignore[arg-type]
            first_name=model.first_name,  # type: ignore[arg-type]
            last_name=model.last_name,  # type: ignore[arg-type]
            email=model.email,  # type: ignore[arg-type]
            phone=model.phone,  # type: ignore[arg-type]
            password_hash=model.password_hash,  # type: ignore[arg-type]
            created_at=model.created_at,  # type: ignore[arg-type]
            updated_at=model.updated_at,  # type: ignore[arg-type]
            created_by=model.created_by,  # type: ignore[arg-type]
            updated_by=model.updated_by,  # type: ignore[arg-type]
        )

    def _to_model(self, patient: Patient) -> PatientModel:
        """Convert entity to model."""
        return PatientModel(
            id=patient.id,
            first_name=patient.first_name,
            last_name=patient.last_name,
            email=patient.email,
            phone=patient.phone,
            password_hash=patient.password_hash,
            created_at=patient.created_at,
            updated_at=patient.updated_at,
            created_by=patient.created_by,
            updated_by=patient.updated_by,
        )

    def _update_model(self, model: PatientModel, patient: Patient) -> None:
        """Update model from entity."""
        model.first_name = patient.first_name  # type: ignore[assignment]
        model.last_name = patient.last_name  # type: ignore[assignment]
        model.email = patient.email  # type: ignore[assignment]
        model.phone = patient.phone  # type: ignore[assignment]
        model.password_hash = patient.password_hash  # type: ignore[assignment]
        model.updated_at = patient.updated_at  # type: ignore[assignment]
        model.updated_by = patient.updated_by  # type: ignore[assignment]
