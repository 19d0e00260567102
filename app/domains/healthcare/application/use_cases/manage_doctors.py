"""
Doctor Use Cases

Admin-managed doctor accounts with a public, paginated directory.
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from app.core.domain import EntityInUseException, EntityNotFoundException
from app.core.interfaces.transaction import ITransactionManager
from app.domains.healthcare.application.dto import Page, PageRequest
from app.domains.healthcare.application.ports import IDoctorRepository, IPatientRepository, ISpecialtyRepository
from app.domains.healthcare.application.use_cases.account_rules import ensure_email_available
from app.domains.healthcare.domain.entities import Doctor
from app.services.token_service import TokenService

logger = logging.getLogger(__name__)


@dataclass
class DoctorData:
    """Editable doctor fields."""

    first_name: str
    last_name: str
    email: str
    specialty_id: UUID
    profile_photo_url: str | None = None
    biography: str | None = None


class DoctorUseCases:
    """CRUD operations over doctors."""

    def __init__(
        self,
        doctor_repository: IDoctorRepository,
        patient_repository: IPatientRepository,
        specialty_repository: ISpecialtyRepository,
        token_service: TokenService,
        transaction_manager: ITransactionManager,
    ):
        self.doctor_repo = doctor_repository
        self.patient_repo = patient_repository
        self.specialty_repo = specialty_repository
        self.token_service = token_service
        self.tx = transaction_manager

    async def list(self, page: PageRequest, specialty_id: UUID | None = None) -> Page[Doctor]:
        return await self.doctor_repo.list_paginated(page, specialty_id=specialty_id)

    async def get(self, doctor_id: UUID) -> Doctor:
        doctor = await self.doctor_repo.find_by_id(doctor_id)
        if not doctor:
            raise EntityNotFoundException(entity_type="Doctor", entity_id=doctor_id)
        return doctor

    async def create(self, data: DoctorData, password: str, actor: str | None) -> Doctor:
        password_hash = self.token_service.get_password_hash(password)

        async def _create() -> Doctor:
            await self._ensure_specialty(data.specialty_id)
            email = await ensure_email_available(data.email, self.patient_repo, self.doctor_repo)
            doctor = Doctor.create(
                first_name=data.first_name,
                last_name=data.last_name,
                email=email,
                password_hash=password_hash,
                specialty_id=data.specialty_id,
                actor=actor,
                profile_photo_url=data.profile_photo_url,
                biography=data.biography,
            )
            return await self.doctor_repo.save(doctor)

        doctor = await self.tx.run(_create, operation="create_doctor", isolation_level=None)
        logger.info(f"Doctor created: {doctor.id} by {actor}")
        return doctor

    async def update(self, doctor_id: UUID, data: DoctorData, actor: str | None) -> Doctor:
        async def _update() -> Doctor:
            doctor = await self.get(doctor_id)
            await self._ensure_specialty(data.specialty_id)
            email = await ensure_email_available(data.email, self.patient_repo, self.doctor_repo, exclude_id=doctor_id)
            doctor.update_profile(
                first_name=data.first_name,
                last_name=data.last_name,
                email=email,
                specialty_id=data.specialty_id,
                actor=actor,
                profile_photo_url=data.profile_photo_url,
                biography=data.biography,
            )
            return await self.doctor_repo.save(doctor)

        return await self.tx.run(_update, operation="update_doctor", isolation_level=None)

    async def delete(self, doctor_id: UUID) -> None:
        async def _delete() -> None:
            await self.get(doctor_id)
            if await self.doctor_repo.has_dependents(doctor_id):
                raise EntityInUseException("Doctor", doctor_id, "availability slots or appointments")
            await self.doctor_repo.delete(doctor_id)

        await self.tx.run(_delete, operation="delete_doctor", isolation_level=None)
        logger.info(f"Doctor deleted: {doctor_id}")

    async def _ensure_specialty(self, specialty_id: UUID) -> None:
        if not await self.specialty_repo.exists(specialty_id):
            raise EntityNotFoundException(entity_type="Specialty", entity_id=specialty_id)
