"""
Patient Use Cases

Self-registration plus admin management of patient accounts.
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from app.core.domain import EntityInUseException, EntityNotFoundException
from app.core.interfaces.transaction import ITransactionManager
from app.domains.healthcare.application.dto import Page, PageRequest
from app.domains.healthcare.application.ports import IDoctorRepository, IPatientRepository
from app.domains.healthcare.application.use_cases.account_rules import ensure_email_available
from app.domains.healthcare.domain.entities import Patient
from app.services.token_service import TokenService

logger = logging.getLogger(__name__)


@dataclass
class PatientData:
    """Editable patient fields."""

    first_name: str
    last_name: str
    email: str
    phone: str | None = None


class PatientUseCases:
    """CRUD operations over patients."""

    def __init__(
        self,
        patient_repository: IPatientRepository,
        doctor_repository: IDoctorRepository,
        token_service: TokenService,
        transaction_manager: ITransactionManager,
    ):
        self.patient_repo = patient_repository
        self.doctor_repo = doctor_repository
        self.token_service = token_service
        self.tx = transaction_manager

    async def list(self, page: PageRequest) -> Page[Patient]:
        return await self.patient_repo.list_paginated(page)

    async def get(self, patient_id: UUID) -> Patient:
        patient = await self.patient_repo.find_by_id(patient_id)
        if not patient:
            raise EntityNotFoundException(entity_type="Patient", entity_id=patient_id)
        return patient

    async def register(self, data: PatientData, password: str, actor: str | None = None) -> Patient:
        """Create a patient account (self-registration when ``actor`` is None)."""
        password_hash = self.token_service.get_password_hash(password)

        async def _register() -> Patient:
            email = await ensure_email_available(data.email, self.patient_repo, self.doctor_repo)
            patient = Patient.register(
                first_name=data.first_name,
                last_name=data.last_name,
                email=email,
                password_hash=password_hash,
                actor=actor,
                phone=data.phone,
            )
            return await self.patient_repo.save(patient)

        patient = await self.tx.run(_register, operation="register_patient", isolation_level=None)
        logger.info(f"Patient registered: {patient.id}")
        return patient

    async def update(self, patient_id: UUID, data: PatientData, actor: str | None) -> Patient:
        async def _update() -> Patient:
            patient = await self.get(patient_id)
            email = await ensure_email_available(data.email, self.patient_repo, self.doctor_repo, exclude_id=patient_id)
            patient.update_contact(data.first_name, data.last_name, email, data.phone, actor=actor)
            return await self.patient_repo.save(patient)

        return await self.tx.run(_update, operation="update_patient", isolation_level=None)

    async def delete(self, patient_id: UUID) -> None:
        async def _delete() -> None:
            await self.get(patient_id)
            if await self.patient_repo.has_appointments(patient_id):
                raise EntityInUseException("Patient", patient_id, "appointments")
            await self.patient_repo.delete(patient_id)

        await self.tx.run(_delete, operation="delete_patient", isolation_level=None)
        logger.info(f"Patient deleted: {patient_id}")
