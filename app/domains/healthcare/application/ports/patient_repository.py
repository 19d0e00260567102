"""
Patient Repository Port
"""

from typing import Protocol, runtime_checkable
from uuid import UUID

from app.core.interfaces.repository import IRepository
from app.domains.healthcare.application.dto import Page, PageRequest
from app.domains.healthcare.domain.entities.patient import Patient


@runtime_checkable
class IPatientRepository(IRepository[Patient, UUID], Protocol):
    """Patient repository interface."""

    async def find_by_email(self, email: str) -> Patient | None:
        """Find patient by (normalized) email."""
        ...

    async def list_paginated(self, page: PageRequest) -> Page[Patient]:
        """Patients ordered by last name then first name."""
        ...

    async def save(self, patient: Patient) -> Patient:
        """
        Insert or update a patient.

        Raises:
            DuplicateEntityException: Email already used
        """
        ...

    async def delete(self, patient_id: UUID) -> None:
        """Delete a patient that has no appointments."""
        ...

    async def has_appointments(self, patient_id: UUID) -> bool:
        ...
