"""
Doctor Repository Port
"""

from typing import Protocol, runtime_checkable
from uuid import UUID

from app.core.interfaces.repository import IRepository
from app.domains.healthcare.application.dto import Page, PageRequest
from app.domains.healthcare.domain.entities.doctor import Doctor


@runtime_checkable
class IDoctorRepository(IRepository[Doctor, UUID], Protocol):
    """Doctor repository interface."""

    async def find_by_email(self, email: str) -> Doctor | None:
        """Find doctor by (normalized) email."""
        ...

    async def list_paginated(self, page: PageRequest, specialty_id: UUID | None = None) -> Page[Doctor]:
        """Doctors ordered by last name then first name, optionally of one specialty."""
        ...

    async def save(self, doctor: Doctor) -> Doctor:
        """
        Insert or update a doctor.

        Raises:
            DuplicateEntityException: Email already used
        """
        ...

    async def delete(self, doctor_id: UUID) -> None:
        """Delete a doctor that has no dependent records."""
        ...

    async def has_dependents(self, doctor_id: UUID) -> bool:
        """True when the doctor owns slots or appointments."""
        ...
