"""
Specialty Repository Port
"""

from typing import Protocol, runtime_checkable
from uuid import UUID

from app.core.interfaces.repository import IRepository
from app.domains.healthcare.domain.entities.specialty import Specialty


@runtime_checkable
class ISpecialtyRepository(IRepository[Specialty, UUID], Protocol):
    """Specialty repository interface."""

    async def find_by_name(self, name: str) -> Specialty | None:
        ...

    async def list_all(self) -> list[Specialty]:
        """All specialties ordered by name."""
        ...

    async def save(self, specialty: Specialty) -> Specialty:
        """
        Insert or update a specialty.

        Raises:
            DuplicateEntityException: Name already used
        """
        ...

    async def delete(self, specialty_id: UUID) -> None:
        ...

    async def is_referenced(self, specialty_id: UUID) -> bool:
        """True when at least one doctor has this specialty."""
        ...
