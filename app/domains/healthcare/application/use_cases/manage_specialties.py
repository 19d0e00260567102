"""
Specialty Use Cases

Catalogue of medical specialties (admin managed, publicly listed).
"""

import logging
from uuid import UUID

from app.core.domain import DuplicateEntityException, EntityInUseException, EntityNotFoundException
from app.core.interfaces.transaction import ITransactionManager
from app.domains.healthcare.application.ports import ISpecialtyRepository
from app.domains.healthcare.domain.entities import Specialty

logger = logging.getLogger(__name__)


class SpecialtyUseCases:
    """
    CRUD operations over specialties.

    Names are unique (case-insensitive); a specialty referenced by any doctor
    cannot be deleted.
    """

    def __init__(self, specialty_repository: ISpecialtyRepository, transaction_manager: ITransactionManager):
        self.specialty_repo = specialty_repository
        self.tx = transaction_manager

    async def list_all(self) -> list[Specialty]:
        return await self.specialty_repo.list_all()

    async def get(self, specialty_id: UUID) -> Specialty:
        specialty = await self.specialty_repo.find_by_id(specialty_id)
        if not specialty:
            raise EntityNotFoundException(entity_type="Specialty", entity_id=specialty_id)
        return specialty

    async def create(self, name: str) -> Specialty:
        specialty = Specialty.create(name)

        async def _create() -> Specialty:
            await self._ensure_name_free(specialty.name)
            return await self.specialty_repo.save(specialty)

        created = await self.tx.run(_create, operation="create_specialty", isolation_level=None)
        logger.info(f"Specialty created: {created.id} ({created.name})")
        return created

    async def update(self, specialty_id: UUID, name: str) -> Specialty:
        async def _update() -> Specialty:
            specialty = await self.get(specialty_id)
            specialty.rename(name)
            await self._ensure_name_free(specialty.name, exclude_id=specialty.id)
            return await self.specialty_repo.save(specialty)

        return await self.tx.run(_update, operation="update_specialty", isolation_level=None)

    async def delete(self, specialty_id: UUID) -> None:
        async def _delete() -> None:
            await self.get(specialty_id)
            if await self.specialty_repo.is_referenced(specialty_id):
                raise EntityInUseException("Specialty", specialty_id, "doctors")
            await self.specialty_repo.delete(specialty_id)

        await self.tx.run(_delete, operation="delete_specialty", isolation_level=None)
        logger.info(f"Specialty deleted: {specialty_id}")

    async def _ensure_name_free(self, name: str, exclude_id: UUID | None = None) -> None:
        existing = await self.specialty_repo.find_by_name(name)
        if existing and existing.id != exclude_id:
            raise DuplicateEntityException("Specialty", "name", name)
