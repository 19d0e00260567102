"""
Specialty Repository Implementation

SQLAlchemy implementation of ISpecialtyRepository.
"""

from uuid import UUID

from sqlalchemy import delete, exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain import DuplicateEntityException
from app.domains.healthcare.application.ports.specialty_repository import ISpecialtyRepository
from app.domains.healthcare.domain.entities.specialty import Specialty
from app.domains.healthcare.infrastructure.persistence.sqlalchemy.models import DoctorModel, SpecialtyModel


class SQLAlchemySpecialtyRepository(ISpecialtyRepository):
    """SQLAlchemy implementation of specialty repository."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, id: UUID) -> Specialty | None:
        model = await self.session.get(SpecialtyModel, id, populate_existing=True)
        return self._to_entity(model) if model else None

    async def exists(self, id: UUID) -> bool:
        return bool(await self.session.scalar(select(exists().where(SpecialtyModel.id == id))))

    async def find_by_name(self, name: str) -> Specialty | None:
        """Case-insensitive lookup by name."""
        result = await self.session.execute(
            select(SpecialtyModel).where(func.lower(SpecialtyModel.name) == name.strip().lower())
        )
        model = result.scalars().first()
        return self._to_entity(model) if model else None

    async def list_all(self) -> list[Specialty]:
        result = await self.session.execute(select(SpecialtyModel).order_by(SpecialtyModel.name))
        return [self._to_entity(m) for m in result.scalars().all()]

    async def save(self, specialty: Specialty) -> Specialty:
        model = await self.session.get(SpecialtyModel, specialty.id)
        if model:
            model.name = specialty.name  # type: ignore[assignment]
            model.updated_at = specialty.updated_at  # type: ignore[assignment]
        else:
            model = SpecialtyModel(
                id=specialty.id,
                name=specialty.name,
                created_at=specialty.created_at,
                updated_at=specialty.updated_at,
            )
            self.session.add(model)

        try:
            await self.session.flush()
        except IntegrityError as e:
            raise DuplicateEntityException("Specialty", "name", specialty.name) from e

        return self._to_entity(model)

    async def delete(self, specialty_id: UUID) -> None:
        await self.session.execute(delete(SpecialtyModel).where(SpecialtyModel.id == specialty_id))

    async def is_referenced(self, specialty_id: UUID) -> bool:
        """Check whether any doctor belongs to the specialty."""
        return bool(await self.session.scalar(select(exists().where(DoctorModel.specialty_id == specialty_id))))

    def _to_entity(self, model: SpecialtyModel) -> Specialty:
        return Specialty(
            id=model.id,  # type: ignore[arg-type]
            name=model.name,  # type: ignore[arg-type]
            created_at=model.created_at,  # type: ignore[arg-type]
            updated_at=model.updated_at,  # type: ignore[arg-type]
        )
