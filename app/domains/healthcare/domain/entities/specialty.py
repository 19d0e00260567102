"""
Specialty Entity for Healthcare Domain
"""

from dataclasses import dataclass
from uuid import UUID

from app.core.domain import Entity, ValidationException, generate_uuid

MAX_NAME_LENGTH = 100


@dataclass
class Specialty(Entity[UUID]):
    """Medical specialty referenced by doctors (name is unique)."""

    name: str = ""

    @classmethod
    def create(cls, name: str) -> "Specialty":
        specialty = cls(id=generate_uuid())
        specialty.rename(name)
        return specialty

    def rename(self, name: str) -> None:
        name = (name or "").strip()
        if not name:
            raise ValidationException("El nombre de la especialidad no puede estar vacío.", field="name")
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationException(
                f"El nombre de la especialidad no puede exceder los {MAX_NAME_LENGTH} caracteres.", field="name"
            )
        self.name = name
        self.touch()
