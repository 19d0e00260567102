"""
Doctor Entity for Healthcare Domain

Represents a doctor who publishes availability slots.
"""

from dataclasses import dataclass
from uuid import UUID

from app.core.domain import AuditableEntity, Email, ValidationException, generate_uuid


@dataclass
class Doctor(AuditableEntity[UUID]):
    """
    Doctor entity.

    Example:
        ```python
        doctor = Doctor.create(
            first_name="Ana",
            last_name="García",
            email="ana.garcia@clinica.com",
            password_hash=hasher.hash("secreto123"),
            specialty_id=cardiology.id,
            actor="admin@clinica.com",
        )
        ```
    """

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    password_hash: str = ""
    specialty_id: UUID | None = None
    specialty_name: str | None = None
    profile_photo_url: str | None = None
    biography: str | None = None

    @classmethod
    def create(
        cls,
        first_name: str,
        last_name: str,
        email: str,
        password_hash: str,
        specialty_id: UUID,
        actor: str | None,
        profile_photo_url: str | None = None,
        biography: str | None = None,
    ) -> "Doctor":
        doctor = cls(id=generate_uuid(), password_hash=password_hash)
        doctor.update_profile(
            first_name=first_name,
            last_name=last_name,
            email=email,
            specialty_id=specialty_id,
            profile_photo_url=profile_photo_url,
            biography=biography,
            actor=actor,
        )
        doctor.set_created_by(actor)
        return doctor

    def update_profile(
        self,
        first_name: str,
        last_name: str,
        email: str,
        specialty_id: UUID,
        actor: str | None,
        profile_photo_url: str | None = None,
        biography: str | None = None,
    ) -> None:
        if not first_name.strip() or not last_name.strip():
            raise ValidationException("El nombre y el apellido del doctor son obligatorios.", field="firstName")
        try:
            self.email = str(Email(email))
        except ValueError as e:
            raise ValidationException("El email debe tener un formato válido.", field="email") from e
        self.first_name = first_name.strip()
        self.last_name = last_name.strip()
        self.specialty_id = specialty_id
        self.profile_photo_url = profile_photo_url
        self.biography = biography
        self.set_updated_by(actor)

    @property
    def full_name(self) -> str:
        """Get doctor's full name."""
        return f"{self.first_name} {self.last_name}"

    @property
    def display_name(self) -> str:
        """Name with the honorific used in patient messages."""
        return f"Dr./Dra. {self.full_name}"
