"""
Patient Entity for Healthcare Domain
"""

from dataclasses import dataclass
from uuid import UUID

from app.core.domain import AuditableEntity, Email, ValidationException, generate_uuid

MAX_PHONE_LENGTH = 20


@dataclass
class Patient(AuditableEntity[UUID]):
    """Patient who books appointments."""

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str | None = None
    password_hash: str = ""

    @classmethod
    def register(
        cls,
        first_name: str,
        last_name: str,
        email: str,
        password_hash: str,
        actor: str | None,
        phone: str | None = None,
    ) -> "Patient":
        patient = cls(id=generate_uuid(), password_hash=password_hash)
        patient.update_contact(first_name, last_name, email, phone, actor=actor)
        patient.set_created_by(actor or patient.email)
        return patient

    def update_contact(
        self,
        first_name: str,
        last_name: str,
        email: str,
        phone: str | None,
        actor: str | None,
    ) -> None:
        if not first_name.strip() or not last_name.strip():
            raise ValidationException("El nombre y el apellido del paciente son obligatorios.", field="firstName")
        if phone and len(phone) > MAX_PHONE_LENGTH:
            raise ValidationException(
                f"El teléfono no puede exceder los {MAX_PHONE_LENGTH} caracteres.", field="phone"
            )
        try:
            self.email = str(Email(email))
        except ValueError as e:
            raise ValidationException("El email debe tener un formato válido.", field="email") from e
        self.first_name = first_name.strip()
        self.last_name = last_name.strip()
        self.phone = phone or None
        self.set_updated_by(actor)

    @property
    def full_name(self) -> str:
        """Get patient's full name."""
        return f"{self.first_name} {self.last_name}"
