"""User roles recognised by the API."""

from app.core.domain.value_objects import StatusEnum


class UserRole(StatusEnum):
    """Rol de la cuenta autenticada."""

    PATIENT = "PATIENT"
    DOCTOR = "DOCTOR"
    ADMIN = "ADMIN"
