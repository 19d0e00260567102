"""
Rules shared by patient and doctor accounts.
"""

from uuid import UUID

from app.core.domain import DuplicateEntityException, Email, ValidationException
from app.domains.healthcare.application.ports import IDoctorRepository, IPatientRepository


async def ensure_email_available(
    email: str,
    patient_repository: IPatientRepository,
    doctor_repository: IDoctorRepository,
    exclude_id: UUID | None = None,
) -> str:
    """
    Normalize ``email`` and check no other patient or doctor uses it.

    Login looks accounts up by email across both tables, so the address must
    be unique across them.

    Returns:
        The normalized email
    """
    try:
        normalized = str(Email(email))
    except ValueError as e:
        raise ValidationException("El email debe tener un formato válido.", field="email") from e

    patient = await patient_repository.find_by_email(normalized)
    if patient and patient.id != exclude_id:
        raise DuplicateEntityException("Account", "email", normalized)
    doctor = await doctor_repository.find_by_email(normalized)
    if doctor and doctor.id != exclude_id:
        raise DuplicateEntityException("Account", "email", normalized)
    return normalized
