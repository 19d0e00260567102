"""
Unit tests for slot creation, authentication and account management use cases.
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from app.config.settings import get_settings
from app.core.domain import (
    AuthenticationException,
    DuplicateEntityException,
    EntityInUseException,
    EntityNotFoundException,
    ValidationException,
)
from app.core.interfaces.transaction import SERIALIZABLE
from app.domains.healthcare.application.use_cases import (
    AuthenticateUseCase,
    CreateSlotRequest,
    CreateSlotUseCase,
    DoctorData,
    DoctorUseCases,
    PatientData,
    PatientUseCases,
    SpecialtyUseCases,
)
from app.domains.healthcare.domain.entities import Doctor, Patient, Specialty
from app.domains.healthcare.domain.value_objects import UserRole
from app.services.token_service import TokenService

NOW = datetime(2030, 1, 1, 9, 0, tzinfo=UTC)


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(get_settings())


@pytest.fixture
def patient_repo():
    repo = MagicMock()
    repo.find_by_email = AsyncMock(return_value=None)
    repo.find_by_id = AsyncMock(return_value=None)
    repo.save = AsyncMock(side_effect=lambda entity: entity)
    repo.has_appointments = AsyncMock(return_value=False)
    repo.delete = AsyncMock()
    return repo


@pytest.fixture
def doctor_repo():
    repo = MagicMock()
    repo.find_by_email = AsyncMock(return_value=None)
    repo.find_by_id = AsyncMock(return_value=None)
    repo.save = AsyncMock(side_effect=lambda entity: entity)
    repo.has_dependents = AsyncMock(return_value=False)
    repo.delete = AsyncMock()
    return repo


# ============================================================================
# CreateSlotUseCase
# ============================================================================


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_slot_runs_in_retried_serializable_tx(inline_tx):
    # Arrange
    availability_repo = MagicMock()
    availability_repo.create_slot = AsyncMock(side_effect=lambda slot: slot)
    use_case = CreateSlotUseCase(availability_repo, inline_tx, clock=lambda: NOW)
    start = NOW + timedelta(days=1)

    # Act
    slot = await use_case.execute(CreateSlotRequest(uuid4(), start, start + timedelta(minutes=30), actor="doc"))

    # Assert
    assert slot.start_time == start
    assert slot.is_reserved is False
    assert inline_tx.calls == [("create_slot", SERIALIZABLE, True)]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_slot_in_the_past_rejected(inline_tx):
    availability_repo = MagicMock()
    availability_repo.create_slot = AsyncMock()
    use_case = CreateSlotUseCase(availability_repo, inline_tx, clock=lambda: NOW)
    start = NOW - timedelta(hours=1)

    with pytest.raises(ValidationException) as exc_info:
        await use_case.execute(CreateSlotRequest(uuid4(), start, start + timedelta(minutes=30)))

    assert exc_info.value.field == "startTime"
    availability_repo.create_slot.assert_not_awaited()


# ============================================================================
# AuthenticateUseCase
# ============================================================================


@pytest.mark.unit
@pytest.mark.asyncio
async def test_authenticate_patient(patient_repo, doctor_repo, token_service):
    """Test patients are matched first and get a PATIENT token with their id."""
    # Arrange
    patient = Patient.register(
        "Laura", "Pérez", "laura@mail.com.ar", token_service.get_password_hash("secreto123"), actor=None
    )
    patient_repo.find_by_email.return_value = patient
    use_case = AuthenticateUseCase(patient_repo, doctor_repo, token_service, get_settings())

    # Act
    account = await use_case.execute("Laura@Mail.com.ar", "secreto123")

    # Assert
    claims = token_service.get_claims(account.token)
    assert claims.role == UserRole.PATIENT
    assert claims.account_id == patient.id
    assert claims.email == "laura@mail.com.ar"
    doctor_repo.find_by_email.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_authenticate_admin(patient_repo, doctor_repo, token_service, admin_credentials):
    use_case = AuthenticateUseCase(patient_repo, doctor_repo, token_service, get_settings())

    account = await use_case.execute(*admin_credentials)

    assert account.role == UserRole.ADMIN
    assert account.account_id is None


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize("email,password", [("laura@mail.com.ar", "incorrecta"), ("nadie@mail.com.ar", "secreto123")])
async def test_authenticate_rejects_bad_credentials(patient_repo, doctor_repo, token_service, email, password):
    """Test wrong password and unknown account fail with the same message."""
    patient_repo.find_by_email.side_effect = lambda e: (
        Patient.register("Laura", "Pérez", e, token_service.get_password_hash("secreto123"), actor=None)
        if e == "laura@mail.com.ar"
        else None
    )
    use_case = AuthenticateUseCase(patient_repo, doctor_repo, token_service, get_settings())

    with pytest.raises(AuthenticationException) as exc_info:
        await use_case.execute(email, password)

    assert exc_info.value.message == "Credenciales inválidas"


# ============================================================================
# PatientUseCases / DoctorUseCases
# ============================================================================


@pytest.mark.unit
@pytest.mark.asyncio
async def test_register_patient_hashes_password(patient_repo, doctor_repo, token_service, inline_tx):
    # Arrange
    use_cases = PatientUseCases(patient_repo, doctor_repo, token_service, inline_tx)

    # Act
    patient = await use_cases.register(
        PatientData("Laura", "Pérez", "LAURA@mail.com.ar", "+5491100000000"), "secreto123"
    )

    # Assert
    assert patient.email == "laura@mail.com.ar"
    assert patient.password_hash != "secreto123"
    assert token_service.verify_password("secreto123", patient.password_hash)
    assert inline_tx.calls == [("register_patient", None, False)]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_register_patient_email_used_by_doctor(patient_repo, doctor_repo, token_service, inline_tx):
    """Test emails are unique across patients and doctors."""
    doctor_repo.find_by_email.return_value = Doctor.create(
        "Ana", "García", "ana@clinica.com.ar", "hash", specialty_id=uuid4(), actor=None
    )
    use_cases = PatientUseCases(patient_repo, doctor_repo, token_service, inline_tx)

    with pytest.raises(DuplicateEntityException):
        await use_cases.register(PatientData("Ana", "García", "ana@clinica.com.ar"), "secreto123")

    patient_repo.save.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_delete_patient_with_appointments(patient_repo, doctor_repo, token_service, inline_tx):
    patient = Patient.register("Laura", "Pérez", "laura@mail.com.ar", "hash", actor=None)
    patient_repo.find_by_id.return_value = patient
    patient_repo.has_appointments.return_value = True
    use_cases = PatientUseCases(patient_repo, doctor_repo, token_service, inline_tx)

    with pytest.raises(EntityInUseException):
        await use_cases.delete(patient.id)

    patient_repo.delete.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_doctor_unknown_specialty(patient_repo, doctor_repo, token_service, inline_tx):
    specialty_repo = MagicMock()
    specialty_repo.exists = AsyncMock(return_value=False)
    use_cases = DoctorUseCases(doctor_repo, patient_repo, specialty_repo, token_service, inline_tx)

    with pytest.raises(EntityNotFoundException) as exc_info:
        await use_cases.create(DoctorData("Ana", "García", "ana@clinica.com.ar", uuid4()), "secreto123", actor="admin")

    assert exc_info.value.entity_type == "Specialty"
    doctor_repo.save.assert_not_awaited()


# ============================================================================
# SpecialtyUseCases
# ============================================================================


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_duplicate_specialty(inline_tx):
    specialty_repo = MagicMock()
    specialty_repo.find_by_name = AsyncMock(return_value=Specialty.create("Cardiología"))
    specialty_repo.save = AsyncMock()
    use_cases = SpecialtyUseCases(specialty_repo, inline_tx)

    with pytest.raises(DuplicateEntityException):
        await use_cases.create("cardiología")

    specialty_repo.save.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_delete_referenced_specialty(inline_tx):
    specialty = Specialty.create("Pediatría")
    specialty_repo = MagicMock()
    specialty_repo.find_by_id = AsyncMock(return_value=specialty)
    specialty_repo.is_referenced = AsyncMock(return_value=True)
    specialty_repo.delete = AsyncMock()
    use_cases = SpecialtyUseCases(specialty_repo, inline_tx)

    with pytest.raises(EntityInUseException):
        await use_cases.delete(specialty.id)

    specialty_repo.delete.assert_not_awaited()
