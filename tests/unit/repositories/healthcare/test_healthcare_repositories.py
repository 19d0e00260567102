"""
Unit tests for Healthcare Domain Repositories.

Tests the data access layer mapping and error translation with a mocked
session; behaviour against a real database lives in tests/integration.
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain import DuplicateEntityException, SlotUnavailableException
from app.domains.healthcare.domain.entities import Appointment, AvailabilitySlot, Doctor
from app.domains.healthcare.infrastructure.repositories.appointment_repository import (
    SQLAlchemyAppointmentRepository,
)
from app.domains.healthcare.infrastructure.repositories.availability_repository import (
    SQLAlchemyAvailabilityRepository,
)
from app.domains.healthcare.infrastructure.repositories.doctor_repository import (
    SQLAlchemyDoctorRepository,
)

# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def mock_async_session():
    """Create a mock async database session."""
    session = AsyncMock(spec=AsyncSession)
    session.execute = AsyncMock()
    session.scalar = AsyncMock()
    session.flush = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_doctor_model():
    """Sample SQLAlchemy doctor model."""
    now = datetime(2030, 1, 1, 12, 0, tzinfo=UTC)
    model = MagicMock()
    model.id = uuid4()
    model.first_name = "Ana"
    model.last_name = "García"
    model.email = "ana@clinica.com.ar"
    model.password_hash = "hash"
    model.specialty_id = uuid4()
    model.specialty.name = "Cardiología"
    model.profile_photo_url = None
    model.biography = "Cardióloga"
    model.created_at = now
    model.updated_at = now
    model.created_by = "admin@clinica.com.ar"
    model.updated_by = None
    return model


def _result_with(model):
    result = MagicMock()
    result.unique.return_value.scalar_one_or_none.return_value = model
    return result


def _integrity_error() -> IntegrityError:
    return IntegrityError("INSERT ...", {}, Exception("UNIQUE constraint failed"))


# ============================================================================
# DOCTOR REPOSITORY
# ============================================================================


@pytest.mark.repository
@pytest.mark.asyncio
async def test_doctor_find_by_id_success(mock_async_session, sample_doctor_model):
    """Test doctor is mapped with the joined specialty name."""
    # Arrange
    mock_async_session.execute.return_value = _result_with(sample_doctor_model)
    repo = SQLAlchemyDoctorRepository(mock_async_session)

    # Act
    doctor = await repo.find_by_id(sample_doctor_model.id)

    # Assert
    assert doctor is not None
    assert doctor.id == sample_doctor_model.id
    assert doctor.specialty_name == "Cardiología"
    assert doctor.created_by == "admin@clinica.com.ar"


@pytest.mark.repository
@pytest.mark.asyncio
async def test_doctor_find_by_id_not_found(mock_async_session):
    mock_async_session.execute.return_value = _result_with(None)
    repo = SQLAlchemyDoctorRepository(mock_async_session)

    assert await repo.find_by_id(uuid4()) is None


@pytest.mark.repository
@pytest.mark.asyncio
async def test_doctor_exists(mock_async_session):
    mock_async_session.scalar.return_value = True
    repo = SQLAlchemyDoctorRepository(mock_async_session)

    assert await repo.exists(uuid4()) is True


@pytest.mark.repository
@pytest.mark.asyncio
async def test_doctor_save_duplicate_email(mock_async_session):
    """Test a unique violation on insert becomes DuplicateEntityException."""
    # Arrange
    mock_async_session.execute.return_value = _result_with(None)
    mock_async_session.flush.side_effect = _integrity_error()
    repo = SQLAlchemyDoctorRepository(mock_async_session)
    doctor = Doctor.create("Ana", "García", "ana@clinica.com.ar", "hash", specialty_id=uuid4(), actor=None)

    # Act / Assert
    with pytest.raises(DuplicateEntityException):
        await repo.save(doctor)
    mock_async_session.add.assert_called_once()


# ============================================================================
# AVAILABILITY REPOSITORY
# ============================================================================


@pytest.mark.repository
@pytest.mark.asyncio
async def test_reserve_with_no_affected_rows(mock_async_session):
    """Test reserve raises when the conditional update matched nothing."""
    mock_async_session.execute.return_value = MagicMock(rowcount=0)
    repo = SQLAlchemyAvailabilityRepository(mock_async_session)

    with pytest.raises(SlotUnavailableException):
        await repo.reserve(uuid4(), "laura@mail.com.ar")


@pytest.mark.repository
@pytest.mark.asyncio
async def test_reserve_success(mock_async_session):
    mock_async_session.execute.return_value = MagicMock(rowcount=1)
    repo = SQLAlchemyAvailabilityRepository(mock_async_session)

    await repo.reserve(uuid4(), "laura@mail.com.ar")

    mock_async_session.execute.assert_awaited_once()


@pytest.mark.repository
@pytest.mark.asyncio
async def test_release_of_free_slot_is_noop(mock_async_session):
    mock_async_session.execute.return_value = MagicMock(rowcount=0)
    repo = SQLAlchemyAvailabilityRepository(mock_async_session)

    assert await repo.release(uuid4(), None) is False


# ============================================================================
# APPOINTMENT REPOSITORY
# ============================================================================


@pytest.mark.repository
@pytest.mark.asyncio
async def test_appointment_create_on_taken_slot(mock_async_session):
    """Test the active-slot unique index violation becomes SlotUnavailableException."""
    # Arrange
    start = datetime(2030, 5, 6, 10, 0, tzinfo=UTC)
    slot = AvailabilitySlot.open(uuid4(), start, start + timedelta(minutes=30), actor=None)
    appointment = Appointment.book(slot.doctor_id, uuid4(), slot, reason=None, actor=None)
    mock_async_session.flush.side_effect = _integrity_error()
    repo = SQLAlchemyAppointmentRepository(mock_async_session)

    # Act / Assert
    with pytest.raises(SlotUnavailableException) as exc_info:
        await repo.create(appointment)

    assert exc_info.value.code == "SLOT_UNAVAILABLE"
