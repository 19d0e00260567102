"""
Unit tests for BookAppointmentUseCase.

Repositories are AsyncMocks; the transaction manager runs the unit of work
inline so the step order can be asserted.
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from app.core.domain import EntityNotFoundException, NotificationException, SlotUnavailableException
from app.core.interfaces.transaction import SERIALIZABLE
from app.domains.healthcare.application.use_cases import (
    AppointmentNotifier,
    BookAppointmentRequest,
    BookAppointmentUseCase,
)
from app.domains.healthcare.domain.entities import AvailabilitySlot, Doctor, Patient
from app.domains.healthcare.domain.value_objects import AppointmentStatus

START = datetime(2030, 5, 6, 10, 0, tzinfo=UTC)


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def doctor() -> Doctor:
    return Doctor.create("Ana", "García", "ana@clinica.com.ar", "hash", specialty_id=uuid4(), actor="admin")


@pytest.fixture
def patient() -> Patient:
    return Patient.register("Laura", "Pérez", "laura@mail.com.ar", "hash", actor=None)


@pytest.fixture
def slot(doctor) -> AvailabilitySlot:
    return AvailabilitySlot.open(doctor.id, START, START + timedelta(minutes=30), actor=doctor.email)


@pytest.fixture
def repositories(doctor, patient, slot):
    doctor_repo = MagicMock()
    doctor_repo.find_by_id = AsyncMock(return_value=doctor)
    patient_repo = MagicMock()
    patient_repo.find_by_id = AsyncMock(return_value=patient)
    availability_repo = MagicMock()
    availability_repo.get_available_slot = AsyncMock(return_value=slot)
    availability_repo.reserve = AsyncMock(return_value=None)
    appointment_repo = MagicMock()
    appointment_repo.create = AsyncMock(side_effect=lambda appointment: appointment)
    return doctor_repo, patient_repo, availability_repo, appointment_repo


@pytest.fixture
def notification_channel():
    channel = MagicMock()
    channel.channel = "email"
    channel.resolve_recipient = MagicMock(side_effect=lambda p: p.email)
    channel.notify = AsyncMock(return_value=None)
    return channel


@pytest.fixture
def use_case(repositories, inline_tx, notification_channel) -> BookAppointmentUseCase:
    doctor_repo, patient_repo, availability_repo, appointment_repo = repositories
    return BookAppointmentUseCase(
        doctor_repository=doctor_repo,
        patient_repository=patient_repo,
        availability_repository=availability_repo,
        appointment_repository=appointment_repo,
        transaction_manager=inline_tx,
        notifier=AppointmentNotifier(notification_channel),
    )


def _request(doctor, patient, slot, **overrides) -> BookAppointmentRequest:
    data = {
        "doctor_id": doctor.id,
        "patient_id": patient.id,
        "slot_id": slot.id,
        "reason": "Dolor de cabeza",
        "actor": patient.email,
    }
    data.update(overrides)
    return BookAppointmentRequest(**data)


# ============================================================================
# TESTS
# ============================================================================


@pytest.mark.unit
@pytest.mark.asyncio
async def test_book_success(use_case, repositories, inline_tx, notification_channel, doctor, patient, slot):
    """Test successful booking reserves the slot inside one serializable transaction."""
    # Arrange
    _, _, availability_repo, appointment_repo = repositories

    # Act
    appointment = await use_case.execute(_request(doctor, patient, slot))

    # Assert
    assert appointment.status == AppointmentStatus.CONFIRMED
    assert appointment.slot_id == slot.id
    assert appointment.start_time == START
    assert appointment.created_by == patient.email
    availability_repo.reserve.assert_awaited_once_with(slot.id, patient.email)
    appointment_repo.create.assert_awaited_once()
    assert inline_tx.calls == [("book_appointment", SERIALIZABLE, False)]
    notification_channel.notify.assert_awaited_once()
    recipient, subject, body = notification_channel.notify.await_args.args
    assert recipient == patient.email
    assert subject == "Cita Confirmada"
    assert "Dr./Dra. Ana García" in body
    assert "2030-05-06T10:00:00Z" in body


@pytest.mark.unit
@pytest.mark.asyncio
async def test_book_unknown_doctor(use_case, repositories, doctor, patient, slot):
    """Test booking with an unknown doctor never touches the slot."""
    # Arrange
    doctor_repo, _, availability_repo, _ = repositories
    doctor_repo.find_by_id.return_value = None

    # Act
    with pytest.raises(EntityNotFoundException) as exc_info:
        await use_case.execute(_request(doctor, patient, slot))

    # Assert
    assert exc_info.value.entity_type == "Doctor"
    availability_repo.get_available_slot.assert_not_awaited()
    availability_repo.reserve.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_book_unknown_patient(use_case, repositories, doctor, patient, slot):
    _, patient_repo, availability_repo, _ = repositories
    patient_repo.find_by_id.return_value = None

    with pytest.raises(EntityNotFoundException) as exc_info:
        await use_case.execute(_request(doctor, patient, slot))

    assert exc_info.value.entity_type == "Patient"
    availability_repo.reserve.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_book_slot_of_another_doctor(use_case, repositories, notification_channel, patient, slot):
    """Test slot/doctor mismatch is a conflict and the slot is never reserved."""
    # Arrange
    _, _, availability_repo, appointment_repo = repositories
    other_doctor = Doctor.create("Juan", "López", "juan@clinica.com.ar", "hash", specialty_id=uuid4(), actor="admin")
    repositories[0].find_by_id.return_value = other_doctor

    # Act
    with pytest.raises(SlotUnavailableException) as exc_info:
        await use_case.execute(_request(other_doctor, patient, slot))

    # Assert
    assert exc_info.value.code == "SLOT_UNAVAILABLE"
    availability_repo.reserve.assert_not_awaited()
    appointment_repo.create.assert_not_awaited()
    notification_channel.notify.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_book_lost_reservation_race(use_case, repositories, notification_channel, doctor, patient, slot):
    """Test a failed reserve stops the booking: no appointment, no notification."""
    # Arrange
    _, _, availability_repo, appointment_repo = repositories
    availability_repo.reserve.side_effect = SlotUnavailableException(slot_id=slot.id)

    # Act
    with pytest.raises(SlotUnavailableException):
        await use_case.execute(_request(doctor, patient, slot))

    # Assert
    appointment_repo.create.assert_not_awaited()
    notification_channel.notify.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_book_slot_missing_or_reserved(use_case, repositories, doctor, patient, slot):
    _, _, availability_repo, _ = repositories
    availability_repo.get_available_slot.side_effect = EntityNotFoundException("AvailabilitySlot", slot.id)

    with pytest.raises(EntityNotFoundException):
        await use_case.execute(_request(doctor, patient, slot))

    availability_repo.reserve.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_book_survives_notification_failure(use_case, notification_channel, doctor, patient, slot):
    """Test a failing notification channel does not undo the booking."""
    # Arrange
    notification_channel.notify.side_effect = NotificationException("email", "SMTP caído")

    # Act
    appointment = await use_case.execute(_request(doctor, patient, slot))

    # Assert
    assert appointment.status == AppointmentStatus.CONFIRMED
    notification_channel.notify.assert_awaited_once()
