"""
Unit tests for CancelAppointmentUseCase.
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from app.core.domain import CancellationWindowClosedException, InvalidOperationException
from app.core.interfaces.transaction import SERIALIZABLE
from app.domains.healthcare.application.use_cases import (
    AppointmentNotifier,
    CancelAppointmentRequest,
    CancelAppointmentUseCase,
)
from app.domains.healthcare.domain.entities import Appointment, Doctor, Patient
from app.domains.healthcare.domain.services import CancellationPolicy
from app.domains.healthcare.domain.value_objects import AppointmentStatus

NOW = datetime(2030, 5, 1, 12, 0, tzinfo=UTC)


def _appointment(starts_in: timedelta, status: AppointmentStatus = AppointmentStatus.CONFIRMED) -> Appointment:
    start = NOW + starts_in
    return Appointment(
        id=uuid4(),
        doctor_id=uuid4(),
        patient_id=uuid4(),
        slot_id=uuid4(),
        reason="Control",
        status=status,
        start_time=start,
        end_time=start + timedelta(minutes=30),
    )


@pytest.fixture
def appointment_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock()

    async def _update_state(appointment_id, new_state, actor, expected_state=None):
        current = repo.get_by_id.return_value
        current.status = new_state
        current.updated_by = actor
        return current

    repo.update_state = AsyncMock(side_effect=_update_state)
    return repo


@pytest.fixture
def availability_repo():
    repo = MagicMock()
    repo.release = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def notification_channel():
    channel = MagicMock()
    channel.channel = "email"
    channel.resolve_recipient = MagicMock(side_effect=lambda p: p.email)
    channel.notify = AsyncMock(return_value=None)
    return channel


@pytest.fixture
def use_case(appointment_repo, availability_repo, inline_tx, notification_channel) -> CancelAppointmentUseCase:
    doctor_repo = MagicMock()
    doctor_repo.find_by_id = AsyncMock(
        return_value=Doctor.create("Ana", "García", "ana@clinica.com.ar", "hash", specialty_id=uuid4(), actor=None)
    )
    patient_repo = MagicMock()
    patient_repo.find_by_id = AsyncMock(
        return_value=Patient.register("Laura", "Pérez", "laura@mail.com.ar", "hash", actor=None)
    )
    return CancelAppointmentUseCase(
        appointment_repository=appointment_repo,
        availability_repository=availability_repo,
        doctor_repository=doctor_repo,
        patient_repository=patient_repo,
        transaction_manager=inline_tx,
        policy=CancellationPolicy(window_hours=24, clock=lambda: NOW),
        notifier=AppointmentNotifier(notification_channel),
    )


@pytest.mark.unit
@pytest.mark.asyncio
async def test_cancel_releases_slot(use_case, appointment_repo, availability_repo, inline_tx, notification_channel):
    """Test cancelling 30 hours ahead marks CANCELLED and releases the slot."""
    # Arrange
    appointment = _appointment(timedelta(hours=30))
    appointment_repo.get_by_id.return_value = appointment

    # Act
    result = await use_case.execute(CancelAppointmentRequest(appointment.id, actor="laura@mail.com.ar"))

    # Assert
    assert result.status == AppointmentStatus.CANCELLED
    appointment_repo.update_state.assert_awaited_once_with(
        appointment.id,
        AppointmentStatus.CANCELLED,
        "laura@mail.com.ar",
        expected_state=AppointmentStatus.CONFIRMED,
    )
    availability_repo.release.assert_awaited_once_with(appointment.slot_id, "laura@mail.com.ar")
    assert inline_tx.calls == [("cancel_appointment", SERIALIZABLE, True)]
    _, subject, _ = notification_channel.notify.await_args.args
    assert subject == "Cita Cancelada"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_cancel_inside_window_writes_nothing(use_case, appointment_repo, availability_repo):
    """Test 23h59m before start is rejected without touching state or slot."""
    # Arrange
    appointment_repo.get_by_id.return_value = _appointment(timedelta(hours=23, minutes=59))

    # Act
    with pytest.raises(CancellationWindowClosedException):
        await use_case.execute(CancelAppointmentRequest(uuid4(), actor="laura@mail.com.ar"))

    # Assert
    appointment_repo.update_state.assert_not_awaited()
    availability_repo.release.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_cancel_already_cancelled_leaves_slot(
    use_case, appointment_repo, availability_repo, notification_channel
):
    """Test cancelling a CANCELLED appointment fails and never releases the slot."""
    # Arrange
    appointment_repo.get_by_id.return_value = _appointment(timedelta(hours=48), status=AppointmentStatus.CANCELLED)

    # Act
    with pytest.raises(InvalidOperationException):
        await use_case.execute(CancelAppointmentRequest(uuid4(), actor="laura@mail.com.ar"))

    # Assert
    appointment_repo.update_state.assert_not_awaited()
    availability_repo.release.assert_not_awaited()
    notification_channel.notify.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_cancel_lost_compare_and_set(use_case, appointment_repo, availability_repo):
    """Test a concurrent cancellation (state changed underneath) does not release twice."""
    # Arrange
    appointment_repo.get_by_id.return_value = _appointment(timedelta(hours=48))
    appointment_repo.update_state.side_effect = InvalidOperationException("set_status_cancelled", "CANCELLED")

    # Act
    with pytest.raises(InvalidOperationException):
        await use_case.execute(CancelAppointmentRequest(uuid4(), actor="laura@mail.com.ar"))

    # Assert
    availability_repo.release.assert_not_awaited()
