"""
Unit tests for the cancellation policy.

The window is measured in whole hours truncated toward zero, so the boundary
is checked to the minute with an injected clock.
"""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from app.core.domain import CancellationWindowClosedException, InvalidOperationException
from app.domains.healthcare.domain.entities import Appointment
from app.domains.healthcare.domain.services import CancellationPolicy
from app.domains.healthcare.domain.services.cancellation_policy import whole_hours_between
from app.domains.healthcare.domain.value_objects import AppointmentStatus

NOW = datetime(2025, 3, 10, 8, 0, tzinfo=UTC)


def _appointment(starts_in: timedelta, status: AppointmentStatus = AppointmentStatus.CONFIRMED) -> Appointment:
    start = NOW + starts_in
    return Appointment(
        id=uuid4(),
        doctor_id=uuid4(),
        patient_id=uuid4(),
        slot_id=uuid4(),
        status=status,
        start_time=start,
        end_time=start + timedelta(minutes=30),
    )


@pytest.fixture
def policy() -> CancellationPolicy:
    return CancellationPolicy(window_hours=24, clock=lambda: NOW)


# ============================================================================
# whole_hours_between
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "delta,expected",
    [
        (timedelta(hours=24), 24),
        (timedelta(hours=23, minutes=59, seconds=59), 23),
        (timedelta(minutes=59), 0),
        (timedelta(0), 0),
        (timedelta(hours=-1, minutes=-30), -1),
    ],
)
def test_whole_hours_truncates_toward_zero(delta, expected):
    assert whole_hours_between(NOW, NOW + delta) == expected


# ============================================================================
# ensure_can_cancel
# ============================================================================


@pytest.mark.unit
def test_cancel_allowed_exactly_24_hours_before(policy):
    """24h0m before the start is still inside the policy."""
    # Arrange
    appointment = _appointment(timedelta(hours=24))

    # Act / Assert (no exception)
    policy.ensure_can_cancel(appointment)


@pytest.mark.unit
def test_cancel_rejected_23_hours_59_minutes_before(policy):
    """23h59m counts as 23 whole hours and is rejected."""
    # Arrange
    appointment = _appointment(timedelta(hours=23, minutes=59))

    # Act
    with pytest.raises(CancellationWindowClosedException) as exc_info:
        policy.ensure_can_cancel(appointment)

    # Assert
    assert exc_info.value.remaining_hours == 23
    assert exc_info.value.code == "APPOINTMENT_CANCELLATION_WINDOW_CLOSED"
    assert exc_info.value.details["detail"] == "Horas restantes: 23"


@pytest.mark.unit
def test_cancel_rejected_after_start(policy):
    appointment = _appointment(timedelta(hours=-2))

    with pytest.raises(CancellationWindowClosedException) as exc_info:
        policy.ensure_can_cancel(appointment)

    assert exc_info.value.remaining_hours == -2


@pytest.mark.unit
def test_cancel_allowed_well_ahead(policy):
    policy.ensure_can_cancel(_appointment(timedelta(hours=30)))


@pytest.mark.unit
@pytest.mark.parametrize("status", [AppointmentStatus.CANCELLED, AppointmentStatus.COMPLETED])
def test_cancel_rejected_for_terminal_states(policy, status):
    """Terminal states fail with an invalid operation, before the window check."""
    appointment = _appointment(timedelta(hours=48), status=status)

    with pytest.raises(InvalidOperationException) as exc_info:
        policy.ensure_can_cancel(appointment)

    assert exc_info.value.current_state == status.value


@pytest.mark.unit
def test_custom_window(policy):
    short_policy = CancellationPolicy(window_hours=2, clock=lambda: NOW)

    short_policy.ensure_can_cancel(_appointment(timedelta(hours=2)))
    with pytest.raises(CancellationWindowClosedException):
        short_policy.ensure_can_cancel(_appointment(timedelta(hours=1, minutes=59)))
