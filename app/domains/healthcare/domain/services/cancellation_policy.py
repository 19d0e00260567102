"""
Cancellation Policy Domain Service

Decides whether an appointment may be cancelled: only CONFIRMED appointments,
and only when the slot starts at least ``window_hours`` whole hours from now.
"""

from collections.abc import Callable
from datetime import datetime, timedelta

from app.core.domain import (
    CancellationWindowClosedException,
    InvalidOperationException,
    ValidationException,
    utc_now,
)

from ..entities.appointment import Appointment
from ..value_objects.appointment_status import AppointmentStatus

DEFAULT_WINDOW_HOURS = 24


def whole_hours_between(start: datetime, end: datetime) -> int:
    """
    Whole hours from ``start`` to ``end``, truncated toward zero.

    23h59m counts as 23; a negative interval yields a negative count.
    """
    delta = end - start
    hours = abs(delta) // timedelta(hours=1)
    return hours if delta >= timedelta(0) else -hours


class CancellationPolicy:
    """
    Enforces the minimum advance notice for cancellations.

    The clock is injectable so the boundary can be tested exactly.
    """

    def __init__(
        self,
        window_hours: int = DEFAULT_WINDOW_HOURS,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.window_hours = window_hours
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()

    def hours_until_start(self, appointment: Appointment) -> int:
        if appointment.start_time is None:
            raise ValidationException("La cita no tiene horario asociado.", field="startTime")
        return whole_hours_between(self.now(), appointment.start_time)

    def ensure_can_cancel(self, appointment: Appointment) -> None:
        """
        Raise unless the appointment can be cancelled right now.

        Raises:
            InvalidOperationException: appointment already CANCELLED or COMPLETED
            CancellationWindowClosedException: less than ``window_hours`` left
        """
        if not appointment.status.allows_cancellation():
            already = "cancelada" if appointment.status == AppointmentStatus.CANCELLED else "finalizada"
            raise InvalidOperationException(
                operation="cancel",
                current_state=appointment.status.value,
                message=f"La cita ya está {already}.",
            )

        remaining = self.hours_until_start(appointment)
        if remaining < self.window_hours:
            raise CancellationWindowClosedException(remaining_hours=remaining, window_hours=self.window_hours)
