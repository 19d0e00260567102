"""
Cancel Appointment Use Case

Applies the cancellation policy, marks the appointment CANCELLED and releases
its slot in one SERIALIZABLE transaction (retried on serialization
failures), then notifies the patient.
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from app.core.interfaces.transaction import SERIALIZABLE, ITransactionManager
from app.domains.healthcare.application.ports import (
    IAppointmentRepository,
    IAvailabilityRepository,
    IDoctorRepository,
    IPatientRepository,
)
from app.domains.healthcare.application.use_cases.appointment_notifier import AppointmentNotifier
from app.domains.healthcare.domain.entities import Appointment
from app.domains.healthcare.domain.services import CancellationPolicy

logger = logging.getLogger(__name__)


@dataclass
class CancelAppointmentRequest:
    """Request for cancelling an appointment."""

    appointment_id: UUID
    actor: str | None = None


class CancelAppointmentUseCase:
    """
    Use case for cancelling appointments.

    Nothing is written when the policy rejects the cancellation.
    """

    def __init__(
        self,
        appointment_repository: IAppointmentRepository,
        availability_repository: IAvailabilityRepository,
        doctor_repository: IDoctorRepository,
        patient_repository: IPatientRepository,
        transaction_manager: ITransactionManager,
        policy: CancellationPolicy,
        notifier: AppointmentNotifier,
    ):
        self.appointment_repo = appointment_repository
        self.availability_repo = availability_repository
        self.doctor_repo = doctor_repository
        self.patient_repo = patient_repository
        self.tx = transaction_manager
        self.policy = policy
        self.notifier = notifier

    async def execute(self, request: CancelAppointmentRequest) -> Appointment:
        """
        Execute appointment cancellation use case.

        Raises:
            EntityNotFoundException: Appointment not found
            InvalidOperationException: Appointment already CANCELLED or COMPLETED
            CancellationWindowClosedException: Less than the window left before the slot starts
        """

        async def _cancel() -> Appointment:
            appointment = await self.appointment_repo.get_by_id(request.appointment_id)
            self.policy.ensure_can_cancel(appointment)

            previous_state = appointment.status
            appointment.cancel(request.actor)

            # Compare-and-set: a concurrent cancellation makes this fail, so
            # the slot is released at most once.
            updated = await self.appointment_repo.update_state(
                appointment.id,
                appointment.status,
                request.actor,
                expected_state=previous_state,
            )
            await self.availability_repo.release(appointment.slot_id, request.actor)
            return updated

        appointment = await self.tx.run(
            _cancel,
            operation="cancel_appointment",
            isolation_level=SERIALIZABLE,
            retry=True,
        )
        logger.info(f"Appointment cancelled: {appointment.id}, slot {appointment.slot_id} released")

        await self._notify(appointment)
        return appointment

    async def _notify(self, appointment: Appointment) -> None:
        doctor = await self.doctor_repo.find_by_id(appointment.doctor_id)
        patient = await self.patient_repo.find_by_id(appointment.patient_id)
        if doctor is None or patient is None:
            logger.warning(f"Cannot notify cancellation of {appointment.id}: doctor or patient missing")
            return
        await self.notifier.appointment_cancelled(appointment, doctor, patient)
