"""
Book Appointment Use Case

Turns a booking request into a consistent (doctor, patient, slot,
appointment) quadruple. Slot lookup, ownership check, reservation and the
appointment insert run in one SERIALIZABLE transaction; the confirmation
notification is sent after commit.
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from app.core.domain import EntityNotFoundException, SlotUnavailableException
from app.core.interfaces.transaction import SERIALIZABLE, ITransactionManager
from app.domains.healthcare.application.ports import (
    IAppointmentRepository,
    IAvailabilityRepository,
    IDoctorRepository,
    IPatientRepository,
)
from app.domains.healthcare.application.use_cases.appointment_notifier import AppointmentNotifier
from app.domains.healthcare.domain.entities import Appointment, AvailabilitySlot, Doctor, Patient

logger = logging.getLogger(__name__)

SLOT_DOCTOR_MISMATCH_MESSAGE = (
    "El horario seleccionado ya no se encuentra disponible para el doctor especificado."
)


@dataclass
class BookAppointmentRequest:
    """Request for booking an appointment."""

    doctor_id: UUID
    patient_id: UUID
    slot_id: UUID
    reason: str | None = None
    actor: str | None = None


class BookAppointmentUseCase:
    """
    Use case for booking appointments.

    Single Responsibility: Only handles appointment booking logic
    Dependency Inversion: Depends on interfaces, not implementations
    """

    def __init__(
        self,
        doctor_repository: IDoctorRepository,
        patient_repository: IPatientRepository,
        availability_repository: IAvailabilityRepository,
        appointment_repository: IAppointmentRepository,
        transaction_manager: ITransactionManager,
        notifier: AppointmentNotifier,
    ):
        """
        Initialize use case with dependencies.

        Args:
            doctor_repository: Repository for doctor data access
            patient_repository: Repository for patient data access
            availability_repository: Slot store with atomic reserve
            appointment_repository: Repository for appointment data access
            transaction_manager: Runs the atomic booking steps
            notifier: Best-effort confirmation sender
        """
        self.doctor_repo = doctor_repository
        self.patient_repo = patient_repository
        self.availability_repo = availability_repository
        self.appointment_repo = appointment_repository
        self.tx = transaction_manager
        self.notifier = notifier

    async def execute(self, request: BookAppointmentRequest) -> Appointment:
        """
        Execute appointment booking use case.

        Raises:
            EntityNotFoundException: Doctor, patient or available slot not found
            SlotUnavailableException: Slot belongs to another doctor or was taken concurrently
            ConcurrencyException: The transaction lost a serialization race
        """
        # 1-2. Verify doctor and patient exist
        doctor = await self._get_doctor(request.doctor_id)
        patient = await self._get_patient(request.patient_id)

        async def _book() -> Appointment:
            # 3. Slot must exist and be free
            slot = await self.availability_repo.get_available_slot(request.slot_id)

            # 4. Slot and doctor are supplied independently, they must match
            self._ensure_slot_belongs_to_doctor(slot, doctor)

            # 5. Claim the slot; a lost race raises SlotUnavailableException
            await self.availability_repo.reserve(slot.id, request.actor)

            # 6. Create appointment
            appointment = Appointment.book(
                doctor_id=doctor.id,
                patient_id=patient.id,
                slot=slot,
                reason=request.reason,
                actor=request.actor,
            )
            return await self.appointment_repo.create(appointment)

        try:
            appointment = await self.tx.run(_book, operation="book_appointment", isolation_level=SERIALIZABLE)
        except SlotUnavailableException as e:
            logger.warning(f"Booking of slot {request.slot_id} rejected: {e.message}")
            raise

        logger.info(
            f"Appointment booked: {appointment.id} for patient {patient.id} with doctor {doctor.id} "
            f"on slot {appointment.slot_id}"
        )

        # 7. Best-effort confirmation
        await self.notifier.appointment_confirmed(appointment, doctor, patient)

        return appointment

    async def _get_doctor(self, doctor_id: UUID) -> Doctor:
        doctor = await self.doctor_repo.find_by_id(doctor_id)
        if not doctor:
            raise EntityNotFoundException(entity_type="Doctor", entity_id=doctor_id)
        return doctor

    async def _get_patient(self, patient_id: UUID) -> Patient:
        patient = await self.patient_repo.find_by_id(patient_id)
        if not patient:
            raise EntityNotFoundException(entity_type="Patient", entity_id=patient_id)
        return patient

    @staticmethod
    def _ensure_slot_belongs_to_doctor(slot: AvailabilitySlot, doctor: Doctor) -> None:
        if not slot.belongs_to(doctor.id):
            raise SlotUnavailableException(
                slot_id=slot.id,
                message=SLOT_DOCTOR_MISMATCH_MESSAGE,
                doctor_id=doctor.id,
            )
