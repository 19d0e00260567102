"""
Appointment query use cases: single appointment, paginated listings per
patient / doctor and a doctor's confirmed agenda.
"""

from datetime import datetime
from uuid import UUID

from app.core.domain import EntityNotFoundException, ValidationException
from app.domains.healthcare.application.dto import Page, PageRequest
from app.domains.healthcare.application.ports import (
    IAppointmentRepository,
    IDoctorRepository,
    IPatientRepository,
)
from app.domains.healthcare.domain.entities import Appointment


class GetAppointmentUseCase:
    """Get an appointment by ID."""

    def __init__(self, appointment_repository: IAppointmentRepository):
        self.appointment_repo = appointment_repository

    async def execute(self, appointment_id: UUID) -> Appointment:
        return await self.appointment_repo.get_by_id(appointment_id)


class ListPatientAppointmentsUseCase:
    """Paginated appointments of a patient, earliest slot first."""

    def __init__(self, patient_repository: IPatientRepository, appointment_repository: IAppointmentRepository):
        self.patient_repo = patient_repository
        self.appointment_repo = appointment_repository

    async def execute(self, patient_id: UUID, page: PageRequest) -> Page[Appointment]:
        if not await self.patient_repo.exists(patient_id):
            raise EntityNotFoundException(entity_type="Patient", entity_id=patient_id)
        return await self.appointment_repo.list_by_patient(patient_id, page)


class ListDoctorAppointmentsUseCase:
    """Paginated appointments of a doctor, earliest slot first."""

    def __init__(self, doctor_repository: IDoctorRepository, appointment_repository: IAppointmentRepository):
        self.doctor_repo = doctor_repository
        self.appointment_repo = appointment_repository

    async def execute(self, doctor_id: UUID, page: PageRequest) -> Page[Appointment]:
        if not await self.doctor_repo.exists(doctor_id):
            raise EntityNotFoundException(entity_type="Doctor", entity_id=doctor_id)
        return await self.appointment_repo.list_by_doctor(doctor_id, page)


class GetDoctorAgendaUseCase:
    """Confirmed appointments of a doctor within a time range."""

    def __init__(self, doctor_repository: IDoctorRepository, appointment_repository: IAppointmentRepository):
        self.doctor_repo = doctor_repository
        self.appointment_repo = appointment_repository

    async def execute(self, doctor_id: UUID, start: datetime, end: datetime) -> list[Appointment]:
        if end < start:
            raise ValidationException("La fecha de fin no puede ser anterior a la fecha de inicio.", field="endDate")
        if not await self.doctor_repo.exists(doctor_id):
            raise EntityNotFoundException(entity_type="Doctor", entity_id=doctor_id)
        return await self.appointment_repo.list_confirmed_by_doctor_in_range(doctor_id, start, end)
