"""
Healthcare API Dependencies

FastAPI dependencies for the healthcare domain.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import Container
from app.database.async_db import get_async_db
from app.domains.healthcare.application.use_cases import (
    AuthenticateUseCase,
    BookAppointmentUseCase,
    CancelAppointmentUseCase,
    CreateSlotUseCase,
    DeleteSlotUseCase,
    DoctorUseCases,
    GetAppointmentUseCase,
    GetDoctorAgendaUseCase,
    GetSlotUseCase,
    ListDoctorAppointmentsUseCase,
    ListPatientAppointmentsUseCase,
    ListSlotsUseCase,
    PatientUseCases,
    RegisterPatientUseCase,
    SpecialtyUseCases,
)
from app.domains.healthcare.infrastructure.reports import ReportJobRegistry, ReportJobRunner

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_async_db)]


def get_authenticate_use_case(db: DbSession, container: Container) -> AuthenticateUseCase:
    return container.healthcare.create_authenticate_use_case(db)


def get_register_patient_use_case(db: DbSession, container: Container) -> RegisterPatientUseCase:
    return container.healthcare.create_register_patient_use_case(db)


def get_specialty_use_cases(db: DbSession, container: Container) -> SpecialtyUseCases:
    return container.healthcare.create_specialty_use_cases(db)


def get_doctor_use_cases(db: DbSession, container: Container) -> DoctorUseCases:
    return container.healthcare.create_doctor_use_cases(db)


def get_patient_use_cases(db: DbSession, container: Container) -> PatientUseCases:
    return container.healthcare.create_patient_use_cases(db)


def get_book_appointment_use_case(db: DbSession, container: Container) -> BookAppointmentUseCase:
    """Get BookAppointmentUseCase instance with database session."""
    return container.healthcare.create_book_appointment_use_case(db)


def get_cancel_appointment_use_case(db: DbSession, container: Container) -> CancelAppointmentUseCase:
    """Get CancelAppointmentUseCase instance with database session."""
    return container.healthcare.create_cancel_appointment_use_case(db)


def get_appointment_use_case(db: DbSession, container: Container) -> GetAppointmentUseCase:
    return container.healthcare.create_get_appointment_use_case(db)


def get_list_patient_appointments_use_case(db: DbSession, container: Container) -> ListPatientAppointmentsUseCase:
    return container.healthcare.create_list_patient_appointments_use_case(db)


def get_list_doctor_appointments_use_case(db: DbSession, container: Container) -> ListDoctorAppointmentsUseCase:
    return container.healthcare.create_list_doctor_appointments_use_case(db)


def get_doctor_agenda_use_case(db: DbSession, container: Container) -> GetDoctorAgendaUseCase:
    return container.healthcare.create_get_doctor_agenda_use_case(db)


def get_create_slot_use_case(db: DbSession, container: Container) -> CreateSlotUseCase:
    return container.healthcare.create_create_slot_use_case(db)


def get_list_slots_use_case(db: DbSession, container: Container) -> ListSlotsUseCase:
    return container.healthcare.create_list_slots_use_case(db)


def get_slot_use_case(db: DbSession, container: Container) -> GetSlotUseCase:
    return container.healthcare.create_get_slot_use_case(db)


def get_delete_slot_use_case(db: DbSession, container: Container) -> DeleteSlotUseCase:
    return container.healthcare.create_delete_slot_use_case(db)


def get_report_registry(container: Container) -> ReportJobRegistry:
    return container.base.get_report_registry()


def get_report_job_runner(container: Container) -> ReportJobRunner:
    return container.healthcare.create_report_job_runner()


# Type aliases for use case dependencies
AuthenticateUseCaseDep = Annotated[AuthenticateUseCase, Depends(get_authenticate_use_case)]
RegisterPatientUseCaseDep = Annotated[RegisterPatientUseCase, Depends(get_register_patient_use_case)]
SpecialtyUseCasesDep = Annotated[SpecialtyUseCases, Depends(get_specialty_use_cases)]
DoctorUseCasesDep = Annotated[DoctorUseCases, Depends(get_doctor_use_cases)]
PatientUseCasesDep = Annotated[PatientUseCases, Depends(get_patient_use_cases)]
BookAppointmentUseCaseDep = Annotated[BookAppointmentUseCase, Depends(get_book_appointment_use_case)]
CancelAppointmentUseCaseDep = Annotated[CancelAppointmentUseCase, Depends(get_cancel_appointment_use_case)]
GetAppointmentUseCaseDep = Annotated[GetAppointmentUseCase, Depends(get_appointment_use_case)]
ListPatientAppointmentsUseCaseDep = Annotated[
    ListPatientAppointmentsUseCase, Depends(get_list_patient_appointments_use_case)
]
ListDoctorAppointmentsUseCaseDep = Annotated[
    ListDoctorAppointmentsUseCase, Depends(get_list_doctor_appointments_use_case)
]
DoctorAgendaUseCaseDep = Annotated[GetDoctorAgendaUseCase, Depends(get_doctor_agenda_use_case)]
CreateSlotUseCaseDep = Annotated[CreateSlotUseCase, Depends(get_create_slot_use_case)]
ListSlotsUseCaseDep = Annotated[ListSlotsUseCase, Depends(get_list_slots_use_case)]
GetSlotUseCaseDep = Annotated[GetSlotUseCase, Depends(get_slot_use_case)]
DeleteSlotUseCaseDep = Annotated[DeleteSlotUseCase, Depends(get_delete_slot_use_case)]
ReportRegistryDep = Annotated[ReportJobRegistry, Depends(get_report_registry)]
ReportJobRunnerDep = Annotated[ReportJobRunner, Depends(get_report_job_runner)]
