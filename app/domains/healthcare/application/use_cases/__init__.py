"""
Healthcare Domain Use Cases

Application layer use cases for the appointment booking system.
"""

from .appointment_notifier import AppointmentNotifier
from .authenticate import AuthenticateUseCase, AuthenticatedAccount, RegisterPatientUseCase
from .book_appointment import BookAppointmentRequest, BookAppointmentUseCase
from .cancel_appointment import CancelAppointmentRequest, CancelAppointmentUseCase
from .generate_report import GenerateAppointmentReportUseCase
from .get_appointment import (
    GetAppointmentUseCase,
    GetDoctorAgendaUseCase,
    ListDoctorAppointmentsUseCase,
    ListPatientAppointmentsUseCase,
)
from .manage_availability import (
    CreateSlotRequest,
    CreateSlotUseCase,
    DeleteSlotUseCase,
    GetSlotUseCase,
    ListSlotsUseCase,
)
from .manage_doctors import DoctorData, DoctorUseCases
from .manage_patients import PatientData, PatientUseCases
from .manage_specialties import SpecialtyUseCases

__all__ = [
    "AppointmentNotifier",
    "AuthenticateUseCase",
    "AuthenticatedAccount",
    "RegisterPatientUseCase",
    "BookAppointmentRequest",
    "BookAppointmentUseCase",
    "CancelAppointmentRequest",
    "CancelAppointmentUseCase",
    "GenerateAppointmentReportUseCase",
    "GetAppointmentUseCase",
    "GetDoctorAgendaUseCase",
    "ListDoctorAppointmentsUseCase",
    "ListPatientAppointmentsUseCase",
    "CreateSlotRequest",
    "CreateSlotUseCase",
    "DeleteSlotUseCase",
    "GetSlotUseCase",
    "ListSlotsUseCase",
    "DoctorData",
    "DoctorUseCases",
    "PatientData",
    "PatientUseCases",
    "SpecialtyUseCases",
]
