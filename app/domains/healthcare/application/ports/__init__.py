"""
Healthcare Application Ports

Interfaces for external dependencies (repositories, notification channels).
"""

from .appointment_repository import IAppointmentRepository
from .availability_repository import IAvailabilityRepository
from .doctor_repository import IDoctorRepository
from .notification_port import INotificationService
from .patient_repository import IPatientRepository
from .report_port import IReportWriter
from .specialty_repository import ISpecialtyRepository

__all__ = [
    "IAppointmentRepository",
    "IAvailabilityRepository",
    "IDoctorRepository",
    "INotificationService",
    "IPatientRepository",
    "IReportWriter",
    "ISpecialtyRepository",
]
