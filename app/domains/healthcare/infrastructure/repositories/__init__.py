"""
Healthcare Infrastructure Repositories

Repository implementations for healthcare domain.
"""

from app.domains.healthcare.infrastructure.repositories.appointment_repository import (
    SQLAlchemyAppointmentRepository,
)
from app.domains.healthcare.infrastructure.repositories.availability_repository import (
    SQLAlchemyAvailabilityRepository,
)
from app.domains.healthcare.infrastructure.repositories.doctor_repository import (
    SQLAlchemyDoctorRepository,
)
from app.domains.healthcare.infrastructure.repositories.patient_repository import (
    SQLAlchemyPatientRepository,
)
from app.domains.healthcare.infrastructure.repositories.specialty_repository import (
    SQLAlchemySpecialtyRepository,
)

__all__ = [
    "SQLAlchemyAppointmentRepository",
    "SQLAlchemyAvailabilityRepository",
    "SQLAlchemyDoctorRepository",
    "SQLAlchemyPatientRepository",
    "SQLAlchemySpecialtyRepository",
]
