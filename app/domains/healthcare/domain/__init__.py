"""
Healthcare Domain Layer

Entities, value objects and domain services for appointment booking.
"""

from .entities import Appointment, AvailabilitySlot, Doctor, Patient, Specialty
from .services import CancellationPolicy
from .value_objects import AppointmentStatus, UserRole

__all__ = [
    "Appointment",
    "AvailabilitySlot",
    "Doctor",
    "Patient",
    "Specialty",
    "CancellationPolicy",
    "AppointmentStatus",
    "UserRole",
]
