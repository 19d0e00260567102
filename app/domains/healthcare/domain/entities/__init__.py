"""
Healthcare Domain Entities
"""

from .appointment import Appointment
from .availability_slot import AvailabilitySlot
from .doctor import Doctor
from .patient import Patient
from .specialty import Specialty

__all__ = [
    "Appointment",
    "AvailabilitySlot",
    "Doctor",
    "Patient",
    "Specialty",
]
