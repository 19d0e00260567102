"""
Healthcare Domain Value Objects
"""

from .appointment_status import AppointmentStatus
from .user_role import UserRole

__all__ = [
    "AppointmentStatus",
    "UserRole",
]
