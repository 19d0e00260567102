"""
Healthcare SQLAlchemy Models

Database models for appointment booking persistence.
"""

from typing import Any

from sqlalchemy import Boolean, Column, ForeignKey, Index, String, Text, Uuid, text
from sqlalchemy.orm import relationship

from app.models.db.base import AuditMixin, Base, TimestampMixin, UTCDateTime


class SpecialtyModel(Base, TimestampMixin):
    """SQLAlchemy model for Specialty entity."""

    __tablename__ = "specialties"

    id = Column(Uuid, primary_key=True)
    name = Column(String(100), unique=True, nullable=False)

    doctors = relationship("DoctorModel", back_populates="specialty")


class DoctorModel(Base, AuditMixin):
    """SQLAlchemy model for Doctor entity."""

    __tablename__ = "doctors"

    id = Column(Uuid, primary_key=True)

    # Personal information
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(150), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Professional information
    specialty_id = Column(Uuid, ForeignKey("specialties.id"), nullable=False, index=True)
    profile_photo_url = Column(String(500), nullable=True)
    biography = Column(Text, nullable=True)

    # Relationships
    specialty = relationship("SpecialtyModel", back_populates="doctors", lazy="joined")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": str(self.id),
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "specialty_id": str(self.specialty_id),
        }


class PatientModel(Base, AuditMixin):
    """SQLAlchemy model for Patient entity."""

    __tablename__ = "patients"

    id = Column(Uuid, primary_key=True)

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(150), unique=True, nullable=False, index=True)
    phone = Column(String(20), nullable=True)
    password_hash = Column(String(255), nullable=False)


class AvailabilitySlotModel(Base, AuditMixin):
    """SQLAlchemy model for AvailabilitySlot entity."""

    __tablename__ = "availability_slots"

    id = Column(Uuid, primary_key=True)
    doctor_id = Column(Uuid, ForeignKey("doctors.id"), nullable=False)
    start_time = Column(UTCDateTime(), nullable=False)
    end_time = Column(UTCDateTime(), nullable=False)
    is_reserved = Column(Boolean, default=False, nullable=False)

    __table_args__ = (Index("ix_availability_slots_doctor_start", "doctor_id", "start_time"),)


class AppointmentModel(Base, AuditMixin):
    """
    SQLAlchemy model for Appointment entity.

    Start and end are read from the referenced slot. The partial unique index
    allows one non-cancelled appointment per slot: slot_id is intentionally not
    unique across all rows, so a slot freed by a cancellation can be booked
    again while the cancelled appointment stays as history.
    """

    __tablename__ = "appointments"

    id = Column(Uuid, primary_key=True)
    doctor_id = Column(Uuid, ForeignKey("doctors.id"), nullable=False, index=True)
    patient_id = Column(Uuid, ForeignKey("patients.id"), nullable=False, index=True)
    slot_id = Column(Uuid, ForeignKey("availability_slots.id"), nullable=False)
    reason = Column(String(500), nullable=True)
    status = Column(String(20), nullable=False, default="CONFIRMED")

    # Relationships
    slot = relationship("AvailabilitySlotModel", lazy="joined")

    __table_args__ = (
        Index(
            "uq_appointments_active_slot",
            "slot_id",
            unique=True,
            postgresql_where=text("status <> 'CANCELLED'"),
            sqlite_where=text("status <> 'CANCELLED'"),
        ),
    )


__all__ = [
    "SpecialtyModel",
    "DoctorModel",
    "PatientModel",
    "AvailabilitySlotModel",
    "AppointmentModel",
]
