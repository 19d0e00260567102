"""
Healthcare API Schemas

Pydantic schemas for API request/response validation.
"""

from datetime import datetime
from typing import TypeVar
from uuid import UUID

from pydantic import EmailStr, Field

from app.api.schemas.common import CamelModel, PageMetadata, PageResponse, UtcDateTime
from app.domains.healthcare.application.dto import Page
from app.domains.healthcare.domain.entities import Appointment, AvailabilitySlot, Doctor, Patient, Specialty
from app.domains.healthcare.infrastructure.reports import ReportJob

T = TypeVar("T")


# ==================== AUTH ====================


class LoginRequest(CamelModel):
    """Login request schema."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(CamelModel):
    token: str


class PatientRegistrationRequest(CamelModel):
    """Patient sign-up schema."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    phone: str | None = Field(default=None, max_length=20)


# ==================== SPECIALTIES ====================


class SpecialtyRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)


class SpecialtyResponse(CamelModel):
    id: UUID
    name: str

    @classmethod
    def from_entity(cls, specialty: Specialty) -> "SpecialtyResponse":
        return cls(id=specialty.id, name=specialty.name)


# ==================== DOCTORS ====================


class DoctorRequest(CamelModel):
    """Doctor update schema."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    specialty_id: UUID
    profile_photo_url: str | None = Field(default=None, max_length=500)
    biography: str | None = None


class DoctorCreateRequest(DoctorRequest):
    """Doctor creation schema (includes the initial password)."""

    password: str = Field(..., min_length=8, max_length=128)


class DoctorResponse(CamelModel):
    """Doctor response schema."""

    id: UUID
    first_name: str
    last_name: str
    email: str
    specialty_id: UUID | None
    specialty_name: str | None = None
    profile_photo_url: str | None = None
    biography: str | None = None

    @classmethod
    def from_entity(cls, doctor: Doctor) -> "DoctorResponse":
        return cls(
            id=doctor.id,
            first_name=doctor.first_name,
            last_name=doctor.last_name,
            email=doctor.email,
            specialty_id=doctor.specialty_id,
            specialty_name=doctor.specialty_name,
            profile_photo_url=doctor.profile_photo_url,
            biography=doctor.biography,
        )


# ==================== PATIENTS ====================


class PatientRequest(CamelModel):
    """Patient update schema."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=20)


class PatientCreateRequest(PatientRequest):
    password: str = Field(..., min_length=8, max_length=128)


class PatientResponse(CamelModel):
    """Patient response schema."""

    id: UUID
    first_name: str
    last_name: str
    email: str
    phone: str | None = None

    @classmethod
    def from_entity(cls, patient: Patient) -> "PatientResponse":
        return cls(
            id=patient.id,
            first_name=patient.first_name,
            last_name=patient.last_name,
            email=patient.email,
            phone=patient.phone,
        )


# ==================== AVAILABILITY ====================


class SlotRequest(CamelModel):
    """Availability slot creation schema."""

    doctor_id: UUID | None = None
    start_time: datetime
    end_time: datetime


class SlotResponse(CamelModel):
    id: UUID
    doctor_id: UUID
    start_time: UtcDateTime
    end_time: UtcDateTime
    reserved: bool

    @classmethod
    def from_entity(cls, slot: AvailabilitySlot) -> "SlotResponse":
        return cls(
            id=slot.id,
            doctor_id=slot.doctor_id,
            start_time=slot.start_time,
            end_time=slot.end_time,
            reserved=slot.is_reserved,
        )


# ==================== APPOINTMENTS ====================


class AppointmentRequest(CamelModel):
    """Appointment request schema."""

    doctor_id: UUID
    patient_id: UUID
    slot_id: UUID
    reason: str | None = Field(default=None, max_length=500)


class AppointmentStatusUpdateRequest(CamelModel):
    new_status: str = Field(..., min_length=1)


class AppointmentResponse(CamelModel):
    """Appointment response schema."""

    id: UUID
    doctor_id: UUID
    patient_id: UUID
    slot_id: UUID
    start_time: UtcDateTime
    end_time: UtcDateTime
    status: str
    reason: str | None = None
    created_at: UtcDateTime

    @classmethod
    def from_entity(cls, appointment: Appointment) -> "AppointmentResponse":
        return cls(
            id=appointment.id,
            doctor_id=appointment.doctor_id,
            patient_id=appointment.patient_id,
            slot_id=appointment.slot_id,
            start_time=appointment.start_time,
            end_time=appointment.end_time,
            status=appointment.status.value,
            reason=appointment.reason,
            created_at=appointment.created_at,
        )


# ==================== REPORTS ====================


class ReportJobResponse(CamelModel):
    job_id: UUID
    status: str
    file_name: str | None = None
    error: str | None = None
    created_at: UtcDateTime
    finished_at: UtcDateTime | None = None

    @classmethod
    def from_job(cls, job: ReportJob) -> "ReportJobResponse":
        return cls(
            job_id=job.job_id,
            status=job.status.value,
            file_name=job.file_name,
            error=job.error,
            created_at=job.created_at,
            finished_at=job.finished_at,
        )


def to_page_response(page: Page[T], item_model: type) -> PageResponse:
    """Convert page items with ``item_model.from_entity`` and attach the page metadata."""
    return PageResponse[item_model](
        content=[item_model.from_entity(item) for item in page.items],
        metadata=PageMetadata(
            total_elements=page.total,
            total_pages=page.total_pages,
            current_page=page.page,
            page_size=page.size,
        ),
    )
