"""
Appointment routes: booking, lookup, cancellation and per-doctor listings.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from app.api.dependencies import CurrentUser, PatientOrAdmin, ensure_owner_or_admin
from app.api.schemas import PageResponse
from app.core.domain import AuthorizationException, ValidationException
from app.domains.healthcare.api.dependencies import (
    BookAppointmentUseCaseDep,
    CancelAppointmentUseCaseDep,
    DoctorAgendaUseCaseDep,
    GetAppointmentUseCaseDep,
    ListDoctorAppointmentsUseCaseDep,
)
from app.domains.healthcare.api.routes.availability import day_range
from app.domains.healthcare.api.schemas import (
    AppointmentRequest,
    AppointmentResponse,
    AppointmentStatusUpdateRequest,
    to_page_response,
)
from app.domains.healthcare.application.dto import PageRequest
from app.domains.healthcare.application.use_cases import BookAppointmentRequest, CancelAppointmentRequest
from app.domains.healthcare.domain.entities import Appointment
from app.domains.healthcare.domain.value_objects import AppointmentStatus, UserRole
from app.services.token_service import TokenClaims

router = APIRouter(tags=["Appointments"])


def ensure_participant(user: TokenClaims, appointment: Appointment) -> None:
    """Fail with 403 unless the caller is admin or the appointment's patient or doctor."""
    if user.role == UserRole.ADMIN:
        return
    if user.account_id is None or not appointment.involves(user.account_id):
        raise AuthorizationException(operation="access", resource="appointment", user_id=user.email)


@router.post("/citas", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def book_appointment(
    request: AppointmentRequest,
    use_case: BookAppointmentUseCaseDep,
    user: PatientOrAdmin,
):
    """Book a slot; patients may only book for themselves."""
    ensure_owner_or_admin(user, request.patient_id, "patient")
    appointment = await use_case.execute(
        BookAppointmentRequest(
            doctor_id=request.doctor_id,
            patient_id=request.patient_id,
            slot_id=request.slot_id,
            reason=request.reason,
            actor=user.email,
        )
    )
    return AppointmentResponse.from_entity(appointment)


@router.get("/citas/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(appointment_id: UUID, use_case: GetAppointmentUseCaseDep, user: CurrentUser):
    appointment = await use_case.execute(appointment_id)
    ensure_participant(user, appointment)
    return AppointmentResponse.from_entity(appointment)


@router.patch("/citas/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment_status(
    appointment_id: UUID,
    request: AppointmentStatusUpdateRequest,
    get_appointment_use_case: GetAppointmentUseCaseDep,
    cancel_use_case: CancelAppointmentUseCaseDep,
    user: CurrentUser,
):
    """Only cancellation is exposed; any other target state is rejected."""
    if request.new_status != AppointmentStatus.CANCELLED.value:
        raise ValidationException(
            f"Sólo se permite cambiar el estado a {AppointmentStatus.CANCELLED.value}.",
            field="newStatus",
        )

    appointment = await get_appointment_use_case.execute(appointment_id)
    ensure_participant(user, appointment)

    cancelled = await cancel_use_case.execute(CancelAppointmentRequest(appointment_id=appointment_id, actor=user.email))
    return AppointmentResponse.from_entity(cancelled)


@router.get("/doctores/{doctor_id}/citas", response_model=PageResponse[AppointmentResponse])
async def list_doctor_appointments(
    doctor_id: UUID,
    use_case: ListDoctorAppointmentsUseCaseDep,
    user: CurrentUser,
    page: Annotated[int, Query(ge=0)] = 0,
    size: Annotated[int, Query(ge=1, le=100)] = 25,
):
    """Appointments of a doctor, earliest first."""
    ensure_owner_or_admin(user, doctor_id, "doctor appointments")
    result = await use_case.execute(doctor_id, PageRequest(page=page, size=size))
    return to_page_response(result, AppointmentResponse)


@router.get("/doctores/{doctor_id}/agenda", response_model=list[AppointmentResponse])
async def get_doctor_agenda(
    doctor_id: UUID,
    use_case: DoctorAgendaUseCaseDep,
    user: CurrentUser,
    start_date: Annotated[date, Query(alias="startDate")],
    end_date: Annotated[date | None, Query(alias="endDate")] = None,
):
    """Confirmed appointments of a doctor within the given days."""
    ensure_owner_or_admin(user, doctor_id, "doctor agenda")
    start, end = day_range(start_date, end_date)
    appointments = await use_case.execute(doctor_id, start, end)
    return [AppointmentResponse.from_entity(a) for a in appointments]
