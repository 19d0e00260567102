"""
Patient routes.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from app.api.dependencies import AdminUser, CurrentUser, ensure_owner_or_admin
from app.api.schemas import PageResponse
from app.domains.healthcare.api.dependencies import ListPatientAppointmentsUseCaseDep, PatientUseCasesDep
from app.domains.healthcare.api.schemas import (
    AppointmentResponse,
    PatientCreateRequest,
    PatientRequest,
    PatientResponse,
    to_page_response,
)
from app.domains.healthcare.application.dto import PageRequest
from app.domains.healthcare.application.use_cases import PatientData

router = APIRouter(prefix="/pacientes", tags=["Patients"])


def _patient_data(request: PatientRequest) -> PatientData:
    return PatientData(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        phone=request.phone,
    )


@router.get("", response_model=PageResponse[PatientResponse])
async def list_patients(
    use_cases: PatientUseCasesDep,
    user: AdminUser,
    page: Annotated[int, Query(ge=0)] = 0,
    size: Annotated[int, Query(ge=1, le=100)] = 25,
):
    result = await use_cases.list(PageRequest(page=page, size=size))
    return to_page_response(result, PatientResponse)


@router.get("/{patient_id}", response_model=PatientResponse)
async def get_patient(patient_id: UUID, use_cases: PatientUseCasesDep, user: CurrentUser):
    ensure_owner_or_admin(user, patient_id, "patient")
    return PatientResponse.from_entity(await use_cases.get(patient_id))


@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def create_patient(request: PatientCreateRequest, use_cases: PatientUseCasesDep, user: AdminUser):
    patient = await use_cases.register(_patient_data(request), request.password, actor=user.email)
    return PatientResponse.from_entity(patient)


@router.put("/{patient_id}", response_model=PatientResponse)
async def update_patient(
    patient_id: UUID,
    request: PatientRequest,
    use_cases: PatientUseCasesDep,
    user: CurrentUser,
):
    ensure_owner_or_admin(user, patient_id, "patient")
    patient = await use_cases.update(patient_id, _patient_data(request), actor=user.email)
    return PatientResponse.from_entity(patient)


@router.delete("/{patient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_patient(patient_id: UUID, use_cases: PatientUseCasesDep, user: AdminUser):
    await use_cases.delete(patient_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{patient_id}/citas", response_model=PageResponse[AppointmentResponse])
async def list_patient_appointments(
    patient_id: UUID,
    use_case: ListPatientAppointmentsUseCaseDep,
    user: CurrentUser,
    page: Annotated[int, Query(ge=0)] = 0,
    size: Annotated[int, Query(ge=1, le=100)] = 25,
):
    """Appointments of a patient, earliest first."""
    ensure_owner_or_admin(user, patient_id, "patient appointments")
    result = await use_case.execute(patient_id, PageRequest(page=page, size=size))
    return to_page_response(result, AppointmentResponse)
