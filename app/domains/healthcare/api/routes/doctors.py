"""
Doctor routes: public directory and admin management.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from app.api.dependencies import AdminUser, CurrentUser, ensure_owner_or_admin
from app.api.schemas import PageResponse
from app.domains.healthcare.api.dependencies import DoctorUseCasesDep
from app.domains.healthcare.api.schemas import (
    DoctorCreateRequest,
    DoctorRequest,
    DoctorResponse,
    to_page_response,
)
from app.domains.healthcare.application.dto import PageRequest
from app.domains.healthcare.application.use_cases import DoctorData

router = APIRouter(prefix="/doctores", tags=["Doctors"])


def _doctor_data(request: DoctorRequest) -> DoctorData:
    return DoctorData(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        specialty_id=request.specialty_id,
        profile_photo_url=request.profile_photo_url,
        biography=request.biography,
    )


@router.get("", response_model=PageResponse[DoctorResponse])
async def list_doctors(
    use_cases: DoctorUseCasesDep,
    specialty_id: Annotated[UUID | None, Query(alias="specialtyId")] = None,
    limit: Annotated[int, Query(ge=1, le=100)] = 25,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    """Public doctor directory, ordered by last name."""
    page = await use_cases.list(PageRequest(page=offset // limit, size=limit), specialty_id=specialty_id)
    return to_page_response(page, DoctorResponse)


@router.get("/{doctor_id}", response_model=DoctorResponse)
async def get_doctor(doctor_id: UUID, use_cases: DoctorUseCasesDep):
    return DoctorResponse.from_entity(await use_cases.get(doctor_id))


@router.post("", response_model=DoctorResponse, status_code=status.HTTP_201_CREATED)
async def create_doctor(request: DoctorCreateRequest, use_cases: DoctorUseCasesDep, user: AdminUser):
    doctor = await use_cases.create(_doctor_data(request), request.password, actor=user.email)
    return DoctorResponse.from_entity(doctor)


@router.put("/{doctor_id}", response_model=DoctorResponse)
async def update_doctor(doctor_id: UUID, request: DoctorRequest, use_cases: DoctorUseCasesDep, user: CurrentUser):
    ensure_owner_or_admin(user, doctor_id, "doctor")
    doctor = await use_cases.update(doctor_id, _doctor_data(request), actor=user.email)
    return DoctorResponse.from_entity(doctor)


@router.delete("/{doctor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_doctor(doctor_id: UUID, use_cases: DoctorUseCasesDep, user: AdminUser):
    await use_cases.delete(doctor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
