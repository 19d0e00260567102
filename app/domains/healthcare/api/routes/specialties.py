"""
Specialty routes.
"""

from uuid import UUID

from fastapi import APIRouter, Response, status

from app.api.dependencies import AdminUser
from app.domains.healthcare.api.dependencies import SpecialtyUseCasesDep
from app.domains.healthcare.api.schemas import SpecialtyRequest, SpecialtyResponse

router = APIRouter(prefix="/especialidades", tags=["Specialties"])


@router.get("", response_model=list[SpecialtyResponse])
async def list_specialties(use_cases: SpecialtyUseCasesDep):
    """List specialties ordered by name."""
    return [SpecialtyResponse.from_entity(s) for s in await use_cases.list_all()]


@router.get("/{specialty_id}", response_model=SpecialtyResponse)
async def get_specialty(specialty_id: UUID, use_cases: SpecialtyUseCasesDep):
    return SpecialtyResponse.from_entity(await use_cases.get(specialty_id))


@router.post("", response_model=SpecialtyResponse, status_code=status.HTTP_201_CREATED)
async def create_specialty(request: SpecialtyRequest, use_cases: SpecialtyUseCasesDep, user: AdminUser):
    return SpecialtyResponse.from_entity(await use_cases.create(request.name))


@router.put("/{specialty_id}", response_model=SpecialtyResponse)
async def update_specialty(
    specialty_id: UUID,
    request: SpecialtyRequest,
    use_cases: SpecialtyUseCasesDep,
    user: AdminUser,
):
    return SpecialtyResponse.from_entity(await use_cases.update(specialty_id, request.name))


@router.delete("/{specialty_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_specialty(specialty_id: UUID, use_cases: SpecialtyUseCasesDep, user: AdminUser):
    await use_cases.delete(specialty_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
