"""
Availability routes: doctors publish and withdraw slots, anyone lists them.
"""

from datetime import UTC, date, datetime, time
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from app.api.dependencies import DoctorOrAdmin, ensure_owner_or_admin
from app.core.domain import ValidationException
from app.domains.healthcare.api.dependencies import (
    CreateSlotUseCaseDep,
    DeleteSlotUseCaseDep,
    GetSlotUseCaseDep,
    ListSlotsUseCaseDep,
)
from app.domains.healthcare.api.schemas import SlotRequest, SlotResponse
from app.domains.healthcare.application.use_cases import CreateSlotRequest

router = APIRouter(prefix="/doctores", tags=["Availability"])


def day_range(start_date: date, end_date: date | None) -> tuple[datetime, datetime]:
    """[start_date 00:00:00, (end_date or start_date) 23:59:59] in UTC."""
    start = datetime.combine(start_date, time.min, tzinfo=UTC)
    end = datetime.combine(end_date or start_date, time(23, 59, 59), tzinfo=UTC)
    return start, end


@router.get("/{doctor_id}/disponibilidades", response_model=list[SlotResponse])
async def list_slots(
    doctor_id: UUID,
    use_case: ListSlotsUseCaseDep,
    start_date: Annotated[date, Query(alias="startDate")],
    end_date: Annotated[date | None, Query(alias="endDate")] = None,
):
    """Slots of a doctor starting within the given days."""
    start, end = day_range(start_date, end_date)
    slots = await use_case.execute(doctor_id, start, end)
    return [SlotResponse.from_entity(s) for s in slots]


@router.post(
    "/{doctor_id}/disponibilidades",
    response_model=SlotResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_slot(
    doctor_id: UUID,
    request: SlotRequest,
    use_case: CreateSlotUseCaseDep,
    user: DoctorOrAdmin,
):
    """Publish a slot for the doctor."""
    ensure_owner_or_admin(user, doctor_id, "doctor availability")
    if request.doctor_id is not None and request.doctor_id != doctor_id:
        raise ValidationException("El doctor del cuerpo no coincide con el de la ruta.", field="doctorId")

    slot = await use_case.execute(
        CreateSlotRequest(
            doctor_id=doctor_id,
            start_time=request.start_time,
            end_time=request.end_time,
            actor=user.email,
        )
    )
    return SlotResponse.from_entity(slot)


@router.delete("/disponibilidades/{slot_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_slot(
    slot_id: UUID,
    get_slot: GetSlotUseCaseDep,
    use_case: DeleteSlotUseCaseDep,
    user: DoctorOrAdmin,
):
    """Withdraw an unreserved slot."""
    slot = await get_slot.execute(slot_id)
    ensure_owner_or_admin(user, slot.doctor_id, "availability slot")
    await use_case.execute(slot_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
