# ============================================================================
# SCOPE: APPLICATION LAYER (Healthcare)
# Description: Availability store port (DIP compliant).
# ============================================================================
"""
Availability Repository Port

Interface for availability slot storage and its atomic reserve/release
transitions.
"""

from datetime import datetime
from typing import Protocol, runtime_checkable
from uuid import UUID

from app.domains.healthcare.domain.entities.availability_slot import AvailabilitySlot


@runtime_checkable
class IAvailabilityRepository(Protocol):
    """
    Availability slot repository interface.

    ``reserve`` is the only arbitration point for slot contention: among any
    number of concurrent calls for the same slot, exactly one succeeds.
    """

    async def create_slot(self, slot: AvailabilitySlot) -> AvailabilitySlot:
        """
        Persist a new slot.

        Raises:
            EntityNotFoundException: Doctor unknown
            SlotOverlapException: Slot overlaps another slot of the same doctor
        """
        ...

    async def find_by_id(self, slot_id: UUID) -> AvailabilitySlot | None:
        """Find slot by ID regardless of its reserved flag."""
        ...

    async def get_available_slot(self, slot_id: UUID) -> AvailabilitySlot:
        """
        Get an unreserved slot.

        Raises:
            EntityNotFoundException: Slot missing or already reserved (indistinguishable)
        """
        ...

    async def reserve(self, slot_id: UUID, actor: str | None) -> None:
        """
        Atomically flip ``reserved`` from false to true.

        Raises:
            SlotUnavailableException: Slot already reserved (or missing)
        """
        ...

    async def release(self, slot_id: UUID, actor: str | None) -> bool:
        """
        Flip ``reserved`` from true to false.

        Returns:
            True if the slot was released, False if it was not reserved (no-op)
        """
        ...

    async def list_by_doctor_in_range(
        self,
        doctor_id: UUID,
        start: datetime,
        end: datetime,
    ) -> list[AvailabilitySlot]:
        """Slots of a doctor whose start lies in [start, end], ascending by start."""
        ...

    async def delete_slot(self, slot_id: UUID) -> None:
        """
        Delete an unreserved slot with no appointment history.

        Raises:
            EntityNotFoundException: Slot missing
            SlotReservedException: Slot reserved or referenced by an appointment
        """
        ...
