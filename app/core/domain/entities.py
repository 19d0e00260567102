"""
Base Entity Classes for Domain-Driven Design

Entities are domain objects with identity and lifecycle.
They maintain their identity regardless of their attributes.
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Generic, TypeVar
from uuid import UUID, uuid4

# Type variable for entity ID (int, str, UUID, etc.)
TId = TypeVar("TId")


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


@dataclass
class Entity(ABC, Generic[TId]):
    """
    Base class for all domain entities.

    An entity is a domain object that has a distinct identity
    that runs through time and different states.

    Type Parameters:
        TId: Type of entity identifier (int, str, UUID)

    Example:
        ```python
        @dataclass
        class Specialty(Entity[UUID]):
            name: str = ""

            def rename(self, name: str) -> None:
                self.name = name.strip()
                self.touch()
        ```
    """

    id: TId | None = field(default=None)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __eq__(self, other: object) -> bool:
        """Entities are equal if they have the same ID."""
        if not isinstance(other, Entity):
            return False
        if self.id is None or other.id is None:
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id) if self.id is not None else id(self)

    def is_new(self) -> bool:
        """Check if entity is new (not yet persisted)."""
        return self.id is None

    def touch(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = utc_now()


@dataclass
class AuditableEntity(Entity[TId], Generic[TId]):
    """
    Entity with audit trail support.

    Tracks who created and who last modified the entity. The actor is always
    passed in explicitly by the operation performing the mutation.
    """

    created_by: str | None = field(default=None)
    updated_by: str | None = field(default=None)

    def set_created_by(self, actor: str | None) -> None:
        """Set the creator of this entity (also the first modifier)."""
        self.created_by = actor
        self.updated_by = actor

    def set_updated_by(self, actor: str | None) -> None:
        """Set the last modifier and update timestamp."""
        self.updated_by = actor
        self.touch()


# Helper functions for ID generation
def generate_uuid() -> UUID:
    """Generate a new UUID for entity identification."""
    return uuid4()
