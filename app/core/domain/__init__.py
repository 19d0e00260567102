"""
Domain Layer - Core DDD building blocks

This module provides base classes for Domain-Driven Design:
- Entities: Objects with identity and lifecycle
- Value Objects: Immutable objects compared by value
- Exceptions: Domain-specific error handling
"""

from app.core.domain.entities import (
    AuditableEntity,
    Entity,
    generate_uuid,
    utc_now,
)
from app.core.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    CancellationWindowClosedException,
    ConcurrencyException,
    ConflictException,
    DomainException,
    DuplicateEntityException,
    EntityInUseException,
    EntityNotFoundException,
    InvalidOperationException,
    NotificationException,
    SlotOverlapException,
    SlotReservedException,
    SlotUnavailableException,
    ValidationException,
)
from app.core.domain.value_objects import (
    Email,
    as_utc,
    format_utc,
    StatusEnum,
    TimeRange,
    ValueObject,
)

__all__ = [
    # Entities
    "Entity",
    "AuditableEntity",
    "generate_uuid",
    "utc_now",
    # Value Objects
    "ValueObject",
    "Email",
    "TimeRange",
    "StatusEnum",
    "as_utc",
    "format_utc",
    # Exceptions
    "DomainException",
    "ValidationException",
    "EntityNotFoundException",
    "InvalidOperationException",
    "ConflictException",
    "SlotUnavailableException",
    "SlotOverlapException",
    "SlotReservedException",
    "DuplicateEntityException",
    "EntityInUseException",
    "ConcurrencyException",
    "CancellationWindowClosedException",
    "AuthenticationException",
    "AuthorizationException",
    "NotificationException",
]
