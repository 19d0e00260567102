"""
Domain Exceptions for Domain-Driven Design

These exceptions represent business rule violations and domain-specific errors.
They are raised where the violation is detected and translated to HTTP
responses by the API layer (see app.api.exception_handlers).
"""

from typing import Any


class DomainException(Exception):
    """
    Base exception for all domain-related errors.

    Provides a standardized way to communicate business rule violations.
    """

    def __init__(self, message: str, code: str | None = None, details: dict[str, Any] | None = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "SLOT_UNAVAILABLE")
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__.upper()
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(DomainException):
    """
    Raised when domain validation fails.

    Use for invalid entity states, value object creation failures, etc.
    """

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        details = details or {}
        if field:
            details[field] = message
        super().__init__(message, "VALIDATION_ERROR", details)
        self.field = field


class EntityNotFoundException(DomainException):
    """
    Raised when an entity is not found.
    """

    def __init__(
        self,
        entity_type: str,
        entity_id: Any,
        message: str | None = None,
    ):
        self.entity_type = entity_type
        self.entity_id = entity_id
        msg = message or f"{entity_type} with ID {entity_id} not found"
        super().__init__(
            msg,
            "ENTITY_NOT_FOUND",
            {"entity_type": entity_type, "entity_id": str(entity_id)},
        )


class InvalidOperationException(DomainException):
    """Raised when an operation is not valid in the current state."""

    def __init__(self, operation: str, current_state: str, message: str | None = None):
        self.operation = operation
        self.current_state = current_state
        msg = message or f"Cannot perform '{operation}' in state '{current_state}'"
        super().__init__(
            msg,
            "INVALID_OPERATION",
            {"operation": operation, "current_state": current_state},
        )


class ConflictException(DomainException):
    """Base class for business conflicts (HTTP 409)."""

    def __init__(self, message: str, code: str = "CONFLICT", details: dict[str, Any] | None = None):
        super().__init__(message, code, details)


class SlotUnavailableException(ConflictException):
    """Raised when a slot cannot be claimed: already reserved or owned by another doctor."""

    def __init__(self, slot_id: Any, message: str | None = None, doctor_id: Any = None):
        self.slot_id = slot_id
        self.doctor_id = doctor_id
        details: dict[str, Any] = {"slot_id": str(slot_id)}
        if doctor_id is not None:
            details["doctor_id"] = str(doctor_id)
        super().__init__(
            message or f"Slot {slot_id} is no longer available",
            "SLOT_UNAVAILABLE",
            details,
        )


class SlotOverlapException(DomainException):
    """Raised when a new slot overlaps an existing slot of the same doctor (HTTP 400)."""

    def __init__(self, doctor_id: Any, start: Any, end: Any):
        self.doctor_id = doctor_id
        super().__init__(
            "El nuevo horario se superpone con otro horario del doctor.",
            "SLOT_OVERLAP",
            {"doctor_id": str(doctor_id), "start_time": str(start), "end_time": str(end)},
        )


class SlotReservedException(DomainException):
    """Raised when deleting a slot that is reserved or referenced by an appointment (HTTP 400)."""

    def __init__(self, slot_id: Any):
        self.slot_id = slot_id
        super().__init__(
            "No se puede eliminar un horario reservado o con citas asociadas.",
            "SLOT_RESERVED",
            {"slot_id": str(slot_id)},
        )


class DuplicateEntityException(ConflictException):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: Any):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(
            f"{entity_type} with {field}='{value}' already exists",
            "DUPLICATE_ENTITY",
            {
                "entity_type": entity_type,
                "field": field,
                "value": str(value),
            },
        )


class EntityInUseException(ConflictException):
    """Raised when deleting an entity that other records still reference."""

    def __init__(self, entity_type: str, entity_id: Any, dependents: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(
            f"{entity_type} {entity_id} cannot be deleted while it has {dependents}",
            "ENTITY_IN_USE",
            {"entity_type": entity_type, "entity_id": str(entity_id), "dependents": dependents},
        )


class ConcurrencyException(ConflictException):
    """Raised when a concurrent transaction prevented the operation from completing."""

    def __init__(self, operation: str, attempts: int = 1, reason: str | None = None):
        self.operation = operation
        self.attempts = attempts
        details: dict[str, Any] = {"operation": operation, "attempts": attempts}
        if reason:
            details["reason"] = reason
        super().__init__(
            f"Concurrent modification prevented '{operation}', please retry",
            "CONCURRENCY_CONFLICT",
            details,
        )


class CancellationWindowClosedException(DomainException):
    """Raised when an appointment is cancelled too close to its start time."""

    CODE = "APPOINTMENT_CANCELLATION_WINDOW_CLOSED"

    def __init__(self, remaining_hours: int, window_hours: int):
        self.remaining_hours = remaining_hours
        self.window_hours = window_hours
        super().__init__(
            f"La cita solo puede ser cancelada con al menos {window_hours} horas de antelación.",
            self.CODE,
            {
                "remainingHours": remaining_hours,
                "detail": f"Horas restantes: {remaining_hours}",
            },
        )


class AuthenticationException(DomainException):
    """Raised when the caller could not be authenticated."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(DomainException):
    """Raised when a user is not authorized to perform an operation."""

    def __init__(self, operation: str, resource: str | None = None, user_id: str | None = None):
        self.operation = operation
        self.resource = resource
        self.user_id = user_id
        msg = f"Not authorized to perform '{operation}'"
        if resource:
            msg += f" on '{resource}'"
        super().__init__(
            msg,
            "AUTHORIZATION_ERROR",
            {
                "operation": operation,
                "resource": resource,
            },
        )


class NotificationException(DomainException):
    """Raised by a notification channel when delivery fails."""

    def __init__(self, channel: str, message: str, original_error: Exception | None = None):
        self.channel = channel
        self.original_error = original_error
        details: dict[str, Any] = {"channel": channel}
        if original_error:
            details["original_error"] = str(original_error)
        super().__init__(message, "NOTIFICATION_ERROR", details)
