"""
Base Value Object Classes for Domain-Driven Design

Value Objects are immutable domain primitives that have no identity.
They are compared by their values, not by reference.
"""

from abc import ABC
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Self


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for all value objects.

    Value objects are:
    - Immutable (frozen=True)
    - Compared by value (dataclass equality)
    - Have no identity
    """

    def __post_init__(self):
        """Override to add validation logic."""
        self._validate()

    def _validate(self) -> None:
        """Validate the value object. Override in subclasses."""
        pass


@dataclass(frozen=True)
class Email(ValueObject):
    """
    Email address value object.

    Validates and normalizes email addresses.
    """

    address: str

    def _validate(self) -> None:
        if not self.address or "@" not in self.address:
            raise ValueError(f"Invalid email address: {self.address}")
        # Normalize to lowercase
        object.__setattr__(self, "address", self.address.lower().strip())

    def __str__(self) -> str:
        return self.address


@dataclass(frozen=True)
class TimeRange(ValueObject):
    """
    Half-open time interval [start, end) in UTC.

    Both bounds must be timezone-aware; start must be strictly before end.
    """

    start: datetime
    end: datetime

    def _validate(self) -> None:
        if self.start.tzinfo is None or self.end.tzinfo is None:
            raise ValueError("TimeRange bounds must be timezone-aware")
        if self.start >= self.end:
            raise ValueError("TimeRange start must be before its end")

    def __str__(self) -> str:
        return f"{self.start.isoformat()} - {self.end.isoformat()}"


def as_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to aware UTC with second precision.

    Naive values are interpreted as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).replace(microsecond=0)


UTC_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def format_utc(value: datetime) -> str:
    """Render a datetime as `yyyy-MM-ddTHH:mm:ssZ`."""
    return as_utc(value).strftime(UTC_TIMESTAMP_FORMAT)


class StatusEnum(str, Enum):
    """
    Base class for status enums.

    Provides common functionality for all status value objects.
    """

    @classmethod
    def values(cls) -> list[str]:
        """Get all possible values."""
        return [e.value for e in cls]

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Create from string value (case-insensitive)."""
        for member in cls:
            if member.value.lower() == value.lower():
                return member
        raise ValueError(f"Invalid {cls.__name__}: {value}")
