"""
Healthcare application DTOs shared by use cases and adapters.
"""

import math
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of an ordered listing (page numbers start at 0)."""

    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 0
    size: int = 25

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return math.ceil(self.total / self.size)


@dataclass(frozen=True)
class PageRequest:
    """Page number and size, validated by the caller."""

    page: int = 0
    size: int = 25

    @property
    def offset(self) -> int:
        return self.page * self.size


__all__ = ["Page", "PageRequest"]
