"""
Common API Schemas

Base model, timestamp type and envelopes shared by every endpoint.
"""

from datetime import datetime
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from app.core.domain import format_utc

T = TypeVar("T")

# Serialized as yyyy-MM-ddTHH:mm:ssZ
UtcDateTime = Annotated[datetime, PlainSerializer(format_utc, return_type=str, when_used="json")]


class CamelModel(BaseModel):
    """snake_case attributes exposed as camelCase JSON fields."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(CamelModel):
    """Error body returned by every failing endpoint."""

    code: str
    message: str
    field_errors: dict[str, str] | None = None
    timestamp: str
    http_status: int


class PageMetadata(CamelModel):
    total_elements: int
    total_pages: int
    current_page: int
    page_size: int


class PageResponse(CamelModel, Generic[T]):
    """Paginated listing."""

    content: list[T] = Field(default_factory=list)
    metadata: PageMetadata
