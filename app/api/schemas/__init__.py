from .common import CamelModel, ErrorResponse, PageMetadata, PageResponse, UtcDateTime

__all__ = ["CamelModel", "ErrorResponse", "PageMetadata", "PageResponse", "UtcDateTime"]
