"""
Database models package - declarative base and shared column mixins
"""

from .base import AuditMixin, Base, TimestampMixin, UTCDateTime

__all__ = [
    "Base",
    "TimestampMixin",
    "AuditMixin",
    "UTCDateTime",
]
