"""
Services Module

Cross-cutting services shared by every domain. Password hashing and JWT
issuing live in TokenService; domain logic lives in use cases under
app/domains/.
"""

from .token_service import TokenService

__all__ = [
    "TokenService",
]
