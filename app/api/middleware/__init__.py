"""
Middleware package for FastAPI application.

Contains request logging middleware.
"""

from app.api.middleware.logging_middleware import RequestLoggingMiddleware, correlation_id

__all__ = [
    "RequestLoggingMiddleware",
    "correlation_id",
]
