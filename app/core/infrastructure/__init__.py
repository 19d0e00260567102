"""
Core Infrastructure Module

Cross-cutting infrastructure patterns for fault tolerance.
"""

from app.core.infrastructure.retry import RetryConfig, RetryExhaustedError, Retryer

__all__ = [
    "RetryConfig",
    "RetryExhaustedError",
    "Retryer",
]
