"""
Healthcare Domain Services
"""

from .cancellation_policy import CancellationPolicy, whole_hours_between

__all__ = [
    "CancellationPolicy",
    "whole_hours_between",
]
