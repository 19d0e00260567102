"""
Configuration Module

Application configuration settings and utilities.
"""

from app.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
