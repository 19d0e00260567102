"""
Application lifecycle management using modern FastAPI lifespan pattern.

This module follows SRP by handling only application startup/shutdown logic.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config.settings import Settings, get_settings
from app.core.container import get_container
from app.database.async_db import create_tables, dispose_engine

logger = logging.getLogger(__name__)


class LifecycleManager:
    """
    Manages application lifecycle events.

    Handles startup initialization and graceful shutdown.
    Separates concerns from the main application factory.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize lifecycle manager."""
        self._settings = settings or get_settings()
        self._initialized = False

    async def startup(self) -> None:
        """
        Execute startup tasks.

        Called when the application starts.
        """
        if self._initialized:
            logger.warning("Lifecycle already initialized, skipping startup")
            return

        logger.info("Starting application lifecycle...")

        # Verify critical configurations
        self._verify_configurations()

        if self._settings.DB_CREATE_TABLES:
            await create_tables()

        # Build the notification channel once, at startup
        get_container().base.get_notification_service()

        self._initialized = True
        logger.info("Application lifecycle startup completed")

    async def shutdown(self) -> None:
        """
        Execute shutdown tasks.

        Called when the application stops.
        """
        if not self._initialized:
            logger.warning("Lifecycle not initialized, skipping shutdown")
            return

        logger.info("Stopping application lifecycle...")

        await get_container().close()
        await dispose_engine()

        self._initialized = False
        logger.info("Application lifecycle shutdown completed")

    def _verify_configurations(self) -> None:
        """Verify critical application configurations."""
        settings = self._settings
        if settings.NOTIFICATION_CHANNEL == "email" and not settings.SMTP_HOST:
            logger.warning("SMTP_HOST not configured - email notifications will only be logged")
        if settings.NOTIFICATION_CHANNEL == "sms" and not (
            settings.TWILIO_ACCOUNT_SID and settings.TWILIO_AUTH_TOKEN and settings.TWILIO_FROM_NUMBER
        ):
            logger.warning("Twilio credentials not configured - SMS notifications will only be logged")
        if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD_HASH:
            logger.warning("ADMIN_EMAIL/ADMIN_PASSWORD_HASH not configured - admin login disabled")
        logger.info(f"Cancellation window: {settings.CANCELLATION_WINDOW_HOURS}h")


# Global lifecycle manager instance
_lifecycle_manager: LifecycleManager | None = None


def get_lifecycle_manager() -> LifecycleManager:
    """Get or create the global lifecycle manager instance."""
    global _lifecycle_manager
    if _lifecycle_manager is None:
        _lifecycle_manager = LifecycleManager()
    return _lifecycle_manager


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Modern FastAPI lifespan context manager.

    Usage:
        app = FastAPI(lifespan=lifespan)
    """
    lifecycle = get_lifecycle_manager()

    # Startup
    await lifecycle.startup()

    yield  # Application runs here

    # Shutdown
    await lifecycle.shutdown()
