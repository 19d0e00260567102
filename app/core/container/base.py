# ============================================================================
# SCOPE: GLOBAL
# Description: Contenedor base con singletons compartidos (notificaciones,
#              política de cancelación, tokens, registro de reportes).
# ============================================================================
"""
Base Container - Shared Singletons.

Single Responsibility: Manage process-wide resources shared by every request.
"""

import logging

from app.config.settings import Settings, get_settings
from app.domains.healthcare.application.ports import INotificationService
from app.domains.healthcare.domain.services import CancellationPolicy
from app.domains.healthcare.infrastructure.notifications import create_notification_service
from app.domains.healthcare.infrastructure.reports import CsvReportWriter, ReportJobRegistry
from app.services.token_service import TokenService

logger = logging.getLogger(__name__)


class BaseContainer:
    """
    Base container for shared singletons.

    Single Responsibility: Create and cache shared resources.
    """

    def __init__(self, settings: Settings | None = None):
        """
        Initialize base container.

        Args:
            settings: Optional settings (defaults to the global settings)
        """
        self.settings = settings or get_settings()

        # Singletons
        self._notification_service: INotificationService | None = None
        self._cancellation_policy: CancellationPolicy | None = None
        self._token_service: TokenService | None = None
        self._report_registry: ReportJobRegistry | None = None
        self._report_writer: CsvReportWriter | None = None

        logger.info("BaseContainer initialized")

    def get_notification_service(self) -> INotificationService:
        """Get the active notification channel (singleton)."""
        if self._notification_service is None:
            logger.info(f"Creating notification service for channel: {self.settings.NOTIFICATION_CHANNEL}")
            self._notification_service = create_notification_service(self.settings)
        return self._notification_service

    def set_notification_service(self, service: INotificationService) -> None:
        """Replace the notification channel (tests, alternative transports)."""
        self._notification_service = service

    def get_cancellation_policy(self) -> CancellationPolicy:
        """Get cancellation policy (singleton)."""
        if self._cancellation_policy is None:
            self._cancellation_policy = CancellationPolicy(window_hours=self.settings.CANCELLATION_WINDOW_HOURS)
        return self._cancellation_policy

    def set_cancellation_policy(self, policy: CancellationPolicy) -> None:
        self._cancellation_policy = policy

    def get_token_service(self) -> TokenService:
        """Get token service (singleton)."""
        if self._token_service is None:
            self._token_service = TokenService(self.settings)
        return self._token_service

    def get_report_registry(self) -> ReportJobRegistry:
        """Get report job registry (singleton, in-memory)."""
        if self._report_registry is None:
            self._report_registry = ReportJobRegistry()
        return self._report_registry

    def get_report_writer(self) -> CsvReportWriter:
        if self._report_writer is None:
            self._report_writer = CsvReportWriter(self.settings.REPORTS_DIR)
        return self._report_writer

    async def close(self) -> None:
        """Release singletons holding external resources."""
        if self._notification_service is not None:
            await self._notification_service.close()
