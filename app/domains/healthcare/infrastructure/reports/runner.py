"""
Background execution of report jobs.
"""

import logging
from typing import Awaitable, Callable
from uuid import UUID

from app.core.domain import DomainException

from .job_registry import ReportJobRegistry

logger = logging.getLogger(__name__)

ReportTask = Callable[[UUID, str], Awaitable[object]]


class ReportJobRunner:
    """
    Runs a report task and records its outcome in the registry.

    ``task(patient_id, file_name)`` performs the export with its own database
    session; the request that queued the job has already returned by then.
    """

    def __init__(self, registry: ReportJobRegistry, task: ReportTask):
        self.registry = registry
        self.task = task

    async def run(self, job_id: UUID) -> None:
        job = self.registry.get(job_id)
        self.registry.mark_running(job_id)
        try:
            await self.task(job.patient_id, job.file_name or f"{job_id}.csv")
        except DomainException as e:
            logger.warning(f"Report job {job_id} failed: {e.message}")
            self.registry.mark_failed(job_id, e.message)
            return
        except Exception:
            # Background task: nobody awaits it, so the failure is recorded on the job
            logger.exception(f"Report job {job_id} crashed")
            self.registry.mark_failed(job_id, "Error interno al generar el reporte")
            return
        self.registry.mark_completed(job_id)
        logger.info(f"Report job {job_id} completed")
