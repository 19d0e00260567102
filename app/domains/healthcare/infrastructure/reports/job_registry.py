"""
In-memory registry of report generation jobs.

State lives in the process: jobs are lost on restart and are not shared
between workers.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from app.core.domain import EntityNotFoundException, StatusEnum, utc_now

logger = logging.getLogger(__name__)


class ReportJobStatus(StatusEnum):
    PENDING = "PENDING"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass
class ReportJob:
    """A single report request and its outcome."""

    job_id: UUID
    patient_id: UUID
    requested_by: str | None = None
    status: ReportJobStatus = ReportJobStatus.PENDING
    file_name: str | None = None
    error: str | None = None
    created_at: datetime = field(default_factory=utc_now)
    finished_at: datetime | None = None


class ReportJobRegistry:
    """Tracks report jobs by id."""

    def __init__(self):
        self._jobs: dict[UUID, ReportJob] = {}

    def create(self, patient_id: UUID, requested_by: str | None = None) -> ReportJob:
        job = ReportJob(job_id=uuid4(), patient_id=patient_id, requested_by=requested_by)
        job.file_name = f"citas_{patient_id}_{job.job_id}.csv"
        self._jobs[job.job_id] = job
        logger.info(f"Report job {job.job_id} queued for patient {patient_id}")
        return job

    def get(self, job_id: UUID) -> ReportJob:
        job = self._jobs.get(job_id)
        if job is None:
            raise EntityNotFoundException(entity_type="ReportJob", entity_id=job_id)
        return job

    def mark_running(self, job_id: UUID) -> None:
        self.get(job_id).status = ReportJobStatus.RUNNING

    def mark_completed(self, job_id: UUID) -> None:
        job = self.get(job_id)
        job.status = ReportJobStatus.COMPLETED
        job.finished_at = utc_now()

    def mark_failed(self, job_id: UUID, error: str) -> None:
        job = self.get(job_id)
        job.status = ReportJobStatus.FAILED
        job.error = error
        job.finished_at = utc_now()
