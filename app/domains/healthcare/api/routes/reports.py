"""
Report routes: asynchronous CSV export of a patient's appointments.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Query, Response, status

from app.api.dependencies import CurrentUser, ensure_owner_or_admin
from app.config.settings import get_settings
from app.domains.healthcare.api.dependencies import ReportJobRunnerDep, ReportRegistryDep
from app.domains.healthcare.api.schemas import ReportJobResponse

router = APIRouter(prefix="/reportes", tags=["Reports"])


@router.post("/citas-csv", response_model=ReportJobResponse, status_code=status.HTTP_202_ACCEPTED)
async def request_appointment_report(
    response: Response,
    background_tasks: BackgroundTasks,
    registry: ReportRegistryDep,
    runner: ReportJobRunnerDep,
    user: CurrentUser,
    patient_id: Annotated[UUID, Query(alias="patientId")],
):
    """Queue the CSV export; poll the Location header for its status."""
    ensure_owner_or_admin(user, patient_id, "patient report")
    job = registry.create(patient_id, requested_by=user.email)
    background_tasks.add_task(runner.run, job.job_id)

    response.headers["Location"] = f"{get_settings().API_V1_STR}/reportes/estado/{job.job_id}"
    return ReportJobResponse.from_job(job)


@router.get("/estado/{job_id}", response_model=ReportJobResponse)
async def get_report_status(job_id: UUID, registry: ReportRegistryDep, user: CurrentUser):
    job = registry.get(job_id)
    ensure_owner_or_admin(user, job.patient_id, "patient report")
    return ReportJobResponse.from_job(job)
