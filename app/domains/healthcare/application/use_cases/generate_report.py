"""
Appointment Report Use Case

Exports every appointment of a patient to a CSV file.
"""

import logging
from pathlib import Path
from uuid import UUID

from app.core.domain import EntityNotFoundException, format_utc
from app.domains.healthcare.application.ports import (
    IAppointmentRepository,
    IDoctorRepository,
    IPatientRepository,
    IReportWriter,
)

logger = logging.getLogger(__name__)

REPORT_HEADER = ("appointment_id", "start_time", "end_time", "status", "doctor", "reason", "created_at")


class GenerateAppointmentReportUseCase:
    """Build the CSV export of a patient's appointments ordered by slot start."""

    def __init__(
        self,
        patient_repository: IPatientRepository,
        doctor_repository: IDoctorRepository,
        appointment_repository: IAppointmentRepository,
        report_writer: IReportWriter,
    ):
        self.patient_repo = patient_repository
        self.doctor_repo = doctor_repository
        self.appointment_repo = appointment_repository
        self.writer = report_writer

    async def execute(self, patient_id: UUID, file_name: str) -> Path:
        if not await self.patient_repo.exists(patient_id):
            raise EntityNotFoundException(entity_type="Patient", entity_id=patient_id)

        appointments = await self.appointment_repo.list_all_by_patient(patient_id)

        doctor_names: dict[UUID, str] = {}
        rows = []
        for appointment in appointments:
            if appointment.doctor_id not in doctor_names:
                doctor = await self.doctor_repo.find_by_id(appointment.doctor_id)
                doctor_names[appointment.doctor_id] = doctor.full_name if doctor else ""
            rows.append(
                (
                    str(appointment.id),
                    format_utc(appointment.start_time),
                    format_utc(appointment.end_time),
                    appointment.status.value,
                    doctor_names[appointment.doctor_id],
                    appointment.reason or "",
                    format_utc(appointment.created_at),
                )
            )

        path = self.writer.write(file_name, REPORT_HEADER, rows)
        logger.info(f"Report for patient {patient_id} written to {path} ({len(rows)} rows)")
        return path
