"""
Healthcare Domain Container.

Single Responsibility: Wire all healthcare domain dependencies.
"""

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.database.async_db import get_async_db_context
from app.database.transactions import SQLAlchemyTransactionManager
from app.domains.healthcare.application.use_cases import (
    AppointmentNotifier,
    AuthenticateUseCase,
    BookAppointmentUseCase,
    CancelAppointmentUseCase,
    CreateSlotUseCase,
    DeleteSlotUseCase,
    DoctorUseCases,
    GenerateAppointmentReportUseCase,
    GetAppointmentUseCase,
    GetDoctorAgendaUseCase,
    GetSlotUseCase,
    ListDoctorAppointmentsUseCase,
    ListPatientAppointmentsUseCase,
    ListSlotsUseCase,
    PatientUseCases,
    RegisterPatientUseCase,
    SpecialtyUseCases,
)
from app.domains.healthcare.infrastructure.reports import ReportJobRunner
from app.domains.healthcare.infrastructure.repositories import (
    SQLAlchemyAppointmentRepository,
    SQLAlchemyAvailabilityRepository,
    SQLAlchemyDoctorRepository,
    SQLAlchemyPatientRepository,
    SQLAlchemySpecialtyRepository,
)

if TYPE_CHECKING:
    from app.core.container.base import BaseContainer

logger = logging.getLogger(__name__)


class HealthcareContainer:
    """
    Healthcare domain container.

    Single Responsibility: Create healthcare repositories and use cases.
    Repositories and use cases are built per request session.
    """

    def __init__(self, base: "BaseContainer"):
        """
        Initialize healthcare container.

        Args:
            base: BaseContainer with shared singletons
        """
        self._base = base

    # ==================== INFRASTRUCTURE ====================

    def create_transaction_manager(self, db: AsyncSession) -> SQLAlchemyTransactionManager:
        settings = self._base.settings
        return SQLAlchemyTransactionManager(
            db,
            max_attempts=settings.DB_RETRY_MAX_ATTEMPTS,
            initial_delay=settings.DB_RETRY_INITIAL_DELAY,
        )

    def create_notifier(self) -> AppointmentNotifier:
        return AppointmentNotifier(self._base.get_notification_service())

    # ==================== REPOSITORIES ====================

    def create_specialty_repository(self, db) -> SQLAlchemySpecialtyRepository:
        """Create Specialty Repository."""
        return SQLAlchemySpecialtyRepository(session=db)

    def create_doctor_repository(self, db) -> SQLAlchemyDoctorRepository:
        """Create Doctor Repository."""
        return SQLAlchemyDoctorRepository(session=db)

    def create_patient_repository(self, db) -> SQLAlchemyPatientRepository:
        """Create Patient Repository."""
        return SQLAlchemyPatientRepository(session=db)

    def create_availability_repository(self, db) -> SQLAlchemyAvailabilityRepository:
        """Create Availability Repository."""
        return SQLAlchemyAvailabilityRepository(session=db)

    def create_appointment_repository(self, db) -> SQLAlchemyAppointmentRepository:
        """Create Appointment Repository."""
        return SQLAlchemyAppointmentRepository(session=db)

    # ==================== USE CASES ====================

    def create_book_appointment_use_case(self, db) -> BookAppointmentUseCase:
        """Create BookAppointmentUseCase with dependencies."""
        return BookAppointmentUseCase(
            doctor_repository=self.create_doctor_repository(db),
            patient_repository=self.create_patient_repository(db),
            availability_repository=self.create_availability_repository(db),
            appointment_repository=self.create_appointment_repository(db),
            transaction_manager=self.create_transaction_manager(db),
            notifier=self.create_notifier(),
        )

    def create_cancel_appointment_use_case(self, db) -> CancelAppointmentUseCase:
        """Create CancelAppointmentUseCase with dependencies."""
        return CancelAppointmentUseCase(
            appointment_repository=self.create_appointment_repository(db),
            availability_repository=self.create_availability_repository(db),
            doctor_repository=self.create_doctor_repository(db),
            patient_repository=self.create_patient_repository(db),
            transaction_manager=self.create_transaction_manager(db),
            policy=self._base.get_cancellation_policy(),
            notifier=self.create_notifier(),
        )

    def create_get_appointment_use_case(self, db) -> GetAppointmentUseCase:
        return GetAppointmentUseCase(self.create_appointment_repository(db))

    def create_list_patient_appointments_use_case(self, db) -> ListPatientAppointmentsUseCase:
        return ListPatientAppointmentsUseCase(
            self.create_patient_repository(db),
            self.create_appointment_repository(db),
        )

    def create_list_doctor_appointments_use_case(self, db) -> ListDoctorAppointmentsUseCase:
        return ListDoctorAppointmentsUseCase(
            self.create_doctor_repository(db),
            self.create_appointment_repository(db),
        )

    def create_get_doctor_agenda_use_case(self, db) -> GetDoctorAgendaUseCase:
        return GetDoctorAgendaUseCase(
            self.create_doctor_repository(db),
            self.create_appointment_repository(db),
        )

    def create_create_slot_use_case(self, db) -> CreateSlotUseCase:
        return CreateSlotUseCase(self.create_availability_repository(db), self.create_transaction_manager(db))

    def create_list_slots_use_case(self, db) -> ListSlotsUseCase:
        return ListSlotsUseCase(self.create_doctor_repository(db), self.create_availability_repository(db))

    def create_get_slot_use_case(self, db) -> GetSlotUseCase:
        return GetSlotUseCase(self.create_availability_repository(db))

    def create_delete_slot_use_case(self, db) -> DeleteSlotUseCase:
        return DeleteSlotUseCase(self.create_availability_repository(db), self.create_transaction_manager(db))

    def create_specialty_use_cases(self, db) -> SpecialtyUseCases:
        return SpecialtyUseCases(self.create_specialty_repository(db), self.create_transaction_manager(db))

    def create_doctor_use_cases(self, db) -> DoctorUseCases:
        return DoctorUseCases(
            doctor_repository=self.create_doctor_repository(db),
            patient_repository=self.create_patient_repository(db),
            specialty_repository=self.create_specialty_repository(db),
            token_service=self._base.get_token_service(),
            transaction_manager=self.create_transaction_manager(db),
        )

    def create_patient_use_cases(self, db) -> PatientUseCases:
        return PatientUseCases(
            patient_repository=self.create_patient_repository(db),
            doctor_repository=self.create_doctor_repository(db),
            token_service=self._base.get_token_service(),
            transaction_manager=self.create_transaction_manager(db),
        )

    def create_authenticate_use_case(self, db) -> AuthenticateUseCase:
        return AuthenticateUseCase(
            patient_repository=self.create_patient_repository(db),
            doctor_repository=self.create_doctor_repository(db),
            token_service=self._base.get_token_service(),
            settings=self._base.settings,
        )

    def create_register_patient_use_case(self, db) -> RegisterPatientUseCase:
        return RegisterPatientUseCase(self.create_patient_use_cases(db), self._base.get_token_service())

    def create_generate_report_use_case(self, db) -> GenerateAppointmentReportUseCase:
        return GenerateAppointmentReportUseCase(
            patient_repository=self.create_patient_repository(db),
            doctor_repository=self.create_doctor_repository(db),
            appointment_repository=self.create_appointment_repository(db),
            report_writer=self._base.get_report_writer(),
        )

    # ==================== BACKGROUND JOBS ====================

    async def _generate_report(self, patient_id: UUID, file_name: str) -> None:
        # Background jobs outlive the request, so they open their own session
        async with get_async_db_context() as db:
            await self.create_generate_report_use_case(db).execute(patient_id, file_name)

    def create_report_job_runner(self) -> ReportJobRunner:
        return ReportJobRunner(self._base.get_report_registry(), self._generate_report)
