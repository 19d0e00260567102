"""
Authentication Use Cases

Login over the three account kinds and patient self-registration.
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from app.config.settings import Settings
from app.core.domain import AuthenticationException, Email
from app.domains.healthcare.application.ports import IDoctorRepository, IPatientRepository
from app.domains.healthcare.application.use_cases.manage_patients import PatientData, PatientUseCases
from app.domains.healthcare.domain.value_objects import UserRole
from app.services.token_service import TokenService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Credenciales inválidas"


@dataclass(frozen=True)
class AuthenticatedAccount:
    """Account matched by a successful login."""

    email: str
    role: UserRole
    account_id: UUID | None
    token: str


class AuthenticateUseCase:
    """
    Check credentials and issue an access token.

    Patients are looked up first, then doctors, then the configured admin
    account. Every failure yields the same 401 so that existing emails are
    not disclosed.
    """

    def __init__(
        self,
        patient_repository: IPatientRepository,
        doctor_repository: IDoctorRepository,
        token_service: TokenService,
        settings: Settings,
    ):
        self.patient_repo = patient_repository
        self.doctor_repo = doctor_repository
        self.token_service = token_service
        self.settings = settings

    async def execute(self, email: str, password: str) -> AuthenticatedAccount:
        try:
            normalized = str(Email(email))
        except ValueError as e:
            raise AuthenticationException(INVALID_CREDENTIALS_MESSAGE) from e

        patient = await self.patient_repo.find_by_email(normalized)
        if patient:
            return self._issue(normalized, password, patient.password_hash, UserRole.PATIENT, patient.id)

        doctor = await self.doctor_repo.find_by_email(normalized)
        if doctor:
            return self._issue(normalized, password, doctor.password_hash, UserRole.DOCTOR, doctor.id)

        admin_email = (self.settings.ADMIN_EMAIL or "").strip().lower()
        if admin_email and normalized == admin_email:
            return self._issue(normalized, password, self.settings.ADMIN_PASSWORD_HASH or "", UserRole.ADMIN, None)

        logger.info(f"Login rejected for unknown account {normalized}")
        raise AuthenticationException(INVALID_CREDENTIALS_MESSAGE)

    def _issue(
        self,
        email: str,
        password: str,
        password_hash: str,
        role: UserRole,
        account_id: UUID | None,
    ) -> AuthenticatedAccount:
        if not self.token_service.verify_password(password, password_hash):
            logger.info(f"Login rejected for {email}: wrong password")
            raise AuthenticationException(INVALID_CREDENTIALS_MESSAGE)
        token = self.token_service.create_access_token(email, role, account_id)
        logger.info(f"Login succeeded for {email} ({role.value})")
        return AuthenticatedAccount(email=email, role=role, account_id=account_id, token=token)


class RegisterPatientUseCase:
    """Public patient sign-up returning a token for the new account."""

    def __init__(self, patient_use_cases: PatientUseCases, token_service: TokenService):
        self.patients = patient_use_cases
        self.token_service = token_service

    async def execute(self, data: PatientData, password: str) -> AuthenticatedAccount:
        patient = await self.patients.register(data, password)
        token = self.token_service.create_access_token(patient.email, UserRole.PATIENT, patient.id)
        return AuthenticatedAccount(email=patient.email, role=UserRole.PATIENT, account_id=patient.id, token=token)
