"""
Authentication routes: login and patient self-registration.
"""

from fastapi import APIRouter, status

from app.domains.healthcare.api.dependencies import AuthenticateUseCaseDep, RegisterPatientUseCaseDep
from app.domains.healthcare.api.schemas import LoginRequest, PatientRegistrationRequest, TokenResponse
from app.domains.healthcare.application.use_cases import PatientData

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/registro/paciente", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register_patient(request: PatientRegistrationRequest, use_case: RegisterPatientUseCaseDep):
    """Registrar un paciente nuevo y devolver su token."""
    account = await use_case.execute(
        PatientData(
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            phone=request.phone,
        ),
        request.password,
    )
    return TokenResponse(token=account.token)


@router.post("/autenticar", response_model=TokenResponse)
async def authenticate(request: LoginRequest, use_case: AuthenticateUseCaseDep):
    """Autenticar con email y contraseña."""
    account = await use_case.execute(request.email, request.password)
    return TokenResponse(token=account.token)
