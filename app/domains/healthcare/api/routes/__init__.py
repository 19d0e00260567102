"""
Healthcare API Routes

FastAPI routers for the appointment booking endpoints.
"""

from fastapi import APIRouter

from . import appointments, auth, availability, doctors, patients, reports, specialties

router = APIRouter()

router.include_router(auth.router)
router.include_router(specialties.router)
router.include_router(availability.router)
router.include_router(appointments.router)
router.include_router(doctors.router)
router.include_router(patients.router)
router.include_router(reports.router)

__all__ = ["router"]
