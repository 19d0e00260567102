from fastapi import APIRouter

from app.api.schemas import ErrorResponse
from app.domains.healthcare.api.routes import router as healthcare_router

# Documented error bodies, produced by app.api.exception_handlers
ERROR_RESPONSES: dict[int | str, dict] = {code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 409)}

api_router = APIRouter()

# API routes (all have /api/v1 prefix from the app factory)
api_router.include_router(healthcare_router, responses=ERROR_RESPONSES)
