"""
Exception handlers for FastAPI application.

This module follows SRP by centralizing all exception handling logic.
Every error leaves the API with the same body:
``{code, message, fieldErrors, timestamp, httpStatus}``.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from app.api.middleware import correlation_id
from app.core.domain import (
    AuthenticationException,
    AuthorizationException,
    CancellationWindowClosedException,
    ConflictException,
    DomainException,
    EntityNotFoundException,
    InvalidOperationException,
    NotificationException,
    SlotOverlapException,
    SlotReservedException,
    ValidationException,
    format_utc,
    utc_now,
)

logger = logging.getLogger(__name__)

# Checked along the exception MRO, most specific class first
DOMAIN_STATUS_CODES: dict[type[DomainException], int] = {
    ValidationException: status.HTTP_400_BAD_REQUEST,
    InvalidOperationException: status.HTTP_400_BAD_REQUEST,
    SlotOverlapException: status.HTTP_400_BAD_REQUEST,
    SlotReservedException: status.HTTP_400_BAD_REQUEST,
    AuthenticationException: status.HTTP_401_UNAUTHORIZED,
    AuthorizationException: status.HTTP_403_FORBIDDEN,
    CancellationWindowClosedException: status.HTTP_403_FORBIDDEN,
    EntityNotFoundException: status.HTTP_404_NOT_FOUND,
    ConflictException: status.HTTP_409_CONFLICT,
    NotificationException: status.HTTP_502_BAD_GATEWAY,
}

# Lost races and booking policy rejections
WARNING_EXCEPTIONS: tuple[type[DomainException], ...] = (
    ConflictException,
    CancellationWindowClosedException,
    SlotOverlapException,
    SlotReservedException,
)

HTTP_STATUS_CODES: dict[int, str] = {
    400: "BAD_REQUEST",
    401: "AUTHENTICATION_ERROR",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
}


def error_body(
    code: str,
    message: str,
    http_status: int,
    field_errors: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Build the error payload shared by every handler."""
    return {
        "code": code,
        "message": message,
        "fieldErrors": field_errors or None,
        "timestamp": format_utc(utc_now()),
        "httpStatus": http_status,
    }


def status_for(exc: DomainException) -> int:
    for cls in type(exc).__mro__:
        if cls in DOMAIN_STATUS_CODES:
            return DOMAIN_STATUS_CODES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def domain_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Translate domain exceptions into HTTP responses."""
    if not isinstance(exc, DomainException):
        return await global_exception_handler(request, exc)

    http_status = status_for(exc)
    if http_status >= 500:
        logger.error(
            f"[{correlation_id(request)}] {exc.code} on {request.method} {request.url.path}: {exc.message}",
            exc_info=exc,
        )
        return JSONResponse(
            status_code=http_status,
            content=error_body(exc.code, "Error interno del servidor", http_status),
        )

    field_errors = None
    if isinstance(exc, ValidationException):
        field_errors = {k: str(v) for k, v in exc.details.items()}
    elif isinstance(exc, CancellationWindowClosedException):
        field_errors = {"detail": exc.details["detail"]}

    log_level = logging.WARNING if isinstance(exc, WARNING_EXCEPTIONS) else logging.INFO
    logger.log(
        log_level,
        f"[{correlation_id(request)}] {exc.code} on {request.method} {request.url.path}: {exc.message}",
    )

    headers = {"WWW-Authenticate": "Bearer"} if http_status == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=http_status,
        content=error_body(exc.code, exc.message, http_status, field_errors),
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle HTTPException with consistent response format."""
    http_exc = exc if isinstance(exc, HTTPException) else HTTPException(status_code=500, detail=str(exc))
    code = HTTP_STATUS_CODES.get(http_exc.status_code, "HTTP_ERROR")
    return JSONResponse(
        status_code=http_exc.status_code,
        content=error_body(code, str(http_exc.detail), http_exc.status_code),
        headers=http_exc.headers,
    )


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle request validation errors, reported as 400 with one message per field."""
    if not isinstance(exc, RequestValidationError):
        return await global_exception_handler(request, exc)

    field_errors: dict[str, str] = {}
    for error in exc.errors():
        # Drop the "body"/"query"/"path" prefix so keys match the JSON field names
        loc = [str(part) for part in error["loc"][1:]] or [str(part) for part in error["loc"]]
        field_errors.setdefault(".".join(loc), error["msg"])

    logger.warning(f"[{correlation_id(request)}] Validation error on {request.url.path}: {field_errors}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(
            "VALIDATION_ERROR",
            "La solicitud contiene datos inválidos",
            status.HTTP_400_BAD_REQUEST,
            field_errors,
        ),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle all unhandled exceptions.

    Logs the full exception with traceback and returns a safe error response.
    """
    logger.error(
        f"[{correlation_id(request)}] Unhandled exception on {request.method} {request.url.path}: {exc!s}",
        exc_info=exc,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            "INTERNAL_ERROR",
            "Error interno del servidor",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    logger.info("Exception handlers registered")
