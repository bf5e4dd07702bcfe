"""Error Handlers — global exception handlers for the F1 Companion API.

Invariants:
    - F1CompanionError → structured JSON with error code, message, severity
    - IntegrityError → mapped by SQLSTATE (409 / 400) when it escapes a service
    - RequestValidationError → 400 with field-level error details
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Handlers registered from one function so main.py stays a wiring module
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError

from f1companion.core.errors import F1CompanionError, ErrorSeverity
from f1companion.infrastructure.database import map_integrity_error

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_integrity_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _domain_error_response(request: Request, exc: F1CompanionError) -> JSONResponse:
    extra = {
        "error_code": exc.code,
        "path": request.url.path,
        "status_code": exc.http_status,
        "user_id": exc.context.user_id,
        "team_id": exc.context.team_id,
        "league_id": exc.context.league_id,
    }
    if exc.http_status >= 500:
        logger.error(f"{type(exc).__name__}: {exc.message}", extra=extra)
    else:
        logger.warning(f"{type(exc).__name__}: {exc.message}", extra=extra)
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(F1CompanionError)
    async def domain_error_handler(request: Request, exc: F1CompanionError):
        """Handle all F1 Companion domain/infrastructure errors."""
        return _domain_error_response(request, exc)


def _register_integrity_error_handler(app: FastAPI) -> None:

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        return _domain_error_response(request, map_integrity_error(exc))


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path, "status_code": 400},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "status_code": 500},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
