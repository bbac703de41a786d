"""Exception handlers rendering every failure in the response envelope."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.exceptions import EmployeeServiceError, StoreUnavailableError, ValidationFailedError
from schemas.employee import ErrorEnvelope

logger = logging.getLogger(__name__)


def _envelope(status_code: int, body: ErrorEnvelope, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


def _format_location(loc: tuple) -> str:
    # Drop the "body"/"query"/"path" prefix FastAPI adds
    parts = [str(part) for part in loc[1:]] or [str(part) for part in loc]
    return ".".join(parts)


async def employee_error_handler(request: Request, exc: EmployeeServiceError) -> JSONResponse:
    """Render domain errors with their own status code."""
    body = ErrorEnvelope(message=exc.message)
    if isinstance(exc, ValidationFailedError):
        body.errors = exc.errors
    elif isinstance(exc, StoreUnavailableError):
        body.error = exc.diagnostic
    return _envelope(exc.status_code, body)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTPExceptions (authentication, routing) in the envelope."""
    return _envelope(exc.status_code, ErrorEnvelope(message=str(exc.detail)), getattr(exc, "headers", None))


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies or query parameters are client errors."""
    errors = [f"{_format_location(tuple(error['loc']))}: {error['msg']}" for error in exc.errors()]
    return _envelope(
        status.HTTP_400_BAD_REQUEST,
        ErrorEnvelope(message="Validation error", errors=errors),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for failures nothing else caught."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ErrorEnvelope(message="Server error", error=str(exc)),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the application."""
    app.add_exception_handler(EmployeeServiceError, employee_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
