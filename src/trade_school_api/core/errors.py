"""Error taxonomy and the process-wide error-handling boundary.

Every failure that escapes a route is turned into an error envelope here:

* validation failures (structured or stringified) → 400
* ``AuthError`` → 401
* ``NotFoundError`` → 404 with a minimal ``{"error": ...}`` body
* framework HTTP errors (unknown route, wrong method) → their own status
* anything else → 500, with the traceback only outside production
"""

import traceback
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from trade_school_api.core.config import Settings
from trade_school_api.core.security import TokenFailureReason
from trade_school_api.core.validation import (
    RequestValidationFailed,
    build_validation_envelope,
    parse_serialized_errors,
    to_error_entries,
)
from trade_school_api.schemas.common import ErrorEnvelope

INTERNAL_ERROR_LABEL = "Internal Server Error"
UNAUTHORIZED_LABEL = "Unauthorized"
GENERIC_INTERNAL_MESSAGE = "An unexpected error occurred"

_AUTH_MESSAGES: dict[str, str] = {
    "missing": "Authentication token required. Please login first.",
    "invalid": "Invalid or expired token. Please login again.",
    "expired": "Invalid or expired token. Please login again.",
}


class AuthError(Exception):
    """The request carries no valid credential."""

    def __init__(self, reason: TokenFailureReason = "missing", message: str | None = None) -> None:
        self.reason = reason
        self.message = message or _AUTH_MESSAGES[reason]
        super().__init__(self.message)


class NotFoundError(Exception):
    """A referenced record does not exist."""

    def __init__(self, resource: str = "Record") -> None:
        self.resource = resource
        super().__init__(f"{resource} not found")


def _envelope(status_code: int, error: str, message: str, details: str | None = None) -> dict:
    return ErrorEnvelope(
        status_code=status_code,
        error=error,
        message=message,
        details=details,
    ).model_dump(mode="json", by_alias=True, exclude_none=True)


def auth_error_response(exc: AuthError) -> JSONResponse:
    """Render the 401 response for an auth failure."""
    return JSONResponse(
        status_code=401,
        content=_envelope(401, UNAUTHORIZED_LABEL, exc.message),
        headers={"WWW-Authenticate": "Bearer"},
    )


def internal_error_response(exc: Exception, *, include_trace: bool) -> JSONResponse:
    """Render the 500 response for an unexpected failure."""
    trace = "".join(traceback.format_exception(exc)) if include_trace else None
    return JSONResponse(
        status_code=500,
        content=_envelope(500, INTERNAL_ERROR_LABEL, str(exc) or GENERIC_INTERNAL_MESSAGE, trace),
    )


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Install the error normalizer on the application.

    Args:
        app: The FastAPI application.
        settings: Application settings; ``is_production`` hides tracebacks.
    """
    include_trace = not settings.is_production

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        entries = to_error_entries(exc.errors())
        logger.info(f"Validation failed for {request.method} {request.url.path}: {len(entries)} error(s)")
        return JSONResponse(status_code=400, content=build_validation_envelope(entries))

    @app.exception_handler(RequestValidationFailed)
    async def validation_failed_handler(request: Request, exc: RequestValidationFailed) -> JSONResponse:
        logger.info(f"Validation failed for {request.method} {request.url.path} ({exc.part or 'request'})")
        return JSONResponse(status_code=400, content=build_validation_envelope(exc.entries))

    @app.exception_handler(ValidationError)
    async def pydantic_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
        entries = to_error_entries(exc.errors(include_url=False))
        return JSONResponse(status_code=400, content=build_validation_envelope(entries))

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
        logger.info(f"Rejected {request.method} {request.url.path}: token {exc.reason}")
        return auth_error_response(exc)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        try:
            label = HTTPStatus(exc.status_code).phrase
        except ValueError:
            label = "Error"
        return JSONResponse(
            status_code=exc.status_code,
            content=_envelope(exc.status_code, label, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        entries = parse_serialized_errors(str(exc))
        if entries:
            return JSONResponse(status_code=400, content=build_validation_envelope(entries))
        logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
        return internal_error_response(exc, include_trace=include_trace)
