"""Error taxonomy and the exception handlers that render it."""

import logging
from enum import Enum

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bluestar.config import get_settings

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Error codes returned in the ``error`` field of failed responses."""

    MISSING_FIELDS = "MISSING_FIELDS"
    INVALID_TYPE = "INVALID_TYPE"
    VALIDATION_ERR = "VALIDATION_ERR"
    USER_EXISTS = "USER_EXISTS"
    USER_NONEXISTENT = "USER_NONEXISTENT"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_TOKEN = "INVALID_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    UNAUTHORIZED = "UNAUTHORIZED"
    OTP_NOT_FOUND = "OTP_NOT_FOUND"
    OTP_EXPIRED = "OTP_EXPIRED"
    INVALID_OTP = "INVALID_OTP"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    DATABASE_ERROR = "DATABASE_ERROR"
    INTERNAL_ERR = "INTERNAL_ERR"


class APIError(HTTPException):
    """An HTTP error tagged with an ``ErrorKind``.

    ``details`` holds diagnostic text that is only exposed in development.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.kind = kind
        self.details = details

    @property
    def message(self) -> str:
        return self.detail


def error_response(
    kind: ErrorKind,
    message: str,
    status_code: int,
    details: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build the JSON error body shared by every failing endpoint."""
    content = {"status": "error", "error": kind.value, "message": message}
    if details and get_settings().is_development:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.kind.value} {exc.detail}")
    return error_response(exc.kind, exc.detail, exc.status_code, exc.details, exc.headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()))
        message = f"Invalid value for {location}" if location else message
    return error_response(ErrorKind.VALIDATION_ERR, message, status.HTTP_400_BAD_REQUEST)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(
        ErrorKind.INTERNAL_ERR,
        "Internal server error",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        details=repr(exc),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the taxonomy-aware handlers to the application."""
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
