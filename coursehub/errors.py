"""Domain error taxonomy and its translation into the response envelope.

Services raise the exceptions below; each FastAPI application installs the
handlers from :func:`install_error_handlers` so that every failure leaves the
process as ``{"success": false, "data": null, "error": "<message>"}``.
"""

from __future__ import annotations

import logging
from enum import Enum

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base class for errors that map onto a client-facing envelope."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class DuplicateAccount(ServiceError):
    default_message = "User with this email already exists"


class InvalidCredentials(ServiceError):
    default_message = "Invalid email or password"


class NotFound(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "not found"


class ValidationFailure(ServiceError):
    default_message = "invalid input"


class AlreadyEnrolled(ServiceError):
    default_message = "User is already enrolled in this course"


class RateLimited(ServiceError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = "rate limited"


class TokenError(str, Enum):
    """Reason attached to a :class:`TokenRejected` error."""

    MISSING = "missing"
    MALFORMED = "malformed"
    BAD_SIGNATURE = "bad_signature"
    EXPIRED = "expired"
    MISSING_CLAIMS = "missing_claims"


_TOKEN_MESSAGES = {
    TokenError.MISSING: "No token provided",
    TokenError.MALFORMED: "Invalid token",
    TokenError.BAD_SIGNATURE: "Invalid token",
    TokenError.EXPIRED: "Token expired",
    TokenError.MISSING_CLAIMS: "Invalid token",
}


class TokenRejected(ServiceError):
    """Raised when a bearer token is absent, malformed, forged or expired."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, reason: TokenError) -> None:
        self.reason = reason
        super().__init__(_TOKEN_MESSAGES[reason])


def error_envelope(message: str, status_code: int) -> JSONResponse:
    """Build the uniform failure envelope."""
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "data": None, "error": message},
    )


async def _handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
    if isinstance(exc, (TokenRejected, InvalidCredentials)):
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return error_envelope(exc.message, exc.status_code)


async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = "invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        detail = first.get("msg", message)
        message = f"{location}: {detail}" if location else detail
    return error_envelope(message, status.HTTP_400_BAD_REQUEST)


def install_error_handlers(app: FastAPI) -> None:
    """Register the envelope translators on ``app``."""
    app.add_exception_handler(ServiceError, _handle_service_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
