# =============================================================================
# app/exceptions.py - Error Types and the Error Normalizer
# =============================================================================
# Centralized exception handling for the API.
#
# Every failure that reaches a client passes through normalize_error(), which
# turns it into an AppError. The handlers registered by
# register_exception_handlers() are the only code that writes an error body:
#
#   {"error": {"code": "CONFLICT", "message": "...", "details": ...}}
#
# Services and validators raise AppError (or let ORM errors propagate);
# they never build error responses themselves.
# =============================================================================

import logging
from enum import Enum
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError
from sqlalchemy.orm.exc import StaleDataError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Machine-readable error codes exposed to clients."""
    UNAUTHORIZED = "UNAUTHORIZED"
    BAD_REQUEST = "BAD_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Base Error
# =============================================================================

class AppError(Exception):
    """
    Typed API error.

    Carries everything the error envelope needs: HTTP status, a machine
    readable code, a human readable message and optional details.
    """

    def __init__(
        self,
        status_code: int,
        code: ErrorCode | str,
        message: str,
        details: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.code = code.value if isinstance(code, ErrorCode) else code
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to the API error envelope."""
        error: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details is not None:
            error["details"] = self.details
        return {"error": error}


class BadRequestError(AppError):
    """Malformed or out-of-range input, or a broken business rule."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(400, ErrorCode.BAD_REQUEST, message, details)


class UnauthorizedError(AppError):
    """Missing, invalid or expired credentials."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(401, ErrorCode.UNAUTHORIZED, message, details)


class NotFoundError(AppError):
    """Referenced entity or route does not exist."""

    def __init__(self, message: str = "Resource not found", details: Any = None):
        super().__init__(404, ErrorCode.NOT_FOUND, message, details)


class ConflictError(AppError):
    """Uniqueness violation or a delete blocked by dependents."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(409, ErrorCode.CONFLICT, message, details)


class InternalError(AppError):
    """Storage failure or other server-side problem."""

    def __init__(self, message: str = "Internal server error", details: Any = None):
        super().__init__(500, ErrorCode.INTERNAL_ERROR, message, details)


class StorageUploadError(InternalError):
    """Raised when an object cannot be written to the storage bucket."""

    def __init__(self, error: str):
        super().__init__("Failed to upload image", details=error)


class PayloadTooLargeError(Exception):
    """
    Raised when a request body exceeds the configured size limit.

    Deliberately not an AppError: the normalizer maps it on its own, before
    the AppError pass-through.
    """


PAYLOAD_TOO_LARGE_MESSAGE = "Upload payload too large. Max 10 images, 5MB each."


# =============================================================================
# Integrity Error Classification
# =============================================================================

# https://www.postgresql.org/docs/current/errcodes-appendix.html
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"

_UNIQUE_KEYWORDS = ("unique constraint", "unique failed", "unique violation", "duplicate")
_FOREIGN_KEY_KEYWORDS = ("foreign key constraint", "foreign key", "is not present in table")


def classify_integrity_error(exc: IntegrityError) -> str | None:
    """
    Return "unique", "foreign_key" or None for an IntegrityError.

    Postgres drivers expose the SQLSTATE (pgcode / sqlstate); other drivers
    (SQLite) only give a message, so fall back to keyword matching.
    """
    orig = exc.orig
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)

    if sqlstate == UNIQUE_VIOLATION:
        return "unique"
    if sqlstate == FOREIGN_KEY_VIOLATION:
        return "foreign_key"
    if sqlstate:
        logger.warning("Unknown integrity error code encountered", extra={"sqlstate": sqlstate})
        return None

    message = str(orig).lower()
    if any(keyword in message for keyword in _UNIQUE_KEYWORDS):
        return "unique"
    if any(keyword in message for keyword in _FOREIGN_KEY_KEYWORDS):
        return "foreign_key"

    logger.warning("Unknown integrity error message encountered", extra={"message_snippet": message[:200]})
    return None


def _constraint_details(exc: IntegrityError) -> dict[str, Any] | None:
    """Constraint name when the driver reports one (never the raw message)."""
    diag = getattr(exc.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None) or getattr(exc.orig, "constraint_name", None)
    return {"constraint": constraint} if constraint else None


# =============================================================================
# Normalizer
# =============================================================================

_HTTP_STATUS_CODES = {
    400: ErrorCode.BAD_REQUEST,
    401: ErrorCode.UNAUTHORIZED,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.NOT_FOUND,
    409: ErrorCode.CONFLICT,
    413: ErrorCode.BAD_REQUEST,
    422: ErrorCode.BAD_REQUEST,
}


def _normalize_http_exception(exc: StarletteHTTPException) -> AppError:
    code = _HTTP_STATUS_CODES.get(exc.status_code)

    if code is ErrorCode.NOT_FOUND:
        return NotFoundError("Route not found")
    if exc.status_code == 413:
        return BadRequestError(PAYLOAD_TOO_LARGE_MESSAGE)
    if code is None:
        if exc.status_code < 500:
            return BadRequestError(str(exc.detail))
        return InternalError()
    return AppError(exc.status_code, code, str(exc.detail))


def normalize_error(exc: Exception, *, expose_internal: bool = False) -> AppError:
    """
    Map any exception to an AppError.

    Order matters:
    1. Oversized payloads
    2. AppError (passed through verbatim)
    3. ORM errors (integrity, not found, anything else)
    4. Framework errors (body validation, unknown routes)
    5. Everything else -> INTERNAL_ERROR

    Args:
        exc: The caught exception
        expose_internal: Attach the underlying message to unexpected errors
            (development only)

    Returns:
        AppError describing the response to send
    """
    if isinstance(exc, PayloadTooLargeError):
        return BadRequestError(PAYLOAD_TOO_LARGE_MESSAGE)

    if isinstance(exc, AppError):
        return exc

    if isinstance(exc, IntegrityError):
        kind = classify_integrity_error(exc)
        details = _constraint_details(exc)
        if kind == "unique":
            return ConflictError("Resource already exists", details)
        if kind == "foreign_key":
            return BadRequestError("Invalid relation reference", details)
        return InternalError("Database request failed", details)

    if isinstance(exc, (NoResultFound, StaleDataError)):
        return NotFoundError("Resource not found")

    if isinstance(exc, SQLAlchemyError):
        return InternalError("Database request failed")

    if isinstance(exc, RequestValidationError):
        errors = [
            {"loc": list(error.get("loc", ())), "message": error.get("msg", "")}
            for error in exc.errors()
        ]
        return BadRequestError("Invalid request", errors)

    if isinstance(exc, StarletteHTTPException):
        return _normalize_http_exception(exc)

    return InternalError(
        "Internal server error",
        str(exc) if expose_internal else None,
    )


def error_response(error: AppError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# =============================================================================
# Exception Handlers
# =============================================================================

async def handle_exception(request: Request, exc: Exception) -> JSONResponse:
    """
    Terminal handler: normalize the exception and render the envelope.

    Unexpected errors (500s) are logged with their traceback.
    """
    settings = request.app.state.settings
    error = normalize_error(exc, expose_internal=not settings.is_production)

    if error.status_code >= 500:
        logger.exception(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc)
    else:
        logger.debug(f"{request.method} {request.url.path} -> {error.status_code} {error.code}")

    return error_response(error)


def register_exception_handlers(app: FastAPI) -> None:
    """Route every exception type through handle_exception."""
    for exc_class in (
        AppError,
        SQLAlchemyError,
        RequestValidationError,
        StarletteHTTPException,
        Exception,
    ):
        app.add_exception_handler(exc_class, handle_exception)
