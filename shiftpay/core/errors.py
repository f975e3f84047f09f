"""
Central error handling for ShiftPay Backend

Business-rule violations are raised as DomainError subclasses so the UI can
tell a locked roster or an illegal status change apart from a generic
validation or persistence failure.
"""
import logging
import traceback

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)

_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "*",
    "Access-Control-Allow-Headers": "*",
}


class DomainError(Exception):
    """Base class for business-rule violations"""

    status_code = status.HTTP_409_CONFLICT
    error_code = "BUSINESS_RULE_VIOLATION"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class RosterLockedError(DomainError):
    """Roster can no longer be edited (locked or fulfilled by an approved working hour)"""

    error_code = "ROSTER_LOCKED"


class InvalidStatusTransitionError(DomainError):
    error_code = "INVALID_STATUS_TRANSITION"

    def __init__(self, entity: str, current: str, target: str):
        super().__init__(f"Cannot change {entity} status from '{current}' to '{target}'")
        self.entity = entity
        self.current = current
        self.target = target


class RecordImmutableError(DomainError):
    """Paid records are frozen"""

    error_code = "RECORD_IMMUTABLE"


class WorkingHourInUseError(DomainError):
    """Working hour backs a payroll or an approved roster and cannot be changed"""

    error_code = "WORKING_HOUR_IN_USE"


class StaleRecordError(DomainError):
    """Caller's version does not match the stored version"""

    error_code = "STALE_RECORD"

    def __init__(self, entity: str, expected: int, actual: int):
        super().__init__(
            f"{entity} was modified by someone else (expected version {expected}, found {actual})"
        )
        self.expected = expected
        self.actual = actual


class PermissionSetConflictError(DomainError):
    """Permission matrix changed between read and save"""

    error_code = "PERMISSION_SET_CONFLICT"


async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
    """
    Handle DomainError with a distinct error_code

    Args:
        request: FastAPI request object
        exc: DomainError instance

    Returns:
        JSONResponse with error details
    """
    logger.warning("Business rule violation on %s: %s", request.url.path, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "status_code": exc.status_code,
            "error_code": exc.error_code,
            "detail": exc.detail,
            "path": str(request.url.path)
        },
        headers=_CORS_HEADERS,
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """
    Handle HTTPException with consistent JSON response format

    Args:
        request: FastAPI request object
        exc: HTTPException instance

    Returns:
        JSONResponse with error details
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "status_code": exc.status_code,
            "detail": exc.detail,
            "path": str(request.url.path)
        },
        headers=_CORS_HEADERS,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle RequestValidationError with consistent JSON response format

    Does not leak internal validation details in production.
    """
    from shiftpay.core.config import settings

    if settings.APP_ENV == "prod":
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": True,
                "status_code": 422,
                "detail": "Validation error: Invalid request data",
                "path": str(request.url.path)
            }
        )

    # Sanitize for JSON: e.g. ctx.error ValueError -> str
    errors = []
    for e in exc.errors():
        err = dict(e)
        if "ctx" in err and isinstance(err["ctx"], dict):
            err["ctx"] = {
                k: (str(v) if not isinstance(v, (str, int, float, bool, type(None))) else v)
                for k, v in err["ctx"].items()
            }
        errors.append(err)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": True,
            "status_code": 422,
            "detail": "Validation error",
            "errors": errors,
            "path": str(request.url.path)
        }
    )


async def integrity_exception_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """
    Handle constraint violations reported by the database on commit
    """
    from shiftpay.core.config import settings

    logger.error("Integrity error on %s: %s", request.url.path, exc.orig)
    detail = "Constraint violation"
    if settings.APP_ENV != "prod":
        detail = f"Constraint violation: {exc.orig}"
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "error": True,
            "status_code": 409,
            "detail": detail,
            "path": str(request.url.path)
        },
        headers=_CORS_HEADERS,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions with consistent JSON response format

    Does not leak internal error details in production.
    """
    from shiftpay.core.config import settings

    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    if settings.APP_ENV == "prod":
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": True,
                "status_code": 500,
                "detail": "Internal server error",
                "path": str(request.url.path)
            },
            headers=_CORS_HEADERS,
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": True,
            "status_code": 500,
            "detail": str(exc),
            "path": str(request.url.path),
            "traceback": traceback.format_exc() if settings.APP_ENV == "local" else None
        },
        headers=_CORS_HEADERS,
    )
