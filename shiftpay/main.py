"""
ShiftPay Backend - Main Application Entry Point
"""
import logging
from urllib.parse import urlparse, urlunparse

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, OperationalError

from shiftpay.api.router import api_router
from shiftpay.core.config import settings
from shiftpay.core.constants import DEFAULT_VERSION
from shiftpay.core.errors import (
    DomainError,
    domain_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    integrity_exception_handler,
    generic_exception_handler,
)
from shiftpay.core.logging import setup_logging

# Setup logging first
setup_logging()
logger = logging.getLogger(__name__)


def _mask_database_url(url: str) -> str:
    """Mask password in DATABASE_URL for safe logging; show full path for sqlite."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return "***"
    if parsed.scheme.startswith("sqlite") or not parsed.password:
        return url
    netloc = f"{parsed.username}:****@{parsed.hostname or ''}"
    if parsed.port:
        netloc += f":{parsed.port}"
    return urlunparse(parsed._replace(netloc=netloc))


app = FastAPI(
    title="ShiftPay Backend",
    description="Working hours, rosters and payroll for a workforce-management UI",
    version=settings.VERSION or DEFAULT_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)


async def operational_exception_handler(request: Request, exc: OperationalError) -> JSONResponse:
    """Missing tables usually mean migrations were not applied."""
    if "no such table" in str(exc).lower() or "does not exist" in str(exc).lower():
        logger.error("Database schema missing on %s: %s", request.url.path, exc.orig)
        return JSONResponse(
            status_code=500,
            content={
                "error": True,
                "status_code": 500,
                "detail": "Run alembic upgrade head",
                "path": str(request.url.path),
            },
        )
    return await generic_exception_handler(request, exc)


# Register exception handlers
app.add_exception_handler(DomainError, domain_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(IntegrityError, integrity_exception_handler)
app.add_exception_handler(OperationalError, operational_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Include all API routes under /api/v1
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
def startup_log_config() -> None:
    """Log DATABASE_URL at startup so it can be verified against Alembic."""
    logger.info("DATABASE_URL (app): %s", _mask_database_url(settings.DATABASE_URL))
    logger.info(
        "Pay rules: daily_threshold=%s overtime_multiplier=%s default_deduction=%s",
        settings.DAILY_OVERTIME_THRESHOLD_HOURS,
        settings.OVERTIME_MULTIPLIER,
        settings.DEFAULT_DEDUCTION_PERCENT,
    )
