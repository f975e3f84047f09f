"""
Version and metadata endpoint
"""
from fastapi import APIRouter

from shiftpay.core.config import settings
from shiftpay.core.constants import DEFAULT_VERSION, SERVICE_NAME

router = APIRouter()


@router.get("/version")
async def get_version():
    """
    Get application version and metadata

    Returns:
        Service name, version (git SHA or semver) and environment
    """
    return {
        "service": SERVICE_NAME,
        "version": settings.VERSION or DEFAULT_VERSION,
        "env": settings.APP_ENV,
        "overnight_policy": settings.OVERNIGHT_POLICY,
    }
