"""
Main API router
"""
from fastapi import APIRouter

from shiftpay.api.v1 import (
    health,
    version,
    profiles,
    clients,
    projects,
    bank_accounts,
    working_hours,
    rosters,
    payroll,
    role_permissions,
    reports,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(version.router, tags=["version"])
api_router.include_router(profiles.router, prefix="/profiles", tags=["profiles"])
api_router.include_router(clients.router, prefix="/clients", tags=["clients"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(bank_accounts.router, prefix="/bank-accounts", tags=["bank-accounts"])
api_router.include_router(working_hours.router, prefix="/working-hours", tags=["working-hours"])
api_router.include_router(rosters.router, prefix="/rosters", tags=["rosters"])
api_router.include_router(payroll.router, prefix="/payroll", tags=["payroll"])
api_router.include_router(role_permissions.router, prefix="/role-permissions", tags=["role-permissions"])
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
