"""
Role permission endpoints
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shiftpay.constants import PERMISSION_GROUPS, ROLES
from shiftpay.core.deps import get_db
from shiftpay.schemas.role_permission import (
    PermissionCatalogOut,
    PermissionMatrixOut,
    PermissionMatrixSave,
)
from shiftpay.services.role_permission_service import list_permissions, save_permissions

router = APIRouter()


def _matrix_out(matrix, revision) -> PermissionMatrixOut:
    return PermissionMatrixOut(
        permissions={role: sorted(perms) for role, perms in matrix.items()},
        revision=revision,
    )


@router.get("", response_model=PermissionMatrixOut)
async def get_role_permissions_endpoint(db: Session = Depends(get_db)):
    """Current matrix with its revision; send the revision back when saving"""
    return _matrix_out(*list_permissions(db))


@router.get("/catalog", response_model=PermissionCatalogOut)
async def get_permission_catalog_endpoint():
    return {"groups": PERMISSION_GROUPS, "roles": ROLES}


@router.put("", response_model=PermissionMatrixOut)
async def save_role_permissions_endpoint(data: PermissionMatrixSave, db: Session = Depends(get_db)):
    """
    Replace the whole permission set atomically

    Returns 409 PERMISSION_SET_CONFLICT when expected_revision is stale.
    """
    return _matrix_out(*save_permissions(db, data.permissions, data.expected_revision))
