"""
Role permission service - persisted permission matrix
"""
import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shiftpay.core.errors import PermissionSetConflictError
from shiftpay.models.role_permission import RolePermission
from shiftpay.services.permission_matrix import (
    PermissionMatrix,
    flatten,
    group_permissions,
    normalize,
    revision_of,
)

logger = logging.getLogger(__name__)


def _stored_pairs(db: Session) -> Set[Tuple[str, str]]:
    return {(row.role, row.permission) for row in db.query(RolePermission).all()}


def list_permissions(db: Session) -> Tuple[PermissionMatrix, str]:
    """Load the matrix and its revision fingerprint."""
    pairs = _stored_pairs(db)
    return group_permissions(pairs), revision_of(pairs)


def save_permissions(
    db: Session,
    matrix: Dict[str, Iterable[str]],
    expected_revision: Optional[str] = None,
) -> Tuple[PermissionMatrix, str]:
    """
    Replace the stored permission set with matrix in one transaction.

    Missing pairs are inserted and pairs no longer present are deleted, so a
    failure leaves the previous set intact.

    Raises:
        HTTPException: 400 on unknown roles or permissions
        PermissionSetConflictError: If expected_revision no longer matches
    """
    try:
        desired = flatten(normalize(matrix))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    rows = db.query(RolePermission).all()
    current = {(row.role, row.permission) for row in rows}
    if expected_revision is not None and expected_revision != revision_of(current):
        raise PermissionSetConflictError(
            "Role permissions were changed by someone else; reload and try again"
        )

    removed: List[RolePermission] = [r for r in rows if (r.role, r.permission) not in desired]
    added = sorted(desired - current)
    for row in removed:
        db.delete(row)
    for role, permission in added:
        db.add(RolePermission(role=role, permission=permission))

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise

    logger.info("Saved role permissions: %s granted, %s revoked", len(added), len(removed))
    return list_permissions(db)
