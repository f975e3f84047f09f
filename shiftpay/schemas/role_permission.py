"""
Role permission schemas
"""
from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class PermissionMatrixOut(BaseModel):
    """Role -> granted permissions, plus a revision fingerprint for conflict detection"""
    permissions: Dict[str, List[str]]
    revision: str


class PermissionMatrixSave(BaseModel):
    permissions: Dict[str, List[str]] = Field(..., description="Complete role -> permissions mapping")
    expected_revision: Optional[str] = Field(
        None, description="Revision read before editing; save is rejected if it changed meanwhile"
    )


class PermissionGroupOut(BaseModel):
    category: str
    permissions: List[str]
    description: str


class RoleOptionOut(BaseModel):
    value: str
    label: str


class PermissionCatalogOut(BaseModel):
    groups: List[PermissionGroupOut]
    roles: List[RoleOptionOut]
