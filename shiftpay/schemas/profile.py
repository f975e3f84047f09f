"""
Profile schemas
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator, field_serializer, ConfigDict

from shiftpay.constants import ROLE_VALUES, ROLE_EMPLOYEE


def _validate_role(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip().lower()
    if v not in ROLE_VALUES:
        raise ValueError(f"role must be one of {sorted(ROLE_VALUES)}")
    return v


class ProfileCreate(BaseModel):
    """Schema for creating a profile"""
    full_name: str = Field(..., min_length=1, description="Full name")
    email: str = Field(..., min_length=3, description="Email address (unique)")
    role: str = Field(default=ROLE_EMPLOYEE, description="Role identifier")
    hourly_rate: Optional[Decimal] = Field(None, ge=0, description="Default hourly rate")
    is_active: bool = Field(default=True, description="Whether the profile is active")

    @field_validator("role")
    @classmethod
    def validate_role(cls, v):
        return _validate_role(v)


class ProfileUpdate(BaseModel):
    """Schema for updating a profile"""
    full_name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, min_length=3)
    role: Optional[str] = None
    hourly_rate: Optional[Decimal] = Field(None, ge=0)
    is_active: Optional[bool] = None

    @field_validator("role")
    @classmethod
    def validate_role(cls, v):
        return _validate_role(v)


class ProfileRef(BaseModel):
    """Minimal profile for joined views"""
    id: int
    full_name: str
    email: str
    role: str

    model_config = ConfigDict(from_attributes=True)


class ProfileOut(BaseModel):
    """Schema for profile output"""
    id: int
    full_name: str
    email: str
    role: str
    hourly_rate: Optional[Decimal]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", "updated_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt):
        from shiftpay.utils.datetime_utils import iso_local
        return iso_local(dt) if dt is not None else None
