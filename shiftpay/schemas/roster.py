"""
Roster schemas
"""
from datetime import date, datetime, time
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, model_validator, field_serializer, ConfigDict

from shiftpay.models.roster import RosterStatus
from shiftpay.schemas.profile import ProfileRef
from shiftpay.schemas.client import ClientRef, ProjectRef


class RosterCreate(BaseModel):
    """Schema for scheduling a roster entry"""
    name: str = Field(..., min_length=1, description="Roster name")
    profile_ids: List[int] = Field(..., description="Assigned profiles (at least one)")
    client_id: int
    project_id: int
    start_date: date
    end_date: Optional[date] = None
    start_time: time
    end_time: time
    expected_profiles: int = Field(default=1, ge=1, description="Headcount target")
    per_hour_rate: Decimal = Field(default=Decimal("0"), ge=0)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_dates(self) -> "RosterCreate":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class RosterUpdate(BaseModel):
    """Schema for editing an unlocked roster entry"""
    name: Optional[str] = Field(None, min_length=1)
    profile_ids: Optional[List[int]] = Field(None, description="Replaces the assigned profile set")
    client_id: Optional[int] = None
    project_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    expected_profiles: Optional[int] = Field(None, ge=1)
    per_hour_rate: Optional[Decimal] = Field(None, ge=0)
    notes: Optional[str] = None
    version: Optional[int] = Field(None, ge=1, description="Expected current version (optimistic check)")


class RosterStatusUpdate(BaseModel):
    status: RosterStatus
    version: Optional[int] = Field(None, ge=1)


class RosterOut(BaseModel):
    """Roster output; is_editable is recomputed on every read"""
    id: int
    name: str
    client_id: int
    project_id: int
    start_date: date
    end_date: Optional[date]
    start_time: time
    end_time: time
    total_hours: Decimal
    expected_profiles: int
    per_hour_rate: Decimal
    notes: Optional[str]
    status: RosterStatus
    is_locked: bool
    is_editable: bool
    version: int
    profiles: List[ProfileRef] = []
    client: Optional[ClientRef] = None
    project: Optional[ProjectRef] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", "updated_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt):
        from shiftpay.utils.datetime_utils import iso_local
        return iso_local(dt) if dt is not None else None
