"""
Working hour schemas
"""
import datetime as dt
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_serializer, ConfigDict

from shiftpay.models.working_hour import WorkingHourStatus
from shiftpay.schemas.profile import ProfileRef
from shiftpay.schemas.client import ClientRef, ProjectRef


class WorkingHourCreate(BaseModel):
    """Schema for logging working hours (derived fields are computed server-side)"""
    profile_id: int = Field(..., description="Worker profile ID")
    client_id: int = Field(..., description="Client ID")
    project_id: int = Field(..., description="Project ID (must belong to the client)")
    roster_id: Optional[int] = Field(None, description="Roster entry this log fulfils")
    date: dt.date = Field(..., description="Work date")
    start_time: dt.time = Field(..., description="Start clock time (HH:MM)")
    end_time: dt.time = Field(..., description="End clock time (HH:MM)")
    sign_in_time: Optional[dt.time] = None
    sign_out_time: Optional[dt.time] = None
    actual_hours: Optional[Decimal] = Field(
        None, ge=0, le=24, description="Worker-confirmed hours; defaults to the start/end span"
    )
    hourly_rate: Optional[Decimal] = Field(
        None, ge=0, description="Hourly rate; defaults to the profile's rate"
    )
    notes: Optional[str] = None


class WorkingHourUpdate(BaseModel):
    """Schema for editing a working hour entry"""
    client_id: Optional[int] = None
    project_id: Optional[int] = None
    roster_id: Optional[int] = None
    date: Optional[dt.date] = None
    start_time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None
    sign_in_time: Optional[dt.time] = None
    sign_out_time: Optional[dt.time] = None
    actual_hours: Optional[Decimal] = Field(None, ge=0, le=24)
    hourly_rate: Optional[Decimal] = Field(None, ge=0)
    notes: Optional[str] = None
    version: Optional[int] = Field(None, ge=1, description="Expected current version (optimistic check)")


class WorkingHourStatusUpdate(BaseModel):
    status: WorkingHourStatus
    version: Optional[int] = Field(None, ge=1)


class WorkingHourOut(BaseModel):
    """Working hour output with joined profile/client/project"""
    id: int
    profile_id: int
    client_id: int
    project_id: int
    roster_id: Optional[int]
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    sign_in_time: Optional[dt.time]
    sign_out_time: Optional[dt.time]
    total_hours: Decimal
    actual_hours: Decimal
    overtime_hours: Decimal
    hourly_rate: Decimal
    payable_amount: Decimal
    notes: Optional[str]
    status: WorkingHourStatus
    version: int
    created_at: dt.datetime
    updated_at: dt.datetime
    profile: Optional[ProfileRef] = None
    client: Optional[ClientRef] = None
    project: Optional[ProjectRef] = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", "updated_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, value):
        from shiftpay.utils.datetime_utils import iso_local
        return iso_local(value) if value is not None else None
