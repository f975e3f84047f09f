"""
Client and project schemas
"""
from datetime import datetime
from typing import Optional, Literal
from pydantic import BaseModel, Field, field_serializer, ConfigDict

RecordStatus = Literal["active", "inactive"]


class ClientCreate(BaseModel):
    """Schema for creating a client"""
    name: str = Field(..., min_length=1, description="Client contact name")
    company: Optional[str] = Field(None, description="Company name")
    email: Optional[str] = None
    phone: Optional[str] = None
    status: RecordStatus = Field(default="active")


class ClientUpdate(BaseModel):
    """Schema for updating a client"""
    name: Optional[str] = Field(None, min_length=1)
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[RecordStatus] = None


class ClientRef(BaseModel):
    id: int
    name: str
    company: Optional[str]

    model_config = ConfigDict(from_attributes=True)


class ClientOut(BaseModel):
    id: int
    name: str
    company: Optional[str]
    email: Optional[str]
    phone: Optional[str]
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", "updated_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt):
        from shiftpay.utils.datetime_utils import iso_local
        return iso_local(dt) if dt is not None else None


class ProjectCreate(BaseModel):
    """Schema for creating a project"""
    name: str = Field(..., min_length=1)
    client_id: int = Field(..., description="Owning client ID")
    status: RecordStatus = Field(default="active")


class ProjectUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    client_id: Optional[int] = None
    status: Optional[RecordStatus] = None


class ProjectRef(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class ProjectOut(BaseModel):
    id: int
    name: str
    client_id: int
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", "updated_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt):
        from shiftpay.utils.datetime_utils import iso_local
        return iso_local(dt) if dt is not None else None
