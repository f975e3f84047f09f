"""
Bank account schemas
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class BankAccountCreate(BaseModel):
    """Schema for creating a bank account (profile_id omitted = company account)"""
    profile_id: Optional[int] = Field(None, description="Owner profile ID; null for company accounts")
    bank_name: str = Field(..., min_length=1)
    account_number: str = Field(..., min_length=1)
    is_primary: bool = Field(default=False)


class BankAccountUpdate(BaseModel):
    bank_name: Optional[str] = Field(None, min_length=1)
    account_number: Optional[str] = Field(None, min_length=1)
    is_primary: Optional[bool] = None


class BankAccountRef(BaseModel):
    id: int
    bank_name: str
    account_number: str

    model_config = ConfigDict(from_attributes=True)


class BankAccountOut(BaseModel):
    id: int
    profile_id: Optional[int]
    bank_name: str
    account_number: str
    is_primary: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
