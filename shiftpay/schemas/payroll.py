"""
Payroll schemas
"""
from datetime import date, datetime
from decimal import Decimal
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, model_validator, field_serializer, ConfigDict

from shiftpay.models.payroll import PayrollStatus
from shiftpay.schemas.profile import ProfileRef
from shiftpay.schemas.bank_account import BankAccountRef
from shiftpay.schemas.working_hour import WorkingHourOut
from shiftpay.services.payroll_computation import DeductionPolicy


class DeductionPolicyIn(BaseModel):
    """
    Deduction strategy:
    - {"kind": "flat_percent", "value": 0.1} deducts 10% of gross pay
    - {"kind": "manual", "value": 125.50} deducts the given amount
    """
    kind: Literal["flat_percent", "manual"]
    value: Decimal = Field(..., ge=0)

    @model_validator(mode="after")
    def check_value(self) -> "DeductionPolicyIn":
        self.to_policy()
        return self

    def to_policy(self) -> DeductionPolicy:
        return DeductionPolicy.from_kind(self.kind, self.value)


class PayrollCreate(BaseModel):
    """
    Schema for generating a payroll record.

    Hours come from total_hours when given, otherwise from the listed
    working_hour_ids, otherwise from the profile's approved and not yet
    payrolled working hours inside the pay period.
    """
    profile_id: int
    pay_period_start: date
    pay_period_end: date
    total_hours: Optional[Decimal] = Field(None, ge=0)
    hourly_rate: Optional[Decimal] = Field(None, ge=0, description="Defaults to the profile's rate")
    working_hour_ids: Optional[List[int]] = None
    deduction_policy: Optional[DeductionPolicyIn] = Field(
        None, description="Defaults to flat DEFAULT_DEDUCTION_PERCENT of gross"
    )
    bank_account_id: Optional[int] = Field(None, description="Defaults to the primary company account")

    @model_validator(mode="after")
    def check_period(self) -> "PayrollCreate":
        if self.pay_period_start > self.pay_period_end:
            raise ValueError("pay_period_start must be on or before pay_period_end")
        if self.total_hours is not None and self.working_hour_ids:
            raise ValueError("Provide either total_hours or working_hour_ids, not both")
        return self


class PayrollUpdate(BaseModel):
    """Schema for editing a payroll record; gross and net are recalculated"""
    pay_period_start: Optional[date] = None
    pay_period_end: Optional[date] = None
    total_hours: Optional[Decimal] = Field(None, ge=0)
    hourly_rate: Optional[Decimal] = Field(None, ge=0)
    deductions: Optional[Decimal] = Field(None, ge=0, description="Manual deduction amount")
    deduction_policy: Optional[DeductionPolicyIn] = None
    bank_account_id: Optional[int] = None
    version: Optional[int] = Field(None, ge=1, description="Expected current version (optimistic check)")

    @model_validator(mode="after")
    def check_deductions(self) -> "PayrollUpdate":
        if self.deductions is not None and self.deduction_policy is not None:
            raise ValueError("Provide either deductions or deduction_policy, not both")
        return self


class PayrollStatusUpdate(BaseModel):
    status: PayrollStatus
    version: Optional[int] = Field(None, ge=1)


class PayrollOut(BaseModel):
    id: int
    profile_id: int
    bank_account_id: Optional[int]
    pay_period_start: date
    pay_period_end: date
    total_hours: Decimal
    hourly_rate: Decimal
    gross_pay: Decimal
    deductions: Decimal
    net_pay: Decimal
    status: PayrollStatus
    version: int
    profile: Optional[ProfileRef] = None
    bank_account: Optional[BankAccountRef] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("created_at", "updated_at", when_used="always")
    @classmethod
    def _ser_datetime(cls, dt):
        from shiftpay.utils.datetime_utils import iso_local
        return iso_local(dt) if dt is not None else None


class PayrollDetailOut(PayrollOut):
    """Payroll with the working hours it aggregates"""
    working_hours: List[WorkingHourOut] = []


class SalarySheetTotals(BaseModel):
    count: int
    total_hours: Decimal
    gross_pay: Decimal
    deductions: Decimal
    net_pay: Decimal


class SalarySheetOut(BaseModel):
    items: List[PayrollOut]
    totals: SalarySheetTotals
