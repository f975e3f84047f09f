"""
Payroll computation - gross pay, deductions and net pay

Deductions follow an explicit DeductionPolicy:
- flat_percent: gross_pay * value, where value is a fraction (0.10 = 10%)
- manual: value is the deduction amount supplied by the caller
"""
import enum
from decimal import Decimal
from typing import NamedTuple

from shiftpay.services.time_computation import Number, quantize, to_decimal


class DeductionKind(str, enum.Enum):
    FLAT_PERCENT = "flat_percent"
    MANUAL = "manual"


class DeductionPolicy(NamedTuple):
    kind: DeductionKind
    value: Decimal

    @classmethod
    def flat_percent(cls, fraction: Number) -> "DeductionPolicy":
        fraction = to_decimal(fraction)
        if fraction < 0 or fraction > 1:
            raise ValueError("flat_percent deduction must be between 0 and 1")
        return cls(DeductionKind.FLAT_PERCENT, fraction)

    @classmethod
    def manual(cls, amount: Number) -> "DeductionPolicy":
        amount = to_decimal(amount)
        if amount < 0:
            raise ValueError("manual deduction must not be negative")
        return cls(DeductionKind.MANUAL, amount)

    @classmethod
    def from_kind(cls, kind: str, value: Number) -> "DeductionPolicy":
        """Build a policy from its wire form, e.g. ("flat_percent", 0.1)"""
        try:
            kind = DeductionKind(kind)
        except ValueError:
            allowed = [k.value for k in DeductionKind]
            raise ValueError(f"Unknown deduction policy '{kind}', expected one of {allowed}")
        if kind == DeductionKind.FLAT_PERCENT:
            return cls.flat_percent(value)
        return cls.manual(value)


class PayrollFigures(NamedTuple):
    gross_pay: Decimal
    deductions: Decimal
    net_pay: Decimal


def compute_gross(total_hours: Number, hourly_rate: Number) -> Decimal:
    """gross_pay = total_hours * hourly_rate"""
    hours = to_decimal(total_hours)
    rate = to_decimal(hourly_rate)
    if hours < 0:
        raise ValueError("total_hours must not be negative")
    if rate < 0:
        raise ValueError("hourly_rate must not be negative")
    return hours * rate


def compute_deductions(gross_pay: Number, policy: DeductionPolicy) -> Decimal:
    gross = to_decimal(gross_pay)
    if policy.kind == DeductionKind.FLAT_PERCENT:
        return gross * policy.value
    if policy.kind == DeductionKind.MANUAL:
        return policy.value
    raise ValueError(f"Unsupported deduction policy: {policy.kind}")


def compute_net(gross_pay: Number, deductions: Number) -> Decimal:
    """
    net_pay = gross_pay - deductions

    Deductions larger than gross give a negative net pay; flagging that is the
    caller's job.
    """
    return to_decimal(gross_pay) - to_decimal(deductions)


def compute_payroll_figures(
    total_hours: Number,
    hourly_rate: Number,
    policy: DeductionPolicy,
) -> PayrollFigures:
    """Figures as stored on a payroll record, in cents; net is exactly gross - deductions"""
    gross = quantize(compute_gross(total_hours, hourly_rate))
    deductions = quantize(compute_deductions(gross, policy))
    return PayrollFigures(
        gross_pay=gross,
        deductions=deductions,
        net_pay=compute_net(gross, deductions),
    )
