"""
Tests for gross, deduction and net pay computation
"""
from decimal import Decimal

import pytest

from shiftpay.services.payroll_computation import (
    DeductionKind,
    DeductionPolicy,
    compute_deductions,
    compute_gross,
    compute_net,
    compute_payroll_figures,
)


def test_gross_is_hours_times_rate():
    assert compute_gross(40, "15.50") == Decimal("620.00")


@pytest.mark.parametrize("hours,rate,k", [(10, 20, 2), (7.5, "12.40", 3), (0, 99, 5), (1.25, "10.01", 2), ("0.33", "17.77", 3)])
def test_gross_is_linear(hours, rate, k):
    hours = Decimal(str(hours))
    assert compute_gross(hours * k, rate) == compute_gross(hours, rate) * k


def test_gross_is_not_rounded():
    assert compute_gross("2.5", "10.01") == Decimal("25.025")


def test_gross_rejects_negative_input():
    with pytest.raises(ValueError):
        compute_gross(-1, 10)
    with pytest.raises(ValueError):
        compute_gross(1, -10)


def test_flat_percent_deduction():
    assert compute_deductions(Decimal("620.00"), DeductionPolicy.flat_percent("0.10")) == Decimal("62.00")


def test_manual_deduction_is_taken_as_is():
    assert compute_deductions(Decimal("620.00"), DeductionPolicy.manual("25.5")) == Decimal("25.50")


def test_flat_percent_out_of_range_rejected():
    with pytest.raises(ValueError):
        DeductionPolicy.flat_percent("1.5")


def test_manual_negative_rejected():
    with pytest.raises(ValueError):
        DeductionPolicy.manual(-5)


def test_from_kind_parses_wire_form():
    policy = DeductionPolicy.from_kind("flat_percent", 0.2)
    assert policy.kind == DeductionKind.FLAT_PERCENT
    assert policy.value == Decimal("0.2")


def test_from_kind_rejects_unknown_kind():
    with pytest.raises(ValueError, match="Unknown deduction policy"):
        DeductionPolicy.from_kind("progressive", 1)


def test_net_may_be_negative():
    assert compute_net(Decimal("100.00"), Decimal("150.00")) == Decimal("-50.00")


def test_payroll_figures_default_style():
    figures = compute_payroll_figures(40, 15, DeductionPolicy.flat_percent("0.10"))
    assert figures.gross_pay == Decimal("600.00")
    assert figures.deductions == Decimal("60.00")
    assert figures.net_pay == Decimal("540.00")


def test_payroll_figures_are_rounded_to_cents_for_storage():
    figures = compute_payroll_figures("1.25", "10.01", DeductionPolicy.flat_percent("0.10"))
    assert figures.gross_pay == Decimal("12.51")
    assert figures.deductions == Decimal("1.25")
    assert figures.net_pay == Decimal("11.26")
    assert figures.net_pay == figures.gross_pay - figures.deductions
