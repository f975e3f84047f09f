"""
Tests for hour and payable amount computation
"""
from datetime import time
from decimal import Decimal

import pytest

from shiftpay.services.time_computation import (
    OvernightPolicy,
    compute_hours,
    compute_payable,
    recalculate_working_hour,
    split_overtime,
)


def test_day_shift_hours():
    assert compute_hours("09:00", "17:00") == Decimal("8.00")


def test_overnight_shift_wraps_by_default():
    assert compute_hours(time(22, 0), time(6, 0)) == Decimal("8.00")


def test_overnight_shift_clamped_to_zero():
    assert compute_hours("22:00", "06:00", OvernightPolicy.CLAMP) == Decimal("0.00")


def test_policy_accepts_plain_string():
    assert compute_hours("22:00", "06:00", "clamp") == Decimal("0.00")


@pytest.mark.parametrize("policy", [OvernightPolicy.WRAP, OvernightPolicy.CLAMP])
def test_equal_times_give_zero(policy):
    assert compute_hours("12:00", "12:00", policy) == Decimal("0.00")


def test_partial_hours_rounded_to_two_places():
    # 20 minutes = 0.333.. hours
    assert compute_hours("09:00", "09:20") == Decimal("0.33")
    assert compute_hours("09:00", "17:45") == Decimal("8.75")


def test_invalid_clock_time_rejected():
    with pytest.raises(ValueError):
        compute_hours("9am", "17:00")


def test_split_overtime_below_threshold():
    assert split_overtime(6) == (Decimal("6"), Decimal("0"))


def test_split_overtime_above_threshold():
    regular, overtime = split_overtime(Decimal("10"))
    assert regular == Decimal("8")
    assert overtime == Decimal("2")


def test_split_overtime_negative_hours_rejected():
    with pytest.raises(ValueError):
        split_overtime(-1)


def test_payable_with_overtime():
    # 8 * 20 + 2 * 20 * 1.5
    assert compute_payable(10, 20) == Decimal("220.00")


def test_payable_without_overtime():
    assert compute_payable(6, 15) == Decimal("90.00")


def test_payable_custom_threshold_and_multiplier():
    # 7.5 * 10 + 1.5 * 10 * 2
    assert compute_payable(9, 10, daily_threshold="7.5", overtime_multiplier=2) == Decimal("105.00")


def test_payable_is_not_rounded():
    assert compute_payable("1.25", "10.01") == Decimal("12.5125")


@pytest.mark.parametrize("hours", ["1.25", "8", "9.25", "11.33"])
def test_payable_matches_regular_plus_overtime_formula(hours):
    hours = Decimal(hours)
    rate = Decimal("10.01")
    expected = min(hours, Decimal("8")) * rate + max(Decimal("0"), hours - 8) * rate * Decimal("1.5")
    assert compute_payable(hours, rate) == expected


def test_payable_negative_rate_rejected():
    with pytest.raises(ValueError):
        compute_payable(8, -1)


def test_recalculate_defaults_actual_to_span():
    figures = recalculate_working_hour("08:00", "18:00", "20")
    assert figures.total_hours == Decimal("10.00")
    assert figures.actual_hours == Decimal("10.00")
    assert figures.regular_hours == Decimal("8.00")
    assert figures.overtime_hours == Decimal("2.00")
    assert figures.payable_amount == Decimal("220.00")


def test_recalculate_uses_confirmed_actual_hours():
    figures = recalculate_working_hour("08:00", "18:00", "15", actual_hours="6")
    assert figures.total_hours == Decimal("10.00")
    assert figures.actual_hours == Decimal("6.00")
    assert figures.overtime_hours == Decimal("0.00")
    assert figures.payable_amount == Decimal("90.00")


def test_recalculate_rounds_stored_payable_to_cents():
    figures = recalculate_working_hour("08:00", "18:00", "10.01", actual_hours="1.25")
    assert figures.payable_amount == Decimal("12.51")
