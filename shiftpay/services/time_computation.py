"""
Time computation - hours between clock times, overtime split and payable amount

All quantities are Decimal. Clock spans are rounded to two places (half-up);
compute_payable is exact and recalculate_working_hour rounds the stored figures.
Callers validate that hours and rates are non-negative; these functions raise
ValueError rather than silently clamping bad input.
"""
import enum
from datetime import time
from decimal import Decimal, ROUND_HALF_UP
from typing import NamedTuple, Optional, Tuple, Union

TWO_PLACES = Decimal("0.01")
SECONDS_PER_HOUR = Decimal(3600)
SECONDS_PER_DAY = 24 * 60 * 60

DEFAULT_DAILY_THRESHOLD = Decimal("8")
DEFAULT_OVERTIME_MULTIPLIER = Decimal("1.5")

Number = Union[int, float, str, Decimal]


class OvernightPolicy(str, enum.Enum):
    """What to do when a shift's end time is earlier than its start time"""
    WRAP = "wrap"  # overnight shift, add 24h
    CLAMP = "clamp"  # no negative durations, result is 0


class WorkingHourFigures(NamedTuple):
    total_hours: Decimal
    actual_hours: Decimal
    regular_hours: Decimal
    overtime_hours: Decimal
    payable_amount: Decimal


def to_decimal(value: Number) -> Decimal:
    """Convert int/float/str to Decimal without float representation noise"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def parse_clock_time(value: Union[time, str]) -> time:
    """Accept a time object or an 'HH:MM' / 'HH:MM:SS' string"""
    if isinstance(value, time):
        return value
    try:
        return time.fromisoformat(value.strip())
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid clock time: {value!r}")


def _seconds(t: time) -> int:
    return t.hour * 3600 + t.minute * 60 + t.second


def compute_hours(
    start_time: Union[time, str],
    end_time: Union[time, str],
    policy: OvernightPolicy = OvernightPolicy.WRAP,
) -> Decimal:
    """
    Elapsed hours between two local clock times on the same nominal day.

    Args:
        start_time: Shift start
        end_time: Shift end
        policy: Handling of end < start (wrap past midnight or clamp to 0)

    Returns:
        Hours rounded to two decimals, never negative

    Examples:
        09:00 -> 17:00 = 8.00
        22:00 -> 06:00 = 8.00 (WRAP) or 0.00 (CLAMP)
    """
    start = parse_clock_time(start_time)
    end = parse_clock_time(end_time)
    policy = OvernightPolicy(policy)

    diff = _seconds(end) - _seconds(start)
    if diff < 0:
        diff = diff + SECONDS_PER_DAY if policy == OvernightPolicy.WRAP else 0

    return quantize(Decimal(diff) / SECONDS_PER_HOUR)


def split_overtime(
    actual_hours: Number,
    daily_threshold: Number = DEFAULT_DAILY_THRESHOLD,
) -> Tuple[Decimal, Decimal]:
    """
    Split hours into (regular, overtime) at the daily threshold.

    Raises:
        ValueError: If actual_hours is negative
    """
    hours = to_decimal(actual_hours)
    threshold = to_decimal(daily_threshold)
    if hours < 0:
        raise ValueError("actual_hours must not be negative")
    if threshold <= 0:
        raise ValueError("daily_threshold must be positive")

    regular = min(hours, threshold)
    overtime = max(Decimal("0"), hours - threshold)
    return regular, overtime


def compute_payable(
    actual_hours: Number,
    hourly_rate: Number,
    daily_threshold: Number = DEFAULT_DAILY_THRESHOLD,
    overtime_multiplier: Number = DEFAULT_OVERTIME_MULTIPLIER,
) -> Decimal:
    """
    Payable amount = regular * rate + overtime * rate * multiplier

    Example: 10h at 20/h -> 8*20 + 2*20*1.5 = 220

    The result is not rounded; 1.25h at 10.01/h gives 12.5125.
    """
    rate = to_decimal(hourly_rate)
    if rate < 0:
        raise ValueError("hourly_rate must not be negative")

    regular, overtime = split_overtime(actual_hours, daily_threshold)
    multiplier = to_decimal(overtime_multiplier)
    return regular * rate + overtime * rate * multiplier


def recalculate_working_hour(
    start_time: Union[time, str],
    end_time: Union[time, str],
    hourly_rate: Number,
    actual_hours: Optional[Number] = None,
    daily_threshold: Number = DEFAULT_DAILY_THRESHOLD,
    overtime_multiplier: Number = DEFAULT_OVERTIME_MULTIPLIER,
    policy: OvernightPolicy = OvernightPolicy.WRAP,
) -> WorkingHourFigures:
    """
    Recompute every derived field of a working-hour record.

    Call after any change to start_time, end_time, actual_hours or hourly_rate.
    When actual_hours is None the worker is assumed to have worked the
    scheduled span, so actual_hours = total_hours.
    """
    total = compute_hours(start_time, end_time, policy)
    actual = total if actual_hours is None else quantize(to_decimal(actual_hours))

    regular, overtime = split_overtime(actual, daily_threshold)
    payable = compute_payable(actual, hourly_rate, daily_threshold, overtime_multiplier)
    return WorkingHourFigures(
        total_hours=total,
        actual_hours=actual,
        regular_hours=quantize(regular),
        overtime_hours=quantize(overtime),
        payable_amount=quantize(payable),
    )
