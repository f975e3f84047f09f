"""
Status state machines for working hours, rosters and payroll
"""
import enum
from typing import Dict, FrozenSet, Optional, Type

from shiftpay.core.errors import InvalidStatusTransitionError, RecordImmutableError, StaleRecordError
from shiftpay.models.working_hour import WorkingHourStatus
from shiftpay.models.roster import RosterStatus
from shiftpay.models.payroll import PayrollStatus

WORKING_HOUR_TRANSITIONS: Dict[WorkingHourStatus, FrozenSet[WorkingHourStatus]] = {
    WorkingHourStatus.PENDING: frozenset({WorkingHourStatus.APPROVED, WorkingHourStatus.REJECTED}),
    WorkingHourStatus.APPROVED: frozenset({WorkingHourStatus.PAID}),
    WorkingHourStatus.REJECTED: frozenset(),
    WorkingHourStatus.PAID: frozenset(),
}

PAYROLL_TRANSITIONS: Dict[PayrollStatus, FrozenSet[PayrollStatus]] = {
    PayrollStatus.PENDING: frozenset({PayrollStatus.APPROVED}),
    PayrollStatus.APPROVED: frozenset({PayrollStatus.PAID}),
    PayrollStatus.PAID: frozenset(),
}

ROSTER_TRANSITIONS: Dict[RosterStatus, FrozenSet[RosterStatus]] = {
    RosterStatus.PENDING: frozenset({RosterStatus.CONFIRMED, RosterStatus.CANCELLED}),
    RosterStatus.CONFIRMED: frozenset({RosterStatus.CANCELLED}),
    RosterStatus.CANCELLED: frozenset(),
}

_MACHINES = {
    WorkingHourStatus: ("working hour", WORKING_HOUR_TRANSITIONS),
    PayrollStatus: ("payroll", PAYROLL_TRANSITIONS),
    RosterStatus: ("roster", ROSTER_TRANSITIONS),
}


def can_transition(current: enum.Enum, target: enum.Enum) -> bool:
    """Same-state is allowed (no-op); otherwise target must be a listed successor."""
    _, table = _MACHINES[type(current)]
    return current == target or target in table[current]


def validate_transition(status_cls: Type[enum.Enum], current, target) -> enum.Enum:
    """
    Check a status change against the state machine for status_cls.

    Args:
        status_cls: WorkingHourStatus, PayrollStatus or RosterStatus
        current: Current status (enum or its string value)
        target: Requested status (enum or its string value)

    Returns:
        The target status as an enum member

    Raises:
        InvalidStatusTransitionError: If the transition is not allowed
    """
    entity, _ = _MACHINES[status_cls]
    current = status_cls(current)
    target = status_cls(target)
    if not can_transition(current, target):
        raise InvalidStatusTransitionError(entity, current.value, target.value)
    return target


def ensure_mutable(entity: str, record_id: int, status) -> None:
    """Paid working hours and payroll are frozen."""
    if getattr(status, "value", status) == "paid":
        raise RecordImmutableError(f"{entity} {record_id} is paid and can no longer be changed")


def check_version(entity: str, record, expected: Optional[int]) -> None:
    """
    Optimistic concurrency check. None means the caller did not read a
    version first, in which case the last write wins.
    """
    if expected is not None and record.version != expected:
        raise StaleRecordError(entity, expected, record.version)


def bump_version(record) -> None:
    record.version = (record.version or 0) + 1
