"""
Roster lock rule

A roster stays editable while it is not manually locked and none of the
working hours that fulfil it has reached the approved state. Paid working
hours count as approved (paid is only reachable from approved).
"""
from typing import Iterable

from shiftpay.core.errors import RosterLockedError
from shiftpay.models.working_hour import WorkingHourStatus
from shiftpay.utils.enums import enum_to_str

APPROVED_STATES = frozenset({WorkingHourStatus.APPROVED.value, WorkingHourStatus.PAID.value})


def count_approved(linked_working_hours: Iterable) -> int:
    return sum(1 for wh in linked_working_hours if enum_to_str(wh.status) in APPROVED_STATES)


def is_editable(roster, linked_working_hours: Iterable) -> bool:
    """
    Side-effect-free editability check.

    Args:
        roster: Anything with an ``is_locked`` attribute
        linked_working_hours: Working hours whose roster_id points at the roster

    Returns:
        True when the roster may still be edited
    """
    if bool(getattr(roster, "is_locked", False)):
        return False
    return count_approved(linked_working_hours) == 0


def ensure_editable(roster, linked_working_hours: Iterable) -> None:
    """
    Raises:
        RosterLockedError: If the roster is locked or fulfilled by approved hours
    """
    linked = list(linked_working_hours)
    if is_editable(roster, linked):
        return
    if getattr(roster, "is_locked", False):
        raise RosterLockedError(f"Roster {roster.id} is locked and cannot be modified")
    raise RosterLockedError(
        f"Roster {roster.id} cannot be modified: {count_approved(linked)} linked working hour(s) already approved"
    )
