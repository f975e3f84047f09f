"""
Working hour service - logging, editing and approving time entries
"""
import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, joinedload

from shiftpay.core.config import settings
from shiftpay.core.errors import WorkingHourInUseError
from shiftpay.models.payroll import PayrollWorkingHour
from shiftpay.models.roster import Roster
from shiftpay.models.working_hour import WorkingHour, WorkingHourStatus
from shiftpay.schemas.working_hour import WorkingHourCreate, WorkingHourUpdate, WorkingHourStatusUpdate
from shiftpay.services.client_service import resolve_client_project
from shiftpay.services.profile_service import get_profile
from shiftpay.services.status_transitions import (
    bump_version,
    check_version,
    ensure_mutable,
    validate_transition,
)
from shiftpay.services.time_computation import OvernightPolicy, recalculate_working_hour, to_decimal

logger = logging.getLogger(__name__)

_ENTITY = "Working hour"

# Editing any of these invalidates the derived fields
_TIME_FIELDS = ("start_time", "end_time")

# Still editable once a payroll or an approved roster depends on the entry
_FREE_FIELDS = {"notes"}


def apply_figures(working_hour: WorkingHour, actual_hours: Optional[Decimal] = None) -> None:
    """Recompute total/actual/overtime hours and payable amount from settings."""
    figures = recalculate_working_hour(
        working_hour.start_time,
        working_hour.end_time,
        working_hour.hourly_rate,
        actual_hours=actual_hours,
        daily_threshold=to_decimal(settings.DAILY_OVERTIME_THRESHOLD_HOURS),
        overtime_multiplier=to_decimal(settings.OVERTIME_MULTIPLIER),
        policy=OvernightPolicy(settings.OVERNIGHT_POLICY),
    )
    working_hour.total_hours = figures.total_hours
    working_hour.actual_hours = figures.actual_hours
    working_hour.overtime_hours = figures.overtime_hours
    working_hour.payable_amount = figures.payable_amount


def _ensure_roster_exists(db: Session, roster_id: int) -> None:
    if not db.query(Roster.id).filter(Roster.id == roster_id).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Roster with id {roster_id} does not exist",
        )


def _in_payroll(db: Session, working_hour_id: int) -> bool:
    linked = (
        db.query(PayrollWorkingHour.id)
        .filter(PayrollWorkingHour.working_hour_id == working_hour_id)
        .first()
    )
    return linked is not None


def ensure_not_in_use(db: Session, working_hour: WorkingHour, action: str) -> None:
    """
    Raises:
        WorkingHourInUseError: If the entry is part of a payroll, or is approved
            and fulfils a roster
    """
    if _in_payroll(db, working_hour.id):
        raise WorkingHourInUseError(
            f"Working hour {working_hour.id} is included in a payroll and cannot be {action}"
        )
    if (
        working_hour.roster_id is not None
        and WorkingHourStatus(working_hour.status) == WorkingHourStatus.APPROVED
    ):
        raise WorkingHourInUseError(
            f"Working hour {working_hour.id} is approved against roster {working_hour.roster_id} "
            f"and cannot be {action}"
        )


def create_working_hour(db: Session, data: WorkingHourCreate) -> WorkingHour:
    """
    Log a working hour entry.

    Validates references, defaults the hourly rate to the profile's rate and
    computes the derived fields. Status always starts as pending.

    Raises:
        HTTPException: If the profile, client, project or roster is invalid
    """
    profile = get_profile(db, data.profile_id)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Profile with id {data.profile_id} does not exist",
        )
    resolve_client_project(db, data.client_id, data.project_id)
    if data.roster_id is not None:
        _ensure_roster_exists(db, data.roster_id)

    hourly_rate = data.hourly_rate
    if hourly_rate is None:
        hourly_rate = profile.hourly_rate if profile.hourly_rate is not None else Decimal("0")

    working_hour = WorkingHour(
        profile_id=data.profile_id,
        client_id=data.client_id,
        project_id=data.project_id,
        roster_id=data.roster_id,
        date=data.date,
        start_time=data.start_time,
        end_time=data.end_time,
        sign_in_time=data.sign_in_time,
        sign_out_time=data.sign_out_time,
        hourly_rate=hourly_rate,
        notes=data.notes,
        status=WorkingHourStatus.PENDING,
        version=1,
    )
    apply_figures(working_hour, data.actual_hours)

    db.add(working_hour)
    db.commit()
    db.refresh(working_hour)
    logger.info(
        "Logged working hour id=%s profile_id=%s date=%s actual=%s payable=%s",
        working_hour.id, working_hour.profile_id, working_hour.date,
        working_hour.actual_hours, working_hour.payable_amount,
    )
    return working_hour


def list_working_hours(
    db: Session,
    profile_id: Optional[int] = None,
    client_id: Optional[int] = None,
    project_id: Optional[int] = None,
    roster_id: Optional[int] = None,
    status_filter: Optional[WorkingHourStatus] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> List[WorkingHour]:
    """List working hours, newest date first, with profile/client/project joined."""
    query = db.query(WorkingHour).options(
        joinedload(WorkingHour.profile),
        joinedload(WorkingHour.client),
        joinedload(WorkingHour.project),
    )
    if profile_id is not None:
        query = query.filter(WorkingHour.profile_id == profile_id)
    if client_id is not None:
        query = query.filter(WorkingHour.client_id == client_id)
    if project_id is not None:
        query = query.filter(WorkingHour.project_id == project_id)
    if roster_id is not None:
        query = query.filter(WorkingHour.roster_id == roster_id)
    if status_filter is not None:
        query = query.filter(WorkingHour.status == status_filter)
    if date_from is not None:
        query = query.filter(WorkingHour.date >= date_from)
    if date_to is not None:
        query = query.filter(WorkingHour.date <= date_to)
    return query.order_by(WorkingHour.date.desc(), WorkingHour.id.desc()).all()


def get_working_hour_or_404(db: Session, working_hour_id: int) -> WorkingHour:
    working_hour = db.query(WorkingHour).filter(WorkingHour.id == working_hour_id).first()
    if not working_hour:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Working hour with id {working_hour_id} not found",
        )
    return working_hour


def update_working_hour(db: Session, working_hour_id: int, data: WorkingHourUpdate) -> WorkingHour:
    """
    Edit a working hour entry and recalculate its derived fields.

    Changing start or end time without sending actual_hours resets actual
    hours to the new span.

    Raises:
        RecordImmutableError: If the entry is paid
        WorkingHourInUseError: If anything but notes changes on an entry a payroll
            or an approved roster depends on
        StaleRecordError: If data.version does not match
    """
    working_hour = get_working_hour_or_404(db, working_hour_id)
    ensure_mutable(_ENTITY, working_hour.id, working_hour.status)
    check_version(_ENTITY, working_hour, data.version)

    update_dict = data.model_dump(exclude_unset=True, exclude={"version"})
    if set(update_dict) - _FREE_FIELDS:
        ensure_not_in_use(db, working_hour, "edited")

    client_id = update_dict.get("client_id") or working_hour.client_id
    project_id = update_dict.get("project_id") or working_hour.project_id
    if "client_id" in update_dict or "project_id" in update_dict:
        resolve_client_project(db, client_id, project_id)
    if update_dict.get("roster_id") is not None:
        _ensure_roster_exists(db, update_dict["roster_id"])

    actual_hours = update_dict.pop("actual_hours", None)
    times_changed = any(update_dict.get(f) is not None for f in _TIME_FIELDS)
    if actual_hours is None and not times_changed:
        actual_hours = working_hour.actual_hours

    for field, value in update_dict.items():
        if value is None and field not in ("roster_id", "notes", "sign_in_time", "sign_out_time"):
            continue
        setattr(working_hour, field, value)

    apply_figures(working_hour, actual_hours)
    bump_version(working_hour)

    db.commit()
    db.refresh(working_hour)
    logger.info(
        "Updated working hour id=%s version=%s payable=%s",
        working_hour.id, working_hour.version, working_hour.payable_amount,
    )
    return working_hour


def set_working_hour_status(
    db: Session,
    working_hour_id: int,
    data: WorkingHourStatusUpdate,
) -> WorkingHour:
    """
    Move a working hour through pending -> approved/rejected -> paid.

    Raises:
        InvalidStatusTransitionError: If the transition is not allowed
    """
    working_hour = get_working_hour_or_404(db, working_hour_id)
    check_version(_ENTITY, working_hour, data.version)
    current = WorkingHourStatus(working_hour.status)
    target = validate_transition(WorkingHourStatus, current, data.status)
    if target == current:
        return working_hour

    working_hour.status = target
    bump_version(working_hour)
    db.commit()
    db.refresh(working_hour)
    logger.info("Working hour id=%s status %s -> %s", working_hour.id, current.value, target.value)
    return working_hour


def delete_working_hour(db: Session, working_hour_id: int) -> None:
    """
    Raises:
        RecordImmutableError: If the entry is paid
        WorkingHourInUseError: If a payroll or an approved roster depends on it
    """
    working_hour = get_working_hour_or_404(db, working_hour_id)
    ensure_mutable(_ENTITY, working_hour.id, working_hour.status)
    ensure_not_in_use(db, working_hour, "deleted")

    db.delete(working_hour)
    db.commit()
    logger.info("Deleted working hour id=%s", working_hour_id)
