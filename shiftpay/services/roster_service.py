"""
Roster service - scheduling shifts and guarding edits with the roster lock rule
"""
import logging
from datetime import date
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, joinedload

from shiftpay.core.config import settings
from shiftpay.models.profile import Profile
from shiftpay.models.roster import Roster, RosterProfile, RosterStatus
from shiftpay.models.working_hour import WorkingHour
from shiftpay.schemas.client import ClientRef, ProjectRef
from shiftpay.schemas.profile import ProfileRef
from shiftpay.schemas.roster import RosterCreate, RosterOut, RosterStatusUpdate, RosterUpdate
from shiftpay.services.client_service import resolve_client_project
from shiftpay.services.roster_lock import ensure_editable, is_editable
from shiftpay.services.status_transitions import bump_version, check_version, validate_transition
from shiftpay.services.time_computation import OvernightPolicy, compute_hours

logger = logging.getLogger(__name__)

_ENTITY = "Roster"
_COMPUTED_FIELDS = {"is_editable", "profiles", "client", "project"}


def linked_working_hours(db: Session, roster_id: int) -> List[WorkingHour]:
    """Working hours that fulfil the roster, always read fresh from the database."""
    return db.query(WorkingHour).filter(WorkingHour.roster_id == roster_id).all()


def serialize_roster(db: Session, roster: Roster) -> RosterOut:
    """Build the API view of a roster with assigned profiles and is_editable."""
    data = {name: getattr(roster, name) for name in RosterOut.model_fields if name not in _COMPUTED_FIELDS}
    return RosterOut(
        **data,
        is_editable=is_editable(roster, linked_working_hours(db, roster.id)),
        profiles=[ProfileRef.model_validate(a.profile) for a in roster.assignments],
        client=ClientRef.model_validate(roster.client) if roster.client else None,
        project=ProjectRef.model_validate(roster.project) if roster.project else None,
    )


def _load_profiles(db: Session, profile_ids: List[int]) -> List[Profile]:
    """Resolve assigned profile ids, keeping request order and dropping duplicates."""
    unique_ids = list(dict.fromkeys(profile_ids))
    if not unique_ids:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="At least one profile must be assigned to a roster",
        )
    profiles = db.query(Profile).filter(Profile.id.in_(unique_ids)).all()
    found = {p.id for p in profiles}
    missing = [pid for pid in unique_ids if pid not in found]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Profiles do not exist: {missing}",
        )
    by_id = {p.id: p for p in profiles}
    return [by_id[pid] for pid in unique_ids]


def _roster_hours(roster: Roster):
    return compute_hours(roster.start_time, roster.end_time, OvernightPolicy(settings.OVERNIGHT_POLICY))


def create_roster(db: Session, data: RosterCreate) -> Roster:
    """
    Schedule a roster entry for one or more profiles.

    Raises:
        HTTPException: If no profile is given or a reference is invalid
    """
    profiles = _load_profiles(db, data.profile_ids)
    resolve_client_project(db, data.client_id, data.project_id)

    roster = Roster(
        name=data.name,
        client_id=data.client_id,
        project_id=data.project_id,
        start_date=data.start_date,
        end_date=data.end_date,
        start_time=data.start_time,
        end_time=data.end_time,
        expected_profiles=data.expected_profiles,
        per_hour_rate=data.per_hour_rate,
        notes=data.notes,
        status=RosterStatus.PENDING,
        is_locked=False,
        version=1,
    )
    roster.total_hours = _roster_hours(roster)
    roster.assignments = [RosterProfile(profile=p) for p in profiles]

    db.add(roster)
    db.commit()
    db.refresh(roster)
    logger.info(
        "Created roster id=%s profiles=%s total_hours=%s",
        roster.id, [p.id for p in profiles], roster.total_hours,
    )
    return roster


def list_rosters(
    db: Session,
    client_id: Optional[int] = None,
    project_id: Optional[int] = None,
    profile_id: Optional[int] = None,
    status_filter: Optional[RosterStatus] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> List[Roster]:
    query = db.query(Roster).options(
        joinedload(Roster.assignments).joinedload(RosterProfile.profile),
        joinedload(Roster.client),
        joinedload(Roster.project),
    )
    if client_id is not None:
        query = query.filter(Roster.client_id == client_id)
    if project_id is not None:
        query = query.filter(Roster.project_id == project_id)
    if profile_id is not None:
        query = query.filter(Roster.assignments.any(RosterProfile.profile_id == profile_id))
    if status_filter is not None:
        query = query.filter(Roster.status == status_filter)
    if date_from is not None:
        query = query.filter(Roster.start_date >= date_from)
    if date_to is not None:
        query = query.filter(Roster.start_date <= date_to)
    return query.order_by(Roster.start_date.desc(), Roster.id.desc()).all()


def get_roster_or_404(db: Session, roster_id: int) -> Roster:
    roster = db.query(Roster).filter(Roster.id == roster_id).first()
    if not roster:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Roster with id {roster_id} not found",
        )
    return roster


def update_roster(db: Session, roster_id: int, data: RosterUpdate) -> Roster:
    """
    Edit a roster entry.

    Raises:
        RosterLockedError: If the roster is locked or has approved working hours
        StaleRecordError: If data.version does not match
    """
    roster = get_roster_or_404(db, roster_id)
    ensure_editable(roster, linked_working_hours(db, roster.id))
    check_version(_ENTITY, roster, data.version)

    update_dict = data.model_dump(exclude_unset=True, exclude={"version"})
    profile_ids = update_dict.pop("profile_ids", None)

    if "client_id" in update_dict or "project_id" in update_dict:
        resolve_client_project(
            db,
            update_dict.get("client_id") or roster.client_id,
            update_dict.get("project_id") or roster.project_id,
        )

    for field, value in update_dict.items():
        if value is None and field not in ("end_date", "notes"):
            continue
        setattr(roster, field, value)

    if roster.end_date is not None and roster.end_date < roster.start_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end_date must be on or after start_date",
        )

    if profile_ids is not None:
        profiles = _load_profiles(db, profile_ids)
        # Old rows must be gone before re-inserting the same (roster, profile) pairs
        roster.assignments = []
        db.flush()
        roster.assignments = [RosterProfile(profile=p) for p in profiles]

    roster.total_hours = _roster_hours(roster)
    bump_version(roster)

    db.commit()
    db.refresh(roster)
    logger.info("Updated roster id=%s version=%s", roster.id, roster.version)
    return roster


def set_roster_status(db: Session, roster_id: int, data: RosterStatusUpdate) -> Roster:
    """
    Raises:
        InvalidStatusTransitionError: If the transition is not allowed
    """
    roster = get_roster_or_404(db, roster_id)
    check_version(_ENTITY, roster, data.version)
    current = RosterStatus(roster.status)
    target = validate_transition(RosterStatus, current, data.status)
    if target == current:
        return roster

    roster.status = target
    bump_version(roster)
    db.commit()
    db.refresh(roster)
    logger.info("Roster id=%s status %s -> %s", roster.id, current.value, target.value)
    return roster


def set_roster_lock(db: Session, roster_id: int, locked: bool) -> Roster:
    """
    Set or clear the manual lock.

    Clearing it does not make a roster editable again if approved working
    hours are linked to it.
    """
    roster = get_roster_or_404(db, roster_id)
    if bool(roster.is_locked) == locked:
        return roster
    roster.is_locked = locked
    bump_version(roster)
    db.commit()
    db.refresh(roster)
    logger.info("Roster id=%s %s", roster.id, "locked" if locked else "unlocked")
    return roster


def delete_roster(db: Session, roster_id: int) -> None:
    """
    Raises:
        RosterLockedError: If the roster is locked or has approved working hours
    """
    roster = get_roster_or_404(db, roster_id)
    linked = linked_working_hours(db, roster.id)
    ensure_editable(roster, linked)

    # Pending/rejected logs outlive the schedule they referenced
    for working_hour in linked:
        working_hour.roster_id = None
    db.delete(roster)
    db.commit()
    logger.info("Deleted roster id=%s (unlinked %s working hours)", roster_id, len(linked))
