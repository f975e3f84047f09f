"""
Roster endpoints
"""
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shiftpay.core.deps import get_db
from shiftpay.models.roster import RosterStatus
from shiftpay.schemas.roster import RosterCreate, RosterUpdate, RosterStatusUpdate, RosterOut
from shiftpay.services.roster_service import (
    create_roster,
    list_rosters,
    get_roster_or_404,
    update_roster,
    set_roster_status,
    set_roster_lock,
    delete_roster,
    serialize_roster,
)

router = APIRouter()


@router.post("", response_model=RosterOut, status_code=201)
async def create_roster_endpoint(data: RosterCreate, db: Session = Depends(get_db)):
    """Schedule a roster entry for at least one profile"""
    return serialize_roster(db, create_roster(db, data))


@router.get("", response_model=List[RosterOut])
async def list_rosters_endpoint(
    client_id: Optional[int] = Query(None),
    project_id: Optional[int] = Query(None),
    profile_id: Optional[int] = Query(None, description="Rosters the profile is assigned to"),
    status: Optional[RosterStatus] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    rosters = list_rosters(
        db,
        client_id=client_id,
        project_id=project_id,
        profile_id=profile_id,
        status_filter=status,
        date_from=date_from,
        date_to=date_to,
    )
    return [serialize_roster(db, roster) for roster in rosters]


@router.get("/{roster_id}", response_model=RosterOut)
async def get_roster_endpoint(roster_id: int, db: Session = Depends(get_db)):
    """Get a roster; is_editable reflects the current lock state"""
    return serialize_roster(db, get_roster_or_404(db, roster_id))


@router.patch("/{roster_id}", response_model=RosterOut)
async def update_roster_endpoint(
    roster_id: int,
    data: RosterUpdate,
    db: Session = Depends(get_db),
):
    """Edit a roster (409 ROSTER_LOCKED when not editable)"""
    return serialize_roster(db, update_roster(db, roster_id, data))


@router.patch("/{roster_id}/status", response_model=RosterOut)
async def set_roster_status_endpoint(
    roster_id: int,
    data: RosterStatusUpdate,
    db: Session = Depends(get_db),
):
    return serialize_roster(db, set_roster_status(db, roster_id, data))


@router.post("/{roster_id}/lock", response_model=RosterOut)
async def lock_roster_endpoint(roster_id: int, db: Session = Depends(get_db)):
    return serialize_roster(db, set_roster_lock(db, roster_id, True))


@router.post("/{roster_id}/unlock", response_model=RosterOut)
async def unlock_roster_endpoint(roster_id: int, db: Session = Depends(get_db)):
    return serialize_roster(db, set_roster_lock(db, roster_id, False))


@router.delete("/{roster_id}", status_code=204)
async def delete_roster_endpoint(roster_id: int, db: Session = Depends(get_db)):
    delete_roster(db, roster_id)
