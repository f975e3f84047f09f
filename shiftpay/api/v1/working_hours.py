"""
Working hour endpoints
"""
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shiftpay.core.deps import get_db
from shiftpay.models.working_hour import WorkingHourStatus
from shiftpay.schemas.working_hour import (
    WorkingHourCreate,
    WorkingHourUpdate,
    WorkingHourStatusUpdate,
    WorkingHourOut,
)
from shiftpay.services.working_hour_service import (
    create_working_hour,
    list_working_hours,
    get_working_hour_or_404,
    update_working_hour,
    set_working_hour_status,
    delete_working_hour,
)

router = APIRouter()


@router.post("", response_model=WorkingHourOut, status_code=201)
async def create_working_hour_endpoint(data: WorkingHourCreate, db: Session = Depends(get_db)):
    """
    Log working hours

    total_hours, overtime_hours and payable_amount are computed server-side.
    actual_hours defaults to the start/end span, hourly_rate to the profile's rate.
    """
    return create_working_hour(db, data)


@router.get("", response_model=List[WorkingHourOut])
async def list_working_hours_endpoint(
    profile_id: Optional[int] = Query(None),
    client_id: Optional[int] = Query(None),
    project_id: Optional[int] = Query(None),
    roster_id: Optional[int] = Query(None),
    status: Optional[WorkingHourStatus] = Query(None),
    date_from: Optional[date] = Query(None, description="Inclusive lower bound on date"),
    date_to: Optional[date] = Query(None, description="Inclusive upper bound on date"),
    db: Session = Depends(get_db),
):
    """List working hours, newest first"""
    return list_working_hours(
        db,
        profile_id=profile_id,
        client_id=client_id,
        project_id=project_id,
        roster_id=roster_id,
        status_filter=status,
        date_from=date_from,
        date_to=date_to,
    )


@router.get("/{working_hour_id}", response_model=WorkingHourOut)
async def get_working_hour_endpoint(working_hour_id: int, db: Session = Depends(get_db)):
    return get_working_hour_or_404(db, working_hour_id)


@router.patch("/{working_hour_id}", response_model=WorkingHourOut)
async def update_working_hour_endpoint(
    working_hour_id: int,
    data: WorkingHourUpdate,
    db: Session = Depends(get_db),
):
    """Edit a working hour entry (409 RECORD_IMMUTABLE once paid)"""
    return update_working_hour(db, working_hour_id, data)


@router.patch("/{working_hour_id}/status", response_model=WorkingHourOut)
async def set_working_hour_status_endpoint(
    working_hour_id: int,
    data: WorkingHourStatusUpdate,
    db: Session = Depends(get_db),
):
    """Approve, reject or mark paid (409 INVALID_STATUS_TRANSITION otherwise)"""
    return set_working_hour_status(db, working_hour_id, data)


@router.delete("/{working_hour_id}", status_code=204)
async def delete_working_hour_endpoint(working_hour_id: int, db: Session = Depends(get_db)):
    delete_working_hour(db, working_hour_id)
