"""
Payroll endpoints
"""
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shiftpay.core.deps import get_db
from shiftpay.models.payroll import PayrollStatus
from shiftpay.schemas.payroll import (
    PayrollCreate,
    PayrollUpdate,
    PayrollStatusUpdate,
    PayrollOut,
    PayrollDetailOut,
)
from shiftpay.services.payroll_service import (
    generate_payroll,
    list_payroll,
    get_payroll_or_404,
    update_payroll,
    set_payroll_status,
)

router = APIRouter()


@router.post("", response_model=PayrollDetailOut, status_code=201)
async def generate_payroll_endpoint(data: PayrollCreate, db: Session = Depends(get_db)):
    """
    Generate a payroll record

    Without total_hours or working_hour_ids, the profile's approved and not yet
    payrolled working hours dated inside the pay period are aggregated.
    Deductions default to a flat percentage of gross pay.
    """
    return generate_payroll(db, data)


@router.get("", response_model=List[PayrollOut])
async def list_payroll_endpoint(
    profile_id: Optional[int] = Query(None),
    status: Optional[PayrollStatus] = Query(None),
    period_end_from: Optional[date] = Query(None, description="Inclusive lower bound on pay_period_end"),
    period_end_to: Optional[date] = Query(None, description="Inclusive upper bound on pay_period_end"),
    db: Session = Depends(get_db),
):
    """List payroll records, latest pay period first"""
    return list_payroll(
        db,
        profile_id=profile_id,
        status_filter=status,
        period_end_from=period_end_from,
        period_end_to=period_end_to,
    )


@router.get("/{payroll_id}", response_model=PayrollDetailOut)
async def get_payroll_endpoint(payroll_id: int, db: Session = Depends(get_db)):
    return get_payroll_or_404(db, payroll_id)


@router.patch("/{payroll_id}", response_model=PayrollDetailOut)
async def update_payroll_endpoint(
    payroll_id: int,
    data: PayrollUpdate,
    db: Session = Depends(get_db),
):
    """Edit a payroll record; gross and net pay are recalculated"""
    return update_payroll(db, payroll_id, data)


@router.patch("/{payroll_id}/status", response_model=PayrollDetailOut)
async def set_payroll_status_endpoint(
    payroll_id: int,
    data: PayrollStatusUpdate,
    db: Session = Depends(get_db),
):
    """Approve or pay; paying also marks the linked working hours paid"""
    return set_payroll_status(db, payroll_id, data)
