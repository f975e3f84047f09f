"""
Reports and exports endpoints
"""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shiftpay.core.deps import get_db
from shiftpay.models.payroll import PayrollStatus
from shiftpay.schemas.payroll import SalarySheetOut
from shiftpay.services.payroll_service import list_payroll, summarize
from shiftpay.services.report_service import PAYROLL_CSV_HEADERS, get_payroll_rows
from shiftpay.utils.csv_export import stream_csv

router = APIRouter()


@router.get("/payroll.csv")
async def export_payroll_csv(
    profile_id: Optional[int] = Query(None),
    status: Optional[PayrollStatus] = Query(None),
    period_end_from: Optional[date] = Query(None),
    period_end_to: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    """
    Export payroll as CSV

    Same filters as the salary sheet. One row per payroll record.
    """
    rows = get_payroll_rows(
        db,
        profile_id=profile_id,
        status_filter=status,
        period_end_from=period_end_from,
        period_end_to=period_end_to,
    )
    suffix = period_end_to.strftime("%Y%m%d") if period_end_to else "all"
    return stream_csv(headers=PAYROLL_CSV_HEADERS, rows=rows, filename=f"payroll_{suffix}.csv")


@router.get("/salary-sheet", response_model=SalarySheetOut)
async def salary_sheet(
    profile_id: Optional[int] = Query(None),
    status: Optional[PayrollStatus] = Query(None),
    period_end_from: Optional[date] = Query(None),
    period_end_to: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    """Filtered payroll rows with employee and bank account, plus totals"""
    payrolls = list_payroll(
        db,
        profile_id=profile_id,
        status_filter=status,
        period_end_from=period_end_from,
        period_end_to=period_end_to,
    )
    return {"items": payrolls, "totals": summarize(payrolls)}
