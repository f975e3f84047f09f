"""
Report service - payroll export rows
"""
from datetime import date
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from shiftpay.models.payroll import PayrollStatus
from shiftpay.services.payroll_service import list_payroll
from shiftpay.utils.enums import enum_to_str

PAYROLL_CSV_HEADERS = [
    "Employee",
    "Period Start",
    "Period End",
    "Total Hours",
    "Hourly Rate",
    "Gross Pay",
    "Deductions",
    "Net Pay",
    "Status",
]


def get_payroll_rows(
    db: Session,
    profile_id: Optional[int] = None,
    status_filter: Optional[PayrollStatus] = None,
    period_end_from: Optional[date] = None,
    period_end_to: Optional[date] = None,
) -> List[Dict]:
    """
    Payroll rows for CSV export, using the salary sheet filters

    Returns:
        List of dictionaries keyed by PAYROLL_CSV_HEADERS
    """
    payrolls = list_payroll(
        db,
        profile_id=profile_id,
        status_filter=status_filter,
        period_end_from=period_end_from,
        period_end_to=period_end_to,
    )
    return [
        {
            "Employee": p.profile.full_name if p.profile else "",
            "Period Start": p.pay_period_start.isoformat(),
            "Period End": p.pay_period_end.isoformat(),
            "Total Hours": f"{p.total_hours:.2f}",
            "Hourly Rate": f"{p.hourly_rate:.2f}",
            "Gross Pay": f"{p.gross_pay:.2f}",
            "Deductions": f"{p.deductions:.2f}",
            "Net Pay": f"{p.net_pay:.2f}",
            "Status": enum_to_str(p.status),
        }
        for p in payrolls
    ]
