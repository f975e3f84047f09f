"""
Payroll service - generating pay statements from approved working hours
"""
import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from shiftpay.core.config import settings
from shiftpay.models.bank_account import BankAccount
from shiftpay.models.payroll import Payroll, PayrollStatus, PayrollWorkingHour
from shiftpay.models.working_hour import WorkingHour, WorkingHourStatus
from shiftpay.schemas.payroll import PayrollCreate, PayrollStatusUpdate, PayrollUpdate
from shiftpay.services.bank_account_service import get_primary_company_account
from shiftpay.services.payroll_computation import DeductionPolicy, compute_payroll_figures
from shiftpay.services.profile_service import get_profile
from shiftpay.services.status_transitions import (
    bump_version,
    check_version,
    ensure_mutable,
    validate_transition,
)
from shiftpay.services.time_computation import quantize, to_decimal

logger = logging.getLogger(__name__)

_ENTITY = "Payroll"


def default_deduction_policy() -> DeductionPolicy:
    return DeductionPolicy.flat_percent(settings.DEFAULT_DEDUCTION_PERCENT)


def _already_payrolled():
    return select(PayrollWorkingHour.working_hour_id)


def _bank_account_or_400(db: Session, bank_account_id: int) -> BankAccount:
    account = db.query(BankAccount).filter(BankAccount.id == bank_account_id).first()
    if not account:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Bank account with id {bank_account_id} does not exist",
        )
    return account


def _explicit_working_hours(db: Session, profile_id: int, working_hour_ids: List[int]) -> List[WorkingHour]:
    """Load caller-selected working hours; each must be the profile's, approved and unpaid."""
    unique_ids = list(dict.fromkeys(working_hour_ids))
    rows = db.query(WorkingHour).filter(WorkingHour.id.in_(unique_ids)).all()
    by_id = {wh.id: wh for wh in rows}

    missing = [wid for wid in unique_ids if wid not in by_id]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Working hours do not exist: {missing}",
        )
    foreign = [wid for wid in unique_ids if by_id[wid].profile_id != profile_id]
    if foreign:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Working hours {foreign} belong to another profile",
        )
    unapproved = [wid for wid in unique_ids if WorkingHourStatus(by_id[wid].status) != WorkingHourStatus.APPROVED]
    if unapproved:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Only approved working hours can be paid, not approved: {unapproved}",
        )
    linked = {
        wid for (wid,) in db.query(PayrollWorkingHour.working_hour_id)
        .filter(PayrollWorkingHour.working_hour_id.in_(unique_ids))
        .all()
    }
    if linked:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Working hours already included in a payroll: {sorted(linked)}",
        )
    return [by_id[wid] for wid in unique_ids]


def payable_working_hours(db: Session, profile_id: int, period_start: date, period_end: date) -> List[WorkingHour]:
    """Approved working hours of a profile dated inside the period and not yet in any payroll."""
    return (
        db.query(WorkingHour)
        .filter(
            WorkingHour.profile_id == profile_id,
            WorkingHour.status == WorkingHourStatus.APPROVED,
            WorkingHour.date >= period_start,
            WorkingHour.date <= period_end,
            WorkingHour.id.not_in(_already_payrolled()),
        )
        .order_by(WorkingHour.date.asc(), WorkingHour.id.asc())
        .all()
    )


def generate_payroll(db: Session, data: PayrollCreate) -> Payroll:
    """
    Generate a payroll record for one profile and pay period.

    Total hours come from data.total_hours, or else from the selected or
    aggregated approved working hours, which are linked to the new record.

    Raises:
        HTTPException: On invalid references, missing rate or nothing to pay
    """
    profile = get_profile(db, data.profile_id)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Profile with id {data.profile_id} does not exist",
        )

    hourly_rate = data.hourly_rate if data.hourly_rate is not None else profile.hourly_rate
    if hourly_rate is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Profile {profile.id} has no default hourly rate; provide hourly_rate",
        )

    working_hours: List[WorkingHour] = []
    if data.total_hours is not None:
        total_hours = quantize(to_decimal(data.total_hours))
    else:
        if data.working_hour_ids:
            working_hours = _explicit_working_hours(db, profile.id, data.working_hour_ids)
        else:
            working_hours = payable_working_hours(db, profile.id, data.pay_period_start, data.pay_period_end)
        if not working_hours:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No approved working hours to pay in this period",
            )
        total_hours = quantize(sum((to_decimal(wh.actual_hours) for wh in working_hours), Decimal("0")))

    policy = data.deduction_policy.to_policy() if data.deduction_policy else default_deduction_policy()

    if data.bank_account_id is not None:
        bank_account_id = _bank_account_or_400(db, data.bank_account_id).id
    else:
        company_account = get_primary_company_account(db)
        bank_account_id = company_account.id if company_account else None

    figures = compute_payroll_figures(total_hours, hourly_rate, policy)
    payroll = Payroll(
        profile_id=profile.id,
        bank_account_id=bank_account_id,
        pay_period_start=data.pay_period_start,
        pay_period_end=data.pay_period_end,
        total_hours=total_hours,
        hourly_rate=hourly_rate,
        gross_pay=figures.gross_pay,
        deductions=figures.deductions,
        net_pay=figures.net_pay,
        status=PayrollStatus.PENDING,
        version=1,
    )
    payroll.working_hour_links = [PayrollWorkingHour(working_hour=wh) for wh in working_hours]

    db.add(payroll)
    db.commit()
    db.refresh(payroll)
    if payroll.net_pay < 0:
        logger.warning("Payroll id=%s has negative net pay %s", payroll.id, payroll.net_pay)
    logger.info(
        "Generated payroll id=%s profile_id=%s hours=%s gross=%s linked=%s",
        payroll.id, payroll.profile_id, payroll.total_hours, payroll.gross_pay, len(working_hours),
    )
    return payroll


def list_payroll(
    db: Session,
    profile_id: Optional[int] = None,
    status_filter: Optional[PayrollStatus] = None,
    period_end_from: Optional[date] = None,
    period_end_to: Optional[date] = None,
) -> List[Payroll]:
    """Salary sheet query, latest pay period first."""
    query = db.query(Payroll).options(
        joinedload(Payroll.profile),
        joinedload(Payroll.bank_account),
    )
    if profile_id is not None:
        query = query.filter(Payroll.profile_id == profile_id)
    if status_filter is not None:
        query = query.filter(Payroll.status == status_filter)
    if period_end_from is not None:
        query = query.filter(Payroll.pay_period_end >= period_end_from)
    if period_end_to is not None:
        query = query.filter(Payroll.pay_period_end <= period_end_to)
    return query.order_by(Payroll.pay_period_end.desc(), Payroll.id.desc()).all()


def summarize(payrolls: List[Payroll]) -> dict:
    """Totals row of a salary sheet."""
    zero = Decimal("0")
    return {
        "count": len(payrolls),
        "total_hours": quantize(sum((to_decimal(p.total_hours) for p in payrolls), zero)),
        "gross_pay": quantize(sum((to_decimal(p.gross_pay) for p in payrolls), zero)),
        "deductions": quantize(sum((to_decimal(p.deductions) for p in payrolls), zero)),
        "net_pay": quantize(sum((to_decimal(p.net_pay) for p in payrolls), zero)),
    }


def get_payroll_or_404(db: Session, payroll_id: int) -> Payroll:
    payroll = db.query(Payroll).filter(Payroll.id == payroll_id).first()
    if not payroll:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Payroll with id {payroll_id} not found",
        )
    return payroll


def update_payroll(db: Session, payroll_id: int, data: PayrollUpdate) -> Payroll:
    """
    Edit a payroll record and recalculate gross and net pay.

    Deductions follow data.deduction_policy, or data.deductions as a manual
    amount; when neither is sent the stored amount is kept.

    Raises:
        RecordImmutableError: If the payroll is paid
        StaleRecordError: If data.version does not match
    """
    payroll = get_payroll_or_404(db, payroll_id)
    ensure_mutable(_ENTITY, payroll.id, payroll.status)
    check_version(_ENTITY, payroll, data.version)

    period_start = data.pay_period_start or payroll.pay_period_start
    period_end = data.pay_period_end or payroll.pay_period_end
    if period_start > period_end:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="pay_period_start must be on or before pay_period_end",
        )
    if data.bank_account_id is not None:
        payroll.bank_account_id = _bank_account_or_400(db, data.bank_account_id).id

    payroll.pay_period_start = period_start
    payroll.pay_period_end = period_end
    if data.total_hours is not None:
        payroll.total_hours = quantize(to_decimal(data.total_hours))
    if data.hourly_rate is not None:
        payroll.hourly_rate = data.hourly_rate

    if data.deduction_policy is not None:
        policy = data.deduction_policy.to_policy()
    elif data.deductions is not None:
        policy = DeductionPolicy.manual(data.deductions)
    else:
        policy = DeductionPolicy.manual(payroll.deductions)

    figures = compute_payroll_figures(payroll.total_hours, payroll.hourly_rate, policy)
    payroll.gross_pay = figures.gross_pay
    payroll.deductions = figures.deductions
    payroll.net_pay = figures.net_pay
    bump_version(payroll)

    db.commit()
    db.refresh(payroll)
    logger.info(
        "Updated payroll id=%s version=%s gross=%s net=%s",
        payroll.id, payroll.version, payroll.gross_pay, payroll.net_pay,
    )
    return payroll


def set_payroll_status(db: Session, payroll_id: int, data: PayrollStatusUpdate) -> Payroll:
    """
    Move a payroll through pending -> approved -> paid.

    Paying a payroll also marks its linked approved working hours as paid,
    in the same transaction.

    Raises:
        InvalidStatusTransitionError: If the transition is not allowed
    """
    payroll = get_payroll_or_404(db, payroll_id)
    check_version(_ENTITY, payroll, data.version)
    current = PayrollStatus(payroll.status)
    target = validate_transition(PayrollStatus, current, data.status)
    if target == current:
        return payroll

    payroll.status = target
    bump_version(payroll)

    paid_hours = 0
    if target == PayrollStatus.PAID:
        for working_hour in payroll.working_hours:
            if WorkingHourStatus(working_hour.status) == WorkingHourStatus.APPROVED:
                working_hour.status = validate_transition(
                    WorkingHourStatus, working_hour.status, WorkingHourStatus.PAID
                )
                bump_version(working_hour)
                paid_hours += 1

    db.commit()
    db.refresh(payroll)
    logger.info(
        "Payroll id=%s status %s -> %s (working hours marked paid: %s)",
        payroll.id, current.value, target.value, paid_hours,
    )
    return payroll
