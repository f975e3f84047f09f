"""
Bank account service
"""
import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from shiftpay.models.bank_account import BankAccount
from shiftpay.schemas.bank_account import BankAccountCreate, BankAccountUpdate
from shiftpay.services.profile_service import get_profile_or_404

logger = logging.getLogger(__name__)


def _clear_other_primaries(db: Session, account: BankAccount) -> None:
    """Only one primary account per owner (company accounts share the NULL owner)."""
    query = db.query(BankAccount).filter(BankAccount.id != account.id, BankAccount.is_primary.is_(True))
    if account.profile_id is None:
        query = query.filter(BankAccount.profile_id.is_(None))
    else:
        query = query.filter(BankAccount.profile_id == account.profile_id)
    for other in query.all():
        other.is_primary = False


def create_bank_account(db: Session, account_data: BankAccountCreate) -> BankAccount:
    if account_data.profile_id is not None:
        get_profile_or_404(db, account_data.profile_id)

    account = BankAccount(**account_data.model_dump())
    db.add(account)
    db.flush()
    if account.is_primary:
        _clear_other_primaries(db, account)
    db.commit()
    db.refresh(account)
    logger.info("Created bank account id=%s profile_id=%s", account.id, account.profile_id)
    return account


def list_bank_accounts(
    db: Session,
    profile_id: Optional[int] = None,
    company_only: bool = False,
) -> List[BankAccount]:
    """List accounts with the primary one first."""
    query = db.query(BankAccount)
    if company_only:
        query = query.filter(BankAccount.profile_id.is_(None))
    elif profile_id is not None:
        query = query.filter(BankAccount.profile_id == profile_id)
    return query.order_by(BankAccount.is_primary.desc(), BankAccount.id.asc()).all()


def get_bank_account_or_404(db: Session, account_id: int) -> BankAccount:
    account = db.query(BankAccount).filter(BankAccount.id == account_id).first()
    if not account:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Bank account with id {account_id} not found",
        )
    return account


def get_primary_company_account(db: Session) -> Optional[BankAccount]:
    return (
        db.query(BankAccount)
        .filter(BankAccount.profile_id.is_(None), BankAccount.is_primary.is_(True))
        .first()
    )


def update_bank_account(db: Session, account_id: int, account_data: BankAccountUpdate) -> BankAccount:
    account = get_bank_account_or_404(db, account_id)
    for field, value in account_data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(account, field, value)
    if account.is_primary:
        _clear_other_primaries(db, account)
    db.commit()
    db.refresh(account)
    logger.info("Updated bank account id=%s", account.id)
    return account
