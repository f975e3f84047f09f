"""
Bank account endpoints
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shiftpay.core.deps import get_db
from shiftpay.schemas.bank_account import BankAccountCreate, BankAccountUpdate, BankAccountOut
from shiftpay.services.bank_account_service import (
    create_bank_account,
    list_bank_accounts,
    get_bank_account_or_404,
    update_bank_account,
)

router = APIRouter()


@router.post("", response_model=BankAccountOut, status_code=201)
async def create_bank_account_endpoint(account_data: BankAccountCreate, db: Session = Depends(get_db)):
    """Create a bank account; omit profile_id for a company account"""
    return create_bank_account(db, account_data)


@router.get("", response_model=List[BankAccountOut])
async def list_bank_accounts_endpoint(
    profile_id: Optional[int] = Query(None),
    company_only: bool = Query(False, description="Only accounts not owned by a profile"),
    db: Session = Depends(get_db),
):
    """List bank accounts, primary account first"""
    return list_bank_accounts(db, profile_id=profile_id, company_only=company_only)


@router.get("/{account_id}", response_model=BankAccountOut)
async def get_bank_account_endpoint(account_id: int, db: Session = Depends(get_db)):
    return get_bank_account_or_404(db, account_id)


@router.patch("/{account_id}", response_model=BankAccountOut)
async def update_bank_account_endpoint(
    account_id: int,
    account_data: BankAccountUpdate,
    db: Session = Depends(get_db),
):
    return update_bank_account(db, account_id, account_data)
