"""
Profile endpoints
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shiftpay.core.deps import get_db
from shiftpay.schemas.profile import ProfileCreate, ProfileUpdate, ProfileOut
from shiftpay.services.profile_service import (
    create_profile,
    list_profiles,
    get_profile_or_404,
    update_profile,
)

router = APIRouter()


@router.post("", response_model=ProfileOut, status_code=201)
async def create_profile_endpoint(
    profile_data: ProfileCreate,
    db: Session = Depends(get_db),
):
    """Create a new worker profile"""
    return create_profile(db, profile_data)


@router.get("", response_model=List[ProfileOut])
async def list_profiles_endpoint(
    active_only: Optional[bool] = Query(None),
    role: Optional[str] = Query(None, description="Filter by role identifier"),
    db: Session = Depends(get_db),
):
    return list_profiles(db, active_only=active_only, role=role)


@router.get("/{profile_id}", response_model=ProfileOut)
async def get_profile_endpoint(profile_id: int, db: Session = Depends(get_db)):
    return get_profile_or_404(db, profile_id)


@router.patch("/{profile_id}", response_model=ProfileOut)
async def update_profile_endpoint(
    profile_id: int,
    profile_data: ProfileUpdate,
    db: Session = Depends(get_db),
):
    """Update a profile (a changed hourly rate applies to new working hours only)"""
    return update_profile(db, profile_id, profile_data)
