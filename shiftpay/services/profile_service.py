"""
Profile service - business logic for worker profiles
"""
import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from shiftpay.models.profile import Profile
from shiftpay.schemas.profile import ProfileCreate, ProfileUpdate

logger = logging.getLogger(__name__)


def _ensure_unique_email(db: Session, email: str, exclude_id: Optional[int] = None) -> None:
    query = db.query(Profile).filter(func.lower(Profile.email) == func.lower(email))
    if exclude_id is not None:
        query = query.filter(Profile.id != exclude_id)
    if query.first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Profile with email '{email}' already exists",
        )


def create_profile(db: Session, profile_data: ProfileCreate) -> Profile:
    """
    Create a new profile.

    Email is treated as case-insensitive unique.
    """
    _ensure_unique_email(db, profile_data.email)

    profile = Profile(**profile_data.model_dump())
    db.add(profile)
    db.commit()
    db.refresh(profile)
    logger.info("Created profile id=%s role=%s", profile.id, profile.role)
    return profile


def list_profiles(
    db: Session,
    active_only: Optional[bool] = None,
    role: Optional[str] = None,
) -> List[Profile]:
    """List profiles ordered by name, optionally filtered by active flag and role."""
    query = db.query(Profile)
    if active_only is not None:
        query = query.filter(Profile.is_active == active_only)
    if role:
        query = query.filter(Profile.role == role)
    return query.order_by(Profile.full_name.asc()).all()


def get_profile(db: Session, profile_id: int) -> Optional[Profile]:
    """Get a profile by ID."""
    return db.query(Profile).filter(Profile.id == profile_id).first()


def get_profile_or_404(db: Session, profile_id: int) -> Profile:
    profile = get_profile(db, profile_id)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Profile with id {profile_id} not found",
        )
    return profile


def update_profile(db: Session, profile_id: int, profile_data: ProfileUpdate) -> Profile:
    profile = get_profile_or_404(db, profile_id)
    update_dict = profile_data.model_dump(exclude_unset=True)

    if update_dict.get("email") is not None:
        _ensure_unique_email(db, update_dict["email"], exclude_id=profile_id)

    for field, value in update_dict.items():
        if value is not None or field == "hourly_rate":
            setattr(profile, field, value)

    db.commit()
    db.refresh(profile)
    logger.info("Updated profile id=%s fields=%s", profile.id, sorted(update_dict))
    return profile
