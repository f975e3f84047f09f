"""
Roster models - planned shift assignments and their assigned profiles
"""
from sqlalchemy import (
    Column,
    Integer,
    String,
    Boolean,
    Date,
    Time,
    DateTime,
    ForeignKey,
    Numeric,
    Text,
    UniqueConstraint,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from shiftpay.db.base import Base
from shiftpay.utils.enums import enum_values


class RosterStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Roster(Base):
    __tablename__ = "rosters"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=True)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    total_hours = Column(Numeric(6, 2), nullable=False)  # Derived from start/end
    expected_profiles = Column(Integer, nullable=False, default=1)  # Headcount target
    per_hour_rate = Column(Numeric(10, 2), nullable=False, default=0)
    notes = Column(Text, nullable=True)
    status = Column(
        SQLEnum(RosterStatus, name="roster_status", values_callable=enum_values),
        nullable=False,
        default=RosterStatus.PENDING,
    )
    is_locked = Column(Boolean, nullable=False, default=False)  # Manual lock, see roster_lock.is_editable
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)

    client = relationship("Client")
    project = relationship("Project")
    assignments = relationship(
        "RosterProfile", back_populates="roster", cascade="all, delete-orphan", order_by="RosterProfile.id"
    )
    working_hours = relationship("WorkingHour", back_populates="roster")


class RosterProfile(Base):
    __tablename__ = "roster_profiles"
    __table_args__ = (
        UniqueConstraint("roster_id", "profile_id", name="uq_roster_profiles_roster_profile"),
    )

    id = Column(Integer, primary_key=True, index=True)
    roster_id = Column(Integer, ForeignKey("rosters.id", ondelete="CASCADE"), nullable=False, index=True)
    profile_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)

    roster = relationship("Roster", back_populates="assignments")
    profile = relationship("Profile")
