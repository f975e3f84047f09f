"""
Working hour model - actual or reported hours worked against a client/project
"""
from sqlalchemy import Column, Integer, Date, Time, DateTime, ForeignKey, Numeric, Text, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from shiftpay.db.base import Base
from shiftpay.utils.enums import enum_values

class WorkingHourStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    PAID = "paid"


class WorkingHour(Base):
    __tablename__ = "working_hours"

    id = Column(Integer, primary_key=True, index=True)
    profile_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False, index=True)
    roster_id = Column(Integer, ForeignKey("rosters.id"), nullable=True, index=True)  # Roster entry this log fulfils
    date = Column(Date, nullable=False, index=True)
    start_time = Column(Time, nullable=False)  # Local clock time, no timezone
    end_time = Column(Time, nullable=False)
    sign_in_time = Column(Time, nullable=True)
    sign_out_time = Column(Time, nullable=True)
    total_hours = Column(Numeric(6, 2), nullable=False)  # Derived from start/end
    actual_hours = Column(Numeric(6, 2), nullable=False)  # Worker-confirmed
    overtime_hours = Column(Numeric(6, 2), nullable=False, default=0)  # Derived
    hourly_rate = Column(Numeric(10, 2), nullable=False, default=0)
    payable_amount = Column(Numeric(12, 2), nullable=False, default=0)  # Derived
    notes = Column(Text, nullable=True)
    status = Column(
        SQLEnum(WorkingHourStatus, name="working_hour_status", values_callable=enum_values),
        nullable=False,
        default=WorkingHourStatus.PENDING,
    )
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)

    profile = relationship("Profile")
    client = relationship("Client")
    project = relationship("Project")
    roster = relationship("Roster", back_populates="working_hours")
