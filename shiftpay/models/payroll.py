"""
Payroll models - pay statements and the working hours they aggregate
"""
from sqlalchemy import (
    Column,
    Integer,
    Date,
    DateTime,
    ForeignKey,
    Numeric,
    UniqueConstraint,
    CheckConstraint,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from shiftpay.db.base import Base
from shiftpay.utils.enums import enum_values


class PayrollStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    PAID = "paid"


class Payroll(Base):
    __tablename__ = "payroll"
    __table_args__ = (
        CheckConstraint("pay_period_start <= pay_period_end", name="ck_payroll_period_order"),
    )

    id = Column(Integer, primary_key=True, index=True)
    profile_id = Column(Integer, ForeignKey("profiles.id"), nullable=False, index=True)
    bank_account_id = Column(Integer, ForeignKey("bank_accounts.id"), nullable=True)
    pay_period_start = Column(Date, nullable=False)
    pay_period_end = Column(Date, nullable=False, index=True)
    total_hours = Column(Numeric(8, 2), nullable=False)
    hourly_rate = Column(Numeric(10, 2), nullable=False)
    gross_pay = Column(Numeric(12, 2), nullable=False)
    deductions = Column(Numeric(12, 2), nullable=False, default=0)
    net_pay = Column(Numeric(12, 2), nullable=False)  # May be negative
    status = Column(
        SQLEnum(PayrollStatus, name="payroll_status", values_callable=enum_values),
        nullable=False,
        default=PayrollStatus.PENDING,
    )
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.current_timestamp(), onupdate=func.current_timestamp(), nullable=False)

    profile = relationship("Profile")
    bank_account = relationship("BankAccount")
    working_hour_links = relationship(
        "PayrollWorkingHour", back_populates="payroll", cascade="all, delete-orphan", order_by="PayrollWorkingHour.id"
    )

    @property
    def working_hours(self):
        return [link.working_hour for link in self.working_hour_links]


class PayrollWorkingHour(Base):
    __tablename__ = "payroll_working_hours"
    __table_args__ = (
        UniqueConstraint("payroll_id", "working_hour_id", name="uq_payroll_working_hours_pair"),
    )

    id = Column(Integer, primary_key=True, index=True)
    payroll_id = Column(Integer, ForeignKey("payroll.id", ondelete="CASCADE"), nullable=False, index=True)
    working_hour_id = Column(Integer, ForeignKey("working_hours.id"), nullable=False, index=True)

    payroll = relationship("Payroll", back_populates="working_hour_links")
    working_hour = relationship("WorkingHour")
