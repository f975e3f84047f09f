"""
Database models
"""
from shiftpay.models.profile import Profile
from shiftpay.models.client import Client, Project
from shiftpay.models.bank_account import BankAccount
from shiftpay.models.working_hour import WorkingHour, WorkingHourStatus
from shiftpay.models.roster import Roster, RosterProfile, RosterStatus
from shiftpay.models.payroll import Payroll, PayrollWorkingHour, PayrollStatus
from shiftpay.models.role_permission import RolePermission

__all__ = [
    "Profile",
    "Client",
    "Project",
    "BankAccount",
    "WorkingHour",
    "WorkingHourStatus",
    "Roster",
    "RosterProfile",
    "RosterStatus",
    "Payroll",
    "PayrollWorkingHour",
    "PayrollStatus",
    "RolePermission",
]
