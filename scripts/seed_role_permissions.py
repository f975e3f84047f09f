"""
Seed the default role permission matrix.
If any permission is already stored the matrix is left unchanged, unless --force is given.
Run from the repository root with .env loaded.

Usage:
  python scripts/seed_role_permissions.py           # seed an empty table
  python scripts/seed_role_permissions.py --force   # replace the stored matrix
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from shiftpay.constants import (
    PERMISSION_VALUES,
    ROLE_ACCOUNTANT,
    ROLE_ADMIN,
    ROLE_EMPLOYEE,
    ROLE_OPERATION,
    ROLE_SALES_MANAGER,
)
from shiftpay.db.session import SessionLocal
from shiftpay.services.role_permission_service import list_permissions, save_permissions

DEFAULT_MATRIX = {
    ROLE_ADMIN: sorted(PERMISSION_VALUES),
    ROLE_ACCOUNTANT: [
        "dashboard_view",
        "employees_view",
        "payroll_view",
        "payroll_manage",
        "payroll_process",
        "bank_balance_view",
        "bank_balance_manage",
        "reports_view",
        "reports_generate",
        "notifications_view",
    ],
    ROLE_OPERATION: [
        "dashboard_view",
        "employees_view",
        "clients_view",
        "projects_view",
        "working_hours_view",
        "working_hours_manage",
        "working_hours_approve",
        "roster_view",
        "roster_manage",
        "notifications_view",
    ],
    ROLE_SALES_MANAGER: [
        "dashboard_view",
        "clients_view",
        "clients_manage",
        "projects_view",
        "projects_manage",
        "reports_view",
        "notifications_view",
    ],
    ROLE_EMPLOYEE: [
        "dashboard_view",
        "working_hours_view",
        "roster_view",
        "notifications_view",
    ],
}


def main():
    force = "--force" in sys.argv[1:]

    db = SessionLocal()
    try:
        matrix, revision = list_permissions(db)
        granted = sum(len(perms) for perms in matrix.values())
        if granted and not force:
            print(f"Role permissions already seeded ({granted} grants, revision {revision[:12]}); use --force to replace")
            return
        matrix, revision = save_permissions(db, DEFAULT_MATRIX)
        for role in sorted(matrix):
            print(f"{role}: {len(matrix[role])} permissions")
        print(f"Revision: {revision[:12]}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
