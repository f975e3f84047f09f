"""
Constants for roles and permission identifiers
"""

# Role constants
ROLE_ADMIN = "admin"
ROLE_EMPLOYEE = "employee"
ROLE_ACCOUNTANT = "accountant"
ROLE_OPERATION = "operation"
ROLE_SALES_MANAGER = "sales_manager"

ROLES = [
    {"value": ROLE_ADMIN, "label": "Administrator"},
    {"value": ROLE_EMPLOYEE, "label": "Employee"},
    {"value": ROLE_ACCOUNTANT, "label": "Accountant"},
    {"value": ROLE_OPERATION, "label": "Operations"},
    {"value": ROLE_SALES_MANAGER, "label": "Sales Manager"},
]

ROLE_VALUES = frozenset(r["value"] for r in ROLES)

PERMISSION_GROUPS = [
    {
        "category": "Dashboard",
        "permissions": ["dashboard_view"],
        "description": "Access to main dashboard",
    },
    {
        "category": "Employees",
        "permissions": ["employees_view", "employees_manage"],
        "description": "View and manage employee records",
    },
    {
        "category": "Clients",
        "permissions": ["clients_view", "clients_manage"],
        "description": "View and manage client information",
    },
    {
        "category": "Projects",
        "permissions": ["projects_view", "projects_manage"],
        "description": "View and manage project details",
    },
    {
        "category": "Working Hours",
        "permissions": ["working_hours_view", "working_hours_manage", "working_hours_approve"],
        "description": "Track, manage and approve working hours",
    },
    {
        "category": "Roster",
        "permissions": ["roster_view", "roster_manage"],
        "description": "View and manage work schedules",
    },
    {
        "category": "Payroll",
        "permissions": ["payroll_view", "payroll_manage", "payroll_process"],
        "description": "View, manage and process payroll",
    },
    {
        "category": "Bank Balance",
        "permissions": ["bank_balance_view", "bank_balance_manage"],
        "description": "View and manage financial balances",
    },
    {
        "category": "Reports",
        "permissions": ["reports_view", "reports_generate"],
        "description": "View and generate reports",
    },
    {
        "category": "Notifications",
        "permissions": ["notifications_view"],
        "description": "View system notifications",
    },
]

PERMISSION_VALUES = frozenset(
    permission for group in PERMISSION_GROUPS for permission in group["permissions"]
)
