"""
Tests for the role permission matrix endpoints
"""
from fastapi import status

from shiftpay.constants import ROLE_VALUES
from shiftpay.models.role_permission import RolePermission


def test_empty_matrix_lists_every_role(client):
    response = client.get("/api/v1/role-permissions")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert set(data["permissions"]) == set(ROLE_VALUES)
    assert all(perms == [] for perms in data["permissions"].values())
    assert len(data["revision"]) == 64


def test_save_replaces_whole_set(client, db):
    first = client.put(
        "/api/v1/role-permissions",
        json={"permissions": {"admin": ["dashboard_view", "payroll_view"], "employee": ["roster_view"]}},
    )
    assert first.status_code == status.HTTP_200_OK
    assert first.json()["permissions"]["admin"] == ["dashboard_view", "payroll_view"]

    second = client.put(
        "/api/v1/role-permissions",
        json={
            "permissions": {"admin": ["payroll_view", "reports_view"]},
            "expected_revision": first.json()["revision"],
        },
    )
    assert second.status_code == status.HTTP_200_OK
    saved = second.json()["permissions"]
    assert saved["admin"] == ["payroll_view", "reports_view"]
    assert saved["employee"] == []

    stored = {(r.role, r.permission) for r in db.query(RolePermission).all()}
    assert stored == {("admin", "payroll_view"), ("admin", "reports_view")}


def test_stale_revision_rejected(client):
    original = client.get("/api/v1/role-permissions").json()
    client.put("/api/v1/role-permissions", json={"permissions": {"accountant": ["payroll_process"]}})

    response = client.put(
        "/api/v1/role-permissions",
        json={"permissions": {"accountant": []}, "expected_revision": original["revision"]},
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["error_code"] == "PERMISSION_SET_CONFLICT"

    current = client.get("/api/v1/role-permissions").json()
    assert current["permissions"]["accountant"] == ["payroll_process"]


def test_unknown_permission_rejected_without_changes(client):
    client.put("/api/v1/role-permissions", json={"permissions": {"admin": ["dashboard_view"]}})

    response = client.put(
        "/api/v1/role-permissions",
        json={"permissions": {"admin": ["dashboard_view", "self_destruct"]}},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert client.get("/api/v1/role-permissions").json()["permissions"]["admin"] == ["dashboard_view"]


def test_catalog(client):
    data = client.get("/api/v1/role-permissions/catalog").json()
    categories = [g["category"] for g in data["groups"]]
    assert categories[0] == "Dashboard"
    assert "Working Hours" in categories
    assert {r["value"] for r in data["roles"]} == set(ROLE_VALUES)
