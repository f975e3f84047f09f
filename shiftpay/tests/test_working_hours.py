"""
Tests for working hour endpoints
"""
from datetime import date, time
from decimal import Decimal

from fastapi import status

from shiftpay.core.config import settings
from shiftpay.models.client import Client, Project
from shiftpay.schemas.working_hour import WorkingHourUpdate


def _money(value):
    return Decimal(str(value))


def test_log_hours_computes_overtime_and_payable(log_hours):
    data = log_hours(start="08:00", end="18:00", hourly_rate="20")

    assert data["status"] == "pending"
    assert data["version"] == 1
    assert _money(data["total_hours"]) == Decimal("10")
    assert _money(data["actual_hours"]) == Decimal("10")
    assert _money(data["overtime_hours"]) == Decimal("2")
    assert _money(data["payable_amount"]) == Decimal("220")
    assert data["profile"]["full_name"] == "Dana Worker"
    assert data["project"]["name"] == "Warehouse"


def test_hourly_rate_defaults_to_profile_rate(log_hours):
    data = log_hours(start="09:00", end="15:00")

    assert _money(data["hourly_rate"]) == Decimal("15")
    assert _money(data["payable_amount"]) == Decimal("90")


def test_confirmed_actual_hours_drive_payable(log_hours):
    data = log_hours(start="09:00", end="17:00", actual_hours="6.5")

    assert _money(data["total_hours"]) == Decimal("8")
    assert _money(data["actual_hours"]) == Decimal("6.5")
    assert _money(data["payable_amount"]) == Decimal("97.5")


def test_overnight_shift_wraps(log_hours):
    data = log_hours(start="22:00", end="06:00")
    assert _money(data["total_hours"]) == Decimal("8")


def test_overnight_shift_clamped_when_configured(log_hours, monkeypatch):
    monkeypatch.setattr(settings, "OVERNIGHT_POLICY", "clamp")
    data = log_hours(start="22:00", end="06:00")

    assert _money(data["total_hours"]) == Decimal("0")
    assert _money(data["payable_amount"]) == Decimal("0")


def test_project_must_belong_to_client(client, db, worker, acme):
    other = Client(name="Other", status="active")
    db.add(other)
    db.commit()
    foreign_project = Project(name="Elsewhere", client_id=other.id, status="active")
    db.add(foreign_project)
    db.commit()

    response = client.post(
        "/api/v1/working-hours",
        json={
            "profile_id": worker.id,
            "client_id": acme.id,
            "project_id": foreign_project.id,
            "date": "2026-03-02",
            "start_time": "09:00",
            "end_time": "17:00",
        },
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "does not belong" in response.json()["detail"]


def test_unknown_profile_rejected(client, acme, acme_project):
    response = client.post(
        "/api/v1/working-hours",
        json={
            "profile_id": 999,
            "client_id": acme.id,
            "project_id": acme_project.id,
            "date": "2026-03-02",
            "start_time": "09:00",
            "end_time": "17:00",
        },
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_actual_hours_over_a_day_rejected(client, worker, acme, acme_project):
    response = client.post(
        "/api/v1/working-hours",
        json={
            "profile_id": worker.id,
            "client_id": acme.id,
            "project_id": acme_project.id,
            "date": "2026-03-02",
            "start_time": "09:00",
            "end_time": "17:00",
            "actual_hours": 25,
        },
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_update_recalculates_derived_fields(client, log_hours):
    entry = log_hours(start="09:00", end="17:00", hourly_rate="20")

    response = client.patch(f"/api/v1/working-hours/{entry['id']}", json={"actual_hours": 10})
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert _money(data["overtime_hours"]) == Decimal("2")
    assert _money(data["payable_amount"]) == Decimal("220")
    assert data["version"] == 2


def test_changing_times_resets_actual_hours(client, log_hours):
    entry = log_hours(start="09:00", end="17:00", actual_hours="7")

    response = client.patch(f"/api/v1/working-hours/{entry['id']}", json={"end_time": "13:00"})
    data = response.json()
    assert _money(data["total_hours"]) == Decimal("4")
    assert _money(data["actual_hours"]) == Decimal("4")


def test_rate_change_keeps_confirmed_hours(client, log_hours):
    entry = log_hours(start="09:00", end="17:00", actual_hours="7")

    data = client.patch(f"/api/v1/working-hours/{entry['id']}", json={"hourly_rate": "10"}).json()
    assert _money(data["actual_hours"]) == Decimal("7")
    assert _money(data["payable_amount"]) == Decimal("70")


def test_stale_version_rejected(client, log_hours):
    entry = log_hours()
    client.patch(f"/api/v1/working-hours/{entry['id']}", json={"notes": "first", "version": 1})

    response = client.patch(f"/api/v1/working-hours/{entry['id']}", json={"notes": "second", "version": 1})
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["error_code"] == "STALE_RECORD"


def test_status_flow_and_paid_immutability(client, log_hours, set_status):
    entry = log_hours()

    assert set_status(entry["id"], "approved")["status"] == "approved"
    # Re-applying the current status is a no-op
    assert set_status(entry["id"], "approved")["status"] == "approved"

    backwards = client.patch(f"/api/v1/working-hours/{entry['id']}/status", json={"status": "rejected"})
    assert backwards.status_code == status.HTTP_409_CONFLICT
    assert backwards.json()["error_code"] == "INVALID_STATUS_TRANSITION"

    assert set_status(entry["id"], "paid")["status"] == "paid"

    edit = client.patch(f"/api/v1/working-hours/{entry['id']}", json={"notes": "late edit"})
    assert edit.status_code == status.HTTP_409_CONFLICT
    assert edit.json()["error_code"] == "RECORD_IMMUTABLE"

    delete = client.delete(f"/api/v1/working-hours/{entry['id']}")
    assert delete.status_code == status.HTTP_409_CONFLICT


def test_pending_cannot_jump_to_paid(client, log_hours):
    entry = log_hours()
    response = client.patch(f"/api/v1/working-hours/{entry['id']}/status", json={"status": "paid"})
    assert response.status_code == status.HTTP_409_CONFLICT


def test_delete_pending_entry(client, log_hours):
    entry = log_hours()
    assert client.delete(f"/api/v1/working-hours/{entry['id']}").status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"/api/v1/working-hours/{entry['id']}").status_code == status.HTTP_404_NOT_FOUND


def test_list_filters_and_order(client, log_hours, set_status):
    early = log_hours(day="2026-03-01")
    late = log_hours(day="2026-03-05")
    log_hours(day="2026-04-01")
    set_status(late["id"], "approved")

    in_march = client.get(
        "/api/v1/working-hours",
        params={"date_from": "2026-03-01", "date_to": "2026-03-31"},
    ).json()
    assert [e["id"] for e in in_march] == [late["id"], early["id"]]

    approved = client.get("/api/v1/working-hours", params={"status": "approved"}).json()
    assert [e["id"] for e in approved] == [late["id"]]


def test_update_schema_parses_date_and_times():
    update = WorkingHourUpdate(date="2026-03-05", start_time="07:30", end_time="15:30")
    assert update.date == date(2026, 3, 5)
    assert update.start_time == time(7, 30)
    assert update.end_time == time(15, 30)
