"""
Tests for payroll generation, editing and payment
"""
from decimal import Decimal

import pytest
from fastapi import status

from shiftpay.models.profile import Profile


def _money(value):
    return Decimal(str(value))


@pytest.fixture
def march_hours(log_hours, set_status):
    """Two approved entries in March (8h + 2h), one pending, one approved in April"""
    first = log_hours(day="2026-03-02", start="09:00", end="17:00")
    second = log_hours(day="2026-03-03", start="09:00", end="11:00")
    pending = log_hours(day="2026-03-04")
    april = log_hours(day="2026-04-10")
    for entry in (first, second, april):
        set_status(entry["id"], "approved")
    return {"first": first, "second": second, "pending": pending, "april": april}


def _generate(client, **payload):
    return client.post("/api/v1/payroll", json=payload)


def test_generate_from_approved_hours(client, worker, company_account, march_hours):
    response = _generate(
        client,
        profile_id=worker.id,
        pay_period_start="2026-03-01",
        pay_period_end="2026-03-31",
    )
    assert response.status_code == status.HTTP_201_CREATED, response.text
    data = response.json()

    assert _money(data["total_hours"]) == Decimal("10")
    assert _money(data["hourly_rate"]) == Decimal("15")
    assert _money(data["gross_pay"]) == Decimal("150")
    assert _money(data["deductions"]) == Decimal("15")
    assert _money(data["net_pay"]) == Decimal("135")
    assert data["status"] == "pending"
    assert data["bank_account_id"] == company_account.id
    assert sorted(wh["id"] for wh in data["working_hours"]) == sorted(
        [march_hours["first"]["id"], march_hours["second"]["id"]]
    )


def test_hours_are_not_paid_twice(client, worker, march_hours):
    first = _generate(client, profile_id=worker.id, pay_period_start="2026-03-01", pay_period_end="2026-03-31")
    assert first.status_code == status.HTTP_201_CREATED

    again = _generate(client, profile_id=worker.id, pay_period_start="2026-03-01", pay_period_end="2026-03-31")
    assert again.status_code == status.HTTP_400_BAD_REQUEST

    explicit = _generate(
        client,
        profile_id=worker.id,
        pay_period_start="2026-03-01",
        pay_period_end="2026-03-31",
        working_hour_ids=[march_hours["first"]["id"]],
    )
    assert explicit.status_code == status.HTTP_400_BAD_REQUEST
    assert "already included" in explicit.json()["detail"]


def test_payrolled_hours_cannot_be_edited_or_deleted(client, worker, march_hours):
    payroll = _generate(
        client, profile_id=worker.id, pay_period_start="2026-03-01", pay_period_end="2026-03-31"
    ).json()
    entry_url = f"/api/v1/working-hours/{march_hours['first']['id']}"

    edit = client.patch(entry_url, json={"actual_hours": 2})
    assert edit.status_code == status.HTTP_409_CONFLICT
    assert edit.json()["error_code"] == "WORKING_HOUR_IN_USE"
    assert _money(client.get(entry_url).json()["actual_hours"]) == Decimal("8")

    delete = client.delete(entry_url)
    assert delete.status_code == status.HTTP_409_CONFLICT
    assert delete.json()["error_code"] == "WORKING_HOUR_IN_USE"

    fetched = client.get(f"/api/v1/payroll/{payroll['id']}").json()
    assert _money(fetched["total_hours"]) == Decimal("10")

    notes = client.patch(entry_url, json={"notes": "checked"})
    assert notes.status_code == status.HTTP_200_OK
    assert notes.json()["notes"] == "checked"


def test_explicit_working_hours_must_be_approved(client, worker, march_hours):
    response = _generate(
        client,
        profile_id=worker.id,
        pay_period_start="2026-03-01",
        pay_period_end="2026-03-31",
        working_hour_ids=[march_hours["pending"]["id"]],
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_explicit_working_hour_selection(client, worker, march_hours):
    response = _generate(
        client,
        profile_id=worker.id,
        pay_period_start="2026-03-01",
        pay_period_end="2026-04-30",
        working_hour_ids=[march_hours["second"]["id"], march_hours["april"]["id"]],
    )
    assert response.status_code == status.HTTP_201_CREATED
    # 2h + 8h
    assert _money(response.json()["total_hours"]) == Decimal("10")


def test_generate_with_explicit_total_hours(client, worker):
    response = _generate(
        client,
        profile_id=worker.id,
        pay_period_start="2026-03-01",
        pay_period_end="2026-03-31",
        total_hours=40,
    )
    data = response.json()
    assert _money(data["gross_pay"]) == Decimal("600")
    assert _money(data["deductions"]) == Decimal("60")
    assert _money(data["net_pay"]) == Decimal("540")
    assert data["working_hours"] == []
    assert data["bank_account_id"] is None


def test_manual_deduction_can_make_net_negative(client, worker):
    response = _generate(
        client,
        profile_id=worker.id,
        pay_period_start="2026-03-01",
        pay_period_end="2026-03-31",
        total_hours=2,
        hourly_rate="10",
        deduction_policy={"kind": "manual", "value": "50"},
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert _money(data["gross_pay"]) == Decimal("20")
    assert _money(data["net_pay"]) == Decimal("-30")


@pytest.mark.parametrize("payload", [
    {"pay_period_start": "2026-03-31", "pay_period_end": "2026-03-01", "total_hours": 1},
    {"pay_period_start": "2026-03-01", "pay_period_end": "2026-03-31", "total_hours": 1,
     "deduction_policy": {"kind": "flat_percent", "value": 1.5}},
    {"pay_period_start": "2026-03-01", "pay_period_end": "2026-03-31", "total_hours": 1,
     "deduction_policy": {"kind": "progressive", "value": 0.1}},
    {"pay_period_start": "2026-03-01", "pay_period_end": "2026-03-31", "total_hours": 1,
     "working_hour_ids": [1]},
])
def test_invalid_generation_payloads(client, worker, payload):
    response = _generate(client, profile_id=worker.id, **payload)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_profile_without_rate_needs_explicit_rate(client, db):
    profile = Profile(full_name="No Rate", email="norate@example.com", role="employee")
    db.add(profile)
    db.commit()

    response = _generate(
        client,
        profile_id=profile.id,
        pay_period_start="2026-03-01",
        pay_period_end="2026-03-31",
        total_hours=5,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_update_recalculates_gross_and_net(client, worker):
    payroll = _generate(
        client, profile_id=worker.id, pay_period_start="2026-03-01", pay_period_end="2026-03-31", total_hours=40
    ).json()

    # Stored deduction amount is kept when no deduction input is sent
    updated = client.patch(f"/api/v1/payroll/{payroll['id']}", json={"total_hours": 20}).json()
    assert _money(updated["gross_pay"]) == Decimal("300")
    assert _money(updated["deductions"]) == Decimal("60")
    assert _money(updated["net_pay"]) == Decimal("240")

    updated = client.patch(
        f"/api/v1/payroll/{payroll['id']}",
        json={"deduction_policy": {"kind": "flat_percent", "value": 0.25}, "version": updated["version"]},
    ).json()
    assert _money(updated["deductions"]) == Decimal("75")
    assert _money(updated["net_pay"]) == Decimal("225")
    assert updated["version"] == 3


def test_update_with_stale_version(client, worker):
    payroll = _generate(
        client, profile_id=worker.id, pay_period_start="2026-03-01", pay_period_end="2026-03-31", total_hours=4
    ).json()
    client.patch(f"/api/v1/payroll/{payroll['id']}", json={"hourly_rate": "16"})

    response = client.patch(f"/api/v1/payroll/{payroll['id']}", json={"hourly_rate": "17", "version": 1})
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["error_code"] == "STALE_RECORD"


def test_paying_payroll_pays_linked_hours(client, worker, march_hours):
    payroll = _generate(
        client, profile_id=worker.id, pay_period_start="2026-03-01", pay_period_end="2026-03-31"
    ).json()
    url = f"/api/v1/payroll/{payroll['id']}/status"

    skipped = client.patch(url, json={"status": "paid"})
    assert skipped.status_code == status.HTTP_409_CONFLICT
    assert skipped.json()["error_code"] == "INVALID_STATUS_TRANSITION"

    assert client.patch(url, json={"status": "approved"}).json()["status"] == "approved"
    paid = client.patch(url, json={"status": "paid"}).json()
    assert paid["status"] == "paid"
    assert {wh["status"] for wh in paid["working_hours"]} == {"paid"}

    untouched = client.get(f"/api/v1/working-hours/{march_hours['april']['id']}").json()
    assert untouched["status"] == "approved"

    edit = client.patch(f"/api/v1/payroll/{payroll['id']}", json={"total_hours": 1})
    assert edit.status_code == status.HTTP_409_CONFLICT
    assert edit.json()["error_code"] == "RECORD_IMMUTABLE"


def test_salary_sheet_listing(client, worker, second_worker):
    for profile, end in ((worker, "2026-01-31"), (worker, "2026-02-28"), (second_worker, "2026-02-28")):
        _generate(client, profile_id=profile.id, pay_period_start=end[:8] + "01", pay_period_end=end, total_hours=10)

    listing = client.get("/api/v1/payroll", params={"profile_id": worker.id}).json()
    assert [p["pay_period_end"] for p in listing] == ["2026-02-28", "2026-01-31"]
    assert listing[0]["profile"]["full_name"] == "Dana Worker"

    february = client.get(
        "/api/v1/payroll",
        params={"period_end_from": "2026-02-01", "period_end_to": "2026-02-28"},
    ).json()
    assert len(february) == 2

    assert client.get("/api/v1/payroll", params={"status": "paid"}).json() == []
