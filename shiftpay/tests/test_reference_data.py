"""
Tests for profiles, clients, projects and bank accounts
"""
from decimal import Decimal

from fastapi import status


def test_create_and_list_profiles(client):
    response = client.post(
        "/api/v1/profiles",
        json={"full_name": "Ana Lee", "email": "ana@example.com", "role": "Accountant", "hourly_rate": "22.50"},
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["role"] == "accountant"
    assert Decimal(data["hourly_rate"]) == Decimal("22.50")
    assert data["is_active"] is True

    listing = client.get("/api/v1/profiles", params={"role": "accountant"})
    assert listing.status_code == status.HTTP_200_OK
    assert [p["email"] for p in listing.json()] == ["ana@example.com"]


def test_duplicate_email_rejected(client, worker):
    response = client.post(
        "/api/v1/profiles",
        json={"full_name": "Other", "email": "DANA@example.com"},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "already exists" in response.json()["detail"]


def test_unknown_role_rejected(client):
    response = client.post(
        "/api/v1/profiles",
        json={"full_name": "X", "email": "x@example.com", "role": "overlord"},
    )
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_update_profile_rate(client, worker):
    response = client.patch(f"/api/v1/profiles/{worker.id}", json={"hourly_rate": "18.00"})
    assert response.status_code == status.HTTP_200_OK
    assert Decimal(response.json()["hourly_rate"]) == Decimal("18.00")


def test_missing_profile_returns_404(client):
    response = client.get("/api/v1/profiles/999")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    body = response.json()
    assert body["error"] is True
    assert body["path"] == "/api/v1/profiles/999"


def test_client_and_project_crud(client):
    created = client.post("/api/v1/clients", json={"name": "Kim", "company": "Globex"})
    assert created.status_code == status.HTTP_201_CREATED
    client_id = created.json()["id"]

    project = client.post("/api/v1/projects", json={"name": "Relocation", "client_id": client_id})
    assert project.status_code == status.HTTP_201_CREATED
    assert project.json()["status"] == "active"

    projects = client.get("/api/v1/projects", params={"client_id": client_id})
    assert [p["name"] for p in projects.json()] == ["Relocation"]

    updated = client.patch(f"/api/v1/clients/{client_id}", json={"status": "inactive"})
    assert updated.json()["status"] == "inactive"
    assert client.get("/api/v1/clients", params={"status": "active"}).json() == []


def test_project_requires_existing_client(client):
    response = client.post("/api/v1/projects", json={"name": "Orphan", "client_id": 404})
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_bank_accounts_primary_first_and_single_primary(client, worker, company_account):
    second = client.post(
        "/api/v1/bank-accounts",
        json={"bank_name": "Second Bank", "account_number": "222", "is_primary": True},
    )
    assert second.status_code == status.HTTP_201_CREATED
    client.post(
        "/api/v1/bank-accounts",
        json={"profile_id": worker.id, "bank_name": "Worker Bank", "account_number": "333", "is_primary": True},
    )

    company = client.get("/api/v1/bank-accounts", params={"company_only": True}).json()
    assert [a["bank_name"] for a in company] == ["Second Bank", "First Bank"]
    assert [a["is_primary"] for a in company] == [True, False]

    own = client.get("/api/v1/bank-accounts", params={"profile_id": worker.id}).json()
    assert len(own) == 1 and own[0]["is_primary"] is True
