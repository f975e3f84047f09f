"""
Pytest configuration and fixtures
"""
import os

# Settings require DATABASE_URL at import time
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from shiftpay.main import app
from shiftpay.db.base import Base
from shiftpay.core.deps import get_db

# Import all models to ensure they're registered with Base.metadata
from shiftpay.models import (  # noqa: F401
    BankAccount,
    Client,
    Payroll,
    PayrollWorkingHour,
    Profile,
    Project,
    RolePermission,
    Roster,
    RosterProfile,
    WorkingHour,
)


# Use in-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


# Enable foreign keys for SQLite
@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Test client fixture with database override"""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def worker(db: Session):
    """A worker profile with a default hourly rate of 15"""
    profile = Profile(
        full_name="Dana Worker",
        email="dana@example.com",
        role="employee",
        hourly_rate=Decimal("15.00"),
        is_active=True,
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


@pytest.fixture
def second_worker(db: Session):
    profile = Profile(
        full_name="Sam Second",
        email="sam@example.com",
        role="operation",
        hourly_rate=Decimal("20.00"),
        is_active=True,
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


@pytest.fixture
def acme(db: Session):
    """A client company"""
    record = Client(name="Jo Contact", company="Acme Ltd", email="jo@acme.test", status="active")
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


@pytest.fixture
def acme_project(db: Session, acme):
    project = Project(name="Warehouse", client_id=acme.id, status="active")
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


@pytest.fixture
def company_account(db: Session):
    """Primary company bank account (no owning profile)"""
    account = BankAccount(profile_id=None, bank_name="First Bank", account_number="000111", is_primary=True)
    db.add(account)
    db.commit()
    db.refresh(account)
    return account


@pytest.fixture
def log_hours(client, worker, acme, acme_project):
    """Post a working hour entry for the default worker; returns the JSON body"""
    def _log(day="2026-03-02", start="09:00", end="17:00", **extra):
        payload = {
            "profile_id": worker.id,
            "client_id": acme.id,
            "project_id": acme_project.id,
            "date": day,
            "start_time": start,
            "end_time": end,
        }
        payload.update(extra)
        response = client.post("/api/v1/working-hours", json=payload)
        assert response.status_code == 201, response.text
        return response.json()
    return _log


@pytest.fixture
def set_status(client):
    """Move a working hour to the given status"""
    def _set(working_hour_id, new_status):
        response = client.patch(
            f"/api/v1/working-hours/{working_hour_id}/status",
            json={"status": new_status},
        )
        assert response.status_code == 200, response.text
        return response.json()
    return _set
