"""
Tests for health and version endpoints
"""
from shiftpay.core.constants import SERVICE_NAME


def test_health_endpoint(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": SERVICE_NAME}


def test_version_endpoint(client):
    response = client.get("/api/v1/version")

    assert response.status_code == 200
    data = response.json()
    assert data["service"] == SERVICE_NAME
    assert data["version"]
    assert data["env"] in ("local", "staging", "prod")
    assert data["overnight_policy"] in ("wrap", "clamp")
