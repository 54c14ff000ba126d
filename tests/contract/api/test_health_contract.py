import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient

from src.app import create_app
from src.api.router import health
from src.infra.config.settings import settings


@pytest.fixture
def client(monkeypatch):
    db_manager = MagicMock()
    db_manager.ping = AsyncMock(return_value=True)
    monkeypatch.setattr(health, "get_database_manager", lambda: db_manager)
    monkeypatch.setattr(health, "ping_redis", AsyncMock(return_value=True))
    return TestClient(create_app())


def test_health_check_contract(client):
    """Contract test for health check endpoint
    Verifies the response schema and format matches the API contract
    """
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()

    # Schema validation
    assert isinstance(data, dict)
    for field in ("status", "service", "version", "services", "timestamp"):
        assert field in data

    # Value validation
    assert data["status"] in ["healthy", "degraded"]
    assert data["service"] == settings.APP_NAME
    assert data["version"] == settings.APP_VERSION
    assert data["services"]["database"] == "healthy"
    assert data["services"]["redis"] == "healthy"
    assert data["services"]["websocket"] == "0 clients connected"


def test_health_degraded_when_database_down(client, monkeypatch):
    db_manager = MagicMock()
    db_manager.ping = AsyncMock(return_value=False)
    monkeypatch.setattr(health, "get_database_manager", lambda: db_manager)

    data = client.get("/api/v1/health").json()

    assert data["status"] == "degraded"
    assert data["services"]["database"] == "unhealthy"
