"""Contract tests for the check-in HTTP endpoints."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from src.app import create_app
from src.core.dependencies import get_checkin_service, get_redis_client
from src.core.service.auth.cache.token_store import TokenStore
from src.core.service.auth.jwt_service import JWTService
from src.core.service.auth.models.token import TokenType


@pytest.fixture
def redis_client():
    client = AsyncMock()
    client.exists.return_value = 0
    return client


@pytest.fixture
def jwt_service(redis_client):
    return JWTService(TokenStore(redis_client))


@pytest.fixture
def client(checkin_service, redis_client):
    app = create_app()
    app.dependency_overrides[get_checkin_service] = lambda: checkin_service
    app.dependency_overrides[get_redis_client] = lambda: redis_client
    return TestClient(app)


@pytest.fixture
def auth_headers(jwt_service, session):
    token = jwt_service.create_token(session.user_id)
    return {"Authorization": f"Bearer {token}"}


def test_check_in_anonymous(client):
    response = client.post("/api/v1/checkin")

    assert response.status_code == 200
    assert response.json() == {"success": False, "error": "Not logged in"}


def test_check_in_success(client, auth_headers, user_repository, settings_repository, session):
    settings_repository.values["checkin_reward"] = "15"
    user_repository.add(points=0, consecutive_days=0)

    response = client.post("/api/v1/checkin", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True, "points": 15, "consecutiveDays": 1}
    assert user_repository.records[session.user_id].points == 15


def test_check_in_twice(client, auth_headers, user_repository):
    user_repository.add()

    client.post("/api/v1/checkin", headers=auth_headers)
    response = client.post("/api/v1/checkin", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"success": False, "error": "Already checked in today"}


def test_check_in_disabled(client, auth_headers, user_repository, settings_repository):
    settings_repository.values["checkin_enabled"] = "false"
    user_repository.add()

    response = client.post("/api/v1/checkin", headers=auth_headers)

    assert response.json() == {"success": False, "error": "Check-in is currently disabled"}


def test_invalid_token_is_anonymous(client, user_repository):
    user_repository.add()

    response = client.post("/api/v1/checkin", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 200
    assert response.json() == {"success": False, "error": "Not logged in"}


def test_expired_token_is_anonymous(client, jwt_service, user_repository, session):
    user_repository.add()
    token = jwt_service.create_token(session.user_id, expires_delta=timedelta(minutes=-5))

    response = client.post("/api/v1/checkin", headers={"Authorization": f"Bearer {token}"})

    assert response.json()["error"] == "Not logged in"


def test_refresh_token_is_anonymous(client, jwt_service, user_repository, session):
    user_repository.add()
    token = jwt_service.create_token(session.user_id, token_type=TokenType.REFRESH)

    response = client.post("/api/v1/checkin", headers={"Authorization": f"Bearer {token}"})

    assert response.json()["error"] == "Not logged in"


def test_revoked_token_is_anonymous(client, auth_headers, redis_client):
    redis_client.exists.return_value = 1

    response = client.get("/api/v1/points", headers=auth_headers)

    assert response.json() == 0


def test_points_anonymous(client):
    response = client.get("/api/v1/points")

    assert response.status_code == 200
    assert response.json() == 0


def test_points_for_user(client, auth_headers, user_repository):
    user_repository.add(points=120)

    response = client.get("/api/v1/points", headers=auth_headers)

    assert response.json() == 120


def test_status_anonymous(client):
    response = client.get("/api/v1/checkin/status")

    assert response.status_code == 200
    assert response.json() == {"checkedIn": False}


def test_status_disabled(client, auth_headers, settings_repository):
    settings_repository.values["checkin_enabled"] = "false"

    response = client.get("/api/v1/checkin/status", headers=auth_headers)

    assert response.json() == {"checkedIn": False, "disabled": True}


def test_status_after_check_in(client, auth_headers, user_repository):
    user_repository.add()

    client.post("/api/v1/checkin", headers=auth_headers)
    response = client.get("/api/v1/checkin/status", headers=auth_headers)

    assert response.json() == {"checkedIn": True}


def test_logout_revokes_token(client, auth_headers, redis_client):
    response = client.post("/api/v1/auth/logout", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["success"] is True
    redis_client.setex.assert_awaited_once()
    key = redis_client.setex.await_args.args[0]
    assert key.startswith("blacklist:token:")


def test_logout_without_token(client):
    response = client.post("/api/v1/auth/logout")

    assert response.status_code == 401
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "NOT_AUTHENTICATED"


def test_logout_with_invalid_token(client):
    response = client.post("/api/v1/auth/logout", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_TOKEN"
