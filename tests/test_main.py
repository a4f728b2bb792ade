"""
Basic tests for the Weather Dashboard API.

This module contains tests for the application shell: root, health,
documentation, error format and configuration.
"""

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from weatherdash.config import Settings
from weatherdash.main import create_app
from weatherdash.utils.rate_limit import limiter
from tests.conftest import make_settings


def test_root_endpoint(client):
    """Test the root endpoint returns correct response."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "Weather Dashboard API" in data["message"]
    assert data["version"] == "1.0.0"
    assert data["docs"] == "/docs"


def test_health_endpoint(client):
    """Test the health check endpoint."""
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "OK"
    assert data["storageConnected"] is True
    assert data["uptime"] >= 0
    assert "T" in data["time"]


def test_health_reports_storage_down(tmp_path):
    """Health stays 200 but reports the storage as disconnected."""
    settings = make_settings(
        tmp_path,
        SQLALCHEMY_DATABASE_URI=f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'nope.db'}",
        AUTO_CREATE_TABLES=False,
    )
    with TestClient(create_app(settings)) as client:
        response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["storageConnected"] is False


def test_openapi_docs_available(client):
    """Test that OpenAPI documentation is available."""
    assert client.get("/docs").status_code == 200

    response = client.get("/api/openapi.json")
    assert response.status_code == 200
    data = response.json()
    assert "/api/weather/current" in data["paths"]
    assert "/api/auth/login" in data["paths"]


def test_unknown_route_returns_message(client):
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"message": "Route not found"}


def test_malformed_body_is_400_with_details(client):
    """Framework validation failures use the same error shape."""
    response = client.post("/api/auth/login", content="not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    data = response.json()
    assert data["message"] == "Validation error"
    assert isinstance(data["details"], list)


def test_protected_endpoints_require_auth(client):
    """Test that protected endpoints are registered and reject anonymous calls."""
    assert client.get("/api/user/profile").status_code == 401
    assert client.put("/api/user/profile", json={}).status_code == 401
    assert client.post("/api/weather/current", json={"city": "Paris"}).status_code == 401
    assert client.post("/api/weather/forecast", json={"lat": 1, "lon": 2}).status_code == 401
    assert client.post("/api/weather/air-quality", json={"lat": 1, "lon": 2}).status_code == 401
    assert client.get("/api/weather/history").status_code == 401


def test_cors_middleware_enabled(client):
    """Test that CORS middleware is enabled."""
    response = client.get("/", headers={"Origin": "http://localhost:3000"})
    assert response.status_code == 200
    cors_headers = [h for h in response.headers.keys() if h.startswith("access-control")]
    assert len(cors_headers) > 0


def test_rate_limit_uses_message_shape(tmp_path):
    """Login is limited per client and the 429 body has a message."""
    limiter.reset()
    settings = make_settings(tmp_path, RATE_LIMIT_ENABLED=True)
    with TestClient(create_app(settings)) as client:
        statuses = [
            client.post("/api/auth/login", json={"email": "x@example.com", "password": "whatever"}).status_code
            for _ in range(11)
        ]
    assert statuses[:10] == [400] * 10
    assert statuses[10] == 429


class TestConfiguration:
    """Settings parsing."""

    def test_cors_origins_from_comma_string(self):
        settings = Settings(BACKEND_CORS_ORIGINS="http://a.test, http://b.test", LOG_DIR="")
        assert settings.BACKEND_CORS_ORIGINS == ["http://a.test", "http://b.test"]

    def test_database_url_from_platform_env(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgres://user:pw@db:5432/weather")
        settings = Settings()
        assert settings.SQLALCHEMY_DATABASE_URI == "postgresql+asyncpg://user:pw@db:5432/weather"

    def test_database_url_default(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("SQLALCHEMY_DATABASE_URI", raising=False)
        assert Settings().SQLALCHEMY_DATABASE_URI == "sqlite+aiosqlite:///./weather_app.db"

    @pytest.mark.parametrize("key, mock", [
        (None, True),
        ("", True),
        ("your-openweather-api-key-here", True),
        ("real-key", False),
    ])
    def test_mock_weather_flag(self, key, mock):
        assert Settings(OPENWEATHER_API_KEY=key).mock_weather is mock

    def test_settings_are_immutable(self):
        settings = Settings()
        with pytest.raises(ValidationError):
            settings.SECRET_KEY = "changed"


def test_rate_limit_switch_follows_latest_app(tmp_path):
    create_app(make_settings(tmp_path, RATE_LIMIT_ENABLED=True))
    assert limiter.enabled is True

    app = create_app(make_settings(tmp_path, RATE_LIMIT_ENABLED=False))
    assert limiter.enabled is False
    assert app.state.limiter is limiter
