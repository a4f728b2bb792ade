"""Shared pytest fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine

from weatherdash.config import Settings
from weatherdash.database import Base, create_session_factory
from weatherdash.main import create_app
import weatherdash.models  # noqa: F401

TEST_SECRET = "test-secret-key-for-signing-tokens"

TEST_USER = {
    "username": "alice",
    "email": "alice@example.com",
    "password": "secret123",
}


def make_settings(tmp_path, **overrides) -> Settings:
    """Settings pointing at a throwaway SQLite file."""
    values = {
        "SECRET_KEY": TEST_SECRET,
        "SQLALCHEMY_DATABASE_URI": f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        "OPENWEATHER_API_KEY": None,
        "RATE_LIMIT_ENABLED": False,
        "LOG_DIR": "",
        "LOG_LEVEL": "WARNING",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings(tmp_path):
    """Mock-mode settings."""
    return make_settings(tmp_path)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Test client fixture. Runs the application lifespan."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register_user(client):
    """Register a user through the API."""
    def _register(**fields):
        payload = {**TEST_USER, **fields}
        return client.post("/api/auth/register", json=payload)
    return _register


@pytest.fixture
def login(client):
    """Log in through the API and return the response."""
    def _login(email=TEST_USER["email"], password=TEST_USER["password"]):
        return client.post("/api/auth/login", json={"email": email, "password": password})
    return _login


@pytest.fixture
def auth_headers(register_user, login):
    """Return authentication headers for a freshly registered user."""
    register_user()
    token = login().json()["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def session_factory(tmp_path):
    """Async session factory on a fresh database."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'crud.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield create_session_factory(engine)

    await engine.dispose()


@pytest.fixture
async def db(session_factory):
    """Create test database session."""
    async with session_factory() as session:
        yield session
