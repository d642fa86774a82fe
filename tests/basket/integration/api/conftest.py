"""Pytest fixtures for API integration tests.

The app runs against a SQLite file in a temporary directory. The client is
entered as a context manager so the lifespan creates the schema on the
client's own event loop.
"""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from basket.presentation.api import dependencies
from basket.presentation.api.app import API_V1_PREFIX, create_app
from basket.presentation.api.config import get_api_settings
from basket_auth import JWTService
from basket_config import clear_settings_cache, get_settings

_CACHED = (
    get_api_settings,
    dependencies.get_database_url,
    dependencies.get_engine,
    dependencies.get_session_maker,
    dependencies.get_cart_locks,
)


def _clear_caches() -> None:
    clear_settings_cache()
    for func in _CACHED:
        func.cache_clear()


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def test_client(tmp_path, monkeypatch):
    """A client for a fresh app and a fresh database."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'api.db'}")
    monkeypatch.setenv("API_DEBUG", "true")
    _clear_caches()

    with TestClient(create_app()) as client:
        yield client

    _clear_caches()


@pytest.fixture
def jwt_service() -> JWTService:
    """Token service sharing the app's signing secret."""
    settings = get_settings()
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        access_token_expire_minutes=settings.jwt_access_token_expire_minutes,
    )


@pytest.fixture
def registered_user_data() -> dict:
    """Test user registration data."""
    return {
        "username": "alice",
        "email": "alice@example.com",
        "password": "SecurePassword123!",
    }


def _register_and_login(client: TestClient, data: dict) -> str:
    """Register a user and return a bearer token for it."""
    response = client.post(f"{API_V1_PREFIX}/auth/register", json=data)
    assert response.status_code == 201, response.text

    response = client.post(
        f"{API_V1_PREFIX}/auth/login",
        json={"username": data["username"], "password": data["password"]},
    )
    assert response.status_code == 200, response.text
    return response.json()["access_token"]


@pytest.fixture
def auth_headers(test_client, registered_user_data) -> dict:
    """Authorization headers for a freshly registered user."""
    token = _register_and_login(test_client, registered_user_data)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers(test_client) -> dict:
    """Authorization headers for a second, unrelated user."""
    name = f"user-{uuid4().hex[:8]}"
    token = _register_and_login(
        test_client,
        {
            "username": name,
            "email": f"{name}@example.com",
            "password": "AnotherPassword456!",
        },
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def token_for(test_client):
    """Register a user from the given data and return its bearer token."""

    def _token_for(data: dict) -> str:
        return _register_and_login(test_client, data)

    return _token_for
