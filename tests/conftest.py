"""Root pytest configuration.

Test Structure:
    tests/
    ├── basket/             # Cart domain, service and API tests
    │   ├── unit/           # Fast, isolated tests
    │   └── integration/    # Tests against an in-memory SQLite database
    ├── basket_auth/        # Password hashing and session tokens
    ├── basket_identity/    # Users, login and access control
    └── shared/             # Shared fixtures

Settings are read from the environment, so the required secret and a low
bcrypt work factor are set before anything imports basket_config.
"""

import os

import pytest

os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-for-testing-only")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from basket_config import clear_settings_cache  # noqa: E402


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: Tests that verify database/persistence behavior",
    )


@pytest.fixture(scope="session", autouse=True)
def configure_app_settings():
    """Start and finish the session with freshly loaded settings."""
    clear_settings_cache()
    yield
    clear_settings_cache()
