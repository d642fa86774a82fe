"""FastAPI dependency injection for the Basket API.

Provides dependencies for:
- Database sessions
- The per-request AppContext (stores, hasher, token service, cart locks)
- Role-guarded identities (token gate, then role gate)
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, AsyncGenerator, Callable, Coroutine

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from basket.application.context import AppContext
from basket.application.services import CartService, KeyedLock
from basket.infrastructure.persistence.sqlalchemy.repositories import (
    CartRepositorySQLAlchemy,
)
from basket.presentation.api.config import get_api_settings
from basket_auth import JWTService, PasswordHashingService
from basket_config.settings import Settings, get_settings
from basket_identity import (
    AccessControlEvaluator,
    AuthenticationService,
    Identity,
    UserRole,
)
from basket_identity.infrastructure.persistence.sqlalchemy import (
    UserRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens. Missing tokens are rejected by the
# token gate so every auth failure takes the same path.
security = HTTPBearer(auto_error=False)


@lru_cache()
def get_database_url() -> str:
    """
    Get database URL from application settings.

    Returns
    -------
    Database URL string
    """
    url = get_settings().database_url

    # Ensure data directory exists for SQLite
    if url.startswith("sqlite") and ":memory:" not in url:
        db_path = url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return url


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    Returns
    -------
    AsyncEngine instance
    """
    return create_async_engine(
        get_database_url(),
        echo=False,
        pool_pre_ping=True,
    )


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Get the shared async session maker (singleton)."""
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Yields
    ------
    AsyncSession for database operations
    """
    async with get_session_maker()() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Authentication Services
# -----------------------------------------------------------------------------


def get_jwt_service(
    settings: Settings = Depends(get_api_settings),
) -> JWTService:
    """Get JWT service configured with API settings."""
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        access_token_expire_minutes=settings.jwt_access_token_expire_minutes,
    )


def get_password_service(
    settings: Settings = Depends(get_api_settings),
) -> PasswordHashingService:
    """Get password hashing service."""
    return PasswordHashingService(rounds=settings.bcrypt_rounds)


@lru_cache(maxsize=1)
def get_cart_locks() -> KeyedLock:
    """Process-wide per-user lock registry for cart mutations."""
    return KeyedLock()


# -----------------------------------------------------------------------------
# Application Context
# -----------------------------------------------------------------------------


async def get_app_context(
    session: DBSession,
    jwt_service: JWTService = Depends(get_jwt_service),
    password_service: PasswordHashingService = Depends(get_password_service),
    cart_locks: KeyedLock = Depends(get_cart_locks),
    settings: Settings = Depends(get_api_settings),
) -> AppContext:
    """Wire the stores and services used by one request."""
    return AppContext(
        user_repository=UserRepositorySQLAlchemy(session),
        cart_repository=CartRepositorySQLAlchemy(session),
        password_service=password_service,
        jwt_service=jwt_service,
        cart_locks=cart_locks,
        transaction=session,
        store_timeout_seconds=settings.store_timeout_seconds,
    )


# Type alias for injected app context
Context = Annotated[AppContext, Depends(get_app_context)]


async def get_authentication_service(context: Context) -> AuthenticationService:
    return context.authentication_service()


AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


async def get_cart_service(context: Context) -> CartService:
    return context.cart_service()


CartServiceDep = Annotated[CartService, Depends(get_cart_service)]


# -----------------------------------------------------------------------------
# Role-guarded identity
# -----------------------------------------------------------------------------


def require_role(
    role: UserRole,
) -> Callable[..., Coroutine[Any, Any, Identity]]:
    """Build a dependency that runs the access control gates for ``role``.

    The returned dependency raises InvalidTokenError (401) for a missing or
    bad token and AccessDeniedError (403) for a valid token without the
    role; the exception handlers translate both.

    Examples
    --------
    >>> @router.get("/admin")
    ... async def dashboard(identity: AdminIdentity) -> ...
    """

    async def _guard(
        credentials: HTTPAuthorizationCredentials | None = Depends(security),
        jwt_service: JWTService = Depends(get_jwt_service),
    ) -> Identity:
        token = credentials.credentials if credentials else None
        return AccessControlEvaluator(jwt_service).evaluate(token, role)

    _guard.__name__ = f"require_{role.value}"
    return _guard


# Type aliases for guarded identities
UserIdentity = Annotated[Identity, Depends(require_role(UserRole.USER))]
AdminIdentity = Annotated[Identity, Depends(require_role(UserRole.ADMIN))]
