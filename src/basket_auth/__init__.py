"""Basket Auth - Generic authentication infrastructure.

This package provides authentication building blocks that know nothing
about carts or users as domain objects. It handles:
- Password hashing (bcrypt)
- Session token creation and verification (JWT)

Architecture:
    basket_auth/
    ├── services/           # Pure logic (password hashing, JWT)
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from basket_auth import PasswordHashingService, JWTService
"""

from basket_auth.exceptions import (
    AccessDeniedError,
    AuthError,
    InvalidCredentialsError,
    InvalidTokenError,
    WeakPasswordError,
)
from basket_auth.schemas import TokenPayload
from basket_auth.services import JWTService, PasswordHashingService

__all__ = [
    # Services
    "PasswordHashingService",
    "JWTService",
    # Schemas
    "TokenPayload",
    # Exceptions
    "AuthError",
    "AccessDeniedError",
    "InvalidTokenError",
    "WeakPasswordError",
    "InvalidCredentialsError",
]
