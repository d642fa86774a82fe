"""User domain manages user identity only.

This domain handles:
- User aggregate (identity: id, username, email, password hash, roles)
- The credential store contract

Carts only reference the user id.
"""

from basket_identity.domain.user.aggregates import User
from basket_identity.domain.user.exceptions import (
    EmailAlreadyExistsError,
    InvalidEmailError,
    UsernameAlreadyExistsError,
)
from basket_identity.domain.user.repositories import UserRepository
from basket_identity.domain.user.value_objects import (
    Email,
    UserRole,
)

__all__ = [
    "Email",
    "EmailAlreadyExistsError",
    "InvalidEmailError",
    "User",
    "UserRepository",
    "UserRole",
    "UsernameAlreadyExistsError",
]
