"""Basket Identity - users, authentication and authorization.

This package handles all identity-related concerns:
- User management (registration, role set)
- Authentication (login, session tokens)
- Authorization (role gates in front of guarded endpoints)

The cart domain only references user_id, keeping identity concerns
separated.
"""

from basket_identity.application.context import Identity
from basket_identity.application.services import (
    AccessControlEvaluator,
    AuthenticationService,
    RoleGate,
    TokenGate,
    authorize,
)
from basket_identity.domain.user import (
    Email,
    EmailAlreadyExistsError,
    InvalidEmailError,
    User,
    UsernameAlreadyExistsError,
    UserRepository,
    UserRole,
)

__all__ = [
    # Domain - User
    "Email",
    "EmailAlreadyExistsError",
    "InvalidEmailError",
    "User",
    "UserRepository",
    "UserRole",
    "UsernameAlreadyExistsError",
    # Application Context
    "Identity",
    # Application Services
    "AccessControlEvaluator",
    "AuthenticationService",
    "RoleGate",
    "TokenGate",
    "authorize",
]
