"""Authentication services.

Provides password hashing and session token management.
"""

from basket_auth.services.jwt_service import JWTService
from basket_auth.services.password_service import PasswordHashingService

__all__ = [
    "PasswordHashingService",
    "JWTService",
]
