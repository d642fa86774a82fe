"""SQLAlchemy implementation for basket_identity persistence.

Provides:
- UserModel: SQLAlchemy model for users
- UserRepositorySQLAlchemy: Repository implementation for users
"""

from basket_identity.infrastructure.persistence.sqlalchemy.models import UserModel
from basket_identity.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)

__all__ = [
    "UserModel",
    "UserRepositorySQLAlchemy",
]
