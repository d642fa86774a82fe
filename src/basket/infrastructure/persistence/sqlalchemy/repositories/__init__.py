"""SQLAlchemy repository implementations."""

from basket.infrastructure.persistence.sqlalchemy.repositories.cart import (
    CartRepositorySQLAlchemy,
)

__all__ = ["CartRepositorySQLAlchemy"]
