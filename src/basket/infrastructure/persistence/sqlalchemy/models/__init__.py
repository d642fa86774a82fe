"""SQLAlchemy models for the cart persistence layer."""

from basket.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)
from basket.infrastructure.persistence.sqlalchemy.models.cart_item_model import (
    CartItemModel,
)
from basket.infrastructure.persistence.sqlalchemy.models.cart_model import CartModel

__all__ = [
    "Base",
    "TimestampMixin",
    "CartModel",
    "CartItemModel",
]
