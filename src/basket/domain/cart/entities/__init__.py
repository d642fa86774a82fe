"""Domain entities for the cart bounded context."""

from basket.domain.cart.entities.line_item import (
    MAX_QUANTITY,
    MAX_UNIT_PRICE,
    LineItem,
    coerce_price,
    coerce_quantity,
)

__all__ = [
    "MAX_QUANTITY",
    "MAX_UNIT_PRICE",
    "LineItem",
    "coerce_price",
    "coerce_quantity",
]
