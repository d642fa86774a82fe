"""Cart bounded context: carts, line items and their pricing rules."""

from basket.domain.cart.aggregates import Cart
from basket.domain.cart.entities import LineItem
from basket.domain.cart.exceptions import (
    CartAlreadyExistsError,
    CartItemNotFoundError,
    CartNotFoundError,
    InvalidPriceError,
    InvalidQuantityError,
)
from basket.domain.cart.repositories import CartRepository

__all__ = [
    "Cart",
    "LineItem",
    "CartRepository",
    "CartAlreadyExistsError",
    "CartItemNotFoundError",
    "CartNotFoundError",
    "InvalidPriceError",
    "InvalidQuantityError",
]
