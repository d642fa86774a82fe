"""Application services for the cart use cases."""

from basket.application.services.cart_service import CartService, Transaction
from basket.application.services.keyed_lock import KeyedLock

__all__ = ["CartService", "KeyedLock", "Transaction"]
