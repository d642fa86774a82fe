"""Repository interfaces for the cart domain."""

from basket.domain.cart.repositories.cart_repository import CartRepository

__all__ = ["CartRepository"]
