"""Aggregates for the cart bounded context."""

from basket.domain.cart.aggregates.cart import Cart

__all__ = ["Cart"]
