"""Cart service: the use cases behind the cart endpoints.

Every mutation runs load, change, save and commit while holding the
owner's lock, so two requests for the same user cannot interleave inside
one process. The store's version check covers writers in other processes.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TYPE_CHECKING, Any, Protocol, TypeVar
from uuid import UUID

from basket.domain.cart import (
    Cart,
    CartAlreadyExistsError,
    CartItemNotFoundError,
    CartNotFoundError,
)
from basket.domain.shared import StoreUnavailableError

if TYPE_CHECKING:
    from basket.application.services.keyed_lock import KeyedLock
    from basket.domain.cart import CartRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Transaction(Protocol):
    """The part of a database session the service needs."""

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class CartService:
    """Application service for cart operations.

    Parameters
    ----------
    cart_repository
        Store for carts, keyed by user id
    transaction
        Commits or rolls back the work of one operation (an AsyncSession)
    locks
        Process-wide per-user lock registry
    timeout_seconds
        Upper bound for each store call
    """

    def __init__(
        self,
        cart_repository: CartRepository,
        transaction: Transaction,
        locks: KeyedLock,
        timeout_seconds: float = 5.0,
    ):
        self._repo = cart_repository
        self._transaction = transaction
        self._locks = locks
        self._timeout = timeout_seconds

    async def create_cart(
        self,
        user_id: UUID,
        product_id: str,
        quantity: Any,
        unit_price: Any,
    ) -> Cart:
        """Create the user's cart with one initial line item.

        Raises
        ------
        CartAlreadyExistsError
            If the user already has a cart
        """
        async with self._locks.hold(user_id):
            try:
                if await self._call(self._repo.exists(user_id), "exists"):
                    raise CartAlreadyExistsError(user_id)

                cart = Cart.create(user_id, product_id, quantity, unit_price)
                saved = await self._call(self._repo.save(cart), "save")
                await self._call(self._transaction.commit(), "commit")
            except Exception:
                await self._transaction.rollback()
                raise

        logger.info("Cart created for user %s (total %s)", user_id, saved.total_price)
        return saved

    async def get_cart(self, user_id: UUID) -> Cart:
        """Raises CartNotFoundError if the user has no cart."""
        cart = await self._call(self._repo.find_by_user_id(user_id), "find")
        if cart is None:
            raise CartNotFoundError(user_id)
        return cart

    async def delete_cart(self, user_id: UUID) -> Cart:
        """Delete the user's cart and return what it held.

        Raises
        ------
        CartNotFoundError
            If the user has no cart
        """
        async with self._locks.hold(user_id):
            try:
                cart = await self._load(user_id)
                if not await self._call(self._repo.delete(user_id), "delete"):
                    raise CartNotFoundError(user_id)
                await self._call(self._transaction.commit(), "commit")
            except Exception:
                await self._transaction.rollback()
                raise

        logger.info("Cart deleted for user %s", user_id)
        return cart

    async def add_item(
        self,
        user_id: UUID,
        product_id: str,
        quantity: Any,
        unit_price: Any,
    ) -> Cart:
        """Add a product to the user's cart, merging with an existing line.

        Raises
        ------
        CartNotFoundError
            If the user has no cart
        ConcurrencyError
            If another process changed the cart in the meantime
        """
        async with self._locks.hold(user_id):
            try:
                cart = await self._load(user_id)
                item = cart.add_item(product_id, quantity, unit_price)
                saved = await self._call(self._repo.save(cart), "save")
                await self._call(self._transaction.commit(), "commit")
            except Exception:
                await self._transaction.rollback()
                raise

        logger.info(
            "Added %s to cart of user %s (quantity now %s, total %s)",
            product_id,
            user_id,
            item.quantity,
            saved.total_price,
        )
        return saved

    async def remove_item(self, user_id: UUID, product_id: str) -> Cart:
        """Remove a product's line from the user's cart.

        Raises
        ------
        CartItemNotFoundError
            If the user has no cart or the product is not in it
        ConcurrencyError
            If another process changed the cart in the meantime
        """
        async with self._locks.hold(user_id):
            try:
                cart = await self._call(self._repo.find_by_user_id(user_id), "find")
                if cart is None:
                    raise CartItemNotFoundError(product_id, user_id)

                cart.remove_item(product_id)
                saved = await self._call(self._repo.save(cart), "save")
                await self._call(self._transaction.commit(), "commit")
            except Exception:
                await self._transaction.rollback()
                raise

        logger.info(
            "Removed %s from cart of user %s (total %s)",
            product_id,
            user_id,
            saved.total_price,
        )
        return saved

    async def _load(self, user_id: UUID) -> Cart:
        cart = await self._call(self._repo.find_by_user_id(user_id), "find")
        if cart is None:
            raise CartNotFoundError(user_id)
        return cart

    async def _call(self, awaitable: Awaitable[T], operation: str) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self._timeout)
        except asyncio.TimeoutError as e:
            logger.error(
                "Cart store %s timed out after %ss",
                operation,
                self._timeout,
            )
            raise StoreUnavailableError(operation, self._timeout) from e
