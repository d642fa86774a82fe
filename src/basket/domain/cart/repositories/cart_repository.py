"""Cart repository interface.

Defines the contract for Cart persistence. The store is keyed by user id:
each user has at most one cart.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from basket.domain.cart.aggregates import Cart


class CartRepository(ABC):
    """Repository interface for Cart aggregates."""

    @abstractmethod
    async def find_by_user_id(self, user_id: UUID) -> Optional[Cart]:
        """Find the cart owned by a user."""

    @abstractmethod
    async def exists(self, user_id: UUID) -> bool:
        """Check whether a user already has a cart."""

    @abstractmethod
    async def save(self, cart: Cart) -> Cart:
        """Insert or update a cart and return the stored state.

        The returned cart carries the new version.

        Raises
        ------
        CartAlreadyExistsError
            If a new cart (version 0) collides with an existing one
        ConcurrencyError
            If the stored version no longer matches ``cart.version``
        """

    @abstractmethod
    async def delete(self, user_id: UUID) -> bool:
        """Delete a user's cart. Returns False if there was none."""
