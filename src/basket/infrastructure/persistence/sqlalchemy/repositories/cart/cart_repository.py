"""SQLAlchemy implementation of CartRepository.

Writes to an existing cart are guarded by a compare-and-set on the
``version`` column: the UPDATE only matches when the stored version equals
the one the cart was loaded with. A stale write therefore raises
ConcurrencyError instead of overwriting a concurrent update.
"""

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from basket.domain.cart import (
    Cart,
    CartAlreadyExistsError,
    CartNotFoundError,
    CartRepository,
    LineItem,
)
from basket.domain.shared import ConcurrencyError, ensure_tz_aware
from basket.infrastructure.persistence.sqlalchemy.models import (
    CartItemModel,
    CartModel,
)

logger = logging.getLogger(__name__)


class CartRepositorySQLAlchemy(CartRepository):
    """SQLAlchemy implementation of the cart store."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def find_by_user_id(self, user_id: UUID) -> Optional[Cart]:
        model = await self._find_model(user_id)

        if model is None:
            return None

        return self._map_to_domain(model)

    async def exists(self, user_id: UUID) -> bool:
        stmt = select(CartModel.user_id).where(CartModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def save(self, cart: Cart) -> Cart:
        if cart.version == 0:
            model = await self._insert(cart)
        else:
            model = await self._update(cart)

        return self._map_to_domain(model)

    async def delete(self, user_id: UUID) -> bool:
        model = await self._find_model(user_id)

        if model is None:
            return False

        await self._session.delete(model)
        await self._session.flush()
        logger.info("Cart deleted for user: %s", user_id)
        return True

    async def _insert(self, cart: Cart) -> CartModel:
        model = self._map_to_model(cart)
        self._session.add(model)

        try:
            await self._session.flush()
        except IntegrityError as e:
            # Only a primary key clash means the user already has a cart
            reason = str(e.orig).lower()
            if "unique" not in reason and "duplicate" not in reason:
                raise
            logger.warning("Duplicate cart rejected for user: %s", cart.user_id)
            raise CartAlreadyExistsError(cart.user_id) from e

        logger.info("Cart created for user: %s", cart.user_id)
        return model

    async def _update(self, cart: Cart) -> CartModel:
        stmt = (
            update(CartModel)
            .where(
                CartModel.user_id == cart.user_id,
                CartModel.version == cart.version,
            )
            .values(
                version=CartModel.version + 1,
                total_price=cart.total_price,
                updated_at=cart.updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)

        if result.rowcount == 0:
            if not await self.exists(cart.user_id):
                raise CartNotFoundError(cart.user_id)
            logger.warning(
                "Stale cart write rejected for user %s (version %s)",
                cart.user_id,
                cart.version,
            )
            raise ConcurrencyError(
                details={"user_id": str(cart.user_id), "version": cart.version},
            )

        # Reload so the identity map reflects the bumped version
        model = await self._find_model(cart.user_id, refresh=True)
        if model is None:
            raise CartNotFoundError(cart.user_id)

        self._sync_items(model, cart.items)
        await self._session.flush()
        logger.debug("Cart updated for user: %s", cart.user_id)
        return model

    async def _find_model(
        self,
        user_id: UUID,
        refresh: bool = False,
    ) -> Optional[CartModel]:
        stmt = select(CartModel).where(CartModel.user_id == user_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _sync_items(self, model: CartModel, items: list[LineItem]) -> None:
        """Bring the item rows in line with the domain lines.

        Rows are matched by product id; unmatched rows are orphaned and
        deleted by the relationship cascade.
        """
        existing = {item_model.product_id: item_model for item_model in model.items}
        synced: list[CartItemModel] = []

        for position, item in enumerate(items):
            item_model = existing.pop(item.product_id, None)
            if item_model is None:
                item_model = self._map_item_to_model(item, position)
            else:
                item_model.position = position
                item_model.quantity = item.quantity
                item_model.unit_price = item.unit_price
                item_model.subtotal = item.subtotal
            synced.append(item_model)

        model.items = synced

    def _map_to_domain(self, model: CartModel) -> Cart:
        items = [
            LineItem(
                product_id=item_model.product_id,
                quantity=item_model.quantity,
                unit_price=item_model.unit_price,
            )
            for item_model in sorted(model.items, key=lambda m: m.position)
        ]
        return Cart.reconstitute(
            user_id=model.user_id,
            items=items,
            version=model.version,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, cart: Cart) -> CartModel:
        return CartModel(
            user_id=cart.user_id,
            total_price=cart.total_price,
            version=1,
            created_at=cart.created_at,
            updated_at=cart.updated_at,
            items=[
                self._map_item_to_model(item, position)
                for position, item in enumerate(cart.items)
            ],
        )

    def _map_item_to_model(self, item: LineItem, position: int) -> CartItemModel:
        return CartItemModel(
            id=uuid4(),
            position=position,
            product_id=item.product_id,
            quantity=item.quantity,
            unit_price=item.unit_price,
            subtotal=item.subtotal,
        )
