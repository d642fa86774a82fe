"""Cart aggregate root for the cart domain."""

from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable, Optional
from uuid import UUID

from basket.domain.cart.entities import LineItem
from basket.domain.cart.exceptions import CartItemNotFoundError, InvalidQuantityError
from basket.domain.shared.time import utc_now


# Column limit of the cart store for subtotals and totals: NUMERIC(22, 2)
MAX_TOTAL_PRICE = Decimal("99999999999999999999.99")


class Cart:
    """
    A user's shopping cart.

    Holds line items in insertion order and keeps ``total_price`` equal to
    the sum of all line subtotals. The total is recomputed from scratch after
    every mutation instead of being adjusted incrementally.

    There is at most one line per product id. Adding a product that is
    already present accumulates its quantity and keeps the price that was
    stored when the line was first added. Removing a product and adding it
    again puts it at the end of the cart.

    ``version`` is owned by the persistence layer, which bumps it on every
    successful write and rejects writes based on a stale version.
    """

    def __init__(
        self,
        user_id: UUID,
        items: Optional[Iterable[LineItem]] = None,
        version: int = 0,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self._user_id = user_id
        self._items: list[LineItem] = list(items or [])
        self._version = version
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()
        self._total_price = Decimal("0.00")
        self._recalculate_total()

    @property
    def user_id(self) -> UUID:
        return self._user_id

    @property
    def items(self) -> list[LineItem]:
        return self._items.copy()

    @property
    def item_count(self) -> int:
        return len(self._items)

    @property
    def total_price(self) -> Decimal:
        return self._total_price

    @property
    def version(self) -> int:
        return self._version

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def is_empty(self) -> bool:
        return not self._items

    def find_item(self, product_id: str) -> Optional[LineItem]:
        """Return the line for a product, or None."""
        for item in self._items:
            if item.product_id == product_id:
                return item
        return None

    def add_item(self, product_id: str, quantity: Any, unit_price: Any) -> LineItem:
        """Add a product to the cart or increase its quantity.

        Parameters
        ----------
        product_id
            Opaque product identifier
        quantity
            Positive whole number; numeric strings are accepted
        unit_price
            Price per unit. Only used when the product is not yet in the
            cart; an existing line keeps its stored price.

        Returns
        -------
        The new or updated line item.

        Raises
        ------
        InvalidQuantityError
            If the quantity is not a positive integer, or the line or cart
            total would grow past the store limits
        InvalidPriceError
            If a new line's price is invalid
        """
        existing = self.find_item(product_id)
        if existing is not None:
            item = LineItem(product_id, existing.quantity, existing.unit_price)
            item.increase_quantity(quantity)
            total = self._total_price - existing.subtotal + item.subtotal
        else:
            item = LineItem(product_id, quantity, unit_price)
            total = self._total_price + item.subtotal

        if total > MAX_TOTAL_PRICE:
            raise InvalidQuantityError(
                quantity,
                f"cart total would exceed {MAX_TOTAL_PRICE}",
            )

        if existing is not None:
            existing.increase_quantity(quantity)
            item = existing
        else:
            self._items.append(item)

        self._touch()
        return item

    def remove_item(self, product_id: str) -> LineItem:
        """Remove a product's line from the cart.

        Raises
        ------
        CartItemNotFoundError
            If the product is not in the cart
        """
        item = self.find_item(product_id)
        if item is None:
            raise CartItemNotFoundError(product_id, self._user_id)

        self._items.remove(item)
        self._touch()
        return item

    def _touch(self) -> None:
        self._recalculate_total()
        self._updated_at = utc_now()

    def _recalculate_total(self) -> None:
        self._total_price = sum(
            (item.subtotal for item in self._items),
            Decimal("0.00"),
        )

    @classmethod
    def create(
        cls,
        user_id: UUID,
        product_id: str,
        quantity: Any,
        unit_price: Any,
    ) -> "Cart":
        """Create a cart holding one initial line item."""
        cart = cls(user_id=user_id)
        cart.add_item(product_id, quantity, unit_price)
        return cart

    @classmethod
    def reconstitute(
        cls,
        user_id: UUID,
        items: Iterable[LineItem],
        version: int,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Cart":
        return cls(
            user_id=user_id,
            items=items,
            version=version,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cart):
            return NotImplemented
        return self._user_id == other._user_id

    def __hash__(self) -> int:
        return hash(self._user_id)

    def __repr__(self) -> str:
        return (
            f"Cart(user_id={self._user_id}, items={self.item_count}, "
            f"total_price={self._total_price}, version={self._version})"
        )
