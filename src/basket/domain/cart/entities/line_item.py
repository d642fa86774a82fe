"""Line item entity: one product entry within a cart."""

from decimal import Decimal, InvalidOperation
from typing import Any

from basket.domain.cart.exceptions import InvalidPriceError, InvalidQuantityError
from basket.domain.shared.exceptions import ValidationError

# Prices carry at most cents
CENT = Decimal("0.01")

# Column limits of the cart store: INTEGER quantity, NUMERIC(12, 2) price
MAX_QUANTITY = 2**31 - 1
MAX_UNIT_PRICE = Decimal("9999999999.99")


def coerce_quantity(value: Any) -> int:
    """Convert a transport-level quantity to a positive int.

    Numeric strings ("3") are accepted since some clients send form values;
    fractional, non-positive and oversized amounts are rejected.

    Raises
    ------
    InvalidQuantityError
        If the value is not a positive whole number
    """
    if isinstance(value, bool):
        raise InvalidQuantityError(value)

    if isinstance(value, int):
        quantity = value
    elif isinstance(value, str):
        try:
            quantity = int(value.strip())
        except ValueError as e:
            raise InvalidQuantityError(value) from e
    elif isinstance(value, (float, Decimal)):
        try:
            quantity = int(value)
        except (ValueError, OverflowError) as e:
            raise InvalidQuantityError(value) from e
        if value != quantity:
            raise InvalidQuantityError(value)
    else:
        raise InvalidQuantityError(value)

    if quantity <= 0:
        raise InvalidQuantityError(value)
    if quantity > MAX_QUANTITY:
        raise InvalidQuantityError(value, f"must not exceed {MAX_QUANTITY}")
    return quantity


def coerce_price(value: Any) -> Decimal:
    """Convert a unit price to a non-negative Decimal with at most 2 places.

    Raises
    ------
    InvalidPriceError
        If the value is not a finite, non-negative amount of cents
    """
    if isinstance(value, bool):
        raise InvalidPriceError(value, "not a number")

    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation as e:
        raise InvalidPriceError(value, "not a number") from e

    if not price.is_finite():
        raise InvalidPriceError(value, "must be finite")

    if price < 0:
        raise InvalidPriceError(value, "must not be negative")

    if price > MAX_UNIT_PRICE:
        raise InvalidPriceError(value, f"must not exceed {MAX_UNIT_PRICE}")

    try:
        quantized = price.quantize(CENT)
    except InvalidOperation as e:
        raise InvalidPriceError(value, "out of range") from e

    # Trailing zeros (10.500) are fine, real sub-cent amounts are not
    if quantized != price:
        raise InvalidPriceError(value, "more than 2 decimal places")

    return quantized


class LineItem:
    """A product in a cart with its quantity and the price captured at add time.

    The subtotal is derived and therefore always consistent with the
    current quantity.
    """

    def __init__(self, product_id: str, quantity: Any, unit_price: Any):
        if not product_id:
            msg = "Product id cannot be empty"
            raise ValidationError(msg)

        self._product_id = product_id
        self._quantity = coerce_quantity(quantity)
        self._unit_price = coerce_price(unit_price)

    @property
    def product_id(self) -> str:
        return self._product_id

    @property
    def quantity(self) -> int:
        return self._quantity

    @property
    def unit_price(self) -> Decimal:
        return self._unit_price

    @property
    def subtotal(self) -> Decimal:
        return self._unit_price * self._quantity

    def increase_quantity(self, quantity: Any) -> None:
        """Add to the quantity, keeping the stored unit price.

        Raises
        ------
        InvalidQuantityError
            If the amount is invalid or the merged quantity is too large
        """
        merged = self._quantity + coerce_quantity(quantity)
        if merged > MAX_QUANTITY:
            raise InvalidQuantityError(merged, f"must not exceed {MAX_QUANTITY}")
        self._quantity = merged

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LineItem):
            return NotImplemented
        return (
            self._product_id == other._product_id
            and self._quantity == other._quantity
            and self._unit_price == other._unit_price
        )

    def __repr__(self) -> str:
        return (
            f"LineItem(product_id={self._product_id!r}, "
            f"quantity={self._quantity}, unit_price={self._unit_price})"
        )
