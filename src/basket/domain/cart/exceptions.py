"""Cart domain exceptions."""

from typing import Any
from uuid import UUID

from basket.domain.shared.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class CartNotFoundError(EntityNotFoundError):
    """Raised when a user has no cart."""

    def __init__(self, user_id: UUID | str) -> None:
        super().__init__(
            message="Cart not found",
            code=ErrorCode.CART_NOT_FOUND,
            details={"user_id": str(user_id)},
        )


class CartAlreadyExistsError(ConflictError):
    """Raised when creating a second cart for the same user."""

    def __init__(self, user_id: UUID | str) -> None:
        super().__init__(
            message="A cart already exists for this user",
            code=ErrorCode.CART_ALREADY_EXISTS,
            details={"user_id": str(user_id)},
        )


class CartItemNotFoundError(EntityNotFoundError):
    """Raised when a product is not in the cart (or there is no cart)."""

    def __init__(self, product_id: str, user_id: UUID | str | None = None) -> None:
        super().__init__(
            message=f"Product '{product_id}' is not in the cart",
            code=ErrorCode.CART_ITEM_NOT_FOUND,
            details={
                "product_id": product_id,
                "user_id": str(user_id) if user_id else None,
            },
        )


class InvalidQuantityError(ValidationError):
    """Raised when a quantity is not a positive integer or is too large."""

    def __init__(
        self,
        quantity: Any,
        reason: str = "must be a positive integer",
    ) -> None:
        super().__init__(
            message=f"Invalid quantity {quantity!r}: {reason}",
            code=ErrorCode.INVALID_QUANTITY,
            details={"quantity": repr(quantity)},
        )


class InvalidPriceError(ValidationError):
    """Raised when a unit price is negative, non-finite or too precise."""

    def __init__(self, price: Any, reason: str) -> None:
        super().__init__(
            message=f"Invalid unit price {price!r}: {reason}",
            code=ErrorCode.INVALID_PRICE,
            details={"price": repr(price)},
        )
