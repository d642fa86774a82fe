"""Cart schemas for request/response models.

These are the wire shapes only; the cart aggregate and the database
records are separate types.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from basket.domain.cart import Cart


class AddItemRequest(BaseModel):
    """A product, a quantity and the unit price at the time of adding.

    Quantity may arrive as a numeric string; the cart normalizes it.
    """

    product_id: str = Field(
        ...,
        min_length=1,
        max_length=255,
        validation_alias=AliasChoices("product_id", "productId"),
    )
    quantity: int | str
    unit_price: Decimal = Field(
        ...,
        validation_alias=AliasChoices("unit_price", "price"),
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "product_id": "p1",
                "quantity": 2,
                "unit_price": "10.00",
            },
        },
    )


class CreateCartRequest(AddItemRequest):
    """Request schema for creating a cart with its first item."""


class LineItemResponse(BaseModel):
    product_id: str
    quantity: int
    unit_price: Decimal
    subtotal: Decimal


class CartResponse(BaseModel):
    """A user's cart with derived totals."""

    user_id: UUID
    items: list[LineItemResponse]
    item_count: int
    total_price: Decimal
    version: int
    updated_at: datetime

    @classmethod
    def from_domain(cls, cart: Cart) -> "CartResponse":
        return cls(
            user_id=cart.user_id,
            items=[
                LineItemResponse(
                    product_id=item.product_id,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    subtotal=item.subtotal,
                )
                for item in cart.items
            ],
            item_count=cart.item_count,
            total_price=cart.total_price,
            version=cart.version,
            updated_at=cart.updated_at,
        )
