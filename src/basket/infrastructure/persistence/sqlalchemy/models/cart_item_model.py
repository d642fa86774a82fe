"""SQLAlchemy model for cart line items."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from basket.infrastructure.persistence.sqlalchemy.models.base import Base

if TYPE_CHECKING:
    from basket.infrastructure.persistence.sqlalchemy.models.cart_model import (
        CartModel,
    )


class CartItemModel(Base):
    """Database model for one line of a cart.

    ``position`` preserves insertion order. The subtotal is stored for
    reporting queries; the domain recomputes it on load.
    """

    __tablename__ = "cart_items"

    __table_args__ = (
        UniqueConstraint("cart_user_id", "product_id", name="uq_cart_item_product"),
        CheckConstraint("quantity > 0", name="ck_cart_item_quantity_positive"),
        CheckConstraint("unit_price >= 0", name="ck_cart_item_price_non_negative"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)

    cart_user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("carts.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    position: Mapped[int] = mapped_column(Integer, nullable=False)
    product_id: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    subtotal: Mapped[Decimal] = mapped_column(Numeric(22, 2), nullable=False)

    cart: Mapped[CartModel] = relationship("CartModel", back_populates="items")

    def __repr__(self) -> str:
        return (
            f"<CartItemModel(product_id={self.product_id}, "
            f"quantity={self.quantity}, unit_price={self.unit_price})>"
        )
