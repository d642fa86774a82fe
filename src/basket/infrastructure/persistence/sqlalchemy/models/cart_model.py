"""SQLAlchemy model for carts."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from basket.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)

if TYPE_CHECKING:
    from basket.infrastructure.persistence.sqlalchemy.models.cart_item_model import (
        CartItemModel,
    )


class CartModel(Base, TimestampMixin):
    """Database model for a user's cart.

    The user id is the primary key, so the database itself guarantees one
    cart per user. ``version`` is bumped on every write and used as a
    compare-and-set guard against lost updates.
    """

    __tablename__ = "carts"

    __table_args__ = (
        CheckConstraint("total_price >= 0", name="ck_cart_total_non_negative"),
    )

    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    total_price: Mapped[Decimal] = mapped_column(
        Numeric(22, 2),
        nullable=False,
        default=Decimal("0.00"),
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    items: Mapped[list[CartItemModel]] = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItemModel.position",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return (
            f"<CartModel(user_id={self.user_id}, "
            f"total_price={self.total_price}, version={self.version})>"
        )
