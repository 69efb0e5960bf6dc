"""
ShopAPI Backend — Order SQLAlchemy Model
==========================================

What:  ORM model for the `orders` table.
Who:   Used by OrderService.

Column notes:
    - total is derived by OrderService (price × quantity × VAT rate) and is
      never accepted from the client
    - total is unscaled NUMERIC, like products.price, so the product of
      price, quantity and VAT rate is kept without rounding
    - user_id / product_id are plain integers, not foreign keys (no cascades)
    - created_at / updated_at are UTC, set by the service on insert/update
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from shop_api.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Order(Base):
    """A purchase of `quantity` units of one product by one user."""

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    product_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    total: Mapped[Decimal] = mapped_column(Numeric, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_orders_quantity_positive"),
    )

    def __repr__(self) -> str:
        return (
            f"<Order(id={self.id}, user_id={self.user_id}, "
            f"product_id={self.product_id}, quantity={self.quantity}, total={self.total})>"
        )
