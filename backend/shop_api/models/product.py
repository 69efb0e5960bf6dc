"""
ShopAPI Backend — Product SQLAlchemy Model
============================================

What:  ORM model for the `products` table.
Who:   Used by ProductService for CRUD and by OrderService to price orders.

Column notes:
    - price is unscaled NUMERIC: stored exactly as submitted, so order
      totals are exact too
    - CHECK (price > 0) backs up the schema-level positivity rule
"""

from decimal import Decimal

from sqlalchemy import CheckConstraint, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shop_api.database import Base


class Product(Base):
    """A catalog product. Filterable by name, about and price."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    # Free-text description, exposed as `about` on the wire
    about: Mapped[str] = mapped_column(Text, nullable=False, default="")

    price: Mapped[Decimal] = mapped_column(Numeric, nullable=False)

    __table_args__ = (
        CheckConstraint("price > 0", name="ck_products_price_positive"),
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"
