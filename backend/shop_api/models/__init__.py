"""
ShopAPI Backend — SQLAlchemy Models
=====================================

What:  ORM models for the relational service tables.
Why:   Importing this package registers every table on Base.metadata, which
       Database.create_tables() relies on.

Tables:
    - products: catalog entries with a positive price
    - users:    accounts with a bcrypt password hash
    - orders:   user/product/quantity rows with a derived total

No foreign keys are declared between tables: deleting a product or a user
leaves the orders that reference it untouched.
"""

from shop_api.models.order import Order
from shop_api.models.product import Product
from shop_api.models.user import User

__all__ = ["Order", "Product", "User"]
