"""
ShopAPI Backend — Product Service (relational)
================================================

What:  Create, filtered list, get and delete for the `products` table.
Who:   Called by routes/products.py.

Filtered listing (GET /products?name=&about=&price=):
    Each present query parameter becomes one bound equality predicate;
    predicates are ANDed; no parameters returns every product. An empty
    result is an empty list, never a 404. Any other query parameter is
    rejected with a 400 before the database is queried.
"""

import logging
from decimal import Decimal
from typing import Any, List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shop_api.exceptions import NotFoundError
from shop_api.models.product import Product
from shop_api.query_builder import build_delete, build_filtered_select
from shop_api.schemas.product import ProductCreate, ProductResponse
from shop_api.services.base import datastore_errors

logger = logging.getLogger(__name__)


class ProductService:
    """Business logic for relational products."""

    # Query parameters GET /products may filter on
    FILTERS = ("name", "about", "price")

    async def create_product(self, db: AsyncSession, payload: ProductCreate) -> ProductResponse:
        product = Product(**payload.model_dump())
        with datastore_errors("create product"):
            db.add(product)
            await db.flush()  # assigns the serial id
            await db.commit()
        logger.info("Product created: %s", product.id)
        return ProductResponse.model_validate(product)

    async def list_products(
        self,
        db: AsyncSession,
        name: Optional[str] = None,
        about: Optional[str] = None,
        price: Optional[Decimal] = None,
        extra_filters: Optional[Mapping[str, Any]] = None,
    ) -> List[ProductResponse]:
        """
        Raises:
            ValidationError: extra_filters names a key outside FILTERS (HTTP 400)
        """
        query = build_filtered_select(
            Product,
            {**(extra_filters or {}), "name": name, "about": about, "price": price},
            allowed=self.FILTERS,
        )
        with datastore_errors("access the database"):
            result = await db.execute(query)
            products = result.scalars().all()
        return [ProductResponse.model_validate(p) for p in products]

    async def get_product(self, db: AsyncSession, product_id: int) -> ProductResponse:
        with datastore_errors("access the database"):
            result = await db.execute(select(Product).where(Product.id == product_id))
            product = result.scalar_one_or_none()

        if product is None:
            raise NotFoundError(resource="product", resource_id=product_id)
        return ProductResponse.model_validate(product)

    async def delete_product(self, db: AsyncSession, product_id: int) -> ProductResponse:
        """Delete a product and return its state from just before the delete."""
        with datastore_errors("delete product"):
            result = await db.execute(build_delete(Product, product_id))
            product = result.scalar_one_or_none()
            if product is not None:
                await db.commit()

        if product is None:
            raise NotFoundError(resource="product", resource_id=product_id)
        logger.info("Product deleted: %s", product_id)
        return ProductResponse.model_validate(product)


product_service = ProductService()
