"""
ShopAPI Backend — Order Service
=================================

What:  Order CRUD with the derived total.
Who:   Called by routes/orders.py.

Total:
    total = product.price × quantity × settings.vat_rate (1.2)
    Decimal arithmetic throughout: price 10.00, quantity 2 → total 24.00.

Order creation flow (POST /orders):
    ┌───────────────┐    ┌──────────────────────┐    ┌─────────────┐
    │ Validate body │───▶│ SELECT price FOR     │───▶│ INSERT order│
    │ (OrderCreate) │    │ UPDATE (404 if none) │    │ + timestamps│
    └───────────────┘    └──────────────────────┘    └─────────────┘

    The product row stays locked until the insert commits, so the price used
    for the total cannot change or vanish in between. SQLite ignores FOR
    UPDATE; PostgreSQL honours it.

Partial update (PATCH /orders/{id}):
    When quantity or productId changes, the total is re-derived from the
    product's current price. updatedAt is bumped on every successful update.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shop_api.config import settings
from shop_api.exceptions import NotFoundError
from shop_api.models.order import Order
from shop_api.models.product import Product
from shop_api.query_builder import build_delete, build_partial_update, require_fields
from shop_api.schemas.order import OrderCreate, OrderResponse, OrderUpdate
from shop_api.services.base import datastore_errors

logger = logging.getLogger(__name__)


def compute_order_total(price: Decimal, quantity: int, vat_rate: Optional[Decimal] = None) -> Decimal:
    """price × quantity × VAT multiplier, without rounding."""
    rate = settings.vat_rate if vat_rate is None else vat_rate
    return Decimal(str(price)) * quantity * rate


class OrderService:

    async def _locked_price(self, db: AsyncSession, product_id: int) -> Decimal:
        """Current price of a product, row-locked for the rest of the transaction."""
        with datastore_errors("access the database"):
            result = await db.execute(
                select(Product.price).where(Product.id == product_id).with_for_update()
            )
            price = result.scalar_one_or_none()

        if price is None:
            raise NotFoundError(resource="product", resource_id=product_id)
        return price

    async def create_order(self, db: AsyncSession, payload: OrderCreate) -> OrderResponse:
        price = await self._locked_price(db, payload.product_id)

        now = datetime.now(timezone.utc)
        order = Order(
            user_id=payload.user_id,
            product_id=payload.product_id,
            quantity=payload.quantity,
            total=compute_order_total(price, payload.quantity),
            created_at=now,
            updated_at=now,
        )

        with datastore_errors("create order"):
            db.add(order)
            await db.flush()
            await db.commit()
        logger.info(
            "Order created: %s (product=%s, quantity=%d, total=%s)",
            order.id, order.product_id, order.quantity, order.total,
        )
        return OrderResponse.model_validate(order)

    async def list_orders(self, db: AsyncSession) -> List[OrderResponse]:
        with datastore_errors("access the database"):
            result = await db.execute(select(Order).order_by(Order.id))
            orders = result.scalars().all()
        return [OrderResponse.model_validate(o) for o in orders]

    async def _find_order(self, db: AsyncSession, order_id: int, lock: bool = False) -> Order:
        query = select(Order).where(Order.id == order_id)
        if lock:
            query = query.with_for_update()
        with datastore_errors("access the database"):
            result = await db.execute(query)
            order = result.scalar_one_or_none()

        if order is None:
            raise NotFoundError(resource="order", resource_id=order_id)
        return order

    async def get_order(self, db: AsyncSession, order_id: int) -> OrderResponse:
        return OrderResponse.model_validate(await self._find_order(db, order_id))

    async def update_order(self, db: AsyncSession, order_id: int, payload: OrderUpdate) -> OrderResponse:
        values = require_fields(payload.model_dump())

        if "quantity" in values or "product_id" in values:
            current = await self._find_order(db, order_id, lock=True)
            product_id = values.get("product_id", current.product_id)
            quantity = values.get("quantity", current.quantity)
            price = await self._locked_price(db, product_id)
            values["total"] = compute_order_total(price, quantity)

        values["updated_at"] = datetime.now(timezone.utc)

        with datastore_errors("update order"):
            result = await db.execute(build_partial_update(Order, order_id, values))
            order = result.scalar_one_or_none()
            if order is not None:
                await db.commit()

        if order is None:
            raise NotFoundError(resource="order", resource_id=order_id)
        logger.info("Order %s updated: %s", order_id, sorted(values))
        return OrderResponse.model_validate(order)

    async def delete_order(self, db: AsyncSession, order_id: int) -> OrderResponse:
        with datastore_errors("delete order"):
            result = await db.execute(build_delete(Order, order_id))
            order = result.scalar_one_or_none()
            if order is not None:
                await db.commit()

        if order is None:
            raise NotFoundError(resource="order", resource_id=order_id)
        logger.info("Order deleted: %s", order_id)
        return OrderResponse.model_validate(order)


order_service = OrderService()
