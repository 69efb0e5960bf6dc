"""
ShopAPI Backend — Order Routes
================================

What:  POST /orders, GET /orders, GET /orders/{id}, PATCH /orders/{id},
       DELETE /orders/{id}.

POST /orders is the only create endpoint answering 201 Created; the other
creates answer 200 (see DESIGN.md).
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from shop_api.database import get_db_session
from shop_api.schemas.common import ErrorResponse
from shop_api.schemas.order import OrderCreate, OrderResponse, OrderUpdate
from shop_api.services.order_service import order_service

router = APIRouter(prefix="/orders", tags=["Orders"])

_BAD_REQUEST = {400: {"description": "Invalid order data", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "Order or product not found", "model": ErrorResponse}}
_SERVER_ERROR = {500: {"description": "Database error", "model": ErrorResponse}}


@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Create an order",
    description="Computes total = product price × quantity × VAT (1.2).",
)
async def create_order(payload: OrderCreate, db: AsyncSession = Depends(get_db_session)) -> OrderResponse:
    return await order_service.create_order(db, payload)


@router.get("", response_model=List[OrderResponse], responses={**_SERVER_ERROR}, summary="List orders")
async def list_orders(db: AsyncSession = Depends(get_db_session)) -> List[OrderResponse]:
    return await order_service.list_orders(db)


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Get an order by ID",
)
async def get_order(order_id: int, db: AsyncSession = Depends(get_db_session)) -> OrderResponse:
    return await order_service.get_order(db, order_id)


@router.patch(
    "/{order_id}",
    response_model=OrderResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Partially update an order",
    description="Changing quantity or productId recomputes the total.",
)
async def update_order(
    order_id: int,
    payload: OrderUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> OrderResponse:
    return await order_service.update_order(db, order_id, payload)


@router.delete(
    "/{order_id}",
    response_model=OrderResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete an order",
)
async def delete_order(order_id: int, db: AsyncSession = Depends(get_db_session)) -> OrderResponse:
    return await order_service.delete_order(db, order_id)
