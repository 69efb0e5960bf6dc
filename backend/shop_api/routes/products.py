"""
ShopAPI Backend — Relational Product Routes
=============================================

What:  POST /products, GET /products, GET /products/{id}, DELETE /products/{id}.
How:   Thin handlers: FastAPI validates input against the schemas, the
       service does the work, the global handlers turn exceptions into
       400 / 404 / 500.
"""

from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from shop_api.database import get_db_session
from shop_api.schemas.common import ErrorResponse
from shop_api.schemas.product import ProductCreate, ProductResponse
from shop_api.services.product_service import product_service

router = APIRouter(prefix="/products", tags=["Products"])

_NOT_FOUND = {404: {"description": "Product not found", "model": ErrorResponse}}
_SERVER_ERROR = {500: {"description": "Database error", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[ProductResponse],
    responses={400: {"description": "Unsupported filter", "model": ErrorResponse}, **_SERVER_ERROR},
    summary="List products",
    description=(
        "Returns every product, or only those matching all supplied filters. "
        "Filters are exact matches. Unknown query parameters are rejected with 400."
    ),
)
async def list_products(
    request: Request,
    name: Optional[str] = Query(default=None, description="Exact product name"),
    about: Optional[str] = Query(default=None, description="Exact product description"),
    price: Optional[Decimal] = Query(default=None, description="Exact unit price"),
    db: AsyncSession = Depends(get_db_session),
) -> List[ProductResponse]:
    unknown = {
        key: value
        for key, value in request.query_params.items()
        if key not in product_service.FILTERS
    }
    return await product_service.list_products(
        db, name=name, about=about, price=price, extra_filters=unknown
    )


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Get a product by ID",
)
async def get_product(
    product_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    return await product_service.get_product(db, product_id)


@router.post(
    "",
    response_model=ProductResponse,
    responses={400: {"description": "Invalid request body", "model": ErrorResponse}, **_SERVER_ERROR},
    summary="Create a product",
)
async def create_product(
    payload: ProductCreate,
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    return await product_service.create_product(db, payload)


@router.delete(
    "/{product_id}",
    response_model=ProductResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete a product",
    description="Deletes the product and returns it as it was before deletion.",
)
async def delete_product(
    product_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> ProductResponse:
    return await product_service.delete_product(db, product_id)
