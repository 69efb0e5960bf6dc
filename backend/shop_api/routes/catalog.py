"""
ShopAPI Backend — Document-Store Catalog Routes
=================================================

What:  POST /products, GET /products and POST /categories on the document service.

GET /products takes no filters; it always returns every product with its
category documents attached.
"""

from typing import List

from fastapi import APIRouter, Depends
from pymongo.asynchronous.database import AsyncDatabase

from shop_api.document_store import get_document_db
from shop_api.schemas.catalog import (
    CatalogProductCreate,
    CatalogProductDocument,
    CatalogProductWithCategories,
    CategoryCreate,
    CategoryDocument,
)
from shop_api.schemas.common import ErrorResponse
from shop_api.services.catalog_service import catalog_service

router = APIRouter(tags=["Catalog"])

_BAD_REQUEST = {400: {"description": "Invalid request body", "model": ErrorResponse}}
_SERVER_ERROR = {500: {"description": "Database error", "model": ErrorResponse}}


@router.post(
    "/products",
    response_model=CatalogProductDocument,
    responses={**_BAD_REQUEST, **_SERVER_ERROR},
    summary="Create a product",
)
async def create_product(
    payload: CatalogProductCreate,
    db: AsyncDatabase = Depends(get_document_db),
) -> CatalogProductDocument:
    return await catalog_service.create_product(db, payload)


@router.get(
    "/products",
    response_model=List[CatalogProductWithCategories],
    responses={**_SERVER_ERROR},
    summary="List products with their categories",
)
async def list_products(
    db: AsyncDatabase = Depends(get_document_db),
) -> List[CatalogProductWithCategories]:
    return await catalog_service.list_products(db)


@router.post(
    "/categories",
    response_model=CategoryDocument,
    responses={**_BAD_REQUEST, **_SERVER_ERROR},
    summary="Create a category",
)
async def create_category(
    payload: CategoryCreate,
    db: AsyncDatabase = Depends(get_document_db),
) -> CategoryDocument:
    return await catalog_service.create_category(db, payload)
