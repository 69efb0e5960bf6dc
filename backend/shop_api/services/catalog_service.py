"""
ShopAPI Backend — Catalog Service (document store)
====================================================

What:  Products and categories for the document service.
Who:   Called by routes/catalog.py.

Listing (GET /products):
    Every product is joined with its category documents in one aggregation:

        [
            {"$match": {}},
            {"$lookup": {"from": "categories", "localField": "categoryIds",
                         "foreignField": "_id", "as": "categories"}},
        ]

    Category ids that point at deleted categories simply produce no entry
    in `categories`; nothing cascades.
"""

import logging
from typing import List

from bson import ObjectId
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from shop_api.schemas.catalog import (
    CatalogProductCreate,
    CatalogProductDocument,
    CatalogProductWithCategories,
    CategoryCreate,
    CategoryDocument,
)
from shop_api.services.base import datastore_errors

logger = logging.getLogger(__name__)

PRODUCTS = "products"
CATEGORIES = "categories"

PRODUCTS_WITH_CATEGORIES = [
    {"$match": {}},
    {
        "$lookup": {
            "from": CATEGORIES,
            "localField": "categoryIds",
            "foreignField": "_id",
            "as": "categories",
        },
    },
]


class CatalogService:

    async def create_category(self, db: AsyncDatabase, payload: CategoryCreate) -> CategoryDocument:
        with datastore_errors("create category", errors=(PyMongoError,)):
            ack = await db[CATEGORIES].insert_one({"name": payload.name})
        logger.info("Category created: %s", ack.inserted_id)
        return CategoryDocument(id=ack.inserted_id, name=payload.name)

    async def create_product(
        self, db: AsyncDatabase, payload: CatalogProductCreate
    ) -> CatalogProductDocument:
        # Stored as real ObjectIds so $lookup can match categories._id
        category_ids = [ObjectId(value) for value in payload.category_ids]
        document = {
            "name": payload.name,
            "about": payload.about,
            "price": payload.price,
            "categoryIds": category_ids,
        }
        with datastore_errors("create product", errors=(PyMongoError,)):
            ack = await db[PRODUCTS].insert_one(document)
        logger.info("Product created: %s", ack.inserted_id)
        return CatalogProductDocument(
            id=ack.inserted_id,
            name=payload.name,
            about=payload.about,
            price=payload.price,
            category_ids=category_ids,
        )

    async def list_products(self, db: AsyncDatabase) -> List[CatalogProductWithCategories]:
        with datastore_errors("access the database", errors=(PyMongoError,)):
            cursor = await db[PRODUCTS].aggregate(PRODUCTS_WITH_CATEGORIES)
            documents = await cursor.to_list(None)
        return [CatalogProductWithCategories.model_validate(doc) for doc in documents]


catalog_service = CatalogService()
