"""
ShopAPI Backend — Document-Store Catalog Schemas
==================================================

What:  Products and categories as stored in MongoDB.

Identifiers:
    MongoDB assigns ObjectIds. On the wire they are 24-char hex strings under
    `_id`; products reference categories through `categoryIds`.

Example GET /products item:
    {
        "_id": "65f0c0ffee0000000000abcd",
        "name": "Widget",
        "about": "A small widget",
        "price": 9.99,
        "categoryIds": ["65f0c0ffee0000000000beef"],
        "categories": [{"_id": "65f0c0ffee0000000000beef", "name": "Tools"}]
    }
"""

from typing import Annotated, Any, List

from bson import ObjectId
from pydantic import AfterValidator, BeforeValidator, Field, PositiveFloat

from shop_api.schemas.common import APIModel


def _stringify_object_id(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    return value


def _check_object_id(value: str) -> str:
    if not ObjectId.is_valid(value):
        raise ValueError(f"'{value}' is not a valid ObjectId")
    return value


# Outgoing: ObjectId → hex string
DocumentId = Annotated[str, BeforeValidator(_stringify_object_id)]

# Incoming: must already be a valid hex ObjectId
ObjectIdString = Annotated[str, AfterValidator(_check_object_id)]


class CategoryCreate(APIModel):
    """Body of POST /categories."""
    name: str = Field(examples=["Tools"])


class CategoryDocument(APIModel):
    id: DocumentId = Field(alias="_id")
    name: str


class CatalogProductCreate(APIModel):
    """Body of POST /products on the document service."""
    name: str = Field(examples=["Widget"])
    about: str = Field(examples=["A small widget"])
    price: PositiveFloat = Field(examples=[9.99])
    category_ids: List[ObjectIdString] = Field(examples=[["65f0c0ffee0000000000beef"]])


class CatalogProductDocument(APIModel):
    id: DocumentId = Field(alias="_id")
    name: str
    about: str
    price: float
    category_ids: List[DocumentId] = Field(default_factory=list)


class CatalogProductWithCategories(CatalogProductDocument):
    """A product with its category documents attached by $lookup."""
    categories: List[CategoryDocument] = Field(default_factory=list)
