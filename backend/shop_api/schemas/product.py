"""
ShopAPI Backend — Relational Product Schemas
"""

from pydantic import Field

from shop_api.schemas.common import Amount, APIModel, Price


class ProductCreate(APIModel):
    """Body of POST /products."""
    name: str = Field(description="Product name", examples=["Widget"])
    about: str = Field(description="Product description", examples=["A small widget"])
    price: Price = Field(description="Unit price, strictly positive", examples=[9.99])


class ProductResponse(APIModel):
    id: int
    name: str
    about: str
    price: Amount
