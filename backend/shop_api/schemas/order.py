"""
ShopAPI Backend — Order Schemas
=================================

Neither OrderCreate nor OrderUpdate has a `total` field: the total is always
computed server-side. Unknown body fields are ignored, so a client-sent
total is silently dropped.

Timestamps always go out as UTC. Drivers that drop the offset (SQLite)
hand back naive values, which are stored UTC and tagged as such here.
"""

from datetime import datetime, timezone
from typing import Annotated, Optional

from pydantic import AfterValidator, Field, PositiveInt

from shop_api.schemas.common import Amount, APIModel


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(_as_utc)]


class OrderCreate(APIModel):
    """Body of POST /orders."""
    user_id: int = Field(examples=[1])
    product_id: int = Field(examples=[1])
    quantity: PositiveInt = Field(examples=[2])


class OrderUpdate(APIModel):
    """Body of PATCH /orders/{id}."""
    user_id: Optional[int] = None
    product_id: Optional[int] = None
    quantity: Optional[PositiveInt] = None


class OrderResponse(APIModel):
    id: int
    user_id: int
    product_id: int
    quantity: int
    total: Amount
    created_at: UtcDatetime
    updated_at: UtcDatetime
