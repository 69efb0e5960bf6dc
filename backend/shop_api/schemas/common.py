"""
ShopAPI Backend — Shared Schema Building Blocks
=================================================

What:  Base model configuration, money types and the error/health responses
       used by both services.

Wire naming:
    Python attributes are snake_case; JSON uses camelCase (userId,
    productId, createdAt ...). Request bodies accept either spelling.
"""

from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """Base for every request/response model: camelCase on the wire, ORM-readable."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Decimals go out as JSON numbers, not strings
_as_number = PlainSerializer(float, return_type=float, when_used="json")

# Client-supplied price: strictly positive, any scale (1.005 is stored as sent)
Price = Annotated[Decimal, Field(gt=0), _as_number]

# Stored amounts (prices, totals) on the way out
Amount = Annotated[Decimal, _as_number]


class ErrorResponse(BaseModel):
    """
    Standard error body for every 4xx/5xx response.

    Example:
        {
            "error": "not_found",
            "message": "Product not found",
            "details": {"resource": "product", "resource_id": "42"},
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Structured error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Service health: `healthy` when the datastore answers, `unhealthy` otherwise."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    datastore: str = Field(description="Datastore connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
