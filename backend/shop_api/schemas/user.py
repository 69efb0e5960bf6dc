"""
ShopAPI Backend — User Schemas
================================

UserCreate doubles as the body of PUT /users/{id} (full replacement);
UserUpdate is the PATCH body. UserResponse deliberately has no password
field, so the stored hash cannot be serialized.
"""

from typing import Optional

from pydantic import EmailStr, Field, field_validator

from shop_api.config import settings
from shop_api.schemas.common import APIModel


def _check_password_length(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value) < settings.password_min_length:
        raise ValueError(
            f"Password must be at least {settings.password_min_length} characters"
        )
    return value


class UserCreate(APIModel):
    """Body of POST /users and PUT /users/{id}."""
    name: str = Field(examples=["Ada Lovelace"])
    email: EmailStr = Field(examples=["ada@example.com"])
    password: str = Field(examples=["s3cret!"])

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password_length(v)


class UserUpdate(APIModel):
    """Body of PATCH /users/{id}. Every field optional."""
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: Optional[str]) -> Optional[str]:
        return _check_password_length(v)


class UserResponse(APIModel):
    id: int
    name: str
    email: str
