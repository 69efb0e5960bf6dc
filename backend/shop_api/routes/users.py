"""
ShopAPI Backend — User Routes
===============================

What:  GET /users, GET /users/{id}, POST /users, PUT /users/{id},
       PATCH /users/{id}, DELETE /users/{id}.

No response here ever includes the password hash.
"""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from shop_api.database import get_db_session
from shop_api.schemas.common import ErrorResponse
from shop_api.schemas.user import UserCreate, UserResponse, UserUpdate
from shop_api.services.user_service import user_service

router = APIRouter(prefix="/users", tags=["Users"])

_BAD_REQUEST = {400: {"description": "Invalid request body", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "User not found", "model": ErrorResponse}}
_SERVER_ERROR = {500: {"description": "Database error", "model": ErrorResponse}}


@router.get("", response_model=List[UserResponse], responses={**_SERVER_ERROR}, summary="List users")
async def list_users(db: AsyncSession = Depends(get_db_session)) -> List[UserResponse]:
    return await user_service.list_users(db)


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Get a user by ID",
)
async def get_user(user_id: int, db: AsyncSession = Depends(get_db_session)) -> UserResponse:
    return await user_service.get_user(db, user_id)


@router.post(
    "",
    response_model=UserResponse,
    responses={**_BAD_REQUEST, **_SERVER_ERROR},
    summary="Create a user",
    description="The password is hashed with bcrypt before it is stored.",
)
async def create_user(payload: UserCreate, db: AsyncSession = Depends(get_db_session)) -> UserResponse:
    return await user_service.create_user(db, payload)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Replace a user",
    description="Expects the complete user (name, email, password).",
)
async def replace_user(
    user_id: int,
    payload: UserCreate,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.replace_user(db, user_id, payload)


@router.patch(
    "/{user_id}",
    response_model=UserResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Partially update a user",
    description="Only the supplied fields change. An empty body is rejected with 400.",
)
async def update_user(
    user_id: int,
    payload: UserUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    return await user_service.update_user(db, user_id, payload)


@router.delete(
    "/{user_id}",
    response_model=UserResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete a user",
)
async def delete_user(user_id: int, db: AsyncSession = Depends(get_db_session)) -> UserResponse:
    return await user_service.delete_user(db, user_id)
