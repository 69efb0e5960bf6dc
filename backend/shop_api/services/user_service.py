"""
ShopAPI Backend — User Service
================================

What:  User CRUD for the relational service.
Who:   Called by routes/users.py.

Passwords:
    Hashed with bcrypt before every write (create, PUT, PATCH with a
    password). Reads return UserResponse, which has no password field.

Update flavours:
    - replace_user (PUT):  full UserCreate body, every column rewritten
    - update_user (PATCH): only the fields present in the body; an empty
      body is rejected by the query builder with a 400
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shop_api.exceptions import NotFoundError
from shop_api.models.user import User
from shop_api.query_builder import build_delete, build_partial_update, present_fields
from shop_api.schemas.user import UserCreate, UserResponse, UserUpdate
from shop_api.security import hash_password
from shop_api.services.base import datastore_errors

logger = logging.getLogger(__name__)


class UserService:

    async def list_users(self, db: AsyncSession) -> List[UserResponse]:
        with datastore_errors("access the database"):
            result = await db.execute(select(User).order_by(User.id))
            users = result.scalars().all()
        return [UserResponse.model_validate(u) for u in users]

    async def get_user(self, db: AsyncSession, user_id: int) -> UserResponse:
        with datastore_errors("access the database"):
            result = await db.execute(select(User).where(User.id == user_id))
            user = result.scalar_one_or_none()

        if user is None:
            raise NotFoundError(resource="user", resource_id=user_id)
        return UserResponse.model_validate(user)

    async def create_user(self, db: AsyncSession, payload: UserCreate) -> UserResponse:
        data = payload.model_dump()
        data["password"] = await hash_password(payload.password)
        user = User(**data)

        with datastore_errors("create user"):
            db.add(user)
            await db.flush()
            await db.commit()
        logger.info("User created: %s", user.id)
        return UserResponse.model_validate(user)

    async def replace_user(self, db: AsyncSession, user_id: int, payload: UserCreate) -> UserResponse:
        values = payload.model_dump()
        values["password"] = await hash_password(payload.password)
        return await self._apply_update(db, user_id, values)

    async def update_user(self, db: AsyncSession, user_id: int, payload: UserUpdate) -> UserResponse:
        values = present_fields(payload.model_dump())
        if "password" in values:
            values["password"] = await hash_password(values["password"])
        return await self._apply_update(db, user_id, values)

    async def _apply_update(self, db: AsyncSession, user_id: int, values: dict) -> UserResponse:
        # Raises ValidationError before touching the database when values is empty
        statement = build_partial_update(User, user_id, values)

        with datastore_errors("update user"):
            result = await db.execute(statement)
            user = result.scalar_one_or_none()
            if user is not None:
                await db.commit()

        if user is None:
            raise NotFoundError(resource="user", resource_id=user_id)
        logger.info("User %s updated: %s", user_id, sorted(values))
        return UserResponse.model_validate(user)

    async def delete_user(self, db: AsyncSession, user_id: int) -> UserResponse:
        with datastore_errors("delete user"):
            result = await db.execute(build_delete(User, user_id))
            user = result.scalar_one_or_none()
            if user is not None:
                await db.commit()

        if user is None:
            raise NotFoundError(resource="user", resource_id=user_id)
        logger.info("User deleted: %s", user_id)
        return UserResponse.model_validate(user)


user_service = UserService()
