"""
ShopAPI Backend — Relational Datastore Adapter
================================================

What:  Async SQLAlchemy engine lifecycle, session factory, and FastAPI dependency.
Why:   One explicitly constructed handle per process instead of a module-level
       engine created at import time.
How:   `Database` owns the engine. The lifespan in main.py calls connect() on
       startup and dispose() on shutdown and keeps the instance on `app.state`;
       `get_db_session` reads it from there for each request.

Connection Pooling:
    PostgreSQL URLs get pool_size / max_overflow / pre_ping from settings.
    SQLite URLs (tests, local experiments) use the driver's default pool.
"""

import logging
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from shop_api.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata)."""
    pass


class Database:
    """
    Owns the async engine and session factory for the relational service.

    Usage:
        database = Database(settings.database_url)
        await database.connect()
        async with database.session_factory() as session:
            ...
        await database.dispose()
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    def _engine_options(self) -> dict:
        if self.url.startswith("sqlite"):
            return {}
        return {
            "pool_size": settings.db_pool_size,
            "max_overflow": settings.db_max_overflow,
            "pool_pre_ping": settings.db_pool_pre_ping,
            "pool_recycle": 3600,
        }

    async def connect(self) -> None:
        """Create the engine and session factory. Connections open lazily."""
        if self.engine is not None:
            return
        self.engine = create_async_engine(self.url, echo=self.echo, **self._engine_options())
        # expire_on_commit=False: returned ORM objects stay readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Relational datastore engine created")

    async def create_tables(self) -> None:
        """Create every table registered on Base.metadata if it does not exist."""
        # Models must be imported so they register with Base.metadata
        from shop_api import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """Run SELECT 1; False when the database is unreachable."""
        if self.engine is None:
            return False
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Relational datastore ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Close all pooled connections."""
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None
            logger.info("Relational datastore engine disposed")


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides one database session per request.

    How it works:
        1. Takes the Database handle from request.app.state
        2. Yields a new session to the route handler
        3. On success: commits anything still pending
        4. On error: rolls back and re-raises for the global handlers
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
