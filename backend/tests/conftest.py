"""
ShopAPI Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session:    AsyncMock standing in for an AsyncSession
    ├── mock_document_db:   MagicMock MongoDB database with per-collection mocks
    ├── fake_document_store: DocumentStore double wrapping mock_document_db
    ├── sqlite_database:    real Database over a throwaway aiosqlite file
    ├── relational_client:  httpx AsyncClient bound to create_app(sqlite_database)
    └── document_client:    httpx AsyncClient bound to create_document_app(fake store)
"""

import os

# Override settings BEFORE any shop_api import reads them
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["MONGO_URL"] = "mongodb://localhost:27017"
os.environ["BCRYPT_ROUNDS"] = "4"  # Minimum cost keeps hashing tests fast
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from shop_api.database import Database


class FakeDocumentStore:
    """DocumentStore double: hands out a mocked database, never touches the network."""

    def __init__(self, db):
        self.db = db
        self.connected = False

    async def connect(self) -> None:
        self.connected = True

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        self.connected = False


# ══════════════════════════════════════════════════════════════════════════
# Datastore Doubles
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_product(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = product
            result = await product_service.get_product(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def mock_document_db():
    """
    Provides a mock MongoDB database.

    `mock_document_db["products"]` and `mock_document_db["categories"]` return
    the same MagicMock each time, so tests can configure insert_one /
    aggregate on them and assert calls afterwards.
    """
    collections = {"products": MagicMock(), "categories": MagicMock()}
    db = MagicMock()
    db.__getitem__.side_effect = lambda name: collections[name]
    db.collections = collections
    return db


@pytest.fixture
def fake_document_store(mock_document_db):
    return FakeDocumentStore(mock_document_db)


# ══════════════════════════════════════════════════════════════════════════
# HTTP Clients
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def sqlite_database(tmp_path):
    """A connected Database over a fresh SQLite file with all tables created."""
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'shop.db'}")
    await database.connect()
    await database.create_tables()
    yield database
    await database.dispose()


@pytest_asyncio.fixture
async def relational_client(sqlite_database):
    """
    HTTPX AsyncClient talking to the relational app in-process.

    ASGITransport does not run the lifespan, so the sqlite_database fixture
    opens the datastore handle instead.
    """
    from shop_api.main import create_app

    app = create_app(database=sqlite_database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def document_client(fake_document_store):
    from shop_api.main import create_document_app

    app = create_document_app(document_store=fake_document_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
