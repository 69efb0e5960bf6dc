"""
ShopAPI Backend — Document Datastore Adapter
==============================================

What:  AsyncMongoClient lifecycle and the FastAPI dependency for the document service.
Why:   Same shape as database.Database: one explicitly constructed handle,
       opened in the lifespan, kept on `app.state`, injected per request.
How:   PyMongo's native asyncio client. It connects lazily; connect() sends a
       ping so a bad MONGO_URL shows up in the startup log.
"""

import logging
from typing import Optional

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class DocumentStore:
    """
    Owns the MongoDB client for the document service.

    Collections used:
        - products:   {name, about, price, categoryIds: [ObjectId]}
        - categories: {name}
    """

    def __init__(self, url: str, database_name: str):
        self.url = url
        self.database_name = database_name
        self.client: Optional[AsyncMongoClient] = None

    @property
    def db(self) -> AsyncDatabase:
        if self.client is None:
            raise RuntimeError("DocumentStore is not connected")
        return self.client[self.database_name]

    async def connect(self) -> None:
        """Create the client and check reachability. Failures are logged, not raised."""
        if self.client is not None:
            return
        self.client = AsyncMongoClient(self.url)
        if await self.ping():
            logger.info("Document datastore connected: database '%s'", self.database_name)
        else:
            logger.error("Document datastore unreachable at startup; requests will fail with 500")

    async def ping(self) -> bool:
        if self.client is None:
            return False
        try:
            await self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning("Document datastore ping failed: %s", str(e))
            return False

    async def close(self) -> None:
        if self.client is not None:
            await self.client.close()
            self.client = None
            logger.info("Document datastore client closed")


def get_document_db(request: Request) -> AsyncDatabase:
    """FastAPI dependency returning the MongoDB database handle from app.state."""
    store: DocumentStore = request.app.state.document_store
    return store.db
