"""
ShopAPI Backend — FastAPI Application Factories
=================================================

What:  Builds the two services: the relational API and the document API.
How:   create_app() and create_document_app() share logging setup, middleware
       and exception handlers; each has its own lifespan that opens and
       closes its datastore handle.
Who:   uvicorn (`shop_api.main:app`, `shop_api.main:document_app`) and tests.

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │  Middleware: Request ID → Logging → GZip → CORS      │
    │                                                      │
    │  Relational app            Document app              │
    │  ┌──────────────────┐      ┌──────────────────────┐  │
    │  │ /products        │      │ /products /categories│  │
    │  │ /users /orders   │      │ / (chat page)  /ws   │  │
    │  │ /api-docs        │      │ /docs                │  │
    │  └──────────────────┘      └──────────────────────┘  │
    │                                                      │
    │  Exception handlers:                                 │
    │  ValidationError→400 │ NotFound→404 │ Database→500   │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, open the datastore handle (and create the
              relational tables when DB_CREATE_TABLES is on)
    Shutdown: close the datastore handle
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from shop_api import __version__
from shop_api.config import settings
from shop_api.database import Database
from shop_api.document_store import DocumentStore
from shop_api.exceptions import DatabaseError, NotFoundError, ValidationError
from shop_api.middleware.logging import RequestLoggingMiddleware
from shop_api.middleware.request_id import RequestIDMiddleware, request_id_var
from shop_api.routes import catalog, chat, health, orders, products, users
from shop_api.services.chat_hub import ChatHub

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once per process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (Docker captures it)
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # These log every operation at INFO/DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Lifespans
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def relational_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    database: Database = app.state.database
    logger.info("ShopAPI relational service starting up...")

    await database.connect()
    if settings.db_create_tables:
        try:
            await database.create_tables()
        except SQLAlchemyError as e:
            # Stay up: /health reports the outage, requests answer 500
            logger.error("Could not create tables: %s", str(e))

    logger.info("API docs: http://%s:%d/api-docs", settings.backend_host, settings.backend_port)

    yield

    logger.info("ShopAPI relational service shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


@asynccontextmanager
async def document_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    store: DocumentStore = app.state.document_store
    logger.info("ShopAPI document service starting up...")

    await store.connect()
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.document_port)

    yield

    logger.info("ShopAPI document service shutting down...")
    await store.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, details: Optional[dict] = None) -> dict:
    return {
        "error": error,
        "message": message,
        "details": details,
        "request_id": request_id_var.get(""),
    }


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the common error body.

    Handler hierarchy:
        RequestValidationError → 400 (schema failure; Pydantic errors in details)
        ValidationError        → 400
        NotFoundError          → 404
        DatabaseError          → 500 (driver error text in details.reason)
        Exception              → 500 (unexpected, logged with traceback)
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = jsonable_encoder(exc.errors())
        logger.warning("Request validation failed on %s %s: %d error(s)",
                       request.method, request.url.path, len(errors))
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", "Invalid request", {"errors": errors}),
        )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("Validation error: %s", exc.message)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, exc.context),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=_error_body("not_found", exc.message, exc.context),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("Database error: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", exc.message, exc.context),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred",
                {"reason": str(exc)},
            ),
        )


def _add_middleware(app: FastAPI) -> None:
    # Registered in reverse execution order (last added runs first)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)


# ══════════════════════════════════════════════════════════════════════════
# Application Factories
# ══════════════════════════════════════════════════════════════════════════

def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Relational service: products, users and orders over PostgreSQL.

    Args:
        database: Datastore handle to use; defaults to one built from
                  settings.database_url. Tests pass their own.
    """
    app = FastAPI(
        title="ShopAPI",
        description="Shop api for users, products and orders",
        version=__version__,
        contact={"name": "Shop", "email": "shop@email.com"},
        docs_url="/api-docs",
        redoc_url=None,
        openapi_url="/openapi.json",
        lifespan=relational_lifespan,
    )
    app.state.database = database or Database(
        settings.database_url,
        echo=settings.log_level == "DEBUG",
    )

    _add_middleware(app)
    register_exception_handlers(app)

    app.include_router(products.router)
    app.include_router(users.router)
    app.include_router(orders.router)
    app.include_router(health.router)

    return app


def create_document_app(document_store: Optional[DocumentStore] = None) -> FastAPI:
    """
    Document service: products and categories over MongoDB, plus the chat channel.

    Args:
        document_store: Datastore handle to use; defaults to one built from
                        settings.mongo_url / settings.mongo_database.
    """
    app = FastAPI(
        title="ShopAPI Catalog",
        description="Product catalog backed by MongoDB, with a realtime chat channel",
        version=__version__,
        lifespan=document_lifespan,
    )
    app.state.document_store = document_store or DocumentStore(
        settings.mongo_url,
        settings.mongo_database,
    )
    app.state.chat_hub = ChatHub()

    _add_middleware(app)
    register_exception_handlers(app)

    app.include_router(catalog.router)
    app.include_router(chat.router)
    app.include_router(health.router)

    return app


# uvicorn entry points: shop_api.main:app / shop_api.main:document_app
app = create_app()
document_app = create_document_app()
