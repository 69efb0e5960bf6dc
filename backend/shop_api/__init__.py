"""
ShopAPI Backend — Application Package
=======================================

Two FastAPI services sharing one codebase:

    ┌──────────────────────────────┐   ┌──────────────────────────────┐
    │ Relational service (:8000)   │   │ Document service (:8001)     │
    │ products / users / orders    │   │ products / categories / chat │
    │ PostgreSQL, async SQLAlchemy │   │ MongoDB, async PyMongo       │
    └──────────────────────────────┘   └──────────────────────────────┘

Each request runs the same pipeline:

    Routes (HTTP)  →  Schemas (validation)  →  Services (query builder)
                   →  Datastore adapter     →  Routes (status + JSON)

Run:
    uvicorn shop_api.main:app --port 8000
    uvicorn shop_api.main:document_app --port 8001
"""

__version__ = "0.1.0"
