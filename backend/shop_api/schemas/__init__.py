"""
ShopAPI Backend — Pydantic Schemas
====================================

What:  Request/response models for both services (the schema validator).
Why:   FastAPI validates request bodies and query parameters against these and
       renders OpenAPI docs from them.

Modules:
    - common.py:   APIModel base, money types, error/health responses
    - product.py:  relational products
    - user.py:     relational users (response never carries the password)
    - order.py:    relational orders (total is response-only)
    - catalog.py:  document-store products and categories

Create schemas require every field except the identifier. Update schemas make
every field optional; emptiness is rejected later by the query builder.
"""
