"""
ShopAPI Backend — API Routes Package
======================================

Route Inventory:
    Relational service (main.app)
    - products.py: POST/GET /products, GET/DELETE /products/{id}
    - users.py:    GET/POST /users, GET/PUT/PATCH/DELETE /users/{id}
    - orders.py:   POST/GET /orders, GET/PATCH/DELETE /orders/{id}

    Document service (main.document_app)
    - catalog.py:  POST/GET /products, POST /categories
    - chat.py:     GET / (chat page), WS /ws

    Both
    - health.py:   GET /health

Routes are thin: extract input, call a service, return its result. Status
codes other than the default come from the global exception handlers.
"""
