"""
ShopAPI Backend — Services Layer
==================================

What:  Business logic between routes (HTTP) and the datastores.
Why:   Routes stay thin: they pick a status code and delegate here. Services
       raise ValidationError / NotFoundError / DatabaseError and never build
       HTTP responses themselves.

Service Inventory:
    Relational service
    - ProductService: create / filtered list / get / delete products
    - UserService:    user CRUD with bcrypt password hashing
    - OrderService:   order CRUD with the derived, VAT-inclusive total

    Document service
    - CatalogService: products (joined with categories) and categories
    - ChatHub:        in-memory WebSocket broadcast hub

Services are stateless singletons: each call receives the datastore handle
(AsyncSession or AsyncDatabase) from the route's dependency.
"""
