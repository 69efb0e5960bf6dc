"""
ShopAPI Backend — Document API Integration Tests
==================================================

What:  create_document_app() routes over a mocked MongoDB database.

What we test:
    ✅ POST /categories and POST /products answer with the new _id
    ✅ Malformed categoryIds are rejected with 400 before any insert
    ✅ GET /products returns camelCase documents with categories attached
    ✅ Driver errors answer 500 with the driver text in details.reason
    ✅ /health reports the datastore
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import AutoReconnect

TOOLS_ID = ObjectId("65f0c0ffee0000000000beef")
WIDGET_ID = ObjectId("65f0c0ffee0000000000abcd")


class TestCategories:

    @pytest.mark.asyncio
    async def test_create_category(self, document_client, mock_document_db):
        categories = mock_document_db.collections["categories"]
        categories.insert_one = AsyncMock(return_value=MagicMock(inserted_id=TOOLS_ID))

        response = await document_client.post("/categories", json={"name": "Tools"})

        assert response.status_code == 200
        assert response.json() == {"_id": str(TOOLS_ID), "name": "Tools"}

    @pytest.mark.asyncio
    async def test_missing_name_is_400(self, document_client, mock_document_db):
        categories = mock_document_db.collections["categories"]
        categories.insert_one = AsyncMock()

        response = await document_client.post("/categories", json={})

        assert response.status_code == 400
        categories.insert_one.assert_not_awaited()


class TestProducts:

    @pytest.mark.asyncio
    async def test_create_product(self, document_client, mock_document_db):
        products = mock_document_db.collections["products"]
        products.insert_one = AsyncMock(return_value=MagicMock(inserted_id=WIDGET_ID))

        response = await document_client.post("/products", json={
            "name": "Widget",
            "about": "A small widget",
            "price": 9.99,
            "categoryIds": [str(TOOLS_ID)],
        })

        assert response.status_code == 200
        assert response.json() == {
            "_id": str(WIDGET_ID),
            "name": "Widget",
            "about": "A small widget",
            "price": 9.99,
            "categoryIds": [str(TOOLS_ID)],
        }

    @pytest.mark.asyncio
    async def test_malformed_category_id_is_400(self, document_client, mock_document_db):
        products = mock_document_db.collections["products"]
        products.insert_one = AsyncMock()

        response = await document_client.post("/products", json={
            "name": "Widget",
            "about": "A small widget",
            "price": 9.99,
            "categoryIds": ["not-an-object-id"],
        })

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        products.insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_list_products_with_categories(self, document_client, mock_document_db):
        cursor = MagicMock()
        cursor.to_list = AsyncMock(return_value=[
            {
                "_id": WIDGET_ID,
                "name": "Widget",
                "about": "A small widget",
                "price": 9.99,
                "categoryIds": [TOOLS_ID],
                "categories": [{"_id": TOOLS_ID, "name": "Tools"}],
            },
        ])
        mock_document_db.collections["products"].aggregate = AsyncMock(return_value=cursor)

        response = await document_client.get("/products")

        assert response.status_code == 200
        [product] = response.json()
        assert product["_id"] == str(WIDGET_ID)
        assert product["categoryIds"] == [str(TOOLS_ID)]
        assert product["categories"] == [{"_id": str(TOOLS_ID), "name": "Tools"}]

    @pytest.mark.asyncio
    async def test_empty_catalog(self, document_client, mock_document_db):
        cursor = MagicMock()
        cursor.to_list = AsyncMock(return_value=[])
        mock_document_db.collections["products"].aggregate = AsyncMock(return_value=cursor)

        response = await document_client.get("/products")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_driver_error_is_500(self, document_client, mock_document_db):
        mock_document_db.collections["products"].aggregate = AsyncMock(
            side_effect=AutoReconnect("connection closed")
        )

        response = await document_client.get("/products")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert "connection closed" in body["details"]["reason"]


class TestHealth:

    @pytest.mark.asyncio
    async def test_health(self, document_client):
        response = await document_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_unreachable_store_is_503(self, document_client, fake_document_store):
        fake_document_store.ping = AsyncMock(return_value=False)

        response = await document_client.get("/health")

        assert response.status_code == 503
        assert response.json()["datastore"] == "disconnected"
