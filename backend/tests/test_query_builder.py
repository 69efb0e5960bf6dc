"""
ShopAPI Backend — Query Builder Unit Tests
============================================

What:  Tests for the dynamic SELECT / UPDATE / DELETE construction.
How:   Statements are compiled with the PostgreSQL dialect (no database
       needed) and the SQL text and bound parameters are inspected.

What we test:
    ✅ Each present filter becomes one bound equality predicate, ANDed
    ✅ No filters → no WHERE clause
    ✅ Client values never appear in the SQL text
    ✅ Partial update SETs exactly the present fields, scoped by primary key
    ✅ Empty update and unknown fields are rejected with ValidationError
"""

from decimal import Decimal

import pytest
from sqlalchemy.dialects import postgresql

from shop_api.exceptions import ValidationError
from shop_api.models.order import Order
from shop_api.models.product import Product
from shop_api.models.user import User
from shop_api.query_builder import (
    build_delete,
    build_filtered_select,
    build_partial_update,
    present_fields,
    require_fields,
)

FILTERS = ("name", "about", "price")


def _compile(statement):
    return statement.compile(dialect=postgresql.dialect())


class TestPresentFields:

    def test_drops_none_values(self):
        assert present_fields({"name": "Ada", "email": None, "password": None}) == {"name": "Ada"}

    def test_keeps_falsy_but_present_values(self):
        """Empty strings and zero are values, not absence."""
        assert present_fields({"name": "", "quantity": 0}) == {"name": "", "quantity": 0}

    def test_require_fields_rejects_all_absent(self):
        with pytest.raises(ValidationError, match="No valid fields"):
            require_fields({"name": None, "email": None})


class TestFilteredSelect:

    def test_no_filters_selects_everything(self):
        sql = str(_compile(build_filtered_select(Product, {}, allowed=FILTERS)))
        assert "WHERE" not in sql
        assert "ORDER BY products.id" in sql

    def test_all_none_filters_selects_everything(self):
        query = build_filtered_select(
            Product, {"name": None, "about": None, "price": None}, allowed=FILTERS
        )
        assert "WHERE" not in str(_compile(query))

    def test_single_filter(self):
        compiled = _compile(build_filtered_select(Product, {"name": "Widget"}, allowed=FILTERS))
        sql = str(compiled)
        assert "WHERE products.name = %(name_1)s" in sql
        assert compiled.params == {"name_1": "Widget"}

    def test_multiple_filters_are_anded(self):
        compiled = _compile(
            build_filtered_select(
                Product,
                {"name": "Widget", "about": None, "price": Decimal("9.99")},
                allowed=FILTERS,
            )
        )
        sql = str(compiled)
        assert "products.name = %(name_1)s AND products.price = %(price_1)s" in sql
        assert "products.about =" not in sql
        assert compiled.params == {"name_1": "Widget", "price_1": Decimal("9.99")}

    def test_values_are_bound_not_interpolated(self):
        hostile = "x' OR '1'='1"
        compiled = _compile(build_filtered_select(Product, {"name": hostile}, allowed=FILTERS))
        assert hostile not in str(compiled)
        assert hostile in compiled.params.values()

    def test_unknown_filter_rejected(self):
        with pytest.raises(ValidationError, match="Unsupported filter") as exc_info:
            build_filtered_select(Product, {"id": 3}, allowed=FILTERS)
        assert exc_info.value.context["unsupported"] == ["id"]

    def test_defaults_to_all_columns(self):
        compiled = _compile(build_filtered_select(Order, {"user_id": 4}))
        assert "orders.user_id = %(user_id_1)s" in str(compiled)


class TestPartialUpdate:

    def test_sets_only_present_fields(self):
        compiled = _compile(build_partial_update(User, 7, {"name": "Ada", "email": None}))
        sql = str(compiled)
        assert sql.startswith("UPDATE users SET name=%(name)s WHERE users.id = %(id_1)s")
        assert "email=" not in sql
        assert "RETURNING" in sql
        assert compiled.params["name"] == "Ada"
        assert compiled.params["id_1"] == 7

    def test_multiple_fields(self):
        compiled = _compile(
            build_partial_update(Order, 3, {"quantity": 5, "user_id": 2, "product_id": None})
        )
        sql = str(compiled)
        assert "quantity=%(quantity)s" in sql
        assert "user_id=%(user_id)s" in sql
        assert "product_id=" not in sql

    def test_empty_update_rejected(self):
        with pytest.raises(ValidationError, match="No valid fields provided for update"):
            build_partial_update(User, 7, {"name": None, "email": None, "password": None})

    def test_no_fields_at_all_rejected(self):
        with pytest.raises(ValidationError):
            build_partial_update(User, 7, {})

    def test_unknown_column_rejected(self):
        with pytest.raises(ValidationError, match="Unknown field"):
            build_partial_update(User, 7, {"is_admin": True})


class TestDelete:

    def test_delete_scoped_by_primary_key_with_returning(self):
        compiled = _compile(build_delete(Product, 42))
        sql = str(compiled)
        assert sql.startswith("DELETE FROM products WHERE products.id = %(id_1)s")
        assert "RETURNING products.id, products.name, products.about, products.price" in sql
        assert compiled.params == {"id_1": 42}
