"""
ShopAPI Backend — Query Builder
=================================

What:  Turns {field → value} mappings into SQLAlchemy statements.
Why:   Filtered reads and partial updates have a dynamic set of columns.
       Building them from SQLAlchemy expressions keeps every value a bound
       parameter; nothing the client sends is ever spliced into SQL text.
How:   Three pure functions that return unexecuted statements. Services
       execute them on the request's session.

    build_filtered_select(Product, {"name": "Widget", "price": None})
        → SELECT ... FROM products WHERE products.name = :name_1 ORDER BY products.id

    build_partial_update(User, 7, {"name": "Ada", "email": None})
        → UPDATE users SET name=:name WHERE users.id = :id_1 RETURNING ...

    build_delete(Order, 3)
        → DELETE FROM orders WHERE orders.id = :id_1 RETURNING ...

A value of None means "absent" everywhere in this module.
"""

from typing import Any, Dict, Iterable, Mapping, Optional

from sqlalchemy import Delete, Select, Update, and_, delete, inspect, select, update

from shop_api.exceptions import ValidationError


def _primary_key(model):
    return inspect(model).primary_key[0]


def _column_names(model) -> set:
    return {column.key for column in inspect(model).columns}


def present_fields(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop every key whose value is absent (None)."""
    return {key: value for key, value in values.items() if value is not None}


def require_fields(values: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Present fields of an update record; raises when none are left.

    Raises:
        ValidationError: Every field was absent (HTTP 400)
    """
    fields = present_fields(values)
    if not fields:
        raise ValidationError(
            message="No valid fields provided for update",
            context={"fields": []},
        )
    return fields


def build_filtered_select(
    model,
    filters: Mapping[str, Any],
    allowed: Optional[Iterable[str]] = None,
) -> Select:
    """
    Build a SELECT with one equality predicate per present filter, ANDed.

    Args:
        model:    ORM class to select from
        filters:  Filter name → value; None values are ignored
        allowed:  Filter names the caller accepts (defaults to all columns)

    Returns:
        SELECT over the whole table when no filter is present.

    Raises:
        ValidationError: A present filter names a column not in `allowed`
    """
    allowed_names = set(allowed) if allowed is not None else _column_names(model)
    present = present_fields(filters)

    unknown = sorted(set(present) - allowed_names)
    if unknown:
        raise ValidationError(
            message=f"Unsupported filter(s): {', '.join(unknown)}",
            context={"unsupported": unknown, "allowed": sorted(allowed_names)},
        )

    predicates = [getattr(model, key) == value for key, value in present.items()]

    query = select(model)
    if predicates:
        query = query.where(and_(*predicates))
    return query.order_by(_primary_key(model))


def build_partial_update(model, identifier: Any, values: Mapping[str, Any]) -> Update:
    """
    Build UPDATE ... SET <present fields> WHERE <pk> = :id RETURNING <row>.

    Raises:
        ValidationError: No field is present (a no-op update is never issued),
                         or a field is not a column of `model`
    """
    fields = require_fields(values)

    unknown = sorted(set(fields) - _column_names(model))
    if unknown:
        raise ValidationError(
            message=f"Unknown field(s): {', '.join(unknown)}",
            context={"fields": unknown},
        )

    return (
        update(model)
        .where(_primary_key(model) == identifier)
        .values(**fields)
        .returning(model)
    )


def build_delete(model, identifier: Any) -> Delete:
    """Build DELETE ... WHERE <pk> = :id RETURNING <row> (prior state)."""
    return (
        delete(model)
        .where(_primary_key(model) == identifier)
        .returning(model)
    )
