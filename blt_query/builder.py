import logging
import math
from typing import Any, Optional, Tuple

from fastapi import HTTPException
from sqlalchemy import Select, and_, asc, desc, select
from sqlalchemy.orm import QueryableAttribute, RelationshipProperty, aliased

from .operators import COMPARISON_OPERATORS, MAX_SQL_INT
from .params import ParsedQuery

logger = logging.getLogger(__name__)


def resolve_and_join_column(model, nested_keys: list[str], query: Select, joins: dict) -> Tuple[Any, Select]:
    current_model = model

    for i, attr in enumerate(nested_keys):
        relationship = getattr(current_model, attr, None)

        if relationship is not None and isinstance(getattr(relationship, "property", None), RelationshipProperty):
            related_model = relationship.property.mapper.class_
            if related_model not in joins:
                alias = aliased(related_model)
                joins[related_model] = alias
                query = query.outerjoin(relationship.of_type(alias))
            current_model = joins[related_model]
        else:
            if isinstance(relationship, QueryableAttribute) and i == len(nested_keys) - 1:
                return relationship, query
            logger.warning(f"Unknown field '{'.'.join(nested_keys)}' on {getattr(model, '__name__', model)}")
            raise HTTPException(
                status_code=400,
                detail=f"Invalid field: {'.'.join(nested_keys)}. "
                f"Could not resolve attribute '{attr}'."
            )
    raise HTTPException(
        status_code=400,
        detail=f"Could not resolve relationship for {'.'.join(nested_keys)}."
    )


def resolve_column(model, field: str, query: Select, joins: dict) -> Tuple[Any, Select]:
    if not field:
        raise HTTPException(status_code=400, detail="Empty field name")
    return resolve_and_join_column(model, field.split("."), query, joins)


def apply_filters(model, parsed: ParsedQuery, query: Select, joins: dict) -> Tuple[Optional[Any], Select]:
    expressions = []

    for query_filter in parsed.filters:
        column, query = resolve_column(model, query_filter.field, query, joins)
        operator = COMPARISON_OPERATORS[query_filter.operator]
        try:
            expressions.append(operator(column, query_filter.value))
        except ValueError as e:
            raise HTTPException(
                status_code=400, detail=f"Error filtering '{query_filter.field}': {e}")

    return and_(*expressions) if expressions else None, query


def _check_bound(name: str, value: int) -> int:
    if value > MAX_SQL_INT:
        raise HTTPException(
            status_code=400, detail=f"Invalid {name}: {value} is too large.")
    return value


def build_query(
    cls: Any,
    parsed: ParsedQuery,
    stmt: Select | None = None,
    max_limit: Optional[int] = None,
    default_limit: Optional[int] = None,
) -> Select:
    """
    Translate a ParsedQuery into a SQLAlchemy select on ``cls``.

    Filters are AND-combined, ``sort`` becomes a single ORDER BY and
    ``limit``/``offset`` are applied last. ``max_limit`` caps the page size,
    ``default_limit`` is used when the query carries no limit.

    Raises:
        HTTPException: 400 for a field the model does not have, a value
            that does not fit the column type, or a limit or offset too
            large for a SQL integer.
    """
    stmt = select(cls) if stmt is None else stmt
    joins: dict = {}

    # Filters
    filter_expr, stmt = apply_filters(cls, parsed, stmt, joins)
    if filter_expr is not None:
        stmt = stmt.where(filter_expr)

    # Sorting
    if parsed.sort is not None:
        column, stmt = resolve_column(cls, parsed.sort.field, stmt, joins)
        stmt = stmt.order_by(
            asc(column) if parsed.sort.direction == "asc" else desc(column))

    # Pagination
    limit = math.ceil(parsed.limit) if parsed.limit is not None else default_limit
    if limit is not None and max_limit is not None:
        limit = min(limit, max_limit)
    if limit is not None:
        stmt = stmt.limit(_check_bound("limit", limit))
    if parsed.offset is not None:
        stmt = stmt.offset(_check_bound("offset", int(parsed.offset)))

    return stmt
