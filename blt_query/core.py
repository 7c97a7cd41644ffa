# blt_query/core.py

import logging
import math
from typing import Optional
from urllib.parse import parse_qsl

from .params import Number, ParsedQuery, QueryFilter, QuerySort

logger = logging.getLogger(__name__)

_PREFIXED_INT = ("0x", "0o", "0b")


def parse_number(value: str) -> Optional[Number]:
    """
    Parse a query-string value as a finite number.

    Accepts decimal integers, decimals, exponent forms and ``0x``/``0o``/``0b``
    prefixed integers, ignoring surrounding whitespace. Returns ``None`` for
    anything else, including the empty string, non-ASCII digits, ``nan`` and
    ``inf``.
    """
    text = value.strip()
    # float() also reads non-ASCII digits such as "\uff15".
    if not text or not text.isascii() or "_" in text:
        return None

    if text[:2].lower() in _PREFIXED_INT:
        try:
            return int(text, 0)
        except ValueError:
            return None

    try:
        number = float(text)
    except ValueError:
        return None

    if not math.isfinite(number):
        return None
    if number.is_integer():
        return int(number)
    return number


def split_query_string(uri: str) -> str:
    # Only the first '?' separates the path from the query.
    _, _, query_string = uri.partition("?")
    return query_string


def parse_sort(value: str) -> QuerySort:
    if value.startswith("-"):
        return QuerySort(field=value[1:], direction="desc")
    return QuerySort(field=value, direction="asc")


def parse_query(uri: str) -> ParsedQuery:
    """
    Parse the query portion of a resource URI.

    Example:
        blt://issues?severity=high&sort=-created_at&limit=10
        -> filters=[severity = high], sort=created_at desc, limit=10

    Args:
        uri: Full resource URI; only the part after the first ``?`` is read.

    Returns:
        ParsedQuery. Malformed ``limit``/``offset`` values are dropped, never
        reported; this function does not raise for any string.
    """
    filters: list[QueryFilter] = []
    sort: Optional[QuerySort] = None
    limit: Optional[Number] = None
    offset: Optional[Number] = None

    query_string = split_query_string(uri)
    if not query_string:
        return ParsedQuery(filters=())

    for key, value in parse_qsl(query_string, keep_blank_values=True):
        if key == "sort":
            sort = parse_sort(value)
        elif key == "limit":
            n = parse_number(value)
            if n is not None and n > 0:
                limit = n
            else:
                logger.debug(f"Ignoring invalid limit {value!r} in {uri!r}")
        elif key == "offset":
            n = parse_number(value)
            if n is not None and n >= 0:
                offset = n
            else:
                logger.debug(f"Ignoring invalid offset {value!r} in {uri!r}")
        else:
            filters.append(QueryFilter(field=key, operator="=", value=value))

    return ParsedQuery(filters=tuple(filters), sort=sort, limit=limit, offset=offset)
