# blt_query/dependencies.py

from typing import Iterable, Type

from fastapi import Depends, Request
from sqlalchemy import Select

from .builder import build_query
from .config import settings
from .core import parse_query
from .params import ParsedQuery, ResourceQueryParams


def get_parsed_query(
    request: Request,
    params: ResourceQueryParams = Depends()
) -> ParsedQuery:
    # Parse the raw URL rather than request.query_params so that the
    # order and duplicates of filter keys survive.
    return parse_query(str(request.url))


def ParsedQueryDependency(ignore: Iterable[str] = ()):
    """
    Like ``get_parsed_query``, but drops filters on ``ignore``.

    Use it for query keys that belong to something else on the route,
    e.g. ``page``/``size`` of fastapi-pagination.
    """
    ignored = frozenset(ignore)

    def wrapper(parsed: ParsedQuery = Depends(get_parsed_query)) -> ParsedQuery:
        return parsed.without_filters(ignored) if ignored else parsed
    return wrapper


def ResourceQuery(model: Type, ignore: Iterable[str] = ()):
    def wrapper(parsed: ParsedQuery = Depends(ParsedQueryDependency(ignore))) -> Select:
        return build_query(
            model,
            parsed,
            max_limit=settings.QUERY_MAX_LIMIT,
            default_limit=settings.QUERY_DEFAULT_LIMIT,
        )
    return Depends(wrapper)
