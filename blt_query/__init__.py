from .builder import build_query
from .core import parse_number, parse_query
from .dependencies import ParsedQueryDependency, ResourceQuery, get_parsed_query
from .params import ParsedQuery, QueryFilter, QuerySort

__all__ = [
    "ParsedQuery",
    "ParsedQueryDependency",
    "QueryFilter",
    "QuerySort",
    "ResourceQuery",
    "build_query",
    "get_parsed_query",
    "parse_number",
    "parse_query",
]
