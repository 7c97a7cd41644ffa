"""Tests for the ParsedQuery value records."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from blt_query import ParsedQuery, QueryFilter, QuerySort, parse_query


def test_records_are_immutable():
    result = parse_query("blt://issues?a=1&sort=name&limit=5")
    with pytest.raises(ValidationError):
        result.limit = 10
    with pytest.raises(ValidationError):
        result.sort.field = "other"
    with pytest.raises(ValidationError):
        result.filters[0].value = "2"


def test_filter_operator_is_equality_only():
    with pytest.raises(ValidationError):
        QueryFilter(field="a", operator=">", value="1")


def test_sort_direction_is_restricted():
    with pytest.raises(ValidationError):
        QuerySort(field="a", direction="up")


@pytest.mark.parametrize(
    "kwargs",
    [
        {"limit": 0},
        {"limit": -1.5},
        {"limit": float("inf")},
        {"offset": -1},
        {"offset": float("nan")},
    ],
)
def test_pagination_bounds_are_enforced(kwargs):
    with pytest.raises(ValidationError):
        ParsedQuery(**kwargs)


def test_pagination_bounds_accept_edges():
    parsed = ParsedQuery(limit=0.5, offset=0)
    assert parsed.limit == 0.5
    assert parsed.offset == 0
    assert type(ParsedQuery(limit=10).limit) is int


def test_to_dict_omits_absent_keys():
    result = parse_query("blt://issues?severity=high&sort=-created_at")
    assert result.to_dict() == {
        "filters": ({"field": "severity", "operator": "=", "value": "high"},),
        "sort": {"field": "created_at", "direction": "desc"},
    }


def test_filters_for():
    result = parse_query("blt://issues?a=1&b=2&a=3")
    assert [f.value for f in result.filters_for("a")] == ["1", "3"]
    assert result.filters_for("missing") == ()


def test_without_filters():
    result = parse_query("blt://issues?page=2&a=1&size=5&sort=name&a=3")
    trimmed = result.without_filters({"page", "size"})
    assert [(f.field, f.value) for f in trimmed.filters] == [("a", "1"), ("a", "3")]
    assert trimmed.sort == result.sort
    assert len(result.filters) == 4


def test_sort_to_param():
    assert QuerySort(field="x", direction="desc").to_param() == "-x"
    assert QuerySort(field="x").to_param() == "x"


def test_to_query_string():
    parsed = ParsedQuery(
        filters=(QueryFilter(field="title", value="a b&c"),),
        sort=QuerySort(field="created_at", direction="desc"),
        limit=10,
        offset=0,
    )
    assert parsed.to_query_string() == "title=a+b%26c&sort=-created_at&limit=10&offset=0"


def test_to_query_string_empty():
    assert ParsedQuery().to_query_string() == ""


@pytest.mark.parametrize(
    "uri",
    [
        "blt://issues?severity=high&status=open",
        "blt://issues?a=1&a=2&sort=-created_at&limit=2.5&offset=3",
        "blt://issues?title=hello+world&q=what%3F&sort=name",
        "blt://issues?limit=abc&offset=-1&x=",
    ],
)
def test_reparsing_rendered_query_is_stable(uri):
    parsed = parse_query(uri)
    assert parse_query(f"blt://issues?{parsed.to_query_string()}") == parsed
