# blt_query/operators.py

from typing import Any

from sqlalchemy import Enum

TRUE_VALUES = {"true", "1"}
FALSE_VALUES = {"false", "0"}

# Largest value a 64-bit signed SQL integer can hold.
MAX_SQL_INT = 2**63 - 1


def column_python_type(column) -> Any:
    try:
        return column.type.python_type
    except (AttributeError, NotImplementedError):
        return None


def is_enum_column(column):
    """Check if a column is an enum type"""
    return isinstance(column.type, Enum)


def _coerce_enum(column, value: str) -> Any:
    enum_class = column.type.enum_class
    if enum_class is None:
        return value
    for member in enum_class:
        if member.value == value or member.name == value:
            return member
    raise ValueError(f"{value!r} is not a valid {enum_class.__name__}")


def coerce_value(column, value: str) -> Any:
    """
    Convert a raw query-string value to the column's Python type.

    Raises:
        ValueError: if the value cannot represent the column's type.
    """
    if is_enum_column(column):
        return _coerce_enum(column, value)

    python_type = column_python_type(column)
    if python_type is bool:
        lowered = value.lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
        raise ValueError(f"{value!r} is not a boolean")
    if python_type is int:
        number = int(value)
        if abs(number) > MAX_SQL_INT:
            raise ValueError(f"{value!r} is out of range")
        return number
    if python_type is float:
        return float(value)
    return value


def _eq_operator(column, value: str):
    # An empty value selects rows where the field is unset.
    if value == "":
        return column.is_(None)
    return column == coerce_value(column, value)


COMPARISON_OPERATORS = {
    "=": _eq_operator,
}
