"""Strict field readers used when decoding rows from the store.

Each reader takes the raw row, the key and the table name (for error
messages) and either returns a value of the expected Python type or raises
``RowDecodeError``.
"""

from datetime import date, datetime
from typing import Any

from ..errors import RowDecodeError

_MISSING = object()


def _get(row: dict, key: str, table: str, default: Any = _MISSING) -> Any:
    if not isinstance(row, dict):
        raise RowDecodeError(table, f"expected an object, got {type(row).__name__}")
    if key not in row:
        if default is _MISSING:
            raise RowDecodeError(table, f"missing field '{key}'")
        return default
    return row[key]


def read_str(row: dict, key: str, table: str) -> str:
    """Read a required string field."""
    value = _get(row, key, table)
    if not isinstance(value, str):
        raise RowDecodeError(table, f"field '{key}' must be a string")
    return value


def read_optional_str(row: dict, key: str, table: str) -> str | None:
    """Read a nullable string field; absent keys decode as None."""
    value = _get(row, key, table, None)
    if value is not None and not isinstance(value, str):
        raise RowDecodeError(table, f"field '{key}' must be a string or null")
    return value


def _to_number(value: Any, key: str, table: str) -> float:
    # bool is an int subclass but never a valid measurement
    if isinstance(value, bool):
        raise RowDecodeError(table, f"field '{key}' must be a number")
    if isinstance(value, (int, float)):
        return value
    # numeric columns may be serialized as strings
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            pass
    raise RowDecodeError(table, f"field '{key}' must be a number")


def read_int(row: dict, key: str, table: str, default: int | None = None) -> int:
    """Read an integer field, falling back to ``default`` when null or absent."""
    value = _get(row, key, table, None)
    if value is None:
        if default is None:
            raise RowDecodeError(table, f"field '{key}' must not be null")
        return default
    number = _to_number(value, key, table)
    if number != int(number):
        raise RowDecodeError(table, f"field '{key}' must be an integer")
    return int(number)


def read_float(row: dict, key: str, table: str, default: float | None = None) -> float:
    """Read a numeric field, falling back to ``default`` when null or absent."""
    value = _get(row, key, table, None)
    if value is None:
        if default is None:
            raise RowDecodeError(table, f"field '{key}' must not be null")
        return default
    return float(_to_number(value, key, table))


def read_optional_float(row: dict, key: str, table: str) -> float | None:
    """Read a nullable numeric field."""
    value = _get(row, key, table, None)
    if value is None:
        return None
    return float(_to_number(value, key, table))


def read_date(row: dict, key: str, table: str) -> date:
    """Read a calendar date serialized as ``YYYY-MM-DD``."""
    value = _get(row, key, table)
    if not isinstance(value, str):
        raise RowDecodeError(table, f"field '{key}' must be a date string")
    try:
        return date.fromisoformat(value[:10])
    except ValueError as e:
        raise RowDecodeError(table, f"field '{key}' is not a valid date: {value!r}") from e


def read_optional_datetime(row: dict, key: str, table: str) -> datetime | None:
    """Read a nullable ISO-8601 timestamp."""
    value = _get(row, key, table, None)
    if value is None:
        return None
    if not isinstance(value, str):
        raise RowDecodeError(table, f"field '{key}' must be a timestamp string")
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise RowDecodeError(
            table, f"field '{key}' is not a valid timestamp: {value!r}"
        ) from e


def read_str_list(row: dict, key: str, table: str) -> list[str]:
    """Read an array of strings; null decodes as an empty list."""
    value = _get(row, key, table, None)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise RowDecodeError(table, f"field '{key}' must be a list of strings")
    return list(value)


def read_number_map(row: dict, key: str, table: str) -> dict[str, float]:
    """Read a JSON object of named numbers; null decodes as an empty mapping."""
    value = _get(row, key, table, None)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise RowDecodeError(table, f"field '{key}' must be an object")
    return {
        str(name): float(_to_number(number, f"{key}.{name}", table))
        for name, number in value.items()
    }
