"""Input normalization for ids and string lists."""

import math
from collections.abc import Iterable
from typing import Any

from .exceptions import InvalidArgumentError


def _as_list(values: Any) -> list[Any]:
    if not values:
        return []
    if isinstance(values, (str, bytes, int, float)):
        return [values]
    if isinstance(values, dict):
        return list(values.values())
    if isinstance(values, Iterable):
        return list(values)
    return [values]


def _is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, str):
        if not value.isascii():
            return False
        try:
            return math.isfinite(float(value.strip()))
        except ValueError:
            return False
    return False


def _to_int(value: Any) -> int:
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    return int(float(text))


def filter_id(value: int | float | str | None) -> int | None:
    """
    Parse a record id.

    Args:
        value: Id as int or string

    Returns:
        Positive id, or None for blank and zero values

    Raises:
        InvalidArgumentError: For negative or non-digit values
    """
    if value is None:
        return None

    if not isinstance(value, int) or isinstance(value, bool):
        text = str(value).strip()
        if text == "":
            return None
        if not (text.isascii() and text.isdigit()):
            raise InvalidArgumentError("id", value)
        value = int(text)

    if value < 0:
        raise InvalidArgumentError("id", value)

    return value or None


def filter_ids(values: Any) -> list[int]:
    """
    Filter a list of ids: keep positive numerics, make unique and sort.

    Examples:
        >>> filter_ids(["3", 1, "x", -2, 3, "0"])
        [1, 3]
    """
    ids = {_to_int(v) for v in _as_list(values) if _is_numeric(v)}
    return sorted(i for i in ids if i > 0)


def filter_strings(values: Any) -> list[str]:
    """Filter a list of strings: drop empty ones, make unique and sort."""
    strings = {str(v) for v in _as_list(values) if v is not None and str(v) != ""}
    return sorted(strings)


__all__ = ["filter_id", "filter_ids", "filter_strings"]
