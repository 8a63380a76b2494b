"""Nested container helpers.

Keys address nested values either as a dotted string ("prod.attrs.size") or
as an explicit list of keys (["prod", "attrs", "size"]).
"""

from collections.abc import Mapping, MutableMapping, Sequence
from typing import Any


_MISSING = object()


def _key_path(key: Any) -> list[Any]:
    if isinstance(key, str):
        return key.split(".")
    if isinstance(key, (list, tuple)):
        return list(key)
    return [key]


def get_value(data: Any, key: Any, default: Any = None) -> Any:
    """
    Get a nested value from mappings, sequences or object attributes.

    Args:
        data: Container to read from
        key: Dotted path or list of keys
        default: Returned when any part of the path is missing

    Returns:
        The value found or default

    Examples:
        >>> get_value({"prod": {"name": "Утюг"}}, "prod.name")
        'Утюг'
    """
    if isinstance(key, str) and isinstance(data, Mapping) and key in data:
        return data[key]

    value = data
    for part in _key_path(key):
        if isinstance(value, Mapping):
            value = value.get(part, _MISSING)
        elif isinstance(value, Sequence) and not isinstance(value, str):
            try:
                value = value[int(part)]
            except (ValueError, IndexError):
                value = _MISSING
        elif value is not None and not isinstance(value, (str, int, float, bool)):
            value = getattr(value, str(part), _MISSING)
        else:
            value = _MISSING

        if value is _MISSING:
            return default

    return value


def set_value(data: MutableMapping, key: Any, value: Any) -> None:
    """
    Set a nested value, creating intermediate dicts as needed.

    Non-mapping values on the path are replaced with new dicts.
    """
    path = _key_path(key)
    target = data
    for part in path[:-1]:
        if not isinstance(target.get(part), MutableMapping):
            target[part] = {}
        target = target[part]

    target[path[-1]] = value


def remove(data: MutableMapping, key: Any, default: Any = None) -> Any:
    """
    Remove a nested item and return its value.

    Args:
        data: Mapping to remove from (modified in place)
        key: Dotted path or list of keys
        default: Returned when the item does not exist

    Returns:
        Removed value or default
    """
    path = _key_path(key)

    target = data
    for part in path[:-1]:
        child = target.get(part) if isinstance(target, Mapping) else None
        if not isinstance(child, MutableMapping):
            return default
        target = child

    return target.pop(path[-1], default)


__all__ = ["get_value", "set_value", "remove"]
