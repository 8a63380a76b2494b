"""Mixins shared by helper value objects."""

from typing import Any


class ItemAccessMixin:
    """Mixin mapping item access to attribute access.

    `obj["name"]` reads `obj.name`, `obj["name"] = v` sets it, `del obj["name"]`
    resets it to None and `"name" in obj` tells whether the attribute is set.
    """

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and getattr(self, key, None) is not None

    def __getitem__(self, key: str) -> Any:
        try:
            return getattr(self, key)
        except AttributeError as e:
            raise KeyError(key) from e

    def __setitem__(self, key: str, value: Any) -> None:
        setattr(self, key, value)

    def __delitem__(self, key: str) -> None:
        setattr(self, key, None)


__all__ = ["ItemAccessMixin"]
