"""Type definitions for the web helpers package."""

from collections.abc import Mapping, Sequence
from typing import Any, TypeAlias


Query: TypeAlias = dict[str, Any]
"""Decoded query: str keys, scalar / nested dict / list values."""

QueryInput: TypeAlias = Mapping[Any, Any] | Sequence[Any] | str | None
"""Anything accepted where a query is expected."""

WorkTime: TypeAlias = Sequence[str] | None
"""Opening and closing time of a day, e.g. ("09:00", "18:00"); empty for days off."""

Schedule: TypeAlias = Mapping[int, WorkTime] | Sequence[WorkTime]
"""Weekly schedule indexed by weekday (0 - Monday)."""


__all__ = ["Query", "QueryInput", "WorkTime", "Schedule"]
