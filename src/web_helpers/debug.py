"""Debug dumps for HTML pages."""

from pprint import pformat
from typing import Any

from .config import get_settings


def xmp(*values: Any) -> str:
    """
    Dump values for an HTML page.

    Args:
        *values: Values to dump

    Returns:
        str: Pretty-printed values wrapped in <xmp>, or "" unless debug is enabled
    """
    if not get_settings().debug:
        return ""

    dump = "\n".join(pformat(value, width=120, sort_dicts=False) for value in values)
    return f"<xmp>{dump}</xmp>"


__all__ = ["xmp"]
