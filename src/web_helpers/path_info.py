"""
File path model.

Pure string manipulation over "/"-separated paths: nothing here touches the
filesystem except absolute(), which resolves existing paths.
"""

import os
from functools import cached_property

from .exceptions import InvalidArgumentError
from .mixins import ItemAccessMixin


def _split(path: str) -> list[str]:
    return [part for part in path.split("/") if part != ""]


def normalize(path: str) -> str:
    """
    Normalize a path, removing redundant "/", "." and ".." segments.

    Relative paths keep a leading "." and the ".." segments which can not be
    resolved; absolute paths can not climb above "/".

    Examples:
        >>> normalize("./../path/../..")
        './../..'
        >>> normalize("/../../path")
        '/path'
    """
    path = path.strip()
    if path == "":
        return path

    parts: list[str] = []
    absolute_path = path.startswith("/")

    for part in _split(path):
        last = parts[-1] if parts else None

        if part == "..":
            if not parts:
                if not absolute_path:
                    parts.append(part)
            elif last in ("..", "."):
                parts.append(part)
            else:
                parts.pop()
        elif part == ".":
            if not absolute_path and not parts:
                parts.append(part)
        else:
            parts.append(part)

    return ("/" if absolute_path else "") + "/".join(parts)


def is_absolute(path: str) -> bool:
    """Check whether the path starts at the root."""
    return path.strip().startswith("/")


def absolute(path: str) -> str | None:
    """Return the resolved real path, or None when it does not exist."""
    if not os.path.exists(path):
        return None
    return os.path.realpath(path)


def parent(path: str, levels: int = 1) -> str:
    """
    Return the parent path.

    Args:
        path: Source path
        levels: How many levels to climb

    Returns:
        str: Parent path

    Raises:
        InvalidArgumentError: If levels is negative

    Examples:
        >>> parent("path/../..")
        '../..'
        >>> parent("/path")
        '/'
    """
    if levels < 0:
        raise InvalidArgumentError("levels", levels)

    if levels == 0:
        return path

    absolute_path = is_absolute(path)
    parts = _split(normalize(path))

    if not parts:
        if not absolute_path:
            parts = [".."] * levels
    elif parts[-1] in ("..", "."):
        parts = parts + [".."] * levels
    elif len(parts) < levels:
        parts = [] if absolute_path else [".."] * (levels - len(parts))
    else:
        parts = parts[: len(parts) - levels]

    return ("/" if absolute_path else "") + "/".join(parts)


def child(path: str, relative: str) -> str:
    """Join a relative path to the path and normalize the result."""
    return normalize(f"{path}/{relative}")


def file(path: str) -> str:
    """Return the file name with extension (basename)."""
    stripped = path.rstrip("/")
    return stripped.rsplit("/", 1)[-1]


def name(path: str) -> str:
    """Return the file name without extension."""
    base = file(path)
    return base.rsplit(".", 1)[0] if "." in base else base


def ext(path: str) -> str:
    """Return the file extension (without the dot)."""
    base = file(path)
    return base.rsplit(".", 1)[1] if "." in base else ""


class PathInfo(ItemAccessMixin):
    """Normalized path with lazily computed components.

    Example:
        ```python
        info = PathInfo("/var/www/../data/report.tar.gz")
        info.path    # '/var/data/report.tar.gz'
        info.name    # 'report.tar'
        info["ext"]  # 'gz'
        ```
    """

    def __init__(self, path: str):
        self._path = normalize(path)

    @property
    def path(self) -> str:
        return self._path

    @property
    def is_absolute(self) -> bool:
        return is_absolute(self._path)

    @property
    def absolute(self) -> str | None:
        """Real path, or None if it does not exist."""
        return absolute(self._path)

    @cached_property
    def parent(self) -> str:
        return parent(self._path)

    @cached_property
    def file(self) -> str:
        return file(self._path)

    @cached_property
    def name(self) -> str:
        return name(self._path)

    @cached_property
    def ext(self) -> str:
        return ext(self._path)

    def get_parent(self, levels: int = 1) -> str:
        return parent(self._path, levels)

    def get_child(self, relative: str) -> str:
        return child(self._path, relative)

    def __str__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"PathInfo('{self._path}')"


__all__ = [
    "PathInfo",
    "normalize",
    "is_absolute",
    "absolute",
    "parent",
    "child",
    "file",
    "name",
    "ext",
]
