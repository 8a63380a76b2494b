"""Logging configuration and utilities."""

import inspect
import logging
from typing import Any

import structlog


def get_context_logger(name: str) -> structlog.BoundLogger:
    """Get a context-aware logger.

    Args:
        name: Logger name

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
    """Configure structlog processors and level filtering.

    Args:
        level: Minimal level name (DEBUG, INFO, WARNING, ERROR)
        fmt: "console" for human readable output, "json" for JSON lines
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    renderer: Any
    if fmt == "json":
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def guess_category(depth: int = 1) -> str | None:
    """Guess a log category ("module.function") from the call stack.

    Args:
        depth: Frames to climb; 1 is the direct caller of this function

    Returns:
        Category string or None if the stack is not available
    """
    frame = inspect.currentframe()
    try:
        for _ in range(depth):
            if frame is None:
                return None
            frame = frame.f_back

        if frame is None:
            return None

        module = frame.f_globals.get("__name__")
        code = frame.f_code
        function = getattr(code, "co_qualname", code.co_name)

        if function == "<module>":
            return module
        if module:
            return f"{module}.{function}"
        return function
    finally:
        del frame


def _category_logger(category: str | None) -> structlog.BoundLogger:
    logger = structlog.get_logger()
    return logger.bind(category=category) if category else logger


def debug(msg: Any, category: str | None = None, **kwargs: Any) -> None:
    """Debug message with a category guessed from the caller."""
    if category is None:
        category = guess_category(depth=2)
    _category_logger(category).debug(str(msg), **kwargs)


def info(msg: Any, category: str | None = None, **kwargs: Any) -> None:
    """Informational message."""
    if category is None:
        category = guess_category(depth=2)
    _category_logger(category).info(str(msg), **kwargs)


def warn(msg: Any, category: str | None = None, **kwargs: Any) -> None:
    """Warning message."""
    if category is None:
        category = guess_category(depth=2)
    _category_logger(category).warning(str(msg), **kwargs)


def error(msg: Any, category: str | None = None, **kwargs: Any) -> None:
    """Error message."""
    if category is None:
        category = guess_category(depth=2)
    _category_logger(category).error(str(msg), **kwargs)


__all__ = [
    "get_context_logger",
    "configure_logging",
    "guess_category",
    "debug",
    "info",
    "warn",
    "error",
]
