"""Logging configuration package."""

from .main import (
    configure_logging,
    debug,
    error,
    get_context_logger,
    guess_category,
    info,
    warn,
)


__all__ = [
    "get_context_logger",
    "configure_logging",
    "guess_category",
    "debug",
    "info",
    "warn",
    "error",
]
