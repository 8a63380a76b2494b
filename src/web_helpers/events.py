"""Event name constants for structured logging."""

from enum import Enum


class HelperEvents(str, Enum):
    """Event type constants for structured logging."""

    # Configuration events
    CONFIG_LOADED = "helpers.config.loaded"
    CONFIG_DEFAULTS = "helpers.config.defaults"
    BOOTSTRAPPED = "helpers.bootstrapped"

    # URL events
    REDIRECT_REQUIRED = "helpers.url.redirect_required"
    REDIRECT_NOT_REQUIRED = "helpers.url.redirect_not_required"
    IDN_CONVERSION_FAILED = "helpers.url.idn_failed"

    # Template events
    TEMPLATE_UNRESOLVED = "helpers.template.unresolved"
    TEMPLATE_BLOCK_CLEANED = "helpers.template.block_cleaned"

    # Formatter events
    FORMAT_FAILED = "helpers.formatter.failed"


__all__ = ["HelperEvents"]
