"""Bootstrap logging and i18n from settings."""

from .config import Settings, get_settings
from .events import HelperEvents
from .i18n import set_language
from .log_config import configure_logging, get_context_logger


logger = get_context_logger("bootstrap")


def bootstrap(settings: Settings | None = None) -> Settings:
    """
    Configure logging and the default language.

    Args:
        settings: Settings to apply, the cached ones by default

    Returns:
        Applied settings
    """
    settings = settings or get_settings()

    configure_logging(settings.log_level, settings.log_format)
    set_language(settings.language)

    logger.info(
        HelperEvents.BOOTSTRAPPED.value,
        environment=settings.environment,
        language=settings.language,
        debug=settings.debug,
    )
    return settings


__all__ = ["bootstrap"]
