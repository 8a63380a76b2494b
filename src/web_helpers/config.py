"""
Settings Management Module

Provides pydantic-based configuration management with:
- YAML configuration file loading
- Environment variable overrides (WEB_HELPERS_*)
- Multi-environment support (dev, prod, test)
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .events import HelperEvents
from .exceptions import HelperConfigError
from .log_config import get_context_logger


logger = get_context_logger("config")


class Settings(BaseSettings):
    """
    Helper settings with multi-environment support.

    Configuration hierarchy (lowest to highest precedence):
    1. Environment variables (WEB_HELPERS_*)
    2. settings/config.yaml (base)
    3. settings/config.{environment}.yaml (environment-specific)

    Examples:
        >>> settings = get_settings()
        >>> settings.language
        'ru'
    """

    model_config = SettingsConfigDict(
        env_prefix="WEB_HELPERS_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="allow",
    )

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"

    # i18n
    language: str = "ru"

    # Absolute URLs
    host_info: str = Field("http://localhost", description="Scheme and host prepended to absolute URLs")

    # Formatter
    currency_code: str = "RUB"
    thousand_separator: str = ","
    decimal_separator: str = "."
    date_format: str = "%d.%m.%Y"
    time_format: str = "%H:%M:%S"
    datetime_format: str = "%d.%m.%Y %H:%M:%S"
    null_display: str = ""

    # Query parameters which are not part of the canonical URL
    tracking_params_pattern: str = r"^(utm_|roistat|(g|y|fb)clid)"
    common_params_pattern: str = r"^(sort|page|limit)$"

    @classmethod
    def load_from_yaml(cls, config_path: Path | None = None) -> "Settings":
        """
        Load settings from YAML configuration file.

        Args:
            config_path: Path to config file (default: settings/config.yaml
                in the current working directory)

        Returns:
            Settings instance

        Raises:
            HelperConfigError: If a configuration file is not valid YAML
        """
        if config_path is None:
            config_path = Path.cwd() / "settings" / "config.yaml"

        if not config_path.exists():
            logger.debug(HelperEvents.CONFIG_DEFAULTS.value, config_path=str(config_path))
            return cls()

        config_data = cls._read_yaml(config_path)

        # Load environment-specific overrides
        env = os.getenv(
            "WEB_HELPERS_ENVIRONMENT", config_data.get("environment", "development")
        )
        env_config_path = config_path.parent / f"config.{env}.yaml"

        if env_config_path.exists():
            env_config = cls._read_yaml(env_config_path)
            config_data = cls._deep_merge(config_data, env_config)

        logger.debug(
            HelperEvents.CONFIG_LOADED.value,
            config_path=str(config_path),
            environment=env,
        )
        return cls(**config_data)

    @staticmethod
    def _read_yaml(path: Path) -> dict[str, Any]:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise HelperConfigError(
                "Invalid YAML configuration", config_path=str(path), context={"error": str(e)}
            ) from e

        if not isinstance(data, dict):
            raise HelperConfigError(
                "Configuration root must be a mapping", config_path=str(path)
            )
        return data

    @staticmethod
    def _deep_merge(base: dict, override: dict) -> dict:
        """Deep merge two dictionaries."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = Settings._deep_merge(result[key], value)
            else:
                result[key] = value
        return result


@lru_cache
def get_settings(config_path: Path | None = None) -> Settings:
    """
    Get cached settings instance.

    Args:
        config_path: Optional path to config file

    Returns:
        Settings instance
    """
    return Settings.load_from_yaml(config_path)


def reload_settings() -> Settings:
    """Reload settings by clearing cache."""
    get_settings.cache_clear()
    return get_settings()


__all__ = [
    "Settings",
    "get_settings",
    "reload_settings",
]
