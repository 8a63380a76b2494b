"""Web helpers exception hierarchy.

Exception Hierarchy:
    HelperException (base)
    ├── InvalidArgumentError (also a ValueError)
    │   └── InvalidDomainError
    └── HelperConfigError
"""

from typing import Optional


class HelperException(Exception):
    """Base exception for all web helpers errors.

    All helper-specific exceptions inherit from this class to allow
    catching them with a single except clause.
    """

    def __init__(self, message: str, context: Optional[dict] = None):
        """Initialize helper exception.

        Args:
            message: Error message
            context: Optional context dictionary for debugging
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation with context."""
        if self.context:
            context_str = "; ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class InvalidArgumentError(HelperException, ValueError):
    """Raised when a helper receives an argument it can not work with.

    Attributes:
        argument: Name of the offending argument
    """

    def __init__(
        self,
        argument: str,
        value: object = None,
        message: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if value is not None:
            context["value"] = repr(value)
        super().__init__(message or f"Invalid argument: {argument}", context)
        self.argument = argument
        self.value = value


class InvalidDomainError(InvalidArgumentError):
    """Raised when a domain name can not be parsed or IDNA-converted."""

    def __init__(
        self,
        argument: str,
        domain: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        context = {}
        if cause is not None:
            context["cause"] = str(cause)
        super().__init__(
            argument, domain, message=f"Invalid domain name: {argument}", context=context
        )
        self.domain = domain
        self.cause = cause


class HelperConfigError(HelperException):
    """Raised when configuration files can not be loaded.

    Attributes:
        config_path: Path of the configuration file
    """

    def __init__(
        self,
        message: str,
        config_path: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if config_path:
            context["config_path"] = config_path
        super().__init__(message, context)
        self.config_path = config_path


__all__ = [
    "HelperException",
    "InvalidArgumentError",
    "InvalidDomainError",
    "HelperConfigError",
]
