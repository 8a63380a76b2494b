"""
Value formatter.

Renders numbers, money and dates for text output using the separators,
currency and strftime formats from settings.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

from .config import Settings, get_settings
from .events import HelperEvents
from .exceptions import InvalidArgumentError
from .log_config import get_context_logger


logger = get_context_logger("formatter")


@dataclass
class Formatter:
    """Formats values for display.

    Attributes:
        thousand_separator: Separator between digit groups
        decimal_separator: Separator of the fractional part
        currency_code: Default currency for as_currency()
        date_format: strftime format for as_date()
        time_format: strftime format for as_time()
        datetime_format: strftime format for as_datetime()
        null_display: Text rendered for None values
    """

    thousand_separator: str = ","
    decimal_separator: str = "."
    currency_code: str = "RUB"
    date_format: str = "%d.%m.%Y"
    time_format: str = "%H:%M:%S"
    datetime_format: str = "%d.%m.%Y %H:%M:%S"
    null_display: str = ""

    @classmethod
    def from_settings(cls, settings: Settings) -> "Formatter":
        return cls(
            thousand_separator=settings.thousand_separator,
            decimal_separator=settings.decimal_separator,
            currency_code=settings.currency_code,
            date_format=settings.date_format,
            time_format=settings.time_format,
            datetime_format=settings.datetime_format,
            null_display=settings.null_display,
        )

    def _number(self, value: Any) -> Decimal:
        if isinstance(value, bool):
            return Decimal(int(value))
        try:
            number = Decimal(str(value).strip())
        except InvalidOperation as e:
            logger.debug(HelperEvents.FORMAT_FAILED.value, value=repr(value))
            raise InvalidArgumentError("value", value, "Value is not a number") from e

        if not number.is_finite():
            logger.debug(HelperEvents.FORMAT_FAILED.value, value=repr(value))
            raise InvalidArgumentError("value", value, "Value is not a finite number")
        return number

    def _group(self, number: Decimal, decimals: int) -> str:
        quantum = Decimal(1).scaleb(-decimals)
        with localcontext() as ctx:
            # enough precision to keep every integer digit
            ctx.prec = max(ctx.prec, number.adjusted() + decimals + 2)
            rounded = number.quantize(quantum, rounding=ROUND_HALF_UP)
        text = f"{rounded:,.{decimals}f}"
        return (
            text.replace(",", "\0")
            .replace(".", self.decimal_separator)
            .replace("\0", self.thousand_separator)
        )

    def as_integer(self, value: Any) -> str:
        """
        Format as an integer with grouped thousands (fraction truncated).

        Examples:
            >>> Formatter().as_integer(12345)
            '12,345'
        """
        if value is None:
            return self.null_display
        return self._group(Decimal(int(self._number(value))), 0)

    def as_decimal(self, value: Any, decimals: int = 2) -> str:
        """Format as a decimal number with a fixed number of fractional digits."""
        if value is None:
            return self.null_display
        return self._group(self._number(value), decimals)

    def as_currency(self, value: Any, currency: str | None = None) -> str:
        """Format as money: currency code followed by the amount, two decimals."""
        if value is None:
            return self.null_display
        return f"{currency or self.currency_code} {self.as_decimal(value, 2)}"

    def _from_timestamp(self, value: Any, timestamp: int | float) -> datetime:
        try:
            return datetime.fromtimestamp(timestamp, tz=timezone.utc)
        except (ValueError, OverflowError, OSError) as e:
            logger.debug(HelperEvents.FORMAT_FAILED.value, value=repr(value))
            raise InvalidArgumentError("value", value, "Timestamp is out of range") from e

    def _datetime(self, value: Any) -> datetime:
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime.combine(value, time())
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return self._from_timestamp(value, value)

        text = str(value).strip()
        if text.lstrip("-").isascii() and text.lstrip("-").isdigit():
            return self._from_timestamp(value, int(text))
        try:
            return datetime.fromisoformat(text)
        except ValueError as e:
            logger.debug(HelperEvents.FORMAT_FAILED.value, value=repr(value))
            raise InvalidArgumentError("value", value, "Value is not a date") from e

    def as_date(self, value: Any, fmt: str | None = None) -> str:
        if value is None:
            return self.null_display
        return self._datetime(value).strftime(fmt or self.date_format)

    def as_time(self, value: Any, fmt: str | None = None) -> str:
        if value is None:
            return self.null_display
        if isinstance(value, time):
            return value.strftime(fmt or self.time_format)
        return self._datetime(value).strftime(fmt or self.time_format)

    def as_datetime(self, value: Any, fmt: str | None = None) -> str:
        if value is None:
            return self.null_display
        return self._datetime(value).strftime(fmt or self.datetime_format)


def get_formatter() -> Formatter:
    """Get a formatter configured from the current settings."""
    return Formatter.from_settings(get_settings())


__all__ = ["Formatter", "get_formatter"]
