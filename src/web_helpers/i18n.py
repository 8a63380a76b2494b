"""Message translation for helper output.

Messages are written in the source language (Russian) and looked up in the
catalog of the active language. The active language lives in a ContextVar so
request handlers can switch it without touching global settings.
"""

import contextvars

from .config import get_settings


SOURCE_LANGUAGE = "ru"

_language_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "helpers_language", default=None
)


MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        # Word forms for counts
        "товар": "product",
        "товара": "products",
        "товаров": "products",
        "модель": "model",
        "модели": "models",
        "моделей": "models",
        "отзыв": "review",
        "отзыва": "reviews",
        "отзывов": "reviews",
        "магазин": "shop",
        "магазина": "shops",
        "магазинов": "shops",
        "минута": "minute",
        "минуты": "minutes",
        "минут": "minutes",
        "час": "hour",
        "часа": "hours",
        "часов": "hours",
        "день": "day",
        "дня": "days",
        "дней": "days",
        "неделя": "week",
        "недели": "weeks",
        "недель": "weeks",
        "месяц": "month",
        "месяца": "months",
        "месяцев": "months",
        "год": "year",
        "года": "years",
        "лет": "years",
        # Terms
        "сегодня": "today",
        "завтра": "tomorrow",
        "послезавтра": "the day after tomorrow",
        "через": "in",
        "неделю": "a week",
        "выходной": "day off",
        # Weekdays
        "Пн": "Mon",
        "Вт": "Tue",
        "Ср": "Wed",
        "Чт": "Thu",
        "Пт": "Fri",
        "Сб": "Sat",
        "Вс": "Sun",
        # Months, genitive
        "января": "January",
        "февраля": "February",
        "марта": "March",
        "апреля": "April",
        "мая": "May",
        "июня": "June",
        "июля": "July",
        "августа": "August",
        "сентября": "September",
        "октября": "October",
        "ноября": "November",
        "декабря": "December",
    },
}


def get_language() -> str:
    """Return the active language (context override or settings default)."""
    return _language_var.get() or get_settings().language


def set_language(language: str) -> contextvars.Token:
    """Set the active language for the current context.

    Returns:
        Token to pass to reset_language()
    """
    return _language_var.set(language)


def reset_language(token: contextvars.Token | None = None) -> None:
    """Restore the previous language (or drop the override entirely)."""
    if token is not None:
        _language_var.reset(token)
    else:
        _language_var.set(None)


def t(message: str, language: str | None = None) -> str:
    """Translate a source-language message.

    Args:
        message: Message in the source language
        language: Target language, the active one by default

    Returns:
        Translated message, or the message itself when no translation exists
    """
    language = language or get_language()
    if language == SOURCE_LANGUAGE:
        return message

    catalog = MESSAGES.get(language) or MESSAGES.get(language.split("-")[0], {})
    return catalog.get(message, message)


__all__ = [
    "SOURCE_LANGUAGE",
    "MESSAGES",
    "get_language",
    "set_language",
    "reset_language",
    "t",
]
