"""
Russian inflection helpers.

Transliterated slugs, plural word forms for counts, human readable terms and
weekly schedules. Words are produced in Russian and passed through i18n.t(),
so the active language decides the output.
"""

import calendar
import re
from collections.abc import Iterable, Mapping
from datetime import date, timedelta
from typing import Any

from .exceptions import InvalidArgumentError
from .i18n import t
from .templates import TemplateEngine
from .types import Schedule, WorkTime


# Yandex transliteration table
LETTERS: dict[str, str] = {
    "а": "a", "б": "b", "в": "v", "г": "g", "д": "d", "е": "e", "ё": "e", "ж": "zh", "з": "z",
    "и": "i", "й": "y", "к": "k", "л": "l", "м": "m", "н": "n", "о": "o", "п": "p", "р": "r",
    "с": "s", "т": "t", "у": "u", "ф": "f", "х": "h", "ц": "ts", "ч": "ch", "ш": "sh",
    "щ": "sch", "ъ": "", "ы": "y", "ь": "", "э": "e", "ю": "yu", "я": "ya",
}

# 0 - Monday
WEEKDAYS: tuple[str, ...] = ("Пн", "Вт", "Ср", "Чт", "Пт", "Сб", "Вс")

MONTH_SHORT: tuple[str, ...] = (
    "янв", "фев", "мар", "апр", "май", "июн", "июль", "авг", "сен", "окт", "ноя", "дек",
)

# Capitalized so "Май" does not clash with the short "май" in catalogs
MONTH_LONG: tuple[str, ...] = (
    "Январь", "Февраль", "Март", "Апрель", "Май", "Июнь", "Июль", "Август", "Сентябрь",
    "Октябрь", "Ноябрь", "Декабрь",
)

MONTH_GENITIVE: tuple[str, ...] = (
    "января", "февраля", "марта", "апреля", "мая", "июня", "июля", "августа", "сентября",
    "октября", "ноября", "декабря",
)

_SPACES_RE = re.compile(r"[\x00-\x1f\x7f-\xa0\s]+")
_NOT_ALLOWED_RE = re.compile(r"[^A-Za-z0-9\-_.~]+")
_DASHES_RE = re.compile(r"-{2,}")


def transliterate(text: str) -> str:
    """Replace lower-case Cyrillic letters with Latin ones."""
    return "".join(LETTERS.get(char, char) for char in text)


def slug(text: Any, replacement: str = "-", lowercase: bool = True) -> str:
    """
    Create a URL slug.

    Args:
        text: Source text
        replacement: Separator between words
        lowercase: Convert to lower case

    Returns:
        str: Slug

    Examples:
        >>> slug("  Чайник Tefal + подставка @ дом ")
        'chaynik-tefal-plus-podstavka-at-dom'
    """
    text = _SPACES_RE.sub(" ", str(text)).strip()
    if text == "":
        return ""

    if lowercase:
        text = text.lower()

    text = transliterate(text)
    text = text.replace("+", "plus").replace("@", "at")
    text = _NOT_ALLOWED_RE.sub("-", text)
    text = _DASHES_RE.sub("-", text).strip("-")

    if replacement != "-":
        text = text.replace("-", replacement)

    return text


def num_declension(count: int | str, one: str, two: str, five: str) -> str:
    """
    Choose the word form for a count.

    Args:
        count: Number of items, e.g. 123 or "123"
        one: Form for 1, e.g. "товар"
        two: Form for 2, e.g. "товара"
        five: Form for 5, e.g. "товаров"

    Returns:
        str: Form matching the count

    Examples:
        >>> num_declension(21, "товар", "товара", "товаров")
        'товар'
        >>> num_declension(112, "товар", "товара", "товаров")
        'товаров'
    """
    try:
        count = abs(int(str(count).strip()))
    except ValueError as e:
        raise InvalidArgumentError("count", count) from e

    if 11 <= count % 100 <= 14:
        return five

    mod = count % 10
    if mod == 1:
        return one
    if mod in (2, 3, 4):
        return two
    return five


def num_prods(count: int | str) -> str:
    return num_declension(count, t("товар"), t("товара"), t("товаров"))


def num_models(count: int | str) -> str:
    return num_declension(count, t("модель"), t("модели"), t("моделей"))


def num_reviews(count: int | str) -> str:
    return num_declension(count, t("отзыв"), t("отзыва"), t("отзывов"))


def num_shops(count: int | str) -> str:
    return num_declension(count, t("магазин"), t("магазина"), t("магазинов"))


def num_minutes(count: int | str) -> str:
    return num_declension(count, t("минута"), t("минуты"), t("минут"))


def num_hours(count: int | str) -> str:
    return num_declension(count, t("час"), t("часа"), t("часов"))


def num_days(count: int | str) -> str:
    return num_declension(count, t("день"), t("дня"), t("дней"))


def num_weeks(count: int | str) -> str:
    return num_declension(count, t("неделя"), t("недели"), t("недель"))


def num_months(count: int | str) -> str:
    return num_declension(count, t("месяц"), t("месяца"), t("месяцев"))


def num_years(count: int | str) -> str:
    return num_declension(count, t("год"), t("года"), t("лет"))


def days_term(days: int, today: date | None = None) -> str:
    """
    Format a term in days.

    Args:
        days: Number of days (0 - today, 1 - tomorrow)
        today: Reference date, the current date by default

    Returns:
        str: Text like "завтра", "через 5 дней" or "12 марта"

    Raises:
        InvalidArgumentError: If days is negative
    """
    if days < 0:
        raise InvalidArgumentError("days", days)

    if days == 0:
        return t("сегодня")

    if days == 1:
        return t("завтра")

    if days == 2:
        return t("послезавтра")

    if days == 7:
        return f"{t('через')} {t('неделю')}"

    if days in (14, 21):
        return f"{t('через')} {days // 7} {t('недели')}"

    today = today or date.today()

    if days == calendar.monthrange(today.year, today.month)[1]:
        return f"{t('через')} {t('месяц')}"

    if days == 61:
        return f"{t('через')} 2 {t('месяца')}"

    if days <= 30:
        return f"{t('через')} {days} {num_days(days)}"

    target = today + timedelta(days=days)
    return f"{target.day} {t(MONTH_GENITIVE[target.month - 1])}"


def _day_range(start: int, end: int) -> str:
    group = t(WEEKDAYS[start])
    if end > start:
        group += "-" + t(WEEKDAYS[end])
    return group


def group_days(days: Iterable[int]) -> list[str]:
    """
    Group weekdays into ranges.

    Examples:
        >>> group_days([0, 1, 2, 4, 6])
        ['Пн-Ср', 'Пт', 'Вс']
    """
    groups: list[str] = []
    start: int | None = None
    end: int | None = None

    for day in days:
        if end is None or day != end + 1:
            if start is not None:
                groups.append(_day_range(start, end))
            start = day
        end = day

    if start is not None:
        groups.append(_day_range(start, end))

    return groups


def _work_time(schedule: Schedule, day: int) -> WorkTime:
    if isinstance(schedule, Mapping):
        return schedule.get(day, schedule.get(str(day)))
    return schedule[day] if day < len(schedule) else None


def short_schedule(schedule: Schedule | None) -> dict[str, str]:
    """
    Convert a weekly schedule to the short form.

    Args:
        schedule: Work time per weekday, e.g.
            {0: ("09:00", "18:00"), ..., 5: ("11:00", "16:00"), 6: None}

    Returns:
        dict: Grouped days, e.g.
            {"Пн-Пт": "09:00 - 18:00", "Сб": "11:00 - 16:00", "Вс": "выходной"}
    """
    if not schedule:
        return {}

    workdays: dict[str, list[int]] = {}
    holidays: list[int] = []

    for day in range(7):
        work_time = _work_time(schedule, day)
        if not work_time:
            holidays.append(day)
            continue
        workdays.setdefault(f"{work_time[0]} - {work_time[1]}", []).append(day)

    result: dict[str, str] = {}
    for work_time, days in workdays.items():
        result[",".join(group_days(days))] = work_time

    if holidays:
        result[",".join(group_days(holidays))] = t("выходной")

    return result


def var_value(variables: Any, path: str) -> str | None:
    """Resolve a "key|key|filter" path (see TemplateEngine.var_value)."""
    return TemplateEngine.var_value(variables, path)


def replace_block_vars(
    text: str, variables: Any = None, clean_text: bool = False, clean_vars: bool = False
) -> str:
    """Substitute ${...} placeholders in a block (see TemplateEngine.replace_block_vars)."""
    return TemplateEngine.replace_block_vars(text, variables, clean_text, clean_vars)


def replace_vars(
    text: str | None, variables: Any = None, clean_text: bool = False, clean_vars: bool = False
) -> str:
    """Substitute ${...} placeholders in [[blocks]] of text (see TemplateEngine.replace_vars)."""
    return TemplateEngine.replace_vars(text, variables, clean_text, clean_vars)


__all__ = [
    "LETTERS",
    "WEEKDAYS",
    "MONTH_SHORT",
    "MONTH_LONG",
    "MONTH_GENITIVE",
    "transliterate",
    "slug",
    "num_declension",
    "num_prods",
    "num_models",
    "num_reviews",
    "num_shops",
    "num_minutes",
    "num_hours",
    "num_days",
    "num_weeks",
    "num_months",
    "num_years",
    "days_term",
    "group_days",
    "short_schedule",
    "var_value",
    "replace_block_vars",
    "replace_vars",
]
