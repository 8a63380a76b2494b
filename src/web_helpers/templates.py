"""
Template engine for variable substitution in text.

Placeholders look like ``${path}`` where path is a list of keys separated by
"|". Every key is either a lookup in the current value (mapping key, sequence
index or object attribute) or the name of a filter applied to it:

    ${prod|name|esc}         -> vars["prod"]["name"] HTML-escaped
    ${obj|price|asCurrency}  -> vars["obj"].price formatted as money

Text may be split into optional blocks ``[[...]]`` which are removed as a
whole when they contain unresolved placeholders.
"""

import re
from collections.abc import Callable, Mapping
from datetime import date, time
from decimal import Decimal
from typing import Any

from . import html, strings
from .events import HelperEvents
from .exceptions import InvalidArgumentError
from .formatter import get_formatter
from .log_config import get_context_logger


logger = get_context_logger("templates")


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float, Decimal, date, time))


def _is_index(key: str) -> bool:
    return key.isascii() and key.isdigit()


def _stringify(value: Any) -> str:
    if value is True:
        return "1"
    if value is False:
        return ""
    return str(value)


class TemplateEngine:
    """Template engine for ${var|path|filter} substitution."""

    # Pattern: ${path} where path is "key|key|filter"
    VARIABLE_PATTERN = re.compile(r"\$\{([^}]*)\}")
    BLOCK_PATTERN = re.compile(r"\[\[(.*?)\]\]", re.DOTALL)

    # Whitespace except line breaks
    HSPACE_PATTERN = re.compile(r"[^\S\r\n\v\f]+")
    SPACE_BEFORE_PUNCT_PATTERN = re.compile(r"\s+([,;.!?])")
    SPACE_BEFORE_BREAK_PATTERN = re.compile(r"[^\S\r\n\v\f]+([\r\n\v\f])")

    FILTERS: dict[str, Callable[[Any], str]] = {
        "trim": lambda value: str(value).strip(),
        "esc": lambda value: html.esc(str(value)),
        "lower": lambda value: str(value).lower(),
        "upper": lambda value: str(value).upper(),
        "ucfirst": lambda value: strings.ucfirst(str(value)),
        "lcfirst": lambda value: strings.lcfirst(str(value)),
        "asInteger": lambda value: get_formatter().as_integer(value),
        "asCurrency": lambda value: get_formatter().as_currency(value),
        "asDate": lambda value: get_formatter().as_date(value),
        "asTime": lambda value: get_formatter().as_time(value),
        "asDatetime": lambda value: get_formatter().as_datetime(value),
    }

    @classmethod
    def _lookup(cls, value: Any, key: str) -> Any:
        if isinstance(value, Mapping):
            found = value.get(key)
            if found is None and _is_index(key):
                found = value.get(int(key))
            return found

        if isinstance(value, (list, tuple)):
            if _is_index(key) and int(key) < len(value):
                return value[int(key)]
            return None

        if value is None or _is_scalar(value) or key.startswith("_"):
            return None

        return getattr(value, key, None)

    @classmethod
    def _apply_filter(cls, name: str, value: Any) -> Any:
        if not _is_scalar(value):
            return None
        try:
            return cls.FILTERS[name](value)
        except InvalidArgumentError as e:
            logger.debug(HelperEvents.TEMPLATE_UNRESOLVED.value, filter=name, error=e.message)
            return None

    @classmethod
    def var_value(cls, variables: Any, path: str) -> str | None:
        """
        Resolve a placeholder path against variables.

        Args:
            variables: Mapping, sequence or object with values
            path: Keys and filters separated by "|" (e.g. "prod|name|esc")

        Returns:
            Stringified scalar value, or None when it can not be resolved

        Examples:
            >>> TemplateEngine.var_value({"prod": {"name": "<Tea>"}}, "prod|name|esc")
            '&lt;Tea&gt;'
            >>> TemplateEngine.var_value({"prod": {"name": "Tea"}}, "prod") is None
            True
        """
        if path == "" or not variables:
            return None

        value = variables
        for key in path.split("|"):
            if key in cls.FILTERS:
                value = cls._apply_filter(key, value)
            else:
                value = cls._lookup(value, key)
            if value is None:
                return None

        if not _is_scalar(value):
            return None

        return _stringify(value)

    @classmethod
    def replace_block_vars(
        cls,
        text: str,
        variables: Any = None,
        clean_text: bool = False,
        clean_vars: bool = False,
    ) -> str:
        """
        Substitute placeholders in a single block of text.

        Args:
            text: Text with ${...} placeholders
            variables: Values for substitution
            clean_text: Return "" if any placeholder stays unresolved
            clean_vars: Remove unresolved placeholders

        Returns:
            Text with placeholders substituted and spacing cleaned up
        """
        if text == "" or (not variables and not clean_text and not clean_vars):
            return text

        def replacer(match: re.Match) -> str:
            value = cls.var_value(variables, match.group(1))
            if value is None:
                logger.debug(HelperEvents.TEMPLATE_UNRESOLVED.value, placeholder=match.group(0))
                return match.group(0)
            return value

        text = cls.VARIABLE_PATTERN.sub(replacer, text)

        if clean_text and cls.VARIABLE_PATTERN.search(text):
            logger.debug(HelperEvents.TEMPLATE_BLOCK_CLEANED.value, block=text)
            return ""

        if clean_vars:
            text = cls.VARIABLE_PATTERN.sub("", text)

        text = cls.HSPACE_PATTERN.sub(" ", text)
        text = cls.SPACE_BEFORE_PUNCT_PATTERN.sub(r"\1", text)
        return cls.SPACE_BEFORE_BREAK_PATTERN.sub(r"\1", text)

    @classmethod
    def replace_vars(
        cls,
        text: str | None,
        variables: Any = None,
        clean_text: bool = False,
        clean_vars: bool = False,
    ) -> str:
        """
        Substitute placeholders in text made of [[blocks]].

        Text without block markup is processed as a single block.

        Examples:
            >>> TemplateEngine.replace_vars("Buy [[${color} ]]tea[[ for ${price}]]", {"color": "green"}, clean_text=True)
            'Buy green tea'
        """
        text = "" if text is None else str(text)
        if text == "" or (not variables and not clean_text and not clean_vars):
            return text

        if not cls.BLOCK_PATTERN.search(text):
            text = f"[[{text}]]"

        text = cls.BLOCK_PATTERN.sub(
            lambda match: cls.replace_block_vars(match.group(1), variables, clean_text, clean_vars),
            text,
        )

        return cls.HSPACE_PATTERN.sub(" ", text)


__all__ = ["TemplateEngine"]
