"""
Web Helpers Package

Helpers for server-side rendered web sites: query-string codec, URL and
domain names, HTML tags, Russian inflection, text templates and small data
utilities.

This package provides:
- url: nested query strings, canonical URLs, domain names
- html: escaping, text extraction, tags and page head
- inflector: slugs, word forms for counts, terms and schedules
- templates: ${var|path|filter} substitution
- path_info: file path model

Usage:
    from web_helpers import bootstrap, url, inflector

    bootstrap()
    url.build_query({"a": [1, 2], "b": {"c": "="}})   # 'a[]=1&a[]=2&b[c]=%3D'
    inflector.num_prods(21)                            # 'товар'
"""

from . import arrays, data_filter, debug, html, inflector, path_info, strings, url
from .bootstrap import bootstrap
from .config import Settings, get_settings, reload_settings
from .exceptions import HelperConfigError, HelperException, InvalidArgumentError, InvalidDomainError
from .formatter import Formatter, get_formatter
from .html import PageMeta
from .i18n import get_language, reset_language, set_language, t
from .path_info import PathInfo
from .templates import TemplateEngine

__version__ = "1.0.0"

__all__ = [
    # Modules
    "arrays",
    "data_filter",
    "debug",
    "html",
    "inflector",
    "path_info",
    "strings",
    "url",
    # Setup
    "bootstrap",
    "Settings",
    "get_settings",
    "reload_settings",
    # Classes
    "Formatter",
    "get_formatter",
    "PageMeta",
    "PathInfo",
    "TemplateEngine",
    # i18n
    "t",
    "get_language",
    "set_language",
    "reset_language",
    # Exceptions
    "HelperException",
    "InvalidArgumentError",
    "InvalidDomainError",
    "HelperConfigError",
]
