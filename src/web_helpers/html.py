"""
HTML helpers.

Escaping, text extraction and tag rendering. Tag options are plain dicts of
attributes: None and False values are skipped, True renders a bare attribute,
"class" accepts a list and "data"/"aria" accept a dict of sub-attributes.

Examples:
    >>> tag("a", "Home", {"href": "/", "class": ["nav", "active"]})
    '<a class="nav active" href="/">Home</a>'
    >>> tag("br")
    '<br>'
"""

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from html import escape, unescape
from typing import Any

import bleach

from . import url as url_helper


# HTML5 elements without closing tag
VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "command", "embed", "hr", "img", "input",
    "keygen", "link", "meta", "param", "source", "track", "wbr",
})

# Attributes rendered first, in this order
ATTRIBUTE_ORDER = (
    "type", "id", "class", "name", "value", "href", "src", "srcset", "form",
    "action", "method", "selected", "checked", "readonly", "disabled",
    "multiple", "size", "maxlength", "width", "height", "rows", "cols", "alt",
    "title", "rel", "media",
)

DATA_ATTRIBUTES = ("data", "aria")

# Control characters except whitespace
_CONTROL_RE = re.compile(r"[\x00-\x08\x0e-\x1f\x7f-\x9f]+")
_BLOCK_END_RE = re.compile(r"</(div|h\d|p|li)>", re.IGNORECASE)
_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_HSPACE_RE = re.compile(r"[^\S\r\n\v\f]+")
_VSPACE_RE = re.compile(r"[\r\n\v\f]+")
_NOT_DIGIT_RE = re.compile(r"\D+")


# ---------------------------------------------------------------------------
# Escaping
# ---------------------------------------------------------------------------


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def encode(text: Any) -> str:
    """Encode HTML special characters, including both quotes."""
    return escape(_text(text), quote=True).replace("&#x27;", "&#039;")


def esc(text: Any) -> str:
    """Encode HTML special characters and replace control characters with spaces."""
    text = _text(text)
    if text == "":
        return ""
    return _CONTROL_RE.sub(" ", encode(text))


def decode(content: Any) -> str:
    """Decode HTML entities (twice, to undo double encoding)."""
    return unescape(unescape(_text(content)))


def to_text(content: Any) -> str:
    """
    Convert HTML to plain text.

    Block elements and <br> become line breaks, tags are stripped and
    whitespace is collapsed.

    Examples:
        >>> to_text("<p>Hello&nbsp;<b>world</b></p><p>Bye<br/>all</p>")
        'Hello world\\nBye\\nall'
    """
    text = decode(content)
    if text == "":
        return ""

    text = _CONTROL_RE.sub(" ", text)
    text = _BLOCK_END_RE.sub("\\g<0>\n", text)
    text = _BR_RE.sub("\n", text)
    text = unescape(bleach.clean(text, tags=set(), strip=True))
    text = _HSPACE_RE.sub(" ", text)
    text = _VSPACE_RE.sub("\n", text)

    return text.strip()


def has_text(content: Any) -> bool:
    """Check whether HTML contains any text."""
    return to_text(content) != ""


# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


def _attribute(name: str, value: Any) -> str:
    if value is True:
        return f" {name}"
    if isinstance(value, (Mapping, list, tuple)):
        value = json.dumps(value, ensure_ascii=False)
    return f' {name}="{encode(value)}"'


def render_tag_attributes(options: Mapping[str, Any] | None) -> str:
    """
    Render tag attributes.

    Examples:
        >>> render_tag_attributes({"data": {"id": 1}, "class": ["a", "b"], "hidden": True})
        ' class="a b" data-id="1" hidden'
    """
    if not options:
        return ""

    ordered = {name: options[name] for name in ATTRIBUTE_ORDER if name in options}
    ordered.update({k: v for k, v in options.items() if k not in ordered})

    result = []
    for name, value in ordered.items():
        if value is None or value is False:
            continue

        if name in DATA_ATTRIBUTES and isinstance(value, Mapping):
            for sub_name, sub_value in value.items():
                if sub_value is None or sub_value is False:
                    continue
                result.append(_attribute(f"{name}-{sub_name}", sub_value))
        elif name == "class" and isinstance(value, (list, tuple)):
            if value:
                result.append(_attribute(name, " ".join(str(v) for v in value)))
        elif name == "style" and isinstance(value, Mapping):
            style = " ".join(f"{k}: {v};" for k, v in value.items())
            if style:
                result.append(_attribute(name, style))
        else:
            result.append(_attribute(name, value))

    return "".join(result)


def add_css_class(options: dict[str, Any], classes: str | list[str]) -> dict[str, Any]:
    """Add CSS classes to options (modified in place) avoiding duplicates."""
    if isinstance(classes, str):
        classes = classes.split()

    existing = options.get("class") or []
    if isinstance(existing, str):
        existing = existing.split()

    merged = list(existing)
    merged.extend(c for c in classes if c not in merged)
    options["class"] = " ".join(merged)

    return options


def tag(name: str, content: Any = "", options: Mapping[str, Any] | None = None) -> str:
    """Render an HTML tag; content is not encoded."""
    html = f"<{name}{render_tag_attributes(options)}>"
    if name.lower() in VOID_ELEMENTS:
        return html
    return f"{html}{_text(content)}</{name}>"


def a(text: Any, url: str | None = None, options: Mapping[str, Any] | None = None) -> str:
    options = dict(options or {})
    if url is not None:
        options["href"] = url
    return tag("a", text, options)


def div(content: Any, options: Mapping[str, Any] | None = None) -> str:
    return tag("div", content, options)


def meta(options: Mapping[str, Any]) -> str:
    return tag("meta", "", options)


def metas(type_: str, values: Mapping[str, Any]) -> str:
    """
    Render meta tags of one type.

    Examples:
        >>> metas("name", {"robots": "noindex"})
        '<meta name="robots" content="noindex">'
    """
    return "".join(meta({type_: key, "content": value}) for key, value in values.items())


def link(options: Mapping[str, Any]) -> str:
    return tag("link", "", options)


def links(values: Mapping[str, str]) -> str:
    """Render link tags from a rel => href mapping."""
    return "".join(link({"rel": rel, "href": href}) for rel, href in values.items())


def script(content: Any = "", options: Mapping[str, Any] | None = None) -> str:
    return tag("script", content, options)


def css_file(href: str, options: Mapping[str, Any] | None = None) -> str:
    return link({"rel": "stylesheet", "href": href, **(options or {})})


def js_file(src: str, options: Mapping[str, Any] | None = None) -> str:
    return script("", {"src": src, **(options or {})})


def _json(data: Any) -> str:
    # "</" would close the script element
    return json.dumps(data, ensure_ascii=False, separators=(",", ":")).replace("</", "<\\/")


def schema(data: Mapping[str, Any]) -> str:
    """
    Render schema.org LD+JSON script.

    Top-level None, "" and empty container values are dropped.

    Returns:
        str: Script tag or "" if no data remains
    """
    data = {
        k: v for k, v in data.items()
        if v is not None and v != "" and not (isinstance(v, (Mapping, list, tuple)) and not v)
    }
    if not data:
        return ""
    return script(_json(data), {"type": "application/ld+json"})


def flag(value: Any, options: Mapping[str, Any] | None = None) -> str:
    """Render a FontAwesome star: solid for truthy values, regular otherwise."""
    options = add_css_class(dict(options or {}), ["fas" if value else "far", "fa-star"])
    return tag("i", "", options)


def fa(name: str, options: Mapping[str, Any] | None = None) -> str:
    return tag("i", "", add_css_class(dict(options or {}), f"fa fa-{name}"))


def fas(name: str, options: Mapping[str, Any] | None = None) -> str:
    return tag("i", "", add_css_class(dict(options or {}), f"fas fa-{name}"))


def far(name: str, options: Mapping[str, Any] | None = None) -> str:
    return tag("i", "", add_css_class(dict(options or {}), f"far fa-{name}"))


def plugin(target: str, name: str, client_options: Mapping[str, Any] | None = None) -> str:
    """Render a jQuery plugin initialization script."""
    return script(
        f'$(function() {{ $("{target}").{name}({_json(dict(client_options or {}))}); }});'
    )


def xml(name: str, content: Any = "", options: Mapping[str, Any] | None = None) -> str:
    """Render an XML element, self-closing when content is empty."""
    content = _text(content)
    start = f"<{name}{render_tag_attributes(options)}"
    if content == "":
        return start + "/>"
    return f"{start}>{content}</{name}>"


def tel(text: str, phone: str | None = None, options: Mapping[str, Any] | None = None) -> str:
    """
    Render a phone link.

    Examples:
        >>> tel("+7 (495) 123-45-67")
        '<a href="tel:74951234567">+7 (495) 123-45-67</a>'
    """
    return a(esc(text), "tel:" + _NOT_DIGIT_RE.sub("", phone or text), options)


def mailto(text: str, email: str | None = None, options: Mapping[str, Any] | None = None) -> str:
    return a(esc(text), "mailto:" + (email or text), options)


# ---------------------------------------------------------------------------
# Page head
# ---------------------------------------------------------------------------


@dataclass
class PageMeta:
    """
    Data for the page head.

    Attributes:
        title: Page title
        description: Meta description
        robots: Meta robots
        canonical: Canonical path or URL; None derives it from route and
            params, False disables the canonical link
        image: Image for OpenGraph
        route: Route (path) of the page
        params: Query parameters of the request
        url: Absolute URL of the request
        locale: OpenGraph locale
    """

    title: str = ""
    description: str = ""
    robots: str = ""
    canonical: str | bool | None = None
    image: str | None = None
    route: str = ""
    params: dict[str, Any] = field(default_factory=dict)
    url: str = ""
    locale: str = "ru_RU"


def request_meta(route: str = "", params: Any = None) -> str:
    """Render route and normalized parameters of the request as meta tags."""
    query = url_helper.build_query(url_helper.normalize_query(url_helper.filter_query(params)))
    return meta({"property": "route", "content": route}) + meta({"property": "params", "content": query})


def canonical(path: str | bool | None, params: Any = None) -> str:
    """
    Render the canonical link.

    Parameters which do not identify the page (tracking, sort, page,
    limit) are removed.

    Args:
        path: Path or URL; None/False render nothing
        params: Query parameters

    Returns:
        str: Link tag
    """
    if path is None or isinstance(path, bool):
        return ""

    query = url_helper.normalize_query(url_helper.filter_query(url_helper.remove_common_params(params)))
    return link({"rel": "canonical", "href": url_helper.to(path, query, scheme=True)})


def og(page: PageMeta) -> str:
    """Render OpenGraph meta tags."""
    tags = [
        meta({"property": "og:locale", "content": page.locale}),
        meta({"property": "og:type", "content": "website"}),
        meta({"property": "og:title", "content": page.title}),
    ]

    if page.image:
        tags.append(meta({"property": "og:image", "content": url_helper.to(page.image, scheme=True)}))

    if isinstance(page.canonical, str) and page.canonical:
        page_url = url_helper.to(page.canonical, scheme=True)
    else:
        page_url = page.url
    tags.append(meta({"property": "og:url", "content": page_url}))

    return "".join(tags)


def html_view_head(page: PageMeta) -> str:
    """Render title, meta, canonical and OpenGraph tags of the page head."""
    if page.canonical is None:
        canonical_link = canonical(page.route or "/", page.params)
    else:
        canonical_link = canonical(page.canonical)

    return "".join([
        tag("title", esc(page.title)),
        meta({"name": "description", "content": page.description}),
        meta({"name": "robots", "content": page.robots}),
        request_meta(page.route, page.params),
        canonical_link,
        og(page),
    ])


__all__ = [
    "VOID_ELEMENTS",
    "PageMeta",
    "encode",
    "esc",
    "decode",
    "to_text",
    "has_text",
    "render_tag_attributes",
    "add_css_class",
    "tag",
    "a",
    "div",
    "meta",
    "metas",
    "link",
    "links",
    "script",
    "css_file",
    "js_file",
    "schema",
    "flag",
    "fa",
    "fas",
    "far",
    "plugin",
    "xml",
    "tel",
    "mailto",
    "request_meta",
    "canonical",
    "og",
    "html_view_head",
]
