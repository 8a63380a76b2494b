"""
URL helpers.

Query-string codec compatible with the nested "key[sub][]=value" convention
(PHP http_build_query / parse_str), plus URL path, domain name and canonical
URL helpers.

Examples:
    >>> build_query({"a": [1, 2], "f": {"c": "="}, "e": [], "b": ""})
    'a[]=1&a[]=2&f[c]=%3D&e[]&b'
    >>> parse_query("a[]=1&a[]=2&f[c]=%3D")
    {'a': ['1', '2'], 'f': {'c': '='}}
"""

import re
from collections.abc import Mapping, MutableMapping
from decimal import Decimal
from functools import lru_cache
from typing import Any
from urllib.parse import parse_qsl, quote_plus, unquote, unquote_plus, urlsplit, urlunsplit

from .config import get_settings
from .events import HelperEvents
from .exceptions import InvalidArgumentError, InvalidDomainError
from .log_config import get_context_logger
from .types import Query, QueryInput


logger = get_context_logger("url")

ANCHOR = "#"
"""Query key holding the URL fragment."""

_INDEX_KEY_RE = re.compile(r"^(0|[1-9]\d*)\Z", re.ASCII)
_SCHEME_RE = re.compile(r"^(\w+:)?//")
_BASE_NAME_RE = re.compile(r"[ .]")
_WHITESPACE_RE = re.compile(r"\s+")


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, bytes, int, float, Decimal))


def _is_container(value: Any) -> bool:
    if isinstance(value, (Mapping, list, tuple)):
        return True
    return value is not None and not _is_scalar(value) and hasattr(value, "__dict__")


def _items(value: Any) -> list[tuple[Any, Any]]:
    if isinstance(value, Mapping):
        return list(value.items())
    if isinstance(value, (list, tuple)):
        return list(enumerate(value))
    return [(k, v) for k, v in vars(value).items() if not str(k).startswith("_")]


def _stringify(value: Any) -> str:
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if _is_container(value):
        return len(_items(value)) == 0
    return False


def _urlencode(text: str) -> str:
    # "~" is encoded as well, like PHP urlencode()
    return quote_plus(text, safe="").replace("~", "%7E")


def _encode_key(key: str) -> str:
    return key if key == ANCHOR else _urlencode(key)


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def _parse_key(key: str) -> list[str] | None:
    """Split "a[b][]" into ["a", "b", ""]; None for keys without a name."""
    key = key.lstrip(" ")
    bracket = key.find("[")
    if bracket == 0 or key == "":
        return None

    if bracket == -1:
        return [_BASE_NAME_RE.sub("_", key)]

    base = _BASE_NAME_RE.sub("_", key[:bracket])
    if key.find("]", bracket) == -1:
        # unclosed bracket is a part of the plain name
        return [base + "_" + key[bracket + 1 :]]

    path = [base]
    pos = bracket
    while pos < len(key) and key[pos] == "[":
        close = key.find("]", pos)
        if close == -1:
            break
        path.append(key[pos + 1 : close])
        pos = close + 1

    return path


def _next_index(container: dict[str, Any]) -> str:
    indexes = [int(k) for k in container if _INDEX_KEY_RE.match(k)]
    return str(max(indexes) + 1) if indexes else "0"


def _assign(result: dict[str, Any], path: list[str], value: str) -> None:
    target = result
    for depth, segment in enumerate(path):
        if segment == "" and depth > 0:
            segment = _next_index(target)

        if depth == len(path) - 1:
            target[segment] = value
            return

        child = target.get(segment)
        if not isinstance(child, dict):
            child = {}
            target[segment] = child
        target = child


def _listify(value: Any) -> Any:
    if not isinstance(value, dict):
        return value

    converted = {k: _listify(v) for k, v in value.items()}
    if list(converted) == [str(i) for i in range(len(converted))]:
        return list(converted.values())
    return converted


def _parse_query_string(query: str) -> Query:
    result: dict[str, Any] = {}
    for raw_key, value in parse_qsl(query, keep_blank_values=True):
        path = _parse_key(raw_key)
        if path is None:
            continue
        _assign(result, path, value)

    return {k: _listify(v) for k, v in result.items()}


def parse_query(query: QueryInput) -> Query:
    """
    Parse query parameters.

    Args:
        query: Query string ("?a=1&b[]=2"), mapping, sequence or None

    Returns:
        dict: Parameters; nested "[]" lists are returned as lists
    """
    if query is None or (isinstance(query, (str, Mapping, list, tuple)) and len(query) == 0):
        return {}

    if isinstance(query, str):
        query = query.strip(" \t\n\r\0\x0b?")
        return _parse_query_string(query) if query else {}

    if isinstance(query, Mapping):
        return dict(query)

    return dict(_items(query))


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def _filter_params(params: Any) -> dict[Any, Any]:
    """Drop keys with empty names and None values, stringify scalars."""
    filtered: dict[Any, Any] = {}
    for key, value in _items(params):
        if str(key) == "" or value is None:
            continue
        filtered[key] = _filter_params(value) if _is_container(value) else _stringify(value)
    return filtered


def _is_indexed(params: dict[Any, Any]) -> bool:
    if not params:
        return True

    keys = []
    for key in params:
        if isinstance(key, bool):
            return False
        if isinstance(key, int):
            keys.append(key)
        elif isinstance(key, str) and _INDEX_KEY_RE.match(key):
            keys.append(int(key))
        else:
            return False

    return keys == list(range(len(params)))


def _build_parts(query: Any, parent_key: str = "") -> list[str]:
    query = _filter_params(query)
    indexed = parent_key != "" and _is_indexed(query)
    parts: list[str] = []

    for k, v in query.items():
        if parent_key == "":
            key = _encode_key(str(k))
        elif indexed:
            key = f"{parent_key}[]"
        else:
            key = f"{parent_key}[{_encode_key(str(k))}]"

        if isinstance(v, dict):
            if not v:
                parts.append(f"{key}[]")
            else:
                parts.extend(_build_parts(v, key))
        elif v == "":
            parts.append(key)
        else:
            parts.append(f"{key}={_urlencode(v)}")

    return parts


def build_query(query: Any) -> str:
    """
    Build a query string from parameters.

    None values and empty keys are skipped, empty strings are rendered as a
    bare key, empty containers as "key[]" and sequential lists as "key[]=v".

    Args:
        query: Parameters (mapping, sequence, object) or a ready query string

    Returns:
        str: Query string without the leading "?"
    """
    if query is None:
        return ""
    if isinstance(query, str):
        return query
    if _is_empty(query):
        return ""

    return "&".join(_build_parts(query))


def _filter_empty(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        kept = [(i, _filter_empty(v)) for i, v in enumerate(value)]
        kept = [(i, v) for i, v in kept if not _is_empty(v)]
        if len(kept) == len(value):
            return [v for _, v in kept]
        # remaining elements keep their indexes
        return {str(i): v for i, v in kept}

    if _is_container(value):
        result = {}
        for k, v in _items(value):
            v = _filter_empty(v)
            if not _is_empty(v):
                result[k] = v
        return result

    return value


def filter_query(query: QueryInput) -> Query:
    """Parse query and recursively remove None, "" and empty container values."""
    return _filter_empty(parse_query(query))


def _sort_key(key: Any) -> tuple[int, int, str]:
    text = str(key)
    if text == ANCHOR:
        return (2, 0, "")
    if _INDEX_KEY_RE.match(text):
        return (0, int(text), "")
    return (1, 0, text)


def _normalize(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return [_normalize(v) for v in value]
    if _is_container(value):
        items = sorted(_items(value), key=lambda item: _sort_key(item[0]))
        return {k: _normalize(v) for k, v in items}
    return _stringify(value)


def normalize_query(query: QueryInput) -> Query:
    """
    Normalize query parameters.

    Parses strings, sorts keys recursively (the anchor "#" goes last) and
    converts scalar values to strings.
    """
    return _normalize(parse_query(query))


# ---------------------------------------------------------------------------
# Tracking and common parameters
# ---------------------------------------------------------------------------


@lru_cache(maxsize=32)
def _compile(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE)


def _extract(query: MutableMapping, pattern: str) -> dict[Any, Any]:
    regex = _compile(pattern)
    extracted = {k: v for k, v in query.items() if regex.search(str(k))}
    for key in extracted:
        del query[key]
    return extracted


def extract_tracking_params(query: MutableMapping) -> dict[Any, Any]:
    """
    Remove utm-, gclid-, yclid-, fbclid- and roistat- parameters.

    Args:
        query: Parameters, modified in place

    Returns:
        dict: Removed parameters
    """
    return _extract(query, get_settings().tracking_params_pattern)


def remove_tracking_params(query: QueryInput) -> Query:
    """Return a copy of parameters without tracking ones."""
    query = dict(parse_query(query))
    extract_tracking_params(query)
    return query


def extract_common_params(query: MutableMapping) -> dict[Any, Any]:
    """
    Remove parameters which do not identify a page: tracking ones plus
    sort, page and limit.

    Args:
        query: Parameters, modified in place

    Returns:
        dict: Removed parameters
    """
    extracted = extract_tracking_params(query)
    extracted.update(_extract(query, get_settings().common_params_pattern))
    return extracted


def remove_common_params(query: QueryInput) -> Query:
    """Return a copy of parameters without common ones."""
    query = dict(parse_query(query))
    extract_common_params(query)
    return query


# ---------------------------------------------------------------------------
# Flat form and difference
# ---------------------------------------------------------------------------


def flat_query(query: QueryInput) -> list[str]:
    """
    Convert nested parameters to a flat list of components.

    Examples:
        >>> flat_query({"id": 1, "a": [2], "b": {"3": {"4": 5}}})
        ['id=1', 'a[]=2', 'b[3][4]=5']
    """
    if _is_empty(query):
        return []

    query_string = build_query(query)
    return query_string.split("&") if query_string else []


def unflat_query(components: list[str]) -> Query:
    """Restore nested parameters from the flat list of components."""
    if not components:
        return {}
    return parse_query("&".join(components))


def diff_query(query1: QueryInput, query2: QueryInput, no_case: bool = False) -> Query:
    """
    Subtract parameters recursively: query1 - query2.

    Args:
        query1: Minuend parameters
        query2: Subtrahend parameters
        no_case: Compare values case-insensitively

    Returns:
        dict: Parameters of query1 which are absent in query2
    """
    query1 = parse_query(query1)
    if not query1:
        return {}

    query2 = parse_query(query2)
    if not query2:
        return query1

    def component_key(component: str) -> tuple[str, ...] | str:
        if not no_case:
            return component
        return tuple(unquote_plus(part).casefold() for part in component.split("=", 1))

    subtrahend = {component_key(c) for c in flat_query(query2)}
    diff = [c for c in flat_query(query1) if component_key(c) not in subtrahend]

    return unflat_query(diff)


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


def normalize_path(path: str) -> str:
    """
    Normalize URL path.

    Removes empty and "." segments; ".." removes the previous segment of an
    absolute path. Leading and trailing slashes are preserved.

    Examples:
        >>> normalize_path("/catalog//./items/../")
        '/catalog/'
    """
    path = path.strip()
    if path == "":
        return ""

    start_slash = path.startswith("/")
    end_slash = path.endswith("/")

    segments: list[str] = []
    for segment in re.split(r"/+", path):
        if segment in ("", "."):
            continue
        if segment == ".." and start_slash:
            if segments:
                segments.pop()
        else:
            segments.append(segment)

    path = "/".join(segments)
    if start_slash:
        path = "/" + path
    if end_slash and path not in ("", "/"):
        path += "/"

    return path


# ---------------------------------------------------------------------------
# Domains
# ---------------------------------------------------------------------------


def idn_to_ascii(domain: str) -> str:
    """
    Convert domain to ASCII (punycode) form.

    Examples:
        >>> idn_to_ascii("пример.рф")
        'xn--e1afmkfd.xn--p1ai'
    """
    domain = domain.strip()
    if domain == "":
        return ""

    try:
        return domain.encode("idna").decode("ascii")
    except UnicodeError as e:
        logger.debug(HelperEvents.IDN_CONVERSION_FAILED.value, domain=domain, error=str(e))
        raise InvalidDomainError("domain", domain, e) from e


def idn_to_utf8(domain: str) -> str:
    """Convert domain from punycode to Unicode form."""
    domain = domain.strip()
    if domain == "":
        return ""

    try:
        ascii_domain = domain.encode("ascii")
    except UnicodeEncodeError:
        return domain

    try:
        return ascii_domain.decode("idna")
    except UnicodeError as e:
        logger.debug(HelperEvents.IDN_CONVERSION_FAILED.value, domain=domain, error=str(e))
        raise InvalidDomainError("domain", domain, e) from e


def normalize_host(name: str) -> str:
    """
    Normalize domain name: extract it from a URL, convert to lower-case
    Unicode and remove repeated dots.

    Args:
        name: Domain name or URL

    Returns:
        str: Normalized domain or "" for blank input

    Raises:
        InvalidDomainError: If the host can not be extracted

    Examples:
        >>> normalize_host(" HTTPS://Www.Example.COM:8080/path ")
        'www.example.com'
    """
    name = _WHITESPACE_RE.sub("", name)
    if name == "":
        return ""

    source = name
    if not _SCHEME_RE.match(name):
        name = "//" + name

    try:
        host = urlsplit(name).hostname or ""
    except ValueError as e:
        raise InvalidDomainError("name", source, e) from e

    labels = [label for label in host.split(".") if label]
    if not labels:
        raise InvalidDomainError("name", source)

    return idn_to_utf8(".".join(labels)).lower()


def _required_host(argument: str, value: str) -> str:
    host = normalize_host(value)
    if not host:
        raise InvalidArgumentError(argument, value)
    return host


def is_domains_related(dom1: str, dom2: str) -> bool:
    """Check whether domains are equal or one is a subdomain of the other."""
    dom1 = _required_host("dom1", dom1)
    dom2 = _required_host("dom2", dom2)

    if dom1 == dom2:
        return True

    return dom2.endswith("." + dom1) or dom1.endswith("." + dom2)


def get_subdomain(domain: str, parent: str) -> str | None:
    """
    Return the subdomain part of domain relative to parent.

    Examples:
        >>> get_subdomain("test.mail.ru", "mail.ru")
        'test'
        >>> get_subdomain("mail.ru", "mail.ru")
        ''
        >>> get_subdomain("test.mail.ru", "yandex.ru") is None
        True
    """
    domain = _required_host("domain", domain)
    parent = _required_host("parent", parent)

    if domain == parent:
        return ""
    if domain.endswith("." + parent):
        return domain[: -len(parent) - 1]
    return None


def is_subdomain(domain: str, parent: str) -> bool:
    """Check whether domain is a subdomain of parent."""
    return bool(get_subdomain(domain, parent))


# ---------------------------------------------------------------------------
# URLs
# ---------------------------------------------------------------------------


def to(path: str, params: QueryInput = None, scheme: bool = False) -> str:
    """
    Build an application URL.

    Args:
        path: Path ("/catalog") or an absolute URL
        params: Query parameters; the "#" key is used as the fragment
        scheme: Prefix the path with the configured host info

    Returns:
        str: URL

    Examples:
        >>> to("catalog", {"page": 2, "#": "top"})
        '/catalog?page=2#top'
    """
    params = parse_query(params)
    fragment = params.pop(ANCHOR, None)

    if _SCHEME_RE.match(path):
        url = path
    else:
        url = normalize_path(path)
        if not url.startswith("/"):
            url = "/" + url
        if scheme:
            url = get_settings().host_info.rstrip("/") + url

    query_string = build_query(params)
    if query_string:
        url += ("&" if "?" in url else "?") + query_string

    fragment = _stringify(fragment)
    if fragment:
        url += ANCHOR + fragment

    return url


def build_url(base_url: str, params: QueryInput = None) -> str:
    """
    Build URL merging parameters into the query of base_url.

    New parameters override existing ones; a None value removes the
    existing parameter.

    Args:
        base_url: Base URL, may already contain a query
        params: Query parameters to add/merge

    Returns:
        Complete URL with parameters
    """
    if not params:
        return base_url

    parsed = urlsplit(base_url)
    merged_params = {**parse_query(parsed.query), **parse_query(params)}

    return urlunsplit((
        parsed.scheme,
        parsed.netloc,
        parsed.path,
        build_query(merged_params),
        parsed.fragment,
    ))


def canonical_redirect(path: str, params: QueryInput, request_uri: str) -> str | None:
    """
    Check the requested URL against the canonical one.

    Tracking parameters are ignored in comparison and carried over to the
    redirect target.

    Args:
        path: Canonical path of the page
        params: Canonical query parameters
        request_uri: Requested URI (path and query)

    Returns:
        Absolute URL to redirect to, or None if the request is canonical
    """
    params = parse_query(params)
    canonical_params = remove_tracking_params(params)
    canonical_params.pop(ANCHOR, None)
    need_url = to(path, canonical_params)

    request = urlsplit(request_uri)
    current_url = "/" + unquote(request.path).lstrip("/")

    query = parse_query(request.query)
    extra = extract_tracking_params(query)
    if query:
        current_url += "?" + build_query(query)

    if current_url == need_url:
        logger.debug(HelperEvents.REDIRECT_NOT_REQUIRED.value, url=current_url)
        return None

    redirect_url = to(path, {**params, **extra}, scheme=True)
    logger.info(
        HelperEvents.REDIRECT_REQUIRED.value,
        current_url=current_url,
        canonical_url=need_url,
        redirect_url=redirect_url,
    )
    return redirect_url


__all__ = [
    "ANCHOR",
    "parse_query",
    "build_query",
    "filter_query",
    "normalize_query",
    "extract_tracking_params",
    "remove_tracking_params",
    "extract_common_params",
    "remove_common_params",
    "flat_query",
    "unflat_query",
    "diff_query",
    "normalize_path",
    "idn_to_ascii",
    "idn_to_utf8",
    "normalize_host",
    "is_domains_related",
    "get_subdomain",
    "is_subdomain",
    "to",
    "build_url",
    "canonical_redirect",
]
