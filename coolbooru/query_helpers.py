"""Query string escaping utilities for Coolbooru.

Provides the percent-escaping used for free-text query parameters and for
URLs passed as a parameter value.
"""
from __future__ import annotations

from urllib.parse import quote, unquote


def escape_query_value(value: str | None) -> str:
    """Percent-escape a free-text value for use as a query parameter.

    - Escapes every reserved character, including '/', '&', '=' and ','.
    - Spaces become %20 (never "+"); the "*" wildcard is left as is.

    Args:
        value: Input string to escape

    Returns:
        Escaped string; unescape_query_value() restores the input exactly
    """
    if value is None:
        return ""

    return quote(str(value), safe="*")


def unescape_query_value(value: str | None) -> str:
    """Reverse escape_query_value()."""
    if value is None:
        return ""

    return unquote(str(value))


def escape_url_param(url: str | None) -> str:
    """Escape a URL for inclusion as the value of a query parameter.

    Scheme and path separators are kept readable; '?', '&', '=' and
    whitespace are escaped so the embedded URL stays a single parameter.

    Args:
        url: URL to escape

    Returns:
        Escaped URL
    """
    if url is None:
        return ""

    return quote(str(url).strip(), safe=":/")
