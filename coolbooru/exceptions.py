"""Exception hierarchy for Coolbooru.

All errors raised by the library derive from CoolbooruError so callers can
catch a single type. Nothing here is caught or retried internally.
"""
from __future__ import annotations

from typing import Optional


class CoolbooruError(Exception):
    """Base error for the Coolbooru client."""


class InvalidArgumentError(CoolbooruError, ValueError):
    """A query object was given a value it does not accept."""


class NetworkError(CoolbooruError):
    """Connection, DNS or timeout failure while talking to the API."""


class HTTPStatusError(NetworkError):
    """The API answered with a non-success HTTP status."""

    def __init__(self, status_code: int, url: str, reason: Optional[str] = None):
        self.status_code = status_code
        self.url = url
        self.reason = reason
        msg = f"HTTP {status_code} for {url}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class ParseError(CoolbooruError):
    """The response body is not valid JSON or does not match the expected shape."""
