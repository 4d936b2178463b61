"""Network utilities for HTTP requests against the Derpibooru API.

Provides session construction with the client's identifying headers and a
single-shot JSON GET. There is no retry, caching or rate limiting: every
failure propagates to the caller as a CoolbooruError subclass.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

import requests

from ..exceptions import HTTPStatusError, NetworkError, ParseError
from .config import DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)


def build_session(user_agent: Optional[str] = None) -> requests.Session:
    """Build a requests session with default headers.

    Args:
        user_agent: User-Agent header value (defaults to "Coolbooru")

    Returns:
        Configured Session instance
    """
    session = requests.Session()
    session.headers.update({
        "User-Agent": user_agent or DEFAULT_USER_AGENT,
        "Accept": "application/json",
    })
    return session


def _get(session: requests.Session, url: str, timeout: Optional[float]) -> requests.Response:
    try:
        return session.get(url, timeout=timeout)
    except requests.exceptions.Timeout as e:
        logger.warning("Request timed out: %s", url)
        raise NetworkError(f"Request timed out: {url}") from e
    except requests.exceptions.RequestException as e:
        logger.warning("Request failed for %s: %s", url, e)
        raise NetworkError(f"Request failed for {url}: {e}") from e


def fetch_json(
    url: str,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
    user_agent: Optional[str] = None,
) -> Any:
    """HTTP GET a URL and decode the body as JSON.

    Without a caller-supplied session a fresh one is built for this call and
    closed afterwards, so concurrent calls share nothing.

    Args:
        url: Fully qualified URL
        session: Optional session to reuse (left open)
        timeout: Timeout in seconds, None to wait indefinitely
        user_agent: User-Agent for a freshly built session

    Returns:
        Decoded JSON value (dict or list)

    Raises:
        NetworkError: Connection, DNS or timeout failure
        HTTPStatusError: Non-2xx response
        ParseError: Body is not valid JSON
    """
    logger.debug("GET %s", url)
    own_session = session is None
    sess = build_session(user_agent) if own_session else session
    try:
        resp = _get(sess, url, timeout)
        if not 200 <= resp.status_code < 300:
            logger.warning("HTTP %s for %s", resp.status_code, url)
            raise HTTPStatusError(resp.status_code, url, getattr(resp, "reason", None))
        body = resp.text
    finally:
        if own_session:
            sess.close()

    try:
        return json.loads(body)
    except ValueError as e:
        logger.warning("JSON decode error for %s: %s", url, e)
        raise ParseError(f"Invalid JSON from {url}: {e}") from e
