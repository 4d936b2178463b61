"""Configuration management for Coolbooru.

Handles loading and caching of an optional JSON configuration file. The
library itself never goes looking for a file: without an explicit path the
built-in defaults are used. The CLI passes the path given by --config.

Recognized keys:
- base_url: API host (default https://derpibooru.org)
- user_agent: User-Agent header sent with every request (default "Coolbooru")
- api_key: Derpibooru API key applied to requests built from scalars
- timeout_s: Request timeout in seconds (default None, the requests default)
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://derpibooru.org"
DEFAULT_USER_AGENT = "Coolbooru"

DEFAULTS: Dict[str, Any] = {
    "base_url": DEFAULT_BASE_URL,
    "user_agent": DEFAULT_USER_AGENT,
    "api_key": None,
    "timeout_s": None,
}

_CONFIG_CACHE: Optional[Dict[str, Any]] = None
_CONFIG_PATH: Optional[str] = None


def _load_file(path: str) -> Dict[str, Any]:
    try:
        if not os.path.exists(path):
            logger.warning("Config file %s not found; using defaults", path)
            return {}
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f) or {}
    except (OSError, ValueError) as e:
        logger.error("Failed to load config from %s: %s", path, e)
        return {}

    if not isinstance(data, dict):
        logger.error("Config file %s must contain a JSON object; ignoring", path)
        return {}
    return data


def get_config(path: Optional[str] = None, force_reload: bool = False) -> Dict[str, Any]:
    """Load client configuration.

    The result is cached; a different path or force_reload=True reloads it.

    Args:
        path: Path to a JSON config file, or None for defaults only
        force_reload: Ignore the cached configuration

    Returns:
        Configuration dictionary with every known key populated
    """
    global _CONFIG_CACHE, _CONFIG_PATH
    if _CONFIG_CACHE is not None and not force_reload and (path is None or path == _CONFIG_PATH):
        return _CONFIG_CACHE

    cfg = dict(DEFAULTS)
    if path:
        loaded = _load_file(path)
        unknown = sorted(set(loaded) - set(DEFAULTS))
        if unknown:
            logger.debug("Ignoring unknown config keys: %s", ", ".join(unknown))
        cfg.update({k: v for k, v in loaded.items() if k in DEFAULTS})

    _CONFIG_CACHE = cfg
    _CONFIG_PATH = path
    return _CONFIG_CACHE


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() starts from defaults."""
    global _CONFIG_CACHE, _CONFIG_PATH
    _CONFIG_CACHE = None
    _CONFIG_PATH = None


def get_base_url(config: Optional[Dict[str, Any]] = None) -> str:
    """Return the configured API host without a trailing slash."""
    cfg = config if config is not None else get_config()
    return str(cfg.get("base_url") or DEFAULT_BASE_URL).rstrip("/")


def get_user_agent(config: Optional[Dict[str, Any]] = None) -> str:
    """Return the User-Agent header value."""
    cfg = config if config is not None else get_config()
    return str(cfg.get("user_agent") or DEFAULT_USER_AGENT)


def get_api_key(config: Optional[Dict[str, Any]] = None) -> Optional[str]:
    """Return the configured API key, if any."""
    cfg = config if config is not None else get_config()
    key = cfg.get("api_key")
    return str(key) if key else None


def get_timeout(config: Optional[Dict[str, Any]] = None) -> Optional[float]:
    """Return the request timeout in seconds, or None to wait indefinitely."""
    cfg = config if config is not None else get_config()
    val = cfg.get("timeout_s")
    if val is None:
        return None
    try:
        return float(val)
    except (TypeError, ValueError):
        logger.warning("Invalid timeout_s %r in config; using no timeout", val)
        return None
