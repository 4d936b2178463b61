"""Core utilities for Coolbooru.

- config: Configuration loading and defaults
- network: HTTP session and single-shot JSON GET
"""

__all__ = [
    "config",
    "network",
]
