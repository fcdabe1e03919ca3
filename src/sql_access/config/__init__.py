"""Configuration management for sql_access.

Usage:
    >>> from sql_access.config import get_settings
    >>> settings = get_settings()
    >>> settings.pool_max
    100
"""

from sql_access.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
