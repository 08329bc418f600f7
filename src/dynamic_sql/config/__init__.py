"""Configuration management for dynamic_sql.

Usage:
    >>> from dynamic_sql.config import get_settings
    >>> settings = get_settings()
    >>> settings.dialect
    'generic'

Tests that change environment variables must call
``get_settings.cache_clear()`` afterwards.
"""

from dynamic_sql.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
