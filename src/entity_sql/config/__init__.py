"""Configuration management for entity-sql.

Usage:
    >>> from entity_sql.config import get_settings
    >>> settings = get_settings()
    >>> settings.parser_dialect
    'mysql'
"""

from entity_sql.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
