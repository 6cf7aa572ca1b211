"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the process.

Usage:
    from schema_factory.core.settings.loader import get_graphql_settings

    settings = get_graphql_settings()  # First call: loads and validates
    settings = get_graphql_settings()  # Subsequent calls: returns cached instance

Testing:
    In tests, clear the cache to force reload:
    clear_all_caches()
"""

from __future__ import annotations

from functools import lru_cache

from .graphql import GraphQLSettings
from .logs import LoggingSettings


@lru_cache(maxsize=1)
def get_graphql_settings() -> GraphQLSettings:
    """Get cached GraphQL composition settings.

    Returns:
        Validated and frozen GraphQLSettings instance.
    """
    return GraphQLSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings.

    Returns:
        Validated and frozen LoggingSettings instance.
    """
    return LoggingSettings()


def clear_all_caches() -> None:
    """Clear all settings caches.

    Useful in tests to force reload of settings with different environment variables.
    """
    get_graphql_settings.cache_clear()
    get_logging_settings.cache_clear()
