"""Modular Pydantic Settings v2 configuration.

Import settings via cached loaders:
    from schema_factory.core.settings import get_graphql_settings

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file (development only)
"""

from __future__ import annotations

from .graphql import GraphQLSettings
from .loader import clear_all_caches, get_graphql_settings, get_logging_settings
from .logs import LoggingSettings

__all__ = [
    "GraphQLSettings",
    "LoggingSettings",
    "clear_all_caches",
    "get_graphql_settings",
    "get_logging_settings",
]
