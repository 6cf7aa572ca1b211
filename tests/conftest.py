"""Pytest configuration and shared fixtures.

Fixtures are organized by category:
    - Settings Fixtures: settings cache isolation
    - Composition Fixtures: schema host, composer and ready-made graphs
"""

from __future__ import annotations

import pytest

from schema_factory.core.settings import clear_all_caches
from schema_factory.graphql.executable import build_executable_graph
from schema_factory.graphql.host import GraphQLSchemaHost
from schema_factory.graphql.schema_composer import SchemaComposer

# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Drop cached settings so environment changes take effect per test."""
    clear_all_caches()
    yield
    clear_all_caches()


# ============================================================================
# Composition Fixtures
# ============================================================================


@pytest.fixture
def schema_host() -> GraphQLSchemaHost:
    """Fresh schema host, isolated from the process-wide one."""
    return GraphQLSchemaHost()


@pytest.fixture
def composer(schema_host: GraphQLSchemaHost) -> SchemaComposer:
    """Composer publishing to the isolated schema host."""
    return SchemaComposer(schema_host=schema_host)


@pytest.fixture
def base_schema():
    """Executable base graph with a resolved ``health`` query field."""
    return build_executable_graph(
        "type Query { health: String }",
        {"Query": {"health": lambda _root, _info: "ok"}},
    )
