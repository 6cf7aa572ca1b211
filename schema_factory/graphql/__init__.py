"""GraphQL schema composition.

Composes one executable graphql-core schema from schema-first SDL,
code-first Strawberry types and an optional base schema, then publishes it
to the schema host:

    from schema_factory.graphql import CompositionConfig, SchemaComposer

    composer = SchemaComposer()
    result = await composer.merge_options(
        CompositionConfig(
            type_defs="type Query { hello: String }",
            resolvers={"Query": {"hello": lambda *_: "world"}},
        ),
    )
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "CodeFirstTypes",
    "CompositionConfig",
    "CompositionMode",
    "CompositionResult",
    "ResolverExplorer",
    "ScalarExplorer",
    "SchemaComposer",
    "SchemaDirectiveVisitor",
    "get_schema_host",
]

_EXPORTS = {
    "CodeFirstTypes": "schema_factory.graphql.code_first",
    "CompositionConfig": "schema_factory.graphql.config",
    "CompositionMode": "schema_factory.graphql.types",
    "CompositionResult": "schema_factory.graphql.schema_composer",
    "ResolverExplorer": "schema_factory.graphql.explorers",
    "ScalarExplorer": "schema_factory.graphql.explorers",
    "SchemaComposer": "schema_factory.graphql.schema_composer",
    "SchemaDirectiveVisitor": "schema_factory.graphql.directives",
    "get_schema_host": "schema_factory.graphql.host",
}


def __getattr__(name: str) -> Any:
    module_name = _EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    from importlib import import_module

    return getattr(import_module(module_name), name)
