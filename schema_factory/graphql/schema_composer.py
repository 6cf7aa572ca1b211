"""GraphQL schema composer.

Composes the published schema from schema-first type definitions,
code-first Strawberry types, and an optional externally built base schema.

A composition pass picks one of three modes from its configuration:

- code-first: generate the graph from Strawberry types, rebuild an
  executable graph from its SDL with all known resolvers, merge in the base
  schema, and transplant the resolvers back onto the generated shape;
- programmatic: publish the base schema as is;
- schema-first: build an executable graph from the type definitions and
  merge in the base schema.

Every pass is all-or-nothing: a failing step aborts the pass and the
previously published schema stays in place. Passes are serialized per
schema host, so composers can also be used to reload the schema at runtime.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
import inspect
import logging

from graphql import GraphQLSchema, print_schema

from schema_factory.core.exceptions import (
    CollaboratorFailureError,
    MissingRootError,
    SchemaCompositionError,
)
from schema_factory.graphql.code_first import CodeFirstTypes, StrawberrySchemaBuilder
from schema_factory.graphql.config import CompositionConfig
from schema_factory.graphql.definitions import generate_definitions
from schema_factory.graphql.directives import apply_schema_directives
from schema_factory.graphql.executable import build_executable_graph
from schema_factory.graphql.explorers import (
    ResolverExplorer,
    ScalarExplorer,
    explore_schema_resolvers,
)
from schema_factory.graphql.host import GraphQLSchemaHost, get_schema_host
from schema_factory.graphql.merge import merge_graphs
from schema_factory.graphql.resolver_map import build_resolver_map, count_bindings
from schema_factory.graphql.transplant import transplant_resolvers
from schema_factory.graphql.type_defs import merge_type_defs, remove_placeholder_fields
from schema_factory.graphql.types import CompositionMode, ResolverBindingMap, SchemaArtifact

logger = logging.getLogger(__name__)

__all__ = ["CompositionResult", "SchemaComposer"]


@dataclass(frozen=True)
class CompositionResult:
    """Outcome of a successful composition pass.

    Attributes:
        mode: Mode the pass ran in
        schema: The published schema
        config: Input config with ``type_defs`` cleared and ``base_schema`` set to
            the published schema
        artifact: Code-first SDL artifact, if one was generated
    """

    mode: CompositionMode
    schema: GraphQLSchema
    config: CompositionConfig
    artifact: SchemaArtifact | None = None


@contextmanager
def _collaborator(name: str) -> Iterator[None]:
    """Wrap foreign errors raised by a collaborator step."""
    try:
        yield
    except SchemaCompositionError:
        raise
    except Exception as exc:
        raise CollaboratorFailureError(name, exc) from exc


def ensure_query_root(schema: GraphQLSchema) -> None:
    """Raise MissingRootError if the schema has no query root."""
    if schema.query_type is None:
        raise MissingRootError("query")


class SchemaComposer:
    """Compose and publish the GraphQL schema.

    Example:
        >>> composer = SchemaComposer(resolver_explorer=resolvers)
        >>> result = await composer.merge_options(
        ...     CompositionConfig(type_defs="type Query { hello: String }"),
        ... )
        >>> get_schema_host().schema is result.schema
        True
    """

    def __init__(
        self,
        resolver_explorer: ResolverExplorer | None = None,
        scalar_explorer: ScalarExplorer | None = None,
        schema_builder: StrawberrySchemaBuilder | None = None,
        schema_host: GraphQLSchemaHost | None = None,
    ) -> None:
        self.resolver_explorer = resolver_explorer or ResolverExplorer()
        self.scalar_explorer = scalar_explorer or ScalarExplorer()
        self.schema_builder = schema_builder or StrawberrySchemaBuilder()
        self.schema_host = schema_host or get_schema_host()

    async def merge_options(self, config: CompositionConfig | None = None) -> CompositionResult:
        """Run one composition pass and publish its schema.

        Args:
            config: Composition configuration; defaults to an empty config

        Returns:
            The composition result.

        Raises:
            SchemaCompositionError: If any step fails. Nothing is published.
        """
        config = config or CompositionConfig()
        async with self.schema_host.pass_lock:
            mode = config.mode
            logger.info("Composing GraphQL schema", extra={"mode": mode.value})

            with _collaborator("scalar explorer"):
                scalars = self.scalar_explorer.explore()
            with _collaborator("resolver explorer"):
                explored = self.resolver_explorer.explore()

            artifact: SchemaArtifact | None = None
            if mode is CompositionMode.CODE_FIRST:
                schema, artifact = await self._compose_code_first(config, scalars, explored)
            elif mode is CompositionMode.PROGRAMMATIC:
                schema = await self._compose_programmatic(config)
            else:
                schema = await self._compose_schema_first(config, scalars, explored)

            ensure_query_root(schema)
            version = self.schema_host.publish(schema)
            logger.info(
                "Composed GraphQL schema with %d types",
                len(schema.type_map),
                extra={"mode": mode.value, "schema_version": version},
            )
            return CompositionResult(
                mode=mode,
                schema=schema,
                config=config.model_copy(update={"type_defs": None, "base_schema": schema}),
                artifact=artifact,
            )

    async def _compose_code_first(
        self,
        config: CompositionConfig,
        scalars: ResolverBindingMap,
        explored: ResolverBindingMap,
    ) -> tuple[GraphQLSchema, SchemaArtifact | None]:
        with _collaborator("code-first generator"):
            auto_graph = await self.schema_builder.build(
                config.auto_schema_file,
                config,
                config.code_first or CodeFirstTypes(),
            )
        artifact = self.schema_builder.artifact

        # Transplant copies field resolvers only
        if scalars:
            logger.warning(
                "Scalar bindings are not applied to code-first scalars: %s",
                ", ".join(sorted(scalars)),
                extra={"mode": CompositionMode.CODE_FIRST.value},
            )

        resolvers = build_resolver_map(
            scalars,
            explore_schema_resolvers(auto_graph),
            explored,
            config.resolvers,
        )
        logger.debug("Binding %d resolvers onto generated graph", count_bindings(resolvers))

        # Re-parse the generated SDL so resolvers are validated the same way
        # as in schema-first mode
        options = config.resolver_validation_options.model_copy(
            update={"require_resolvers_for_abstract_types": False},
        )
        executable = build_executable_graph(print_schema(auto_graph), resolvers, options)

        merged = merge_graphs([config.base_schema, executable]) if config.base_schema is not None else executable
        schema = transplant_resolvers(source=merged, target=auto_graph)

        if config.schema_directives:
            with _collaborator("directive applier"):
                apply_schema_directives(schema, config.schema_directives)

        return await self._transform(config, schema), artifact

    async def _compose_programmatic(self, config: CompositionConfig) -> GraphQLSchema:
        if config.base_schema is None:
            raise MissingRootError(
                "query",
                extra={"reason": "no type definitions and no base schema configured"},
            )
        return await self._transform(config, config.base_schema)

    async def _compose_schema_first(
        self,
        config: CompositionConfig,
        scalars: ResolverBindingMap,
        explored: ResolverBindingMap,
    ) -> GraphQLSchema:
        resolvers = build_resolver_map(scalars, explored, config.resolvers)
        logger.debug("Binding %d resolvers onto type definitions", count_bindings(resolvers))

        type_defs = merge_type_defs(config.type_defs or "", config.placeholder_field_name)
        executable = build_executable_graph(
            type_defs,
            resolvers,
            config.resolver_validation_options,
        )
        if config.schema_directives:
            with _collaborator("directive applier"):
                apply_schema_directives(executable, config.schema_directives)

        merged = merge_graphs([config.base_schema, executable]) if config.base_schema is not None else executable
        schema = remove_placeholder_fields(merged, config.placeholder_field_name)
        return await self._transform(config, schema)

    async def _transform(self, config: CompositionConfig, schema: GraphQLSchema) -> GraphQLSchema:
        if config.transform_schema is None:
            return schema

        with _collaborator("transform_schema"):
            result = config.transform_schema(schema)
            if inspect.isawaitable(result):
                result = await result
            if not isinstance(result, GraphQLSchema):
                msg = f"transform_schema returned {type(result).__name__}, expected GraphQLSchema"
                raise TypeError(msg)
        return result

    async def generate_definitions(self, config: CompositionConfig) -> SchemaArtifact | None:
        """Render Python definitions for the configured type definitions.

        Returns:
            The artifact, or None if type definitions or definitions options
            are missing. Callers write it when ``artifact.is_stale(...)``.
        """
        if not config.has_type_defs:
            return None
        artifact = generate_definitions(config.type_defs, config.definitions)
        if artifact is not None:
            logger.info(
                "Rendered GraphQL definitions",
                extra={"path": str(artifact.path), "stale": artifact.is_stale(artifact.read_existing())},
            )
        return artifact
