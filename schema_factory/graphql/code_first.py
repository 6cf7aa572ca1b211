"""Code-first graph generation with Strawberry.

Strawberry turns annotated classes into a graphql-core graph. The builder
wraps that step, optionally sorts the result, and records the rendered SDL
as an artifact so a caller can persist it (the builder never writes files).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from graphql import lexicographic_sort_schema, print_schema
import strawberry

from schema_factory.graphql.types import SchemaArtifact

if TYPE_CHECKING:
    from graphql import GraphQLSchema

    from schema_factory.graphql.config import CompositionConfig

logger = logging.getLogger(__name__)

__all__ = ["CodeFirstTypes", "StrawberrySchemaBuilder"]


@dataclass(frozen=True)
class CodeFirstTypes:
    """Strawberry classes making up the code-first graph.

    Attributes:
        query: Root query class decorated with ``@strawberry.type``
        mutation: Root mutation class, if any
        subscription: Root subscription class, if any
        types: Extra types not reachable from the roots (e.g. interface implementations)
    """

    query: type | None = None
    mutation: type | None = None
    subscription: type | None = None
    types: Sequence[Any] = field(default_factory=tuple)


class StrawberrySchemaBuilder:
    """Build the code-first graph from Strawberry types.

    Example:
        >>> @strawberry.type
        ... class Query:
        ...     version: str = "1.0"
        >>> builder = StrawberrySchemaBuilder()
        >>> schema = await builder.build("schema.graphql", config, CodeFirstTypes(query=Query))
        >>> builder.artifact.text.startswith("type Query")
        True
    """

    def __init__(self) -> None:
        self.artifact: SchemaArtifact | None = None

    async def build(
        self,
        output_target: str | Path | None,
        config: CompositionConfig,
        constructs: CodeFirstTypes,
    ) -> GraphQLSchema:
        """Generate the graph and record its SDL artifact.

        Args:
            output_target: Path the SDL is meant for
            config: Composition configuration (``sort_schema`` is honored)
            constructs: Strawberry classes to build from

        Returns:
            The generated graphql-core graph.

        Raises:
            ValueError: If no query class is given.
        """
        if constructs.query is None:
            msg = "Code-first generation needs a query type"
            raise ValueError(msg)

        strawberry_schema = strawberry.Schema(
            query=constructs.query,
            mutation=constructs.mutation,
            subscription=constructs.subscription,
            types=list(constructs.types),
        )
        schema = strawberry_schema._schema
        if config.sort_schema:
            schema = lexicographic_sort_schema(schema)

        self.artifact = SchemaArtifact(
            path=Path(output_target) if output_target is not None else None,
            text=print_schema(schema),
        )
        logger.info(
            "Generated code-first graph with %d types",
            len(schema.type_map),
            extra={"output_target": str(output_target) if output_target else None},
        )
        return schema
