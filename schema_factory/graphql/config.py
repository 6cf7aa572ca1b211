"""Composition configuration.

``CompositionConfig`` is the immutable input of one composition pass. It can
be built directly, or seeded from environment-driven ``GraphQLSettings``:

    config = CompositionConfig.from_settings(
        type_defs=[users_sdl, billing_sdl],
        resolvers={"Query": {"me": resolve_me}},
    )

Which fields are set decides the composition mode:

    auto_schema_file set  -> code-first
    no type_defs          -> programmatic (publish ``base_schema`` as is)
    otherwise             -> schema-first
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from graphql import GraphQLSchema
from pydantic import BaseModel, ConfigDict, Field

from schema_factory.core.settings import GraphQLSettings, get_graphql_settings
from schema_factory.graphql.code_first import CodeFirstTypes
from schema_factory.graphql.definitions import DefinitionsOptions
from schema_factory.graphql.directives import SchemaDirectiveVisitor
from schema_factory.graphql.type_defs import DEFAULT_PLACEHOLDER_FIELD
from schema_factory.graphql.types import CompositionMode, ResolverValidationOptions

__all__ = ["CompositionConfig"]


class CompositionConfig(BaseModel):
    """Immutable configuration of one composition pass.

    Attributes:
        type_defs: SDL sources for schema-first composition
        auto_schema_file: Target path of the code-first SDL artifact
        base_schema: Externally supplied base graph (alias ``schema``)
        resolvers: Extra resolvers layered over the explored ones
        resolver_validation_options: Resolver binding strictness
        schema_directives: Directive visitor classes keyed by directive name
        transform_schema: Sync or async post-processing hook
        code_first: Strawberry classes for code-first composition
        sort_schema: Sort the code-first graph lexicographically
        placeholder_field_name: Placeholder root field removed before publication
        definitions: Options for Python definitions generation
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True, populate_by_name=True)

    type_defs: str | list[str] | None = None
    auto_schema_file: Path | None = None
    base_schema: GraphQLSchema | None = Field(default=None, alias="schema")
    resolvers: dict[str, dict[str, Any]] | None = None
    resolver_validation_options: ResolverValidationOptions = Field(
        default_factory=ResolverValidationOptions,
    )
    schema_directives: dict[str, type[SchemaDirectiveVisitor]] | None = None
    transform_schema: Callable[[GraphQLSchema], Any] | None = None
    code_first: CodeFirstTypes | None = None
    sort_schema: bool = False
    placeholder_field_name: str = DEFAULT_PLACEHOLDER_FIELD
    definitions: DefinitionsOptions | None = None

    @classmethod
    def from_settings(
        cls,
        settings: GraphQLSettings | None = None,
        **overrides: Any,
    ) -> CompositionConfig:
        """Build a config from GraphQLSettings plus explicit overrides.

        Args:
            settings: Settings to read; defaults to the cached settings
            **overrides: Field values taking precedence over settings

        Returns:
            A new CompositionConfig.
        """
        settings = settings or get_graphql_settings()
        values: dict[str, Any] = {
            "auto_schema_file": settings.auto_schema_file,
            "sort_schema": settings.sort_schema,
            "placeholder_field_name": settings.placeholder_field_name,
            "resolver_validation_options": ResolverValidationOptions(
                require_resolvers_for_abstract_types=settings.require_resolvers_for_abstract_types,
                allow_resolvers_not_in_schema=settings.allow_resolvers_not_in_schema,
            ),
        }
        if settings.definitions_path is not None:
            values["definitions"] = DefinitionsOptions(
                path=settings.definitions_path,
                output_as=settings.definitions_output_as,
                emit_typename_field=settings.emit_typename_field,
                skip_resolver_args=settings.skip_resolver_args,
            )
        values.update(overrides)
        return cls(**values)

    @property
    def has_type_defs(self) -> bool:
        if isinstance(self.type_defs, str):
            return bool(self.type_defs.strip())
        return any(source.strip() for source in self.type_defs or ())

    @property
    def mode(self) -> CompositionMode:
        """Composition mode selected by this configuration."""
        if self.auto_schema_file is not None:
            return CompositionMode.CODE_FIRST
        if not self.has_type_defs:
            return CompositionMode.PROGRAMMATIC
        return CompositionMode.SCHEMA_FIRST
