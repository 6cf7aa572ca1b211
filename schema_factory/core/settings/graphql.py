"""GraphQL schema composition settings.

Controls how schema-first and code-first graphs are composed and how
generated artifacts are rendered.
Environment variables use GRAPHQL_ prefix.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DefinitionsOutput = Literal["class", "interface"]


class GraphQLSettings(BaseSettings):
    """GraphQL composition configuration.

    Environment variables use GRAPHQL_ prefix.
    Example: GRAPHQL_AUTO_SCHEMA_FILE=schema.graphql, GRAPHQL_SORT_SCHEMA=true
    """

    # Code-first generation
    auto_schema_file: Path | None = Field(
        default=None,
        description="Target path for the code-first SDL artifact. Setting it selects code-first mode.",
    )
    sort_schema: bool = Field(
        default=False,
        description="Sort the code-first graph lexicographically before rendering",
    )

    # Schema-first support
    placeholder_field_name: str = Field(
        default="temp__",
        min_length=1,
        pattern=r"^[_A-Za-z][_0-9A-Za-z]*$",
        description="Root field injected so extension-only type definitions parse",
    )

    # Resolver validation
    require_resolvers_for_abstract_types: bool = Field(
        default=False,
        description="Fail when an interface or union has no __resolve_type resolver",
    )
    allow_resolvers_not_in_schema: bool = Field(
        default=False,
        description="Skip resolvers whose type or field is missing from the type definitions",
    )

    # Definitions generation
    definitions_path: Path | None = Field(
        default=None,
        description="Target path for generated Python definitions. None disables generation.",
    )
    definitions_output_as: DefinitionsOutput = Field(
        default="class",
        description="Render object types as dataclasses (class) or TypedDicts (interface)",
    )
    emit_typename_field: bool = Field(
        default=False,
        description="Add a typename field to generated object types",
    )
    skip_resolver_args: bool = Field(
        default=False,
        description="Omit arguments from generated root resolver signatures",
    )

    model_config = SettingsConfigDict(
        env_prefix="GRAPHQL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @model_validator(mode="after")
    def validate_definitions_path(self) -> GraphQLSettings:
        """Reject a definitions path that collides with the SDL artifact."""
        if (
            self.definitions_path is not None
            and self.auto_schema_file is not None
            and self.definitions_path == self.auto_schema_file
        ):
            msg = "definitions_path and auto_schema_file must point to different files"
            raise ValueError(msg)
        return self

    @property
    def code_first(self) -> bool:
        """Check if code-first composition is configured."""
        return self.auto_schema_file is not None

    @property
    def definitions_enabled(self) -> bool:
        """Check if definitions generation is configured."""
        return self.definitions_path is not None
