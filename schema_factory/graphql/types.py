"""Shared types for schema composition."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from graphql import GraphQLSchema

__all__ = [
    "ROOT_OPERATIONS",
    "CompositionMode",
    "ResolverBinding",
    "ResolverBindingMap",
    "ResolverValidationOptions",
    "SchemaArtifact",
    "root_types",
]

# Ordered the way roots are reconciled
ROOT_OPERATIONS: tuple[str, ...] = ("mutation", "query", "subscription")


class CompositionMode(StrEnum):
    """Which combination of graphs a composition pass uses."""

    CODE_FIRST = "code-first"
    PROGRAMMATIC = "programmatic"
    SCHEMA_FIRST = "schema-first"


@dataclass(frozen=True, slots=True)
class ResolverBinding:
    """A (resolve, subscribe) pair attached to one field.

    Scalar hooks (``serialize``, ``parse_value``, ``parse_literal``) and type
    hooks (``__resolve_type``, ``__is_type_of``) travel in ``resolve``.
    """

    resolve: Callable[..., Any] | None = None
    subscribe: Callable[..., Any] | None = None

    @property
    def is_empty(self) -> bool:
        return self.resolve is None and self.subscribe is None


ResolverBindingMap = dict[str, dict[str, ResolverBinding]]


class ResolverValidationOptions(BaseModel):
    """Validation strictness for binding resolvers onto type definitions."""

    model_config = ConfigDict(frozen=True)

    require_resolvers_for_abstract_types: bool = False
    allow_resolvers_not_in_schema: bool = False


@dataclass(frozen=True, slots=True)
class SchemaArtifact:
    """Generated text plus the path it is meant for.

    Writing is left to the caller; ``is_stale`` is the comparison it should
    use before writing.
    """

    path: Path | None
    text: str

    def is_stale(self, existing: str | None) -> bool:
        """Check whether existing file content differs from this artifact.

        Args:
            existing: Current file content, or None if the file is missing.

        Returns:
            True if the artifact should be written.
        """
        return existing is None or existing != self.text

    def read_existing(self) -> str | None:
        """Read current content of ``path`` if it is a regular file."""
        if self.path is None or not self.path.is_file():
            return None
        return self.path.read_text(encoding="utf-8")


def root_types(schema: GraphQLSchema) -> Mapping[str, Any]:
    """Map root operation names to the schema's root types (None when unset)."""
    return {
        "mutation": schema.mutation_type,
        "query": schema.query_type,
        "subscription": schema.subscription_type,
    }
