"""SDL type definition helpers.

Type definitions are often split across modules, and a module may only
``extend type Query``. graphql-core refuses to extend a type that is never
defined, so ``merge_type_defs`` injects a placeholder root definition
holding a single placeholder field. ``remove_placeholder_fields`` strips it
again before the graph is published.
"""

from __future__ import annotations

from collections.abc import Sequence
import logging

from graphql import (
    GraphQLError,
    GraphQLField,
    GraphQLNamedType,
    GraphQLSchema,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    SchemaDefinitionNode,
    parse,
)

from schema_factory.core.exceptions import InvalidDefinitionError
from schema_factory.graphql.rebuild import GraphRebuilder, collect_definitions
from schema_factory.graphql.types import root_types

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_PLACEHOLDER_FIELD",
    "concat_type_defs",
    "merge_type_defs",
    "remove_placeholder_fields",
]

DEFAULT_PLACEHOLDER_FIELD = "temp__"
DEFAULT_ROOT_NAMES: tuple[str, ...] = ("Query", "Mutation", "Subscription")


def concat_type_defs(type_defs: str | Sequence[str]) -> str:
    """Join SDL sources into one document, skipping blank entries."""
    if isinstance(type_defs, str):
        return type_defs
    return "\n".join(source.strip() for source in type_defs if source and source.strip())


def merge_type_defs(
    type_defs: str | Sequence[str],
    placeholder_field: str = DEFAULT_PLACEHOLDER_FIELD,
) -> str:
    """Join SDL sources, defining any root type that is only extended.

    Args:
        type_defs: One or more SDL sources
        placeholder_field: Name of the placeholder field

    Returns:
        A single SDL document.

    Raises:
        InvalidDefinitionError: If the joined SDL does not parse.

    Example:
        >>> merge_type_defs(["extend type Query { me: User }", "type User { id: ID! }"])
        'type Query { temp__: Boolean }\\nextend type Query { me: User }\\ntype User { id: ID! }'
    """
    document_text = concat_type_defs(type_defs)
    if not document_text.strip():
        return document_text

    try:
        document = parse(document_text)
    except GraphQLError as exc:
        raise InvalidDefinitionError(
            detail=f"Invalid type definitions: {exc}",
            extra={"errors": [str(exc)]},
        ) from exc

    defined: set[str] = set()
    extended: list[str] = []
    root_names = set(DEFAULT_ROOT_NAMES)
    for definition in document.definitions:
        if isinstance(definition, SchemaDefinitionNode):
            root_names.update(operation.type.name.value for operation in definition.operation_types)
        elif isinstance(definition, ObjectTypeDefinitionNode):
            defined.add(definition.name.value)
        elif isinstance(definition, ObjectTypeExtensionNode):
            extended.append(definition.name.value)

    missing = [name for name in dict.fromkeys(extended) if name in root_names and name not in defined]
    if not missing:
        return document_text

    logger.debug("Injecting placeholder definitions for %s", ", ".join(missing))
    placeholders = [f"type {name} {{ {placeholder_field}: Boolean }}" for name in missing]
    return "\n".join([*placeholders, document_text])


class _PlaceholderRemover(GraphRebuilder):
    def __init__(self, schema: GraphQLSchema, placeholder_field: str) -> None:
        super().__init__(collect_definitions([schema]))
        self._placeholder_field = placeholder_field
        self._root_names = {
            root_type.name for root_type in root_types(schema).values() if root_type is not None
        }

    def object_fields(
        self,
        name: str,
        definitions: Sequence[GraphQLNamedType],
    ) -> dict[str, GraphQLField]:
        fields = super().object_fields(name, definitions)
        if name in self._root_names:
            fields.pop(self._placeholder_field, None)
        return fields


def remove_placeholder_fields(
    schema: GraphQLSchema,
    placeholder_field: str = DEFAULT_PLACEHOLDER_FIELD,
) -> GraphQLSchema:
    """Return ``schema`` without the placeholder field on its root types.

    The input graph is returned as is when it carries no placeholder.
    """
    has_placeholder = any(
        root_type is not None and placeholder_field in root_type.fields
        for root_type in root_types(schema).values()
    )
    if not has_placeholder:
        return schema
    logger.debug("Removing placeholder field '%s' from root types", placeholder_field)
    return _PlaceholderRemover(schema, placeholder_field).rebuild(schema)
