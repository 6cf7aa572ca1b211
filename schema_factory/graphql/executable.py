"""Executable graph building.

Parses SDL type definitions with graphql-core and binds a resolver map onto
the resulting graph. Every graph built here is fresh, so binding mutates it
in place before anyone else can see it.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
import logging
from typing import Any

from graphql import (
    DocumentNode,
    GraphQLError,
    GraphQLInterfaceType,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLSchema,
    GraphQLUnionType,
    build_ast_schema,
    is_specified_scalar_type,
    parse,
    validate_schema,
)

from schema_factory.core.exceptions import InvalidDefinitionError
from schema_factory.graphql.resolver_map import normalize_resolvers
from schema_factory.graphql.type_defs import concat_type_defs
from schema_factory.graphql.types import ResolverBinding, ResolverValidationOptions

logger = logging.getLogger(__name__)

__all__ = ["bind_resolvers", "build_executable_graph", "parse_type_defs"]

TypeDefs = str | Sequence[str] | DocumentNode

SCALAR_HOOKS = frozenset({"serialize", "parse_value", "parse_literal"})
# graphql-core 3.3 executes scalars through these, captured at construction
COERCE_HOOKS = {
    "serialize": "coerce_output_value",
    "parse_value": "coerce_input_value",
    "parse_literal": "coerce_input_literal",
}
RESOLVE_TYPE_KEY = "__resolve_type"
IS_TYPE_OF_KEY = "__is_type_of"


def parse_type_defs(type_defs: TypeDefs) -> GraphQLSchema:
    """Parse SDL into a validated graph without resolvers.

    Args:
        type_defs: SDL text, several SDL texts, or a parsed document

    Returns:
        The parsed graph.

    Raises:
        InvalidDefinitionError: If the SDL does not parse or is structurally invalid.
    """
    try:
        document = type_defs if isinstance(type_defs, DocumentNode) else parse(concat_type_defs(type_defs))
        schema = build_ast_schema(document)
    except (GraphQLError, TypeError) as exc:
        raise InvalidDefinitionError(
            detail=f"Invalid type definitions: {exc}",
            extra={"errors": [str(exc)]},
        ) from exc

    errors = validate_schema(schema)
    if errors:
        messages = [error.message for error in errors]
        raise InvalidDefinitionError(
            detail=f"Invalid type definitions: {'; '.join(messages)}",
            extra={"errors": messages},
        )
    return schema


def build_executable_graph(
    type_defs: TypeDefs,
    resolvers: Mapping[str, Mapping[str, Any]] | None = None,
    options: ResolverValidationOptions | None = None,
) -> GraphQLSchema:
    """Build a graph from SDL with resolvers bound.

    Args:
        type_defs: SDL text, several SDL texts, or a parsed document
        resolvers: Resolver map (type name -> field name -> binding)
        options: Validation strictness

    Returns:
        The executable graph.

    Raises:
        InvalidDefinitionError: If the SDL is invalid or resolvers do not
            match it.

    Example:
        >>> schema = build_executable_graph(
        ...     "type Query { hello: String }",
        ...     {"Query": {"hello": lambda *_: "world"}},
        ... )
    """
    options = options or ResolverValidationOptions()
    schema = parse_type_defs(type_defs)
    bind_resolvers(schema, resolvers, options)
    logger.debug("Built executable graph with %d types", len(schema.type_map))
    return schema


def bind_resolvers(
    schema: GraphQLSchema,
    resolvers: Mapping[str, Mapping[str, Any]] | None,
    options: ResolverValidationOptions,
) -> None:
    """Bind a resolver map onto a graph in place.

    Raises:
        InvalidDefinitionError: On resolvers that do not match the graph, or
            on abstract types without ``__resolve_type`` when required.
    """
    for type_name, fields in normalize_resolvers(resolvers).items():
        named_type = None if type_name.startswith("__") else schema.type_map.get(type_name)
        if named_type is None:
            _not_in_schema(f'"{type_name}" defined in resolvers, but not in schema', options)
            continue

        if isinstance(named_type, GraphQLScalarType):
            _bind_scalar(named_type, fields)
        elif isinstance(named_type, (GraphQLObjectType, GraphQLInterfaceType)):
            _bind_fields(named_type, fields, options)
        elif isinstance(named_type, GraphQLUnionType):
            _bind_union(named_type, fields, options)
        else:
            raise InvalidDefinitionError(
                detail=f'Cannot bind resolvers to "{type_name}": type has no resolvable fields',
                extra={"type_name": type_name},
            )

    if options.require_resolvers_for_abstract_types:
        _check_abstract_types(schema)


def _not_in_schema(message: str, options: ResolverValidationOptions) -> None:
    if options.allow_resolvers_not_in_schema:
        logger.debug("Skipping resolver: %s", message)
        return
    raise InvalidDefinitionError(detail=message)


def _bind_scalar(scalar: GraphQLScalarType, fields: Mapping[str, ResolverBinding]) -> None:
    if is_specified_scalar_type(scalar):
        raise InvalidDefinitionError(
            detail=f'Cannot override built-in scalar "{scalar.name}"',
            extra={"type_name": scalar.name},
        )
    for hook, binding in fields.items():
        if hook not in SCALAR_HOOKS:
            raise InvalidDefinitionError(
                detail=f'Unknown hook "{hook}" for scalar "{scalar.name}"',
                extra={"type_name": scalar.name, "hook": hook},
            )
        if binding.resolve is not None:
            _set_scalar_hook(scalar, hook, binding.resolve)


def _set_scalar_hook(scalar: GraphQLScalarType, hook: str, fn: Any) -> None:
    setattr(scalar, hook, fn)
    coerce_hook = COERCE_HOOKS[hook]
    if not hasattr(scalar, coerce_hook):
        return
    if hook == "parse_literal":
        # Variables are already substituted into the node at this point
        def coerce_input_literal(value_node: Any, *_args: Any, **_kwargs: Any) -> Any:
            return fn(value_node)

        setattr(scalar, coerce_hook, coerce_input_literal)
    else:
        setattr(scalar, coerce_hook, fn)


def _bind_fields(
    named_type: GraphQLObjectType | GraphQLInterfaceType,
    fields: Mapping[str, ResolverBinding],
    options: ResolverValidationOptions,
) -> None:
    for field_name, binding in fields.items():
        if field_name == RESOLVE_TYPE_KEY and isinstance(named_type, GraphQLInterfaceType):
            named_type.resolve_type = binding.resolve
            continue
        if field_name == IS_TYPE_OF_KEY and isinstance(named_type, GraphQLObjectType):
            named_type.is_type_of = binding.resolve
            continue

        field_def = named_type.fields.get(field_name)
        if field_def is None:
            _not_in_schema(
                f"{named_type.name}.{field_name} defined in resolvers, but not in schema",
                options,
            )
            continue
        if binding.resolve is not None:
            field_def.resolve = binding.resolve
        if binding.subscribe is not None:
            field_def.subscribe = binding.subscribe


def _bind_union(
    union: GraphQLUnionType,
    fields: Mapping[str, ResolverBinding],
    options: ResolverValidationOptions,
) -> None:
    for key, binding in fields.items():
        if key == RESOLVE_TYPE_KEY:
            union.resolve_type = binding.resolve
        else:
            _not_in_schema(f"{union.name}.{key} defined in resolvers, but unions have no fields", options)


def _check_abstract_types(schema: GraphQLSchema) -> None:
    missing = [
        name
        for name, named_type in schema.type_map.items()
        if not name.startswith("__")
        and isinstance(named_type, (GraphQLInterfaceType, GraphQLUnionType))
        and named_type.resolve_type is None
    ]
    if missing:
        raise InvalidDefinitionError(
            detail=f"Type resolver missing for abstract types: {', '.join(missing)}",
            extra={"types": missing},
        )
