"""Graph merging.

Merges independently built graphs into one:

- the type set is the union by name;
- same-named object, interface and input types get their fields unioned;
  on a field-name collision the later graph's field wins (it keeps the
  position of the earlier one);
- enums union their values, unions their members, scalars keep the last
  definition;
- each root pointer comes from the last graph that defines it;
- directives are unioned by name, last definition wins.

A type declared with different kinds (e.g. enum in one graph, object in
another) fails the merge before anything is built.
"""

from __future__ import annotations

from collections.abc import Sequence
import logging

from graphql import (
    GraphQLDirective,
    GraphQLEnumType,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLSchema,
    GraphQLUnionType,
)

from schema_factory.core.exceptions import IncompatibleTypesError
from schema_factory.graphql.rebuild import GraphRebuilder, collect_definitions, root_names
from schema_factory.graphql.types import ROOT_OPERATIONS

logger = logging.getLogger(__name__)

__all__ = ["merge_graphs", "type_kind"]

_KINDS: tuple[tuple[type[GraphQLNamedType], str], ...] = (
    (GraphQLObjectType, "object"),
    (GraphQLInterfaceType, "interface"),
    (GraphQLUnionType, "union"),
    (GraphQLEnumType, "enum"),
    (GraphQLInputObjectType, "input"),
    (GraphQLScalarType, "scalar"),
)


def type_kind(named_type: GraphQLNamedType) -> str:
    """Return the kind of a named type ('object', 'enum', ...)."""
    for cls, kind in _KINDS:
        if isinstance(named_type, cls):
            return kind
    msg = f"Unsupported type kind: {type(named_type).__name__}"
    raise TypeError(msg)


def merge_graphs(graphs: Sequence[GraphQLSchema]) -> GraphQLSchema:
    """Merge graphs into a new one; the inputs are left untouched.

    Args:
        graphs: Graphs to merge, in increasing precedence

    Returns:
        The merged graph.

    Raises:
        ValueError: If no graph is given.
        IncompatibleTypesError: If a type name is declared with different kinds.
        MissingRootError: If a root pointer does not resolve to an object type.

    Example:
        >>> merged = merge_graphs([base_schema, executable_schema])
    """
    if not graphs:
        msg = "merge_graphs() needs at least one graph"
        raise ValueError(msg)

    definitions = collect_definitions(graphs)
    for name, named_types in definitions.items():
        kinds = [type_kind(named_type) for named_type in named_types]
        if len(set(kinds)) > 1:
            raise IncompatibleTypesError(type_name=name, kinds=kinds)

    roots: dict[str, str | None] = dict.fromkeys(ROOT_OPERATIONS)
    directives: dict[str, GraphQLDirective] = {}
    description: str | None = None
    for graph in graphs:
        for operation, name in root_names(graph).items():
            if name is not None:
                roots[operation] = name
        for directive in graph.directives:
            directives[directive.name] = directive
        description = graph.description or description

    merged = GraphRebuilder(definitions).build_schema(
        roots=roots,
        type_names=definitions.keys(),
        directives=directives.values(),
        description=description,
    )
    logger.debug(
        "Merged %d graphs into %d types",
        len(graphs),
        len(merged.type_map),
    )
    return merged
