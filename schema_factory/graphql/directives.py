"""Schema directive application.

A schema directive visitor is a class keyed by directive name. For every
object type or field whose SDL carries that directive, a visitor instance is
created with the directive's arguments and its ``visit_*`` hook is called.
Visitors mutate the graph in place (typically by wrapping ``field.resolve``),
so directives are applied once, after merging, and before publication.

Example:
    class UpperDirective(SchemaDirectiveVisitor):
        def visit_field_definition(self, field, object_type):
            resolve = field.resolve or default_field_resolver

            def upper(root, info, **kwargs):
                return str(resolve(root, info, **kwargs)).upper()

            field.resolve = upper

    apply_schema_directives(schema, {"upper": UpperDirective})
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import TYPE_CHECKING, Any

from graphql import GraphQLObjectType, get_directive_values

if TYPE_CHECKING:
    from graphql import GraphQLField, GraphQLSchema
    from graphql.language import Node

logger = logging.getLogger(__name__)

__all__ = ["SchemaDirectiveVisitor", "apply_schema_directives"]


class SchemaDirectiveVisitor:
    """Base class for schema directive implementations.

    Attributes:
        name: Directive name as used in SDL
        args: Directive arguments, coerced by graphql-core
        schema: Graph being visited
    """

    def __init__(self, name: str, args: dict[str, Any], schema: GraphQLSchema) -> None:
        self.name = name
        self.args = args
        self.schema = schema

    def visit_object(self, object_type: GraphQLObjectType) -> None:
        """Called for an object type carrying the directive."""

    def visit_field_definition(
        self,
        field: GraphQLField,
        object_type: GraphQLObjectType,
    ) -> None:
        """Called for an object field carrying the directive."""


def apply_schema_directives(
    schema: GraphQLSchema,
    visitors: Mapping[str, type[SchemaDirectiveVisitor]],
) -> int:
    """Run directive visitors over a graph.

    Directive usages are read from SDL AST nodes; graphs built purely in code
    carry none and are left untouched.

    Args:
        schema: Graph to visit (mutated in place)
        visitors: Visitor classes keyed by directive name

    Returns:
        Number of visitor invocations.
    """
    visited = 0
    for name, named_type in schema.type_map.items():
        if name.startswith("__") or not isinstance(named_type, GraphQLObjectType):
            continue

        for node in (named_type.ast_node, *named_type.extension_ast_nodes):
            for visitor in _visitors_for(schema, visitors, node):
                visitor.visit_object(named_type)
                visited += 1

        for field in named_type.fields.values():
            for visitor in _visitors_for(schema, visitors, field.ast_node):
                visitor.visit_field_definition(field, named_type)
                visited += 1

    logger.debug("Applied %d schema directive visits", visited)
    return visited


def _visitors_for(
    schema: GraphQLSchema,
    visitors: Mapping[str, type[SchemaDirectiveVisitor]],
    node: Node | None,
) -> list[SchemaDirectiveVisitor]:
    if node is None or not getattr(node, "directives", None):
        return []

    instances = []
    for directive_node in node.directives:
        directive_name = directive_node.name.value
        visitor_cls = visitors.get(directive_name)
        if visitor_cls is None:
            continue
        directive = schema.get_directive(directive_name)
        if directive is None:
            logger.warning("Directive @%s is used but not declared; skipping", directive_name)
            continue
        args = get_directive_values(directive, node) or {}
        instances.append(visitor_cls(directive_name, args, schema))
    return instances
