"""Resolver transplant.

Copies resolver behavior from a resolver-complete ``source`` graph onto the
authoritative shape of a ``target`` graph, matching by type and field name.

Root operation types may be extended: a source root field missing from the
target root is added. Every other type is rebound only: a source resolver
attaches to an existing target field or is dropped. This lets hand-written
root resolvers live next to a shape derived entirely from code, without
duplicating or shadowing structural fields.
"""

from __future__ import annotations

from collections.abc import Sequence
import logging

from graphql import GraphQLField, GraphQLNamedType, GraphQLObjectType, GraphQLSchema

from schema_factory.graphql.rebuild import GraphRebuilder, is_shared_type
from schema_factory.graphql.types import ROOT_OPERATIONS, root_types

logger = logging.getLogger(__name__)

__all__ = ["transplant_resolvers"]


class _TransplantRebuilder(GraphRebuilder):
    """Rebuilds the target graph, applying source resolvers on the way.

    Type names resolve to the target's definitions first; types only the
    source defines are used when an added root field refers to them.
    """

    def __init__(self, source: GraphQLSchema, target: GraphQLSchema) -> None:
        definitions: dict[str, list[GraphQLNamedType]] = {
            name: [named_type]
            for name, named_type in source.type_map.items()
            if not is_shared_type(name)
        }
        definitions.update(
            {
                name: [named_type]
                for name, named_type in target.type_map.items()
                if not is_shared_type(name)
            },
        )
        super().__init__(definitions)
        self._source = source
        self._target = target

        source_roots = root_types(source)
        target_roots = root_types(target)
        self._root_sources: dict[str, GraphQLObjectType] = {
            target_roots[operation].name: source_roots[operation]
            for operation in ROOT_OPERATIONS
            if source_roots[operation] is not None and target_roots[operation] is not None
        }

    def object_fields(
        self,
        name: str,
        definitions: Sequence[GraphQLNamedType],
    ) -> dict[str, GraphQLField]:
        target_type = self._target.type_map.get(name)
        if not isinstance(target_type, GraphQLObjectType):
            # Brought in from the source by an added root field
            return super().object_fields(name, definitions)

        fields = {
            field_name: self.build_field(field_def)
            for field_name, field_def in target_type.fields.items()
        }

        source_root = self._root_sources.get(name)
        if source_root is not None:
            self._reconcile_root(name, fields, source_root)

        source_type = self._source.type_map.get(name)
        if isinstance(source_type, GraphQLObjectType):
            self._rebind(name, fields, source_type)

        return fields

    def _reconcile_root(
        self,
        name: str,
        fields: dict[str, GraphQLField],
        source_root: GraphQLObjectType,
    ) -> None:
        for field_name, source_field in source_root.fields.items():
            target_field = fields.get(field_name)
            if target_field is not None:
                target_field.resolve = source_field.resolve
                target_field.subscribe = source_field.subscribe
            else:
                logger.debug("Adding root field %s.%s from source graph", name, field_name)
                fields[field_name] = self.build_field(source_field)

    def _rebind(
        self,
        name: str,
        fields: dict[str, GraphQLField],
        source_type: GraphQLObjectType,
    ) -> None:
        for field_name, source_field in source_type.fields.items():
            if source_field.resolve is None:
                continue
            target_field = fields.get(field_name)
            if target_field is None:
                logger.debug(
                    "Dropping resolver %s.%s: field not present on target",
                    name,
                    field_name,
                )
                continue
            target_field.resolve = source_field.resolve

    def transplant(self) -> GraphQLSchema:
        return self.rebuild(self._target)


def transplant_resolvers(source: GraphQLSchema, target: GraphQLSchema) -> GraphQLSchema:
    """Transplant resolvers from ``source`` onto ``target``.

    Step 1, root operation types present in both graphs: for every source
    root field, copy ``resolve`` and ``subscribe`` onto the same-named target
    field (target type and arguments are kept), or add the source field when
    the target root lacks it.

    Step 2, object types present in both graphs: every source field with a
    resolver overwrites the ``resolve`` of the same-named target field.
    Fields the target lacks are dropped; ``subscribe`` is not copied.

    Neither input is modified; the result is a new graph with the target's
    shape, field order and directives.

    Args:
        source: Resolver-complete graph
        target: Authoritative graph shape

    Returns:
        A new graph.

    Example:
        >>> published = transplant_resolvers(source=executable_schema, target=code_first_schema)
    """
    return _TransplantRebuilder(source, target).transplant()
