"""Graph rebuilding.

graphql-core types reference each other by object identity, so types taken
from different graphs cannot simply be put into one ``GraphQLSchema``. The
rebuilder creates fresh copies of named types from one or more definitions
per name and re-points every type reference (field types, arguments,
interfaces, union members, input fields) at those copies by name.

Fields, interfaces and union members are built lazily through thunks, which
makes cyclic references work and keeps the inputs untouched.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
import logging
from typing import Any

from graphql import (
    GraphQLArgument,
    GraphQLDirective,
    GraphQLEnumType,
    GraphQLField,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLList,
    GraphQLNamedType,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLSchema,
    GraphQLType,
    GraphQLUnionType,
    introspection_types,
    is_specified_directive,
    specified_scalar_types,
)

from schema_factory.core.exceptions import MissingRootError
from schema_factory.graphql.types import ROOT_OPERATIONS, root_types

logger = logging.getLogger(__name__)

__all__ = ["GraphRebuilder", "collect_definitions", "is_shared_type", "root_names"]


def is_shared_type(name: str) -> bool:
    """Check if a type is shared by every graph (introspection or built-in scalar)."""
    return name in introspection_types or name in specified_scalar_types


def collect_definitions(
    graphs: Iterable[GraphQLSchema],
) -> dict[str, list[GraphQLNamedType]]:
    """Group the named types of several graphs by name, in graph order."""
    definitions: dict[str, list[GraphQLNamedType]] = {}
    for graph in graphs:
        for name, named_type in graph.type_map.items():
            if is_shared_type(name):
                continue
            definitions.setdefault(name, []).append(named_type)
    return definitions


class GraphRebuilder:
    """Rebuild named types so every reference points into one type map.

    When a name has several definitions, fields (and enum values, union
    members, interfaces) are unioned in definition order; the last
    definition wins on collisions and for type-level metadata.

    Subclasses customise object fields by overriding ``object_fields``.

    Example:
        >>> rebuilder = GraphRebuilder(collect_definitions([schema_a, schema_b]))
        >>> merged = rebuilder.build_schema(
        ...     roots={"query": "Query"},
        ...     type_names=["Query", "User"],
        ... )
    """

    def __init__(self, definitions: Mapping[str, Sequence[GraphQLNamedType]]) -> None:
        self._definitions = definitions
        self._built: dict[str, GraphQLNamedType] = {}

    # ------------------------------------------------------------------
    # Named types
    # ------------------------------------------------------------------

    def named_type(self, name: str) -> GraphQLNamedType:
        """Return the rebuilt type for ``name``, building it on first use."""
        if name in introspection_types:
            return introspection_types[name]
        if name in specified_scalar_types:
            return specified_scalar_types[name]
        built = self._built.get(name)
        if built is None:
            definitions = self._definitions.get(name)
            if not definitions:
                msg = f"Unknown type '{name}'"
                raise KeyError(msg)
            built = self._build_named_type(name, definitions)
            self._built[name] = built
        return built

    def _build_named_type(
        self,
        name: str,
        definitions: Sequence[GraphQLNamedType],
    ) -> GraphQLNamedType:
        last = definitions[-1]
        kwargs: dict[str, Any] = last.to_kwargs()

        if isinstance(last, GraphQLObjectType):
            kwargs["fields"] = lambda: self.object_fields(name, definitions)
            kwargs["interfaces"] = lambda: self._interfaces(definitions)
            kwargs["is_type_of"] = _last_set(definitions, "is_type_of")
            return GraphQLObjectType(**kwargs)
        if isinstance(last, GraphQLInterfaceType):
            kwargs["fields"] = lambda: self.interface_fields(name, definitions)
            kwargs["interfaces"] = lambda: self._interfaces(definitions)
            kwargs["resolve_type"] = _last_set(definitions, "resolve_type")
            return GraphQLInterfaceType(**kwargs)
        if isinstance(last, GraphQLUnionType):
            kwargs["types"] = lambda: self._union_members(definitions)
            kwargs["resolve_type"] = _last_set(definitions, "resolve_type")
            return GraphQLUnionType(**kwargs)
        if isinstance(last, GraphQLInputObjectType):
            kwargs["fields"] = lambda: self._input_fields(definitions)
            return GraphQLInputObjectType(**kwargs)
        # Leaf types reference no other types and can be shared as they are
        if isinstance(last, GraphQLEnumType):
            if len(definitions) == 1:
                return last
            values: dict[str, Any] = {}
            for definition in definitions:
                values.update(definition.values)
            kwargs["values"] = values
            return GraphQLEnumType(**kwargs)
        if isinstance(last, GraphQLScalarType):
            return last

        msg = f"Unsupported type kind for '{name}': {type(last).__name__}"
        raise TypeError(msg)

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------

    def object_fields(
        self,
        name: str,
        definitions: Sequence[GraphQLNamedType],
    ) -> dict[str, GraphQLField]:
        """Build the fields of an object type."""
        return self._union_fields(definitions)

    def interface_fields(
        self,
        name: str,
        definitions: Sequence[GraphQLNamedType],
    ) -> dict[str, GraphQLField]:
        return self._union_fields(definitions)

    def _union_fields(self, definitions: Sequence[GraphQLNamedType]) -> dict[str, GraphQLField]:
        fields: dict[str, GraphQLField] = {}
        for definition in definitions:
            for field_name, field_def in definition.fields.items():
                fields[field_name] = field_def
        return {field_name: self.build_field(field_def) for field_name, field_def in fields.items()}

    def _interfaces(self, definitions: Sequence[GraphQLNamedType]) -> list[GraphQLInterfaceType]:
        names: dict[str, None] = {}
        for definition in definitions:
            for interface in definition.interfaces:
                names[interface.name] = None
        return [self.named_type(interface_name) for interface_name in names]

    def _union_members(self, definitions: Sequence[GraphQLNamedType]) -> list[GraphQLObjectType]:
        names: dict[str, None] = {}
        for definition in definitions:
            for member in definition.types:
                names[member.name] = None
        return [self.named_type(member_name) for member_name in names]

    def _input_fields(self, definitions: Sequence[GraphQLNamedType]) -> dict[str, GraphQLInputField]:
        fields: dict[str, GraphQLInputField] = {}
        for definition in definitions:
            fields.update(definition.fields)
        return {field_name: self.build_input_field(field_def) for field_name, field_def in fields.items()}

    def wrap(self, type_: GraphQLType) -> GraphQLType:
        """Re-point a (possibly wrapped) type reference at the rebuilt types."""
        if isinstance(type_, GraphQLNonNull):
            return GraphQLNonNull(self.wrap(type_.of_type))
        if isinstance(type_, GraphQLList):
            return GraphQLList(self.wrap(type_.of_type))
        return self.named_type(type_.name)

    def build_field(self, field_def: GraphQLField) -> GraphQLField:
        """Copy a field, keeping resolve/subscribe, with its types re-pointed."""
        kwargs: dict[str, Any] = field_def.to_kwargs()
        kwargs["type_"] = self.wrap(field_def.type)
        kwargs["args"] = {
            arg_name: self.build_argument(arg) for arg_name, arg in field_def.args.items()
        }
        return GraphQLField(**kwargs)

    def build_argument(self, arg: GraphQLArgument) -> GraphQLArgument:
        kwargs: dict[str, Any] = arg.to_kwargs()
        kwargs["type_"] = self.wrap(arg.type)
        return GraphQLArgument(**kwargs)

    def build_input_field(self, field_def: GraphQLInputField) -> GraphQLInputField:
        kwargs: dict[str, Any] = field_def.to_kwargs()
        kwargs["type_"] = self.wrap(field_def.type)
        return GraphQLInputField(**kwargs)

    def build_directive(self, directive: GraphQLDirective) -> GraphQLDirective:
        if is_specified_directive(directive):
            return directive
        kwargs: dict[str, Any] = directive.to_kwargs()
        kwargs["args"] = {
            arg_name: self.build_argument(arg) for arg_name, arg in directive.args.items()
        }
        return GraphQLDirective(**kwargs)

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------

    def root(self, operation: str, name: str | None) -> GraphQLObjectType | None:
        """Resolve a root pointer by type name.

        Raises:
            MissingRootError: If the name does not denote an object type.
        """
        if name is None:
            return None
        try:
            root_type = self.named_type(name)
        except KeyError as exc:
            raise MissingRootError(operation, name) from exc
        if not isinstance(root_type, GraphQLObjectType):
            raise MissingRootError(operation, name)
        return root_type

    def build_schema(
        self,
        roots: Mapping[str, str | None],
        type_names: Iterable[str],
        directives: Iterable[GraphQLDirective] = (),
        description: str | None = None,
        extensions: dict[str, Any] | None = None,
    ) -> GraphQLSchema:
        """Assemble a new graph from rebuilt types.

        Args:
            roots: Root type name per operation ('query', 'mutation', 'subscription')
            type_names: Named types to list explicitly (reachable types are
                added by graphql-core)
            directives: Directives to carry over
            description: Schema description
            extensions: Schema extensions

        Returns:
            The new graph.
        """
        root_kwargs = {
            operation: self.root(operation, roots.get(operation))
            for operation in ROOT_OPERATIONS
        }
        types = [self.named_type(name) for name in type_names if not name.startswith("__")]
        return GraphQLSchema(
            **root_kwargs,
            types=types,
            directives=[self.build_directive(directive) for directive in directives],
            description=description,
            extensions=extensions,
        )

    def rebuild(self, schema: GraphQLSchema) -> GraphQLSchema:
        """Rebuild ``schema`` with its own roots, types and directives."""
        return self.build_schema(
            roots=root_names(schema),
            type_names=schema.type_map.keys(),
            directives=schema.directives,
            description=schema.description,
            extensions=schema.extensions,
        )


def root_names(schema: GraphQLSchema) -> dict[str, str | None]:
    """Map each root operation to its type name (None when absent)."""
    return {
        operation: root_type.name if root_type is not None else None
        for operation, root_type in root_types(schema).items()
    }


def _last_set(definitions: Sequence[GraphQLNamedType], attribute: str) -> Any:
    for definition in reversed(definitions):
        value = getattr(definition, attribute, None)
        if value is not None:
            return value
    return None
