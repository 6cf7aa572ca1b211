"""Python definitions generated from SDL.

Renders a Python module mirroring a schema-first graph so resolvers and
clients can be type-checked against it:

- enums become ``StrEnum`` classes, custom scalars and unions ``type`` aliases;
- object, interface and input types become keyword-only dataclasses
  (``output_as="class"``) or ``TypedDict`` classes (``output_as="interface"``);
- root types become abstract ``IQuery``/``IMutation``/``ISubscription``
  classes with one method per field.

The result is returned as a ``SchemaArtifact``; callers compare it against
the current file with ``is_stale`` and write it themselves.
"""

from __future__ import annotations

from collections.abc import Sequence
import keyword
import logging
from pathlib import Path
from typing import Literal

from graphql import (
    GraphQLEnumType,
    GraphQLField,
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
    is_specified_scalar_type,
)
from pydantic import BaseModel, ConfigDict

from schema_factory.graphql.executable import parse_type_defs
from schema_factory.graphql.type_defs import merge_type_defs, remove_placeholder_fields
from schema_factory.graphql.types import SchemaArtifact, root_types

logger = logging.getLogger(__name__)

__all__ = ["DefinitionsOptions", "DefinitionsRenderer", "generate_definitions"]

HEADER = '"""Generated from GraphQL type definitions. Do not edit."""'

BUILTIN_SCALARS: dict[str, str] = {
    "ID": "str",
    "String": "str",
    "Int": "int",
    "Float": "float",
    "Boolean": "bool",
}


class DefinitionsOptions(BaseModel):
    """Options for rendering Python definitions."""

    model_config = ConfigDict(frozen=True)

    path: Path
    output_as: Literal["class", "interface"] = "class"
    emit_typename_field: bool = False
    skip_resolver_args: bool = False


def _identifier(name: str) -> str:
    return f"{name}_" if keyword.iskeyword(name) else name


class DefinitionsRenderer:
    """Render one graph into Python source."""

    def __init__(self, schema: GraphQLSchema, options: DefinitionsOptions) -> None:
        self.schema = schema
        self.options = options
        self._imports: dict[str, set[str]] = {}
        self._root_names = {
            operation: root_type.name
            for operation, root_type in root_types(schema).items()
            if root_type is not None
        }

    def _import(self, module: str, name: str) -> None:
        self._imports.setdefault(module, set()).add(name)

    # ------------------------------------------------------------------
    # Annotations
    # ------------------------------------------------------------------

    def annotation(self, type_: GraphQLType) -> str:
        if isinstance(type_, GraphQLNonNull):
            return self._required(type_.of_type)
        return f"{self._required(type_)} | None"

    def _required(self, type_: GraphQLType) -> str:
        if isinstance(type_, GraphQLList):
            return f"list[{self.annotation(type_.of_type)}]"
        return BUILTIN_SCALARS.get(type_.name, type_.name)

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def render_scalar(self, scalar: GraphQLScalarType) -> list[str]:
        self._import("typing", "Any")
        return [f"type {scalar.name} = Any"]

    def render_enum(self, enum_type: GraphQLEnumType) -> list[str]:
        self._import("enum", "StrEnum")
        lines = [f"class {enum_type.name}(StrEnum):"]
        lines.extend(
            f'    {_identifier(value_name)} = "{value_name}"' for value_name in enum_type.values
        )
        return lines

    def render_union(self, union: GraphQLUnionType) -> list[str]:
        members = " | ".join(member.name for member in union.types)
        return [f"type {union.name} = {members}"]

    def render_record(
        self,
        named_type: GraphQLObjectType | GraphQLInterfaceType | GraphQLInputObjectType,
    ) -> list[str]:
        interfaces = [] if isinstance(named_type, GraphQLInputObjectType) else named_type.interfaces
        inherited = {name for interface in interfaces for name in interface.fields}
        as_class = self.options.output_as == "class"

        if as_class:
            self._import("dataclasses", "dataclass")
            lines = ["@dataclass(kw_only=True)"]
            bases = [interface.name for interface in interfaces]
        else:
            self._import("typing", "TypedDict")
            lines = []
            bases = [interface.name for interface in interfaces] or ["TypedDict"]
        lines.append(f"class {named_type.name}({', '.join(bases)}):" if bases else f"class {named_type.name}:")

        body: list[str] = []
        if self.options.emit_typename_field and isinstance(named_type, GraphQLObjectType):
            self._import("typing", "Literal")
            if as_class:
                body.append(f'    typename: Literal["{named_type.name}"] = "{named_type.name}"')
            else:
                self._import("typing", "NotRequired")
                body.append(f'    typename: NotRequired[Literal["{named_type.name}"]]')

        for field_name, field_def in named_type.fields.items():
            if field_name in inherited:
                continue
            annotation = self.annotation(field_def.type)
            required = isinstance(field_def.type, GraphQLNonNull)
            name = _identifier(field_name)
            if required:
                body.append(f"    {name}: {annotation}")
            elif as_class:
                body.append(f"    {name}: {annotation} = None")
            else:
                self._import("typing", "NotRequired")
                body.append(f"    {name}: NotRequired[{annotation}]")

        lines.extend(body or ["    pass"])
        return lines

    def render_root(self, root_type: GraphQLObjectType) -> list[str]:
        self._import("abc", "ABC")
        self._import("abc", "abstractmethod")
        lines = [f"class I{root_type.name}(ABC):"]
        for index, (field_name, field_def) in enumerate(root_type.fields.items()):
            if index:
                lines.append("")
            lines.extend(
                [
                    "    @abstractmethod",
                    f"    def {_identifier(field_name)}({self._parameters(field_def)}) -> {self.annotation(field_def.type)}: ...",
                ],
            )
        if not root_type.fields:
            lines.append("    pass")
        return lines

    def _parameters(self, field_def: GraphQLField) -> str:
        if self.options.skip_resolver_args or not field_def.args:
            return "self"
        params = ["self", "*"]
        for arg_name, arg in field_def.args.items():
            annotation = self.annotation(arg.type)
            if isinstance(arg.type, GraphQLNonNull):
                params.append(f"{_identifier(arg_name)}: {annotation}")
            else:
                params.append(f"{_identifier(arg_name)}: {annotation} = None")
        return ", ".join(params)

    # ------------------------------------------------------------------
    # Module
    # ------------------------------------------------------------------

    def _ordered_types(self) -> list[GraphQLNamedType]:
        named_types = [
            named_type
            for name, named_type in self.schema.type_map.items()
            if not name.startswith("__") and not is_specified_scalar_type(named_type)
        ]
        order = (
            GraphQLScalarType,
            GraphQLEnumType,
            GraphQLInterfaceType,
            GraphQLInputObjectType,
            GraphQLObjectType,
            GraphQLUnionType,
        )
        grouped: list[GraphQLNamedType] = []
        for cls in order:
            group = [named_type for named_type in named_types if isinstance(named_type, cls)]
            if cls is GraphQLInterfaceType:
                group = _interfaces_first(group)
            grouped.extend(group)
        return grouped

    def render(self) -> str:
        roots = set(self._root_names.values())
        blocks: list[list[str]] = []
        for named_type in self._ordered_types():
            if isinstance(named_type, GraphQLScalarType):
                blocks.append(self.render_scalar(named_type))
            elif isinstance(named_type, GraphQLEnumType):
                blocks.append(self.render_enum(named_type))
            elif isinstance(named_type, GraphQLUnionType):
                blocks.append(self.render_union(named_type))
            elif named_type.name in roots:
                blocks.append(self.render_root(named_type))
            else:
                blocks.append(self.render_record(named_type))

        sections = [HEADER, "from __future__ import annotations"]
        import_lines = [
            f"from {module} import {', '.join(sorted(names))}"
            for module, names in sorted(self._imports.items())
        ]
        if import_lines:
            sections.append("\n".join(import_lines))
        sections.extend("\n".join(block) for block in blocks)
        return "\n\n\n".join(sections) + "\n"


def _interfaces_first(interfaces: list[GraphQLNamedType]) -> list[GraphQLNamedType]:
    """Order interfaces so every interface follows the ones it implements."""
    ordered: dict[str, GraphQLNamedType] = {}

    def visit(interface: GraphQLInterfaceType) -> None:
        if interface.name in ordered:
            return
        for parent in interface.interfaces:
            visit(parent)
        ordered[interface.name] = interface

    for interface in interfaces:
        visit(interface)
    return list(ordered.values())


def generate_definitions(
    type_defs: str | Sequence[str] | None,
    options: DefinitionsOptions | None,
) -> SchemaArtifact | None:
    """Render Python definitions for SDL type definitions.

    Args:
        type_defs: One or more SDL sources
        options: Rendering options; None disables generation

    Returns:
        The artifact, or None when there is nothing to generate.

    Raises:
        InvalidDefinitionError: If the SDL is invalid.
    """
    if not type_defs or options is None:
        return None

    schema = remove_placeholder_fields(parse_type_defs(merge_type_defs(type_defs)))
    text = DefinitionsRenderer(schema, options).render()
    logger.debug("Rendered definitions for %d types", len(schema.type_map))
    return SchemaArtifact(path=options.path, text=text)
