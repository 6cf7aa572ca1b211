"""Tests for building executable graphs from SDL."""

from graphql import graphql_sync
import pytest

from schema_factory.core.exceptions import InvalidDefinitionError
from schema_factory.graphql.executable import build_executable_graph, parse_type_defs
from schema_factory.graphql.types import ResolverBinding, ResolverValidationOptions

SDL = """
scalar Date

interface Node { id: ID! }

type User implements Node {
  id: ID!
  name: String
  joined: Date
}

union SearchResult = User

enum Role { ADMIN MEMBER }

type Query {
  me: User
  node(id: ID!): Node
  search: [SearchResult!]!
}
"""


@pytest.mark.unit
class TestParseTypeDefs:
    def test_parses_list_of_sources(self):
        schema = parse_type_defs(["type Query { a: Int }", "", "type Extra { b: Int }"])
        assert set(schema.query_type.fields) == {"a"}
        assert "Extra" in schema.type_map

    def test_syntax_error(self):
        with pytest.raises(InvalidDefinitionError) as exc_info:
            parse_type_defs("type Query {")
        assert exc_info.value.extra["errors"]

    def test_unknown_type(self):
        with pytest.raises(InvalidDefinitionError, match="Usr"):
            parse_type_defs("type Query { me: Usr }")

    def test_structurally_invalid(self):
        with pytest.raises(InvalidDefinitionError):
            parse_type_defs("type Query { a: Int } type Empty")


@pytest.mark.unit
class TestBuildExecutableGraph:
    def test_resolvers_are_bound_and_executable(self):
        schema = build_executable_graph(
            SDL,
            {
                "Query": {"me": lambda *_: {"id": "1", "name": "Ada"}},
                "User": {"name": lambda user, _info: user["name"].upper()},
            },
        )

        result = graphql_sync(schema, "{ me { id name } }")

        assert result.errors is None
        assert result.data == {"me": {"id": "1", "name": "ADA"}}

    def test_subscribe_binding(self):
        async def ticks(*_):
            yield 1

        schema = build_executable_graph(
            "type Query { a: Int } type Subscription { ticks: Int }",
            {"Subscription": {"ticks": ResolverBinding(subscribe=ticks)}},
        )

        assert schema.subscription_type.fields["ticks"].subscribe is ticks

    def test_scalar_hooks(self):
        schema = build_executable_graph(
            SDL,
            {
                "Date": {"serialize": lambda value: f"D:{value}"},
                "Query": {"me": lambda *_: {"id": "1", "joined": "2024"}},
            },
        )

        result = graphql_sync(schema, "{ me { joined } }")
        assert result.data == {"me": {"joined": "D:2024"}}

    def test_serialize_hook_on_fresh_scalar(self):
        schema = build_executable_graph(
            "scalar Shout type Query { g: Shout }",
            {"Shout": {"serialize": lambda value: f"{value}!"}, "Query": {"g": lambda *_: "hi"}},
        )

        result = graphql_sync(schema, "{ g }")
        assert result.errors is None
        assert result.data == {"g": "hi!"}

    def test_input_hooks(self):
        schema = build_executable_graph(
            "scalar Tag type Query { echo(tag: Tag): String }",
            {
                "Tag": {
                    "parse_value": lambda value: f"V:{value}",
                    "parse_literal": lambda node, *_: f"L:{node.value}",
                },
                "Query": {"echo": lambda _obj, _info, tag: tag},
            },
        )

        literal = graphql_sync(schema, '{ echo(tag: "a") }')
        variable = graphql_sync(
            schema,
            "query ($t: Tag) { echo(tag: $t) }",
            variable_values={"t": "b"},
        )

        assert literal.errors is None
        assert literal.data == {"echo": "L:a"}
        assert variable.errors is None
        assert variable.data == {"echo": "V:b"}

    def test_unknown_scalar_hook(self):
        with pytest.raises(InvalidDefinitionError, match="format"):
            build_executable_graph(SDL, {"Date": {"format": str}})

    def test_builtin_scalar_cannot_be_overridden(self):
        with pytest.raises(InvalidDefinitionError, match="built-in"):
            build_executable_graph(SDL, {"String": {"serialize": str}})

    def test_resolve_type_on_interface_and_union(self):
        def resolve_type(*_):
            return "User"

        schema = build_executable_graph(
            SDL,
            {
                "Node": {"__resolve_type": resolve_type},
                "SearchResult": {"__resolve_type": resolve_type},
                "Query": {"node": lambda _root, _info, id: {"id": id}},
            },
        )

        assert schema.type_map["Node"].resolve_type is resolve_type
        assert schema.type_map["SearchResult"].resolve_type is resolve_type
        result = graphql_sync(schema, '{ node(id: "7") { id ... on User { id } } }')
        assert result.errors is None
        assert result.data == {"node": {"id": "7"}}

    def test_is_type_of_on_object(self):
        def is_user(*_):
            return True

        schema = build_executable_graph(SDL, {"User": {"__is_type_of": is_user}})
        assert schema.type_map["User"].is_type_of is is_user

    def test_enum_cannot_take_resolvers(self):
        with pytest.raises(InvalidDefinitionError, match="Role"):
            build_executable_graph(SDL, {"Role": {"ADMIN": lambda *_: 1}})

    def test_resolver_for_missing_type(self):
        with pytest.raises(InvalidDefinitionError, match="Missing"):
            build_executable_graph(SDL, {"Missing": {"a": lambda *_: 1}})

    def test_resolver_for_missing_field(self):
        with pytest.raises(InvalidDefinitionError, match="Query.nope"):
            build_executable_graph(SDL, {"Query": {"nope": lambda *_: 1}})

    def test_resolvers_not_in_schema_allowed(self):
        options = ResolverValidationOptions(allow_resolvers_not_in_schema=True)

        schema = build_executable_graph(
            SDL,
            {"Missing": {"a": lambda *_: 1}, "Query": {"nope": lambda *_: 1}},
            options,
        )

        assert "nope" not in schema.query_type.fields

    def test_abstract_types_require_resolvers_when_configured(self):
        options = ResolverValidationOptions(require_resolvers_for_abstract_types=True)

        with pytest.raises(InvalidDefinitionError) as exc_info:
            build_executable_graph(SDL, {}, options)

        assert exc_info.value.extra["types"] == ["Node", "SearchResult"]

    def test_abstract_types_satisfied(self):
        options = ResolverValidationOptions(require_resolvers_for_abstract_types=True)
        resolve_type = {"__resolve_type": lambda *_: "User"}

        schema = build_executable_graph(
            SDL,
            {"Node": resolve_type, "SearchResult": resolve_type},
            options,
        )

        assert schema.query_type is not None
