"""Tests for transplanting resolvers between graphs."""

from graphql import graphql_sync, print_schema
import pytest

from schema_factory.graphql.executable import build_executable_graph, parse_type_defs
from schema_factory.graphql.transplant import transplant_resolvers


def resolve_me(*_):
    return {"id": "1", "name": "ada"}


@pytest.mark.unit
class TestTransplantResolvers:
    def test_root_resolvers_copied_onto_target_shape(self):
        source = build_executable_graph(
            "type Query { me: User } type User { id: ID! name: String }",
            {"Query": {"me": resolve_me}},
        )
        target = parse_type_defs("type Query { me: User } type User { id: ID! name: String }")

        result = transplant_resolvers(source=source, target=target)

        assert result.query_type.fields["me"].resolve is resolve_me
        assert target.query_type.fields["me"].resolve is None
        assert graphql_sync(result, "{ me { id } }").data == {"me": {"id": "1"}}

    def test_missing_root_field_is_added(self):
        source = build_executable_graph(
            "type Query { health: Status } type Status { ok: Boolean }",
            {"Query": {"health": lambda *_: {"ok": True}}},
        )
        target = parse_type_defs("type Query { version: String }")

        result = transplant_resolvers(source=source, target=target)

        assert list(result.query_type.fields) == ["version", "health"]
        assert "Status" in result.type_map
        assert graphql_sync(result, "{ health { ok } }").data == {"health": {"ok": True}}

    def test_root_step_copies_subscribe(self):
        async def ticks(*_):
            yield 1

        source = build_executable_graph(
            "type Query { a: Int } type Subscription { ticks: Int }",
            {"Subscription": {"ticks": {"subscribe": ticks}}},
        )
        target = parse_type_defs("type Query { a: Int } type Subscription { ticks: Int }")

        result = transplant_resolvers(source=source, target=target)

        assert result.subscription_type.fields["ticks"].subscribe is ticks

    def test_root_step_copies_empty_resolvers(self):
        source = parse_type_defs("type Query { a: Int }")
        target = build_executable_graph("type Query { a: Int }", {"Query": {"a": lambda *_: 1}})

        result = transplant_resolvers(source=source, target=target)

        assert result.query_type.fields["a"].resolve is None

    def test_root_rebind_keeps_one_field_with_target_shape(self):
        def resolve_ping(_obj, _info, times=1):
            return "pong" * times

        source = build_executable_graph(
            "type Query { ping(times: Int): String }",
            {"Query": {"ping": resolve_ping}},
        )
        target = parse_type_defs("type Query { ping: Int! }")

        result = transplant_resolvers(source=source, target=target)

        ping = result.query_type.fields["ping"]
        assert list(result.query_type.fields) == ["ping"]
        assert str(ping.type) == "Int!"
        assert ping.args == {}
        assert ping.resolve is resolve_ping

    def test_non_root_fields_are_rebound_not_added(self):
        def resolve_name(user, _info):
            return user["name"].upper()

        source = build_executable_graph(
            "type Query { me: User } type User { id: ID! name: String extra: Int }",
            {"User": {"name": resolve_name, "extra": lambda *_: 1}},
        )
        target = parse_type_defs("type Query { me: User } type User { id: ID! name: String }")

        result = transplant_resolvers(source=source, target=target)

        user_type = result.type_map["User"]
        assert user_type.fields["name"].resolve is resolve_name
        assert list(user_type.fields) == ["id", "name"]

    def test_non_root_step_keeps_target_resolver_when_source_has_none(self):
        def target_name(*_):
            return "target"

        source = parse_type_defs("type Query { a: Int } type User { name: String }")
        target = build_executable_graph(
            "type Query { a: Int, u: User } type User { name: String }",
            {"User": {"name": target_name}},
        )

        result = transplant_resolvers(source=source, target=target)

        assert result.type_map["User"].fields["name"].resolve is target_name

    def test_target_shape_and_inputs_unchanged(self):
        source = build_executable_graph(
            "type Query { a: Int, b: Int }",
            {"Query": {"a": lambda *_: 1, "b": lambda *_: 2}},
        )
        target = parse_type_defs("type Query { b: Int, a: Int }")
        source_sdl = print_schema(source)
        target_sdl = print_schema(target)

        result = transplant_resolvers(source=source, target=target)

        assert list(result.query_type.fields) == ["b", "a"]
        assert print_schema(source) == source_sdl
        assert print_schema(target) == target_sdl
        assert target.query_type.fields["a"].resolve is None
