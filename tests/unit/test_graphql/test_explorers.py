"""Tests for resolver and scalar explorers."""

import logging

from graphql import GraphQLScalarType
import pytest

from schema_factory.graphql.executable import build_executable_graph
from schema_factory.graphql.explorers import (
    ResolverExplorer,
    ScalarExplorer,
    explore_schema_resolvers,
)
from schema_factory.graphql.types import ResolverBinding


@pytest.mark.unit
class TestResolverExplorer:
    """Test suite for ResolverExplorer."""

    def test_register_and_explore(self):
        explorer = ResolverExplorer()

        def ping(*_):
            return "pong"

        explorer.register("Query", "ping", resolve=ping)

        assert explorer.explore() == {"Query": {"ping": ResolverBinding(resolve=ping)}}

    def test_register_requires_a_function(self):
        explorer = ResolverExplorer()
        with pytest.raises(ValueError, match="Query.ping"):
            explorer.register("Query", "ping")

    def test_field_decorator_strips_prefix(self):
        explorer = ResolverExplorer()

        @explorer.field("Query")
        def resolve_hello(*_):
            return "world"

        @explorer.field("User", "fullName")
        def full_name(*_):
            return "Ada Lovelace"

        result = explorer.explore()
        assert result["Query"]["hello"].resolve is resolve_hello
        assert result["User"]["fullName"].resolve is full_name

    def test_subscription_decorator(self):
        explorer = ResolverExplorer()

        @explorer.subscription()
        async def subscribe_ticks(*_):
            yield 1

        binding = explorer.explore()["Subscription"]["ticks"]
        assert binding.subscribe is subscribe_ticks
        assert binding.resolve is None

    def test_disabled_feature_is_skipped(self):
        explorer = ResolverExplorer()
        explorer.register("Query", "stable", resolve=lambda *_: 1, feature="core")
        explorer.register("Query", "beta", resolve=lambda *_: 2, feature="experimental")

        explorer.disable("experimental")
        assert set(explorer.explore()["Query"]) == {"stable"}

        explorer.enable("experimental")
        assert set(explorer.explore()["Query"]) == {"stable", "beta"}

    def test_later_feature_wins(self):
        explorer = ResolverExplorer()

        def first(*_):
            return 1

        def second(*_):
            return 2

        explorer.register("Query", "value", resolve=first, feature="a")
        explorer.register("Query", "value", resolve=second, feature="b")

        assert explorer.explore()["Query"]["value"].resolve is second

    def test_duplicate_registration_warns(self, caplog):
        explorer = ResolverExplorer()
        explorer.register("Query", "value", resolve=lambda *_: 1)

        with caplog.at_level(logging.WARNING):
            explorer.register("Query", "value", resolve=lambda *_: 2)

        assert "Duplicate resolver Query.value" in caplog.text

    def test_get_feature(self):
        explorer = ResolverExplorer()
        explorer.register("Query", "a", resolve=lambda *_: 1, feature="users")

        feature = explorer.get_feature("users")
        assert feature is not None
        assert feature.enabled is True
        assert explorer.get_feature("missing") is None


@pytest.mark.unit
class TestScalarExplorer:
    """Test suite for ScalarExplorer."""

    def test_register_keeps_given_hooks_only(self):
        explorer = ScalarExplorer()
        explorer.register("Date", serialize=str)

        assert explorer.explore() == {"Date": {"serialize": ResolverBinding(resolve=str)}}

    def test_register_type(self):
        scalar = GraphQLScalarType("Upper", serialize=lambda value: str(value).upper())
        explorer = ScalarExplorer()

        explorer.register_type(scalar)

        hooks = explorer.explore()["Upper"]
        assert set(hooks) == {"serialize", "parse_value", "parse_literal"}
        assert hooks["serialize"].resolve("abc") == "ABC"


@pytest.mark.unit
def test_explore_schema_resolvers_harvests_bound_fields() -> None:
    def me(*_):
        return {"id": "1"}

    schema = build_executable_graph(
        "type Query { me: User, other: String } type User { id: ID! }",
        {"Query": {"me": me}},
    )

    assert explore_schema_resolvers(schema) == {"Query": {"me": ResolverBinding(resolve=me)}}
