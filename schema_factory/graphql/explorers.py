"""Resolver and scalar explorers.

Explorers are registries that collect hand-written resolvers and scalar
hooks and hand them to the composer as plain resolver maps. Resolvers are
grouped by feature so a feature can be switched off without touching its
code.

Usage:
    resolvers = ResolverExplorer()

    @resolvers.field("Query", "hello", feature="greetings")
    def resolve_hello(_root, _info) -> str:
        return "world"

    resolvers.explore()  # {"Query": {"hello": ResolverBinding(resolve=resolve_hello)}}
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING, Any

from graphql import GraphQLObjectType

from schema_factory.graphql.types import ResolverBinding, ResolverBindingMap

if TYPE_CHECKING:
    from graphql import GraphQLSchema, GraphQLScalarType

logger = logging.getLogger(__name__)

__all__ = [
    "FeatureResolvers",
    "ResolverExplorer",
    "ScalarExplorer",
    "explore_schema_resolvers",
]

DEFAULT_FEATURE = "default"


@dataclass
class FeatureResolvers:
    """Container for a feature's resolvers.

    Attributes:
        name: Feature name (e.g., 'users', 'billing')
        bindings: Resolver bindings keyed by type name, then field name
        enabled: Whether this feature contributes to the schema
    """

    name: str
    bindings: ResolverBindingMap = field(default_factory=dict)
    enabled: bool = True


class ResolverExplorer:
    """Registry of hand-written field resolvers.

    Example:
        >>> explorer = ResolverExplorer()
        >>> explorer.register("Query", "ping", resolve=lambda *_: "pong")
        >>> explorer.disable("experimental")
        >>> explorer.explore()
    """

    def __init__(self) -> None:
        """Initialize the resolver registry."""
        self._features: dict[str, FeatureResolvers] = {}

    def _feature(self, name: str) -> FeatureResolvers:
        if name not in self._features:
            self._features[name] = FeatureResolvers(name=name)
        return self._features[name]

    def register(
        self,
        type_name: str,
        field_name: str,
        *,
        resolve: Callable[..., Any] | None = None,
        subscribe: Callable[..., Any] | None = None,
        feature: str = DEFAULT_FEATURE,
    ) -> None:
        """Register a resolver binding for one field.

        Args:
            type_name: GraphQL type name (e.g., 'Query')
            field_name: GraphQL field name as it appears in the schema
            resolve: Resolver function
            subscribe: Subscriber function (subscription root fields)
            feature: Feature the binding belongs to

        Raises:
            ValueError: If neither resolve nor subscribe is given.
        """
        if resolve is None and subscribe is None:
            msg = f"Binding for {type_name}.{field_name} needs resolve or subscribe"
            raise ValueError(msg)

        bindings = self._feature(feature).bindings.setdefault(type_name, {})
        if field_name in bindings:
            logger.warning(
                "Duplicate resolver %s.%s in feature '%s'. Using last definition.",
                type_name,
                field_name,
                feature,
            )
        bindings[field_name] = ResolverBinding(resolve=resolve, subscribe=subscribe)

    def field(
        self,
        type_name: str,
        field_name: str | None = None,
        *,
        feature: str = DEFAULT_FEATURE,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator registering a resolve function.

        The field name defaults to the function name with a ``resolve_``
        prefix removed.
        """

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            name = field_name or func.__name__.removeprefix("resolve_")
            self.register(type_name, name, resolve=func, feature=feature)
            return func

        return decorator

    def subscription(
        self,
        field_name: str | None = None,
        *,
        type_name: str = "Subscription",
        resolve: Callable[..., Any] | None = None,
        feature: str = DEFAULT_FEATURE,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator registering a subscribe function on the subscription root."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            name = field_name or func.__name__.removeprefix("subscribe_")
            self.register(type_name, name, resolve=resolve, subscribe=func, feature=feature)
            return func

        return decorator

    def enable(self, feature: str) -> None:
        self._feature(feature).enabled = True

    def disable(self, feature: str) -> None:
        self._feature(feature).enabled = False

    def get_feature(self, name: str) -> FeatureResolvers | None:
        """Get resolvers for a specific feature.

        Args:
            name: Feature name

        Returns:
            FeatureResolvers if feature exists, None otherwise
        """
        return self._features.get(name)

    def explore(self) -> ResolverBindingMap:
        """Collect bindings from all enabled features.

        Features are applied in registration order; a later feature wins on
        a (type, field) collision.

        Returns:
            A fresh resolver map.
        """
        result: ResolverBindingMap = {}
        for name, feature in self._features.items():
            if not feature.enabled:
                logger.debug("Skipping disabled feature: %s", name)
                continue
            for type_name, fields in feature.bindings.items():
                result.setdefault(type_name, {}).update(fields)
        return result


class ScalarExplorer:
    """Registry of custom scalar hooks.

    Each scalar contributes a binding per hook, keyed by hook name
    (``serialize``, ``parse_value``, ``parse_literal``).
    """

    def __init__(self) -> None:
        self._scalars: dict[str, dict[str, Callable[..., Any]]] = {}

    def register(
        self,
        name: str,
        *,
        serialize: Callable[..., Any] | None = None,
        parse_value: Callable[..., Any] | None = None,
        parse_literal: Callable[..., Any] | None = None,
    ) -> None:
        """Register hooks for a scalar.

        Args:
            name: Scalar type name (e.g., 'DateTime')
            serialize: Internal value to result value
            parse_value: Variable value to internal value
            parse_literal: AST literal to internal value
        """
        hooks = {
            "serialize": serialize,
            "parse_value": parse_value,
            "parse_literal": parse_literal,
        }
        self._scalars[name] = {hook: func for hook, func in hooks.items() if func is not None}

    def register_type(self, scalar: GraphQLScalarType) -> None:
        """Register hooks taken from an existing GraphQLScalarType."""
        self.register(
            scalar.name,
            serialize=scalar.serialize,
            parse_value=scalar.parse_value,
            parse_literal=scalar.parse_literal,
        )

    def explore(self) -> ResolverBindingMap:
        return {
            name: {hook: ResolverBinding(resolve=func) for hook, func in hooks.items()}
            for name, hooks in self._scalars.items()
        }


def explore_schema_resolvers(schema: GraphQLSchema) -> ResolverBindingMap:
    """Harvest resolver bindings already attached to a graph.

    Introspection types are skipped, as are fields without resolve or
    subscribe.

    Args:
        schema: Graph to read bindings from

    Returns:
        Resolver map of the bound fields.
    """
    result: ResolverBindingMap = {}
    for name, named_type in schema.type_map.items():
        if name.startswith("__") or not isinstance(named_type, GraphQLObjectType):
            continue
        bindings = {
            field_name: ResolverBinding(resolve=field_def.resolve, subscribe=field_def.subscribe)
            for field_name, field_def in named_type.fields.items()
            if field_def.resolve is not None or field_def.subscribe is not None
        }
        if bindings:
            result[name] = bindings
    return result
