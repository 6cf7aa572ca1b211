"""Resolver map building.

Resolver maps are nested mappings ``type name -> field name -> binding``.
User-facing maps may hold plain callables or ``{"resolve": ..., "subscribe": ...}``
dicts; they are normalized to ``ResolverBinding`` before merging.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import logging
from typing import Any

from schema_factory.graphql.types import ResolverBinding, ResolverBindingMap

logger = logging.getLogger(__name__)

__all__ = [
    "build_resolver_map",
    "count_bindings",
    "extend",
    "normalize_binding",
    "normalize_resolvers",
]


def normalize_binding(value: Any) -> ResolverBinding:
    """Coerce one resolver map value into a ResolverBinding.

    Args:
        value: A ResolverBinding, a callable, or a dict with ``resolve``
            and/or ``subscribe`` keys.

    Returns:
        The normalized binding.

    Raises:
        TypeError: If the value cannot be interpreted as a binding.
    """
    if isinstance(value, ResolverBinding):
        return value
    if isinstance(value, Mapping):
        unknown = set(value) - {"resolve", "subscribe"}
        if unknown:
            msg = f"Unknown resolver binding keys: {', '.join(sorted(unknown))}"
            raise TypeError(msg)
        return ResolverBinding(resolve=value.get("resolve"), subscribe=value.get("subscribe"))
    if callable(value):
        return ResolverBinding(resolve=value)
    msg = f"Cannot use {value!r} as a resolver binding"
    raise TypeError(msg)


def normalize_resolvers(
    resolvers: Mapping[str, Mapping[str, Any]] | None,
) -> ResolverBindingMap:
    """Normalize a user-supplied resolver mapping.

    Returns a new map; the input is not modified.
    """
    if not resolvers:
        return {}
    return {
        type_name: {
            field_name: normalize_binding(value)
            for field_name, value in fields.items()
        }
        for type_name, fields in resolvers.items()
    }


def extend(
    base: Mapping[str, Mapping[str, Any]] | None,
    override: Mapping[str, Mapping[str, Any]] | None,
) -> ResolverBindingMap:
    """Merge two resolver maps key-wise, ``override`` winning on collision.

    Example:
        >>> extend({"Date": {"serialize": f}}, {"Query": {"hello": g}})
        {'Date': {'serialize': ResolverBinding(resolve=f, ...)},
         'Query': {'hello': ResolverBinding(resolve=g, ...)}}
    """
    result = normalize_resolvers(base)
    for type_name, fields in normalize_resolvers(override).items():
        merged = dict(result.get(type_name, {}))
        for field_name, binding in fields.items():
            if field_name in merged:
                logger.debug(
                    "Resolver %s.%s overridden by a later map",
                    type_name,
                    field_name,
                )
            merged[field_name] = binding
        result[type_name] = merged
    return result


def build_resolver_map(
    scalar_map: Mapping[str, Mapping[str, Any]] | None,
    general_map: Mapping[str, Mapping[str, Any]] | None,
    *more: Mapping[str, Mapping[str, Any]] | None,
) -> ResolverBindingMap:
    """Combine scalar and general resolver maps into one.

    Scalar bindings form the base layer; general resolvers, then any further
    maps, are layered on top in order.

    Args:
        scalar_map: Bindings from the scalar explorer.
        general_map: Bindings from the resolver explorer.
        *more: Additional maps, each overriding the ones before it.

    Returns:
        The combined resolver map.
    """
    result = extend(scalar_map, general_map)
    for layer in more:
        result = extend(result, layer)
    return result


def count_bindings(resolvers: Mapping[str, Mapping[str, Callable[..., Any] | ResolverBinding]]) -> int:
    """Count (type, field) entries in a resolver map."""
    return sum(len(fields) for fields in resolvers.values())
