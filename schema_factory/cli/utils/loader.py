"""Import ``module:attribute`` targets named on the command line."""

from __future__ import annotations

import importlib
from typing import Any

import click

from schema_factory.graphql.config import CompositionConfig
from schema_factory.graphql.schema_composer import SchemaComposer


def import_target(target: str) -> Any:
    """Import the object named by ``package.module:attribute``.

    Raises:
        click.BadParameter: If the target is malformed or cannot be imported.
    """
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        msg = f"expected 'module:attribute', got {target!r}"
        raise click.BadParameter(msg)

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        msg = f"cannot import module {module_name!r}: {exc}"
        raise click.BadParameter(msg) from exc

    obj: Any = module
    for part in attribute.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            msg = f"module {module_name!r} has no attribute {attribute!r}"
            raise click.BadParameter(msg) from exc
    return obj


def load_config(target: str) -> CompositionConfig:
    """Load a CompositionConfig, or call a zero-argument factory returning one."""
    obj = import_target(target)
    if callable(obj) and not isinstance(obj, CompositionConfig):
        obj = obj()
    if not isinstance(obj, CompositionConfig):
        msg = f"{target!r} is a {type(obj).__name__}, expected CompositionConfig"
        raise click.BadParameter(msg)
    return obj


def load_composer(target: str | None) -> SchemaComposer:
    """Load a SchemaComposer instance, or build a default one."""
    if target is None:
        return SchemaComposer()
    obj = import_target(target)
    if not isinstance(obj, SchemaComposer):
        msg = f"{target!r} is a {type(obj).__name__}, expected SchemaComposer"
        raise click.BadParameter(msg)
    return obj
