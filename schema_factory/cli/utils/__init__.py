"""CLI utilities for running async operations, loading targets and formatting output."""

from schema_factory.cli.utils.async_runner import coro
from schema_factory.cli.utils.formatters import error, info, success, warning
from schema_factory.cli.utils.loader import import_target, load_composer, load_config

__all__ = [
    "coro",
    "error",
    "import_target",
    "info",
    "load_composer",
    "load_config",
    "success",
    "warning",
]
