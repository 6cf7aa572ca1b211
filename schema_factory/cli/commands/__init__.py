"""CLI command modules."""

from schema_factory.cli.commands import schema

__all__ = ["schema"]
