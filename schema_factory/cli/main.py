"""Main CLI entry point for schema-factory commands."""

import click

from schema_factory.cli.commands import schema
from schema_factory.infra.logging.config import setup_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="schema-factory")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Schema Factory CLI - compose GraphQL schemas from SDL and Strawberry types.

    \b
    Quick Start:
      schema-factory compose myapp.graphql:config
      schema-factory compose myapp.graphql:config -o schema.graphql
      schema-factory definitions myapp.graphql:config --check
    """
    setup_logging()
    ctx.ensure_object(dict)


cli.add_command(schema.compose)
cli.add_command(schema.definitions)


def main() -> None:
    """Entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
