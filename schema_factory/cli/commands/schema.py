"""Schema composition commands."""

from pathlib import Path
import sys

import click
from graphql import print_schema

from schema_factory.cli.utils import (
    coro,
    error,
    info,
    load_composer,
    load_config,
    success,
    warning,
)
from schema_factory.core.exceptions import SchemaCompositionError
from schema_factory.graphql.types import SchemaArtifact


def _write_if_stale(artifact: SchemaArtifact) -> bool:
    """Write an artifact to its path unless the file already matches."""
    if artifact.path is None or not artifact.is_stale(artifact.read_existing()):
        return False
    artifact.path.parent.mkdir(parents=True, exist_ok=True)
    artifact.path.write_text(artifact.text, encoding="utf-8")
    return True


@click.command()
@click.argument("target")
@click.option(
    "--composer",
    "composer_target",
    default=None,
    help="SchemaComposer instance as module:attribute (default: a bare composer)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the composed SDL here instead of stdout",
)
@click.option(
    "--write-artifact/--no-write-artifact",
    default=True,
    help="Write the code-first SDL artifact to auto_schema_file when it changed",
)
@coro
async def compose(
    target: str,
    composer_target: str | None,
    output: Path | None,
    write_artifact: bool,
) -> None:
    """Compose the schema described by TARGET and print its SDL.

    TARGET is a CompositionConfig, or a zero-argument callable returning one,
    given as module:attribute.
    """
    config = load_config(target)
    composer = load_composer(composer_target)

    try:
        result = await composer.merge_options(config)
    except SchemaCompositionError as e:
        error(f"{e.title}: {e.detail}")
        sys.exit(1)

    info(f"Composed schema in {result.mode} mode")

    if write_artifact and result.artifact is not None:
        if _write_if_stale(result.artifact):
            success(f"Wrote code-first SDL to {result.artifact.path}")

    sdl = print_schema(result.schema)
    if output is None:
        click.echo(sdl)
        return

    if _write_if_stale(SchemaArtifact(path=output, text=sdl + "\n")):
        success(f"Wrote schema to {output}")
    else:
        info(f"{output} is up to date")


@click.command()
@click.argument("target")
@click.option(
    "--check",
    is_flag=True,
    default=False,
    help="Exit with status 1 if the definitions file is out of date instead of writing it",
)
@coro
async def definitions(target: str, check: bool) -> None:
    """Generate Python definitions for the type definitions of TARGET."""
    config = load_config(target)
    composer = load_composer(None)

    try:
        artifact = await composer.generate_definitions(config)
    except SchemaCompositionError as e:
        error(f"{e.title}: {e.detail}")
        sys.exit(1)

    if artifact is None:
        warning("No type definitions or definitions options configured; nothing to generate")
        return

    if check:
        if artifact.is_stale(artifact.read_existing()):
            error(f"{artifact.path} is out of date")
            sys.exit(1)
        success(f"{artifact.path} is up to date")
        return

    if _write_if_stale(artifact):
        success(f"Wrote definitions to {artifact.path}")
    else:
        info(f"{artifact.path} is up to date")
