"""Command-line interface for Trellis."""

import logging
import sys
from pathlib import Path

import click

from .augment.pipeline import augment_schema
from .graph.builder import build_relationship_graph
from .output.formatter import format_augmentation_result, format_relationships
from .schema.config import AugmentationConfig
from .schema.errors import AugmentationError, SchemaLoadError, SchemaValidationError
from .schema.loader import load_config, load_type_map


def _load_inputs(schema_file: str, config_file: str | None):
    """Load the type map and config, exiting with 2 on file or config errors."""
    try:
        type_map = load_type_map(schema_file)
        config = load_config(config_file) if config_file else AugmentationConfig()
    except SchemaLoadError as e:
        click.echo(f"Error loading file: {e}", err=True)
        sys.exit(2)
    except SchemaValidationError as e:
        click.echo(f"Config validation error: {e}", err=True)
        for err in e.errors:
            click.echo(f"  - {err['loc']}: {err['msg']}", err=True)
        sys.exit(2)
    return type_map, config


@click.group()
@click.version_option()
def main():
    """Trellis: GraphQL schema augmentation for graph databases."""
    pass


@main.command()
@click.argument("schema_file", type=click.Path(exists=True))
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True),
    default=None,
    help="YAML augmentation config",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["sdl", "json"]),
    default="sdl",
    help="Output format",
)
@click.option(
    "--output",
    "output_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the output to a file instead of stdout",
)
@click.option(
    "--verbose",
    is_flag=True,
    default=False,
    help="Log each generated type and operation",
)
def augment(
    schema_file: str,
    config_file: str | None,
    output_format: str,
    output_file: str | None,
    verbose: bool,
):
    """Augment a GraphQL schema with generated queries and mutations.

    SCHEMA_FILE is the path to a GraphQL SDL file.

    Exit codes:
      0 - Augmentation succeeded
      1 - Structural error in the schema's relationships
      2 - File, SDL or config error
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    type_map, config = _load_inputs(schema_file, config_file)

    try:
        result = augment_schema(type_map, config=config)
    except AugmentationError as e:
        click.echo(f"Augmentation error: {e}", err=True)
        sys.exit(1)

    output = format_augmentation_result(result, output_format)  # type: ignore
    if output_file:
        Path(output_file).write_text(output + "\n", encoding="utf-8")
        click.echo(
            f"Wrote {output_file}: {len(result.added_types)} types, "
            f"{len(result.queries)} queries, {len(result.mutations)} mutations added"
        )
    else:
        click.echo(output)
    sys.exit(0)


@main.command()
@click.argument("schema_file", type=click.Path(exists=True))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
def relationships(schema_file: str, output_format: str):
    """List the relationships declared in a GraphQL schema.

    SCHEMA_FILE is the path to a GraphQL SDL file.

    Both notations are listed as one relationship when they declare the
    same name and endpoints.

    Exit codes:
      0 - Success
      1 - Structural error in the schema's relationships
      2 - File or SDL error
    """
    type_map, _ = _load_inputs(schema_file, None)

    try:
        graph = build_relationship_graph(type_map)
    except AugmentationError as e:
        click.echo(f"Relationship error: {e}", err=True)
        sys.exit(1)

    click.echo(format_relationships(graph, output_format))  # type: ignore
    sys.exit(0)


if __name__ == "__main__":
    main()
