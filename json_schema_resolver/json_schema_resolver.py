import json
import logging

import click

from .config import ResolverConfig
from .discovery import discover_schema_files
from .exceptions import UnresolvableFilesError
from .report import render_text_report, result_to_dict
from .resolver import DependencyResolver
from .schema_file_parser import SchemaFileParser


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--pattern", "-p", default=None, type=str, help="Glob pattern for schema files inside directories")
@click.option("--output", "-o", default=None, type=click.Path(resolve_path=True), help="Write a JSON report to this file")
@click.option("--show-types", is_flag=True, default=False, help="List every resolved type with its defining file")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, resolve_path=True))
def json_schema_resolver(config, pattern, output, show_types, verbose, paths):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if config is not None:
        with open(config) as f:
            config = ResolverConfig.from_dict(json.load(f))
    else:
        config = ResolverConfig()

    # CLI flag overrides config file
    if pattern is not None:
        config.pattern = pattern

    source_files = discover_schema_files(paths, pattern=config.pattern, recursive=config.recursive)
    if not source_files:
        raise click.ClickException("No schema files found")

    try:
        result = DependencyResolver(SchemaFileParser(config.encoding), config).resolve(source_files)
    except UnresolvableFilesError as e:
        # fail_on_unresolved stops before any report is written
        raise click.ClickException(str(e))

    click.echo(render_text_report(result, show_types=show_types), nl=False)

    if output is not None:
        with open(output, "w") as f:
            json.dump(result_to_dict(result), f, indent=2)

    if not result.succeeded:
        raise click.ClickException(f"{len(result.failed_files)} file(s) could not be resolved")
