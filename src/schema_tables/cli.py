"""Command line interface entry point."""

from __future__ import annotations

import dataclasses
import json
import logging
import sys

import click
import yaml

from schema_tables.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    ConversionSession,
    load_configuration,
    write_placeholder_configuration,
)
from schema_tables.document_loading import DocumentError, load_api_document, select_schema
from schema_tables.sample_synthesis import SampleSynthesizer
from schema_tables.schema_flattening import flatten_schema


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="openapi-schema-tables")
@click.option("--verbose", is_flag=True, default=False, help="Report diagnostics in full.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Schema table and example payload utility for OpenAPI documents."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a YAML configuration with the default values and guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


_DOCUMENT_ARGUMENT = click.argument("document_path", type=click.Path(path_type=str))
_POINTER_OPTION = click.option(
    "--pointer",
    required=True,
    help="JSON pointer of the schema to convert, e.g. '#/components/schemas/Pet'",
)
_CONFIG_OPTION = click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to the YAML conversion configuration",
)


@cli.command(name="flatten")
@_DOCUMENT_ARGUMENT
@_POINTER_OPTION
@_CONFIG_OPTION
@click.option("--offset", default=0, show_default=True, type=int, help="Indent offset for rows")
@click.pass_context
def flatten(
    ctx: click.Context, document_path: str, pointer: str, config_path: str | None, offset: int
) -> None:
    """Print the schema's rows grouped into blocks, as YAML."""
    session, _ = _open_session(ctx, document_path, config_path)
    try:
        schema = select_schema(session.document, pointer)
    except DocumentError as exc:
        raise CliError(str(exc)) from exc
    blocks = flatten_schema(schema, offset, context=session)
    click.echo(
        yaml.safe_dump(
            [block.to_mapping() for block in blocks], sort_keys=False, allow_unicode=True
        ),
        nl=False,
    )


@cli.command(name="sample")
@_DOCUMENT_ARGUMENT
@_POINTER_OPTION
@_CONFIG_OPTION
@click.pass_context
def sample(ctx: click.Context, document_path: str, pointer: str, config_path: str | None) -> None:
    """Print an example payload for the schema, as JSON."""
    session, configuration = _open_session(ctx, document_path, config_path)
    try:
        schema = select_schema(session.document, pointer)
    except DocumentError as exc:
        raise CliError(str(exc)) from exc
    example = SampleSynthesizer(session).sample(schema, configuration.sampler)
    click.echo(json.dumps(example, indent=2, default=str))


def _open_session(
    ctx: click.Context, document_path: str, config_path: str | None
) -> tuple[ConversionSession, Configuration]:
    try:
        configuration = load_configuration(config_path)
        document = load_api_document(document_path)
    except (ConfigurationError, DocumentError, OSError) as exc:
        raise CliError(str(exc)) from exc
    options = configuration.options
    if ctx.obj and ctx.obj.get("verbose"):
        options = dataclasses.replace(options, verbose=True)
    session = ConversionSession(
        document=document, options=options, translations=configuration.translations
    )
    return session, configuration


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
