import logging
from pathlib import Path

import click

from .errors import CodegenError
from .pipeline import CodeGeneratorConfig, PipelineGenerator, load_document
from .pipeline.backends import BACKENDS
from .pipeline.config import DumpFormat
from .pipeline.converter import convert
from .pipeline.ir.serialize import dump_module


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(config_path: str | None) -> CodeGeneratorConfig:
    if config_path is None:
        return CodeGeneratorConfig()
    return CodeGeneratorConfig.from_dict(load_document(config_path))


@click.group()
def openapi_to_code():
    """Generate typed bindings from OpenAPI documents."""


@openapi_to_code.command()
@click.option("--target", "-t", default="rust", type=str, help=f"Target language ({', '.join(sorted(BACKENDS))})")
@click.option("--config", "-c", default=None, type=click.Path(dir_okay=False, resolve_path=True), help="JSON or YAML config file")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log conversion details")
@click.argument("schema", type=click.Path(dir_okay=False, resolve_path=True))
@click.argument("output", type=click.Path(file_okay=False, resolve_path=True))
def generate(target, config, verbose, schema, output):
    """Generate bindings for SCHEMA into the OUTPUT directory."""
    _setup_logging(verbose)
    try:
        codegen = PipelineGenerator(load_document(schema), _load_config(config), target, source=schema)
        codegen.write(Path(output))
    except CodegenError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Generated {target} bindings in {output}")


@openapi_to_code.command("dump-ir")
@click.option("--format", "-f", "format_name", default=DumpFormat.JSON.value, type=str, help="Dump format (json, yaml)")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log conversion details")
@click.argument("schema", type=click.Path(dir_okay=False, resolve_path=True))
def dump_ir(format_name, verbose, schema):
    """Print the intermediate representation of SCHEMA."""
    _setup_logging(verbose)
    try:
        module = convert(load_document(schema), source=schema)
        click.echo(dump_module(module, format_name).rstrip("\n"))
    except CodegenError as e:
        raise click.ClickException(str(e)) from e
