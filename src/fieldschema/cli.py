"""CLI interface for fieldschema using Typer framework."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from fieldschema import __description__, __version__
from fieldschema.annotations import create_model_sample, generate_model_schema, import_model
from fieldschema.config import FieldSchemaConfig, LogLevel, load_config
from fieldschema.documents import load_json, write_json
from fieldschema.errors import FieldSchemaError
from fieldschema.schemas import SchemaValidator, check_schema, format_errors, schema_to_json

app = typer.Typer(
    name="fieldschema",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console(stderr=True)

_LOG_LEVELS = {
    LogLevel.ERROR.value: logging.ERROR,
    LogLevel.WARN.value: logging.WARNING,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.DEBUG.value: logging.DEBUG,
}


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=_LOG_LEVELS.get(level, logging.INFO),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        typer.echo(f"fieldschema version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True, help="Show version and exit")
    ] = False,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to .fieldschema.json (default: search upwards)")
    ] = None,
    log_level: Annotated[
        Optional[LogLevel],
        typer.Option("--log-level", help="Override the configured log level")
    ] = None,
) -> None:
    """fieldschema - JSON Schema generation and validation from field metadata."""
    try:
        config = load_config(config_path)
    except FieldSchemaError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    _setup_logging(log_level.value if log_level else config.logging.level)
    ctx.obj = config


def _emit(ctx: typer.Context, document: dict, out: Path | None, compact: bool) -> None:
    config: FieldSchemaConfig = ctx.obj
    pretty = config.output.pretty and not compact

    if out:
        written = write_json(
            document, out, pretty=pretty, indent=config.output.indent, ensure_ascii=config.output.ensure_ascii
        )
        console.print(f"[green]Written:[/green] {written}")
    else:
        typer.echo(schema_to_json(
            document, pretty=pretty, indent=config.output.indent, ensure_ascii=config.output.ensure_ascii
        ))


@app.command()
def generate(
    ctx: typer.Context,
    model: Annotated[str, typer.Argument(help="Root model as 'package.module:ClassName'")],
    out: Annotated[
        Optional[Path],
        typer.Option("--out", "-o", help="Write the schema to this file instead of stdout")
    ] = None,
    compact: Annotated[bool, typer.Option("--compact", help="Emit compact JSON")] = False,
    check: Annotated[
        Optional[bool],
        typer.Option("--check/--no-check", help="Check the schema against the JSON Schema meta-schema")
    ] = None,
) -> None:
    """Generate a JSON schema from an annotated model."""
    config: FieldSchemaConfig = ctx.obj
    if check is None:
        check = config.schema_.check_compliance

    try:
        schema = generate_model_schema(import_model(model))
        _emit(ctx, schema, out, compact)

        if check:
            problems = check_schema(schema)
            for problem in problems:
                console.print(f"[yellow]Schema compliance:[/yellow] {problem}")
            if problems:
                raise typer.Exit(1)
    except FieldSchemaError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def sample(
    ctx: typer.Context,
    model: Annotated[str, typer.Argument(help="Model as 'package.module:ClassName'")],
    out: Annotated[
        Optional[Path],
        typer.Option("--out", "-o", help="Write the sample to this file instead of stdout")
    ] = None,
    compact: Annotated[bool, typer.Option("--compact", help="Emit compact JSON")] = False,
) -> None:
    """Generate a sample JSON document from model defaults and examples."""
    try:
        _emit(ctx, create_model_sample(import_model(model)), out, compact)
    except FieldSchemaError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def validate(
    instance: Annotated[Path, typer.Argument(help="JSON instance document to validate")],
    schema: Annotated[
        Optional[Path],
        typer.Option("--schema", "-s", help="Schema file (default: the instance's $schema)")
    ] = None,
    model: Annotated[
        Optional[str],
        typer.Option("--model", "-m", help="Validate against the schema of 'package.module:ClassName'")
    ] = None,
) -> None:
    """Validate a JSON document against a schema."""
    if schema and model:
        console.print("[red]Error:[/red] Use either --schema or --model, not both")
        raise typer.Exit(1)

    try:
        validator = SchemaValidator(generate_model_schema(import_model(model)) if model else None)
        errors = validator.validate_file(instance, schema)
    except FieldSchemaError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not errors:
        typer.echo(f"{instance}: valid")
        return

    for message in format_errors(errors):
        typer.echo(message)
    console.print(f"[yellow]Found {len(errors)} validation issues[/yellow]")
    raise typer.Exit(1)


@app.command()
def check(
    schema: Annotated[Path, typer.Argument(help="Schema file to check against its meta-schema")],
) -> None:
    """Check that a schema document is itself a valid JSON Schema."""
    try:
        problems = check_schema(load_json(schema))
    except FieldSchemaError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if problems:
        for problem in problems:
            typer.echo(problem)
        raise typer.Exit(1)
    typer.echo(f"{schema}: valid schema")


if __name__ == "__main__":
    app()
