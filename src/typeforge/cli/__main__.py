"""typeforge CLI entry point.

Provides commands for listing and describing registered types and for
checking values against them.
"""

import json
import logging
import sys
from typing import Any

import typer

from ..errors import ConstraintViolation, TypeforgeError
from .config import build_cli_registry, load_library, read_config, write_library_config

app = typer.Typer(
    name="typeforge",
    help="Inspect type libraries and check values against them",
    invoke_without_command=True,
)

types_app = typer.Typer(help="List and describe registered types")
config_app = typer.Typer(help="Manage [tool.typeforge] in pyproject.toml")

app.add_typer(types_app, name="types")
app.add_typer(config_app, name="config")


def _load():
    """Configuration and registry, or exit with the configuration error."""
    try:
        config = read_config()
        return config, build_cli_registry(config)
    except (ValueError, TypeError, ImportError, AttributeError, TypeforgeError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)


def _resolve(registry, name: str):
    try:
        return registry.resolve(name)
    except (TypeforgeError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)


def _parse_value(raw: str) -> Any:
    """Parse raw as JSON, falling back to the raw string."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


@types_app.command("list")
def list_types():
    """List every resolvable type name."""
    _, registry = _load()
    for name in registry.names():
        typer.echo(name)


@types_app.command("describe")
def describe_type(name: str = typer.Argument(..., help="Type name or expression, e.g. Collection[Int]")):
    """Show parent chain and coercions of a type."""
    _, registry = _load()
    definition = _resolve(registry, name)

    typer.echo(definition.display_name)
    parents = [p.display_name for p in definition.parents()]
    typer.echo(f"  parents: {' -> '.join(parents) if parents else '(none)'}")
    typer.echo(f"  parameterizable: {'yes' if definition.is_parameterizable else 'no'}")
    sources = definition.coercion.sources()
    typer.echo(f"  coercions: {', '.join(sources) if sources else '(none)'}")
    if definition.doc:
        typer.echo(f"  doc: {definition.doc}")


@app.command("check")
def check(
    name: str = typer.Argument(..., help="Type name or expression"),
    value: str = typer.Argument(..., help="Value as JSON (plain text is taken as a string)"),
    coerce: bool = typer.Option(False, "--coerce", "-c", help="Coerce before validating"),
    strict: bool = typer.Option(False, "--strict", help="Fail when coercion leaves an invalid value"),
):
    """Check a value against a type, optionally coercing it first."""
    config, registry = _load()
    definition = _resolve(registry, name)
    parsed = _parse_value(value)

    if coerce:
        if strict or config.strict:
            try:
                parsed = definition.assert_coerce(parsed)
            except ConstraintViolation as e:
                typer.echo(f"✗ {e}", err=True)
                raise typer.Exit(1)
        else:
            parsed = definition.coerce(parsed)

    if definition.validate(parsed):
        typer.echo(f"✓ {parsed!r} is a valid {definition.display_name}")
    else:
        typer.echo(f"✗ {definition.get_message(parsed)}", err=True)
        raise typer.Exit(1)


@config_app.command("add-library")
def add_library(reference: str = typer.Argument(..., help="'module:attribute' of a TypeRegistry")):
    """Record a type library in pyproject.toml."""
    try:
        registry = load_library(reference)
    except (ValueError, TypeError, ImportError, AttributeError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)

    if write_library_config(reference):
        typer.echo(f"Added {reference} ({len(registry.own_names())} types)")
    else:
        typer.echo(f"{reference} is already configured")


@app.command("version")
def version():
    """Show version information."""
    from .. import __version__
    typer.echo(f"typeforge version {__version__}")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Enable verbose output (-vv for debug)")
):
    """Inspect type libraries and check values against them."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG if verbose > 1 else logging.INFO)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        typer.echo("\nError: Missing command.", err=True)
        raise typer.Exit(1)


def cli_main():
    """Entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("\nAborted", err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli_main()
