"""
cli.py

PURPOSE: Command-line interface for command files.
DEPENDENCIES: typer, rich

ARCHITECTURE NOTES:
The CLI provides commands for:
- show: Parse a command file and print its tree (or JSON)
- validate: Parse a command file and report likely mistakes
- format: Rewrite a command file in canonical form
- config: Show the active configuration
"""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from command_dsl import __version__
from command_dsl.config import get_settings
from command_dsl.models.tree import LiteralNode
from command_dsl.observability import init_telemetry, shutdown_telemetry
from command_dsl.parser.errors import ParseError
from command_dsl.reader import default_reader
from command_dsl.serializer import dumps
from command_dsl.ui import plain
from command_dsl.validator import ValidationSeverity, validate_tree

app = typer.Typer(
    name="command-dsl",
    help="Parse, check and format command tree files.",
    add_completion=False,
)

console = Console()

CommandFile = Annotated[
    Path,
    typer.Argument(
        help="Path to the command file",
        exists=True,
        readable=True,
        dir_okay=False,
    ),
]


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"command-dsl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    _version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Command DSL - read command trees from text files."""
    try:
        settings = get_settings()
    except ValidationError as e:
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            plain.print_error(f"Invalid setting {field}: {error['msg']}")
        raise typer.Exit(1) from None
    logging.basicConfig(
        level=settings.effective_log_level(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def load_tree(command_file: Path) -> LiteralNode:
    """Read a command file, exiting with a message on failure."""
    settings = get_settings()
    init_telemetry(settings.otel)
    try:
        return default_reader(encoding=settings.encoding).parse(command_file)
    except ParseError as e:
        plain.print_error(f"{command_file}:{e.line}: {e.message}")
        raise typer.Exit(1) from None
    except OSError as e:
        plain.print_error(f"Cannot read {command_file}: {e}")
        raise typer.Exit(1) from None
    finally:
        shutdown_telemetry()


@app.command()
def show(
    command_file: CommandFile,
    as_json: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Print the tree as JSON",
        ),
    ] = False,
) -> None:
    """Parse a command file and print its tree."""
    root = load_tree(command_file)

    if as_json:
        typer.echo(json.dumps(root.model_dump(mode="json"), indent=2))
        return

    plain.print_title(str(command_file))
    plain.print_tree(root)


@app.command()
def validate(command_file: CommandFile) -> None:
    """Parse a command file and check it for common mistakes."""
    root = load_tree(command_file)
    issues = validate_tree(root)

    for issue in issues:
        plain.print_issue(issue)

    errors = [i for i in issues if i.severity is ValidationSeverity.ERROR]
    if errors:
        plain.print_error(f"{len(errors)} error(s) in {command_file}")
        raise typer.Exit(1)

    node_count = sum(1 for _ in root.walk())
    plain.print_success(f"Valid command file: {root.name}")
    console.print(f"  Nodes: {node_count}")
    console.print(f"  Issues: {len(issues)}")


@app.command("format")
def format_cmd(
    command_file: CommandFile,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write to this file instead of standard output",
        ),
    ] = None,
    indent: Annotated[
        int,
        typer.Option(
            "--indent",
            "-i",
            help="Spaces per nesting level",
            min=0,
            max=8,
        ),
    ] = 4,
) -> None:
    """Rewrite a command file in canonical form."""
    root = load_tree(command_file)
    source = dumps(root, indent=indent)

    if output is None:
        typer.echo(source, nl=False)
        return

    output.write_text(source, encoding=get_settings().encoding)
    plain.print_success(f"Formatted {command_file} -> {output}")


@app.command("config")
def config_cmd() -> None:
    """Show the active configuration."""
    settings = get_settings()
    console.print("[bold]Current Configuration:[/bold]")
    console.print(f"  Log level: {settings.log_level}")
    console.print(f"  Debug: {settings.debug}")
    console.print(f"  Encoding: {settings.encoding}")
    console.print()
    console.print("[bold]OpenTelemetry Settings:[/bold]")
    console.print(f"  Enabled: {settings.otel.enabled}")
    console.print(f"  Service name: {settings.otel.service_name}")
    endpoint_status = settings.otel.endpoint if settings.otel.endpoint else "(console only)"
    console.print(f"  Endpoint: {endpoint_status}")


if __name__ == "__main__":
    app()
