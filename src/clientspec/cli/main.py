"""CLI entry point for clientspec.

Invoked as::

    clientspec [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m clientspec.cli.main

Commands
--------
resolve     Resolve every client in a declaration file
lint        Report deprecated, ignored or redundant attributes
version     Show version information
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from clientspec.model.serializer import DeclarationSet
    from clientspec.registry.registry import DescriptorRegistry

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool, debug: bool) -> None:
    level = logging.WARNING
    if verbose:
        level = logging.INFO
    if debug:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _load_or_exit(path: str) -> "DeclarationSet":
    """Read a declaration file, exiting on error."""
    from clientspec.model.serializer import DeclarationError, DeclarationSerializer

    try:
        return DeclarationSerializer().load(path)
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File not found: {path}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {path}: {exc}")
        sys.exit(1)
    except DeclarationError as exc:
        err_console.print(f"[red]Declaration error[/red] in {path}: {escape(str(exc))}")
        sys.exit(1)


def _resolve_or_exit(declarations: "DeclarationSet", path: str, protocol: str | None) -> "DescriptorRegistry":
    """Resolve every declaration, printing all failures and exiting if any."""
    from clientspec.registry import BatchResolutionError, resolve_all
    from clientspec.resolver import DescriptorBuilder, DescriptorValidationFailed

    settings = declarations.settings.with_overrides(default_protocol=protocol)
    try:
        return resolve_all(declarations.clients, DescriptorBuilder(settings), name=path)
    except BatchResolutionError as exc:
        err_console.print(f"[red]Resolution failed[/red] in {path}:")
        for label, error in exc.failures:
            if isinstance(error, DescriptorValidationFailed):
                for inner in error.errors:
                    err_console.print(f"  [bold]{escape(label)}[/bold]: {escape(str(inner))}")
            else:
                err_console.print(f"  [bold]{escape(label)}[/bold]: {escape(str(error))}")
        sys.exit(1)


def _severity_color(severity_name: str) -> str:
    """Map a DiagnosticSeverity name to a Rich color string."""
    colors = {
        "ERROR": "red",
        "WARNING": "yellow",
        "INFORMATION": "blue",
        "HINT": "dim",
    }
    return colors.get(severity_name, "white")


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="clientspec")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log at INFO level")
@click.option("--debug", is_flag=True, default=False, help="Log at DEBUG level")
def cli(verbose: bool, debug: bool) -> None:
    """Resolve declarative HTTP client declarations into canonical descriptors."""
    _configure_logging(verbose, debug)


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from clientspec import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]clientspec[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# resolve command
# ---------------------------------------------------------------------------


@cli.command(name="resolve")
@click.argument("file", type=click.Path(exists=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json", "yaml"], case_sensitive=False),
    default="table",
    help="Output format",
)
@click.option("--protocol", default=None, help="Protocol for URLs declared without one")
@click.option("--output", "-o", default=None, help="Output file path (json/yaml only)")
def resolve_command(file: str, output_format: str, protocol: str | None, output: str | None) -> None:
    """Resolve every client declared in FILE.

    FILE is a YAML or JSON declaration document.
    """
    from clientspec.model.nodes import type_ref_name
    from clientspec.model.serializer import DescriptorSerializer

    declarations = _load_or_exit(file)
    registry = _resolve_or_exit(declarations, file, protocol)
    descriptors = list(registry)

    if output_format == "table":
        if not descriptors:
            console.print(f"[yellow]No clients declared in[/yellow] {file}")
            return
        table = Table(title=f"Clients: {file}", show_lines=True)
        table.add_column("Context id", style="bold")
        table.add_column("Identity")
        table.add_column("Endpoint")
        table.add_column("Qualifiers")
        table.add_column("Fallback")
        table.add_column("Flags")
        for d in descriptors:
            fallbacks = [
                f"{label}: {type_ref_name(ref)}"
                for label, ref in (("fallback", d.fallback_type), ("factory", d.fallback_factory_type))
                if ref is not None
            ]
            flags = [flag for flag, on in (("primary", d.primary), ("decode404", d.decode404)) if on]
            table.add_row(
                escape(d.context_id),
                escape(d.identity),
                escape(d.endpoint) or "[dim](by name)[/dim]",
                escape("\n".join(d.bean_qualifiers)),
                "\n".join(fallbacks) or "[dim]-[/dim]",
                ", ".join(flags) or "[dim]-[/dim]",
            )
        console.print(table)
        console.print(f"\n[bold]{len(descriptors)}[/bold] client(s) resolved")
        return

    serializer = DescriptorSerializer()
    if output_format == "json":
        text = serializer.to_json(descriptors, indent=2)
        lang = "json"
    else:
        text = serializer.to_yaml(descriptors)
        lang = "yaml"

    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]Descriptors written to[/green] {output}")
    else:
        console.print(Syntax(text, lang, line_numbers=False))


# ---------------------------------------------------------------------------
# lint command
# ---------------------------------------------------------------------------


@cli.command(name="lint")
@click.argument("file", type=click.Path(exists=False))
@click.option("--no-hints", is_flag=True, default=False, help="Suppress HINT-level findings")
def lint_command(file: str, no_hints: bool) -> None:
    """Report deprecated, ignored or redundant attributes in FILE.

    FILE is a YAML or JSON declaration document.
    """
    from clientspec.linter import DeclarationLinter

    declarations = _load_or_exit(file)
    linter = DeclarationLinter(include_hints=not no_hints)
    diagnostics = [d for raw in declarations.clients for d in linter.lint(raw)]

    if not diagnostics:
        console.print(f"[green]OK[/green] {file} — no lint issues found")
        sys.exit(0)

    table = Table(title=f"Lint: {file}", show_lines=True)
    table.add_column("Severity", style="bold", min_width=10)
    table.add_column("Code", min_width=10)
    table.add_column("Client", min_width=10)
    table.add_column("Attribute")
    table.add_column("Message")

    for d in diagnostics:
        color = _severity_color(d.severity.name)
        table.add_row(
            f"[{color}]{d.severity.name}[/{color}]",
            d.code,
            d.client,
            d.attribute,
            escape(d.message) + (f"\n[dim]hint: {escape(d.suggestion)}[/dim]" if d.suggestion else ""),
        )

    console.print(table)
    errors = [d for d in diagnostics if d.is_error]
    console.print(f"\n[bold]{len(diagnostics)}[/bold] lint finding(s)")

    if errors:
        sys.exit(1)


if __name__ == "__main__":
    cli()
