"""
QuantumCSS CLI.

Commands:

- build: generate the stylesheet for the scanned content (build.py)
- resolve: show the CSS produced by individual class tokens (inspect.py)
"""

from __future__ import annotations

import logging
import platform

import typer

from quantumcss._version import get_version

from .build import build_command
from .inspect import resolve_command


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"QuantumCSS {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


# =============================================================================
# Main Application
# =============================================================================

app = typer.Typer(
    help="QuantumCSS - utility-first CSS generated just in time",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """QuantumCSS CLI main callback for global options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


app.command(name="build")(build_command)
app.command(name="resolve")(resolve_command)


def main() -> None:
    app(standalone_mode=True)


__all__ = ["app", "main", "version_callback"]
