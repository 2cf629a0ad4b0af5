"""
Shared helpers for QuantumCSS CLI commands.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from quantumcss.core.config_loader import find_config
from quantumcss.core.errors import ConfigError, QuantumError

console = Console()
err_console = Console(stderr=True)


def resolve_config_path(config: Path | None) -> Path | None:
    """Pick the config file for a command.

    An explicit ``--config`` must exist; otherwise the working directory is
    searched and None means "use defaults".
    """
    if config is not None:
        if not config.is_file():
            raise ConfigError("Config file not found", config)
        return config
    return find_config(Path.cwd())


def fail(error: QuantumError) -> typer.Exit:
    """Report an error and return the Exit to raise."""
    err_console.print(f"[red]Error:[/red] {error}", highlight=False)
    return typer.Exit(code=1)
