"""
QuantumCSS resolve command.

Shows how individual class tokens resolve: the rule-groups and the CSS they
emit. Useful when a class produces no output.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from quantumcss.core.config_loader import reload_config
from quantumcss.core.emitter import RuleEmitter, build_selector
from quantumcss.core.errors import QuantumError
from quantumcss.core.generator import build_resolver

from .common import console, fail, resolve_config_path


def resolve_command(
    tokens: Annotated[list[str], typer.Argument(help="Class tokens to resolve")],
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file (default: quantum.config.* in cwd)"),
    ] = None,
    show_groups: Annotated[
        bool, typer.Option("--groups", help="Also print a table of rule-groups")
    ] = False,
) -> None:
    """
    Resolve class tokens and print the CSS they produce.

    Examples:
        quantumcss resolve sm:hidden -mt-4 bg-blue-500/50
        quantumcss resolve btn-primary --groups
    """
    try:
        config_path = resolve_config_path(config)
    except QuantumError as e:
        raise fail(e)

    resolver = build_resolver(reload_config(config_path))
    emitter = RuleEmitter(resolver.theme, resolver.breakpoints)

    for token in tokens:
        groups = resolver.resolve(token)
        if not groups:
            typer.echo(f"/* {token}: no rules */")
            continue

        if show_groups:
            table = Table(title=token)
            table.add_column("Selector")
            table.add_column("Breakpoint")
            table.add_column("Mode")
            table.add_column("Rules")
            for group in groups:
                table.add_row(
                    build_selector(token, group),
                    group.breakpoint or "",
                    group.mode or "",
                    " ".join(group.rules),
                )
            console.print(table)

        typer.echo(emitter.emit({token: groups}, include_root=False), nl=False)
