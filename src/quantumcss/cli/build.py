"""
QuantumCSS build command.

Generates the stylesheet for the classes found in the configured content
files, optionally minified, analyzed, or rebuilt on every change.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from quantumcss.core.analysis import analyze_css
from quantumcss.core.config_loader import ConfigCache, config_base_dir, reload_config
from quantumcss.core.errors import QuantumError
from quantumcss.core.generator import GenerationResult, generate, minify_css, render_banner
from quantumcss.core.watcher import ContentWatcher

from .common import console, fail, resolve_config_path

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = Path("dist/quantum.css")


def run_build(
    config_path: Path | None,
    output: Path,
    *,
    minify: bool = False,
    cache: ConfigCache | None = None,
) -> tuple[GenerationResult, str]:
    """Run one generation pass and write the stylesheet.

    Returns:
        The generation result and the CSS text that was written
    """
    config = reload_config(config_path, cache)
    result = generate(config, config_base_dir(config_path), banner=False)

    css = minify_css(result.css) if minify else result.css
    banner = render_banner(config)
    if banner:
        css = f"{banner}\n{css}" if minify else f"{banner}\n\n{css}"

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(css, encoding="utf-8")

    if result.unresolved:
        logger.debug("Unresolved classes: %s", ", ".join(result.unresolved))
    return result, css


def _report(result: GenerationResult, output: Path, css: str) -> None:
    typer.echo(
        f"Built {output} ({len(css.encode('utf-8')) / 1024:.2f} KB): "
        f"{len(result.resolved)}/{len(result.tokens)} classes resolved"
    )


def _print_analysis(css: str) -> None:
    stats = analyze_css(css)
    table = Table(title="CSS Analysis")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    for label, value in stats.rows():
        table.add_row(label, value)
    console.print(table)


def build_command(
    output: Annotated[
        Path, typer.Argument(help="Stylesheet to write")
    ] = DEFAULT_OUTPUT,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file (default: quantum.config.* in cwd)"),
    ] = None,
    minify: Annotated[bool, typer.Option("--minify", help="Strip comments and whitespace")] = False,
    analyze: Annotated[bool, typer.Option("--analyze", help="Print stylesheet statistics")] = False,
    watch: Annotated[
        bool, typer.Option("--watch", "-w", help="Rebuild when config or content files change")
    ] = False,
    interval: Annotated[
        float, typer.Option("--interval", help="Seconds between change polls in --watch mode")
    ] = 0.5,
) -> None:
    """
    Generate CSS for the classes used in your content files.

    Examples:
        quantumcss build                          # dist/quantum.css
        quantumcss build public/app.css --minify
        quantumcss build --watch
    """
    try:
        config_path = resolve_config_path(config)
        cache = ConfigCache()
        result, css = run_build(config_path, output, minify=minify, cache=cache)
    except QuantumError as e:
        raise fail(e)

    _report(result, output, css)
    if analyze:
        _print_analysis(css)

    if not watch:
        return

    def rebuild(changed: list[Path]) -> None:
        typer.echo(f"Changes detected in {len(changed)} file(s), rebuilding...")
        try:
            result, css = run_build(config_path, output, minify=minify, cache=cache)
        except QuantumError as e:
            logger.error("Rebuild failed: %s", e)
            return
        _report(result, output, css)

    watcher = ContentWatcher(config_path, rebuild, poll_interval=interval)
    typer.echo("Watching for changes (Ctrl+C to stop)...")
    try:
        watcher.run()
    except KeyboardInterrupt:
        watcher.stop()
        typer.echo("Stopped watching.")
