"""
Generation pass for QuantumCSS.

One pass: merge theme -> build color table -> scan content -> resolve tokens ->
emit CSS. Every pass builds its own structures from scratch; re-running on a
file change is a full re-run.

Usage::

    from quantumcss import generate_css, reload_config

    config = reload_config(Path("quantum.config.json"))
    css = generate_css(config, base_dir=Path("."))
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .colors import ColorTable
from .defaults import BREAKPOINTS, PREFLIGHT, default_theme
from .emitter import RuleEmitter
from .ir import QuantumConfig, RuleGroup, Theme
from .resolver import ClassResolver
from .scanner import scan
from .theme import merge_theme

logger = logging.getLogger(__name__)

DEFAULT_BANNER = "/*! QuantumCSS - utility-first CSS generated just in time */"


@dataclass
class GenerationResult:
    """Output of one generation pass."""

    css: str
    tokens: list[str] = field(default_factory=list)
    resolved: dict[str, list[RuleGroup]] = field(default_factory=dict)

    @property
    def unresolved(self) -> list[str]:
        return [token for token in self.tokens if token not in self.resolved]

    @property
    def rule_count(self) -> int:
        return sum(len(groups) for groups in self.resolved.values())


def build_theme(config: QuantumConfig | None = None) -> Theme:
    """Merged theme for ``config`` (defaults when no config is given)."""
    return merge_theme(default_theme(), config.theme if config is not None else None)


def build_resolver(config: QuantumConfig | None = None, theme: Theme | None = None) -> ClassResolver:
    """Resolver wired to the merged theme and the config's component presets."""
    theme = theme if theme is not None else build_theme(config)
    presets = config.component_presets if config is not None else {}
    return ClassResolver(theme, ColorTable.from_theme(theme), presets=presets)


def render_banner(config: QuantumConfig | None = None) -> str:
    if config is not None and config.banner is not None:
        return config.banner
    return DEFAULT_BANNER


def generate_from_classes(
    classes: Iterable[str],
    config: QuantumConfig | None = None,
    *,
    banner: bool = True,
) -> GenerationResult:
    """
    Generate CSS for an explicit set of class tokens.

    Args:
        classes: Class tokens (duplicates are ignored)
        config: Theme / preset / preflight settings (defaults if None)
        banner: Prepend the leading comment

    Returns:
        GenerationResult with the CSS text and per-token rule-groups
    """
    theme = build_theme(config)
    resolver = build_resolver(config, theme)
    tokens = sorted(set(classes))
    resolved = resolver.resolve_all(tokens)

    preflight = PREFLIGHT if config is not None and config.preflight else None
    css = RuleEmitter(theme, BREAKPOINTS).emit(resolved, preamble=preflight)
    if banner:
        header = render_banner(config)
        if header:
            css = f"{header}\n\n{css}"

    logger.info(
        "Generated CSS: %d tokens, %d resolved, %d rule groups",
        len(tokens),
        len(resolved),
        sum(len(groups) for groups in resolved.values()),
    )
    return GenerationResult(css=css, tokens=tokens, resolved=resolved)


def generate(
    config: QuantumConfig | None = None,
    base_dir: Path | None = None,
    *,
    banner: bool = True,
) -> GenerationResult:
    """Scan the config's content globs and generate CSS for the classes found."""
    patterns = config.content if config is not None else []
    classes = scan(patterns, base_dir) if patterns else set()
    return generate_from_classes(classes, config, banner=banner)


def generate_css(config: QuantumConfig | None = None, base_dir: Path | None = None) -> str:
    """Scan content and return the generated CSS text."""
    return generate(config, base_dir).css


# =============================================================================
# Minification
# =============================================================================

_COMMENTS = re.compile(r"/\*.*?\*/", re.DOTALL)
_WHITESPACE = re.compile(r"\s+")
_AROUND = re.compile(r"\s*([{}:;,])\s*")


def minify_css(css: str) -> str:
    """Strip comments and collapsible whitespace.

    Spaces that terminate a hex escape (``\\32 xl``) are preserved.
    """
    css = _COMMENTS.sub("", css)
    css = _WHITESPACE.sub(" ", css)
    css = _AROUND.sub(r"\1", css)
    css = css.replace(";}", "}")
    return css.strip()
