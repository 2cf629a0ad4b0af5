"""Shared pytest fixtures for QuantumCSS tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from quantumcss.core.colors import ColorTable
from quantumcss.core.defaults import default_theme
from quantumcss.core.families import ResolveContext
from quantumcss.core.ir import Theme
from quantumcss.core.resolver import ClassResolver


@pytest.fixture
def theme() -> Theme:
    """Return the built-in theme."""
    return default_theme()


@pytest.fixture
def colors(theme: Theme) -> ColorTable:
    return ColorTable.from_theme(theme)


@pytest.fixture
def ctx(theme: Theme, colors: ColorTable) -> ResolveContext:
    """Lookup context for calling families directly."""
    return ResolveContext(theme=theme, colors=colors)


@pytest.fixture
def resolver(theme: Theme, colors: ColorTable) -> ClassResolver:
    """Resolver over the default theme, without user presets."""
    return ClassResolver(theme, colors)


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """A small site with markup in nested directories."""
    (tmp_path / "src" / "pages").mkdir(parents=True)
    (tmp_path / "index.html").write_text(
        '<div class="flex sm:hidden -mt-4 bg-blue-500/50 hover:bg-blue-600">Hi</div>\n',
        encoding="utf-8",
    )
    (tmp_path / "src" / "pages" / "about.html").write_text(
        "<section class='p-4 md:p-8'><a class=\"btn-primary\">About</a></section>\n",
        encoding="utf-8",
    )
    return tmp_path
