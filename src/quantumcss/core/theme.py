"""
Theme store for QuantumCSS.

Resolves the theme used by a generation pass by merging:
1. Built-in defaults
2. Categories given directly under ``theme`` (replace the default category)
3. Categories under ``theme.extend`` (merged key-by-key, highest precedence)

Also flattens a theme into the CSS custom properties of the ``:root`` block.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from .ir import THEME_CATEGORIES, Theme, ThemeConfig, ThemeExtension

logger = logging.getLogger(__name__)

# Custom property prefix per category (``--color-blue-500``).
VARIABLE_PREFIXES: dict[str, str] = {
    "colors": "color-",
    "spacing": "spacing-",
    "fontSize": "font-size-",
    "borderRadius": "radius-",
    "shadows": "shadow-",
    "maxWidth": "max-w-",
}

_IDENT_UNSAFE = re.compile(r"[^A-Za-z0-9_-]")


def _overrides(section: ThemeExtension) -> dict[str, dict[str, Any]]:
    """Return the recognized categories a config section sets, by field name."""
    found: dict[str, dict[str, Any]] = {}
    for attr in THEME_CATEGORIES.values():
        value = getattr(section, attr)
        if value is not None:
            found[attr] = value
    return found


def merge_theme(defaults: Theme, config: ThemeConfig | None = None) -> Theme:
    """
    Merge user theme configuration over the defaults.

    Merging is shallow per category: an ``extend`` entry adds or overrides
    keys, it never removes default keys. Unrecognized categories are ignored.

    Args:
        defaults: Built-in theme
        config: The ``theme`` section of the user config, if any

    Returns:
        New Theme; ``defaults`` is not modified
    """
    if config is None:
        return defaults

    merged: dict[str, dict[str, Any]] = {
        attr: dict(getattr(defaults, attr)) for attr in THEME_CATEGORIES.values()
    }

    for attr, replacement in _overrides(config).items():
        merged[attr] = dict(replacement)

    for attr, extension in _overrides(config.extend).items():
        merged[attr].update(extension)

    ignored = set(config.model_extra or {}) | set(config.extend.model_extra or {})
    if ignored:
        logger.debug("Ignoring unrecognized theme categories: %s", ", ".join(sorted(ignored)))

    return Theme(**merged)


def _css_ident(key: str) -> str:
    return _IDENT_UNSAFE.sub("_", key)


def _flatten_tokens(prefix: str, tokens: dict[str, Any], out: list[tuple[str, str]]) -> None:
    for key, value in tokens.items():
        name = f"{prefix}{_css_ident(key)}"
        if isinstance(value, dict):
            _flatten_tokens(f"{name}-", value, out)
        else:
            out.append((name, str(value)))


def theme_css_variables(theme: Theme) -> list[tuple[str, str]]:
    """
    Flatten every theme category into ``(--name, value)`` pairs.

    Nested color scales recurse (``--color-gray-100``).
    """
    variables: list[tuple[str, str]] = []
    for category, prefix in VARIABLE_PREFIXES.items():
        _flatten_tokens(f"--{prefix}", theme.category(category), variables)
    return variables
