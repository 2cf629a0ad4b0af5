"""
Color resolution for QuantumCSS.

Flattens nested color scales into ``name-shade`` keys and resolves color
references used in class names, including opacity suffixes (``blue-500/50``)
which are synthesized into ``rgba()`` values.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from .ir import Theme

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# Shade aliased by the bare scale name (``blue`` -> ``blue-500``).
DEFAULT_SHADE = "500"


def is_hex_color(value: str) -> bool:
    return bool(_HEX_COLOR.match(value))


def format_alpha(alpha: float) -> str:
    """Format an alpha channel as a short decimal (``0.5``, ``1``, ``0.05``)."""
    return f"{round(alpha, 4):g}"


def hex_to_rgba(hex_value: str, alpha: float) -> str | None:
    """Convert ``#rgb`` / ``#rrggbb`` to ``rgba(r, g, b, a)``.

    Returns:
        The rgba() string, or None if ``hex_value`` is not a hex color.
    """
    if not is_hex_color(hex_value):
        return None
    digits = hex_value[1:]
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    r = int(digits[0:2], 16)
    g = int(digits[2:4], 16)
    b = int(digits[4:6], 16)
    return f"rgba({r}, {g}, {b}, {format_alpha(alpha)})"


def transparent_stop(value: str) -> str:
    """Fully transparent version of a color, used as a gradient fallback stop."""
    return hex_to_rgba(value, 0) or "transparent"


def flatten_colors(colors: Mapping[str, Any]) -> dict[str, str]:
    """
    Flatten a two-level color map.

    ``{"blue": {"500": "#3b82f6"}}`` becomes ``{"blue-500": ..., "blue": ...}``;
    the bare name aliases shade 500 when the scale has one and no flat color
    of the same name exists.
    """
    flat: dict[str, str] = {}
    aliases: dict[str, str] = {}
    for name, value in colors.items():
        if isinstance(value, Mapping):
            for shade, color in value.items():
                flat[f"{name}-{shade}"] = str(color)
            if DEFAULT_SHADE in value:
                aliases[name] = str(value[DEFAULT_SHADE])
        else:
            flat[name] = str(value)
    for name, color in aliases.items():
        flat.setdefault(name, color)
    return flat


class ColorTable:
    """Flattened, read-only color lookup built fresh for every generation pass."""

    def __init__(self, colors: Mapping[str, Any]):
        self._colors = flatten_colors(colors)

    @classmethod
    def from_theme(cls, theme: Theme) -> ColorTable:
        return cls(theme.colors)

    def __contains__(self, name: object) -> bool:
        return name in self._colors

    def __len__(self) -> int:
        return len(self._colors)

    def get(self, name: str) -> str | None:
        return self._colors.get(name)

    def items(self) -> list[tuple[str, str]]:
        return list(self._colors.items())

    def resolve(self, key: str) -> str | None:
        """
        Resolve a color reference from a class name.

        Args:
            key: ``blue-500``, ``white``, ``blue-500/50`` or ``[#0af]``

        Returns:
            CSS color value, or None if the reference cannot be resolved
        """
        if not key:
            return None
        if key.startswith("[") and key.endswith("]"):
            return key[1:-1].replace("_", " ") or None
        if key in self._colors:
            return self._colors[key]
        if "/" not in key:
            return None

        base, _, opacity = key.partition("/")
        color = self._colors.get(base) or self._colors.get(f"{base}-{DEFAULT_SHADE}")
        if color is None:
            return None
        try:
            percent = float(opacity)
        except ValueError:
            logger.debug("Invalid opacity suffix in color %r", key)
            return None
        if not 0 <= percent <= 100:
            return None
        return hex_to_rgba(color, percent / 100)


def resolve_color(key: str, colors: ColorTable | Mapping[str, Any]) -> str | None:
    """Resolve a color reference against a color table or a raw color map."""
    table = colors if isinstance(colors, ColorTable) else ColorTable(colors)
    return table.resolve(key)
