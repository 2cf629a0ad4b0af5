"""
Dynamic utility families.

A family resolves the value part of a prefixed class name (``mt-4``,
``bg-blue-500/50``, ``grid-cols-3``) into CSS declarations. Families are kept
in a ``FamilyRegistry`` keyed by prefix; the resolver splits a base class name
on its longest registered prefix and dispatches to the matching family.

Every ``PropertyPrefix`` entry in the utility table becomes a
``SpacingFamily``, so the table stays the single source for spacing and
sizing prefixes.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass

from .colors import ColorTable, transparent_stop
from .defaults import DEFAULT_RADIUS, DEFAULT_SHADOW_KEY
from .ir import PropertyPrefix, Theme, UtilityEntry

logger = logging.getLogger(__name__)

_NUMBER = re.compile(r"^\d*\.?\d+$")
_LENGTH = re.compile(r"^(\d*\.?\d+)(px|rem|em|%|vh|vw|ch|ex|vmin|vmax|dvh|svh|lvh|deg|ms|s)?$")
_CSS_LENGTH = re.compile(r"^\d*\.?\d+(px|rem|em|%|vh|vw|ch|ex|vmin|vmax|dvh|svh|lvh)$")
_FRACTION = re.compile(r"^(\d+)/(\d+)$")
_COLOR_LITERAL = re.compile(r"^(#|rgb|hsl|oklch|var\()")

GRADIENT_STOPS = "var(--gradient-stops, var(--gradient-from, transparent), var(--gradient-to, transparent))"

GRADIENT_DIRECTIONS: dict[str, str] = {
    "t": "to top",
    "tr": "to top right",
    "r": "to right",
    "br": "to bottom right",
    "b": "to bottom",
    "bl": "to bottom left",
    "l": "to left",
    "tl": "to top left",
}

BORDER_SIDES: dict[str, tuple[str, ...]] = {
    "t": ("border-top-width",),
    "r": ("border-right-width",),
    "b": ("border-bottom-width",),
    "l": ("border-left-width",),
    "x": ("border-left-width", "border-right-width"),
    "y": ("border-top-width", "border-bottom-width"),
}

BORDER_STYLES = frozenset({"solid", "dashed", "dotted", "double", "hidden", "none"})

RADIUS_CORNERS: dict[str, tuple[str, ...]] = {
    "rounded": ("border-radius",),
    "rounded-t": ("border-top-left-radius", "border-top-right-radius"),
    "rounded-r": ("border-top-right-radius", "border-bottom-right-radius"),
    "rounded-b": ("border-bottom-right-radius", "border-bottom-left-radius"),
    "rounded-l": ("border-top-left-radius", "border-bottom-left-radius"),
}

BLUR_SIZES: dict[str, str] = {
    "none": "0",
    "sm": "4px",
    "": "8px",
    "md": "12px",
    "lg": "16px",
    "xl": "24px",
    "2xl": "40px",
    "3xl": "64px",
}

TRANSITION_PROPERTIES: dict[str, str] = {
    "all": "all",
    "colors": "color, background-color, border-color, text-decoration-color, fill, stroke",
    "opacity": "opacity",
    "shadow": "box-shadow",
    "transform": "transform",
}

TIMING_FUNCTIONS: dict[str, str] = {
    "linear": "linear",
    "in": "cubic-bezier(0.4, 0, 1, 1)",
    "out": "cubic-bezier(0, 0, 0.2, 1)",
    "in-out": "cubic-bezier(0.4, 0, 0.2, 1)",
}

ASPECT_RATIOS: dict[str, str] = {"auto": "auto", "square": "1 / 1", "video": "16 / 9"}

_DEFAULT_TIMING = TIMING_FUNCTIONS["in-out"]
_DEFAULT_DURATION = "150ms"


# =============================================================================
# Value helpers
# =============================================================================


def bracket_value(key: str) -> str | None:
    """Return the literal inside ``[...]`` (underscores become spaces)."""
    if len(key) > 2 and key.startswith("[") and key.endswith("]"):
        return key[1:-1].replace("_", " ")
    return None


def fraction_value(key: str) -> str | None:
    """Convert ``1/2`` to ``50%`` and ``1/3`` to ``33.333333%``."""
    match = _FRACTION.match(key)
    if match is None:
        return None
    numerator, denominator = int(match.group(1)), int(match.group(2))
    if denominator == 0:
        return None
    percent = f"{numerator / denominator * 100:.6f}".rstrip("0").rstrip(".")
    return f"{percent}%"


def format_number(value: float) -> str:
    return f"{round(value, 6):g}"


def negate_value(value: str) -> str:
    """Prefix a numeric or length value with ``-``; other values are returned as-is."""
    match = _LENGTH.match(value)
    if match is None or float(match.group(1)) == 0:
        return value
    return f"-{value}"


def is_color_literal(value: str) -> bool:
    return bool(_COLOR_LITERAL.match(value))


# =============================================================================
# Family protocol
# =============================================================================


@dataclass(frozen=True)
class ResolveContext:
    """Per-pass lookup tables shared by all families."""

    theme: Theme
    colors: ColorTable


@dataclass
class Resolution:
    """Declarations produced by a family.

    ``negatable`` marks numeric/length values the resolver may sign-flip;
    color and keyword families set it to False.
    """

    declarations: list[tuple[str, str]]
    custom_selector: str | None = None
    negatable: bool = True


class UtilityFamily(ABC):
    """Resolves the value key of one class-name prefix."""

    @abstractmethod
    def resolve(self, value_key: str, ctx: ResolveContext, negated: bool = False) -> Resolution | None:
        """
        Attempt to resolve a value key.

        Args:
            value_key: Class name remainder after the prefix (``4`` for ``mt-4``)
            ctx: Theme and color table of the current pass
            negated: Whether the class carried a leading ``-``

        Returns:
            Resolution, or None if this family has no value for the key
        """


# =============================================================================
# Spacing, sizing and position
# =============================================================================


class SpacingFamily(UtilityFamily):
    """Margin, padding, gap, inset and sizing prefixes.

    Value priority: bracket literal, prefix theme category, prefix keyword,
    spacing scale, fraction, explicit CSS length.
    """

    def __init__(self, entry: PropertyPrefix):
        self.entry = entry

    def _value(self, key: str, ctx: ResolveContext) -> str | None:
        literal = bracket_value(key)
        if literal is not None:
            return literal
        if self.entry.lookup is not None:
            themed = ctx.theme.category(self.entry.lookup).get(key)
            if themed is not None:
                return themed
        if key in self.entry.keywords:
            return self.entry.keywords[key]
        if key in ctx.theme.spacing:
            return ctx.theme.spacing[key]
        fraction = fraction_value(key)
        if fraction is not None:
            return fraction
        if key == "0" or _CSS_LENGTH.match(key):
            return key
        return None

    def resolve(self, value_key: str, ctx: ResolveContext, negated: bool = False) -> Resolution | None:
        if not value_key:
            return None
        value = self._value(value_key, ctx)
        if value is None:
            return None
        return Resolution([(prop, value) for prop in self.entry.properties])


class SpaceBetweenFamily(UtilityFamily):
    """``space-x-*`` / ``space-y-*``: margins between children via ``& > * + *``."""

    CHILD_SELECTOR = "& > * + *"

    def __init__(self, axis: str):
        self.property = "margin-left" if axis == "x" else "margin-top"

    def resolve(self, value_key: str, ctx: ResolveContext, negated: bool = False) -> Resolution | None:
        value = bracket_value(value_key) or ctx.theme.spacing.get(value_key)
        if value is None:
            return None
        return Resolution([(self.property, value)], custom_selector=self.CHILD_SELECTOR)


class ZIndexFamily(UtilityFamily):
    def resolve(self, value_key: str, ctx: ResolveContext, negated: bool = False) -> Resolution | None:
        value = bracket_value(value_key)
        if value is None and (value_key == "auto" or value_key.isdigit()):
            value = value_key
        if value is None:
            return None
        return Resolution([("z-index", value)])


class OpacityFamily(UtilityFamily):
    def resolve(self, value_key: str, ctx: ResolveContext, negated: bool = False) -> Resolution | None:
        value = bracket_value(value_key)
        if value is None and _NUMBER.match(value_key) and float(value_key) <= 100:
            value = format_number(float(value_key) / 100)
        if value is None:
            return None
        return Resolution([("opacity", value)], negatable=False)


class AspectRatioFamily(UtilityFamily):
    def resolve(self, value_key: str, ctx: ResolveContext, negated: bool = False) -> Resolution | None:
        value = bracket_value(value_key) or ASPECT_RATIOS.get(value_key)
        if value is None:
            return None
        return Resolution([("aspect-ratio", value)], negatable=False)


# =============================================================================
# Grid
# =============================================================================


class GridColumnsFamily(UtilityFamily):
    def resolve(self, value_key: str, ctx: ResolveContext, negated: bool = False) -> Resolution | None:
        value = bracket_value(value_key)
        if value is None and value_key == "none":
            value = "none"
        if value is None and value_key.isdigit() and int(value_key) > 0:
            value = f"repeat({value_key}, minmax(0, 1fr))"
        if value is None:
            return None
        return Resolution([("grid-template-columns", value)], negatable=False)


class ColumnSpanFamily(UtilityFamily):
    def resolve(self, value_key: str, ctx: ResolveContext, negated: bool = False) -> Resolution | None:
        if value_key == "full":
            value = "1 / -1"
        elif value_key.isdigit() and int(value_key) > 0:
            value = f"span {value_key} / span {value_key}"
        else:
            return None
        return Resolution([("grid-column", value)], negatable=False)


# =============================================================================
# Typography and color
# =============================================================================


class TextFamily(UtilityFamily):
    """``text-*``: font-size scale first, then color."""

    def resolve(self, value_key: str, ctx: ResolveContext, negated: bool = False) -> Resolution | None:
        literal = bracket_value(value_key)
        if literal is not None and not is_color_literal(literal):
            return Resolution([("font-size", literal)])
        if value_key in ctx.theme.font_size:
            return Resolution([("font-size", ctx.theme.font_size[value_key])])
        color = ctx.colors.resolve(value_key)
        if color is None:
            return None
        return Resolution([("color", color)], negatable=False)


class BackgroundFamily(UtilityFamily):
    KEYWORDS: dict[str, tuple[str, str]] = {
        "none": ("background-image", "none"),
        "cover": ("background-size", "cover"),
        "contain": ("background-size", "contain"),
        "center": ("background-position", "center"),
        "no-repeat": ("background-repeat", "no-repeat"),
    }

    def resolve(self, value_key: str, ctx: ResolveContext, negated: bool = False) -> Resolution | None:
        if value_key in self.KEYWORDS:
            return Resolution([self.KEYWORDS[value_key]], negatable=False)
        color = ctx.colors.resolve(value_key)
        if color is None:
            return None
        return Resolution([("background-color", color)], negatable=False)


class GradientDirectionFamily(UtilityFamily):
    """``bg-gradient-to-r``: one gradient built from the ``--gradient-*`` variables."""

    def resolve(self, value_key: str, ctx: ResolveContext, negated: bool = False) -> Resolution | None:
        direction = GRADIENT_DIRECTIONS.get(value_key)
        if direction is None:
            return None
        return Resolution(
            [("background-image", f"linear-gradient({direction}, {GRADIENT_STOPS})")],
            negatable=False,
        )


class GradientStopFamily(UtilityFamily):
    """``from-*`` / ``via-*`` / ``to-*`` write custom properties, never the gradient itself."""

    def __init__(self, stop: str):
        if stop not in ("from", "via", "to"):
            raise ValueError(f"Unknown gradient stop: {stop}")
        self.stop = stop

    def resolve(self, value_key: str, ctx: ResolveContext, negated: bool = False) -> Resolution | None:
        color = ctx.colors.resolve(value_key)
        if color is None:
            return None
        if self.stop == "from":
            declarations = [
                ("--gradient-from", color),
                ("--gradient-to", transparent_stop(color)),
                ("--gradient-stops", "var(--gradient-from), var(--gradient-to)"),
            ]
        elif self.stop == "via":
            declarations = [
                (
                    "--gradient-stops",
                    f"var(--gradient-from, transparent), {color}, var(--gradient-to, transparent)",
                ),
            ]
        else:
            declarations = [("--gradient-to", color)]
        return Resolution(declarations, negatable=False)


# =============================================================================
# Borders, radius, shadow
# =============================================================================


class BorderFamily(UtilityFamily):
    """Border color, per-side width, generic width or style keyword."""

    def _width(self, key: str) -> str | None:
        literal = bracket_value(key)
        if literal is not None:
            return literal
        if key.isdigit():
            return f"{key}px"
        return None

    def resolve(self, value_key: str, ctx: ResolveContext, negated: bool = False) -> Resolution | None:
        literal = bracket_value(value_key)
        if literal is not None and is_color_literal(literal):
            return Resolution([("border-color", literal)], negatable=False)

        color = ctx.colors.resolve(value_key) if literal is None else None
        if color is not None:
            return Resolution([("border-color", color)], negatable=False)

        side, _, width_key = value_key.partition("-")
        if side in BORDER_SIDES:
            width = self._width(width_key) if width_key else "1px"
            if width is None:
                return None
            return Resolution([(prop, width) for prop in BORDER_SIDES[side]], negatable=False)

        if value_key in BORDER_STYLES:
            return Resolution([("border-style", value_key)], negatable=False)

        width = self._width(value_key)
        if width is None:
            return None
        return Resolution([("border-width", width)], negatable=False)


class RadiusFamily(UtilityFamily):
    """Bracket literal, theme ``borderRadius`` lookup, or ``n * 0.125rem``."""

    def __init__(self, corners: tuple[str, ...]):
        self.corners = corners

    def _value(self, key: str, ctx: ResolveContext) -> str | None:
        radii = ctx.theme.border_radius
        if not key:
            return radii.get("DEFAULT", DEFAULT_RADIUS)
        literal = bracket_value(key)
        if literal is not None:
            return literal
        if key in radii:
            return radii[key]
        if _NUMBER.match(key):
            return f"{format_number(float(key) * 0.125)}rem"
        return None

    def resolve(self, value_key: str, ctx: ResolveContext, negated: bool = False) -> Resolution | None:
        value = self._value(value_key, ctx)
        if value is None:
            return None
        return Resolution([(corner, value) for corner in self.corners], negatable=False)


class ShadowFamily(UtilityFamily):
    def resolve(self, value_key: str, ctx: ResolveContext, negated: bool = False) -> Resolution | None:
        shadows = ctx.theme.shadows
        if not value_key:
            value = shadows.get("DEFAULT") or shadows.get(DEFAULT_SHADOW_KEY)
        else:
            value = bracket_value(value_key) or shadows.get(value_key)
        if value is None:
            return None
        return Resolution([("box-shadow", value)], negatable=False)


# =============================================================================
# Effects and motion
# =============================================================================


class ScaleFamily(UtilityFamily):
    """``scale-105`` -> ``transform: scale(1.05)``; the sign is applied inside scale()."""

    def resolve(self, value_key: str, ctx: ResolveContext, negated: bool = False) -> Resolution | None:
        factor = bracket_value(value_key)
        if factor is None and _NUMBER.match(value_key):
            factor = format_number(float(value_key) / 100)
        if factor is None:
            return None
        if negated:
            factor = negate_value(factor)
        return Resolution([("transform", f"scale({factor})")], negatable=False)


class BackdropBlurFamily(UtilityFamily):
    def resolve(self, value_key: str, ctx: ResolveContext, negated: bool = False) -> Resolution | None:
        radius = bracket_value(value_key) or BLUR_SIZES.get(value_key)
        if radius is None:
            return None
        value = f"blur({radius})"
        return Resolution(
            [("backdrop-filter", value), ("-webkit-backdrop-filter", value)], negatable=False
        )


class TransitionFamily(UtilityFamily):
    def resolve(self, value_key: str, ctx: ResolveContext, negated: bool = False) -> Resolution | None:
        if value_key == "none":
            return Resolution([("transition-property", "none")], negatable=False)
        properties = TRANSITION_PROPERTIES.get(value_key)
        if properties is None:
            return None
        return Resolution(
            [
                ("transition-property", properties),
                ("transition-timing-function", _DEFAULT_TIMING),
                ("transition-duration", _DEFAULT_DURATION),
            ],
            negatable=False,
        )


class TimingFamily(UtilityFamily):
    """``duration-*`` / ``delay-*`` in milliseconds."""

    def __init__(self, css_property: str):
        self.property = css_property

    def resolve(self, value_key: str, ctx: ResolveContext, negated: bool = False) -> Resolution | None:
        value = bracket_value(value_key)
        if value is None and value_key.isdigit():
            value = f"{value_key}ms"
        if value is None:
            return None
        return Resolution([(self.property, value)], negatable=False)


class EaseFamily(UtilityFamily):
    def resolve(self, value_key: str, ctx: ResolveContext, negated: bool = False) -> Resolution | None:
        value = bracket_value(value_key) or TIMING_FUNCTIONS.get(value_key)
        if value is None:
            return None
        return Resolution([("transition-timing-function", value)], negatable=False)


# =============================================================================
# Registry
# =============================================================================


class FamilyRegistry:
    """
    Registry of utility families keyed by class-name prefix.

    Supports:
    - Registration via register()
    - Lookup by prefix
    - Longest-prefix splitting of a base class name via split()
    """

    def __init__(self) -> None:
        self._families: dict[str, UtilityFamily] = {}

    def register(self, prefix: str, family: UtilityFamily) -> None:
        """
        Register a family for a prefix.

        Raises:
            ValueError: If the prefix is already registered
        """
        if prefix in self._families:
            raise ValueError(f"Utility prefix '{prefix}' is already registered")
        self._families[prefix] = family

    def get(self, prefix: str) -> UtilityFamily | None:
        return self._families.get(prefix)

    def __contains__(self, prefix: object) -> bool:
        return prefix in self._families

    def prefixes(self) -> list[str]:
        return sorted(self._families)

    def split(self, base: str) -> tuple[str, str] | None:
        """
        Split a base class name into ``(prefix, value_key)``.

        The longest registered dash-joined prefix wins, so ``max-w-prose``
        splits as ``("max-w", "prose")`` and ``bg-blue-500`` as
        ``("bg", "blue-500")``. A bare prefix yields an empty value key.
        """
        parts = base.split("-")
        for size in range(len(parts), 0, -1):
            prefix = "-".join(parts[:size])
            if prefix in self._families:
                return prefix, "-".join(parts[size:])
        return None


def build_registry(utilities: Mapping[str, UtilityEntry]) -> FamilyRegistry:
    """Build the default registry plus one SpacingFamily per PropertyPrefix entry."""
    registry = FamilyRegistry()

    registry.register("text", TextFamily())
    registry.register("bg", BackgroundFamily())
    registry.register("bg-gradient-to", GradientDirectionFamily())
    for stop in ("from", "via", "to"):
        registry.register(stop, GradientStopFamily(stop))
    registry.register("z", ZIndexFamily())
    registry.register("opacity", OpacityFamily())
    registry.register("aspect", AspectRatioFamily())
    registry.register("grid-cols", GridColumnsFamily())
    registry.register("col-span", ColumnSpanFamily())
    registry.register("space-x", SpaceBetweenFamily("x"))
    registry.register("space-y", SpaceBetweenFamily("y"))
    for prefix, corners in RADIUS_CORNERS.items():
        registry.register(prefix, RadiusFamily(corners))
    registry.register("scale", ScaleFamily())
    registry.register("transition", TransitionFamily())
    registry.register("duration", TimingFamily("transition-duration"))
    registry.register("delay", TimingFamily("transition-delay"))
    registry.register("ease", EaseFamily())
    registry.register("backdrop-blur", BackdropBlurFamily())
    registry.register("shadow", ShadowFamily())
    registry.register("border", BorderFamily())

    for name, entry in utilities.items():
        if isinstance(entry, PropertyPrefix):
            registry.register(name, SpacingFamily(entry))

    logger.debug("Built utility registry with %d prefixes", len(registry.prefixes()))
    return registry
