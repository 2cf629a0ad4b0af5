"""
QuantumCSS IR types.

Pydantic models describe the user-facing configuration (content globs, theme,
component presets). Plain dataclasses describe the values flowing through a
generation pass: parsed class tokens, utility-table entries and the rule-groups
handed from the resolver to the emitter.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Theme categories understood by the resolver, keyed by their config spelling.
THEME_CATEGORIES: dict[str, str] = {
    "colors": "colors",
    "spacing": "spacing",
    "fontSize": "font_size",
    "borderRadius": "border_radius",
    "shadows": "shadows",
    "maxWidth": "max_width",
}

ColorValue = str | dict[str, str]


def _coerce_scalar(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return value


def _coerce_token_map(value: Any) -> Any:
    """Stringify keys and scalar values (YAML/TOML users write ``4: 1rem``)."""
    if not isinstance(value, dict):
        return value
    coerced: dict[str, Any] = {}
    for key, item in value.items():
        if isinstance(item, dict):
            coerced[str(key)] = _coerce_token_map(item)
        else:
            coerced[str(key)] = _coerce_scalar(item)
    return coerced


# =============================================================================
# Theme
# =============================================================================


class Theme(BaseModel):
    """Merged design tokens consumed by the resolver and the :root block."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    colors: dict[str, ColorValue] = Field(default_factory=dict)
    spacing: dict[str, str] = Field(default_factory=dict)
    font_size: dict[str, str] = Field(default_factory=dict, alias="fontSize")
    border_radius: dict[str, str] = Field(default_factory=dict, alias="borderRadius")
    shadows: dict[str, str] = Field(default_factory=dict)
    max_width: dict[str, str] = Field(default_factory=dict, alias="maxWidth")

    @field_validator("*", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> Any:
        return _coerce_token_map(value)

    def category(self, name: str) -> dict[str, Any]:
        """Return a category by config spelling (``fontSize``) or field name."""
        attr = THEME_CATEGORIES.get(name, name)
        return getattr(self, attr)


class ThemeExtension(BaseModel):
    """Per-category additions merged key-by-key on top of the defaults."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    colors: dict[str, ColorValue] | None = None
    spacing: dict[str, str] | None = None
    font_size: dict[str, str] | None = Field(default=None, alias="fontSize")
    border_radius: dict[str, str] | None = Field(default=None, alias="borderRadius")
    shadows: dict[str, str] | None = None
    max_width: dict[str, str] | None = Field(default=None, alias="maxWidth")

    @field_validator(
        "colors", "spacing", "font_size", "border_radius", "shadows", "max_width", mode="before"
    )
    @classmethod
    def _coerce(cls, value: Any) -> Any:
        return _coerce_token_map(value)


class ThemeConfig(ThemeExtension):
    """The ``theme`` section of a config file.

    Categories given directly replace the default category wholesale;
    categories under ``extend`` are merged on top.
    """

    extend: ThemeExtension = Field(default_factory=ThemeExtension)


# =============================================================================
# Config
# =============================================================================


class QuantumConfig(BaseModel):
    """Top-level config document (``quantum.config.json`` and friends)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    content: list[str] = Field(default_factory=list, description="Glob patterns to scan")
    theme: ThemeConfig = Field(default_factory=ThemeConfig)
    component_presets: dict[str, str] = Field(default_factory=dict, alias="componentPresets")
    preflight: bool = Field(default=False, description="Emit a base reset after :root")
    banner: str | None = Field(default=None, description="Override the leading comment")

    @field_validator("content", mode="before")
    @classmethod
    def _single_pattern(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value


# =============================================================================
# Utility table entries
# =============================================================================


@dataclass(frozen=True)
class Declaration:
    """Explicit property/value pair(s), optionally pinned to a state variant."""

    property: str | tuple[str, ...]
    value: str | tuple[str, ...]
    variant: str | tuple[str, ...] | None = None

    def pairs(self) -> list[tuple[str, str]]:
        properties = (self.property,) if isinstance(self.property, str) else self.property
        if isinstance(self.value, str):
            return [(prop, self.value) for prop in properties]
        return list(zip(properties, self.value, strict=True))

    @property
    def variants(self) -> tuple[str, ...]:
        if self.variant is None:
            return ()
        if isinstance(self.variant, str):
            return (self.variant,)
        return self.variant


@dataclass(frozen=True)
class PropertyPrefix:
    """A prefix whose value comes from a bracket, theme or spacing lookup.

    ``lookup`` names a theme category consulted before the spacing scale;
    ``keywords`` are prefix-specific literal values (``screen``, ``auto``).
    """

    properties: tuple[str, ...]
    lookup: str | None = None
    keywords: Mapping[str, str] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class Preset:
    """A utility that expands into other utility class names."""

    classes: str

    def tokens(self) -> list[str]:
        return self.classes.split()


UtilityEntry = Declaration | PropertyPrefix | Preset


# =============================================================================
# Resolution values
# =============================================================================


@dataclass(frozen=True)
class ParsedToken:
    """A class token decomposed into sign, prefixes and base class name."""

    raw: str
    base: str
    negated: bool = False
    breakpoint: str | None = None
    variant: str | None = None
    mode: str | None = None


@dataclass
class RuleGroup:
    """Declaration lines sharing one selector context.

    ``custom_selector`` uses ``&`` as a placeholder for the token's own
    selector (``& > * + *``).
    """

    rules: list[str]
    breakpoint: str | None = None
    variant: str | None = None
    mode: str | None = None
    custom_selector: str | None = None

    @property
    def key(self) -> tuple[str | None, str | None, str | None, str | None]:
        return (self.breakpoint, self.mode, self.variant, self.custom_selector)
