"""
Built-in design tokens and the static utility table.

The default theme is a plain mapping in config spelling so that it can be fed
through the same pydantic validation as user input (see ``default_theme``).
"""

from __future__ import annotations

from typing import Any

from .ir import Declaration, PropertyPrefix, Preset, Theme, UtilityEntry

# =============================================================================
# Theme tokens
# =============================================================================

DEFAULT_THEME_DATA: dict[str, dict[str, Any]] = {
    "colors": {
        "transparent": "transparent",
        "current": "currentColor",
        "inherit": "inherit",
        "white": "#ffffff",
        "black": "#000000",
        "gray": {
            "50": "#f9fafb",
            "100": "#f3f4f6",
            "200": "#e5e7eb",
            "300": "#d1d5db",
            "400": "#9ca3af",
            "500": "#6b7280",
            "600": "#4b5563",
            "700": "#374151",
            "800": "#1f2937",
            "900": "#111827",
        },
        "slate": {
            "100": "#f1f5f9",
            "300": "#cbd5e1",
            "500": "#64748b",
            "700": "#334155",
            "900": "#0f172a",
            "950": "#020617",
        },
        "blue": {
            "50": "#eff6ff",
            "100": "#dbeafe",
            "400": "#60a5fa",
            "500": "#3b82f6",
            "600": "#2563eb",
            "700": "#1d4ed8",
        },
        "red": {"100": "#fee2e2", "500": "#ef4444", "600": "#dc2626"},
        "green": {"100": "#d1fae5", "500": "#10b981", "600": "#059669"},
        "yellow": {"400": "#facc15", "500": "#eab308"},
        "purple": {"400": "#c084fc", "500": "#a855f7", "600": "#9333ea"},
        "starlight": {
            "blue": "#00d4ff",
            "peach": "#ffb38a",
            "orange": "#ff7e5f",
            "deep": "#08081a",
        },
    },
    "spacing": {
        "0": "0px",
        "px": "1px",
        "0.5": "0.125rem",
        "1": "0.25rem",
        "1.5": "0.375rem",
        "2": "0.5rem",
        "2.5": "0.625rem",
        "3": "0.75rem",
        "4": "1rem",
        "5": "1.25rem",
        "6": "1.5rem",
        "8": "2rem",
        "10": "2.5rem",
        "12": "3rem",
        "16": "4rem",
        "20": "5rem",
        "24": "6rem",
        "32": "8rem",
        "64": "16rem",
        "128": "32rem",
        "144": "36rem",
    },
    "fontSize": {
        "xs": "0.75rem",
        "sm": "0.875rem",
        "base": "1rem",
        "lg": "1.125rem",
        "xl": "1.25rem",
        "2xl": "1.5rem",
        "3xl": "2rem",
        "4xl": "2.5rem",
        "5xl": "3.5rem",
        "6xl": "4.5rem",
    },
    "borderRadius": {
        "none": "0px",
        "sm": "0.125rem",
        "md": "0.375rem",
        "lg": "0.5rem",
        "xl": "0.75rem",
        "2xl": "1rem",
        "3xl": "1.5rem",
        "full": "9999px",
    },
    "shadows": {
        "sm": "0 1px 2px 0 rgb(0 0 0 / 0.05)",
        "md": "0 4px 6px -1px rgb(0 0 0 / 0.1), 0 2px 4px -2px rgb(0 0 0 / 0.1)",
        "lg": "0 10px 15px -3px rgb(0 0 0 / 0.1), 0 4px 6px -4px rgb(0 0 0 / 0.1)",
        "xl": "0 20px 25px -5px rgb(0 0 0 / 0.1), 0 8px 10px -6px rgb(0 0 0 / 0.1)",
        "inner": "inset 0 2px 4px 0 rgb(0 0 0 / 0.05)",
        "none": "none",
    },
    "maxWidth": {
        "xs": "20rem",
        "sm": "24rem",
        "md": "28rem",
        "lg": "32rem",
        "xl": "36rem",
        "2xl": "42rem",
        "4xl": "56rem",
        "6xl": "72rem",
        "7xl": "80rem",
        "prose": "65ch",
        "full": "100%",
        "none": "none",
    },
}

# Fallbacks for bare ``rounded`` / ``shadow`` when the theme has no DEFAULT key.
DEFAULT_RADIUS = "0.25rem"
DEFAULT_SHADOW_KEY = "md"


def default_theme() -> Theme:
    """Build a fresh Theme from the built-in tokens."""
    return Theme.model_validate(DEFAULT_THEME_DATA)


# =============================================================================
# Breakpoints, variants, modes
# =============================================================================

BREAKPOINTS: dict[str, str] = {
    "sm": "640px",
    "md": "768px",
    "lg": "1024px",
    "xl": "1280px",
    "2xl": "1536px",
}

# Variant name -> selector suffix. group-* variants are rewritten to an
# ancestor combinator by the emitter.
STATE_VARIANTS: dict[str, str] = {
    "hover": ":hover",
    "focus": ":focus",
    "focus-visible": ":focus-visible",
    "focus-within": ":focus-within",
    "active": ":active",
    "disabled": ":disabled",
    "visited": ":visited",
    "first": ":first-child",
    "last": ":last-child",
    "odd": ":nth-child(odd)",
    "even": ":nth-child(even)",
    "placeholder": "::placeholder",
    "group-hover": ":hover",
    "group-focus": ":focus",
}

GROUP_VARIANT_PREFIX = "group-"

MODES: tuple[str, ...] = ("dark", "light")

# Explicit toggles: html[data-theme] attribute and body.<mode>-mode class.
MODE_SELECTORS: dict[str, tuple[str, ...]] = {
    "dark": ('[data-theme="dark"]', ".dark-mode"),
    "light": ('[data-theme="light"]', ".light-mode"),
}

PREFLIGHT = """\
*, ::before, ::after { box-sizing: border-box; border-width: 0; border-style: solid; border-color: #e5e7eb; }
html { line-height: 1.5; -webkit-text-size-adjust: 100%; font-family: Inter, ui-sans-serif, system-ui, sans-serif; }
body { margin: 0; line-height: inherit; }
img { display: block; max-width: 100%; height: auto; }
button { cursor: pointer; background: transparent; padding: 0; color: inherit; font: inherit; }
"""

# =============================================================================
# Utility table
# =============================================================================


def _prefix(*properties: str, lookup: str | None = None, **keywords: str) -> PropertyPrefix:
    return PropertyPrefix(properties=properties, lookup=lookup, keywords=keywords)


_SIZING_KEYWORDS = {"auto": "auto", "min": "min-content", "max": "max-content", "fit": "fit-content"}

UTILITIES: dict[str, UtilityEntry] = {
    # Layout
    "flex": Declaration("display", "flex"),
    "inline-flex": Declaration("display", "inline-flex"),
    "grid": Declaration("display", "grid"),
    "hidden": Declaration("display", "none"),
    "block": Declaration("display", "block"),
    "inline-block": Declaration("display", "inline-block"),
    "inline": Declaration("display", "inline"),
    "relative": Declaration("position", "relative"),
    "absolute": Declaration("position", "absolute"),
    "fixed": Declaration("position", "fixed"),
    "sticky": Declaration("position", "sticky"),
    "overflow-hidden": Declaration("overflow", "hidden"),
    "overflow-auto": Declaration("overflow", "auto"),
    # Alignment
    "items-center": Declaration("align-items", "center"),
    "items-start": Declaration("align-items", "flex-start"),
    "items-end": Declaration("align-items", "flex-end"),
    "justify-center": Declaration("justify-content", "center"),
    "justify-between": Declaration("justify-content", "space-between"),
    "justify-start": Declaration("justify-content", "flex-start"),
    "justify-end": Declaration("justify-content", "flex-end"),
    # Flex
    "flex-row": Declaration("flex-direction", "row"),
    "flex-col": Declaration("flex-direction", "column"),
    "flex-grow": Declaration("flex-grow", "1"),
    "flex-wrap": Declaration("flex-wrap", "wrap"),
    "flex-1": Declaration("flex", "1 1 0%"),
    "shrink-0": Declaration("flex-shrink", "0"),
    # Sizing
    "w-full": Declaration("width", "100%"),
    "h-full": Declaration("height", "100%"),
    "w-screen": Declaration("width", "100vw"),
    "h-screen": Declaration("height", "100vh"),
    "min-h-screen": Declaration("min-height", "100vh"),
    "w": _prefix("width", **_SIZING_KEYWORDS),
    "h": _prefix("height", **_SIZING_KEYWORDS),
    "min-w": _prefix("min-width", **_SIZING_KEYWORDS),
    "min-h": _prefix("min-height", **_SIZING_KEYWORDS),
    "max-w": _prefix("max-width", lookup="maxWidth", **_SIZING_KEYWORDS),
    "max-h": _prefix("max-height", screen="100vh", **_SIZING_KEYWORDS),
    # Spacing
    "m": _prefix("margin", auto="auto"),
    "mt": _prefix("margin-top", auto="auto"),
    "mr": _prefix("margin-right", auto="auto"),
    "mb": _prefix("margin-bottom", auto="auto"),
    "ml": _prefix("margin-left", auto="auto"),
    "mx": _prefix("margin-left", "margin-right", auto="auto"),
    "my": _prefix("margin-top", "margin-bottom", auto="auto"),
    "p": _prefix("padding"),
    "pt": _prefix("padding-top"),
    "pr": _prefix("padding-right"),
    "pb": _prefix("padding-bottom"),
    "pl": _prefix("padding-left"),
    "px": _prefix("padding-left", "padding-right"),
    "py": _prefix("padding-top", "padding-bottom"),
    "gap": _prefix("gap"),
    "gap-x": _prefix("column-gap"),
    "gap-y": _prefix("row-gap"),
    "inset": _prefix("top", "right", "bottom", "left", auto="auto", full="100%"),
    "inset-x": _prefix("left", "right", auto="auto", full="100%"),
    "inset-y": _prefix("top", "bottom", auto="auto", full="100%"),
    "top": _prefix("top", auto="auto", full="100%"),
    "right": _prefix("right", auto="auto", full="100%"),
    "bottom": _prefix("bottom", auto="auto", full="100%"),
    "left": _prefix("left", auto="auto", full="100%"),
    # Typography
    "font-light": Declaration("font-weight", "300"),
    "font-normal": Declaration("font-weight", "400"),
    "font-medium": Declaration("font-weight", "500"),
    "font-semibold": Declaration("font-weight", "600"),
    "font-bold": Declaration("font-weight", "700"),
    "tracking-tighter": Declaration("letter-spacing", "-0.05em"),
    "tracking-tight": Declaration("letter-spacing", "-0.025em"),
    "tracking-wide": Declaration("letter-spacing", "0.025em"),
    "leading-none": Declaration("line-height", "1"),
    "leading-tight": Declaration("line-height", "1.25"),
    "leading-relaxed": Declaration("line-height", "1.625"),
    "text-center": Declaration("text-align", "center"),
    "text-left": Declaration("text-align", "left"),
    "text-right": Declaration("text-align", "right"),
    "uppercase": Declaration("text-transform", "uppercase"),
    "italic": Declaration("font-style", "italic"),
    "underline": Declaration("text-decoration-line", "underline"),
    "truncate": Declaration(
        ("overflow", "text-overflow", "white-space"), ("hidden", "ellipsis", "nowrap")
    ),
    # Borders
    "border": Declaration(("border-width", "border-style"), ("1px", "solid")),
    "border-t": Declaration(("border-top-width", "border-style"), ("1px", "solid")),
    "border-r": Declaration(("border-right-width", "border-style"), ("1px", "solid")),
    "border-b": Declaration(("border-bottom-width", "border-style"), ("1px", "solid")),
    "border-l": Declaration(("border-left-width", "border-style"), ("1px", "solid")),
    # Interactivity & states
    "transition": Declaration("transition", "all 0.3s cubic-bezier(0.4, 0, 0.2, 1)"),
    "cursor-pointer": Declaration("cursor", "pointer"),
    "select-none": Declaration("user-select", "none"),
    "pointer-events-none": Declaration("pointer-events", "none"),
    "active-scale": Declaration("transform", "scale(0.96)", variant="active"),
    "press-scale": Declaration("transform", "scale(0.96)", variant=("focus", "active")),
    "focus-glow-blue": Declaration(
        ("outline", "box-shadow"), ("none", "0 0 0 3px rgba(0, 212, 255, 0.35)"), variant="focus"
    ),
    "focus-glow-purple": Declaration(
        ("outline", "box-shadow"), ("none", "0 0 0 3px rgba(168, 85, 247, 0.35)"), variant="focus"
    ),
    # Starlight primitives
    "glass": Declaration(
        ("background-color", "backdrop-filter", "-webkit-backdrop-filter", "border", "box-shadow"),
        (
            "rgba(255, 255, 255, 0.03)",
            "blur(16px)",
            "blur(16px)",
            "1px solid rgba(255, 255, 255, 0.1)",
            "0 8px 32px 0 rgba(0, 0, 0, 0.37)",
        ),
    ),
    "glow-blue": Declaration("box-shadow", "0 0 30px rgba(0, 212, 255, 0.25)"),
    "bg-starlight": Declaration("background", "linear-gradient(135deg, #ffb38a 0%, #00d4ff 100%)"),
    "text-gradient-starlight": Declaration(
        ("background", "-webkit-background-clip", "-webkit-text-fill-color", "display"),
        ("linear-gradient(to right, #ffb38a, #00d4ff)", "text", "transparent", "inline-block"),
    ),
    "text-gradient": Declaration(
        ("background-clip", "-webkit-background-clip", "-webkit-text-fill-color", "color"),
        ("text", "text", "transparent", "transparent"),
    ),
    "skeleton": Declaration(
        (
            "background-color",
            "background-image",
            "background-size",
            "background-repeat",
            "border-radius",
            "width",
            "height",
        ),
        (
            "rgba(255, 255, 255, 0.1)",
            "linear-gradient(90deg, transparent, rgba(255,255,255,0.15), transparent)",
            "200% 100%",
            "no-repeat",
            "0.5rem",
            "100%",
            "1rem",
        ),
    ),
    "dialog-overlay": Declaration(
        ("position", "top", "left", "width", "height", "background", "backdrop-filter", "z-index"),
        ("fixed", "0", "0", "100vw", "100vh", "rgba(0, 0, 0, 0.6)", "blur(12px)", "400"),
    ),
    # Presets
    "center": Preset("flex items-center justify-center"),
    "stack": Preset("flex flex-col space-y-4"),
    "card": Preset("p-6 rounded-xl bg-white shadow-md"),
    "btn": Preset(
        "inline-flex items-center justify-center px-4 py-2 rounded-lg font-medium transition cursor-pointer"
    ),
    "btn-primary": Preset("btn bg-blue-500 text-white hover:bg-blue-600"),
    "btn-starlight": Preset("btn bg-starlight text-black font-bold glow-blue"),
    "btn-secondary": Preset("btn glass text-inherit"),
    "dialog-content": Preset("glass rounded-3xl w-full max-w-2xl shadow-xl overflow-hidden relative"),
}
