"""
Statistics over generated CSS, shown by ``quantumcss build --analyze``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from .defaults import BREAKPOINTS, STATE_VARIANTS

_COMMENTS = re.compile(r"/\*.*?\*/", re.DOTALL)
_SELECTORS = re.compile(r"([^{}]+)\{")
_DECLARATION = re.compile(r"(?<![\w-])(-?-?[a-zA-Z][\w-]*)\s*:\s*[^;{}]+(?=[;}])")
_CLASS_SELECTOR = re.compile(r"\.((?:\\[0-9a-fA-F]{1,6} ?|\\.|[a-zA-Z0-9_-])+)")
_COLORS = re.compile(r"#[0-9a-fA-F]{3,8}\b|rgba?\([^)]+\)|hsla?\([^)]+\)")


@dataclass
class CssStats:
    """Counts describing one generated stylesheet."""

    size_bytes: int = 0
    selectors: int = 0
    declarations: int = 0
    custom_properties: int = 0
    utility_classes: int = 0
    state_variant_selectors: int = 0
    unique_colors: int = 0
    breakpoint_blocks: dict[str, int] = field(default_factory=dict)
    color_scheme_blocks: int = 0

    def rows(self) -> list[tuple[str, str]]:
        """Label/value pairs in display order."""
        rows = [
            ("Size", f"{self.size_bytes / 1024:.2f} KB"),
            ("Selectors", str(self.selectors)),
            ("Declarations", str(self.declarations)),
            ("Custom properties", str(self.custom_properties)),
            ("Utility classes", str(self.utility_classes)),
            ("State variant selectors", str(self.state_variant_selectors)),
            ("Unique colors", str(self.unique_colors)),
        ]
        for name, count in self.breakpoint_blocks.items():
            rows.append((f"@media {name}", str(count)))
        rows.append(("prefers-color-scheme blocks", str(self.color_scheme_blocks)))
        return rows


def analyze_css(css: str, breakpoints: Mapping[str, str] = BREAKPOINTS) -> CssStats:
    """Collect statistics from CSS text (minified or not)."""
    body = _COMMENTS.sub("", css)
    selectors = [s.strip() for s in _SELECTORS.findall(body)]
    rule_selectors = [s for s in selectors if not s.startswith("@")]
    declarations = _DECLARATION.findall(body)
    suffixes = tuple(STATE_VARIANTS.values())

    classes = {match.group(1) for match in _CLASS_SELECTOR.finditer("\n".join(rule_selectors))}
    state_selectors = sum(
        1 for selector in rule_selectors if any(suffix in selector for suffix in suffixes)
    )
    blocks = {
        name: len(re.findall(rf"@media\s*\(min-width:\s*{re.escape(width)}\)", body))
        for name, width in breakpoints.items()
    }

    return CssStats(
        size_bytes=len(css.encode("utf-8")),
        selectors=len(rule_selectors),
        declarations=len(declarations),
        custom_properties=sum(1 for name in declarations if name.startswith("--")),
        utility_classes=len(classes),
        state_variant_selectors=state_selectors,
        unique_colors=len(set(_COLORS.findall(body))),
        breakpoint_blocks=blocks,
        color_scheme_blocks=len(re.findall(r"@media\s*\(prefers-color-scheme", body)),
    )
