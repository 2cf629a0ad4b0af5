"""
Rule emitter for QuantumCSS.

Serializes resolved rule-groups to CSS text:

- a ``:root`` block of custom properties mirrored from the theme
- base utility rules in token order
- one ``@media (min-width)`` block per breakpoint, ascending by width
- ``prefers-color-scheme`` blocks duplicating ``dark:`` / ``light:`` rules,
  which are also emitted inline behind the explicit theme toggles
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping

from .defaults import BREAKPOINTS, GROUP_VARIANT_PREFIX, MODE_SELECTORS, MODES, STATE_VARIANTS
from .ir import RuleGroup, Theme
from .theme import theme_css_variables

logger = logging.getLogger(__name__)

_SELECTOR_SPECIAL = frozenset(":[]/.\\%#(),!&@*+'\"=<>~?{}$^|;")
_PIXELS = re.compile(r"^(\d*\.?\d+)")

INDENT = "  "


def escape_class(name: str) -> str:
    """
    Escape a raw class token for use in a class selector.

    ``sm:hidden`` -> ``sm\\:hidden``; a leading digit becomes a hex escape
    (``2xl:flex`` -> ``\\32 xl\\:flex``).
    """
    escaped: list[str] = []
    for index, ch in enumerate(name):
        leading_digit = ch.isdigit() and (index == 0 or (index == 1 and name[0] == "-"))
        if leading_digit:
            escaped.append(f"\\3{ch} ")
        elif ch in _SELECTOR_SPECIAL:
            escaped.append(f"\\{ch}")
        else:
            escaped.append(ch)
    return "".join(escaped)


def merge_rule_groups(groups: Iterable[RuleGroup]) -> list[RuleGroup]:
    """
    Merge rule-groups sharing breakpoint, mode, variant and custom selector.

    Declaration lines are concatenated in order; the merged groups keep the
    order in which each key first appeared.
    """
    merged: dict[tuple[str | None, ...], RuleGroup] = {}
    for group in groups:
        existing = merged.get(group.key)
        if existing is None:
            merged[group.key] = RuleGroup(
                rules=list(group.rules),
                breakpoint=group.breakpoint,
                variant=group.variant,
                mode=group.mode,
                custom_selector=group.custom_selector,
            )
        else:
            existing.rules.extend(group.rules)
    return list(merged.values())


def build_selector(token: str, group: RuleGroup, variants: Mapping[str, str] = STATE_VARIANTS) -> str:
    """
    Build the selector for one merged rule-group of ``token``.

    State variants become a suffix (``:hover``, ``::placeholder``); ``group-*``
    variants become an ancestor combinator (``.group:hover .x``). A custom
    selector replaces ``&`` with the token's selector.
    """
    selector = f".{escape_class(token)}"
    if group.variant is not None:
        suffix = variants.get(group.variant, f":{group.variant}")
        if group.variant.startswith(GROUP_VARIANT_PREFIX):
            selector = f".group{suffix} {selector}"
        else:
            selector = f"{selector}{suffix}"
    if group.custom_selector:
        selector = group.custom_selector.replace("&", selector)
    return selector


def _min_width(width: str) -> float:
    match = _PIXELS.match(width)
    return float(match.group(1)) if match else 0.0


def _block(selector: str, rules: list[str]) -> str:
    body = "\n".join(f"{INDENT}{rule}" for rule in rules)
    return f"{selector} {{\n{body}\n}}"


def _indent(text: str) -> str:
    return "\n".join(f"{INDENT}{line}" if line else line for line in text.split("\n"))


def _media(query: str, blocks: list[str]) -> str:
    inner = "\n".join(_indent(block) for block in blocks)
    return f"@media {query} {{\n{inner}\n}}"


class RuleEmitter:
    """
    Serializes rule-groups for one generation pass.

    Args:
        theme: Theme mirrored into the ``:root`` block
        breakpoints: Breakpoint name -> min-width (``"640px"``)
    """

    def __init__(self, theme: Theme, breakpoints: Mapping[str, str] = BREAKPOINTS):
        self.theme = theme
        self.breakpoints = dict(breakpoints)

    def ordered_breakpoints(self) -> list[str]:
        return sorted(self.breakpoints, key=lambda name: _min_width(self.breakpoints[name]))

    def root_block(self) -> str:
        """``:root`` block with one custom property per theme token."""
        rules = [f"{name}: {value};" for name, value in theme_css_variables(self.theme)]
        if not rules:
            return ":root {\n}"
        return _block(":root", rules)

    def emit(
        self,
        token_rule_groups: Mapping[str, list[RuleGroup]],
        preamble: str | None = None,
        include_root: bool = True,
    ) -> str:
        """
        Serialize resolved rule-groups.

        Args:
            token_rule_groups: Token -> rule-groups, in emission order
            preamble: Optional CSS placed between ``:root`` and the utilities
            include_root: Emit the ``:root`` variable block

        Returns:
            CSS text ending with a newline
        """
        base: list[str] = []
        media: dict[str, list[str]] = {name: [] for name in self.breakpoints}
        schemes: dict[str, dict[str | None, list[str]]] = {mode: {} for mode in MODES}

        for token, groups in token_rule_groups.items():
            for group in merge_rule_groups(groups):
                selector = build_selector(token, group)
                breakpoint = group.breakpoint
                if breakpoint is not None and breakpoint not in media:
                    logger.debug("Unknown breakpoint %r for %r; emitting unwrapped", breakpoint, token)
                    breakpoint = None
                target = base if breakpoint is None else media[breakpoint]

                if group.mode in MODE_SELECTORS:
                    toggled = ", ".join(f"{prefix} {selector}" for prefix in MODE_SELECTORS[group.mode])
                    target.append(_block(toggled, group.rules))
                    schemes[group.mode].setdefault(breakpoint, []).append(_block(selector, group.rules))
                else:
                    target.append(_block(selector, group.rules))

        sections = [self.root_block()] if include_root else []
        if preamble:
            sections.append(preamble.strip())
        if base:
            sections.append("\n".join(base))
        for name in self.ordered_breakpoints():
            if media[name]:
                sections.append(_media(f"(min-width: {self.breakpoints[name]})", media[name]))
        for mode in MODES:
            blocks = schemes[mode]
            for name in [None, *self.ordered_breakpoints()]:
                if not blocks.get(name):
                    continue
                query = f"(prefers-color-scheme: {mode})"
                if name is not None:
                    query = f"{query} and (min-width: {self.breakpoints[name]})"
                sections.append(_media(query, blocks[name]))

        return "\n\n".join(sections) + "\n"
