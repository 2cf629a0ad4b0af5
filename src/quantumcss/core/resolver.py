"""
Class rule resolver.

Turns one class token (``sm:hover:-mt-4``) into rule-groups:

1. Strip the sign and the breakpoint / variant / mode prefixes
2. Expand presets recursively (guarded against cycles)
3. Look up static utility declarations
4. Otherwise dispatch the base name to a utility family by prefix
5. Apply negation to numeric and length values

Unresolvable tokens produce no rule-groups; they are dropped, never an error.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace

from .colors import ColorTable
from .defaults import BREAKPOINTS, MODES, STATE_VARIANTS, UTILITIES
from .families import FamilyRegistry, ResolveContext, Resolution, build_registry, negate_value
from .ir import Declaration, ParsedToken, Preset, RuleGroup, Theme, UtilityEntry

logger = logging.getLogger(__name__)


def parse_token(
    token: str,
    breakpoints: Iterable[str] = BREAKPOINTS,
    variants: Iterable[str] = STATE_VARIANTS,
    modes: Iterable[str] = MODES,
) -> ParsedToken:
    """
    Decompose a class token into sign, breakpoint, variant, mode and base name.

    Prefix segments may come in any order; the last of each kind wins. The
    first segment that is not a known prefix starts the base name, and the
    final segment is always part of the base name.
    """
    breakpoint_names = set(breakpoints)
    variant_names = set(variants)
    mode_names = set(modes)

    negated = token.startswith("-")
    body = token[1:] if negated else token
    segments = body.split(":")

    breakpoint: str | None = None
    variant: str | None = None
    mode: str | None = None
    consumed = 0
    for segment in segments[:-1]:
        if segment in breakpoint_names:
            breakpoint = segment
        elif segment in mode_names:
            mode = segment
        elif segment in variant_names:
            variant = segment
        else:
            break
        consumed += 1

    base = ":".join(segments[consumed:])
    if base.startswith("-"):
        negated = True
        base = base[1:]

    return ParsedToken(
        raw=token,
        base=base,
        negated=negated,
        breakpoint=breakpoint,
        variant=variant,
        mode=mode,
    )


def inherit_context(outer: ParsedToken, group: RuleGroup) -> RuleGroup:
    """
    Propagate a preset's prefixes onto a rule-group from one of its classes.

    The outer breakpoint / variant / mode act as defaults: a value the inner
    class set explicitly is kept.
    """
    return replace(
        group,
        breakpoint=group.breakpoint or outer.breakpoint,
        variant=group.variant or outer.variant,
        mode=group.mode or outer.mode,
    )


def _declaration_lines(declarations: Iterable[tuple[str, str]]) -> list[str]:
    return [f"{prop}: {value};" for prop, value in declarations]


class ClassResolver:
    """
    Resolves class tokens against one theme, color table and preset table.

    Args:
        theme: Merged theme of the current pass
        colors: Flattened colors (built from ``theme`` if omitted)
        presets: User component presets; they shadow utility-table presets
        utilities: Static utility table
        registry: Family registry (built from ``utilities`` if omitted)
        breakpoints: Breakpoint name -> min-width
    """

    def __init__(
        self,
        theme: Theme,
        colors: ColorTable | None = None,
        presets: Mapping[str, str] | None = None,
        utilities: Mapping[str, UtilityEntry] = UTILITIES,
        registry: FamilyRegistry | None = None,
        breakpoints: Mapping[str, str] = BREAKPOINTS,
    ):
        self.theme = theme
        self.colors = colors if colors is not None else ColorTable.from_theme(theme)
        self.presets = dict(presets or {})
        self.utilities = utilities
        self.registry = registry if registry is not None else build_registry(utilities)
        self.breakpoints = breakpoints
        self._ctx = ResolveContext(theme=theme, colors=self.colors)

    def parse(self, token: str) -> ParsedToken:
        return parse_token(token, self.breakpoints)

    def preset_classes(self, base: str) -> list[str] | None:
        """Return the classes a preset expands to, or None if ``base`` is not a preset."""
        if base in self.presets:
            return self.presets[base].split()
        entry = self.utilities.get(base)
        if isinstance(entry, Preset):
            return entry.tokens()
        return None

    def resolve(self, token: str, seen: frozenset[str] = frozenset()) -> list[RuleGroup]:
        """
        Resolve a class token into rule-groups.

        Args:
            token: Raw class token from markup
            seen: Presets already expanded in the current recursion chain

        Returns:
            Rule-groups for the token; empty if it cannot be resolved
        """
        parsed = self.parse(token)
        if not parsed.base:
            return []

        classes = self.preset_classes(parsed.base)
        if classes is not None:
            if parsed.base in seen:
                logger.debug("Preset cycle at %r (chain: %s)", parsed.base, ", ".join(sorted(seen)))
            else:
                return self._expand_preset(parsed, classes, seen | {parsed.base})

        entry = self.utilities.get(parsed.base)
        if isinstance(entry, Declaration):
            return self._static_groups(parsed, entry)

        resolution = self._resolve_dynamic(parsed)
        if resolution is None:
            logger.debug("Unresolved class token %r", token)
            return []

        declarations = resolution.declarations
        if parsed.negated and resolution.negatable:
            declarations = [(prop, negate_value(value)) for prop, value in declarations]

        return [
            RuleGroup(
                rules=_declaration_lines(declarations),
                breakpoint=parsed.breakpoint,
                variant=parsed.variant,
                mode=parsed.mode,
                custom_selector=resolution.custom_selector,
            )
        ]

    def resolve_all(self, tokens: Iterable[str]) -> dict[str, list[RuleGroup]]:
        """Resolve tokens in lexicographic order, omitting unresolvable ones."""
        resolved: dict[str, list[RuleGroup]] = {}
        for token in sorted(set(tokens)):
            groups = self.resolve(token)
            if groups:
                resolved[token] = groups
        return resolved

    def _expand_preset(
        self, parsed: ParsedToken, classes: list[str], chain: frozenset[str]
    ) -> list[RuleGroup]:
        groups: list[RuleGroup] = []
        for sub_token in classes:
            for group in self.resolve(sub_token, chain):
                groups.append(inherit_context(parsed, group))
        return groups

    def _static_groups(self, parsed: ParsedToken, entry: Declaration) -> list[RuleGroup]:
        declarations = entry.pairs()
        if parsed.negated:
            declarations = [(prop, negate_value(value)) for prop, value in declarations]
        rules = _declaration_lines(declarations)

        # A variant written in the token beats the entry's fixed variant(s).
        variants: tuple[str | None, ...] = (parsed.variant,)
        if parsed.variant is None and entry.variants:
            variants = entry.variants

        return [
            RuleGroup(
                rules=list(rules),
                breakpoint=parsed.breakpoint,
                variant=variant,
                mode=parsed.mode,
            )
            for variant in variants
        ]

    def _resolve_dynamic(self, parsed: ParsedToken) -> Resolution | None:
        split = self.registry.split(parsed.base)
        if split is None:
            return None
        prefix, value_key = split
        family = self.registry.get(prefix)
        if family is None:
            return None
        return family.resolve(value_key, self._ctx, parsed.negated)
