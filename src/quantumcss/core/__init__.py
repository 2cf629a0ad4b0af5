"""Core QuantumCSS functionality: theme, colors, scanning, resolution, emission."""

from .analysis import CssStats, analyze_css
from .colors import ColorTable, hex_to_rgba, resolve_color
from .config_loader import ConfigCache, find_config, load_config, reload_config
from .defaults import BREAKPOINTS, UTILITIES, default_theme
from .emitter import RuleEmitter, build_selector, escape_class, merge_rule_groups
from .errors import ConfigError, QuantumError, ScanError
from .families import FamilyRegistry, UtilityFamily, build_registry
from .generator import GenerationResult, generate, generate_css, generate_from_classes, minify_css
from .ir import ParsedToken, QuantumConfig, RuleGroup, Theme, ThemeConfig
from .resolver import ClassResolver, inherit_context, parse_token
from .scanner import extract_classes, scan
from .theme import merge_theme, theme_css_variables

__all__ = [
    "BREAKPOINTS",
    "UTILITIES",
    "ClassResolver",
    "ColorTable",
    "ConfigCache",
    "ConfigError",
    "CssStats",
    "FamilyRegistry",
    "GenerationResult",
    "ParsedToken",
    "QuantumConfig",
    "QuantumError",
    "RuleEmitter",
    "RuleGroup",
    "ScanError",
    "Theme",
    "ThemeConfig",
    "UtilityFamily",
    "analyze_css",
    "build_registry",
    "build_selector",
    "default_theme",
    "escape_class",
    "extract_classes",
    "find_config",
    "generate",
    "generate_css",
    "generate_from_classes",
    "hex_to_rgba",
    "inherit_context",
    "load_config",
    "merge_rule_groups",
    "merge_theme",
    "minify_css",
    "parse_token",
    "reload_config",
    "resolve_color",
    "scan",
    "theme_css_variables",
]
