"""Tests for the theme store: config models, merging and :root variables."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

# =============================================================================
# Config models
# =============================================================================


class TestThemeModels:
    """Test Theme / ThemeConfig / QuantumConfig models."""

    def test_default_theme_categories(self):
        from quantumcss.core.defaults import default_theme

        theme = default_theme()
        assert theme.spacing["4"] == "1rem"
        assert theme.font_size["lg"] == "1.125rem"
        assert theme.border_radius["full"] == "9999px"
        assert theme.max_width["prose"] == "65ch"
        assert theme.colors["blue"]["500"] == "#3b82f6"

    def test_theme_is_frozen(self, theme):
        with pytest.raises(ValidationError):
            theme.spacing = {}  # type: ignore[misc]

    def test_category_accepts_config_spelling(self, theme):
        assert theme.category("fontSize") is theme.font_size
        assert theme.category("font_size") is theme.font_size
        assert theme.category("maxWidth")["full"] == "100%"

    def test_numeric_keys_and_values_coerced(self):
        from quantumcss.core.ir import ThemeConfig

        config = ThemeConfig.model_validate({"extend": {"spacing": {4: "1.2rem", 7: 2}}})
        assert config.extend.spacing == {"4": "1.2rem", "7": "2"}

    def test_quantum_config_aliases(self):
        from quantumcss.core.ir import QuantumConfig

        config = QuantumConfig.model_validate(
            {
                "content": "./**/*.html",
                "componentPresets": {"panel": "p-4 rounded-lg"},
                "preflight": True,
            }
        )
        assert config.content == ["./**/*.html"]
        assert config.component_presets == {"panel": "p-4 rounded-lg"}
        assert config.preflight is True

    def test_quantum_config_defaults(self):
        from quantumcss.core.ir import QuantumConfig

        config = QuantumConfig()
        assert config.content == []
        assert config.component_presets == {}
        assert config.theme.extend.colors is None
        assert config.banner is None

    def test_invalid_content_type(self):
        from quantumcss.core.ir import QuantumConfig

        with pytest.raises(ValidationError):
            QuantumConfig.model_validate({"content": {"not": "a list"}})


# =============================================================================
# Merging
# =============================================================================


class TestMergeTheme:
    """Test merge_theme precedence rules."""

    def test_extend_overrides_and_adds(self, theme):
        from quantumcss.core.ir import ThemeConfig
        from quantumcss.core.theme import merge_theme

        config = ThemeConfig.model_validate(
            {"extend": {"spacing": {"4": "1.2rem", "5": "1.3rem"}}}
        )
        merged = merge_theme(theme, config)
        assert merged.spacing["4"] == "1.2rem"
        assert merged.spacing["5"] == "1.3rem"
        # Untouched default keys survive
        assert merged.spacing["8"] == "2rem"

    def test_defaults_not_mutated(self, theme):
        from quantumcss.core.ir import ThemeConfig
        from quantumcss.core.theme import merge_theme

        merge_theme(theme, ThemeConfig.model_validate({"extend": {"spacing": {"4": "9rem"}}}))
        assert theme.spacing["4"] == "1rem"

    def test_direct_category_replaces(self, theme):
        from quantumcss.core.ir import ThemeConfig
        from quantumcss.core.theme import merge_theme

        merged = merge_theme(theme, ThemeConfig.model_validate({"spacing": {"gutter": "3rem"}}))
        assert merged.spacing == {"gutter": "3rem"}
        # Other categories keep their defaults
        assert merged.font_size["lg"] == "1.125rem"

    def test_replace_then_extend(self, theme):
        from quantumcss.core.ir import ThemeConfig
        from quantumcss.core.theme import merge_theme

        config = ThemeConfig.model_validate(
            {"fontSize": {"body": "1rem"}, "extend": {"fontSize": {"hero": "5rem"}}}
        )
        merged = merge_theme(theme, config)
        assert merged.font_size == {"body": "1rem", "hero": "5rem"}

    def test_extend_colors(self, theme):
        from quantumcss.core.ir import ThemeConfig
        from quantumcss.core.theme import merge_theme

        config = ThemeConfig.model_validate(
            {"extend": {"colors": {"brand": {"500": "#ff6600"}, "ink": "#101010"}}}
        )
        merged = merge_theme(theme, config)
        assert merged.colors["brand"] == {"500": "#ff6600"}
        assert merged.colors["ink"] == "#101010"
        assert merged.colors["blue"]["500"] == "#3b82f6"

    def test_unknown_category_ignored(self, theme):
        from quantumcss.core.ir import ThemeConfig
        from quantumcss.core.theme import merge_theme

        config = ThemeConfig.model_validate({"extend": {"zIndex": {"modal": "50"}}})
        merged = merge_theme(theme, config)
        assert merged == theme

    def test_none_config_returns_defaults(self, theme):
        from quantumcss.core.theme import merge_theme

        assert merge_theme(theme, None) is theme


# =============================================================================
# :root variables
# =============================================================================


class TestThemeCssVariables:
    """Test flattening of the theme into custom properties."""

    def test_nested_colors_flatten(self, theme):
        from quantumcss.core.theme import theme_css_variables

        variables = dict(theme_css_variables(theme))
        assert variables["--color-blue-500"] == "#3b82f6"
        assert variables["--color-white"] == "#ffffff"
        assert variables["--color-starlight-peach"] == "#ffb38a"

    def test_category_prefixes(self, theme):
        from quantumcss.core.theme import theme_css_variables

        variables = dict(theme_css_variables(theme))
        assert variables["--spacing-4"] == "1rem"
        assert variables["--font-size-lg"] == "1.125rem"
        assert variables["--radius-full"] == "9999px"
        assert variables["--max-w-prose"] == "65ch"
        assert "--shadow-md" in variables

    def test_unsafe_characters_sanitized(self, theme):
        from quantumcss.core.theme import theme_css_variables

        names = [name for name, _ in theme_css_variables(theme)]
        assert "--spacing-0_5" in names
        assert not any("." in name for name in names)

    def test_colors_come_first(self, theme):
        from quantumcss.core.theme import theme_css_variables

        names = [name for name, _ in theme_css_variables(theme)]
        assert names[0].startswith("--color-")
