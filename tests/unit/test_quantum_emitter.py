"""Tests for selector construction and CSS emission."""

from __future__ import annotations

import pytest

from quantumcss.core.ir import RuleGroup


def _emit(theme, token_groups, **kwargs):
    from quantumcss.core.emitter import RuleEmitter

    return RuleEmitter(theme).emit(token_groups, **kwargs)


class TestEscapeClass:
    """Test escape_class."""

    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("flex", "flex"),
            ("sm:hidden", "sm\\:hidden"),
            ("bg-blue-500/50", "bg-blue-500\\/50"),
            ("w-[37px]", "w-\\[37px\\]"),
            ("p-0.5", "p-0\\.5"),
            ("-mt-4", "-mt-4"),
            ("2xl:flex", "\\32 xl\\:flex"),
            ("w-[50%]", "w-\\[50\\%\\]"),
        ],
    )
    def test_escapes(self, token, expected):
        from quantumcss.core.emitter import escape_class

        assert escape_class(token) == expected


class TestBuildSelector:
    """Test build_selector."""

    def test_plain(self):
        from quantumcss.core.emitter import build_selector

        assert build_selector("flex", RuleGroup(rules=[])) == ".flex"

    def test_state_suffix(self):
        from quantumcss.core.emitter import build_selector

        group = RuleGroup(rules=[], variant="hover")
        assert build_selector("hover:bg-blue-600", group) == ".hover\\:bg-blue-600:hover"

    def test_placeholder_pseudo_element(self):
        from quantumcss.core.emitter import build_selector

        group = RuleGroup(rules=[], variant="placeholder")
        assert build_selector("placeholder:text-gray-400", group).endswith("::placeholder")

    def test_group_hover_ancestor(self):
        from quantumcss.core.emitter import build_selector

        group = RuleGroup(rules=[], variant="group-hover")
        assert build_selector("group-hover:text-white", group) == (
            ".group:hover .group-hover\\:text-white"
        )

    def test_custom_selector(self):
        from quantumcss.core.emitter import build_selector

        group = RuleGroup(rules=[], custom_selector="& > * + *")
        assert build_selector("space-y-4", group) == ".space-y-4 > * + *"


class TestMergeRuleGroups:
    """Test merge_rule_groups."""

    def test_same_key_collapses(self):
        from quantumcss.core.emitter import merge_rule_groups

        merged = merge_rule_groups(
            [
                RuleGroup(rules=["display: flex;"]),
                RuleGroup(rules=["color: red;"], variant="hover"),
                RuleGroup(rules=["align-items: center;"]),
            ]
        )
        assert [g.rules for g in merged] == [
            ["display: flex;", "align-items: center;"],
            ["color: red;"],
        ]

    def test_inputs_not_mutated(self):
        from quantumcss.core.emitter import merge_rule_groups

        first = RuleGroup(rules=["a: 1;"])
        merge_rule_groups([first, RuleGroup(rules=["b: 2;"])])
        assert first.rules == ["a: 1;"]

    def test_custom_selector_separates(self):
        from quantumcss.core.emitter import merge_rule_groups

        merged = merge_rule_groups(
            [RuleGroup(rules=["a: 1;"]), RuleGroup(rules=["b: 2;"], custom_selector="& > * + *")]
        )
        assert len(merged) == 2


class TestRuleEmitter:
    """Test RuleEmitter.emit layout."""

    def test_root_block_first(self, theme):
        css = _emit(theme, {"flex": [RuleGroup(rules=["display: flex;"])]})
        assert css.startswith(":root {\n  --color-")
        assert css.index(":root") < css.index(".flex {")

    def test_empty_input_yields_root_only(self, theme):
        css = _emit(theme, {})
        assert css.startswith(":root {")
        assert "@media" not in css
        assert css.count("{") == 1

    def test_rule_format(self, theme):
        css = _emit(theme, {"flex": [RuleGroup(rules=["display: flex;"])]}, include_root=False)
        assert css == ".flex {\n  display: flex;\n}\n"

    def test_one_media_block_per_breakpoint(self, theme):
        css = _emit(
            theme,
            {
                "sm:flex": [RuleGroup(rules=["display: flex;"], breakpoint="sm")],
                "sm:block": [RuleGroup(rules=["display: block;"], breakpoint="sm")],
            },
        )
        assert css.count("@media (min-width: 640px)") == 1
        media = css[css.index("@media (min-width: 640px)") :]
        assert ".sm\\:flex {" in media
        assert ".sm\\:block {" in media

    def test_media_blocks_ascending(self, theme):
        css = _emit(
            theme,
            {
                "xl:flex": [RuleGroup(rules=["display: flex;"], breakpoint="xl")],
                "sm:flex": [RuleGroup(rules=["display: flex;"], breakpoint="sm")],
                "md:flex": [RuleGroup(rules=["display: flex;"], breakpoint="md")],
            },
        )
        positions = [css.index(f"(min-width: {w})") for w in ("640px", "768px", "1280px")]
        assert positions == sorted(positions)

    def test_base_rules_before_media(self, theme):
        css = _emit(
            theme,
            {
                "sm:hidden": [RuleGroup(rules=["display: none;"], breakpoint="sm")],
                "zz": [RuleGroup(rules=["display: flex;"])],
            },
        )
        assert css.index(".zz {") < css.index("@media")

    def test_media_contents_indented(self, theme):
        css = _emit(
            theme,
            {"sm:hidden": [RuleGroup(rules=["display: none;"], breakpoint="sm")]},
            include_root=False,
        )
        assert css == (
            "@media (min-width: 640px) {\n"
            "  .sm\\:hidden {\n"
            "    display: none;\n"
            "  }\n"
            "}\n"
        )

    def test_dark_mode_toggle_and_media(self, theme):
        css = _emit(
            theme,
            {"dark:bg-black": [RuleGroup(rules=["background-color: #000000;"], mode="dark")]},
            include_root=False,
        )
        assert '[data-theme="dark"] .dark\\:bg-black, .dark-mode .dark\\:bg-black {' in css
        assert "@media (prefers-color-scheme: dark) {\n  .dark\\:bg-black {" in css
        assert css.index("[data-theme") < css.index("prefers-color-scheme")

    def test_dark_mode_with_breakpoint(self, theme):
        css = _emit(
            theme,
            {
                "md:dark:flex": [
                    RuleGroup(rules=["display: flex;"], breakpoint="md", mode="dark")
                ]
            },
            include_root=False,
        )
        assert "@media (min-width: 768px) {\n  [data-theme=\"dark\"] .md\\:dark\\:flex" in css
        assert "@media (prefers-color-scheme: dark) and (min-width: 768px)" in css

    def test_light_mode(self, theme):
        css = _emit(
            theme,
            {"light:text-black": [RuleGroup(rules=["color: #000000;"], mode="light")]},
            include_root=False,
        )
        assert '[data-theme="light"] .light\\:text-black' in css
        assert "@media (prefers-color-scheme: light)" in css

    def test_preset_groups_merged_into_one_block(self, theme, resolver):
        css = _emit(theme, {"center": resolver.resolve("center")}, include_root=False)
        assert css.count(".center {") == 1
        assert "  display: flex;\n  align-items: center;\n  justify-content: center;\n" in css

    def test_preamble_after_root(self, theme):
        css = _emit(theme, {"flex": [RuleGroup(rules=["display: flex;"])]}, preamble="body { margin: 0; }")
        assert css.index(":root") < css.index("body { margin: 0; }") < css.index(".flex")

    def test_unknown_breakpoint_emitted_unwrapped(self, theme):
        css = _emit(
            theme, {"x": [RuleGroup(rules=["display: flex;"], breakpoint="tv")]}, include_root=False
        )
        assert css == ".x {\n  display: flex;\n}\n"
