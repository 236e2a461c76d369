"""Tests for CSS variable emission."""

from __future__ import annotations

import pytest

from textui.specs.theme import ThemeTokenSet
from textui.themes.css_generator import (
    build_css_block,
    component_class,
    css_property_name,
    css_variable_name,
    emit,
    emit_component_rules,
)
from textui.themes.defaults import DEFAULT_COMPONENT_STYLES, DEFAULT_TOKENS
from textui.themes.resolver import resolve, resolve_theme_text


class TestNaming:
    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("colors.primary", "--colors-primary"),
            ("spacing.md", "--spacing-md"),
            ("typography.fontSize.base", "--typography-fontSize-base"),
            (
                "component.button.primary.backgroundColor",
                "--component-button-primary-backgroundColor",
            ),
        ],
    )
    def test_css_variable_name(self, key, expected):
        assert css_variable_name(key) == expected

    @pytest.mark.parametrize(
        ("prop", "expected"),
        [
            ("backgroundColor", "background-color"),
            ("color", "color"),
            ("borderTopLeftRadius", "border-top-left-radius"),
            ("font-size", "font-size"),
        ],
    )
    def test_css_property_name(self, prop, expected):
        assert css_property_name(prop) == expected

    def test_component_class(self):
        assert component_class("Button", "primary") == "textui-button-primary"
        assert component_class("alert", "error") == "textui-alert-error"


class TestEmit:
    def test_root_block(self, default_theme):
        css = emit(default_theme)
        lines = css.splitlines()
        assert lines[0] == ":root {"
        assert lines[-1] == "}"
        assert len(lines) == len(default_theme.variables) + 2

    def test_required_declarations(self, default_theme):
        css = emit(default_theme)
        assert "  --colors-primary: #3B82F6;" in css
        assert "  --spacing-md: 1rem;" in css
        assert "  --typography-fontSize-base: 1rem;" in css
        assert "  --component-button-primary-backgroundColor: var(--colors-primary);" in css

    def test_order_follows_resolution(self, default_theme):
        css = emit(default_theme)
        names = [line.strip().split(":")[0] for line in css.splitlines()[1:-1]]
        assert names == [css_variable_name(key) for key in default_theme.variables]

    def test_output_is_stable(self):
        first = emit(resolve(DEFAULT_TOKENS, None, DEFAULT_COMPONENT_STYLES))
        second = emit(resolve(DEFAULT_TOKENS, None, DEFAULT_COMPONENT_STYLES))
        assert first == second

    def test_user_override_changes_only_its_line(self, default_theme, red_theme_source):
        baseline = emit(default_theme).splitlines()
        themed = emit(resolve_theme_text(red_theme_source)).splitlines()

        assert "  --colors-primary: #FF0000;" in themed
        differing = [(a, b) for a, b in zip(baseline, themed, strict=True) if a != b]
        assert differing == [("  --colors-primary: #3B82F6;", "  --colors-primary: #FF0000;")]

    def test_only_restricts_declarations(self, default_theme):
        css = emit(default_theme, only=["--colors-primary", "--spacing-md", "--not-defined"])
        assert css == ":root {\n  --colors-primary: #3B82F6;\n  --spacing-md: 1rem;\n}"

    def test_indent(self):
        resolved = resolve(ThemeTokenSet(name="t", tokens={"a": {"b": "1"}}))
        assert emit(resolved, indent=4) == ":root {\n    --a-b: 1;\n}"


class TestComponentRules:
    def test_button_rule(self, default_theme):
        rules = emit_component_rules(default_theme)
        assert ".textui-button-primary {" in rules
        assert (
            "  background-color: var(--component-button-primary-backgroundColor);" in rules
        )

    def test_every_component_variant_has_a_rule(self, default_theme):
        rules = emit_component_rules(default_theme)
        for kind, variant in default_theme.components:
            assert f".{component_class(kind, variant)} {{" in rules

    def test_no_components_no_rules(self):
        resolved = resolve(ThemeTokenSet(name="t", tokens={"a": "1"}))
        assert emit_component_rules(resolved) == ""
        assert build_css_block(resolved) == emit(resolved)

    def test_css_block_is_declarations_then_rules(self, default_theme):
        block = build_css_block(default_theme)
        assert block == f"{emit(default_theme)}\n{emit_component_rules(default_theme)}"
