"""
Fixed structural stylesheet for rendered fragments.

Layout and typography rules that every render target inlines next to the
theme CSS. Values only reference theme variables, never literals that a theme
could want to change, so a theme edit restyles the preview and the export the
same way.
"""

from __future__ import annotations

import re

# (selector, declarations); the first class of each selector owns the rule
STRUCTURAL_RULES: tuple[tuple[str, dict[str, str]], ...] = (
    (
        ".textui-page",
        {
            "font-family": "var(--typography-fontFamily)",
            "font-size": "var(--typography-fontSize-base)",
            "color": "var(--colors-text-dark)",
            "background-color": "var(--colors-background)",
            "padding": "var(--spacing-lg)",
        },
    ),
    (
        ".textui-page-vertical, .textui-container-vertical",
        {"display": "flex", "flex-direction": "column", "gap": "var(--spacing-md)"},
    ),
    (
        ".textui-page-horizontal, .textui-container-horizontal",
        {
            "display": "flex",
            "flex-direction": "row",
            "align-items": "center",
            "gap": "var(--spacing-md)",
        },
    ),
    (
        ".textui-page-flex, .textui-container-flex",
        {"display": "flex", "flex-wrap": "wrap", "gap": "var(--spacing-md)"},
    ),
    (
        ".textui-page-grid, .textui-container-grid",
        {
            "display": "grid",
            "grid-template-columns": "repeat(auto-fit, minmax(12rem, 1fr))",
            "gap": "var(--spacing-md)",
        },
    ),
    (".textui-text", {"margin": "0", "line-height": "1.4"}),
    (
        ".textui-text-h1",
        {
            "font-size": "var(--typography-fontSize-4xl)",
            "font-weight": "var(--typography-fontWeight-bold)",
        },
    ),
    (
        ".textui-text-h2",
        {
            "font-size": "var(--typography-fontSize-3xl)",
            "font-weight": "var(--typography-fontWeight-semibold)",
        },
    ),
    (
        ".textui-text-h3",
        {
            "font-size": "var(--typography-fontSize-2xl)",
            "font-weight": "var(--typography-fontWeight-semibold)",
        },
    ),
    (".textui-text-p", {"font-size": "var(--typography-fontSize-base)"}),
    (".textui-text-small", {"font-size": "var(--typography-fontSize-sm)"}),
    (
        ".textui-text-caption",
        {"font-size": "var(--typography-fontSize-xs)", "color": "var(--colors-text-muted)"},
    ),
    (
        ".textui-button",
        {
            "display": "inline-flex",
            "align-items": "center",
            "justify-content": "center",
            "font-family": "inherit",
        },
    ),
    (".textui-button:disabled", {"opacity": "0.5", "cursor": "not-allowed"}),
    (
        ".textui-input, .textui-select",
        {"display": "flex", "flex-direction": "column", "gap": "var(--spacing-xs)"},
    ),
    (
        ".textui-input label, .textui-select label, .textui-radio legend",
        {
            "font-size": "var(--typography-fontSize-sm)",
            "font-weight": "var(--typography-fontWeight-medium)",
        },
    ),
    (
        ".textui-input .textui-control, .textui-select .textui-control",
        {
            "padding": "var(--spacing-xs) var(--spacing-sm)",
            "border": "1px solid var(--colors-border)",
            "border-radius": "var(--borderRadius-md)",
            "font-size": "var(--typography-fontSize-base)",
            "font-family": "inherit",
        },
    ),
    (
        ".textui-checkbox label, .textui-radio label",
        {"display": "flex", "align-items": "center", "gap": "var(--spacing-xs)"},
    ),
    (
        ".textui-radio",
        {
            "display": "flex",
            "flex-direction": "column",
            "gap": "var(--spacing-xs)",
            "border": "none",
            "margin": "0",
            "padding": "0",
        },
    ),
    (
        ".textui-divider-horizontal",
        {
            "border": "none",
            "border-top": "1px solid var(--colors-border)",
            "margin": "var(--spacing-md) 0",
            "width": "100%",
        },
    ),
    (
        ".textui-divider-vertical",
        {
            "border": "none",
            "border-left": "1px solid var(--colors-border)",
            "margin": "0 var(--spacing-md)",
            "align-self": "stretch",
        },
    ),
    (".textui-alert", {"display": "flex", "flex-direction": "column", "gap": "var(--spacing-xs)"}),
    (".textui-alert p", {"margin": "0"}),
    (
        ".textui-form",
        {
            "display": "flex",
            "flex-direction": "column",
            "gap": "var(--spacing-md)",
            "padding": "var(--spacing-lg)",
            "border": "1px solid var(--colors-border)",
            "border-radius": "var(--borderRadius-lg)",
            "box-shadow": "var(--shadows-sm)",
        },
    ),
    (
        ".textui-form .textui-form-fields",
        {"display": "flex", "flex-direction": "column", "gap": "var(--spacing-md)"},
    ),
    (".textui-form .textui-form-actions", {"display": "flex", "gap": "var(--spacing-sm)"}),
)

_OWNER_CLASS = re.compile(r"^\s*\.(textui-[A-Za-z0-9-]+)")
VAR_REFERENCE = re.compile(r"var\(\s*(--[A-Za-z0-9_-]+)")


def _build_base_css(rules: tuple[tuple[str, dict[str, str]], ...]) -> str:
    blocks = []
    for selector, declarations in rules:
        lines = [f"{selector} {{"]
        lines.extend(f"  {prop}: {value};" for prop, value in declarations.items())
        lines.append("}")
        blocks.append("\n".join(lines))
    return "\n".join(blocks)


def _index_references(
    rules: tuple[tuple[str, dict[str, str]], ...],
) -> dict[str, tuple[str, ...]]:
    index: dict[str, dict[str, None]] = {}
    for selector, declarations in rules:
        names: dict[str, None] = {}
        for value in declarations.values():
            for name in VAR_REFERENCE.findall(value):
                names[name] = None
        for part in selector.split(","):
            match = _OWNER_CLASS.match(part)
            if match:
                index.setdefault(match.group(1), {}).update(names)
    return {cls: tuple(names) for cls, names in index.items()}


BASE_CSS = _build_base_css(STRUCTURAL_RULES)

# CSS class -> theme variables its structural rules read
CLASS_TOKEN_REFERENCES = _index_references(STRUCTURAL_RULES)
