"""
CSS generator for TextUI themes.

Serializes a ResolvedTheme into CSS custom properties, plus one class rule
per (kind, variant) so component-level variables apply without inline styles.
Output order follows the resolved insertion order, so it is stable for
snapshot tests.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from textui.specs.theme import ResolvedTheme

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def css_variable_name(key: str) -> str:
    """
    Convert a dotted token path to a CSS custom property name.

    Example:
        >>> css_variable_name("typography.fontSize.base")
        '--typography-fontSize-base'
    """
    return "--" + key.replace(".", "-")


def component_class(kind: str, variant: str) -> str:
    """Class carried by nodes whose component styles live under (kind, variant)."""
    return f"textui-{kind.lower()}-{variant}"


def emit(resolved: ResolvedTheme, only: Iterable[str] | None = None, indent: int = 2) -> str:
    """
    Generate the custom-property block for a resolved theme.

    Args:
        resolved: Resolved theme
        only: Optional CSS variable names to keep (minimal emission)
        indent: Number of spaces before each declaration

    Returns:
        CSS string with a single :root rule
    """
    keep = set(only) if only is not None else None
    prefix = " " * indent
    lines = [":root {"]
    for key, value in resolved.variables.items():
        name = css_variable_name(key)
        if keep is not None and name not in keep:
            continue
        lines.append(f"{prefix}{name}: {value};")
    lines.append("}")
    return "\n".join(lines)


def emit_component_rules(resolved: ResolvedTheme, indent: int = 2) -> str:
    """
    Generate class rules binding component variables to CSS properties.

    Example output:
        .textui-button-primary {
          background-color: var(--component-button-primary-backgroundColor);
        }
    """
    prefix = " " * indent
    blocks: list[str] = []
    for (kind, variant), properties in resolved.components.items():
        lines = [f".{component_class(kind, variant)} {{"]
        for prop, key in properties.items():
            lines.append(f"{prefix}{css_property_name(prop)}: var({css_variable_name(key)});")
        lines.append("}")
        blocks.append("\n".join(lines))
    return "\n".join(blocks)


def build_css_block(resolved: ResolvedTheme) -> str:
    """The theme CSS shipped to both the live surface and the export."""
    rules = emit_component_rules(resolved)
    if not rules:
        return emit(resolved)
    return f"{emit(resolved)}\n{rules}"


def css_property_name(name: str) -> str:
    """
    Convert a camelCase style property to its CSS spelling.

    Example:
        >>> css_property_name("backgroundColor")
        'background-color'
    """
    if "-" in name:
        return name.lower()
    return _CAMEL_BOUNDARY.sub("-", name).lower()
