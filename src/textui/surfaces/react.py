"""
React export: the rendered fragment as a single TSX component module.

The markup is the fragment the live surface shows, read back through
``parse_fragment`` and printed as JSX. Form controls become uncontrolled
(``defaultChecked`` / ``defaultValue``) so the component renders the same
initial state without handlers. Both stylesheets travel with the module.
"""

from __future__ import annotations

import json
import re

from textui._version import __version__
from textui.render.renderer import RenderedFragment
from textui.render.styles import BASE_CSS

from .fragment_tree import VOID_ELEMENTS, FragmentElement, parse_fragment

DEFAULT_COMPONENT_NAME = "GeneratedUI"
INDENT = "  "

# HTML attribute -> JSX prop
JSX_PROPS = {
    "class": "className",
    "for": "htmlFor",
    "checked": "defaultChecked",
    "readonly": "readOnly",
    "tabindex": "tabIndex",
    "maxlength": "maxLength",
    "autocomplete": "autoComplete",
}

_COMPONENT_NAME = re.compile(r"^[A-Z][A-Za-z0-9_]*$")
_PLAIN_ATTR = re.compile(r'^[^"&\n]*$')
_PLAIN_TEXT = re.compile(r"^[^{}<>&\"'\n]+$")


def js_string(value: str) -> str:
    """JavaScript string literal for ``value``."""
    return json.dumps(value, ensure_ascii=False)


def export_react(
    fragment: RenderedFragment,
    css_block: str,
    title: str,
    component_name: str = DEFAULT_COMPONENT_NAME,
) -> str:
    """
    Build a TSX module whose default export renders the fragment.

    Args:
        fragment: Rendered fragment to project
        css_block: Theme CSS (custom properties plus component rules)
        title: Document title, exported as ``TITLE``
        component_name: Name of the default-exported component

    Returns:
        TSX module text
    """
    if not _COMPONENT_NAME.match(component_name):
        raise ValueError(f"not a React component name: {component_name!r}")

    root = parse_fragment(fragment.markup)
    body: list[str] = []
    for child in root.children:
        body.extend(_jsx(child, depth=3))

    lines = [
        f"// Generated by textui {__version__}",
        'import React from "react";',
        "",
        f"export const TITLE = {js_string(title)};",
        "",
        f"const BASE_CSS = {js_string(BASE_CSS)};",
        "",
        f"const THEME_CSS = {js_string(css_block)};",
        "",
        f"export default function {component_name}() {{",
        f"{INDENT}return (",
        f"{INDENT * 2}<>",
        f"{INDENT * 3}<style dangerouslySetInnerHTML={{{{ __html: BASE_CSS }}}} />",
        f"{INDENT * 3}<style dangerouslySetInnerHTML={{{{ __html: THEME_CSS }}}} />",
        *body,
        f"{INDENT * 2}</>",
        f"{INDENT});",
        "}",
    ]
    return "\n".join(lines) + "\n"


def _jsx(node: FragmentElement | str, depth: int) -> list[str]:
    pad = INDENT * depth
    if isinstance(node, str):
        return [pad + _jsx_text(node)]

    open_tag = f"<{node.tag}{_jsx_props(node)}"
    if not node.children:
        return [f"{pad}{open_tag} />"]
    if node.tag in VOID_ELEMENTS:
        raise ValueError(f"void element <{node.tag}> has children")
    if len(node.children) == 1 and isinstance(node.children[0], str):
        return [f"{pad}{open_tag}>{_jsx_text(node.children[0])}</{node.tag}>"]

    lines = [f"{pad}{open_tag}>"]
    for child in node.children:
        lines.extend(_jsx(child, depth + 1))
    lines.append(f"{pad}</{node.tag}>")
    return lines


def _jsx_text(text: str) -> str:
    if _PLAIN_TEXT.match(text) and text == text.strip():
        return text
    return "{" + js_string(text) + "}"


def _jsx_props(node: FragmentElement) -> str:
    parts: list[str] = []
    for name, value in node.attrs:
        if name == "selected":
            # Carried by the parent <select> as defaultValue
            continue
        prop = JSX_PROPS.get(name, name)
        if value is None:
            parts.append(prop)
        elif _PLAIN_ATTR.match(value):
            parts.append(f'{prop}="{value}"')
        else:
            parts.append(f"{prop}={{{js_string(value)}}}")

    if node.tag == "select":
        selected = [
            option.get_attr("value") if option.has_attr("value") else _option_text(option)
            for option in node.find_all("option")
            if option.has_attr("selected")
        ]
        if selected and node.has_attr("multiple"):
            parts.append(f"defaultValue={{{json.dumps(selected, ensure_ascii=False)}}}")
        elif selected:
            parts.append(f"defaultValue={{{js_string(selected[0])}}}")

    return "".join(f" {part}" for part in parts)


def _option_text(option: FragmentElement) -> str:
    return "".join(c for c in option.children if isinstance(c, str))
