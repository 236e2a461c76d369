"""
Pug export: the rendered fragment as a standalone Pug template.

Same document shape as the HTML export (inline structural and theme styles,
``body.textui-export``), written in Pug's indentation syntax. Text and
attribute values are emitted as escaped string expressions, so document
content can never be read as Pug syntax.
"""

from __future__ import annotations

import re

from textui._version import __version__
from textui.render.renderer import RenderedFragment
from textui.render.styles import BASE_CSS

from .fragment_tree import FragmentElement, parse_fragment
from .react import js_string

INDENT = "  "

_SHORTHAND_NAME = re.compile(r"^-?[_a-zA-Z][_a-zA-Z0-9-]*$")
_INTERPOLATION = re.compile(r"([#!])([{\[])")


def export_pug(fragment: RenderedFragment, css_block: str, title: str) -> str:
    """
    Build a Pug template equivalent to the standalone HTML export.

    Args:
        fragment: Rendered fragment to project
        css_block: Theme CSS (custom properties plus component rules)
        title: Document title

    Returns:
        Pug template text
    """
    root = parse_fragment(fragment.markup)

    lines = [
        f"//- Generated by textui {__version__}",
        "doctype html",
        'html(lang="en")',
        f"{INDENT}head",
        f'{INDENT * 2}meta(charset="utf-8")',
        f'{INDENT * 2}meta(name="viewport" content="width=device-width, initial-scale=1")',
        f'{INDENT * 2}meta(name="generator" content={js_string(f"textui {__version__}")})',
        f"{INDENT * 2}title= {js_string(title)}",
        *_style_block(BASE_CSS, depth=2),
        *_style_block(css_block, depth=2),
        f"{INDENT}body.textui-export",
    ]
    for child in root.children:
        lines.extend(_pug(child, depth=2))
    return "\n".join(lines) + "\n"


def style_block_text(css: str) -> str:
    """CSS made safe for a Pug ``style.`` block."""
    return _INTERPOLATION.sub(r"\\\1\2", css.replace("</", "<\\/"))


def _style_block(css: str, depth: int) -> list[str]:
    pad = INDENT * (depth + 1)
    lines = [f"{INDENT * depth}style."]
    for line in style_block_text(css).splitlines():
        lines.append(pad + line if line.strip() else "")
    return lines


def _pug(node: FragmentElement | str, depth: int) -> list[str]:
    pad = INDENT * depth
    if isinstance(node, str):
        return [f"{pad}= {js_string(node)}"]

    head = _pug_tag(node)
    if len(node.children) == 1 and isinstance(node.children[0], str):
        return [f"{pad}{head}= {js_string(node.children[0])}"]

    lines = [pad + head]
    for child in node.children:
        lines.extend(_pug(child, depth + 1))
    return lines


def _pug_tag(node: FragmentElement) -> str:
    """Tag with class/id shorthand where the names allow it, attributes otherwise."""
    head = node.tag
    attrs: list[str] = []
    for name, value in node.attrs:
        if name == "class" and value and all(
            _SHORTHAND_NAME.match(cls) for cls in value.split()
        ):
            head += "".join(f".{cls}" for cls in value.split())
        elif name == "id" and value and _SHORTHAND_NAME.match(value):
            head += f"#{value}"
        elif value is None:
            attrs.append(name)
        else:
            attrs.append(f"{name}={js_string(value)}")

    if node.tag == "div" and head != "div":
        head = head[len("div"):]
    if attrs:
        head += "(" + " ".join(attrs) + ")"
    return head
