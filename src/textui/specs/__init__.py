"""
Typed models for TextUI documents and themes.
"""

from textui.specs.document import (
    COMPONENT_KINDS,
    AlertNode,
    AlertVariant,
    ButtonKind,
    ButtonNode,
    CheckboxNode,
    ChoiceOption,
    ContainerNode,
    DividerNode,
    DividerOrientation,
    Document,
    FormNode,
    InputNode,
    InputType,
    Layout,
    Node,
    NodeBase,
    PageNode,
    RadioNode,
    SelectNode,
    TextNode,
    TextVariant,
)
from textui.specs.theme import ComponentStyleSet, ResolvedTheme, ThemeTokenSet, UserTheme

__all__ = [
    "COMPONENT_KINDS",
    "AlertNode",
    "AlertVariant",
    "ButtonKind",
    "ButtonNode",
    "CheckboxNode",
    "ChoiceOption",
    "ContainerNode",
    "DividerNode",
    "DividerOrientation",
    "Document",
    "FormNode",
    "InputNode",
    "InputType",
    "Layout",
    "Node",
    "NodeBase",
    "PageNode",
    "RadioNode",
    "SelectNode",
    "TextNode",
    "TextVariant",
    "ComponentStyleSet",
    "ResolvedTheme",
    "ThemeTokenSet",
    "UserTheme",
]
