"""
TextUI theme system.

Usage:
    from textui.themes import (
        DEFAULT_COMPONENT_STYLES,
        DEFAULT_TOKENS,
        build_css_block,
        resolve,
        resolve_theme_file,
    )

    # Defaults only
    theme = resolve(DEFAULT_TOKENS, None, DEFAULT_COMPONENT_STYLES)

    # With a user theme file (falls back to defaults if it is broken)
    theme = resolve_theme_file(Path("textui-theme.yml"))
    css = build_css_block(theme)
"""

from .css_generator import (
    build_css_block,
    component_class,
    css_property_name,
    css_variable_name,
    emit,
    emit_component_rules,
)
from .defaults import DEFAULT_COMPONENT_STYLES, DEFAULT_TOKENS, REQUIRED_TOKEN_CATEGORIES
from .loader import THEME_FILE, get_theme_path, load_theme_file, parse_theme_source
from .resolver import (
    flatten_tokens,
    resolve,
    resolve_theme_file,
    resolve_theme_text,
    resolve_user_theme,
)

__all__ = [
    # Defaults
    "DEFAULT_TOKENS",
    "DEFAULT_COMPONENT_STYLES",
    "REQUIRED_TOKEN_CATEGORIES",
    # Loading
    "THEME_FILE",
    "get_theme_path",
    "load_theme_file",
    "parse_theme_source",
    # Resolution
    "flatten_tokens",
    "resolve",
    "resolve_theme_file",
    "resolve_theme_text",
    "resolve_user_theme",
    # CSS Generation
    "build_css_block",
    "component_class",
    "css_property_name",
    "css_variable_name",
    "emit",
    "emit_component_rules",
]
