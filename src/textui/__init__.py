"""
TextUI: render declarative YAML UI documents to HTML.

    from textui import parse, render, resolve_theme_text, build_css_block, export_static

    doc = parse(source)
    theme = resolve_theme_text(theme_source)
    fragment = render(doc, theme)
    html = export_static(fragment, build_css_block(theme), title="Sign up")
"""

from textui._version import __version__
from textui.core.errors import (
    ConfigError,
    ExportRefusedError,
    MalformedInputError,
    RenderInconsistencyError,
    SchemaError,
    TextUIError,
    ThemeLoadError,
)
from textui.core.parser import parse
from textui.render.renderer import RenderedFragment, render
from textui.specs.document import Document
from textui.specs.theme import ComponentStyleSet, ResolvedTheme, ThemeTokenSet
from textui.surfaces.export import ExportFormat, export_document, export_static
from textui.themes.css_generator import build_css_block, emit
from textui.themes.defaults import DEFAULT_COMPONENT_STYLES, DEFAULT_TOKENS
from textui.themes.resolver import resolve, resolve_theme_file, resolve_theme_text

__all__ = [
    "__version__",
    # Errors
    "ConfigError",
    "ExportRefusedError",
    "MalformedInputError",
    "RenderInconsistencyError",
    "SchemaError",
    "TextUIError",
    "ThemeLoadError",
    # Engine
    "parse",
    "resolve",
    "resolve_theme_file",
    "resolve_theme_text",
    "emit",
    "build_css_block",
    "render",
    "export_static",
    "export_document",
    # Types
    "ExportFormat",
    "Document",
    "RenderedFragment",
    "ResolvedTheme",
    "ThemeTokenSet",
    "ComponentStyleSet",
    "DEFAULT_TOKENS",
    "DEFAULT_COMPONENT_STYLES",
]
