"""
Tree renderer: Document + ResolvedTheme -> HTML fragment.
"""

from textui.render.renderer import (
    COMPONENT_TEMPLATES,
    TEMPLATES_DIR,
    RenderedFragment,
    get_jinja_env,
    render,
)
from textui.render.styles import BASE_CSS, CLASS_TOKEN_REFERENCES

__all__ = [
    "BASE_CSS",
    "CLASS_TOKEN_REFERENCES",
    "COMPONENT_TEMPLATES",
    "TEMPLATES_DIR",
    "RenderedFragment",
    "get_jinja_env",
    "render",
]
