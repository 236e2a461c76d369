"""
Export adapter: wraps a rendered fragment into one self-contained HTML file.

The document inlines the structural stylesheet and the theme CSS block in
the head and the fragment in the body. It carries no script, no stylesheet
links and no network or relative asset references, so it opens anywhere.

The same fragment and CSS block can also be written as a React component
module or a Pug template (see ``ExportFormat``).
"""

from __future__ import annotations

import logging
from enum import StrEnum
from pathlib import Path

from markupsafe import Markup

from textui._version import __version__
from textui.render.renderer import RenderedFragment, get_jinja_env
from textui.render.styles import BASE_CSS

from .pug import export_pug
from .react import export_react

logger = logging.getLogger(__name__)

EXPORT_TEMPLATE = "export.html"
DEFAULT_EXPORT_TITLE = "TextUI Export"


def style_text(css: str) -> Markup:
    """Mark CSS safe for a <style> element, keeping it from closing the element."""
    return Markup(css.replace("</", "<\\/"))


def export_static(
    fragment: RenderedFragment, css_block: str, title: str = DEFAULT_EXPORT_TITLE
) -> str:
    """
    Build the standalone HTML document.

    Args:
        fragment: Rendered fragment, embedded verbatim in the body
        css_block: Theme CSS (custom properties plus component rules)
        title: Document title

    Returns:
        Complete HTML document text
    """
    template = get_jinja_env().get_template(EXPORT_TEMPLATE)
    return template.render(
        title=title,
        version=__version__,
        base_css=style_text(BASE_CSS),
        theme_css=style_text(css_block),
        fragment=Markup(fragment.markup),
    )


class ExportFormat(StrEnum):
    """Export artifact formats; all project the same fragment and CSS block."""

    HTML = "html"
    REACT = "react"
    PUG = "pug"

    @property
    def extension(self) -> str:
        return EXPORT_EXTENSIONS[self]


EXPORT_EXTENSIONS = {
    ExportFormat.HTML: ".html",
    ExportFormat.REACT: ".tsx",
    ExportFormat.PUG: ".pug",
}


def export_document(
    fragment: RenderedFragment,
    css_block: str,
    title: str = DEFAULT_EXPORT_TITLE,
    fmt: ExportFormat = ExportFormat.HTML,
) -> str:
    """Build the export artifact for ``fmt``."""
    if fmt is ExportFormat.REACT:
        return export_react(fragment, css_block, title)
    if fmt is ExportFormat.PUG:
        return export_pug(fragment, css_block, title)
    return export_static(fragment, css_block, title)


def write_export(text: str, target_path: Path) -> Path:
    """Write an exported document, creating parent directories as needed."""
    target_path.parent.mkdir(parents=True, exist_ok=True)
    target_path.write_text(text, encoding="utf-8")
    logger.info("Exported %s (%d bytes)", target_path, len(text.encode("utf-8")))
    return target_path
