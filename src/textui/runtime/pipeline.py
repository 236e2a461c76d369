"""
Render pipeline: raw document text -> tagged render outcome.

Owns the current resolved theme and a small fragment cache keyed by
(document hash, theme hash). Parse and schema failures never escape
``run``; they come back as tagged outcomes for the live adapter.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from textui.core.errors import MalformedInputError, SchemaError, TextUIError, ThemeLoadError
from textui.core.parser import parse
from textui.render.renderer import RenderedFragment, render
from textui.specs.document import Document
from textui.specs.theme import ComponentStyleSet, ResolvedTheme, ThemeTokenSet
from textui.surfaces.messages import (
    ErrorMessage,
    HostMessage,
    SchemaErrorMessage,
    UpdateMessage,
)
from textui.themes.css_generator import build_css_block
from textui.themes.defaults import DEFAULT_COMPONENT_STYLES, DEFAULT_TOKENS
from textui.themes.loader import ReadText
from textui.themes.resolver import resolve, resolve_theme_file, resolve_theme_text

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 32


class OutcomeKind(StrEnum):
    OK = "ok"
    MALFORMED = "malformed"
    SCHEMA = "schema"


class RenderOutcome(BaseModel):
    """
    Tagged result of one pipeline run.

    ``ok`` carries document, fragment and CSS block; ``malformed`` and
    ``schema`` carry the error instead.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: OutcomeKind
    document: Document | None = None
    fragment: RenderedFragment | None = None
    css_block: str | None = None
    error: TextUIError | None = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.OK

    def to_message(self) -> HostMessage:
        """The live-adapter message announcing this outcome."""
        if self.kind is OutcomeKind.OK:
            assert self.fragment is not None and self.css_block is not None
            return UpdateMessage(fragment=self.fragment.markup, css_variables=self.css_block)
        if isinstance(self.error, SchemaError):
            return SchemaErrorMessage(message=self.error.reason, path=self.error.path)
        return ErrorMessage(message=str(self.error))


class RenderPipeline:
    """
    Parse, resolve and render with caching.

    Example:
        pipeline = RenderPipeline()
        pipeline.load_theme(Path("textui-theme.yml").read_text())
        outcome = pipeline.run(source_text)
        if outcome.ok:
            print(outcome.fragment.markup)
    """

    def __init__(
        self,
        defaults: ThemeTokenSet = DEFAULT_TOKENS,
        component_styles: ComponentStyleSet = DEFAULT_COMPONENT_STYLES,
        cache_size: int = DEFAULT_CACHE_SIZE,
    ):
        self.defaults = defaults
        self.component_styles = component_styles
        self.cache_size = cache_size
        self.cache_hits = 0
        self._cache: OrderedDict[tuple[str, str], RenderedFragment] = OrderedDict()
        self._set_theme(resolve(defaults, None, component_styles))

    # -------------------------------------------------------------------------
    # Theme state
    # -------------------------------------------------------------------------

    @property
    def theme(self) -> ResolvedTheme:
        return self._theme

    @property
    def css_block(self) -> str:
        """Theme CSS for the current theme."""
        return self._css_block

    def load_theme(
        self, content: str | None, source: str = "<theme>"
    ) -> tuple[ThemeLoadError, ...]:
        """
        Re-resolve the theme from YAML text (None means defaults only).

        Returns:
            Diagnostics for this load; empty when the theme applied cleanly
        """
        theme = resolve_theme_text(content, source, self.defaults, self.component_styles)
        self._set_theme(theme)
        return theme.diagnostics

    def load_theme_file(
        self, path: Path | None, read_text: ReadText | None = None
    ) -> tuple[ThemeLoadError, ...]:
        """Re-resolve the theme from a file (None means defaults only)."""
        theme = resolve_theme_file(path, read_text, self.defaults, self.component_styles)
        self._set_theme(theme)
        return theme.diagnostics

    def _set_theme(self, theme: ResolvedTheme) -> None:
        self._theme = theme
        self._theme_hash = theme.fingerprint()
        self._css_block = build_css_block(theme)

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def run(self, raw: str | bytes) -> RenderOutcome:
        """
        Parse and render document text (or UTF-8 bytes).

        Raises:
            RenderInconsistencyError: Only on an internal invariant violation
        """
        try:
            doc = parse(raw)
        except MalformedInputError as e:
            logger.debug("Malformed document: %s", e)
            return RenderOutcome(kind=OutcomeKind.MALFORMED, error=e)
        except SchemaError as e:
            logger.debug("Schema error: %s", e)
            return RenderOutcome(kind=OutcomeKind.SCHEMA, error=e)
        return self.render_document(doc)

    def render_document(self, doc: Document) -> RenderOutcome:
        """Render an already parsed document with the current theme."""
        return RenderOutcome(
            kind=OutcomeKind.OK,
            document=doc,
            fragment=self.render_cached(doc),
            css_block=self._css_block,
        )

    def render_cached(self, doc: Document) -> RenderedFragment:
        key = (doc.fingerprint(), self._theme_hash)
        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
            self.cache_hits += 1
            return cached

        fragment = render(doc, self._theme)
        self._cache[key] = fragment
        if len(self._cache) > self.cache_size:
            self._cache.popitem(last=False)
        return fragment
