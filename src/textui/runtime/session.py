"""
Host side of the live adapter.

PreviewSession turns pipeline outcomes into surface messages, in parse
order, and keeps the single last-known-good slot that export reads. The
good document in the slot is replaced only by a successful render, so a
failed parse (or a render that hits an internal inconsistency) never changes
what gets exported.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path

from textui.core.errors import (
    ExportRefusedError,
    RenderInconsistencyError,
    TextUIError,
    ThemeLoadError,
)
from textui.surfaces.export import (
    DEFAULT_EXPORT_TITLE,
    ExportFormat,
    export_document,
    write_export,
)
from textui.surfaces.messages import (
    ErrorMessage,
    ExportRequest,
    HostMessage,
    OpenDevToolsMessage,
    ReadyMessage,
    SurfaceMessage,
    ThemeVariablesMessage,
    decode_surface_message,
)

from .pipeline import RenderOutcome, RenderPipeline

logger = logging.getLogger(__name__)

Transport = Callable[[HostMessage], None]


class LastKnownGood:
    """Single slot holding the most recent successful outcome."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._good: RenderOutcome | None = None
        self._failed: RenderOutcome | None = None

    def record(self, outcome: RenderOutcome) -> None:
        with self._lock:
            if outcome.ok:
                self._good = outcome
                self._failed = None
            else:
                self._failed = outcome

    def replace_good(self, outcome: RenderOutcome) -> None:
        """Swap in a re-render of the good document; the latest failure stays."""
        if not outcome.ok:
            raise ValueError("only successful outcomes can replace the good state")
        with self._lock:
            self._good = outcome

    @property
    def good(self) -> RenderOutcome | None:
        with self._lock:
            return self._good

    @property
    def failed(self) -> RenderOutcome | None:
        """Outcome of the latest parse, if it failed."""
        with self._lock:
            return self._failed

    @property
    def last_failure(self) -> TextUIError | None:
        failed = self.failed
        return failed.error if failed is not None else None


class ExportService:
    """Exports the last-known-good document (standalone HTML by default)."""

    def __init__(self, slot: LastKnownGood, default_title: str = DEFAULT_EXPORT_TITLE):
        self.slot = slot
        self.default_title = default_title

    def build(self, fmt: ExportFormat = ExportFormat.HTML) -> str:
        """
        Build the export artifact for the last-known-good state.

        Raises:
            ExportRefusedError: If no document has rendered successfully
        """
        good = self.slot.good
        if good is None or good.fragment is None or good.document is None:
            failure = self.slot.last_failure
            if failure is not None:
                raise ExportRefusedError(f"no valid document to export; last error: {failure}")
            raise ExportRefusedError("no valid document to export yet")

        title = good.document.page.title or self.default_title
        return export_document(good.fragment, good.css_block or "", title=title, fmt=fmt)

    def export(self, target_path: Path, fmt: ExportFormat = ExportFormat.HTML) -> Path:
        """Write the export artifact to ``target_path``."""
        return write_export(self.build(fmt), target_path)


class PreviewSession:
    """
    Drives one live surface connection.

    Example:
        session = PreviewSession(RenderPipeline(), transport=hub.broadcast)
        session.document_changed(path.read_text())
        session.receive('{"type": "export"}')
    """

    def __init__(
        self,
        pipeline: RenderPipeline,
        transport: Transport,
        export_target: Path | None = None,
        export_title: str = DEFAULT_EXPORT_TITLE,
        export_format: ExportFormat = ExportFormat.HTML,
    ):
        """
        Initialize the session.

        Args:
            pipeline: Render pipeline owning the theme state
            transport: In-order host -> surface delivery
            export_target: Where surface-initiated exports are written
            export_title: Title used when the page declares none
            export_format: Artifact format for surface-initiated exports
        """
        self.pipeline = pipeline
        self.transport = transport
        self.export_target = export_target
        self.export_format = export_format
        self.slot = LastKnownGood()
        self.exporter = ExportService(self.slot, default_title=export_title)
        self._lock = threading.RLock()

    # -------------------------------------------------------------------------
    # Host events
    # -------------------------------------------------------------------------

    def document_changed(self, raw: str | bytes) -> RenderOutcome:
        """
        Render new document text and deliver the result.

        Raises:
            RenderInconsistencyError: After reporting it to the surface; the
                last-known-good slot is left untouched
        """
        with self._lock:
            try:
                outcome = self.pipeline.run(raw)
            except RenderInconsistencyError as e:
                self.transport(ErrorMessage(message=str(e)))
                raise
            self.slot.record(outcome)
            self.transport(outcome.to_message())
            return outcome

    def theme_changed(
        self, content: str | None, source: str = "<theme>"
    ) -> tuple[ThemeLoadError, ...]:
        """
        Re-resolve the theme and refresh the surface.

        With a good document on screen the surface gets a full ``update``;
        otherwise only the new theme CSS is sent. A current parse failure is
        re-sent after the update so its banner stays up.

        Returns:
            Theme diagnostics for this load
        """
        with self._lock:
            return self._refresh_theme(self.pipeline.load_theme(content, source))

    def theme_file_changed(self, path: Path | None) -> tuple[ThemeLoadError, ...]:
        """Like ``theme_changed``, reading the theme from a file (None means defaults)."""
        with self._lock:
            return self._refresh_theme(self.pipeline.load_theme_file(path))

    def _refresh_theme(
        self, diagnostics: tuple[ThemeLoadError, ...]
    ) -> tuple[ThemeLoadError, ...]:
        good = self.slot.good
        if good is None or good.document is None:
            self.transport(ThemeVariablesMessage(css_variables=self.pipeline.css_block))
            return diagnostics

        outcome = self.pipeline.render_document(good.document)
        self.slot.replace_good(outcome)
        self.transport(outcome.to_message())
        failed = self.slot.failed
        if failed is not None:
            self.transport(failed.to_message())
        return diagnostics

    def open_devtools(self) -> None:
        self.transport(OpenDevToolsMessage())

    def snapshot(self) -> list[HostMessage]:
        """Messages that bring a freshly connected surface up to date."""
        with self._lock:
            messages: list[HostMessage] = []
            good = self.slot.good
            if good is not None:
                messages.append(good.to_message())
            else:
                messages.append(ThemeVariablesMessage(css_variables=self.pipeline.css_block))
            failed = self.slot.failed
            if failed is not None:
                messages.append(failed.to_message())
            return messages

    # -------------------------------------------------------------------------
    # Surface messages
    # -------------------------------------------------------------------------

    def receive(self, raw: str | bytes) -> Path | None:
        """Decode and handle one surface -> host wire message."""
        return self.handle(decode_surface_message(raw))

    def handle(self, message: SurfaceMessage) -> Path | None:
        """
        Handle a surface message.

        Returns:
            Path of the written export for ``export`` requests, else None
        """
        if isinstance(message, ReadyMessage):
            for reply in self.snapshot():
                self.transport(reply)
            return None
        if isinstance(message, ExportRequest):
            return self._export()
        raise TypeError(f"unsupported message: {message!r}")

    def _export(self) -> Path | None:
        if self.export_target is None:
            self.transport(ErrorMessage(message="export refused: no export location configured"))
            return None
        try:
            path = self.exporter.export(self.export_target, self.export_format)
        except ExportRefusedError as e:
            logger.warning("Export refused: %s", e)
            self.transport(ErrorMessage(message=f"export refused: {e}"))
            return None
        return path
