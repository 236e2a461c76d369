"""
Hot reload support for the preview server.

Watches the document and the theme file and pushes fresh renders to the
live surface when either changes.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path

from .session import PreviewSession

logger = logging.getLogger(__name__)


class FileWatcher:
    """
    Watches files for changes using polling (cross-platform compatible).

    Uses mtime-based change detection to avoid external dependencies.
    A watched file that disappears and comes back is reported as changed.
    """

    def __init__(
        self,
        paths: list[Path],
        on_change: Callable[[Path], None],
        poll_interval: float = 0.5,
    ):
        """
        Initialize the file watcher.

        Args:
            paths: Files to watch (they need not exist yet)
            on_change: Callback when a file changes
            poll_interval: How often to check for changes (seconds)
        """
        self.paths = paths
        self.on_change = on_change
        self.poll_interval = poll_interval

        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._file_mtimes: dict[Path, float] = {}

    def start(self) -> None:
        """Start watching for file changes."""
        # Initialize mtimes
        self._file_mtimes = self._scan_files()

        self._thread = threading.Thread(target=self._watch_loop, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop watching for file changes."""
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=2)

    def _scan_files(self) -> dict[Path, float]:
        """Return mtimes of the watched files that currently exist."""
        mtimes: dict[Path, float] = {}
        for path in self.paths:
            try:
                mtimes[path] = path.stat().st_mtime
            except OSError:
                continue
        return mtimes

    def poll(self) -> list[Path]:
        """Check once and return the files that changed since the last check."""
        current_mtimes = self._scan_files()
        changed_files = [
            path
            for path, mtime in current_mtimes.items()
            if path not in self._file_mtimes or mtime > self._file_mtimes[path]
        ]
        # Removed files count as changes too, so the theme can fall back
        changed_files.extend(path for path in self._file_mtimes if path not in current_mtimes)
        self._file_mtimes = current_mtimes
        return changed_files

    def _watch_loop(self) -> None:
        """Main watch loop that polls for file changes."""
        while not self._stop_event.is_set():
            for file_path in self.poll():
                try:
                    self.on_change(file_path)
                except Exception:
                    logger.exception("Error in change callback for %s", file_path)

            self._stop_event.wait(self.poll_interval)


class PreviewReloader:
    """
    Feeds document and theme changes into a PreviewSession.

    Changes are debounced on the trailing edge: a burst of saves produces one
    render of the final content, never a render of an intermediate state
    that then sticks.
    """

    def __init__(
        self,
        session: PreviewSession,
        document_path: Path,
        theme_path: Path | None = None,
        poll_interval: float = 0.5,
        debounce: float = 0.3,
    ):
        self.session = session
        self.document_path = document_path
        self.theme_path = theme_path
        self.debounce = debounce

        watched = [document_path] + ([theme_path] if theme_path else [])
        self._watcher = FileWatcher(watched, self._on_file_change, poll_interval)
        self._pending: set[Path] = set()
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    def start(self) -> None:
        """Load the current files, then start watching."""
        if self.theme_path is not None:
            self.reload_theme()
        self.reload_document()
        self._watcher.start()
        logger.info("Watching %s", ", ".join(str(p) for p in self._watcher.paths))

    def stop(self) -> None:
        self._watcher.stop()
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _on_file_change(self, file_path: Path) -> None:
        with self._lock:
            self._pending.add(file_path)
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(self.debounce, self.flush)
            self._timer.daemon = True
            self._timer.start()

    def flush(self) -> None:
        """Apply pending changes: theme first, so the document renders with it."""
        with self._lock:
            pending, self._pending = self._pending, set()
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

        if self.theme_path is not None and self.theme_path in pending:
            logger.info("Theme changed: %s", self.theme_path.name)
            self.reload_theme()
        if self.document_path in pending:
            logger.info("File changed: %s", self.document_path.name)
            self.reload_document()

    def reload_theme(self) -> None:
        assert self.theme_path is not None
        # Missing file means defaults with no diagnostic
        path = self.theme_path if self.theme_path.exists() else None
        self.session.theme_file_changed(path)

    def reload_document(self) -> None:
        try:
            raw = self.document_path.read_bytes()
        except OSError as e:
            logger.warning("Cannot read %s: %s", self.document_path, e)
            return
        outcome = self.session.document_changed(raw)
        if outcome.ok:
            logger.info("Rendered %s", self.document_path.name)
        else:
            logger.warning("%s: %s", self.document_path.name, outcome.error)
