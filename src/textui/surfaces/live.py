"""
Live preview surface model.

The surface-side state machine of the live adapter. It applies host
messages strictly one at a time in delivery order. Each ``update`` carries
the full state to show, so nothing is patched incrementally and a newer
update simply supersedes the previous one.

States::

    Uninitialized -> Ready <-> Updating
                     Ready  -> Error -> Ready (next successful update)

While in Error the last successfully applied fragment stays on screen under
an escaped error banner; the surface never goes blank.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum

from markupsafe import Markup, escape

from .messages import (
    ErrorMessage,
    ExportRequest,
    HostMessage,
    OpenDevToolsMessage,
    ReadyMessage,
    SchemaErrorMessage,
    SurfaceMessage,
    ThemeVariablesMessage,
    UpdateMessage,
    decode_host_message,
)

logger = logging.getLogger(__name__)


class SurfaceState(StrEnum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    UPDATING = "updating"
    ERROR = "error"


class LiveSurface:
    """
    In-process model of the preview surface.

    The browser page served by the preview server implements the same
    transitions in JavaScript; this model is what the host and the tests
    reason about.
    """

    def __init__(
        self,
        send: Callable[[SurfaceMessage], None] | None = None,
        on_open_devtools: Callable[[], None] | None = None,
    ):
        """
        Initialize the surface.

        Args:
            send: Transport to the host for surface -> host messages
            on_open_devtools: Side-channel hook for ``openDevTools``
        """
        self._send = send
        self._on_open_devtools = on_open_devtools

        self.state = SurfaceState.UNINITIALIZED
        self.fragment: str = ""
        self.css_variables: str = ""
        self.error: str | None = None
        self.error_label: str | None = None
        self.transitions: list[tuple[SurfaceState, SurfaceState]] = []

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def load(self) -> None:
        """Finish loading and ask the host for the current state."""
        if self.state is SurfaceState.UNINITIALIZED:
            self._move(SurfaceState.READY)
        self._emit(ReadyMessage())

    def request_export(self) -> None:
        """Handler for the always-visible export control."""
        self._emit(ExportRequest())

    # -------------------------------------------------------------------------
    # Host messages
    # -------------------------------------------------------------------------

    def receive(self, raw: str | bytes) -> None:
        """Decode and apply one wire message."""
        self.apply(decode_host_message(raw))

    def apply(self, message: HostMessage) -> None:
        """Apply one host message."""
        if isinstance(message, UpdateMessage):
            self._leave_uninitialized()
            self._move(SurfaceState.UPDATING)
            self.fragment = message.fragment
            self.css_variables = message.css_variables
            self.error = None
            self.error_label = None
            self._move(SurfaceState.READY)
        elif isinstance(message, SchemaErrorMessage):
            label = f"Schema error at {message.path}" if message.path else "Schema error"
            self._show_error(label, message.message)
        elif isinstance(message, ErrorMessage):
            self._show_error("Error", message.message)
        elif isinstance(message, ThemeVariablesMessage):
            self.css_variables = message.css_variables
        elif isinstance(message, OpenDevToolsMessage):
            if self._on_open_devtools is not None:
                self._on_open_devtools()
        else:
            raise TypeError(f"unsupported message: {message!r}")

    # -------------------------------------------------------------------------
    # View
    # -------------------------------------------------------------------------

    def view(self) -> Markup:
        """What the surface currently displays: banner (if any) above the fragment."""
        body = Markup(self.fragment)
        if self.error is None:
            return body
        banner = Markup(
            '<div class="textui-error-banner" role="alert"><strong>{}</strong> {}</div>'
        ).format(self.error_label, self.error)
        return banner + body

    @property
    def banner_text(self) -> str | None:
        """Escaped banner text, as it appears in the markup."""
        if self.error is None:
            return None
        return str(escape(self.error))

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _show_error(self, label: str, message: str) -> None:
        self._leave_uninitialized()
        self.error = message
        self.error_label = label
        self._move(SurfaceState.ERROR)

    def _leave_uninitialized(self) -> None:
        # Content that arrives before load() still enters through Ready
        if self.state is SurfaceState.UNINITIALIZED:
            self._move(SurfaceState.READY)

    def _move(self, target: SurfaceState) -> None:
        if target is not self.state:
            logger.debug("Surface %s -> %s", self.state, target)
            self.transitions.append((self.state, target))
            self.state = target

    def _emit(self, message: SurfaceMessage) -> None:
        if self._send is not None:
            self._send(message)
