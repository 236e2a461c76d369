"""
Preview server for TextUI.

Serves the live surface page, streams host -> surface messages as
Server-Sent Events and accepts surface -> host messages on POST /message.

Routes:
    GET  /                  preview page (current state prerendered)
    GET  /static/surface.js surface script
    GET  /events            SSE message stream
    POST /message           surface -> host message (JSON)
"""

from __future__ import annotations

import http.server
import json
import logging
import queue
import threading
from pathlib import Path
from typing import Any

from markupsafe import Markup

from textui.core.errors import MalformedInputError
from textui.render.renderer import get_jinja_env
from textui.render.styles import BASE_CSS
from textui.surfaces.export import DEFAULT_EXPORT_TITLE, style_text
from textui.surfaces.messages import HostMessage, UpdateMessage, encode

from .session import PreviewSession

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent.parent / "surfaces" / "static"
PREVIEW_TEMPLATE = "preview.html"
KEEPALIVE_SECONDS = 15.0
MAX_MESSAGE_BYTES = 64 * 1024


# =============================================================================
# Client hub
# =============================================================================


class ClientHub:
    """
    Fan-out of host messages to connected surfaces.

    Each client gets its own FIFO queue, so every connection sees messages
    in delivery order.
    """

    def __init__(self) -> None:
        self._clients: list[queue.Queue[str]] = []
        self._lock = threading.Lock()

    def register(self) -> queue.Queue[str]:
        client: queue.Queue[str] = queue.Queue()
        with self._lock:
            self._clients.append(client)
        return client

    def unregister(self, client: queue.Queue[str]) -> None:
        with self._lock:
            if client in self._clients:
                self._clients.remove(client)

    def broadcast(self, message: HostMessage) -> None:
        payload = encode(message)
        with self._lock:
            for client in self._clients:
                client.put(payload)
            client_count = len(self._clients)
        logger.debug("Sent %s to %d surface(s)", message.type, client_count)

    @property
    def client_count(self) -> int:
        with self._lock:
            return len(self._clients)


# =============================================================================
# Request Handler
# =============================================================================


class PreviewHandler(http.server.BaseHTTPRequestHandler):
    """HTTP request handler for the live surface."""

    session: PreviewSession
    hub: ClientHub
    stop_event: threading.Event

    def do_GET(self) -> None:
        """Handle GET requests."""
        path = self.path.split("?")[0]

        if path == "/":
            self._serve_page()
        elif path == "/static/surface.js":
            self._serve_script()
        elif path == "/events":
            self._serve_events()
        else:
            self.send_error(404)

    def do_POST(self) -> None:
        """Handle POST requests."""
        if self.path.split("?")[0] != "/message":
            self.send_error(404)
            return

        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            length = -1
        if length < 0:
            self._send_response(
                json.dumps({"error": "invalid Content-Length"}), "application/json", status=400
            )
            return
        if length > MAX_MESSAGE_BYTES:
            self.send_error(413)
            return
        body = self.rfile.read(length)
        try:
            self.session.receive(body)
        except MalformedInputError as e:
            logger.warning("Rejected surface message: %s", e)
            self._send_response(json.dumps({"error": e.message}), "application/json", status=400)
            return
        self._send_response('{"ok": true}', "application/json")

    def _serve_page(self) -> None:
        title = DEFAULT_EXPORT_TITLE
        fragment = ""
        css_block = self.session.pipeline.css_block
        good = self.session.slot.good
        if good is not None and good.document is not None:
            message = good.to_message()
            assert isinstance(message, UpdateMessage)
            title = good.document.page.title or title
            fragment = message.fragment
            css_block = message.css_variables

        html = (
            get_jinja_env()
            .get_template(PREVIEW_TEMPLATE)
            .render(
                title=title,
                base_css=style_text(BASE_CSS),
                theme_css=style_text(css_block),
                fragment=Markup(fragment),
            )
        )
        self._send_response(html, "text/html")

    def _serve_script(self) -> None:
        script = (STATIC_DIR / "surface.js").read_text(encoding="utf-8")
        self._send_response(script, "application/javascript")

    def _serve_events(self) -> None:
        """Serve the SSE stream; starts with a snapshot of the current state."""
        self.send_response(200)
        self.send_header("Content-Type", "text/event-stream")
        self.send_header("Cache-Control", "no-cache")
        self.send_header("Connection", "keep-alive")
        self.end_headers()

        client = self.hub.register()
        try:
            for message in self.session.snapshot():
                self._write_event(encode(message))
            while not self.stop_event.is_set():
                try:
                    payload = client.get(timeout=KEEPALIVE_SECONDS)
                except queue.Empty:
                    self.wfile.write(b": keepalive\n\n")
                    self.wfile.flush()
                    continue
                self._write_event(payload)
        except (BrokenPipeError, ConnectionResetError):
            logger.debug("Surface disconnected")
        finally:
            self.hub.unregister(client)

    def _write_event(self, payload: str) -> None:
        self.wfile.write(f"data: {payload}\n\n".encode())
        self.wfile.flush()

    def _send_response(self, content: str, content_type: str, status: int = 200) -> None:
        """Send HTTP response."""
        data = content.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", f"{content_type}; charset=utf-8")
        self.send_header("Content-Length", str(len(data)))
        self.send_header("Cache-Control", "no-cache")
        self.end_headers()
        self.wfile.write(data)

    def log_message(self, format: str, *args: Any) -> None:
        """Log HTTP requests."""
        logger.debug("%s %s", self.address_string(), format % args)


# =============================================================================
# Preview Server
# =============================================================================


class PreviewServer:
    """
    Live preview server.

    Provides:
    - The surface page with the current render
    - In-order message streaming over SSE
    - Export and ready handling via POST /message
    """

    def __init__(
        self,
        session: PreviewSession,
        hub: ClientHub,
        host: str = "127.0.0.1",
        port: int = 5173,
    ):
        """
        Initialize the preview server.

        Args:
            session: Session whose transport is ``hub.broadcast``
            hub: Client hub shared with the session
            host: Host to bind to
            port: Port to bind to
        """
        self.session = session
        self.hub = hub
        self.host = host
        self.port = port
        self._stop_event = threading.Event()
        self._server: http.server.ThreadingHTTPServer | None = None

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def _handler_class(self) -> type[PreviewHandler]:
        return type(
            "BoundPreviewHandler",
            (PreviewHandler,),
            {"session": self.session, "hub": self.hub, "stop_event": self._stop_event},
        )

    def start(self) -> None:
        """
        Start the preview server.

        Blocks until the server is stopped.
        """
        http.server.ThreadingHTTPServer.allow_reuse_address = True
        self._server = http.server.ThreadingHTTPServer(
            (self.host, self.port), self._handler_class()
        )
        self._server.daemon_threads = True
        logger.info("Preview server running at %s", self.url)

        try:
            self._server.serve_forever()
        except KeyboardInterrupt:
            logger.info("Shutting down...")
        finally:
            self._stop_event.set()
            self._server.server_close()

    def stop(self) -> None:
        """Stop the server."""
        self._stop_event.set()
        if self._server:
            self._server.shutdown()
