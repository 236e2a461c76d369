"""Tests for the preview server."""

from __future__ import annotations

import http.client
import http.server
import json
import threading
import urllib.error
import urllib.request

import pytest

from textui.runtime.dev_server import ClientHub, PreviewServer
from textui.runtime.pipeline import RenderPipeline
from textui.runtime.session import PreviewSession
from textui.surfaces.messages import ErrorMessage, UpdateMessage


class TestClientHub:
    def test_each_client_gets_messages_in_order(self):
        hub = ClientHub()
        first = hub.register()
        second = hub.register()

        hub.broadcast(ErrorMessage(message="one"))
        hub.broadcast(UpdateMessage(fragment="<p/>", css_variables=""))

        for client in (first, second):
            assert json.loads(client.get_nowait())["message"] == "one"
            assert json.loads(client.get_nowait())["type"] == "update"

    def test_unregistered_clients_stop_receiving(self):
        hub = ClientHub()
        client = hub.register()
        hub.unregister(client)
        hub.broadcast(ErrorMessage(message="x"))
        assert client.empty()
        assert hub.client_count == 0


@pytest.fixture
def running_server(tmp_path, sample_source):
    hub = ClientHub()
    session = PreviewSession(
        RenderPipeline(), transport=hub.broadcast, export_target=tmp_path / "export.html"
    )
    session.document_changed(sample_source)
    preview = PreviewServer(session, hub, port=0)

    httpd = http.server.ThreadingHTTPServer(("127.0.0.1", 0), preview._handler_class())
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{httpd.server_address[1]}", tmp_path
    finally:
        httpd.shutdown()
        httpd.server_close()


class TestPreviewHandler:
    def test_page_is_prerendered(self, running_server):
        base, _ = running_server
        with urllib.request.urlopen(f"{base}/") as response:
            html = response.read().decode("utf-8")
        assert ">Primary Button</button>" in html
        assert '<script src="/static/surface.js"></script>' in html
        assert "--colors-primary: #3B82F6;" in html

    def test_surface_script(self, running_server):
        base, _ = running_server
        with urllib.request.urlopen(f"{base}/static/surface.js") as response:
            script = response.read().decode("utf-8")
        assert "EventSource" in script
        assert "textContent" in script

    def test_export_message(self, running_server):
        base, tmp_path = running_server
        request = urllib.request.Request(
            f"{base}/message",
            data=b'{"type": "export"}',
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        with urllib.request.urlopen(request) as response:
            assert response.status == 200
        assert "Primary Button" in (tmp_path / "export.html").read_text(encoding="utf-8")

    def test_malformed_message_is_rejected(self, running_server):
        base, _ = running_server
        request = urllib.request.Request(
            f"{base}/message", data=b'{"type": "nuke"}', method="POST"
        )
        with pytest.raises(urllib.error.HTTPError) as exc_info:
            urllib.request.urlopen(request)
        assert exc_info.value.code == 400

    def test_unknown_route(self, running_server):
        base, _ = running_server
        with pytest.raises(urllib.error.HTTPError) as exc_info:
            urllib.request.urlopen(f"{base}/nope")
        assert exc_info.value.code == 404

    @pytest.mark.parametrize("length", ["abc", "-5"])
    def test_invalid_content_length_is_rejected(self, running_server, length):
        base, _ = running_server
        host, port = base.removeprefix("http://").split(":")
        conn = http.client.HTTPConnection(host, int(port), timeout=5)
        try:
            conn.putrequest("POST", "/message")
            conn.putheader("Content-Length", length)
            conn.endheaders()
            response = conn.getresponse()
            assert response.status == 400
            assert json.loads(response.read()) == {"error": "invalid Content-Length"}
        finally:
            conn.close()
