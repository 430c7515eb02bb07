"""
End-to-end tests against a real HTTP server on the loopback interface.

Test coverage:
- Byte-exact copies with and without Content-Length
- Servers that compress when the client allows it
- Bodies cut short by the server
- Response timeouts
- The CLI over a real connection
"""

import gzip
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
import requests
from typer.testing import CliRunner

from gobble.adapters.cli.app import app
from gobble.core.exceptions import StreamError, TransportError
from gobble.domain.fetch import FetchConfig, FetchService

KNOWN = bytes(range(256)) * 700  # spans several default chunks
PAGE = b"<html><body>" + b"gobble " * 5000 + b"</body></html>"


class LoopbackHandler(BaseHTTPRequestHandler):
    protocol_version = "HTTP/1.0"

    def do_GET(self):
        if self.path == "/known.bin":
            self._reply(KNOWN)
        elif self.path == "/unknown.bin":
            self._reply(KNOWN, content_length=False)
        elif self.path == "/page.html":
            if "gzip" in self.headers.get("Accept-Encoding", ""):
                self._reply(gzip.compress(PAGE), extra={"Content-Encoding": "gzip"})
            else:
                self._reply(PAGE)
        elif self.path == "/truncated.bin":
            self.send_response(200)
            self.send_header("Content-Length", str(len(KNOWN)))
            self.end_headers()
            self.wfile.write(KNOWN[:1000])
        elif self.path == "/slow.bin":
            time.sleep(1.0)
            self._reply(b"late")
        else:
            self.send_error(404)

    def _reply(self, body, content_length=True, extra=None):
        self.send_response(200)
        if content_length:
            self.send_header("Content-Length", str(len(body)))
        for name, value in (extra or {}).items():
            self.send_header(name, value)
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture(scope="module")
def server_url():
    server = ThreadingHTTPServer(("127.0.0.1", 0), LoopbackHandler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()


@pytest.fixture(autouse=True)
def no_proxy(monkeypatch):
    """Keep loopback requests away from any configured proxy."""
    monkeypatch.setenv("NO_PROXY", "127.0.0.1")
    monkeypatch.setenv("no_proxy", "127.0.0.1")


class TestLoopbackFetch:
    def test_known_length_body(self, workdir, server_url):
        with FetchService() as service:
            result = service.fetch(FetchConfig(url=f"{server_url}/known.bin"))

        assert (workdir / "known.bin").read_bytes() == KNOWN
        assert result.total_bytes == len(KNOWN)
        assert result.bytes_transferred == len(KNOWN)

    def test_unknown_length_body(self, workdir, server_url):
        with FetchService() as service:
            result = service.fetch(FetchConfig(url=f"{server_url}/unknown.bin"))

        assert (workdir / "unknown.bin").read_bytes() == KNOWN
        assert result.total_bytes == -1
        assert result.bytes_transferred == len(KNOWN)

    def test_compressing_server_yields_plain_content(self, workdir, server_url):
        # A default requests client is answered with gzip by this server
        with requests.get(f"{server_url}/page.html", stream=True) as response:
            assert response.raw.read(2) == b"\x1f\x8b"

        with FetchService() as service:
            result = service.fetch(FetchConfig(url=f"{server_url}/page.html"))

        assert (workdir / "page.html").read_bytes() == PAGE
        assert result.bytes_transferred == result.total_bytes == len(PAGE)

    def test_truncated_body_is_stream_error(self, workdir, server_url):
        with FetchService() as service:
            with pytest.raises(StreamError):
                service.fetch(FetchConfig(url=f"{server_url}/truncated.bin"))

    def test_missing_resource(self, workdir, server_url):
        with FetchService() as service:
            with pytest.raises(TransportError, match="404"):
                service.fetch(FetchConfig(url=f"{server_url}/nothing.bin"))
        assert not (workdir / "nothing.bin").exists()

    def test_timeout_is_transport_error(self, workdir, server_url):
        with FetchService() as service:
            with pytest.raises(TransportError):
                service.fetch(FetchConfig(url=f"{server_url}/slow.bin", timeout=0.2))
        assert not (workdir / "slow.bin").exists()


class TestLoopbackCli:
    def test_stdout_mode(self, workdir, server_url):
        result = CliRunner().invoke(app, ["-u", f"{server_url}/page.html", "-s"])

        assert result.exit_code == 0
        assert result.stdout_bytes == PAGE
        assert list(workdir.iterdir()) == []

    def test_file_mode_with_diagnostics(self, workdir, server_url):
        result = CliRunner().invoke(app, ["-u", f"{server_url}/known.bin", "-c", "16K"])

        assert result.exit_code == 0, result.output
        assert (workdir / "known.bin").read_bytes() == KNOWN
        assert "Status 200 OK" in result.output
        assert "Protocol HTTP/1.0" in result.output
        assert f"Content Length: {len(KNOWN)} bytes" in result.output
        assert "Finished:" in result.output
