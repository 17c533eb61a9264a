import socket
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from progdemos.fetch import fetch, main, wait_for_server

BODY = b"some file contents\n"


class _Handler(BaseHTTPRequestHandler):
    def _answer(self, with_body):
        self.server.requests.append((self.command, self.path))
        status = 404 if self.path.startswith("/missing") else 200
        self.send_response(status)
        self.send_header("Content-Type", "text/plain")
        self.send_header("Content-Length", str(len(BODY)))
        self.end_headers()
        if with_body:
            self.wfile.write(BODY)

    def do_GET(self):
        self._answer(True)

    def do_HEAD(self):
        self._answer(False)

    def log_message(self, *args):
        pass


@pytest.fixture
def server(monkeypatch):
    monkeypatch.setenv("no_proxy", "*")
    monkeypatch.setenv("NO_PROXY", "*")
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    httpd.requests = []
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_address[1]}", httpd.requests
    httpd.shutdown()
    httpd.server_close()


def _closed_url():
    with socket.socket() as s:
        s.bind(("127.0.0.1", 0))
        port = s.getsockname()[1]
    return f"http://127.0.0.1:{port}/"


def test_fetch_writes_file(server, tmp_path):
    base, _ = server
    local, size = fetch(base + "/dir/page.txt", tmp_path)
    assert local == "page.txt"
    assert size == len(BODY)
    assert (tmp_path / "page.txt").read_bytes() == BODY


def test_fetch_root_is_index(server, tmp_path):
    base, _ = server
    local, _ = fetch(base + "/", tmp_path)
    assert local == "index.html"
    assert (tmp_path / "index.html").read_bytes() == BODY


def test_fetch_trailing_slash_uses_last_element(server, tmp_path):
    base, _ = server
    local, _ = fetch(base + "/docs/", tmp_path)
    assert local == "docs"


def test_fetch_decodes_path(server, tmp_path):
    base, _ = server
    local, _ = fetch(base + "/a%20b.txt", tmp_path)
    assert local == "a b.txt"
    assert (tmp_path / "a b.txt").exists()


def test_fetch_unreachable(tmp_path):
    with pytest.raises(OSError):
        fetch(_closed_url(), tmp_path)


def test_wait_for_server_sends_head(server):
    base, requests = server
    result = wait_for_server(base + "/up", timeout=5)
    assert result is None
    assert ("HEAD", "/up") in requests


def test_wait_for_server_accepts_error_status(server):
    base, requests = server
    result = wait_for_server(base + "/missing", timeout=5)
    assert (result, requests) == (None, [("HEAD", "/missing")])


def test_wait_for_server_times_out():
    url = _closed_url()
    with pytest.raises(TimeoutError, match=f"server {url} failed to respond after 0s"):
        wait_for_server(url, timeout=0)


def test_main_fetches_into_cwd(server, tmp_path, monkeypatch, capsys):
    base, _ = server
    monkeypatch.chdir(tmp_path)
    assert main([base + "/page.txt"]) == 0
    assert (tmp_path / "page.txt").read_bytes() == BODY
    assert f"=> page.txt ({len(BODY)} bytes)." in capsys.readouterr().err


def test_main_wait_usage(capsys):
    assert main(["--wait", "a", "b"]) == 1
    assert "usage: wait url" in capsys.readouterr().err


def test_main_wait_success(server):
    base, requests = server
    assert main(["--wait", base + "/"]) == 0
    assert ("HEAD", "/") in requests