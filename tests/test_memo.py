import threading
import time
from collections import Counter
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from progdemos.memo import Memo, MemoServer, concurrent, http_get_body, sequential

BODIES = {
    "/a": b"a" * 7537,
    "/b": b"b" * 6878,
    "/c": b"c" * 5767,
    "/d": b"d" * 2856,
}
SIZES = [7537, 6878, 5767, 2856]


@pytest.fixture
def server():
    hits: Counter = Counter()
    lock = threading.Lock()

    class Handler(BaseHTTPRequestHandler):
        def do_GET(self):
            with lock:
                hits[self.path] += 1
            body = BODIES.get(self.path)
            status = 200
            if body is None:
                status, body = 404, b"missing"
            self.send_response(status)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, *args):
            pass

    httpd = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_address[1]}", hits
    httpd.shutdown()
    httpd.server_close()


def incoming(base):
    return [base + path for path in BODIES] * 2


def test_http_get_body(server):
    base, _ = server
    assert http_get_body(base + "/b") == BODIES["/b"]


def test_http_get_body_returns_error_page(server):
    base, _ = server
    assert http_get_body(base + "/nowhere") == b"missing"


@pytest.mark.parametrize("make", [Memo, MemoServer])
def test_sequential(server, make, capsys):
    base, hits = server
    memo = make(http_get_body)
    try:
        results = sequential(memo, incoming(base))
    finally:
        if isinstance(memo, MemoServer):
            memo.close()
    assert [size for _, _, size in results] == SIZES * 2
    assert set(hits.values()) == {1}
    assert len(capsys.readouterr().out.splitlines()) == 8


@pytest.mark.parametrize("make", [Memo, MemoServer])
def test_concurrent(server, make):
    base, hits = server
    memo = make(http_get_body)
    try:
        results = concurrent(memo, incoming(base))
    finally:
        if isinstance(memo, MemoServer):
            memo.close()
    assert sorted(size for _, _, size in results) == sorted(SIZES * 2)
    assert sorted(hits) == sorted(BODIES)
    assert set(hits.values()) == {1}


def test_memo_caches_values():
    calls = Counter()

    def square(key):
        calls[key] += 1
        return int(key) ** 2

    memo = Memo(square)
    assert memo.get("3") == 9
    assert memo.get("3") == 9
    assert memo.get("4") == 16
    assert calls == Counter({"3": 1, "4": 1})


def test_memo_caches_errors():
    calls = []

    def fail(key):
        calls.append(key)
        raise ValueError(f"bad {key}")

    memo = Memo(fail)
    for _ in range(2):
        with pytest.raises(ValueError, match="bad k"):
            memo.get("k")
    assert calls == ["k"]


@pytest.mark.parametrize("make", [Memo, MemoServer])
def test_duplicate_requests_wait_for_first(make):
    calls = []
    lock = threading.Lock()

    def slow(key):
        with lock:
            calls.append(key)
        time.sleep(0.05)
        return key.upper()

    memo = make(slow)
    results = []
    threads = [
        threading.Thread(target=lambda: results.append(memo.get("x"))) for _ in range(10)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    try:
        assert memo.get("x") == "X"
    finally:
        if isinstance(memo, MemoServer):
            memo.close()
    assert results == ["X"] * 10
    assert calls == ["x"]


def test_memo_server_context_and_close():
    with MemoServer(lambda key: len(key)) as memo:
        assert memo.get("hello") == 5
    with pytest.raises(RuntimeError):
        memo.get("hello")


def test_sequential_skips_errors():
    def lookup(key):
        if key == "bad":
            raise OSError("unreachable")
        return b"xyz"

    results = sequential(Memo(lookup), ["good", "bad", "good"])
    assert [(url, size) for url, _, size in results] == [("good", 3), ("good", 3)]