"""Memoization of a function of one string key, safe for concurrent use."""

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Callable, Iterable
from datetime import timedelta
from typing import Any, Protocol

from .links import _http_get
from .sorting import format_duration

_log = logging.getLogger(__name__)

Func = Callable[[str], Any]


class _Getter(Protocol):
    def get(self, key: str) -> Any: ...


class _Entry:
    """A cached result; ``ready`` is set once it has been computed."""

    def __init__(self) -> None:
        self.ready = threading.Event()
        self.value: Any = None
        self.error: BaseException | None = None

    def fill(self, func: Func, key: str) -> None:
        try:
            self.value = func(key)
        except BaseException as err:
            self.error = err
        finally:
            self.ready.set()

    def result(self) -> Any:
        self.ready.wait()
        if self.error is not None:
            raise self.error
        return self.value


class Memo:
    """Cache the results of calling ``func``.

    Requests for different keys proceed in parallel; concurrent requests
    for the same key wait for the first to finish. A raised exception is
    cached like a value.
    """

    def __init__(self, func: Func) -> None:
        self._func = func
        self._lock = threading.Lock()
        self._cache: dict[str, _Entry] = {}

    def get(self, key: str) -> Any:
        """Return ``func(key)``, computing it at most once."""
        with self._lock:
            entry = self._cache.get(key)
            owner = entry is None
            if owner:
                entry = self._cache[key] = _Entry()
        if owner:
            entry.fill(self._func, key)
        return entry.result()


class MemoServer:
    """A memoization of ``func`` run by a monitor thread that owns the cache.

    Call close, or use it as a context manager, when done.
    """

    def __init__(self, func: Func) -> None:
        self._requests: queue.Queue = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False
        self._thread = threading.Thread(target=self._serve, args=(func,), daemon=True)
        self._thread.start()

    def _serve(self, func: Func) -> None:
        cache: dict[str, _Entry] = {}
        while (request := self._requests.get()) is not None:
            key, response = request
            entry = cache.get(key)
            if entry is None:
                entry = cache[key] = _Entry()
                threading.Thread(target=entry.fill, args=(func, key), daemon=True).start()
            threading.Thread(
                target=self._deliver, args=(entry, response), daemon=True
            ).start()

    @staticmethod
    def _deliver(entry: _Entry, response: queue.Queue) -> None:
        entry.ready.wait()
        response.put(entry)

    def get(self, key: str) -> Any:
        """Return ``func(key)``, computing it at most once."""
        response: queue.Queue = queue.Queue(maxsize=1)
        with self._lock:
            if self._closed:
                raise RuntimeError("memo is closed")
            self._requests.put((key, response))
        return response.get().result()

    def close(self) -> None:
        """Stop the monitor thread."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._requests.put(None)
        self._thread.join()

    def __enter__(self) -> MemoServer:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def http_get_body(url: str) -> bytes:
    """Return the body of the response to a GET of ``url``."""
    with _http_get(url) as response:
        return response.read()


def _timed_get(memo: _Getter, url: str) -> tuple[str, float, int] | None:
    start = time.perf_counter()
    try:
        value = memo.get(url)
    except Exception as err:
        _log.error("%s", err)
        return None
    elapsed = time.perf_counter() - start
    print(f"{url}, {format_duration(timedelta(seconds=elapsed))}, {len(value)} bytes")
    return url, elapsed, len(value)


def sequential(memo: _Getter, urls: Iterable[str]) -> list[tuple[str, float, int]]:
    """Get each URL in turn; return (url, seconds, size) for each success."""
    return [r for url in urls if (r := _timed_get(memo, url)) is not None]


def concurrent(memo: _Getter, urls: Iterable[str]) -> list[tuple[str, float, int]]:
    """Get all URLs at once; return (url, seconds, size) in completion order."""
    results: list[tuple[str, float, int]] = []
    lock = threading.Lock()

    def fetch(url: str) -> None:
        result = _timed_get(memo, url)
        if result is not None:
            with lock:
                results.append(result)

    threads = [threading.Thread(target=fetch, args=(url,)) for url in urls]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return results