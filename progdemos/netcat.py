"""A simple read/write client for TCP servers."""

from __future__ import annotations

import argparse
import logging
import socket
import sys
import threading
from typing import IO

_log = logging.getLogger(__name__)
_CHUNK = 64 * 1024


def _copy_from(conn: socket.socket, sink: IO[bytes]) -> int:
    total = 0
    while data := conn.recv(_CHUNK):
        sink.write(data)
        sink.flush()
        total += len(data)
    return total


def relay(
    host: str, port: int, source: IO[bytes] | None, sink: IO[bytes]
) -> int:
    """Connect to ``host``:``port``, copying the connection's data to ``sink``.

    With a ``source``, its data is sent to the server at the same time; at its
    end the connection is closed in both directions. Without one, data is read
    until the server closes. Returns the number of bytes written to ``sink``.
    Raises OSError if connecting or sending fails.
    """
    with socket.create_connection((host, port)) as conn:
        if source is None:
            return _copy_from(conn, sink)

        received = 0

        def reader() -> None:
            nonlocal received
            try:
                received = _copy_from(conn, sink)
            except OSError as err:
                _log.debug("reading stopped: %s", err)
            _log.info("done")

        thread = threading.Thread(target=reader, daemon=True)
        thread.start()
        read = getattr(source, "read1", source.read)
        try:
            while data := read(_CHUNK):
                conn.sendall(data)
        finally:
            try:
                conn.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            thread.join()
        return received


def main(argv: list[str] | None = None) -> int:
    """Connect standard input and output to a TCP server."""
    parser = argparse.ArgumentParser(prog="netcat", description="A simple TCP client.")
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument(
        "--read-only", action="store_true", help="only print what the server sends"
    )
    args = parser.parse_args(argv)
    source = None if args.read_only else sys.stdin.buffer
    try:
        relay(args.host, args.port, source, sys.stdout.buffer)
    except OSError as err:
        print(f"netcat: {err}", file=sys.stderr)
        return 1
    return 0