"""A TCP server that echoes each line back like a fading shout."""

from __future__ import annotations

import argparse
import asyncio
import sys


def echo_lines(shout: str) -> list[str]:
    """Return the three lines of the echo of ``shout``: loud, as said, quiet."""
    return [f"\t {shout.upper()}", f"\t {shout}", f"\t {shout.lower()}"]


def _strip_line(line: bytes) -> str:
    text = line.decode("utf-8", errors="replace")
    if text.endswith("\n"):
        text = text[:-1]
    if text.endswith("\r"):
        text = text[:-1]
    return text


async def _echo(writer: asyncio.StreamWriter, shout: str, delay: float) -> None:
    lines = echo_lines(shout)
    try:
        for i, line in enumerate(lines):
            if i:
                await asyncio.sleep(delay)
            writer.write((line + "\n").encode())
            await writer.drain()
    except ConnectionError:
        pass


async def _close(writer: asyncio.StreamWriter) -> None:
    writer.close()
    try:
        await writer.wait_closed()
    except OSError:
        pass


async def handle_conn(
    reader: asyncio.StreamReader, writer: asyncio.StreamWriter, delay: float = 1.0
) -> None:
    """Echo each line, one echo at a time, then close the connection."""
    try:
        async for line in reader:
            await _echo(writer, _strip_line(line), delay)
    except (ConnectionError, ValueError):
        pass
    await _close(writer)


async def _handle_conn_concurrent(
    reader: asyncio.StreamReader, writer: asyncio.StreamWriter, delay: float = 1.0
) -> None:
    """Echo each line as it arrives; echoes overlap. Closes on end of input."""
    echoes: set[asyncio.Task] = set()
    try:
        async for line in reader:
            task = asyncio.create_task(_echo(writer, _strip_line(line), delay))
            echoes.add(task)
            task.add_done_callback(echoes.discard)
    except (ConnectionError, ValueError):
        pass
    await _close(writer)


async def _serve(host: str, port: int, delay: float, concurrent: bool) -> None:
    handler = _handle_conn_concurrent if concurrent else handle_conn

    async def on_connect(reader, writer):
        await handler(reader, writer, delay)

    server = await asyncio.start_server(on_connect, host, port)
    async with server:
        await server.serve_forever()


def main(argv: list[str] | None = None) -> int:
    """Run the echo server until interrupted."""
    parser = argparse.ArgumentParser(prog="reverb", description="Serve echoes.")
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--delay", type=float, default=1.0, help="seconds between echoes")
    parser.add_argument(
        "--concurrent", action="store_true", help="let echoes of several lines overlap"
    )
    args = parser.parse_args(argv)
    try:
        asyncio.run(_serve(args.host, args.port, args.delay, args.concurrent))
    except OSError as err:
        print(f"reverb: {err}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        pass
    return 0