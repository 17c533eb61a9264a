"""A TCP server that writes the time of day to each client once a second."""

from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import datetime, time


def format_time(t: datetime | time) -> str:
    """Format ``t`` as ``HH:MM:SS``."""
    return t.strftime("%H:%M:%S")


async def handle_conn(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
    """Write the time once a second until the client goes away."""
    try:
        while True:
            writer.write((format_time(datetime.now()) + "\n").encode())
            await writer.drain()
            await asyncio.sleep(1)
    except OSError:
        pass  # e.g. client disconnected
    finally:
        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass


async def _serve(host: str, port: int, sequential: bool) -> None:
    handler = handle_conn
    if sequential:
        lock = asyncio.Lock()

        async def handler(reader, writer):  # one connection at a time
            async with lock:
                await handle_conn(reader, writer)

    server = await asyncio.start_server(handler, host, port)
    async with server:
        await server.serve_forever()


def main(argv: list[str] | None = None) -> int:
    """Run the clock server until interrupted."""
    parser = argparse.ArgumentParser(prog="clock", description="Serve the time of day.")
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument(
        "--sequential", action="store_true", help="handle one connection at a time"
    )
    args = parser.parse_args(argv)
    try:
        asyncio.run(_serve(args.host, args.port, args.sequential))
    except OSError as err:
        print(f"clock: {err}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        pass
    return 0