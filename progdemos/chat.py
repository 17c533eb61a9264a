"""A chat server that relays every client's lines to all connected clients."""

from __future__ import annotations

import argparse
import asyncio
import sys


def _address(peer: object) -> str:
    if isinstance(peer, tuple) and len(peer) >= 2:
        host, port = peer[0], peer[1]
        if ":" in str(host):
            return f"[{host}]:{port}"
        return f"{host}:{port}"
    return str(peer)


def _strip_line(line: bytes) -> str:
    text = line.decode("utf-8", errors="replace")
    if text.endswith("\n"):
        text = text[:-1]
    if text.endswith("\r"):
        text = text[:-1]
    return text


class ChatServer:
    """Broadcasts each incoming message to the outgoing queue of every client."""

    def __init__(self) -> None:
        self._clients: set[asyncio.Queue] = set()

    def _broadcast(self, message: str) -> None:
        for client in self._clients:
            client.put_nowait(message)

    @staticmethod
    async def _client_writer(writer: asyncio.StreamWriter, outgoing: asyncio.Queue) -> None:
        while (message := await outgoing.get()) is not None:
            writer.write((message + "\n").encode())
            try:
                await writer.drain()
            except ConnectionError:
                pass  # network errors are ignored, as for any departed client

    async def handle(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        """Serve one client connection until it closes."""
        outgoing: asyncio.Queue = asyncio.Queue()
        sender = asyncio.create_task(self._client_writer(writer, outgoing))

        who = _address(writer.get_extra_info("peername"))
        outgoing.put_nowait("You are " + who)
        self._broadcast(who + " has arrived")
        self._clients.add(outgoing)

        try:
            async for line in reader:
                self._broadcast(f"{who}: {_strip_line(line)}")
        except (ConnectionError, ValueError):
            pass

        self._clients.discard(outgoing)
        outgoing.put_nowait(None)
        self._broadcast(who + " has left")
        await sender
        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass

    async def serve(self, host: str = "localhost", port: int = 8000) -> None:
        """Accept clients on ``host``:``port`` forever."""
        server = await asyncio.start_server(self.handle, host, port)
        async with server:
            await server.serve_forever()


def main(argv: list[str] | None = None) -> int:
    """Run the chat server until interrupted."""
    parser = argparse.ArgumentParser(prog="chat", description="Run a chat server.")
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args(argv)
    try:
        asyncio.run(ChatServer().serve(args.host, args.port))
    except OSError as err:
        print(f"chat: {err}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        pass
    return 0