"""A small e-commerce server with /list and /price endpoints."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from http import HTTPStatus
from urllib.parse import parse_qs
from wsgiref.simple_server import make_server

from .tempconv import _quote


class Dollars(float):
    """A price in dollars."""

    def __str__(self) -> str:
        return f"${float(self):.2f}"


class Database(dict):
    """A map from item name to its price in dollars."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(
            {item: Dollars(price) for item, price in dict(*args, **kwargs).items()}
        )

    def list_items(self) -> str:
        """Return one ``item: $price`` line for every item."""
        return "".join(f"{item}: {Dollars(price)}\n" for item, price in self.items())

    def price(self, item: str) -> Dollars:
        """Return the price of ``item``; raises KeyError if there is no such item."""
        return Dollars(self[item])

    def application(self, environ, start_response) -> Iterable[bytes]:
        """WSGI application serving ``/list`` and ``/price?item=...``."""
        path = environ.get("PATH_INFO", "") or "/"
        if path == "/list":
            return _respond(start_response, HTTPStatus.OK, self.list_items())
        if path == "/price":
            query = parse_qs(environ.get("QUERY_STRING", ""), keep_blank_values=True)
            item = query.get("item", [""])[0]
            try:
                price = self.price(item)
            except KeyError:
                return _respond(
                    start_response,
                    HTTPStatus.NOT_FOUND,
                    f"no such item: {_quote(item)}\n",
                )
            return _respond(start_response, HTTPStatus.OK, f"{price}\n")
        url = environ.get("SCRIPT_NAME", "") + path
        if environ.get("QUERY_STRING"):
            url += "?" + environ["QUERY_STRING"]
        return _respond(start_response, HTTPStatus.NOT_FOUND, f"no such page: {url}\n")


def _respond(start_response, status: HTTPStatus, text: str) -> list[bytes]:
    body = text.encode()
    start_response(
        f"{status.value} {status.phrase}",
        [
            ("Content-Type", "text/plain; charset=utf-8"),
            ("Content-Length", str(len(body))),
        ],
    )
    return [body]


def main(argv: list[str] | None = None) -> int:
    """Serve the sample store on localhost:8000 until interrupted."""
    db = Database({"shoes": 50, "socks": 5})
    try:
        with make_server("localhost", 8000, db.application) as server:
            server.serve_forever()
    except OSError as err:
        print(err, file=sys.stderr)
        return 1
    return 0