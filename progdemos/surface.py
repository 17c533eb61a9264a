"""Serve SVG plots of a 3-D surface z = f(x, y) given as an expression."""

from __future__ import annotations

import math
import sys
from collections.abc import Callable, Iterable, Iterator
from http import HTTPStatus
from urllib.parse import parse_qs
from wsgiref.simple_server import make_server

from .eval import Expr, ExprError, _format_float, parse

WIDTH, HEIGHT = 600, 320  # canvas size in pixels
CELLS = 100  # number of grid cells
XYRANGE = 30.0  # x, y axis range (-XYRANGE..+XYRANGE)
XYSCALE = WIDTH / 2 / XYRANGE  # pixels per x or y unit
ZSCALE = HEIGHT * 0.4  # pixels per z unit

_SIN30, _COS30 = 0.5, math.sqrt(3.0 / 4.0)
_VARIABLES = frozenset({"x", "y", "r"})
_SVG_HEADER = (
    "<svg xmlns='http://www.w3.org/2000/svg' "
    "style='stroke: grey; fill: white; stroke-width: 0.7' "
    f"width='{WIDTH}' height='{HEIGHT}'>"
)

SurfaceFunc = Callable[[float, float], float]


def corner(f: SurfaceFunc, i: int, j: int) -> tuple[float, float]:
    """Project the corner of grid cell (i, j) onto the 2-D canvas."""
    x = XYRANGE * (i / CELLS - 0.5)
    y = XYRANGE * (j / CELLS - 0.5)
    z = f(x, y)
    sx = WIDTH / 2 + (x - y) * _COS30 * XYSCALE
    sy = HEIGHT / 2 + (x + y) * _SIN30 * XYSCALE - z * ZSCALE
    return sx, sy


def _svg_parts(f: SurfaceFunc) -> Iterator[str]:
    yield _SVG_HEADER
    for i in range(CELLS):
        for j in range(CELLS):
            points = (
                corner(f, i + 1, j),
                corner(f, i, j),
                corner(f, i, j + 1),
                corner(f, i + 1, j + 1),
            )
            text = " ".join(
                f"{_format_float(px)},{_format_float(py)}" for px, py in points
            )
            yield f"<polygon points='{text}'/>\n"
    yield "</svg>\n"


def render_surface(f: SurfaceFunc) -> str:
    """Return an SVG document plotting the surface z = f(x, y)."""
    return "".join(_svg_parts(f))


def parse_and_check(text: str) -> Expr:
    """Parse ``text`` and make sure it uses only the variables x, y and r."""
    if text == "":
        raise ExprError("empty expression")
    expr = parse(text)
    names: set[str] = set()
    expr.check(names)
    for name in sorted(names):
        if name not in _VARIABLES:
            raise ExprError(f"undefined variable: {name}")
    return expr


def _read_form(environ: dict) -> dict[str, list[str]]:
    form: dict[str, list[str]] = {}
    method = environ.get("REQUEST_METHOD", "GET").upper()
    content_type = environ.get("CONTENT_TYPE", "").split(";")[0].strip().lower()
    if method in {"POST", "PUT", "PATCH"} and (
        content_type == "application/x-www-form-urlencoded"
    ):
        try:
            length = int(environ.get("CONTENT_LENGTH") or 0)
        except ValueError:
            length = 0
        body = environ["wsgi.input"].read(length) if length > 0 else b""
        form = parse_qs(body.decode("utf-8", errors="replace"), keep_blank_values=True)
    query = parse_qs(environ.get("QUERY_STRING", ""), keep_blank_values=True)
    for key, values in query.items():
        form.setdefault(key, []).extend(values)
    return form


def _respond(start_response, status: HTTPStatus, text: str) -> Iterable[bytes]:
    body = text.encode()
    start_response(
        f"{status.value} {status.phrase}",
        [
            ("Content-Type", "text/plain; charset=utf-8"),
            ("X-Content-Type-Options", "nosniff"),
            ("Content-Length", str(len(body))),
        ],
    )
    return [body]


def application(environ, start_response) -> Iterable[bytes]:
    """WSGI application serving ``/plot?expr=...`` as an SVG image."""
    if environ.get("PATH_INFO", "") != "/plot":
        return _respond(start_response, HTTPStatus.NOT_FOUND, "404 page not found\n")
    form = _read_form(environ)
    try:
        expr = parse_and_check(form.get("expr", [""])[0])
    except ExprError as err:
        return _respond(start_response, HTTPStatus.BAD_REQUEST, f"bad expr: {err}\n")

    def height(x: float, y: float) -> float:
        return expr.eval({"x": x, "y": y, "r": math.hypot(x, y)})

    body = render_surface(height).encode()
    start_response(
        "200 OK",
        [("Content-Type", "image/svg+xml"), ("Content-Length", str(len(body)))],
    )
    return [body]


def main(argv: list[str] | None = None) -> int:
    """Serve plots on localhost:8000 until interrupted."""
    try:
        with make_server("localhost", 8000, application) as server:
            server.serve_forever()
    except OSError as err:
        print(err, file=sys.stderr)
        return 1
    return 0