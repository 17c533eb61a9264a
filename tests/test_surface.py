import io
import math

import pytest

from progdemos.eval import ExprError, format_expr, parse
from progdemos.surface import (
    CELLS,
    HEIGHT,
    WIDTH,
    application,
    corner,
    parse_and_check,
    render_surface,
)


def call_app(path, query="", method="GET", body=b""):
    captured = {}

    def start_response(status, headers):
        captured["status"] = status
        captured["headers"] = dict(headers)

    environ = {
        "REQUEST_METHOD": method,
        "PATH_INFO": path,
        "QUERY_STRING": query,
        "wsgi.input": io.BytesIO(body),
    }
    if body:
        environ["CONTENT_TYPE"] = "application/x-www-form-urlencoded"
        environ["CONTENT_LENGTH"] = str(len(body))
    data = b"".join(application(environ, start_response))
    return captured["status"], captured["headers"], data


def test_corner_at_centre_is_canvas_centre():
    assert corner(lambda x, y: 0.0, CELLS // 2, CELLS // 2) == (WIDTH / 2, HEIGHT / 2)


def test_corner_height_moves_point_up():
    low = corner(lambda x, y: 0.0, 10, 20)
    high = corner(lambda x, y: 1.0, 10, 20)
    assert high[0] == low[0]
    assert high[1] < low[1]


def test_render_surface_structure():
    svg = render_surface(lambda x, y: 0.0)
    assert svg.startswith(
        "<svg xmlns='http://www.w3.org/2000/svg' "
        "style='stroke: grey; fill: white; stroke-width: 0.7' "
    )
    assert svg.endswith("</svg>\n")
    assert svg.count("<polygon points='") == CELLS * CELLS


def test_render_surface_nan_heights():
    svg = render_surface(lambda x, y: math.nan)
    assert "NaN" in svg


def test_parse_and_check_accepts_known_variables():
    expr = parse_and_check("pow(x, 2) + y * r")
    assert format_expr(expr) == format_expr(parse("pow(x, 2) + y * r"))


@pytest.mark.parametrize(
    "text, message",
    [
        ("", "empty expression"),
        ("z", "undefined variable: z"),
        ("log(x)", 'unknown function "log"'),
        ("x % 2", "unexpected '%'"),
    ],
)
def test_parse_and_check_errors(text, message):
    with pytest.raises(ExprError) as info:
        parse_and_check(text)
    assert str(info.value) == message


def test_plot_ok():
    status, headers, body = call_app("/plot", "expr=sin(r)%2Fr")
    assert status == "200 OK"
    assert headers["Content-Type"] == "image/svg+xml"
    assert body.startswith(b"<svg")
    assert body.endswith(b"</svg>\n")


def test_plot_bad_expression():
    status, headers, body = call_app("/plot", "expr=z")
    assert status.startswith("400")
    assert headers["Content-Type"] == "text/plain; charset=utf-8"
    assert body == b"bad expr: undefined variable: z\n"


def test_plot_missing_expression():
    status, _, body = call_app("/plot")
    assert status.startswith("400")
    assert body == b"bad expr: empty expression\n"


def test_plot_from_posted_form():
    status, _, body = call_app("/plot", method="POST", body=b"expr=x%2By")
    assert status == "200 OK"
    assert body.count(b"<polygon") == CELLS * CELLS


def test_unknown_path():
    status, _, body = call_app("/other", "expr=x")
    assert status.startswith("404")
    assert body == b"404 page not found\n"