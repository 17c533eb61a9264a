from wsgiref.util import setup_testing_defaults

import pytest

from progdemos.store import Database, Dollars


@pytest.fixture
def db():
    return Database({"shoes": 50, "socks": 5})


def _call(app, path, query=""):
    environ = {"PATH_INFO": path, "QUERY_STRING": query}
    setup_testing_defaults(environ)
    captured = {}

    def start_response(status, headers):
        captured["status"] = status
        captured["headers"] = dict(headers)

    body = b"".join(app(environ, start_response))
    return captured["status"], captured["headers"], body


def test_dollars_format():
    assert str(Dollars(50)) == "$50.00"
    assert str(Dollars(5)) == "$5.00"


def test_list_items_has_one_line_per_item(db):
    lines = db.list_items().splitlines()
    assert sorted(lines) == sorted(f"{item}: {Dollars(p)}" for item, p in db.items())


def test_price_known_item(db):
    assert db.price("socks") == 5
    assert str(db.price("shoes")) == str(Dollars(50))


def test_price_unknown_item_raises(db):
    with pytest.raises(KeyError):
        db.price("hats")


def test_list_endpoint(db):
    status, headers, body = _call(db.application, "/list")
    assert status.startswith("200")
    assert body == db.list_items().encode()
    assert headers["Content-Length"] == str(len(body))


def test_price_endpoint(db):
    status, _, body = _call(db.application, "/price", "item=shoes")
    assert status.startswith("200")
    assert body == f"{Dollars(50)}\n".encode()


def test_price_endpoint_unknown_item(db):
    status, _, body = _call(db.application, "/price", "item=hats")
    assert status.startswith("404")
    assert body == b'no such item: "hats"\n'


def test_price_endpoint_missing_item(db):
    status, _, body = _call(db.application, "/price")
    assert status.startswith("404")
    assert body == b'no such item: ""\n'


def test_unknown_page(db):
    status, _, body = _call(db.application, "/help", "x=1")
    assert status.startswith("404")
    assert body == b"no such page: /help?x=1\n"