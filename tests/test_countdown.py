import io
import threading

from progdemos.countdown import countdown


def test_countdown_without_abort_launches():
    out = io.StringIO()
    assert countdown(3, 0, None, out) is True
    assert out.getvalue() == "Commencing countdown.\n3\n2\n1\nLift off!\n"


def test_countdown_not_aborted_launches():
    out = io.StringIO()
    assert countdown(2, 0, threading.Event(), out) is True
    assert out.getvalue() == (
        "Commencing countdown.  Press return to abort.\n2\n1\nLift off!\n"
    )


def test_countdown_aborted_stops_at_first_count():
    abort = threading.Event()
    abort.set()
    out = io.StringIO()
    assert countdown(10, 5.0, abort, out) is False
    assert out.getvalue() == (
        "Commencing countdown.  Press return to abort.\n10\nLaunch aborted!\n"
    )


def test_countdown_from_zero_launches_at_once():
    out = io.StringIO()
    assert countdown(0, 0, None, out) is True
    assert out.getvalue().splitlines() == ["Commencing countdown.", "Lift off!"]