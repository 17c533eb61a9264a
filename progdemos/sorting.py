"""Sort a music playlist into several orders and print it as a table."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta
from fractions import Fraction

_UNIT_NS = {
    "ns": 1,
    "us": 1_000,
    "\u00b5s": 1_000,
    "\u03bcs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_PART = re.compile(r"(\d*)(?:\.(\d*))?([^\d.]*)")
_SECOND_NS = 1_000_000_000
_PADDING = 2


@dataclass
class Track:
    """One entry of a playlist."""

    title: str
    artist: str
    album: str
    year: int
    length: timedelta


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``3m38s`` or ``-1.5h``.

    Raises ValueError on malformed input. Sub-microsecond parts are rounded.
    """
    quoted = f'"{text}"'
    s = text
    negative = False
    if s and s[0] in "+-":
        negative = s[0] == "-"
        s = s[1:]
    if s == "0":
        return timedelta(0)
    if not s:
        raise ValueError(f"time: invalid duration {quoted}")
    limit = 2**63 if negative else 2**63 - 1
    total = Fraction(0)
    pos = 0
    while pos < len(s):
        match = _PART.match(s, pos)
        whole, frac, unit = match.groups()
        if not whole and not frac:
            raise ValueError(f"time: invalid duration {quoted}")
        if not unit:
            raise ValueError(f"time: missing unit in duration {quoted}")
        if unit not in _UNIT_NS:
            raise ValueError(f'time: unknown unit "{unit}" in duration {quoted}')
        value = Fraction(int(whole or "0"))
        if frac:
            value += Fraction(int(frac), 10 ** len(frac))
        total += value * _UNIT_NS[unit]
        if total > limit:
            raise ValueError(f"time: invalid duration {quoted}")
        pos = match.end()
    ns = int(total)
    if negative:
        ns = -ns
    return timedelta(microseconds=round(Fraction(ns, 1000)))


def _to_ns(d: timedelta) -> int:
    return ((d.days * 86400 + d.seconds) * 1_000_000 + d.microseconds) * 1000


def _with_fraction(whole: int, frac: int, digits: int) -> str:
    tail = f"{frac:0{digits}d}".rstrip("0")
    return f"{whole}.{tail}" if tail else str(whole)


def format_duration(d: timedelta) -> str:
    """Format a duration in the form ``72h3m0.5s``."""
    ns = _to_ns(d)
    sign = "-" if ns < 0 else ""
    u = abs(ns)
    if u < _SECOND_NS:
        if u == 0:
            return "0s"
        if u < 1_000:
            return f"{sign}{u}ns"
        if u < 1_000_000:
            return sign + _with_fraction(u // 1_000, u % 1_000, 3) + "\u00b5s"
        return sign + _with_fraction(u // 1_000_000, u % 1_000_000, 6) + "ms"
    seconds, frac = divmod(u, _SECOND_NS)
    text = _with_fraction(seconds % 60, frac, 9) + "s"
    minutes = seconds // 60
    if minutes:
        text = f"{minutes % 60}m" + text
        hours = minutes // 60
        if hours:
            text = f"{hours}h" + text
    return sign + text


def sample_tracks() -> list[Track]:
    """Return a fresh copy of the sample playlist."""
    return [
        Track("Go", "Delilah", "From the Roots Up", 2012, parse_duration("3m38s")),
        Track("Go", "Moby", "Moby", 1992, parse_duration("3m37s")),
        Track("Go Ahead", "Alicia Keys", "As I Am", 2007, parse_duration("4m36s")),
        Track("Ready 2 Go", "Martin Solveig", "Smash", 2011, parse_duration("4m24s")),
    ]


_HEADER = ("Title", "Artist", "Album", "Year", "Length")
_RULE = ("-----", "------", "-----", "----", "------")


def format_tracks(tracks: list[Track]) -> str:
    """Render tracks as an aligned table with a header."""
    rows = [
        _HEADER,
        _RULE,
        *(
            (t.title, t.artist, t.album, str(t.year), format_duration(t.length))
            for t in tracks
        ),
    ]
    widths = [max(len(cell) for cell in column) + _PADDING for column in zip(*rows)]
    return "".join(
        "".join(cell.ljust(width) for cell, width in zip(row, widths)) + "\n"
        for row in rows
    )


def by_artist(track: Track) -> str:
    """Sort key ordering tracks by artist."""
    return track.artist


def by_year(track: Track) -> int:
    """Sort key ordering tracks by year."""
    return track.year


def custom_key(track: Track) -> tuple[str, int, timedelta]:
    """Sort key ordering by title, then year, then length."""
    return track.title, track.year, track.length


def main(argv: list[str] | None = None) -> int:
    """Print the sample playlist in several orders."""
    tracks = sample_tracks()

    print("byArtist:")
    tracks.sort(key=by_artist)
    print(format_tracks(tracks), end="")

    print("\nReverse(byArtist):")
    tracks.sort(key=by_artist, reverse=True)
    print(format_tracks(tracks), end="")

    print("\nbyYear:")
    tracks.sort(key=by_year)
    print(format_tracks(tracks), end="")

    print("\nCustom:")
    tracks.sort(key=custom_key)
    print(format_tracks(tracks), end="")
    return 0