"""Celsius and Fahrenheit temperatures, and a temperature command-line option."""

from __future__ import annotations

import argparse
import re

from .eval import _format_float


class Celsius(float):
    """A temperature in degrees Celsius."""

    def __str__(self) -> str:
        return f"{_format_float(self)}°C"


class Fahrenheit(float):
    """A temperature in degrees Fahrenheit."""


def c_to_f(c: float) -> Fahrenheit:
    """Convert a Celsius temperature to Fahrenheit."""
    return Fahrenheit(c * 9.0 / 5.0 + 32.0)


def f_to_c(f: float) -> Celsius:
    """Convert a Fahrenheit temperature to Celsius."""
    return Celsius((f - 32.0) * 5.0 / 9.0)


_QUANTITY = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|(?i:inf|nan)))\s*(\S*)"
)


def _quote(text: str) -> str:
    parts = []
    for c in text:
        if c in ('"', "\\"):
            parts.append("\\" + c)
        elif c == "\n":
            parts.append("\\n")
        elif c == "\t":
            parts.append("\\t")
        elif c == "\r":
            parts.append("\\r")
        elif c.isprintable():
            parts.append(c)
        elif ord(c) < 0x80:
            parts.append(f"\\x{ord(c):02x}")
        elif ord(c) < 0x10000:
            parts.append(f"\\u{ord(c):04x}")
        else:
            parts.append(f"\\U{ord(c):08x}")
    return '"' + "".join(parts) + '"'


def parse_celsius(text: str) -> Celsius:
    """Parse a quantity with a unit, e.g. ``100C`` or ``212°F``, as Celsius.

    Raises ValueError if the text is not a valid temperature.
    """
    match = _QUANTITY.match(text)
    if match:
        value, unit = float(match.group(1)), match.group(2)
        if unit in ("C", "°C"):
            return Celsius(value)
        if unit in ("F", "°F"):
            return f_to_c(Fahrenheit(value))
    raise ValueError(f"invalid temperature {_quote(text)}")


def _celsius_option(text: str) -> Celsius:
    try:
        return parse_celsius(text)
    except ValueError as err:
        raise argparse.ArgumentTypeError(str(err)) from None


def main(argv: list[str] | None = None) -> int:
    """Print the value of the -temp option."""
    parser = argparse.ArgumentParser(
        prog="tempflag", description="Print the value of the temperature option."
    )
    parser.add_argument(
        "-temp",
        "--temp",
        type=_celsius_option,
        default=Celsius(20.0),
        help="the temperature",
    )
    args = parser.parse_args(argv)
    print(args.temp)
    return 0