"""Simple types for plane geometry, including a point with a color."""

from __future__ import annotations

import math
from dataclasses import dataclass
from itertools import pairwise


@dataclass
class Point:
    """A point in the plane."""

    x: float
    y: float

    def distance(self, q: Point) -> float:
        """Return the distance from this point to ``q``."""
        return math.hypot(q.x - self.x, q.y - self.y)

    def scale_by(self, factor: float) -> None:
        """Scale both coordinates by ``factor`` in place."""
        self.x *= factor
        self.y *= factor


def distance(p: Point, q: Point) -> float:
    """Return the distance between ``p`` and ``q``."""
    return math.hypot(q.x - p.x, q.y - p.y)


class Path(list):
    """A journey connecting points with straight lines."""

    def distance(self) -> float:
        """Return the distance travelled along the path."""
        return sum(a.distance(b) for a, b in pairwise(self))


@dataclass(frozen=True)
class RGBA:
    """An 8-bit-per-channel color with alpha."""

    r: int
    g: int
    b: int
    a: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name} must be in 0..255, got {value}")


@dataclass
class ColoredPoint:
    """A point with a color; attributes of the point are reachable directly."""

    point: Point
    color: RGBA

    def __getattr__(self, name: str):
        if name == "point":
            raise AttributeError(name)
        return getattr(self.point, name)