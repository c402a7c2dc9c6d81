"""Points, boxes and the small angle helpers the arrow solver is built on."""

from __future__ import annotations

import math
from dataclasses import dataclass

PI2 = math.pi * 2


@dataclass(frozen=True)
class Point:
    """A 2-D coordinate, also used for direction vectors."""

    x: float
    y: float

    def __iter__(self):
        yield self.x
        yield self.y


@dataclass(frozen=True)
class Size:
    """Width/height pair."""

    x: float
    y: float


@dataclass(frozen=True)
class Box:
    """An axis-aligned rectangle given by its top-left corner and size."""

    position: Point
    size: Size

    @classmethod
    def from_xywh(cls, x: float, y: float, width: float, height: float) -> Box:
        return cls(Point(x, y), Size(width, height))

    @property
    def left(self) -> float:
        return self.position.x

    @property
    def top(self) -> float:
        return self.position.y

    @property
    def width(self) -> float:
        return self.size.x

    @property
    def height(self) -> float:
        return self.size.y

    @property
    def right(self) -> float:
        return self.position.x + self.size.x

    @property
    def bottom(self) -> float:
        return self.position.y + self.size.y

    @property
    def center(self) -> Point:
        return Point(self.position.x + self.size.x / 2, self.position.y + self.size.y / 2)

    def padded(self, pad: float) -> Box:
        """Inflate the box by ``pad`` on every side."""
        return Box(
            Point(self.position.x - pad, self.position.y - pad),
            Size(self.size.x + pad * 2, self.size.y + pad * 2),
        )

    def contains(self, point: Point) -> bool:
        """Inclusive point-in-box test."""
        return self.left <= point.x <= self.right and self.top <= point.y <= self.bottom

    def intersects(self, other: Box) -> bool:
        """Inclusive overlap test (touching boxes intersect)."""
        return not (
            other.left > self.right
            or other.right < self.left
            or other.top > self.bottom
            or other.bottom < self.top
        )


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b.x - a.x, b.y - a.y)


def angle(a: Point, b: Point) -> float:
    """Angle (radians) of the vector from ``a`` to ``b``."""
    return math.atan2(b.y - a.y, b.x - a.x)


def lerp_point(a: Point, b: Point, t: float) -> Point:
    """Point at normalized position ``t`` along ``a``->``b``. ``t`` is not clamped."""
    return Point(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)


def midpoint(a: Point, b: Point) -> Point:
    return lerp_point(a, b, 0.5)


def delta(theta: float) -> Point:
    """Unit direction vector for an angle."""
    return Point(math.cos(theta), math.sin(theta))


def normalize_angle(radians: float) -> float:
    """Map any angle into ``[0, 2π)``."""
    return radians - PI2 * math.floor(radians / PI2)


def sector(theta: float, n: int) -> int:
    """Index of the sector ``theta`` falls in when the circle is cut into ``n`` parts.

    The remainder follows the sign of the dividend (C ``fmod``), so callers
    should pass normalized angles.
    """
    return math.floor(n * (0.5 + math.fmod(theta / PI2, n)))


def intermediate(theta: float) -> float:
    """How far ``theta`` is from a 45 degree diagonal, in ``[0, 1]``.

    Axis-aligned angles give 1, exact diagonals give 0.
    """
    quarter = math.pi / 4
    inner = abs(math.fmod(theta, math.pi / 2)) - quarter
    return abs(inner) / quarter


def modulate(
    value: float,
    range_a: tuple[float, float],
    range_b: tuple[float, float],
    clamp: bool = False,
) -> float:
    """Remap ``value`` from ``range_a`` onto ``range_b``.

    Args:
        value: Value to remap
        range_a: Source range as (low, high)
        range_b: Target range as (low, high); may be decreasing
        clamp: Keep the result inside ``range_b``

    Returns:
        The remapped value. A zero-width source range acts as a step:
        ``range_b[1]`` at or above the range, ``range_b[0]`` below it.
    """
    from_low, from_high = range_a
    to_low, to_high = range_b

    if from_high == from_low:
        return to_high if value >= from_high else to_low

    result = to_low + ((value - from_low) / (from_high - from_low)) * (to_high - to_low)

    if clamp:
        if to_low < to_high:
            return min(max(result, to_low), to_high)
        return min(max(result, to_high), to_low)

    return result


def rotate_point(point: Point, center: Point, theta: float) -> Point:
    """Rotate ``point`` around ``center`` by ``theta`` radians."""
    s = math.sin(theta)
    c = math.cos(theta)

    px = point.x - center.x
    py = point.y - center.y

    return Point(px * c - py * s + center.x, px * s + py * c + center.y)
