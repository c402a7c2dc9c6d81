"""Turn solver output into something a renderer can draw."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .arrows import RouteResult
from .geometry import Point, midpoint

# Distance between the curve midpoint and the label anchor
LABEL_OFFSET = 20.0


@dataclass(frozen=True)
class EdgeGeometry:
    """Quadratic Bezier for one edge plus its arrowhead and label placement."""

    route: RouteResult
    label: Point
    offset: float = LABEL_OFFSET

    @classmethod
    def from_route(cls, result: RouteResult, offset: float = LABEL_OFFSET) -> EdgeGeometry:
        return cls(route=result, label=label_anchor(result, offset), offset=offset)

    @property
    def start(self) -> Point:
        return self.route.start

    @property
    def control(self) -> Point:
        return self.route.control

    @property
    def end(self) -> Point:
        return self.route.end

    @property
    def arrow_rotation(self) -> float:
        """Arrowhead rotation at ``end``, in degrees."""
        return math.degrees(self.route.end_angle)

    def point_at(self, t: float) -> Point:
        return bezier_point(self.route, t)

    def tangent_at(self, t: float) -> Point:
        return bezier_tangent(self.route, t)

    def svg_path(self) -> str:
        s, c, e = self.start, self.control, self.end
        return f"M{s.x},{s.y} Q{c.x},{c.y} {e.x},{e.y}"

    def arrow_transform(self) -> str:
        return f"translate({self.end.x}, {self.end.y}) rotate({self.arrow_rotation})"

    def as_dict(self) -> dict:
        """Plain-data form for serialisation."""
        return {
            "type": "quadratic",
            "start": [self.start.x, self.start.y],
            "control": [self.control.x, self.control.y],
            "end": [self.end.x, self.end.y],
            "arrow": {
                "x": self.end.x,
                "y": self.end.y,
                "rotation": self.arrow_rotation,
            },
            "label": [self.label.x, self.label.y],
        }


def bezier_point(result: RouteResult, t: float) -> Point:
    """Point on the quadratic curve at parameter ``t``."""
    s, c, e = result.start, result.control, result.end
    mt = 1 - t
    return Point(
        mt * mt * s.x + 2 * mt * t * c.x + t * t * e.x,
        mt * mt * s.y + 2 * mt * t * c.y + t * t * e.y,
    )


def bezier_tangent(result: RouteResult, t: float) -> Point:
    """Derivative of the quadratic curve at parameter ``t``."""
    s, c, e = result.start, result.control, result.end
    mt = 1 - t
    return Point(
        2 * (mt * (c.x - s.x) + t * (e.x - c.x)),
        2 * (mt * (c.y - s.y) + t * (e.y - c.y)),
    )


def control_side(result: RouteResult) -> float:
    """Cross product telling which side of the chord the control point is on."""
    s, c, e = result.start, result.control, result.end
    centre = midpoint(s, e)
    return (c.x - centre.x) * (e.y - s.y) - (c.y - centre.y) * (e.x - s.x)


def label_anchor(result: RouteResult, offset: float = LABEL_OFFSET) -> Point:
    """Label position: the curve midpoint pushed ``offset`` along the curve normal.

    The normal is flipped so the label follows the side the control point
    sits on. A degenerate curve puts the label straight above its midpoint.
    """
    mid = bezier_point(result, 0.5)
    tangent = bezier_tangent(result, 0.5)

    length = math.hypot(tangent.x, tangent.y)
    if length == 0:
        return Point(mid.x, mid.y - offset)

    nx = -tangent.y / length
    ny = tangent.x / length
    if control_side(result) <= 0:
        nx, ny = -nx, -ny

    return Point(mid.x + nx * offset, mid.y + ny * offset)
