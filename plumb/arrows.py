"""Box-to-box arrow solver.

Given two rectangles, computes a quadratic curve that leaves the first
box's boundary, bows to one side of the chord between the box centres and
lands on the second box's boundary, together with the angles needed to
draw an arrowhead.

Example usage:
    from plumb import Box, route

    result = route(Box.from_xywh(0, 0, 100, 50), Box.from_xywh(300, 0, 100, 50))
    path = f"M{result.start.x},{result.start.y} Q{result.control.x},{result.control.y} ..."
"""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass

from .errors import RouteConfigError
from .geometry import (
    PI2,
    Box,
    Point,
    angle,
    delta,
    distance,
    intermediate,
    lerp_point,
    midpoint,
    modulate,
    normalize_angle,
    rotate_point,
    sector,
)
from .intersection import (
    closest_line_between_rounded_rects,
    ray_vs_rounded_rect,
    rects_collide,
    segment_of_rect_hit_by_ray,
)

MIN_ANGLE = math.pi / 24


@dataclass(frozen=True)
class RouteOptions:
    """Tuning knobs for the arrow solver."""

    # Base curvature added on top of the distance-derived curvature
    bow: float = 0.0
    # How much extra curvature short gaps get, fading out between
    # stretch_min and stretch_max
    stretch: float = 0.25
    stretch_min: float = 50.0
    stretch_max: float = 800.0
    # Inflate each box before the intersection math
    pad_start: float = 0.0
    pad_end: float = 0.0
    # Bow towards the other side of the chord
    flip: bool = False
    # Draw a straight segment for axis-aligned or diagonal, non-colliding boxes
    allow_straight: bool = False

    @classmethod
    def with_flip(cls, flip: bool) -> RouteOptions:
        """Default options with ``flip`` set."""
        return cls(flip=flip)

    def replace(self, **changes) -> RouteOptions:
        return dataclasses.replace(self, **changes)

    def validate(self) -> None:
        """Raise RouteConfigError for values the solver cannot handle."""
        for name in ("bow", "stretch", "stretch_min", "stretch_max", "pad_start", "pad_end"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise RouteConfigError(f"{name} must be finite, got {value!r}")
        # Padding is also the corner radius, so it cannot shrink a box
        for name in ("pad_start", "pad_end"):
            value = getattr(self, name)
            if value < 0:
                raise RouteConfigError(f"{name} must not be negative, got {value!r}")
        if self.stretch_min > self.stretch_max:
            raise RouteConfigError(
                f"stretch_min ({self.stretch_min}) must not exceed stretch_max ({self.stretch_max})"
            )


@dataclass(frozen=True)
class RouteResult:
    """A quadratic curve from ``start`` through ``control`` to ``end``.

    ``end_angle`` orients an arrowhead at ``end``; ``chord_angle`` is the
    direction between the box centres, normalized to ``[0, 2π)``.
    """

    start: Point
    control: Point
    end: Point
    end_angle: float
    start_angle: float
    chord_angle: float


def _check_box(box: Box, name: str) -> None:
    values = (box.position.x, box.position.y, box.size.x, box.size.y)
    if not all(math.isfinite(v) for v in values):
        raise RouteConfigError(f"{name} box has non-finite geometry: {box}")
    if box.size.x < 0 or box.size.y < 0:
        raise RouteConfigError(f"{name} box has a negative size: {box.size}")


def _cast(center: Point, theta: float, rect: Box, radius: float) -> tuple[Point, Point]:
    """Boundary hit of a ray from ``center`` and the midpoint of the side it exits through."""
    direction = delta(theta % PI2)
    hits = ray_vs_rounded_rect(center, direction, rect, radius)
    hit = hits[0] if hits else center

    sides = segment_of_rect_hit_by_ray(rect, center, direction)
    side_mid = midpoint(*sides[0]) if sides else hit

    return hit, side_mid


def route(start: Box, end: Box, options: RouteOptions | None = None) -> RouteResult:
    """Compute the curve for an arrow from ``start`` to ``end``.

    Args:
        start: Box the arrow leaves from
        end: Box the arrow points at
        options: Solver options; defaults to ``RouteOptions()``

    Returns:
        RouteResult with start, control and end points and the angles

    Raises:
        RouteConfigError: For negative sizes, non-finite geometry or
            inconsistent options
    """
    if options is None:
        options = RouteOptions()
    options.validate()
    _check_box(start, "start")
    _check_box(end, "end")

    pad0 = options.pad_start
    pad1 = options.pad_end
    box0 = start.padded(pad0)
    box1 = end.padded(pad1)
    c0 = start.center
    c1 = end.center

    chord_angle = normalize_angle(angle(c0, c1))
    dist = distance(c0, c1)

    # Shared centre: a short vertical stub between the two top edges
    if dist == 0:
        s = Point(c0.x, box0.top)
        e = Point(c1.x, box1.top)
        a = angle(s, e)
        return RouteResult(s, midpoint(s, e), e, a, a, chord_angle=a)

    rot = (-1 if sector(chord_angle, 8) % 2 == 0 else 1) * (-1 if options.flip else 1)

    card = intermediate(chord_angle)
    if 0.85 < card < 1:
        card = 0.99

    colliding = rects_collide(box0, box1)
    b0, b1 = closest_line_between_rounded_rects(box0, pad0, box1, pad1)
    gap = distance(b0, b1)

    if not colliding and options.allow_straight and math.fmod(card, 0.5) == 0:
        return RouteResult(
            b0, midpoint(b0, b1), b1,
            end_angle=chord_angle,
            start_angle=chord_angle - math.pi,
            chord_angle=chord_angle,
        )

    overlap_effect = modulate(gap, (0, dist), (0, 1), clamp=True) if colliding else 0.0
    dist_effect = 1 - gap / dist
    stretch_effect = modulate(gap, (options.stretch_min, options.stretch_max), (1, 0), clamp=True)

    arc = options.bow + stretch_effect * options.stretch

    angle_offset = modulate(card * card, (0, 1), (math.pi / 8, 0), clamp=True)
    if colliding:
        dist_offset = math.pi / 2 * card
    else:
        dist_offset = modulate(dist_effect, (0.75, 1), (0, math.pi / 2), clamp=True) * card

    combined_offset = dist_offset + angle_offset * (1 - overlap_effect if colliding else 1)

    # Start point
    if overlap_effect >= 0.5:
        angle0 = chord_angle + math.pi * rot
    else:
        angle0 = chord_angle + max(MIN_ANGLE, combined_offset) * rot

    hit0, side_mid0 = _cast(c0, angle0, box0, pad0)
    start_point = lerp_point(hit0, side_mid0, max(overlap_effect, 0.15) if colliding else 0.15)

    arc *= 1 + (min(max(dist_effect, -2), 2) * card - overlap_effect) / 2
    if colliding:
        arc = min(arc, -0.5) if arc < 0 else max(arc, 0.5)

    # End point
    if overlap_effect >= 0.5:
        direction = delta(angle(c0, side_mid0))
        hits = ray_vs_rounded_rect(c1, direction, box1, pad1)
        end_point = hits[0] if hits else c1
    else:
        dist_offset1 = modulate(dist_effect, (0.75, 1), (0, 1), clamp=True)
        overlap_offset1 = (
            modulate(overlap_effect, (0, 1), (0, math.pi / 8), clamp=True) if colliding else 0.0
        )
        card_offset1 = modulate(card * dist_offset1, (0, 1), (0, math.pi / 16), clamp=True)
        combined_offset1 = (
            dist_effect * (math.pi / 12)
            + (card_offset1 + overlap_offset1)
            + (dist_offset + angle_offset) / 2
        )
        angle1 = chord_angle + math.pi - max(combined_offset1, MIN_ANGLE) * rot

        hit1, side_mid1 = _cast(c1, angle1, box1, pad1)
        end_point = lerp_point(hit1, side_mid1, 0.25 + overlap_effect * 0.25)

    # Control point: swing a point on the chord a quarter turn around its middle
    m = midpoint(start_point, end_point)
    ti = lerp_point(start_point, end_point, min(max(0.5 + arc, -1), 1))
    candidate_a = rotate_point(ti, m, math.pi / 2 * rot)
    candidate_b = rotate_point(ti, m, math.pi / 2 * -rot)

    if colliding and distance(candidate_a, c1) < distance(candidate_b, c1):
        control = candidate_b
    else:
        control = candidate_a

    return RouteResult(
        start=start_point,
        control=control,
        end=end_point,
        end_angle=angle(control, end_point),
        start_angle=angle(control, start_point),
        chord_angle=chord_angle,
    )
