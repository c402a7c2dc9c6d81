"""Ray, segment and circle intersections against (rounded) rectangles."""

from __future__ import annotations

import math

from .geometry import Box, Point, angle, normalize_angle

Segment = tuple[Point, Point]

# Quarter spans of the corner arcs, in the order top-left, top-right,
# bottom-right, bottom-left.
_CORNER_SPANS = (
    (math.pi, math.pi * 1.5),
    (math.pi * 1.5, math.pi * 2),
    (0.0, math.pi * 0.5),
    (math.pi * 0.5, math.pi),
)


def rect_segments(rect: Box) -> list[Segment]:
    """The four sides of a rectangle: top, right, bottom, left."""
    x, y, w, h = rect.left, rect.top, rect.width, rect.height
    return [
        (Point(x, y), Point(x + w, y)),
        (Point(x + w, y), Point(x + w, y + h)),
        (Point(x + w, y + h), Point(x, y + h)),
        (Point(x, y + h), Point(x, y)),
    ]


def ray_segment_intersection(
    origin: Point,
    direction: Point,
    p0: Point,
    p1: Point,
) -> Point | None:
    """Point where a ray crosses the segment ``p0``-``p1``, if it does.

    Args:
        origin: Ray origin
        direction: Ray direction (need not be unit length)
        p0: Segment start
        p1: Segment end

    Returns:
        The hit point, or None for parallel rays and misses
    """
    dx, dy = direction.x, direction.y
    sx = p1.x - p0.x
    sy = p1.y - p0.y

    d = dx * sy - dy * sx
    if d == 0:
        return None

    r = ((origin.y - p0.y) * sx - (origin.x - p0.x) * sy) / d
    s = ((origin.y - p0.y) * dx - (origin.x - p0.x) * dy) / d

    if r >= 0 and 0 <= s <= 1:
        return Point(origin.x + r * dx, origin.y + r * dy)
    return None


def segment_segment_intersection(a0: Point, a1: Point, b0: Point, b1: Point) -> Point | None:
    """Crossing point of two segments; parallel and colinear segments give None."""
    denom = (b1.y - b0.y) * (a1.x - a0.x) - (b1.x - b0.x) * (a1.y - a0.y)
    if denom == 0:
        return None

    ua = ((b1.x - b0.x) * (a0.y - b0.y) - (b1.y - b0.y) * (a0.x - b0.x)) / denom
    ub = ((a1.x - a0.x) * (a0.y - b0.y) - (a1.y - a0.y) * (a0.x - b0.x)) / denom

    if 0 <= ua <= 1 and 0 <= ub <= 1:
        return Point(a0.x + ua * (a1.x - a0.x), a0.y + ua * (a1.y - a0.y))
    return None


def segment_rect_intersection_points(p0: Point, p1: Point, rect: Box) -> list[Point]:
    """All points where the segment ``p0``-``p1`` crosses the sides of ``rect``."""
    points = []
    for s0, s1 in rect_segments(rect):
        hit = segment_segment_intersection(s0, s1, p0, p1)
        if hit is not None:
            points.append(hit)
    return points


def ray_circle_intersections(
    center: Point,
    radius: float,
    origin: Point,
    direction: Point,
) -> list[Point]:
    """Forward intersections of a ray with a circle.

    Solves ``|origin + t*direction - center| = radius`` for ``t >= 0``.
    A tangent ray yields a single point.
    """
    a = direction.x * direction.x + direction.y * direction.y
    if a == 0:
        return []

    ox = origin.x - center.x
    oy = origin.y - center.y
    b = 2 * direction.x * ox + 2 * direction.y * oy
    c = ox * ox + oy * oy - radius * radius
    disc = b * b - 4 * a * c

    if disc < 0:
        return []

    if disc == 0:
        roots = [-b / (2 * a)]
    else:
        root = math.sqrt(disc)
        roots = [(-b + root) / (2 * a), (-b - root) / (2 * a)]

    return [
        Point(origin.x + direction.x * t, origin.y + direction.y * t)
        for t in roots
        if t >= 0
    ]


def ray_vs_rounded_rect(origin: Point, direction: Point, rect: Box, r: float) -> list[Point]:
    """Every point where a ray meets the boundary of a rounded rectangle.

    The boundary is four straight sides shortened by the corner radius ``r``
    and four quarter-circle corners. ``r`` may be zero.

    Args:
        origin: Ray origin
        direction: Ray direction
        rect: The rectangle
        r: Corner radius

    Returns:
        Hit points, corner hits before side hits for each of the
        left/top-left, top/top-right, right/bottom-right, bottom/bottom-left
        pairs.
    """
    x, y = rect.left, rect.top
    mx, my = rect.right, rect.bottom
    rx, ry = x + r, y + r
    mrx, mry = mx - r, my - r

    sides = (
        (Point(x, mry), Point(x, ry)),
        (Point(rx, y), Point(mrx, y)),
        (Point(mx, ry), Point(mx, mry)),
        (Point(mrx, my), Point(rx, my)),
    )
    corners = (Point(rx, ry), Point(mrx, ry), Point(mrx, mry), Point(rx, mry))

    points: list[Point] = []

    for (p0, p1), corner, (start, end) in zip(sides, corners, _CORNER_SPANS):
        for hit in ray_circle_intersections(corner, r, origin, direction):
            hit_angle = normalize_angle(angle(corner, hit))
            if start < hit_angle < end:
                points.append(hit)

        hit = ray_segment_intersection(origin, direction, p0, p1)
        if hit is not None:
            points.append(hit)

    return points


def segment_of_rect_hit_by_ray(rect: Box, origin: Point, direction: Point) -> list[Segment]:
    """Sides of ``rect`` (top, right, bottom, left order) that the ray crosses."""
    return [
        (p0, p1)
        for p0, p1 in rect_segments(rect)
        if ray_segment_intersection(origin, direction, p0, p1) is not None
    ]


def rects_collide(a: Box, b: Box) -> bool:
    """Strict AABB overlap; boxes that only touch do not collide."""
    return not (
        a.left >= b.right
        or b.left >= a.right
        or a.top >= b.bottom
        or b.top >= a.bottom
    )


def closest_line_between_rounded_rects(a: Box, ra: float, b: Box, rb: float) -> tuple[Point, Point]:
    """Boundary points on the line joining the centres of two rounded rectangles.

    Each point is the first hit of a ray fired from one centre towards the
    other against its own boundary. Their distance approximates the clear
    gap between the shapes. A box with no boundary hit (zero size)
    contributes its centre.
    """
    ca = a.center
    cb = b.center

    hits_a = ray_vs_rounded_rect(ca, Point(cb.x - ca.x, cb.y - ca.y), a, ra)
    hits_b = ray_vs_rounded_rect(cb, Point(ca.x - cb.x, ca.y - cb.y), b, rb)

    return (hits_a[0] if hits_a else ca, hits_b[0] if hits_b else cb)
