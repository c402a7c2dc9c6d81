"""Quadtree index over node boxes and segment-vs-box tests."""

from __future__ import annotations

from collections.abc import Hashable, Iterable

from .geometry import Box, Point, Size
from .intersection import segment_rect_intersection_points


class QuadTree:
    """Region quadtree keyed by box bounds.

    A box that spans several quadrants is stored in each of them, so
    ``query`` returns a set.
    """

    def __init__(self, bounds: Box, max_depth: int = 6, max_items: int = 8, depth: int = 0):
        self.bounds = bounds
        self.max_depth = max_depth
        self.max_items = max_items
        self.depth = depth
        self.items: list[tuple[Hashable, Box]] = []
        self.children: list[QuadTree] | None = None
        self._count = 0

    @classmethod
    def build(cls, boxes: Iterable[tuple[Hashable, Box]], **kwargs) -> QuadTree:
        """Create a tree sized to hold every box and insert them all."""
        boxes = list(boxes)
        tree = cls(bounding_box(box for _, box in boxes), **kwargs)
        for key, box in boxes:
            tree.insert(key, box)
        return tree

    def __len__(self) -> int:
        return self._count

    def insert(self, key: Hashable, box: Box) -> None:
        """Add a box. Boxes outside the tree bounds are ignored."""
        if not self.bounds.intersects(box):
            return
        self._count += 1
        self._insert(key, box)

    def _insert(self, key: Hashable, box: Box) -> None:
        if not self.bounds.intersects(box):
            return

        if self.children:
            for child in self.children:
                child._insert(key, box)
            return

        self.items.append((key, box))
        if len(self.items) > self.max_items and self.depth < self.max_depth:
            self._subdivide()

    def _subdivide(self) -> None:
        x, y = self.bounds.left, self.bounds.top
        w = self.bounds.width / 2
        h = self.bounds.height / 2
        half = Size(w, h)

        self.children = [
            QuadTree(Box(Point(x, y), half), self.max_depth, self.max_items, self.depth + 1),
            QuadTree(Box(Point(x + w, y), half), self.max_depth, self.max_items, self.depth + 1),
            QuadTree(Box(Point(x, y + h), half), self.max_depth, self.max_items, self.depth + 1),
            QuadTree(Box(Point(x + w, y + h), half), self.max_depth, self.max_items, self.depth + 1),
        ]

        for key, box in self.items:
            for child in self.children:
                child._insert(key, box)
        self.items = []

    def query(self, area: Box) -> set[Hashable]:
        """Keys of every stored box intersecting ``area`` (edges inclusive)."""
        found: set[Hashable] = set()
        self._query(area, found)
        return found

    def _query(self, area: Box, found: set[Hashable]) -> None:
        if not self.bounds.intersects(area):
            return

        for key, box in self.items:
            if box.intersects(area):
                found.add(key)

        if self.children:
            for child in self.children:
                child._query(area, found)


def bounding_box(boxes: Iterable[Box]) -> Box:
    """Smallest box containing all ``boxes``; a unit box at the origin if empty."""
    boxes = list(boxes)
    if not boxes:
        return Box(Point(0, 0), Size(1, 1))

    min_x = min(b.left for b in boxes)
    min_y = min(b.top for b in boxes)
    max_x = max(b.right for b in boxes)
    max_y = max(b.bottom for b in boxes)

    return Box(Point(min_x, min_y), Size(max_x - min_x, max_y - min_y))


def segment_bounds(p0: Point, p1: Point) -> Box:
    """Axis-aligned bounds of a segment."""
    x = min(p0.x, p1.x)
    y = min(p0.y, p1.y)
    return Box(Point(x, y), Size(abs(p1.x - p0.x), abs(p1.y - p0.y)))


def segment_intersects_box(p0: Point, p1: Point, box: Box) -> bool:
    """Whether the segment ``p0``-``p1`` touches the inside or the sides of ``box``."""
    if box.contains(p0) or box.contains(p1):
        return True

    return bool(segment_rect_intersection_points(p0, p1, box))
