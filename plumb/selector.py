"""Collision-aware routing of every edge of a canvas.

A RoutingPass indexes the node boxes once, then for each edge solves the
arrow both ways (bowing to one side of the chord, then the other) and keeps
the route whose two-segment approximation crosses fewer other boxes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .arrows import RouteOptions, RouteResult, route
from .errors import MissingGeometryError
from .geometry import Box
from .presentation import LABEL_OFFSET, EdgeGeometry
from .spatial import QuadTree, segment_bounds, segment_intersects_box

if TYPE_CHECKING:
    from .models import EdgeData

logger = logging.getLogger(__name__)

# Looks up the box of a node id; None when the node has not been measured yet
Measurer = Callable[[str], Box | None]


@dataclass(frozen=True)
class Choice:
    """The route picked for one edge and how many boxes it crosses."""

    result: RouteResult
    flip: bool
    crossings: int


class RoutingPass:
    """Routes edges against one snapshot of the node boxes.

    The index is built once in the constructor and only read afterwards;
    create a new pass when the boxes change.
    """

    def __init__(
        self,
        boxes: Mapping[str, Box],
        options: RouteOptions | None = None,
        label_offset: float = LABEL_OFFSET,
    ):
        self.boxes = dict(boxes)
        self.options = options or RouteOptions()
        self.label_offset = label_offset
        self.index = QuadTree.build(self.boxes.items())

    @classmethod
    def from_measurer(
        cls,
        measurer: Measurer,
        node_ids: Iterable[str],
        options: RouteOptions | None = None,
        **kwargs,
    ) -> RoutingPass:
        """Build a pass from whatever ``measurer`` can currently measure."""
        boxes = {}
        for node_id in node_ids:
            box = measurer(node_id)
            if box is None:
                logger.debug("Node %s not measured yet", node_id)
                continue
            boxes[node_id] = box
        return cls(boxes, options, **kwargs)

    def box(self, node_id: str) -> Box:
        try:
            return self.boxes[node_id]
        except KeyError:
            raise MissingGeometryError(node_id) from None

    def count_crossings(self, result: RouteResult, exclude: Iterable[str] = ()) -> int:
        """Boxes crossed by ``start->control`` plus boxes crossed by ``control->end``."""
        skip = set(exclude)
        total = 0
        for p0, p1 in ((result.start, result.control), (result.control, result.end)):
            for key in self.index.query(segment_bounds(p0, p1)):
                if key in skip:
                    continue
                if segment_intersects_box(p0, p1, self.boxes[key]):
                    total += 1
        return total

    def choose(
        self,
        source_id: str,
        target_id: str,
        options: RouteOptions | None = None,
    ) -> Choice:
        """Solve with and without flip and keep the route crossing fewer boxes.

        Ties keep the unflipped route.

        Raises:
            MissingGeometryError: If either node has no box
        """
        start = self.box(source_id)
        end = self.box(target_id)
        options = options or self.options
        exclude = (source_id, target_id)

        best: Choice | None = None
        for flip in (False, True):
            result = route(start, end, options.replace(flip=flip))
            crossings = self.count_crossings(result, exclude)
            if best is None or crossings < best.crossings:
                best = Choice(result, flip, crossings)

        logger.debug(
            "%s -> %s: flip=%s crossing %d box(es)",
            source_id, target_id, best.flip, best.crossings,
        )
        return best

    def route_edge(self, edge: EdgeData, options: RouteOptions | None = None) -> EdgeGeometry:
        """Route one edge and map it to drawable geometry.

        Raises:
            MissingGeometryError: If either endpoint has no box
        """
        choice = self.choose(edge.source, edge.target, options)
        return EdgeGeometry.from_route(choice.result, self.label_offset)

    def route_edges(
        self,
        edges: Iterable[EdgeData],
        options: RouteOptions | None = None,
    ) -> dict[str, EdgeGeometry]:
        """Route a batch of edges, keyed by edge id.

        Edges whose nodes are not measured yet are logged and left out; the
        caller is expected to route again once geometry is available.
        """
        routed: dict[str, EdgeGeometry] = {}
        for edge in edges:
            try:
                routed[edge.id] = self.route_edge(edge, options)
            except MissingGeometryError as err:
                logger.warning("Skipping edge %s: %s", edge.id, err)
        return routed
