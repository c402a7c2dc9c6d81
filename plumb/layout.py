"""Reference layout for plumb graphs.

Stands in for the browser when a graph is rendered outside a UI: nodes are
ranked along the graph's rankdir and measured into boxes. The arrow solver
never calls this module; it only consumes the boxes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import networkx as nx

from .geometry import Box, Point, Size
from .spatial import bounding_box

if TYPE_CHECKING:
    from .models import GraphData, NodeData

logger = logging.getLogger(__name__)


@dataclass
class LayoutConfig:
    """Configuration for layout calculations."""

    node_height: float = 44
    min_node_width: float = 80
    node_padding: float = 14
    char_width_avg: float = 7.2  # Average character width for 12px sans-serif
    rank_spacing: float = 90  # Space between consecutive ranks
    node_spacing: float = 40  # Space between nodes of the same rank
    cluster_padding: float = 16
    cluster_header: float = 22  # Room for the subgraph label
    margin: float = 40


@dataclass
class Cluster:
    """A laid-out subgraph container."""

    graph: GraphData
    key: str  # Cluster path, e.g. "cluster_0-cluster_1"
    box: Box
    depth: int


@dataclass
class LayoutResult:
    """Boxes for every node and subgraph of a laid-out graph."""

    boxes: dict[str, Box] = field(default_factory=dict)
    ranks: dict[str, int] = field(default_factory=dict)
    clusters: list[Cluster] = field(default_factory=list)
    width: float = 0
    height: float = 0

    def measure(self, node_id: str) -> Box | None:
        """Measurer interface: the box of ``node_id``, if it was laid out."""
        return self.boxes.get(node_id)


def estimate_text_width(text: str, char_width: float) -> float:
    """Estimate width of text based on character count."""
    return len(text) * char_width


def calculate_node_size(node: NodeData, config: LayoutConfig) -> Size:
    """Size a node box from its label."""
    width = estimate_text_width(node.display_label, config.char_width_avg) + config.node_padding * 2
    return Size(max(config.min_node_width, width), config.node_height)


def _cluster_paths(graph: GraphData) -> tuple[dict[str, str], list[tuple[GraphData, str, int, list[str]]]]:
    """Map node ids to their innermost cluster path and list every cluster with its members."""
    node_cluster: dict[str, str] = {n.id: "" for n in graph.nodes}
    clusters: list[tuple[GraphData, str, int, list[str]]] = []

    def walk(sub: GraphData, prefix: str, depth: int) -> list[str]:
        key = f"{prefix}-{sub.id}" if prefix else sub.id
        members = []
        for n in sub.nodes:
            node_cluster[n.id] = key
            members.append(n.id)
        entry = (sub, key, depth, members)
        clusters.append(entry)
        for child in sub.subgraphs:
            members.extend(walk(child, key, depth + 1))
        return members

    for sub in graph.subgraphs:
        walk(sub, "", 0)

    return node_cluster, clusters


def assign_ranks(graph: GraphData) -> dict[str, int]:
    """Rank nodes by longest path from the sources of the edge digraph.

    Cycles are collapsed first, so every node of a strongly connected
    component shares one rank.
    """
    g = nx.DiGraph()
    g.add_nodes_from(graph.node_ids())
    for e in graph.edges:
        if e.source in g and e.target in g:
            g.add_edge(e.source, e.target)
        else:
            logger.debug("Edge %s references an unknown node, ignored for ranking", e.id)

    condensed = nx.condensation(g)
    mapping = condensed.graph["mapping"]

    component_rank: dict[int, int] = {}
    for rank, generation in enumerate(nx.topological_generations(condensed)):
        for component in generation:
            component_rank[component] = rank

    return {node_id: component_rank[mapping[node_id]] for node_id in g.nodes}


def layout_graph(graph: GraphData, config: LayoutConfig | None = None) -> LayoutResult:
    """Place every node of ``graph`` and compute subgraph containers.

    Ranks run along the graph's rankdir (top to bottom, left to right, or
    reversed); nodes inside a rank keep declaration order, grouped by
    cluster so subgraph members stay adjacent.
    """
    if config is None:
        config = LayoutConfig()

    nodes = list(graph.all_nodes())
    if not nodes:
        return LayoutResult(width=config.margin * 2, height=config.margin * 2)

    sizes = {n.id: calculate_node_size(n, config) for n in nodes}
    order = {n.id: i for i, n in enumerate(nodes)}
    node_cluster, clusters = _cluster_paths(graph)
    ranks = assign_ranks(graph)

    rank_count = max(ranks.values()) + 1
    by_rank: list[list[str]] = [[] for _ in range(rank_count)]
    for node_id in sorted(ranks, key=lambda n: (node_cluster[n], order[n])):
        by_rank[ranks[node_id]].append(node_id)

    direction = graph.direction
    if direction.reversed:
        by_rank.reverse()

    horizontal = direction.horizontal
    max_depth = max((depth for _, _, depth, _ in clusters), default=-1) + 1
    inset = config.margin + max_depth * (config.cluster_padding + config.cluster_header)

    # Extent of each rank along the rank axis and across it
    def along(size: Size) -> float:
        return size.x if horizontal else size.y

    def across(size: Size) -> float:
        return size.y if horizontal else size.x

    rank_depths = [max(along(sizes[n]) for n in ids) if ids else 0 for ids in by_rank]
    rank_spans = [
        sum(across(sizes[n]) for n in ids) + config.node_spacing * max(len(ids) - 1, 0)
        for ids in by_rank
    ]
    widest = max(rank_spans)

    boxes: dict[str, Box] = {}
    cursor = inset
    for ids, depth, span in zip(by_rank, rank_depths, rank_spans):
        offset = inset + (widest - span) / 2
        for node_id in ids:
            size = sizes[node_id]
            if horizontal:
                pos = Point(cursor + (depth - size.x) / 2, offset)
                offset += size.y + config.node_spacing
            else:
                pos = Point(offset, cursor + (depth - size.y) / 2)
                offset += size.x + config.node_spacing
            boxes[node_id] = Box(pos, size)
        cursor += depth + config.rank_spacing

    result = LayoutResult(boxes=boxes, ranks=ranks)

    # Innermost clusters first so parents can wrap their children
    for sub, key, depth, members in sorted(clusters, key=lambda c: -c[2]):
        inner = [boxes[m] for m in members if m in boxes]
        inner += [c.box for c in result.clusters if c.key.startswith(key + "-")]
        if not inner:
            continue
        bounds = bounding_box(inner)
        pad = config.cluster_padding
        box = Box(
            Point(bounds.left - pad, bounds.top - pad - config.cluster_header),
            Size(bounds.width + pad * 2, bounds.height + pad * 2 + config.cluster_header),
        )
        result.clusters.append(Cluster(graph=sub, key=key, box=box, depth=depth))

    result.clusters.sort(key=lambda c: c.depth)

    everything = bounding_box(list(boxes.values()) + [c.box for c in result.clusters])
    result.width = everything.right + config.margin
    result.height = everything.bottom + config.margin

    logger.debug(
        "Laid out %d nodes in %d ranks (%s), canvas %.0fx%.0f",
        len(boxes), rank_count, direction.value, result.width, result.height,
    )
    return result
