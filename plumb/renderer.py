"""SVG renderer using drawsvg."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

import drawsvg as draw

from .geometry import Box
from .layout import LayoutConfig, LayoutResult, layout_graph
from .models import NodeData
from .selector import RoutingPass

if TYPE_CHECKING:
    from .arrows import RouteOptions
    from .layout import Cluster
    from .models import EdgeData, GraphData
    from .presentation import EdgeGeometry

logger = logging.getLogger(__name__)


class Theme:
    """Color theme for diagrams."""

    def __init__(
        self,
        background: str = "#ffffff",
        node_fill: str = "#f8fafc",
        node_stroke: str = "#cbd5e1",
        cluster_fill: str = "#f1f5f9",
        cluster_stroke: str = "#94a3b8",
        text_color: str = "#1e293b",
        text_secondary: str = "#64748b",
        edge_color: str = "#d1d5db",
        edge_width: float = 4,
        edge_opacity: float = 0.5,
        label_fill: str = "white",
        label_opacity: float = 0.8,
        label_color: str = "#4b5563",
        font_family: str = "Inter, -apple-system, BlinkMacSystemFont, sans-serif",
    ):
        self.background = background
        self.node_fill = node_fill
        self.node_stroke = node_stroke
        self.cluster_fill = cluster_fill
        self.cluster_stroke = cluster_stroke
        self.text_color = text_color
        self.text_secondary = text_secondary
        self.edge_color = edge_color
        self.edge_width = edge_width
        self.edge_opacity = edge_opacity
        self.label_fill = label_fill
        self.label_opacity = label_opacity
        self.label_color = label_color
        self.font_family = font_family


DEFAULT_THEME = Theme()

# Draws one node into its box; returns the elements to append
NodeRenderer = Callable[[NodeData, Box, Theme], list]

# Subgraph style -> stroke dash pattern
_CLUSTER_DASHES = {
    "dashed": "6,4",
    "dotted": "2,3",
}

# Edge label background
LABEL_WIDTH = 40
LABEL_HEIGHT = 20


def truncate_text(text: str, max_chars: int) -> str:
    """Truncate text to max characters with ellipsis."""
    if len(text) <= max_chars:
        return text
    return text[: max_chars - 1] + "…"  # Unicode ellipsis


def default_node_renderer(node: NodeData, box: Box, theme: Theme) -> list:
    """Rounded box with the node label centred in it."""
    center = box.center
    return [
        draw.Rectangle(
            box.left, box.top, box.width, box.height,
            fill=theme.node_fill,
            stroke=theme.node_stroke,
            stroke_width=1.5,
            rx=6, ry=6,
        ),
        draw.Text(
            node.display_label,
            13,
            center.x, center.y,
            fill=theme.text_color,
            font_family=theme.font_family,
            font_weight="500",
            text_anchor="middle",
            dominant_baseline="middle",
        ),
    ]


class DiagramRenderer:
    """Renders graphs to SVG."""

    def __init__(
        self,
        theme: Theme | None = None,
        config: LayoutConfig | None = None,
        node_renderer: NodeRenderer | None = None,
    ):
        self.theme = theme or DEFAULT_THEME
        self.config = config or LayoutConfig()
        self.node_renderer = node_renderer or default_node_renderer

    def render(
        self,
        graph: GraphData,
        layout: LayoutResult | None = None,
        options: RouteOptions | None = None,
    ) -> draw.Drawing:
        """Render a graph to an SVG Drawing object.

        Args:
            graph: The graph to draw
            layout: Node boxes to draw with; computed with layout_graph when omitted
            options: Arrow options shared by every edge

        Returns:
            The drawing, with edges on top of nodes
        """
        if layout is None:
            layout = layout_graph(graph, self.config)

        width, height = layout.width, layout.height
        d = draw.Drawing(width, height)

        d.append(
            draw.Rectangle(
                0, 0, width, height,
                fill=self.theme.background,
            )
        )

        # Outer clusters first so inner ones paint over them
        for cluster in layout.clusters:
            self._render_cluster(d, cluster)

        for node in graph.all_nodes():
            box = layout.measure(node.id)
            if box is None:
                logger.warning("Node %s has no box, not drawn", node.id)
                continue
            for element in self.node_renderer(node, box, self.theme):
                d.append(element)

        routing = RoutingPass.from_measurer(layout.measure, graph.node_ids(), options)
        routed = routing.route_edges(graph.edges)

        # Render edges on top (so arrowheads are visible)
        for edge in graph.edges:
            geometry = routed.get(edge.id)
            if geometry is not None:
                self._render_edge(d, edge, geometry)

        return d

    def _render_cluster(self, d: draw.Drawing, cluster: Cluster) -> None:
        """Render a subgraph container and its title."""
        box = cluster.box
        style = cluster.graph.style or ""

        extra = {}
        dash = _CLUSTER_DASHES.get(style)
        if dash:
            extra["stroke_dasharray"] = dash

        d.append(
            draw.Rectangle(
                box.left, box.top, box.width, box.height,
                fill=self.theme.cluster_fill,
                fill_opacity=0.6,
                stroke=self.theme.cluster_stroke,
                stroke_width=1,
                rx=8, ry=8,
                **extra,
            )
        )

        if cluster.graph.label:
            d.append(
                draw.Text(
                    truncate_text(cluster.graph.label, 40),
                    12,
                    box.left + 10, box.top + self.config.cluster_header / 2 + 4,
                    fill=self.theme.text_secondary,
                    font_family=self.theme.font_family,
                    font_weight="600",
                    dominant_baseline="middle",
                )
            )

    def _render_edge(self, d: draw.Drawing, edge: EdgeData, geometry: EdgeGeometry) -> None:
        """Render one routed edge: curve, arrowhead and optional label."""
        group = draw.Group(id=f"edge-{edge.id}")

        group.append(
            draw.Path(
                d=geometry.svg_path(),
                stroke=self.theme.edge_color,
                stroke_width=self.theme.edge_width,
                stroke_opacity=self.theme.edge_opacity,
                fill="none",
            )
        )

        group.append(
            draw.Lines(
                -8, -6,
                0, 0,
                -8, 6,
                close=True,
                fill=self.theme.edge_color,
                fill_opacity=self.theme.edge_opacity,
                transform=geometry.arrow_transform(),
            )
        )

        if edge.label:
            lx, ly = geometry.label
            group.append(
                draw.Rectangle(
                    lx - LABEL_WIDTH / 2,
                    ly - LABEL_HEIGHT / 2,
                    LABEL_WIDTH,
                    LABEL_HEIGHT,
                    fill=self.theme.label_fill,
                    fill_opacity=self.theme.label_opacity,
                    rx=5, ry=5,
                )
            )
            group.append(
                draw.Text(
                    edge.label,
                    12,
                    lx, ly,
                    fill=self.theme.label_color,
                    font_family=self.theme.font_family,
                    text_anchor="middle",
                    dominant_baseline="middle",
                )
            )

        d.append(group)


def render_to_svg(
    graph: GraphData,
    filename: str | None = None,
    theme: Theme | None = None,
    options: RouteOptions | None = None,
) -> str:
    """Render a graph to SVG.

    Args:
        graph: The graph to render
        filename: Optional filename to save to (without extension)
        theme: Colors to draw with
        options: Arrow options shared by every edge

    Returns:
        SVG content as string
    """
    renderer = DiagramRenderer(theme=theme)
    drawing = renderer.render(graph, options=options)

    if filename:
        drawing.save_svg(f"{filename}.svg")

    return drawing.as_svg()
