"""plumb - Box-to-box curved arrows for graph diagrams.

Example usage:
    from plumb import graph, node, subgraph

    with graph(label="Pipeline", rankdir="LR", filename="pipeline"):
        fetch = node("fetch", label="Fetch")
        with subgraph(label="Workers", style="dashed"):
            parse = node("parse", label="Parse")
            store = node("store", label="Store")

        fetch >> parse | "raw"
        parse >> store

Routing alone, without the DSL:
    from plumb import Box, RoutingPass, EdgeData

    routing = RoutingPass({"a": Box.from_xywh(0, 0, 100, 50),
                           "b": Box.from_xywh(300, 0, 100, 50)})
    geometry = routing.route_edge(EdgeData("a", "b"))
    geometry.svg_path()
"""

from .arrows import (
    RouteOptions,
    RouteResult,
    route,
)
from .dsl import (
    NodeHandle,
    edge,
    graph,
    node,
    subgraph,
)
from .errors import (
    MissingGeometryError,
    PlumbError,
    RouteConfigError,
)
from .geometry import (
    Box,
    Point,
    Size,
)
from .layout import (
    LayoutConfig,
    LayoutResult,
    layout_graph,
)
from .models import (
    EdgeData,
    GraphData,
    NodeData,
    RankDir,
)
from .presentation import (
    EdgeGeometry,
    label_anchor,
)
from .renderer import (
    DEFAULT_THEME,
    DiagramRenderer,
    Theme,
    render_to_svg,
)
from .selector import (
    Choice,
    Measurer,
    RoutingPass,
)
from .spatial import QuadTree

__version__ = "0.1.0"

__all__ = [
    # DSL functions
    "graph",
    "subgraph",
    "node",
    "edge",
    "NodeHandle",
    # Models
    "GraphData",
    "NodeData",
    "EdgeData",
    "RankDir",
    # Geometry
    "Point",
    "Size",
    "Box",
    # Routing
    "route",
    "RouteOptions",
    "RouteResult",
    "RoutingPass",
    "Choice",
    "Measurer",
    "QuadTree",
    "EdgeGeometry",
    "label_anchor",
    # Errors
    "PlumbError",
    "MissingGeometryError",
    "RouteConfigError",
    # Layout
    "layout_graph",
    "LayoutConfig",
    "LayoutResult",
    # Rendering
    "render_to_svg",
    "DiagramRenderer",
    "Theme",
    "DEFAULT_THEME",
    # Version
    "__version__",
]
