"""Python DSL for building graphs."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from .models import EdgeData, GraphData, NodeData, RankDir
from .renderer import render_to_svg

if TYPE_CHECKING:
    from collections.abc import Generator

# Context stacks: the root graph being built, and the open (sub)graph scopes
_graph_stack: list[GraphData] = []
_scope_stack: list[tuple[GraphData, str]] = []
_id_maps: list[dict[str, str]] = []


def _current_graph() -> GraphData | None:
    """Get the root graph of the current context."""
    return _graph_stack[-1] if _graph_stack else None


def _current_scope() -> tuple[GraphData, str]:
    """Get the innermost open (sub)graph and its node id prefix."""
    if not _scope_stack:
        raise ValueError("node() and subgraph() must be used inside a graph() context")
    return _scope_stack[-1]


def _resolve(ref: NodeHandle | NodeData | str) -> str:
    """Node id for a handle, a node or a name given to node()."""
    if isinstance(ref, NodeHandle):
        return ref.id
    if isinstance(ref, NodeData):
        return ref.id
    if _id_maps:
        return _id_maps[-1].get(ref, ref)
    return ref


@contextmanager
def graph(
        label: str | None = None,
        rankdir: RankDir | str = RankDir.TB,
        filename: str | None = None,
        **kwargs: Any,
) -> Generator[GraphData]:
    """Create a graph context.

    Usage:
        with graph(label="Pipeline", rankdir="LR") as g:
            fetch = node("fetch", label="Fetch")
            with subgraph(label="Workers", style="dashed"):
                parse = node("parse")
                store = node("store")
            fetch >> parse | "raw"
            parse >> store

        # Render on exit
        with graph(filename="output/pipeline"):
            ...

    Args:
        label: Optional graph title
        rankdir: Rank direction ("TB", "LR", "BT", "RL")
        filename: If given, render to ``<filename>.svg`` when the block exits
        **kwargs: Additional GraphData fields

    Yields:
        The GraphData object
    """
    if isinstance(rankdir, str):
        rankdir = RankDir.from_str(rankdir)

    g = GraphData(label=label, direction=rankdir, **kwargs)
    _graph_stack.append(g)
    _scope_stack.append((g, ""))
    _id_maps.append({})

    try:
        yield g
    finally:
        _graph_stack.pop()
        _scope_stack.pop()
        _id_maps.pop()

    if filename:
        render_to_svg(g, filename)


@contextmanager
def subgraph(
        label: str | None = None,
        style: str | None = None,
        rankdir: RankDir | str | None = None,
) -> Generator[GraphData]:
    """Open a subgraph inside the current graph or subgraph.

    Subgraphs are named ``cluster_<n>`` after their position in the parent,
    and node ids inside them are prefixed with the cluster path so the same
    name can be reused in different clusters.
    """
    parent, prefix = _current_scope()

    sub_id = f"cluster_{len(parent.subgraphs)}"
    sub_prefix = f"{prefix}-{sub_id}" if prefix else sub_id

    if isinstance(rankdir, str):
        rankdir = RankDir.from_str(rankdir)

    sub = GraphData(
        id=sub_id,
        label=label,
        style=style,
        direction=rankdir or parent.direction,
    )
    parent.subgraphs.append(sub)
    _scope_stack.append((sub, sub_prefix))

    try:
        yield sub
    finally:
        _scope_stack.pop()


class NodeHandle:
    """A node created by node(); supports ``>>`` and ``<<`` to add edges.

    Usage:
        a = node("a")
        b = node("b", label="Bee")
        a >> b
        a >> b | "labelled"
    """

    def __init__(self, node: NodeData):
        self._node = node

    @property
    def id(self) -> str:
        return self._node.id

    # Delegate all attribute access to the underlying node
    def __getattr__(self, name: str) -> Any:
        return getattr(self._node, name)

    def __rshift__(self, other: NodeHandle | NodeData | str) -> EdgeData:
        return edge(self, other)

    def __lshift__(self, other: NodeHandle | NodeData | str) -> EdgeData:
        return edge(other, self)

    def __repr__(self) -> str:
        return f"NodeHandle({self._node!r})"


def node(name: str, label: str | None = None) -> NodeHandle:
    """Create a node in the innermost open graph or subgraph.

    Args:
        name: Node name, unique within its cluster
        label: Display label (defaults to the name)

    Returns:
        NodeHandle wrapping the created NodeData
    """
    scope, prefix = _current_scope()
    node_id = f"{prefix}-{name}" if prefix else name

    root = _current_graph()
    if root is not None and root.find_node(node_id) is not None:
        raise ValueError(f"Duplicate node id '{node_id}'")

    n = NodeData(id=node_id, label=label)
    scope.nodes.append(n)
    _id_maps[-1][name] = node_id

    return NodeHandle(n)


def edge(
        source: NodeHandle | NodeData | str,
        target: NodeHandle | NodeData | str,
        label: str | None = None,
) -> EdgeData:
    """Create an edge on the top-level graph.

    Usage:
        edge(fetch, parse, label="raw")
        edge("fetch", "parse")  # names resolve through node()
    """
    root = _current_graph()
    if root is None:
        raise ValueError("edge() must be used inside a graph() context")

    e = EdgeData(source=_resolve(source), target=_resolve(target), label=label)
    root.edges.append(e)
    return e
