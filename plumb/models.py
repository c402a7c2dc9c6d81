"""Data models for plumb graphs."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


class RankDir(Enum):
    """Direction ranks are laid out in (DOT ``rankdir``)."""

    TB = "TB"
    LR = "LR"
    BT = "BT"
    RL = "RL"

    @classmethod
    def from_str(cls, value: str) -> RankDir:
        """Parse a rankdir value; anything unrecognised is top-to-bottom."""
        try:
            return cls(value.strip().strip('"').upper())
        except ValueError:
            return cls.TB

    @property
    def horizontal(self) -> bool:
        return self in (RankDir.LR, RankDir.RL)

    @property
    def reversed(self) -> bool:
        return self in (RankDir.BT, RankDir.RL)


@dataclass
class EdgeData:
    """A directed edge between two node ids."""

    source: str
    target: str
    label: str | None = None
    id: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            self.id = f"{self.source}-{self.target}"

    def __or__(self, label: str) -> EdgeData:
        """Add a label to the edge using | operator."""
        self.label = label
        return self


@dataclass
class NodeData:
    """A node in the graph."""

    id: str
    label: str | None = None

    @property
    def display_label(self) -> str:
        return self.label if self.label is not None else self.id

    def connect_to(self, target_id: str, label: str | None = None) -> EdgeData:
        """Create an edge from this node to ``target_id``."""
        return EdgeData(source=self.id, target=target_id, label=label)


@dataclass
class GraphData:
    """A graph or subgraph.

    Subgraphs nest recursively; edges are kept on the top-level graph only.
    """

    id: str = "G"
    label: str | None = None
    style: str | None = None
    nodes: list[NodeData] = field(default_factory=list)
    subgraphs: list[GraphData] = field(default_factory=list)
    edges: list[EdgeData] = field(default_factory=list)
    direction: RankDir = RankDir.TB

    def all_nodes(self) -> Iterator[NodeData]:
        """Nodes of this graph followed by those of its subgraphs, depth first."""
        yield from self.nodes
        for sub in self.subgraphs:
            yield from sub.all_nodes()

    def all_subgraphs(self) -> Iterator[GraphData]:
        for sub in self.subgraphs:
            yield sub
            yield from sub.all_subgraphs()

    def node_ids(self) -> list[str]:
        return [n.id for n in self.all_nodes()]

    def find_node(self, node_id: str) -> NodeData | None:
        for n in self.all_nodes():
            if n.id == node_id:
                return n
        return None
