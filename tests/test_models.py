"""Tests for the graph data model and the builder DSL."""

import pytest

from plumb.dsl import NodeHandle, edge, graph, node, subgraph
from plumb.models import EdgeData, GraphData, NodeData, RankDir


class TestRankDir:
    """Tests for RankDir."""

    def test_from_str(self):
        assert RankDir.from_str("LR") is RankDir.LR
        assert RankDir.from_str(" rl ") is RankDir.RL

    def test_from_str_strips_quotes(self):
        assert RankDir.from_str('"BT"') is RankDir.BT

    def test_unknown_defaults_to_top_bottom(self):
        assert RankDir.from_str("diagonal") is RankDir.TB
        assert RankDir.from_str("") is RankDir.TB

    def test_orientation_flags(self):
        assert RankDir.LR.horizontal and not RankDir.LR.reversed
        assert RankDir.BT.reversed and not RankDir.BT.horizontal
        assert RankDir.RL.horizontal and RankDir.RL.reversed
        assert not RankDir.TB.horizontal and not RankDir.TB.reversed


class TestEdgeAndNode:
    """Tests for EdgeData and NodeData."""

    def test_edge_default_id(self):
        assert EdgeData("a", "b").id == "a-b"

    def test_edge_explicit_id(self):
        assert EdgeData("a", "b", id="e1").id == "e1"

    def test_edge_label_with_pipe(self):
        e = EdgeData("a", "b") | "calls"
        assert e.label == "calls"

    def test_display_label_falls_back_to_id(self):
        assert NodeData("db").display_label == "db"
        assert NodeData("db", label="Database").display_label == "Database"

    def test_connect_to(self):
        e = NodeData("a").connect_to("b", label="x")
        assert (e.source, e.target, e.label) == ("a", "b", "x")


class TestGraphData:
    """Tests for GraphData traversal."""

    def test_all_nodes_depth_first(self):
        inner = GraphData(id="cluster_0", nodes=[NodeData("cluster_0-b")])
        g = GraphData(nodes=[NodeData("a")], subgraphs=[inner])
        g.nodes.append(NodeData("c"))
        assert g.node_ids() == ["a", "c", "cluster_0-b"]

    def test_all_subgraphs(self):
        deep = GraphData(id="cluster_0")
        mid = GraphData(id="cluster_0", subgraphs=[deep])
        g = GraphData(subgraphs=[mid, GraphData(id="cluster_1")])
        assert len(list(g.all_subgraphs())) == 3

    def test_find_node(self):
        g = GraphData(subgraphs=[GraphData(id="cluster_0", nodes=[NodeData("cluster_0-x")])])
        assert g.find_node("cluster_0-x").id == "cluster_0-x"
        assert g.find_node("x") is None


class TestDsl:
    """Tests for the graph-building DSL."""

    def test_graph_collects_nodes_and_edges(self):
        with graph(label="G", rankdir="LR") as g:
            a = node("a")
            b = node("b", label="Bee")
            a >> b

        assert g.label == "G"
        assert g.direction is RankDir.LR
        assert g.node_ids() == ["a", "b"]
        assert [(e.source, e.target) for e in g.edges] == [("a", "b")]

    def test_edge_label_operator(self):
        with graph() as g:
            a = node("a")
            b = node("b")
            a >> b | "ping"
            a << b

        assert g.edges[0].label == "ping"
        assert (g.edges[1].source, g.edges[1].target) == ("b", "a")

    def test_subgraph_prefixes_ids(self):
        with graph() as g:
            top = node("x")
            with subgraph(label="Workers", style="dashed") as s:
                inner = node("x")
                with subgraph(label="Inner"):
                    deepest = node("y")
            top >> inner

        assert s.id == "cluster_0"
        assert s.style == "dashed"
        assert inner.id == "cluster_0-x"
        assert deepest.id == "cluster_0-cluster_0-y"
        assert g.edges[0].target == "cluster_0-x"
        assert g.subgraphs[0].subgraphs[0].label == "Inner"

    def test_subgraphs_numbered_per_parent(self):
        with graph() as g:
            with subgraph():
                pass
            with subgraph():
                node("n")

        assert [s.id for s in g.subgraphs] == ["cluster_0", "cluster_1"]
        assert g.node_ids() == ["cluster_1-n"]

    def test_subgraph_inherits_direction(self):
        with graph(rankdir="RL") as g:
            with subgraph():
                pass
            with subgraph(rankdir="TB"):
                pass

        assert g.subgraphs[0].direction is RankDir.RL
        assert g.subgraphs[1].direction is RankDir.TB

    def test_edges_stored_on_root(self):
        with graph() as g:
            a = node("a")
            with subgraph() as s:
                b = node("b")
                a >> b

        assert len(g.edges) == 1
        assert s.edges == []

    def test_edge_by_name(self):
        with graph() as g:
            with subgraph():
                node("worker")
            node("boss")
            edge("boss", "worker", label="assigns")

        e = g.edges[0]
        assert (e.source, e.target, e.label) == ("boss", "cluster_0-worker", "assigns")

    def test_handle_delegates_to_node(self):
        with graph():
            handle = node("a", label="Alpha")

        assert isinstance(handle, NodeHandle)
        assert handle.display_label == "Alpha"
        assert handle.id == "a"

    def test_duplicate_node_rejected(self):
        with graph():
            node("a")
            with pytest.raises(ValueError, match="Duplicate"):
                node("a")

    def test_same_name_in_different_clusters(self):
        with graph() as g:
            with subgraph():
                node("db")
            with subgraph():
                node("db")

        assert g.node_ids() == ["cluster_0-db", "cluster_1-db"]

    def test_node_outside_graph(self):
        with pytest.raises(ValueError):
            node("a")

    def test_edge_outside_graph(self):
        with pytest.raises(ValueError):
            edge("a", "b")

    def test_context_cleared_after_error(self):
        with pytest.raises(RuntimeError):
            with graph():
                node("a")
                raise RuntimeError("boom")

        with pytest.raises(ValueError):
            node("b")

    def test_filename_renders_svg(self, tmp_path):
        target = tmp_path / "diagram"
        with graph(filename=str(target)):
            a = node("a")
            b = node("b")
            a >> b | "go"

        svg = (tmp_path / "diagram.svg").read_text()
        assert "<svg" in svg
        assert "go" in svg
