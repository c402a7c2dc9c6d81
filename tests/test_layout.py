"""Tests for the reference layout."""

import pytest

from plumb.dsl import graph, node, subgraph
from plumb.layout import (
    LayoutConfig,
    assign_ranks,
    calculate_node_size,
    estimate_text_width,
    layout_graph,
)
from plumb.models import EdgeData, GraphData, NodeData, RankDir


def chain(direction: RankDir = RankDir.TB) -> GraphData:
    """a -> b -> c"""
    return GraphData(
        nodes=[NodeData("a"), NodeData("b"), NodeData("c")],
        edges=[EdgeData("a", "b"), EdgeData("b", "c")],
        direction=direction,
    )


class TestSizing:
    """Tests for node sizing."""

    def test_estimate_text_width(self):
        assert estimate_text_width("abcd", 7.5) == 30

    def test_short_label_uses_min_width(self):
        config = LayoutConfig()
        size = calculate_node_size(NodeData("a"), config)
        assert size.x == config.min_node_width
        assert size.y == config.node_height

    def test_long_label_grows(self):
        config = LayoutConfig()
        label = "A rather long node label"
        size = calculate_node_size(NodeData("n", label=label), config)
        assert size.x == pytest.approx(len(label) * config.char_width_avg + 2 * config.node_padding)


class TestRanks:
    """Tests for assign_ranks."""

    def test_chain(self):
        assert assign_ranks(chain()) == {"a": 0, "b": 1, "c": 2}

    def test_longest_path_wins(self):
        g = chain()
        g.edges.append(EdgeData("a", "c"))
        assert assign_ranks(g)["c"] == 2

    def test_cycle_shares_rank(self):
        g = GraphData(
            nodes=[NodeData("a"), NodeData("b"), NodeData("c")],
            edges=[EdgeData("a", "b"), EdgeData("b", "a"), EdgeData("b", "c")],
        )
        ranks = assign_ranks(g)
        assert ranks["a"] == ranks["b"] == 0
        assert ranks["c"] == 1

    def test_unknown_endpoints_ignored(self):
        g = GraphData(nodes=[NodeData("a")], edges=[EdgeData("a", "ghost")])
        assert assign_ranks(g) == {"a": 0}

    def test_disconnected_nodes_start_at_zero(self):
        g = GraphData(nodes=[NodeData("a"), NodeData("b")])
        assert assign_ranks(g) == {"a": 0, "b": 0}


class TestLayoutGraph:
    """Tests for layout_graph."""

    def test_top_to_bottom(self):
        result = layout_graph(chain())
        a, b, c = (result.boxes[n] for n in "abc")
        assert a.top < b.top < c.top
        assert a.center.x == pytest.approx(b.center.x)

    def test_first_rank_starts_at_margin(self):
        config = LayoutConfig()
        result = layout_graph(chain(), config)
        assert result.boxes["a"].top == config.margin
        assert result.boxes["b"].top == config.margin + config.node_height + config.rank_spacing

    def test_left_to_right(self):
        result = layout_graph(chain(RankDir.LR))
        a, b, c = (result.boxes[n] for n in "abc")
        assert a.left < b.left < c.left
        assert a.center.y == pytest.approx(b.center.y)

    def test_bottom_to_top(self):
        result = layout_graph(chain(RankDir.BT))
        a, b, c = (result.boxes[n] for n in "abc")
        assert a.top > b.top > c.top

    def test_right_to_left(self):
        result = layout_graph(chain(RankDir.RL))
        a, c = result.boxes["a"], result.boxes["c"]
        assert a.left > c.left

    def test_same_rank_nodes_do_not_overlap(self):
        g = GraphData(
            nodes=[NodeData("root"), NodeData("x"), NodeData("y"), NodeData("z")],
            edges=[EdgeData("root", "x"), EdgeData("root", "y"), EdgeData("root", "z")],
        )
        result = layout_graph(g)
        row = sorted((result.boxes[n] for n in "xyz"), key=lambda b: b.left)
        for left, right in zip(row, row[1:]):
            assert left.right < right.left
        assert len({b.top for b in row}) == 1

    def test_canvas_contains_everything(self):
        result = layout_graph(chain())
        for box in result.boxes.values():
            assert box.right <= result.width
            assert box.bottom <= result.height

    def test_measure(self):
        result = layout_graph(chain())
        assert result.measure("a") == result.boxes["a"]
        assert result.measure("missing") is None

    def test_empty_graph(self):
        result = layout_graph(GraphData())
        assert result.boxes == {}
        assert result.width == result.height == 2 * LayoutConfig().margin


class TestClusters:
    """Tests for subgraph containers."""

    def test_cluster_wraps_members(self):
        with graph() as g:
            a = node("a")
            with subgraph(label="Workers"):
                b = node("b")
                c = node("c")
            a >> b
            a >> c

        result = layout_graph(g)
        assert len(result.clusters) == 1
        cluster = result.clusters[0]
        assert cluster.key == "cluster_0"
        for member in (b.id, c.id):
            box = result.boxes[member]
            assert cluster.box.left < box.left
            assert cluster.box.top < box.top
            assert cluster.box.right > box.right
            assert cluster.box.bottom > box.bottom
        assert not cluster.box.contains(result.boxes["a"].center)

    def test_nested_clusters(self):
        with graph() as g:
            with subgraph(label="Outer"):
                node("x")
                with subgraph(label="Inner"):
                    node("y")

        result = layout_graph(g)
        keys = [c.key for c in result.clusters]
        assert keys == ["cluster_0", "cluster_0-cluster_0"]
        outer, inner = result.clusters
        assert outer.depth == 0 and inner.depth == 1
        assert outer.box.left < inner.box.left
        assert outer.box.right > inner.box.right
        assert outer.box.top < inner.box.top
        assert outer.box.bottom > inner.box.bottom

    def test_cluster_members_grouped_in_rank(self):
        with graph() as g:
            root = node("root")
            p = node("p")
            with subgraph():
                q = node("q")
            r = node("r")
            for child in (p, q, r):
                root >> child

        result = layout_graph(g)
        row = sorted(("p", "cluster_0-q", "r"), key=lambda n: result.boxes[n].left)
        assert row == ["p", "r", "cluster_0-q"]
