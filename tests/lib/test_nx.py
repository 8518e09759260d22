"""Tests for pathgraph.lib.nx NetworkX conversion utilities."""

import networkx as nx
import pytest

from pathgraph import CostModel, Weight
from pathgraph.lib.nx import EdgeMap, NodeMap, from_networkx, to_networkx


class TestNodeMap:
    """Tests for NodeMap class."""

    def test_from_names_creates_bidirectional_mapping(self):
        node_map = NodeMap.from_names(["A", "B", "C"])

        assert node_map.to_index == {"A": 0, "B": 1, "C": 2}
        assert node_map.to_name == {0: "A", 1: "B", 2: "C"}
        assert len(node_map) == 3

    def test_from_names_empty_list(self):
        node_map = NodeMap.from_names([])
        assert len(node_map) == 0

    def test_mixed_type_node_names(self):
        node_map = NodeMap.from_names(["A", 1, (0, 1)])
        assert node_map.to_index[(0, 1)] == 2
        assert node_map.to_name[1] == 1


class TestFromNetworkx:
    """Tests for from_networkx."""

    def test_digraph_nodes_and_edges(self):
        G = nx.DiGraph()
        G.add_node("A", color="red")
        G.add_edge("A", "B", cost=10, capacity=100)
        G.add_edge("B", "C", cost=5)

        graph, node_map, edge_map = from_networkx(G)

        assert graph.num_nodes == 3
        assert graph.num_edges == 2
        assert graph.state(node_map.to_index["A"]) == {"name": "A", "color": "red"}
        assert graph.props(0) == Weight(10, {"capacity": 100})
        assert edge_map.to_ref == {0: ("A", "B", 0), 1: ("B", "C", 0)}
        assert edge_map.from_ref[("B", "C", 0)] == [1]

    def test_node_ids_follow_insertion_order(self):
        G = nx.DiGraph()
        G.add_nodes_from(["z", "y", "x"])
        _, node_map, _ = from_networkx(G)
        assert node_map.to_index == {"z": 0, "y": 1, "x": 2}

    def test_cheapest_path_on_converted_graph(self):
        G = nx.DiGraph()
        G.add_edge("A", "B", cost=10)
        G.add_edge("B", "C", cost=5)
        G.add_edge("A", "C", cost=20)

        graph, node_map, edge_map = from_networkx(G)
        path = graph.cheapest_path(node_map.to_index["A"], node_map.to_index["C"])

        assert [edge_map.to_ref[e] for e in path] == [("A", "B", 0), ("B", "C", 0)]
        assert graph.cost(path) == 15

    def test_missing_cost_uses_default(self):
        G = nx.DiGraph()
        G.add_edge("A", "B")
        G.add_edge("B", "C", weight=4)

        graph, _, _ = from_networkx(G, default_cost=3)
        assert graph.edge_cost(0) == 3

        graph, _, _ = from_networkx(G, cost_attr="weight")
        assert graph.edge_cost(1) == 4
        assert graph.edge_cost(0) == 1

    def test_undirected_graph_adds_both_directions(self):
        G = nx.Graph()
        G.add_edge("A", "B", cost=2)

        graph, node_map, edge_map = from_networkx(G)

        a, b = node_map.to_index["A"], node_map.to_index["B"]
        assert graph.num_edges == 2
        assert graph.edges_between(a, b) == [0]
        assert graph.edges_between(b, a) == [1]
        assert edge_map.from_ref[("A", "B", 0)] == [0, 1]

    def test_self_loop_not_duplicated(self):
        G = nx.Graph()
        G.add_edge("A", "A", cost=1)

        graph, _, _ = from_networkx(G)
        assert graph.num_edges == 1

    def test_bidirectional_digraph(self):
        G = nx.DiGraph()
        G.add_edge("A", "B", cost=2)

        graph, _, _ = from_networkx(G, bidirectional=True)
        assert [(e.src, e.dst) for e in graph.edges()] == [(0, 1), (1, 0)]

    def test_multidigraph_keeps_parallel_edges(self):
        G = nx.MultiDiGraph()
        G.add_edge("A", "B", cost=3)
        G.add_edge("A", "B", cost=1)

        graph, node_map, edge_map = from_networkx(G)
        path = graph.cheapest_path(node_map.to_index["A"], node_map.to_index["B"])

        assert graph.num_edges == 2
        assert [edge_map.to_ref[e] for e in path] == [("A", "B", 1)]

    def test_graph_kwargs_forwarded(self):
        G = nx.DiGraph()
        G.add_edge("A", "B", cost=2.5)

        graph, _, _ = from_networkx(G, zero_cost=0.0)
        assert graph.zero_cost == 0.0
        assert graph.cost_model == CostModel.ADDITIVE

    def test_rejects_non_networkx_input(self):
        with pytest.raises(TypeError, match="Expected NetworkX graph"):
            from_networkx({"A": ["B"]})


class TestToNetworkx:
    """Tests for to_networkx."""

    def test_edges_keyed_by_edge_id(self, multi_edge):
        graph, _, (first, second, third) = multi_edge

        G = to_networkx(graph)

        assert isinstance(G, nx.MultiDiGraph)
        assert sorted(G.nodes()) == [0, 1]
        assert G.edges[0, 1, first]["cost"] == 3
        assert G.edges[0, 1, third]["cost"] == 1
        assert G.number_of_edges() == 3

    def test_node_names_restored(self):
        G = nx.DiGraph()
        G.add_edge("A", "B", cost=7)
        graph, node_map, _ = from_networkx(G)

        G_out = to_networkx(graph, node_map, cost_attr="weight")

        assert set(G_out.nodes()) == {"A", "B"}
        assert G_out.edges["A", "B", 0]["weight"] == 7

    def test_isolated_nodes_kept(self, disconnected):
        graph, _, _ = disconnected
        G = to_networkx(graph)
        assert G.number_of_nodes() == 2
        assert G.number_of_edges() == 0

    def test_empty_edge_map(self):
        assert len(EdgeMap()) == 0
