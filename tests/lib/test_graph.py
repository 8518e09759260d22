import pytest

from pathgraph import CostModel, Edge, Graph, Node, Weight


def test_new_graph_is_empty():
    graph = Graph()
    assert graph.num_nodes == 0
    assert graph.num_edges == 0
    assert len(graph) == 0
    assert list(graph.nodes()) == []
    assert list(graph.edges()) == []
    assert graph.cost_model == CostModel.ADDITIVE


def test_ids_follow_insertion_order():
    graph = Graph()
    assert [graph.insert_node(name) for name in "abc"] == [0, 1, 2]
    assert graph.insert_edge(0, 1, 5) == 0
    assert graph.insert_edge(1, 2, 6) == 1
    assert graph.num_nodes == 3
    assert graph.num_edges == 2
    assert len(graph) == 3


def test_payloads_are_stored_as_given():
    graph = Graph()
    state = {"name": "a"}
    a = graph.insert_node(state)
    props = Weight(3, {"label": "x"})
    e = graph.insert_edge(a, a, props)

    assert graph.state(a) is state
    assert graph.props(e) is props


def test_adjacency_lists():
    graph = Graph()
    a, b, c = (graph.insert_node(name) for name in "abc")
    ab = graph.insert_edge(a, b, 1)
    ac = graph.insert_edge(a, c, 1)
    cb = graph.insert_edge(c, b, 1)

    assert graph.node(a) == Node(id=a, incoming=[], outgoing=[ab, ac])
    assert graph.node(b) == Node(id=b, incoming=[ab, cb], outgoing=[])
    assert graph.node(c) == Node(id=c, incoming=[ac], outgoing=[cb])
    assert graph.edge(cb) == Edge(id=cb, src=c, dst=b)


def test_self_loop_is_both_incoming_and_outgoing():
    graph = Graph()
    a = graph.insert_node("a")
    loop = graph.insert_edge(a, a, 1)

    assert graph.node(a).incoming == [loop]
    assert graph.node(a).outgoing == [loop]


def test_parallel_edges_are_distinct():
    graph = Graph()
    a, b = graph.insert_node("a"), graph.insert_node("b")
    first = graph.insert_edge(a, b, 3)
    second = graph.insert_edge(a, b, 3)
    graph.insert_edge(b, a, 3)

    assert first != second
    assert graph.edges_between(a, b) == [first, second]
    assert graph.edges_between(b, b) == []


@pytest.mark.parametrize("bad_id", [-1, 2, True, 1.0, "0", None])
def test_unknown_node_ids_raise(bad_id):
    graph = Graph()
    graph.insert_node("a")
    graph.insert_node("b")

    with pytest.raises(IndexError, match="does not exist"):
        graph.node(bad_id)
    with pytest.raises(IndexError):
        graph.state(bad_id)


@pytest.mark.parametrize("bad_id", [-1, 1, False])
def test_unknown_edge_ids_raise(bad_id):
    graph = Graph()
    a = graph.insert_node("a")
    graph.insert_edge(a, a, 1)

    with pytest.raises(IndexError, match="Edge id"):
        graph.edge(bad_id)
    with pytest.raises(IndexError):
        graph.props(bad_id)


def test_failed_insert_edge_leaves_graph_unchanged():
    graph = Graph()
    a = graph.insert_node("a")

    with pytest.raises(IndexError):
        graph.insert_edge(a, 7, 1)
    with pytest.raises(IndexError):
        graph.insert_edge(7, a, 1)

    assert graph.num_edges == 0
    assert graph.node(a).outgoing == []
    assert graph.node(a).incoming == []


def test_edge_records_are_immutable():
    graph = Graph()
    a = graph.insert_node("a")
    e = graph.insert_edge(a, a, 1)
    with pytest.raises(AttributeError):
        graph.edge(e).dst = 3


def test_cost_sums_edges():
    graph = Graph()
    a, b, c = (graph.insert_node(name) for name in "abc")
    ab = graph.insert_edge(a, b, Weight(2))
    bc = graph.insert_edge(b, c, 3.5)

    assert graph.edge_cost(ab) == 2
    assert graph.cost([ab, bc]) == 5.5
    assert graph.cost([]) == 0
    with pytest.raises(IndexError):
        graph.cost([ab, 9])


def test_zero_cost_is_empty_path_cost():
    graph = Graph(zero_cost=0.0)
    assert graph.cost([]) == 0.0
    assert isinstance(graph.cost([]), float)


def test_custom_edge_cost_extractor():
    graph = Graph(edge_cost=lambda props: props["km"])
    a, b = graph.insert_node("a"), graph.insert_node("b")
    e = graph.insert_edge(a, b, {"km": 12})

    assert graph.edge_cost(e) == 12
    assert graph.cheapest_path(a, b) == [e]


def test_cost_model_accepts_plain_int():
    graph = Graph(cost_model=2)
    assert graph.cost_model is CostModel.ADVANCE


def test_repr():
    graph = Graph()
    graph.insert_node("a")
    assert repr(graph) == "Graph(nodes=1, edges=0, cost_model=ADDITIVE)"
