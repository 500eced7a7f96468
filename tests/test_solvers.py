import logging

import networkx as nx
import pytest

from city_data import build_distance_matrix, city_names
from create_graph_files import create_random_graph, graph_to_matrix
from mst_graph import NO_EDGE, Graph
from mst_implementation import (
    Edge,
    KruskalSolver,
    MSTResult,
    PrimSolver,
    kruskal,
    prim,
    to_networkx,
    verify_with_networkx,
)

INF = NO_EDGE


@pytest.fixture
def four_node_graph():
    matrix = [
        [0, 1, 4, INF],
        [1, 0, 2, 5],
        [4, 2, 0, 1],
        [INF, 5, 1, 0],
    ]
    return Graph(["A", "B", "C", "D"], matrix)


@pytest.fixture
def disconnected_graph():
    matrix = [
        [0, 3, INF, INF],
        [3, 0, INF, INF],
        [INF, INF, 0, 5],
        [INF, INF, 5, 0],
    ]
    return Graph(["A", "B", "C", "D"], matrix)


def random_graph(num_nodes, edge_probability, seed, distinct_weights=False):
    G = create_random_graph(
        num_nodes, edge_probability, seed, max_weight=10, distinct_weights=distinct_weights
    )
    labels, matrix = graph_to_matrix(G)
    return Graph(labels, matrix)


def assert_spanning_tree(graph, result):
    n = graph.node_count()
    assert len(result.edges) == n - 1
    assert result.is_complete

    tree = nx.Graph()
    tree.add_nodes_from(range(n))
    for edge in result.edges:
        assert edge.weight == graph.get_edge(edge.source, edge.target)
        tree.add_edge(edge.source, edge.target)
    assert nx.is_tree(tree)
    assert result.cost == pytest.approx(sum(e.weight for e in result.edges))


def test_prim_four_node_scenario(four_node_graph):
    result = PrimSolver(four_node_graph, start=0).run()

    assert result.edges == [Edge(0, 1, 1), Edge(1, 2, 2), Edge(2, 3, 1)]
    assert result.cost == 4
    assert result.is_complete


def test_kruskal_four_node_scenario(four_node_graph):
    result = KruskalSolver(four_node_graph).run()

    assert result.edges == [(0, 1, 1), (2, 3, 1), (1, 2, 2)]
    assert result.cost == 4


def test_both_solvers_pick_same_tree(four_node_graph):
    expected = {frozenset((0, 1)), frozenset((2, 3)), frozenset((1, 2))}
    assert prim(four_node_graph).edge_set() == expected
    assert kruskal(four_node_graph).edge_set() == expected


def test_kruskal_candidates_sorted_stably(four_node_graph):
    candidates = KruskalSolver(four_node_graph).candidate_edges()
    assert candidates == [(0, 1, 1), (2, 3, 1), (1, 2, 2), (0, 2, 4), (1, 3, 5)]


@pytest.mark.parametrize("solver", [prim, kruskal])
def test_empty_graph(solver):
    result = solver(Graph())
    assert result.edges == []
    assert result.cost == 0
    assert result.is_complete
    assert result.to_dict() == {"edges": [], "cost": 0}


@pytest.mark.parametrize("solver", [prim, kruskal])
def test_single_node(solver):
    result = solver(Graph(["A"], [[0]]))
    assert result.edges == []
    assert result.cost == 0
    assert result.is_complete


@pytest.mark.parametrize("solver", [prim, kruskal])
def test_disconnected_graph_gives_partial_result(solver, disconnected_graph, caplog):
    caplog.set_level(logging.WARNING)

    result = solver(disconnected_graph)

    assert len(result.edges) < 3
    assert not result.is_complete
    assert result.cost == sum(e.weight for e in result.edges)
    assert "disconnected" in caplog.text


def test_disconnected_prim_stays_in_start_component(disconnected_graph):
    assert prim(disconnected_graph, 0).edges == [(0, 1, 3)]
    assert prim(disconnected_graph, 3).edges == [(3, 2, 5)]


def test_disconnected_kruskal_builds_forest(disconnected_graph):
    result = kruskal(disconnected_graph)
    assert result.edges == [(0, 1, 3), (2, 3, 5)]
    assert result.cost == 8


def test_equal_weights_tie_break():
    graph = Graph(["A", "B", "C"], [[0, 1, 1], [1, 0, 1], [1, 1, 0]])

    assert prim(graph).edges == [(0, 1, 1), (0, 2, 1)]
    assert kruskal(graph).edges == [(0, 1, 1), (0, 2, 1)]


def test_prim_start_node(four_node_graph):
    result = prim(four_node_graph, start=3)
    assert result.edges == [(3, 2, 1), (2, 1, 2), (1, 0, 1)]
    assert result.cost == 4


def test_prim_start_out_of_range(four_node_graph, caplog):
    caplog.set_level(logging.WARNING)

    result = prim(four_node_graph, start=7)

    assert result.edges == []
    assert not result.is_complete
    assert "outside" in caplog.text


def test_repeated_runs_are_identical(four_node_graph):
    graph = random_graph(12, 0.5, seed=7)

    for g in (four_node_graph, graph):
        assert prim(g) == prim(g)
        assert kruskal(g) == kruskal(g)
        assert prim(g).to_dict() == prim(g).to_dict()


def test_solvers_do_not_modify_graph(four_node_graph):
    before = four_node_graph.get_matrix()
    prim(four_node_graph)
    kruskal(four_node_graph)
    assert four_node_graph.get_matrix() == before


def test_result_unpacks_as_edges_and_cost(four_node_graph):
    edges, cost = kruskal(four_node_graph)
    assert len(edges) == 3
    assert cost == 4


def test_result_to_dict(four_node_graph):
    data = prim(four_node_graph).to_dict()
    assert data["cost"] == 4
    assert data["edges"][0] == {"from": 0, "to": 1, "weight": 1}


def test_result_repr():
    result = MSTResult([Edge(0, 1, 2)], 2, 3, "prim")
    assert repr(result) == "MSTResult(algorithm='prim', edges=1/2, cost=2)"


@pytest.mark.parametrize("seed", range(10))
@pytest.mark.parametrize("num_nodes, edge_probability", [(5, 0.5), (9, 0.3), (15, 0.6)])
def test_random_connected_graphs(num_nodes, edge_probability, seed):
    graph = random_graph(num_nodes, edge_probability, seed)

    prim_result = prim(graph)
    kruskal_result = kruskal(graph)

    assert_spanning_tree(graph, prim_result)
    assert_spanning_tree(graph, kruskal_result)
    assert prim_result.cost == kruskal_result.cost
    assert verify_with_networkx(graph, kruskal_result)["cost_matches"]


@pytest.mark.parametrize("seed", range(10))
def test_distinct_weights_give_unique_tree(seed):
    graph = random_graph(10, 0.5, seed, distinct_weights=True)

    prim_result = prim(graph)
    kruskal_result = kruskal(graph)

    assert prim_result.edge_set() == kruskal_result.edge_set()
    check = verify_with_networkx(graph, prim_result)
    assert check["edges_match"]
    assert check["cost_matches"]


def test_complete_city_graph():
    labels, matrix = build_distance_matrix(city_names()[:8])
    graph = Graph(labels, matrix)

    prim_result = prim(graph)
    kruskal_result = kruskal(graph)

    assert_spanning_tree(graph, prim_result)
    assert_spanning_tree(graph, kruskal_result)
    assert prim_result.cost == pytest.approx(kruskal_result.cost)


def test_to_networkx(four_node_graph):
    G = to_networkx(four_node_graph)
    assert G.number_of_nodes() == 4
    assert G.number_of_edges() == 5
    assert G.nodes[2]["label"] == "C"
    assert G[1][3]["weight"] == 5


def test_verify_reports_disconnected(disconnected_graph):
    check = verify_with_networkx(disconnected_graph, kruskal(disconnected_graph))
    assert check["is_connected"] is False
    assert check["cost_matches"]
    assert check["networkx_weight"] == 8


def test_prim_start_outside_single_node_graph_is_incomplete():
    result = prim(Graph(["A"], [[0]]), start=4)
    assert result.edges == []
    assert not result.is_complete


def test_verify_prim_against_start_component(disconnected_graph):
    whole = verify_with_networkx(disconnected_graph, prim(disconnected_graph, 0))
    assert not whole["cost_matches"]

    for start, weight in [(0, 3), (3, 5)]:
        check = verify_with_networkx(disconnected_graph, prim(disconnected_graph, start), start)
        assert check["networkx_weight"] == weight
        assert check["cost_matches"]
        assert check["edges_match"]


def test_verify_prim_start_outside_graph(four_node_graph):
    check = verify_with_networkx(four_node_graph, prim(four_node_graph, 9), 9)
    assert check["networkx_weight"] == 0
    assert check["cost_matches"]
