"""
Minimum Spanning Tree over an adjacency-matrix graph.
Prim (frontier scan) and Kruskal (sorted edges + union-find) are run
independently and cross-checked against NetworkX.
"""

import os
import json
import math
import logging
from collections import namedtuple

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import networkx as nx  # noqa: E402

from disjoint_set import DisjointSet  # noqa: E402
from mst_graph import NO_EDGE, Graph  # noqa: E402

logger = logging.getLogger(__name__)


Edge = namedtuple("Edge", ["source", "target", "weight"])


class MSTResult:
    """Edges picked by a solver plus their total weight.

    A disconnected graph gives fewer than n-1 edges; ``is_complete`` tells
    the two cases apart. ``spanning=False`` marks a result that is incomplete
    whatever its edge count (a Prim start outside the graph).
    Unpacks as ``edges, cost``.
    """

    def __init__(self, edges, cost, node_count, algorithm="", spanning=True):
        self.edges = list(edges)
        self.cost = cost
        self.node_count = node_count
        self.algorithm = algorithm
        self.spanning = spanning

    @property
    def expected_edges(self):
        return max(self.node_count - 1, 0)

    @property
    def is_complete(self):
        return self.spanning and len(self.edges) == self.expected_edges

    def edge_set(self):
        """Unordered endpoint pairs, for comparing trees regardless of orientation"""
        return {frozenset((e.source, e.target)) for e in self.edges}

    def __iter__(self):
        yield self.edges
        yield self.cost

    def __eq__(self, other):
        if not isinstance(other, MSTResult):
            return NotImplemented
        return (self.edges, self.cost, self.node_count) == (
            other.edges,
            other.cost,
            other.node_count,
        )

    def to_dict(self):
        return {
            "edges": [
                {"from": e.source, "to": e.target, "weight": e.weight}
                for e in self.edges
            ],
            "cost": self.cost,
        }

    def __repr__(self):
        return (
            f"MSTResult(algorithm={self.algorithm!r}, edges={len(self.edges)}/"
            f"{self.expected_edges}, cost={self.cost})"
        )


class PrimSolver:
    def __init__(self, graph, start=0):
        """
        Grow a tree from ``start`` by repeatedly attaching the cheapest edge
        between a visited and an unvisited node.
        Ties go to the lowest visited index, then the lowest unvisited index.
        """
        self.graph = graph
        self.start = start

    def run(self):
        graph = self.graph
        n = graph.node_count()
        edges = []
        total_cost = 0

        if n == 0:
            return MSTResult(edges, total_cost, n, "prim")

        if not 0 <= self.start < n:
            logger.warning(f"Prim start node {self.start} is outside [0, {n}); no tree built")
            return MSTResult(edges, total_cost, n, "prim", spanning=False)

        visited = [False] * n
        visited[self.start] = True

        # One attempt per remaining node; a step that finds no crossing edge is skipped
        for _ in range(n - 1):
            min_weight = NO_EDGE
            source_node = -1
            next_node = -1

            for u in range(n):
                if not visited[u]:
                    continue
                for v in range(n):
                    if visited[v]:
                        continue
                    weight = graph.get_edge(u, v)
                    if weight < min_weight:
                        min_weight = weight
                        source_node = u
                        next_node = v

            if next_node != -1:
                visited[next_node] = True
                edges.append(Edge(source_node, next_node, min_weight))
                total_cost += min_weight

        result = MSTResult(edges, total_cost, n, "prim")
        _log_result(result)
        return result


class KruskalSolver:
    def __init__(self, graph):
        """Accept edges cheapest first unless they close a cycle"""
        self.graph = graph

    def candidate_edges(self):
        """Existing edges sorted by weight; equal weights keep (i, j) order"""
        return sorted(
            (Edge(i, j, weight) for i, j, weight in self.graph.edges()),
            key=lambda edge: edge.weight,
        )

    def run(self):
        n = self.graph.node_count()
        edges = []
        total_cost = 0

        if n == 0:
            return MSTResult(edges, total_cost, n, "kruskal")

        forest = DisjointSet(n)

        for edge in self.candidate_edges():
            if len(edges) == n - 1:
                break
            if forest.union(edge.source, edge.target):
                edges.append(edge)
                total_cost += edge.weight

        result = MSTResult(edges, total_cost, n, "kruskal")
        _log_result(result)
        return result


def _log_result(result):
    if result.is_complete:
        logger.debug(f"{result.algorithm}: {len(result.edges)} edges, cost {result.cost}")
    else:
        logger.warning(
            f"{result.algorithm}: graph is disconnected, spanning forest has "
            f"{len(result.edges)}/{result.expected_edges} edges (cost {result.cost})"
        )


def prim(graph, start=0):
    return PrimSolver(graph, start).run()


def kruskal(graph):
    return KruskalSolver(graph).run()


def to_networkx(graph):
    """Build a weighted nx.Graph with every node, labelled by the graph's labels"""
    G = nx.Graph()
    for i, label in enumerate(graph.get_labels()):
        G.add_node(i, label=label)
    for i, j, weight in graph.edges():
        G.add_edge(i, j, weight=weight)
    return G


def reference_tree(G, start=None):
    """
    nx.minimum_spanning_tree of the whole graph (a spanning forest when it is
    disconnected), or of the component holding ``start`` only.
    """
    if start is None:
        return nx.minimum_spanning_tree(G, weight="weight")
    if start not in G:
        return nx.Graph()
    component = G.subgraph(nx.node_connected_component(G, start))
    return nx.minimum_spanning_tree(component, weight="weight")


def verify_with_networkx(graph, result, start=None):
    """Compare a solver result with nx.minimum_spanning_tree

    Pass the Prim ``start`` node: on a disconnected graph Prim only spans
    that node's component, so it is checked against that component's tree.
    """
    G = to_networkx(graph)
    nx_mst = reference_tree(G, start)
    nx_edges = {frozenset((u, v)) for u, v in nx_mst.edges()}
    nx_weight = sum(data["weight"] for _, _, data in nx_mst.edges(data=True))

    return {
        "networkx_weight": nx_weight,
        "networkx_edges": nx_mst.number_of_edges(),
        "is_connected": G.number_of_nodes() == 0 or nx.is_connected(G),
        "cost_matches": math.isclose(result.cost, nx_weight),
        "edges_match": result.edge_set() == nx_edges,
    }


def visualize(graph, results, save_path="mst.png"):
    """Draw the input graph next to the tree found by each solver"""
    G = to_networkx(graph)
    fig, axes = plt.subplots(1, len(results) + 1, figsize=(7 * (len(results) + 1), 6))
    axes = list(axes) if len(results) else [axes]

    pos = nx.spring_layout(G, seed=42)
    labels = {i: graph.label(i) for i in G.nodes()}

    axes[0].set_title("Original Graph", fontsize=14, fontweight="bold")
    nx.draw(
        G,
        pos,
        ax=axes[0],
        labels=labels,
        with_labels=True,
        node_color="lightblue",
        node_size=700,
        font_size=12,
        font_weight="bold",
    )
    edge_labels = nx.get_edge_attributes(G, "weight")
    nx.draw_networkx_edge_labels(G, pos, edge_labels, ax=axes[0])

    for ax, result in zip(axes[1:], results):
        ax.set_title(
            f"MST ({result.algorithm}, cost={result.cost:g})",
            fontsize=14,
            fontweight="bold",
        )
        tree = nx.Graph()
        tree.add_nodes_from(G.nodes())
        for edge in result.edges:
            tree.add_edge(edge.source, edge.target, weight=edge.weight)

        nx.draw(
            tree,
            pos,
            ax=ax,
            labels=labels,
            with_labels=True,
            node_color="lightgreen",
            node_size=700,
            font_size=12,
            font_weight="bold",
            edge_color="red",
            width=3,
        )
        if result.edges:
            tree_labels = nx.get_edge_attributes(tree, "weight")
            nx.draw_networkx_edge_labels(tree, pos, tree_labels, ax=ax)

    plt.tight_layout()
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    print(f"Visualization saved to {save_path}")
    plt.close(fig)


def run_experiment(graph, experiment_num, start=0, visualize_dir=None):
    """Run both solvers on one graph and check them against each other and NetworkX"""
    n = graph.node_count()
    num_edges = sum(1 for _ in graph.edges())

    print(f"\n{'=' * 70}")
    print(f"Experiment {experiment_num}: {n} nodes, {num_edges} edges")
    print("=" * 70)

    prim_result = prim(graph, start)
    kruskal_result = kruskal(graph)
    prim_check = verify_with_networkx(graph, prim_result, start)
    check = verify_with_networkx(graph, kruskal_result)

    # Both trees are the same MST only when the graph is connected
    costs_agree = not check["is_connected"] or math.isclose(
        prim_result.cost, kruskal_result.cost
    )
    is_correct = costs_agree and prim_check["cost_matches"] and check["cost_matches"]

    for result in (prim_result, kruskal_result):
        print(f"\n{result.algorithm.capitalize()} edges ({len(result.edges)}):")
        for edge in result.edges:
            print(
                f"  {graph.label(edge.source)} - {graph.label(edge.target)}: "
                f"weight = {edge.weight:g}"
            )
        print(f"  Total weight: {result.cost:g}")

    print(f"\nMST Edges Found: {len(kruskal_result.edges)}/{kruskal_result.expected_edges} expected")
    print(f"NetworkX MST Weight: {check['networkx_weight']:g}")
    if not check["is_connected"]:
        print("WARNING: graph is disconnected, Kruskal returned a spanning forest")
        print(
            f"NetworkX weight of node {start}'s component (Prim): "
            f"{prim_check['networkx_weight']:g}"
        )
    print(f"Status: {'✓ CORRECT' if is_correct else '✗ INCORRECT'}")

    if visualize_dir:
        os.makedirs(visualize_dir, exist_ok=True)
        filename = os.path.join(visualize_dir, f"mst_exp{experiment_num}.png")
        visualize(graph, [prim_result, kruskal_result], filename)

    return {
        "experiment": experiment_num,
        "num_nodes": n,
        "num_edges": num_edges,
        "prim": prim_result.to_dict(),
        "kruskal": kruskal_result.to_dict(),
        "mst_weight": kruskal_result.cost,
        "networkx_weight": check["networkx_weight"],
        "is_complete": kruskal_result.is_complete,
        "is_correct": is_correct,
        "edges_found": len(kruskal_result.edges),
        "edges_expected": kruskal_result.expected_edges,
    }


GRAPH_CONFIGS = [
    {"num_nodes": 5, "edge_probability": 0.5, "seed": 42},
    {"num_nodes": 6, "edge_probability": 0.4, "seed": 100},
    {"num_nodes": 7, "edge_probability": 0.6, "seed": 200},
    {"num_nodes": 6, "edge_probability": 0.7, "seed": 300},
    {"num_nodes": 10, "edge_probability": 0.8, "seed": 400},
    {"num_nodes": 20, "edge_probability": 0.3, "seed": 500},
]


def print_summary(all_results):
    print("\n" + "=" * 70)
    print(" " * 25 + "SUMMARY")
    print("=" * 70)
    print(f"{'Exp':<5} {'Nodes':<7} {'Edges':<7} {'MST Wt':<9} {'Found':<10} {'Status':<10}")
    print("-" * 70)

    for result in all_results:
        status = "✓ PASS" if result["is_correct"] else "✗ FAIL"
        found_str = f"{result['edges_found']}/{result['edges_expected']}"
        print(
            f"{result['experiment']:<5} {result['num_nodes']:<7} {result['num_edges']:<7} "
            f"{result['mst_weight']:<9g} {found_str:<10} {status:<10}"
        )


def main(argv=None):
    """Run Prim and Kruskal on a saved graph file, or on a set of random graphs"""
    import argparse

    from create_graph_files import create_random_graph, graph_to_matrix
    from graph_storage import graph_from_file

    parser = argparse.ArgumentParser(description="Prim and Kruskal MST experiments")
    parser.add_argument(
        "--graph-file",
        type=str,
        default=None,
        help="Graph JSON file to solve (default: run the random experiments)",
    )
    parser.add_argument(
        "--start", type=int, default=0, help="Prim start node (default: 0)"
    )
    parser.add_argument(
        "--visualize",
        type=str,
        default=None,
        metavar="DIR",
        help="Save a PNG per experiment into DIR",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="mst_experiments.json",
        help="Results file (default: mst_experiments.json)",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    print("=" * 70)
    print(" " * 15 + "Prim / Kruskal MST - Experiments")
    print("=" * 70)

    all_results = []

    if args.graph_file:
        graph = graph_from_file(args.graph_file)
        if graph is None:
            print(f"ERROR: could not load graph from {args.graph_file}")
            return 1
        all_results.append(run_experiment(graph, 1, args.start, args.visualize))
    else:
        for i, config in enumerate(GRAPH_CONFIGS, 1):
            labels, matrix = graph_to_matrix(create_random_graph(**config))
            graph = Graph(labels, matrix)
            all_results.append(run_experiment(graph, i, args.start, args.visualize))

    print_summary(all_results)

    with open(args.output, "w") as f:
        json.dump(all_results, f, indent=2)

    print("\n" + "=" * 70)
    print(f"All results saved to: {args.output}")
    print("=" * 70)

    return 0 if all(r["is_correct"] for r in all_results) else 1


if __name__ == "__main__":
    raise SystemExit(main())
