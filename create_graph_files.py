"""
Create graph files for the Prim / Kruskal MST solvers.
Random connected graphs (Erdos-Renyi) or complete city-distance graphs are
written as {"cityNames", "matrix"} JSON files.
"""

import os
import random

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import networkx as nx  # noqa: E402

from city_data import CITIES, build_distance_matrix  # noqa: E402
from graph_storage import DEFAULT_GRAPH_FILE, save_graph  # noqa: E402
from mst_graph import NO_EDGE  # noqa: E402


def create_random_graph(
    num_nodes=6, edge_probability=0.5, seed=42, max_weight=10, distinct_weights=False
):
    """Create a random connected graph with integer weights in [1, max_weight]

    With ``distinct_weights`` every edge gets a different weight (the range is
    widened when it has fewer values than there are edges), so the MST is unique.
    """
    rng = random.Random(seed)

    # Generate random graph using Erdos-Renyi model
    G = nx.erdos_renyi_graph(num_nodes, edge_probability, seed=seed)

    # Ensure the graph is connected
    attempts = 0
    while num_nodes > 1 and not nx.is_connected(G) and attempts < 100:
        G = nx.erdos_renyi_graph(num_nodes, edge_probability, seed=rng.randint(0, 10000))
        attempts += 1

    if num_nodes > 1 and not nx.is_connected(G):
        # Force connectivity by chaining the components
        components = [sorted(c) for c in nx.connected_components(G)]
        components.sort()
        for i in range(len(components) - 1):
            G.add_edge(components[i][0], components[i + 1][0])

    edges = sorted(G.edges())
    if distinct_weights:
        weights = rng.sample(range(1, max(max_weight, len(edges)) + 1), len(edges))
    else:
        weights = [rng.randint(1, max_weight) for _ in edges]

    for (u, v), weight in zip(edges, weights):
        G[u][v]["weight"] = weight

    return G


def graph_to_matrix(graph):
    """
    Convert a weighted nx.Graph into (labels, matrix).
    Nodes are taken in sorted order; missing edges become NO_EDGE.
    """
    nodes = sorted(graph.nodes())
    index = {node: i for i, node in enumerate(nodes)}
    n = len(nodes)

    matrix = [[NO_EDGE] * n for _ in range(n)]
    for i in range(n):
        matrix[i][i] = 0

    for u, v, data in graph.edges(data=True):
        if u == v:
            continue
        weight = data.get("weight", 1)
        matrix[index[u]][index[v]] = weight
        matrix[index[v]][index[u]] = weight

    labels = [str(graph.nodes[node].get("label", node)) for node in nodes]
    return labels, matrix


def _node_name(graph, node):
    return graph.nodes[node].get("label", node)


def visualize_graph(graph, output_file):
    """Save a PNG of the generated graph with its reference MST drawn on top"""
    fig, ax = plt.subplots(figsize=(10, 8))
    pos = nx.spring_layout(graph, seed=42)
    names = {node: _node_name(graph, node) for node in graph.nodes()}
    tree = nx.minimum_spanning_tree(graph, weight="weight")

    nx.draw_networkx_nodes(graph, pos, ax=ax, node_color="lightblue", node_size=600)
    nx.draw_networkx_labels(graph, pos, names, ax=ax, font_size=10)
    nx.draw_networkx_edges(graph, pos, ax=ax, edge_color="lightgray", width=1)
    nx.draw_networkx_edges(graph, pos, edgelist=list(tree.edges()), ax=ax, edge_color="red", width=3)
    nx.draw_networkx_edge_labels(
        graph, pos, nx.get_edge_attributes(graph, "weight"), ax=ax, font_size=8
    )

    ax.set_title(f"{graph.number_of_nodes()} nodes, MST highlighted in red")
    ax.set_axis_off()
    fig.savefig(output_file, dpi=150, bbox_inches="tight")
    plt.close(fig)
    print(f"\n  Picture written to {output_file}")


def print_graph_summary(graph):
    """Print node/edge counts, components, the weighted edge list and the MST weight"""
    n = graph.number_of_nodes()
    components = nx.number_connected_components(graph) if n else 0
    density = nx.density(graph) if n > 1 else 0.0

    print("\n" + "=" * 70)
    print(f"Generated graph: {n} nodes, {graph.number_of_edges()} edges")
    print(f"  components: {components}, density: {density:.2f}")
    print("-" * 70)

    for u, v in sorted(graph.edges()):
        print(f"  {_node_name(graph, u)} - {_node_name(graph, v)}: {graph[u][v]['weight']}")

    tree = nx.minimum_spanning_tree(graph, weight="weight")
    print("-" * 70)
    print(f"  reference MST: {tree.number_of_edges()} edges, weight {tree.size(weight='weight'):g}")
    print("=" * 70)


def city_graph(num_cities):
    """Complete nx.Graph over the first ``num_cities`` cities of the catalog"""
    names = [city.name for city in CITIES[:num_cities]]
    labels, matrix = build_distance_matrix(names)

    G = nx.Graph()
    for i, label in enumerate(labels):
        G.add_node(i, label=label)
    for i in range(len(labels)):
        for j in range(i + 1, len(labels)):
            G.add_edge(i, j, weight=matrix[i][j])
    return G


def main(argv=None):
    """Main function to create a graph file"""
    import argparse

    parser = argparse.ArgumentParser(description="Generate graph files for the MST solvers")
    parser.add_argument("--nodes", type=int, default=6, help="Number of nodes (default: 6)")
    parser.add_argument(
        "--edge-prob", type=float, default=0.5, help="Edge probability (default: 0.5)"
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument(
        "--max-weight", type=int, default=10, help="Largest edge weight (default: 10)"
    )
    parser.add_argument(
        "--distinct", action="store_true", help="Give every edge a different weight"
    )
    parser.add_argument(
        "--cities",
        type=int,
        default=None,
        help="Build a complete distance graph over the first N catalog cities instead",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=DEFAULT_GRAPH_FILE,
        help=f"Output file (default: {DEFAULT_GRAPH_FILE})",
    )
    parser.add_argument(
        "--visualize", action="store_true", help="Also save a PNG next to the output file"
    )

    args = parser.parse_args(argv)

    print("=" * 70)
    print("Graph File Generator for Prim / Kruskal MST")
    print("=" * 70)

    if args.cities is not None:
        print(f"\nBuilding city distance graph over {args.cities} cities...")
        graph = city_graph(args.cities)
    else:
        print("\nGenerating random graph...")
        print(f"  Nodes: {args.nodes}")
        print(f"  Edge probability: {args.edge_prob}")
        print(f"  Random seed: {args.seed}")
        graph = create_random_graph(
            args.nodes, args.edge_prob, args.seed, args.max_weight, args.distinct
        )

    print_graph_summary(graph)

    labels, matrix = graph_to_matrix(graph)
    if not save_graph(args.output, labels, matrix):
        print(f"ERROR: could not write {args.output}")
        return 1

    print(f"\n  Created {args.output}: {len(labels)} nodes")

    if args.visualize:
        visualize_graph(graph, os.path.splitext(args.output)[0] + ".png")

    print("\n" + "=" * 70)
    print("Graph file created successfully!")
    print("=" * 70)
    print("\nTo run both MST solvers on it:")
    print(f"  python mst_implementation.py --graph-file {args.output}")
    print("=" * 70)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
