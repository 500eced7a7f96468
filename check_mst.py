import sys

import networkx as nx

from graph_storage import DEFAULT_GRAPH_FILE, graph_from_file
from mst_implementation import kruskal, prim, to_networkx, verify_with_networkx


def check_graph_file(path, start=0):
    graph = graph_from_file(path)
    if graph is None:
        print(f"Could not load a graph from {path}")
        return False

    G = to_networkx(graph)
    mst = nx.minimum_spanning_tree(G)
    print("Expected MST edges:")
    for u, v in sorted(mst.edges()):
        print(f'  ({u},{v}): {G[u][v]["weight"]}')
    print(f'\nTotal weight: {sum(d["weight"] for _, _, d in mst.edges(data=True))}')
    print(f"Number of edges: {mst.number_of_edges()}")

    # Check connectivity
    print(f"\nOriginal graph connected: {G.number_of_nodes() == 0 or nx.is_connected(G)}")

    ok = True
    # Prim is checked against the start node's component, Kruskal against the whole forest
    for result, reference_start in ((prim(graph, start), start), (kruskal(graph), None)):
        check = verify_with_networkx(graph, result, reference_start)
        print(
            f"{result.algorithm}: cost={result.cost} edges={len(result.edges)} "
            f"complete={result.is_complete} matches_networkx={check['cost_matches']}"
        )
        ok = ok and check["cost_matches"]
    return ok


if __name__ == "__main__":
    path = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_GRAPH_FILE
    sys.exit(0 if check_graph_file(path) else 1)
