"""
JSON persistence for graphs.

A graph file holds ``{"cityNames": [...], "matrix": [[...], ...]}``; a missing
edge is stored as null. Failures are logged and reported through the return
value instead of raising.
"""

import os
import json
import logging

from mst_errors import InvalidMatrix
from mst_graph import NO_EDGE, Graph

logger = logging.getLogger(__name__)

DEFAULT_GRAPH_FILE = "graph_data.json"


def _encode_weight(weight):
    return None if weight == NO_EDGE else weight


def _decode_weight(weight):
    return NO_EDGE if weight is None else weight


def save_graph(path, labels, matrix):
    """Write labels and matrix to ``path``. Returns True on success."""
    data = {
        "cityNames": list(labels),
        "matrix": [[_encode_weight(w) for w in row] for row in matrix],
    }

    try:
        text = json.dumps(data, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        logger.error(f"Saving graph to {path} failed: {e}")
        return False

    # An existing file is only replaced once the new one is fully written
    tmp_path = path + ".tmp"
    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_path, path)
    except OSError as e:
        logger.error(f"Saving graph to {path} failed: {e}")
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        return False

    logger.debug(f"Saved graph with {len(data['cityNames'])} nodes to {path}")
    return True


def load_graph(path):
    """
    Read a graph file.

    Returns {"cityNames": [...], "matrix": [[...]]} with missing edges as
    NO_EDGE, or None when the file is missing, unreadable or malformed.
    """
    if not os.path.exists(path):
        logger.debug(f"No graph file at {path}")
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Loading graph from {path} failed: {e}")
        return None

    if not isinstance(data, dict):
        logger.error(f"Graph file {path} does not hold a JSON object")
        return None

    names = data.get("cityNames") or []
    matrix = data.get("matrix") or []
    if not isinstance(names, list) or not isinstance(matrix, list) or not all(
        isinstance(row, list) for row in matrix
    ):
        logger.error(f"Graph file {path} has malformed cityNames/matrix")
        return None

    return {
        "cityNames": [str(name) for name in names],
        "matrix": [[_decode_weight(w) for w in row] for row in matrix],
    }


def graph_from_file(path):
    """Load ``path`` into a Graph, or None when it is missing or invalid"""
    data = load_graph(path)
    if data is None:
        return None

    try:
        return Graph(data["cityNames"], data["matrix"])
    except InvalidMatrix as e:
        logger.error(f"Graph file {path} is not a valid graph: {e}")
        return None


def save_graph_object(path, graph):
    return save_graph(path, graph.get_labels(), graph.get_matrix())


def list_graph_files(directory):
    """Sorted names of the *.json files in ``directory``"""
    try:
        files = os.listdir(directory)
    except OSError:
        return []
    return sorted(f for f in files if f.endswith(".json"))


def delete_graph_file(path):
    """Remove a graph file. Returns False when it does not exist or cannot be removed."""
    if not os.path.exists(path):
        return False

    try:
        os.remove(path)
    except OSError as e:
        logger.error(f"Deleting graph file {path} failed: {e}")
        return False

    return True
