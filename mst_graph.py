"""
Adjacency-matrix graph used by the Prim and Kruskal solvers.

The weight matrix is square and symmetric; ``NO_EDGE`` marks a missing edge.
Reads outside the matrix return ``NO_EDGE`` and writes outside it are ignored
unless ``strict=True`` is passed.
"""

import logging
import math
from numbers import Integral, Real

from mst_errors import AsymmetricMatrix, EdgeIndexError, InvalidDimensions, InvalidWeight

logger = logging.getLogger(__name__)

NO_EDGE = float("inf")


def _check_weight(value, i, j):
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidWeight(
            f"Weight at ({i}, {j}) must be a real number, got {value!r}",
            details={"row": i, "column": j, "value": value},
        )
    if math.isnan(value) or value < 0:
        raise InvalidWeight(
            f"Weight at ({i}, {j}) must be non-negative, got {value!r}",
            details={"row": i, "column": j, "value": value},
        )
    return value


class WeightMatrix:
    """Square symmetric matrix of non-negative weights.

    The rows passed in are copied; every write goes to both (i, j) and (j, i).
    """

    def __init__(self, rows=()):
        rows = [list(row) for row in rows]
        n = len(rows)

        for i, row in enumerate(rows):
            if len(row) != n:
                raise InvalidDimensions(
                    f"Row {i} has {len(row)} entries, expected {n}",
                    details={"row": i, "length": len(row), "expected": n},
                )

        for i in range(n):
            for j in range(n):
                _check_weight(rows[i][j], i, j)

        for i in range(n):
            for j in range(i + 1, n):
                if rows[i][j] != rows[j][i]:
                    raise AsymmetricMatrix(
                        f"Matrix is not symmetric at ({i}, {j}): "
                        f"{rows[i][j]!r} != {rows[j][i]!r}",
                        details={"row": i, "column": j},
                    )

        self._rows = rows

    @property
    def size(self):
        return len(self._rows)

    def __len__(self):
        return len(self._rows)

    def __eq__(self, other):
        if not isinstance(other, WeightMatrix):
            return NotImplemented
        return self._rows == other._rows

    def in_range(self, i, j):
        """True when both i and j are integer indices in [0, n)"""
        if not isinstance(i, Integral) or not isinstance(j, Integral):
            return False
        n = len(self._rows)
        return 0 <= i < n and 0 <= j < n

    def get(self, i, j):
        if not self.in_range(i, j):
            return NO_EDGE
        return self._rows[i][j]

    def set(self, i, j, weight):
        """Set both (i, j) and (j, i). Caller checks the range."""
        _check_weight(weight, i, j)
        self._rows[i][j] = weight
        self._rows[j][i] = weight

    def to_lists(self):
        return [list(row) for row in self._rows]

    def __repr__(self):
        return f"WeightMatrix(size={self.size})"


class Graph:
    """Labelled undirected graph over a dense weight matrix"""

    def __init__(self, labels=None, matrix=None):
        self._labels = ()
        self._matrix = WeightMatrix()

        if labels is not None or matrix is not None:
            self.initialize(labels or [], matrix or [])

    def initialize(self, labels, matrix):
        """
        Replace the labels and the matrix wholesale.

        Raises InvalidDimensions when the label count, the row count and the
        row lengths disagree; the previous contents are kept on failure.
        """
        labels = tuple(labels)
        if isinstance(matrix, WeightMatrix):
            matrix = matrix.to_lists()
        rows = [list(row) for row in matrix]

        if len(labels) != len(rows):
            raise InvalidDimensions(
                f"Got {len(labels)} labels for a matrix with {len(rows)} rows",
                details={"labels": len(labels), "rows": len(rows)},
            )

        weights = WeightMatrix(rows)

        self._labels = labels
        self._matrix = weights
        logger.debug(f"Graph initialized with {len(labels)} nodes")

    def node_count(self):
        return len(self._labels)

    def __len__(self):
        return len(self._labels)

    def label(self, i):
        return self._labels[i]

    def get_labels(self):
        return list(self._labels)

    def get_matrix(self):
        return self._matrix.to_lists()

    def get_edge(self, i, j):
        """Return the weight of (i, j), or NO_EDGE when either index is out of range"""
        return self._matrix.get(i, j)

    def set_edge(self, i, j, weight, strict=False):
        """
        Set the weight of the undirected edge (i, j).

        Out-of-range indices are ignored, or raise EdgeIndexError when
        ``strict`` is true.
        """
        if not self._matrix.in_range(i, j):
            if strict:
                raise EdgeIndexError(i, j, self.node_count())
            logger.warning(
                f"Ignoring write to edge ({i}, {j}): graph has {self.node_count()} nodes"
            )
            return
        self._matrix.set(i, j, weight)

    def edges(self):
        """Yield (i, j, weight) for every existing edge with i < j"""
        n = self.node_count()
        for i in range(n):
            for j in range(i + 1, n):
                weight = self._matrix.get(i, j)
                if weight != NO_EDGE:
                    yield i, j, weight

    def __repr__(self):
        return f"Graph(nodes={self.node_count()})"
