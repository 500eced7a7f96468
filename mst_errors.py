"""
Exceptions raised by the graph container and its MST solvers
"""


class MSTError(Exception):
    """Base class for errors raised by the MST package"""

    pass


class InvalidMatrix(MSTError, ValueError):
    """Raised when a label list / weight matrix pair cannot form a graph"""

    def __init__(self, message, details=None):
        super().__init__(message)
        self.details = details or {}


class InvalidDimensions(InvalidMatrix):
    """Label count, row count and row lengths disagree"""

    pass


class AsymmetricMatrix(InvalidMatrix):
    """matrix[i][j] differs from matrix[j][i]"""

    pass


class InvalidWeight(InvalidMatrix):
    """An entry is not a non-negative real number"""

    pass


class EdgeIndexError(MSTError, IndexError):
    """Strict edge write addressed a node outside [0, n)"""

    def __init__(self, i, j, size):
        super().__init__(f"Edge ({i}, {j}) is out of range for {size} nodes")
        self.i = i
        self.j = j
        self.size = size
