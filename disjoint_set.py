"""
Union-find forest over node indices 0..n-1
"""


class DisjointSet:
    def __init__(self, size):
        self.parent = list(range(size))

    def __len__(self):
        return len(self.parent)

    def find(self, x):
        """Return the root of x's set, pointing every node on the path at it"""
        root = x
        while self.parent[root] != root:
            root = self.parent[root]

        # Path compression
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]

        return root

    def union(self, x, y):
        """
        Merge the sets holding x and y.

        Returns False when they already share a root, i.e. the edge (x, y)
        would close a cycle.
        """
        root_x = self.find(x)
        root_y = self.find(y)

        if root_x == root_y:
            return False

        self.parent[root_x] = root_y
        return True

    def connected(self, x, y):
        return self.find(x) == self.find(y)
