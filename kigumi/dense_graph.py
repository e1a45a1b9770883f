"""An undirected multigraph stored as a dense triangular matrix."""

from __future__ import annotations


class DenseUndirectedGraph:
    """Counts edges between every pair of vertices, loops included."""

    def __init__(self, order: int) -> None:
        if order < 0:
            raise ValueError("order must not be negative")
        self._order = order
        self._m = [0] * (order * (order + 1) // 2)

    def _slot(self, i: int, j: int) -> int:
        if not 0 <= i < self._order:
            raise IndexError("i")
        if not 0 <= j < self._order:
            raise IndexError("j")
        if i > j:
            i, j = j, i
        return self._order * i + j - i * (i + 1) // 2

    def _at(self, i: int, j: int) -> int:
        return self._m[self._slot(i, j)]

    def add_edge(self, i: int, j: int) -> None:
        self._m[self._slot(i, j)] += 1

    def degree(self, i: int) -> int:
        return sum(self._at(i, j) for j in range(self._order))

    def has_edge(self, i: int, j: int) -> bool:
        return self._at(i, j) != 0

    def is_connected(self) -> bool:
        if self._order == 0:
            raise IndexError("graph has no vertices")
        visited = [False] * self._order
        stack = [0]
        while stack:
            i = stack.pop()
            visited[i] = True
            stack.extend(
                j for j in range(self._order) if self.has_edge(i, j) and not visited[j]
            )
        return all(visited)

    def is_simple(self) -> bool:
        for i in range(self._order):
            if self._at(i, i) != 0:
                return False
            if any(self._at(i, j) > 1 for j in range(i + 1, self._order)):
                return False
        return True

    def max_degree(self) -> int:
        return max((self.degree(i) for i in range(self._order)), default=0)

    def order(self) -> int:
        return self._order