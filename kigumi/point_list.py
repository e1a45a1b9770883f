"""An indexed list of points with optional deduplication."""

from __future__ import annotations

from typing import Iterator

from kigumi.geometry import Point3


class PointList:
    """Points addressed by insertion index.

    While a uniqueness check is active, inserting a point equal to one
    already inserted during the check returns the existing index.
    """

    def __init__(self) -> None:
        self._points: list[Point3] = []
        self._index_of: dict[Point3, int] = {}
        self._check_uniqueness = False

    def at(self, i: int) -> Point3:
        if not 0 <= i < len(self._points):
            raise IndexError(f"point index out of range: {i}")
        return self._points[i]

    def insert(self, p: Point3) -> int:
        if not self._check_uniqueness:
            self._points.append(p)
            return len(self._points) - 1
        index = self._index_of.setdefault(p, len(self._points))
        if index == len(self._points):
            self._points.append(p)
        return index

    def take_points(self) -> list[Point3]:
        """Return the stored points and leave the list empty."""
        points, self._points = self._points, []
        return points

    def start_uniqueness_check(self) -> None:
        self._check_uniqueness = True

    def stop_uniqueness_check(self) -> None:
        self._check_uniqueness = False
        self._index_of = {}

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point3]:
        return iter(self._points)