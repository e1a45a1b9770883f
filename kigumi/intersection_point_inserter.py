"""Turns symbolic intersection regions into points, sharing constructed points."""

from __future__ import annotations

from kigumi.geometry import line_line_intersection, plane_line_intersection
from kigumi.point_list import PointList
from kigumi.triangle_region import TriangleRegion

R = TriangleRegion


class IntersectionPointInserter:
    """Inserts intersection points into a point list and returns their indices.

    Constructed points are cached by the indices of the points defining them,
    so the same intersection always maps to the same index.
    """

    def __init__(self, points: PointList) -> None:
        self._points = points
        self._line_line_cache: dict[tuple[int, int, int, int], int] = {}
        self._plane_line_cache: dict[tuple[int, int, int, int, int], int] = {}

    def insert(
        self,
        left_region: TriangleRegion,
        a: int,
        b: int,
        c: int,
        right_region: TriangleRegion,
        p: int,
        q: int,
        r: int,
    ) -> int:
        if left_region == R.LEFT_VERTEX_0:
            return a
        if left_region == R.LEFT_VERTEX_1:
            return b
        if left_region == R.LEFT_VERTEX_2:
            return c
        if right_region == R.RIGHT_VERTEX_0:
            return p
        if right_region == R.RIGHT_VERTEX_1:
            return q
        if right_region == R.RIGHT_VERTEX_2:
            return r

        if left_region == R.LEFT_EDGE_12:
            a, b, c = b, c, a
        elif left_region == R.LEFT_EDGE_20:
            a, b, c = c, a, b
        if right_region == R.RIGHT_EDGE_12:
            p, q, r = q, r, p
        elif right_region == R.RIGHT_EDGE_20:
            p, q, r = r, p, q

        if left_region == R.LEFT_FACE:
            return self._plane_line(a, b, c, p, q)
        if right_region == R.RIGHT_FACE:
            return self._plane_line(p, q, r, a, b)
        return self._line_line(a, b, p, q)

    def _line_line(self, a: int, b: int, p: int, q: int) -> int:
        if a > b:
            a, b = b, a
        if p > q:
            p, q = q, p
        if a > p:
            a, p = p, a
            b, q = q, b

        key = (a, b, p, q)
        index = self._line_line_cache.get(key)
        if index is None:
            at = self._points.at
            point = line_line_intersection(at(a), at(b), at(p), at(q))
            index = self._points.insert(point)
            self._line_line_cache[key] = index
        return index

    def _plane_line(self, a: int, b: int, c: int, p: int, q: int) -> int:
        a, b, c = sorted((a, b, c))
        if p > q:
            p, q = q, p

        key = (a, b, c, p, q)
        index = self._plane_line_cache.get(key)
        if index is None:
            at = self._points.at
            point = plane_line_intersection(at(a), at(b), at(c), at(p), at(q))
            index = self._points.insert(point)
            self._plane_line_cache[key] = index
        return index