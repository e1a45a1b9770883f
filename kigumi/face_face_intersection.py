"""Symbolic intersection of two triangles given by point indices."""

from __future__ import annotations

from itertools import combinations

from kigumi.geometry import compare_lexicographically, coplanar_orientation, orientation_3d
from kigumi.point_list import PointList
from kigumi.triangle_region import (
    TriangleRegion,
    convex_hull,
    dimension,
    edge_vertices,
    face_edges,
    face_vertices,
    is_left_region,
)

_Pair = tuple[TriangleRegion, TriangleRegion]


def _sort_descending(ids: tuple[int, ...]) -> tuple[tuple[int, ...], int]:
    """Sort ids in descending order and return the parity of the permutation."""
    ascending_pairs = sum(1 for x, y in combinations(ids, 2) if x < y)
    parity = -1 if ascending_pairs % 2 else 1
    return tuple(sorted(ids, reverse=True)), parity


class FaceFaceIntersection:
    """Computes the intersection of triangles abc (left) and pqr (right).

    The result lists the vertices of the intersection as regions, each the
    union of the left and right simplices that meet there, ordered along the
    boundary of the intersection.
    """

    def __init__(self, points: PointList) -> None:
        self._points = points
        self._intersections: list[_Pair] = []
        self._orientation_cache: dict[tuple[int, ...], int] = {}

    def __call__(self, a: int, b: int, c: int, p: int, q: int, r: int) -> list[TriangleRegion]:
        self._intersections = []
        self._orientation_cache = {}

        fabc = TriangleRegion.LEFT_FACE
        fpqr = TriangleRegion.RIGHT_FACE
        eab, ebc, eca = face_edges(fabc)
        epq, eqr, erp = face_edges(fpqr)

        orient = self._orient_3d
        apqr = orient(a, p, q, r)
        bpqr = orient(b, p, q, r)
        cpqr = orient(c, p, q, r)
        pabc = orient(p, a, b, c)
        qabc = orient(q, a, b, c)
        rabc = orient(r, a, b, c)

        self._edge_face(eab, a, b, fpqr, p, q, r, apqr, bpqr)
        self._edge_face(ebc, b, c, fpqr, p, q, r, bpqr, cpqr)
        self._edge_face(eca, c, a, fpqr, p, q, r, cpqr, apqr)
        self._edge_face(epq, p, q, fabc, a, b, c, pabc, qabc)
        self._edge_face(eqr, q, r, fabc, a, b, c, qabc, rabc)
        self._edge_face(erp, r, p, fabc, a, b, c, rabc, pabc)

        return self._ordered_result()

    def _ordered_result(self) -> list[TriangleRegion]:
        inters = self._intersections
        if len(inters) <= 2:
            return [convex_hull(first, second) for first, second in inters]

        size = len(inters)
        edges = [
            (i, j)
            for i, j in combinations(range(size), 2)
            if dimension(convex_hull(inters[i][0], inters[j][0])) == 1
            or dimension(convex_hull(inters[i][1], inters[j][1])) == 1
        ]

        visited = [False] * size
        result: list[TriangleRegion] = []
        i = 0
        while True:
            first, second = inters[i]
            result.append(convex_hull(first, second))
            visited[i] = True
            if len(result) == size:
                break
            for j, k in edges:
                if j == i and not visited[k]:
                    i = k
                    break
                if k == i and not visited[j]:
                    i = j
                    break
        return result

    # Conventions shared by the helpers below:
    # 1. a, p, q, r are inclusive; b is exclusive.
    # 2. va lying in the interior of an edge of the other triangle is handled,
    #    the other triangle's vertices lying in the interior of eab are not.
    # 3. Regions of the same dimension are paired only when eab is a left region.

    def _edge_face(self, eab, a, b, fpqr, p, q, r, apqr, bpqr) -> None:
        if apqr * bpqr > 0:
            return

        if apqr == 0 and bpqr == 0:
            self._edge_face_2d(eab, a, b, fpqr, p, q, r)
            return

        abpq = self._orient_3d(a, b, p, q)
        abqr = self._orient_3d(a, b, q, r)
        abrp = self._orient_3d(a, b, r, p)

        if abpq * abqr < 0 or abqr * abrp < 0 or abrp * abpq < 0:
            return

        va, _ = edge_vertices(eab)
        epq, eqr, erp = face_edges(fpqr)
        vp, vq, vr = face_vertices(fpqr)

        first = eab
        if apqr == 0:
            first = va
        elif bpqr == 0:
            return

        second = fpqr
        if abpq == 0 and abqr == 0:
            second = vq
        elif abqr == 0 and abrp == 0:
            second = vr
        elif abrp == 0 and abpq == 0:
            second = vp
        elif abpq == 0:
            second = epq
        elif abqr == 0:
            second = eqr
        elif abrp == 0:
            second = erp

        self._add_if_owned(first, second)

    def _edge_face_2d(self, eab, a, b, fpqr, p, q, r) -> None:
        va, _ = edge_vertices(eab)
        orient = self._orient_2d

        apq = orient(a, p, q)
        aqr = orient(a, q, r)
        arp = orient(a, r, p)
        bpq = orient(b, p, q)
        bqr = orient(b, q, r)
        brp = orient(b, r, p)

        vertex_face_hits = 0
        if apq * aqr > 0 and aqr * arp > 0 and arp * apq > 0:
            self._insert(va, fpqr)
            vertex_face_hits += 1
        if bpq * bqr > 0 and bqr * brp > 0 and brp * bpq > 0:
            vertex_face_hits += 1
        if vertex_face_hits == 2:
            return

        epq, eqr, erp = face_edges(fpqr)

        abp = orient(a, b, p)
        abq = orient(a, b, q)
        abr = orient(a, b, r)

        self._edge_edge_2d(eab, a, b, epq, p, q, abp, abq, apq, bpq)
        self._edge_edge_2d(eab, a, b, eqr, q, r, abq, abr, aqr, bqr)
        self._edge_edge_2d(eab, a, b, erp, r, p, abr, abp, arp, brp)

    def _edge_edge_2d(self, eab, a, b, epq, p, q, abp, abq, apq, bpq) -> None:
        if abp * abq > 0 or apq * bpq > 0:
            return

        if abp == 0 and abq == 0:
            self._edge_edge_1d(eab, a, epq, p, q)
            return

        va, _ = edge_vertices(eab)
        vp, _ = edge_vertices(epq)

        first = eab
        if apq == 0:
            first = va
        elif bpq == 0:
            return

        second = epq
        if abp == 0:
            second = vp
        elif abq == 0:
            return

        self._add_if_owned(first, second)

    def _edge_edge_1d(self, eab, a, epq, p, q) -> None:
        va, _ = edge_vertices(eab)
        vp, _ = edge_vertices(epq)

        ap = self._compare(a, p)
        aq = self._compare(a, q)

        if ap * aq > 0:
            return
        if ap * aq < 0:
            self._insert(va, epq)
            return
        if ap == 0 and is_left_region(va):
            self._insert(va, vp)

    def _add_if_owned(self, first: TriangleRegion, second: TriangleRegion) -> None:
        if dimension(first) == 1 and dimension(second) == 0:
            return
        if dimension(first) == dimension(second) and not is_left_region(first):
            return
        self._insert(first, second)

    def _insert(self, first: TriangleRegion, second: TriangleRegion) -> None:
        if not is_left_region(first):
            first, second = second, first
        self._intersections.append((first, second))

    def _compare(self, a: int, b: int) -> int:
        return compare_lexicographically(self._points.at(a), self._points.at(b))

    def _orient_2d(self, a: int, b: int, c: int) -> int:
        at = self._points.at
        return coplanar_orientation(at(a), at(b), at(c))

    def _orient_3d(self, a: int, b: int, c: int, d: int) -> int:
        key, parity = _sort_descending((a, b, c, d))
        value = self._orientation_cache.get(key)
        if value is None:
            at = self._points.at
            value = orientation_3d(*(at(i) for i in key))
            self._orientation_cache[key] = value
        return parity * value