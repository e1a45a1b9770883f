from fractions import Fraction
from itertools import permutations

import pytest

from kigumi.face_face_intersection import FaceFaceIntersection
from kigumi.geometry import make_point
from kigumi.intersection_point_inserter import IntersectionPointInserter
from kigumi.point_list import PointList
from kigumi.triangle_region import TriangleRegion, intersection


def _sub(u, v):
    return tuple(x - y for x, y in zip(u, v))


def _cross(u, v):
    return (
        u[1] * v[2] - u[2] * v[1],
        u[2] * v[0] - u[0] * v[2],
        u[0] * v[1] - u[1] * v[0],
    )


def _dot(u, v):
    return sum(x * y for x, y in zip(u, v))


def _lerp(s, e, t):
    return make_point(*(x + t * (y - x) for x, y in zip(s, e)))


def _normal(tri):
    return _cross(_sub(tri[1], tri[0]), _sub(tri[2], tri[0]))


def _cyclic_edges(poly):
    return list(zip(poly, poly[1:] + poly[:1]))


def _plane_section(tri, plane_tri):
    n = _normal(plane_tri)
    origin = plane_tri[0]
    dists = [_dot(n, _sub(v, origin)) for v in tri]
    pts = [v for v, d in zip(tri, dists) if d == 0]
    for (u, du), (v, dv) in _cyclic_edges(list(zip(tri, dists))):
        if du * dv < 0:
            pts.append(_lerp(u, v, Fraction(du) / (du - dv)))
    return pts


def _coplanar_intersection(t1, t2):
    n = _normal(t2)
    poly = list(t1)
    for u, v in _cyclic_edges(list(t2)):
        def side(x, u=u, v=v):
            return _dot(_cross(_sub(v, u), _sub(x, u)), n)

        clipped = []
        for s, e in _cyclic_edges(poly):
            ds, de = side(s), side(e)
            if de >= 0:
                if ds < 0:
                    clipped.append(_lerp(s, e, Fraction(ds) / (ds - de)))
                clipped.append(e)
            elif ds >= 0:
                clipped.append(_lerp(s, e, Fraction(ds) / (ds - de)))
        poly = clipped
        if not poly:
            return []

    unique = list(dict.fromkeys(poly))
    changed = True
    while changed and len(unique) > 2:
        changed = False
        for idx, x in enumerate(unique):
            prev = unique[idx - 1]
            nxt = unique[(idx + 1) % len(unique)]
            d1, d2 = _sub(prev, x), _sub(nxt, x)
            if _cross(d1, d2) == (0, 0, 0) and _dot(d1, d2) < 0:
                del unique[idx]
                changed = True
                break
    return unique


def _triangle_intersection(t1, t2):
    """Vertices of the intersection of two non-degenerate triangles."""
    n1 = _normal(t1)
    if all(_dot(n1, _sub(v, t1[0])) == 0 for v in t2):
        return _coplanar_intersection(t1, t2)

    s1 = _plane_section(t1, t2)
    s2 = _plane_section(t2, t1)
    if not s1 or not s2:
        return []

    direction = _cross(n1, _normal(t2))

    def key(pt):
        return _dot(direction, tuple(pt))

    lo = max(min(s1, key=key), min(s2, key=key), key=key)
    hi = min(max(s1, key=key), max(s2, key=key), key=key)
    if key(lo) > key(hi):
        return []
    if key(lo) == key(hi):
        return [lo]
    return [lo, hi]


def _make_cube(points, lo, hi):
    (x0, y0, z0), (x1, y1, z1) = lo, hi
    v1 = points.insert(make_point(x0, y0, z0))
    v2 = points.insert(make_point(x1, y0, z0))
    v3 = points.insert(make_point(x0, y1, z0))
    v4 = points.insert(make_point(x1, y1, z0))
    v5 = points.insert(make_point(x0, y0, z1))
    v6 = points.insert(make_point(x1, y0, z1))
    v7 = points.insert(make_point(x0, y1, z1))
    v8 = points.insert(make_point(x1, y1, z1))
    return [
        (v1, v2, v6), (v1, v3, v4), (v1, v4, v2), (v1, v5, v7), (v1, v6, v5), (v1, v7, v3),
        (v8, v2, v4), (v8, v3, v7), (v8, v4, v3), (v8, v5, v6), (v8, v6, v2), (v8, v7, v5),
    ]


def _check(points, abc, pqr):
    abc = sorted(abc)
    pqr = sorted(pqr)
    expected = _triangle_intersection(
        [points.at(i) for i in abc], [points.at(i) for i in pqr]
    )

    inserter = IntersectionPointInserter(points)
    face_face = FaceFaceIntersection(points)
    for abc_perm in list(permutations(abc))[1:]:
        for pqr_perm in list(permutations(pqr))[1:]:
            regions = face_face(*abc_perm, *pqr_perm)
            if len(regions) != len(expected):
                return False
            for region in regions:
                left = intersection(region, TriangleRegion.LEFT_FACE)
                right = intersection(region, TriangleRegion.RIGHT_FACE)
                index = inserter.insert(left, *abc_perm, right, *pqr_perm)
                if points.at(index) not in expected:
                    return False
    return True


def _insert_all(points, coords):
    return [points.insert(make_point(*c)) for c in coords]


TRIANGLE_CASES = {
    "no_intersection_fast": (
        [(0, 0, 0), (3, 0, 0), (0, 3, 0)],
        [(0, -1, 1), (3, -1, 1), (0, -1, 4)],
    ),
    "no_intersection": (
        [(0, 0, 0), (3, 0, 0), (0, 3, 0)],
        [(2, 2, -1), (5, 2, -1), (2, 2, 2)],
    ),
    "edge_edge_1": (
        [(0, 0, 0), (3, 0, 0), (0, 3, 0)],
        [(2, 1, -1), (5, 1, -1), (2, 1, 2)],
    ),
    "edge_face": (
        [(0, 0, 0), (3, 0, 0), (0, 3, 0)],
        [(1, 1, -1), (4, 1, -1), (1, 1, 2)],
    ),
    "edge_edge_2": (
        [(0, 0, 0), (3, 0, 0), (0, 3, 0)],
        [(0, 1, -1), (3, 1, -1), (0, 1, 2)],
    ),
    "vertex_edge": (
        [(0, 0, 0), (3, 0, 0), (0, 3, 0)],
        [(0, 1, -3), (3, 1, -3), (0, 1, 0)],
    ),
    "vertex_face": (
        [(0, 0, 0), (3, 0, 0), (0, 3, 0)],
        [(1, 1, -3), (4, 1, -3), (1, 1, 0)],
    ),
    "vertex_vertex_1": (
        [(0, 0, 0), (3, 0, 0), (0, 3, 0)],
        [(0, 0, -3), (3, 0, -3), (0, 0, 0)],
    ),
    "vertex_vertex_2": (
        [(0, 0, 0), (3, 0, 0), (0, 3, 0)],
        [(0, 0, 0), (3, 0, 0), (0, 0, 3)],
    ),
    "coplanar_no_intersection_fast": (
        [(0, 0, 0), (3, 0, 0), (0, 3, 0)],
        [(4, 4, 0), (1, 4, 0), (4, 1, 0)],
    ),
    "coplanar_no_intersection": (
        [(0, 0, 0), (3, 0, 0), (0, 3, 0)],
        [(5, 2, 0), (2, 2, 0), (5, -1, 0)],
    ),
    "coplanar_edge_edge": (
        [(0, 0, 0), (3, 0, 0), (0, 3, 0)],
        [(2, 2, 0), (-1, 2, 0), (2, -1, 0)],
    ),
    "coplanar_vertex_face": (
        [(0, 0, 0), (5, 0, 0), (0, 5, 0)],
        [(2, 2, 0), (1, 2, 0), (2, 1, 0)],
    ),
    "coplanar_vertex_edge": (
        [(0, 0, 0), (2, 0, 0), (0, 2, 0)],
        [(1, 1, 0), (0, 1, 0), (1, 0, 0)],
    ),
    "coplanar_vertex_vertex": (
        [(0, 0, 0), (1, 0, 0), (0, 1, 0)],
        [(0, 0, 0), (1, 0, 0), (0, 1, 0)],
    ),
}


@pytest.mark.parametrize("name", sorted(TRIANGLE_CASES))
def test_triangle_pairs(name):
    left, right = TRIANGLE_CASES[name]
    points = PointList()
    abc = _insert_all(points, [tuple(float(v) for v in c) for c in left])
    pqr = _insert_all(points, [tuple(float(v) for v in c) for c in right])
    assert _check(points, abc, pqr) is True


def test_cube_coplanar():
    points = PointList()
    cube = _make_cube(points, (0.0, 0.0, 0.0), (1.0, 1.0, 1.0))
    for left_face in cube:
        for right_face in cube:
            assert _check(points, left_face, right_face) is True


CUBE_PAIRS = {
    "cube_opposite": ((1.0, 1.0, 1.0), (0.0, 0.0, 0.0)),
    "intersecting_cubes_1": ((0.5, 0.0, 0.0), (1.5, 1.0, 1.0)),
    "intersecting_cubes_2": ((0.5, 0.5, 0.0), (1.5, 1.5, 1.0)),
    "intersecting_cubes_3": ((0.5, 0.5, 0.5), (1.5, 1.5, 1.5)),
    "disjoint_cubes_1": ((1.5, 0.0, 0.0), (2.5, 1.0, 1.0)),
    "disjoint_cubes_2": ((1.5, 1.5, 0.0), (2.5, 2.5, 1.0)),
    "disjoint_cubes_3": ((1.5, 1.5, 1.5), (2.5, 2.5, 2.5)),
}


@pytest.mark.parametrize("name", sorted(CUBE_PAIRS))
def test_cube_pairs(name):
    lo, hi = CUBE_PAIRS[name]
    points = PointList()
    left_cube = _make_cube(points, (0.0, 0.0, 0.0), (1.0, 1.0, 1.0))
    right_cube = _make_cube(points, lo, hi)
    for left_face in left_cube:
        for right_face in right_cube:
            assert _check(points, left_face, right_face) is True


def test_far_apart_triangles_have_no_intersection():
    points = PointList()
    abc = _insert_all(points, [(0, 0, 0), (1, 0, 0), (0, 1, 0)])
    pqr = _insert_all(points, [(0, 0, 5), (1, 0, 5), (0, 1, 5)])
    assert FaceFaceIntersection(points)(*abc, *pqr) == []


def test_regions_pair_left_and_right_simplices():
    points = PointList()
    abc = _insert_all(points, [(0, 0, 0), (3, 0, 0), (0, 3, 0)])
    pqr = _insert_all(points, [(1, 1, -1), (4, 1, -1), (1, 1, 2)])
    regions = FaceFaceIntersection(points)(*abc, *pqr)
    assert len(regions) == 2
    for region in regions:
        assert intersection(region, TriangleRegion.LEFT_FACE) != 0
        assert intersection(region, TriangleRegion.RIGHT_FACE) != 0


def test_repeated_calls_give_same_result():
    points = PointList()
    abc = _insert_all(points, [(0, 0, 0), (2, 0, 0), (0, 2, 0)])
    pqr = _insert_all(points, [(1, 1, 0), (0, 1, 0), (1, 0, 0)])
    face_face = FaceFaceIntersection(points)
    first = face_face(*abc, *pqr)
    second = face_face(*abc, *pqr)
    assert first == second
    assert len(first) == 3