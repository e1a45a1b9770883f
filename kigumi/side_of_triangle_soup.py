"""Which side of a closed triangle soup a point lies on."""

from __future__ import annotations

from fractions import Fraction
from typing import Optional, Union

from kigumi.geometry import Point3, Ray, squared_distance
from kigumi.triangle_soup import TriangleSoup

Segment = tuple[Point3, Point3]
Vector = tuple[Fraction, Fraction, Fraction]


def _cross(u: Vector, v: Vector) -> Vector:
    return (
        u[1] * v[2] - u[2] * v[1],
        u[2] * v[0] - u[0] * v[2],
        u[0] * v[1] - u[1] * v[0],
    )


def _dot(u: Vector, v: Vector) -> Fraction:
    return u[0] * v[0] + u[1] * v[1] + u[2] * v[2]


def _along(ray: Ray, t: Fraction) -> Point3:
    return Point3(*(s + t * d for s, d in zip(ray.source, ray.direction)))


def ray_triangle_intersection(
    triangle: tuple[Point3, Point3, Point3], ray: Ray
) -> Optional[Union[Point3, Segment]]:
    """Exact intersection of a ray with a triangle.

    Returns None when they do not meet, a point, or a ``(start, end)``
    segment ordered along the ray when the ray lies in the triangle's plane.
    Degenerate triangles never intersect.
    """
    a, b, c = triangle
    edges = ((a, b), (b, c), (c, a))
    n = _cross(b - a, c - a)
    if n == (0, 0, 0):
        return None

    d = ray.direction
    s = ray.source
    denom = _dot(n, d)
    offset = _dot(n, s - a)

    if denom != 0:
        t = -offset / denom
        if t < 0:
            return None
        x = _along(ray, t)
        if all(_dot(n, _cross(q - p, x - p)) >= 0 for p, q in edges):
            return x
        return None

    if offset != 0:
        return None

    # The ray lies in the plane: clip its parameter range by each edge.
    lo = Fraction(0)
    hi: Optional[Fraction] = None
    for p, q in edges:
        e = q - p
        k0 = _dot(n, _cross(e, s - p))
        k1 = _dot(n, _cross(e, d))
        if k1 == 0:
            if k0 < 0:
                return None
            continue
        bound = -k0 / k1
        if k1 > 0:
            lo = max(lo, bound)
        else:
            hi = bound if hi is None else min(hi, bound)

    if hi is None or lo > hi:
        return None
    if lo == hi:
        return _along(ray, lo)
    return (_along(ray, lo), _along(ray, hi))


def side_of_triangle_soup(soup: TriangleSoup, p: Point3) -> int:
    """Side of ``p`` relative to a closed, outward-oriented soup.

    Returns 1 outside, -1 inside and 0 on the boundary.
    """
    if soup.num_faces() == 0:
        raise ValueError("triangle soup must not be empty")

    tree = soup.aabb_tree()

    for fi_trg in soup.faces():
        p_trg = soup.face_centroid(fi_trg)
        if p == p_trg:
            return 0

        ray = Ray(p, p_trg)
        hits: list[tuple[Fraction, object]] = []

        for leaf in tree.get_intersecting_leaves(ray):
            fi = leaf.face_index
            result = ray_triangle_intersection(soup.triangle(fi), ray)
            if result is None:
                continue
            if isinstance(result, Point3):
                if result == p:
                    return 0
                hits.append((squared_distance(p, result), fi))
            elif p in result:
                return 0

        if not hits:
            raise RuntimeError("cannot determine the side of the point")

        hits.sort(key=lambda hit: hit[0])
        if len(hits) >= 2 and hits[0][0] == hits[1][0]:
            # The ray passes through an edge or vertex shared by several faces.
            continue

        return soup.oriented_side_of_face(hits[0][1], p)

    raise RuntimeError("cannot determine the side of the point")