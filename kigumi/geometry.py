"""Exact 3D points, predicates and constructions, plus floating-point boxes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Iterator, Union

Number = Union[int, float, Fraction]
Vector = tuple[Fraction, Fraction, Fraction]


def _exact(value: Number) -> Fraction:
    if isinstance(value, Fraction):
        return value
    return Fraction(value)


@dataclass(frozen=True)
class Point3:
    """A point in 3D space with exact rational coordinates."""

    x: Fraction
    y: Fraction
    z: Fraction

    def __post_init__(self) -> None:
        for name in ("x", "y", "z"):
            object.__setattr__(self, name, _exact(getattr(self, name)))

    def __iter__(self) -> Iterator[Fraction]:
        return iter((self.x, self.y, self.z))

    def __sub__(self, other: Point3) -> Vector:
        return (self.x - other.x, self.y - other.y, self.z - other.z)

    def to_floats(self) -> tuple[float, float, float]:
        """Return the coordinates rounded to the nearest floats."""
        return (float(self.x), float(self.y), float(self.z))


def make_point(x: Number, y: Number, z: Number) -> Point3:
    """Build a point from any exact or floating-point coordinates."""
    return Point3(_exact(x), _exact(y), _exact(z))


@dataclass(frozen=True)
class Ray:
    """A ray starting at ``source`` and passing through ``second``."""

    source: Point3
    second: Point3

    def __post_init__(self) -> None:
        if self.source == self.second:
            raise ValueError("degenerate ray")

    @property
    def direction(self) -> Vector:
        return self.second - self.source


def _sign(value: Fraction) -> int:
    return (value > 0) - (value < 0)


def _cross(u: Vector, v: Vector) -> Vector:
    return (
        u[1] * v[2] - u[2] * v[1],
        u[2] * v[0] - u[0] * v[2],
        u[0] * v[1] - u[1] * v[0],
    )


def _dot(u: Vector, v: Vector) -> Fraction:
    return u[0] * v[0] + u[1] * v[1] + u[2] * v[2]


def _along(origin: Point3, direction: Vector, t: Fraction) -> Point3:
    return Point3(*(o + t * d for o, d in zip(origin, direction)))


def orientation_3d(a: Point3, b: Point3, c: Point3, d: Point3) -> int:
    """Sign of the determinant of (b - a, c - a, d - a): 1, 0 or -1."""
    return _sign(_dot(b - a, _cross(c - a, d - a)))


def _orientation_2d(px, py, qx, qy, rx, ry) -> int:
    return _sign((qx - px) * (ry - py) - (qy - py) * (rx - px))


def coplanar_orientation(a: Point3, b: Point3, c: Point3) -> int:
    """Orientation of three points within their plane; 0 when collinear.

    The sign is consistent for all triples lying in one plane.
    """
    o = _orientation_2d(a.x, a.y, b.x, b.y, c.x, c.y)
    if o:
        return o
    o = _orientation_2d(a.y, a.z, b.y, b.z, c.y, c.z)
    if o:
        return o
    return _orientation_2d(a.x, a.z, b.x, b.z, c.x, c.z)


def compare_lexicographically(a: Point3, b: Point3) -> int:
    """Compare x, then y, then z; return -1, 0 or 1."""
    for u, v in zip(a, b):
        if u != v:
            return -1 if u < v else 1
    return 0


def centroid(a: Point3, b: Point3, c: Point3) -> Point3:
    return Point3((a.x + b.x + c.x) / 3, (a.y + b.y + c.y) / 3, (a.z + b.z + c.z) / 3)


def squared_distance(a: Point3, b: Point3) -> Fraction:
    d = a - b
    return _dot(d, d)


def line_line_intersection(a: Point3, b: Point3, p: Point3, q: Point3) -> Point3:
    """Intersection point of the coplanar lines ab and pq."""
    d1 = b - a
    d2 = q - p
    n = _cross(d1, d2)
    nn = _dot(n, n)
    if nn == 0:
        raise ValueError("lines are parallel")
    t = _dot(_cross(p - a, d2), n) / nn
    return _along(a, d1, t)


def plane_line_intersection(
    a: Point3, b: Point3, c: Point3, p: Point3, q: Point3
) -> Point3:
    """Intersection point of the plane abc and the line pq."""
    n = _cross(b - a, c - a)
    d = q - p
    denom = _dot(n, d)
    if denom == 0:
        raise ValueError("line is parallel to the plane")
    t = _dot(n, a - p) / denom
    return _along(p, d, t)


@dataclass(frozen=True)
class Bbox:
    """An axis-aligned box with float bounds; the default box is empty."""

    xmin: float = math.inf
    ymin: float = math.inf
    zmin: float = math.inf
    xmax: float = -math.inf
    ymax: float = -math.inf
    zmax: float = -math.inf

    def union(self, other: Bbox) -> Bbox:
        return Bbox(
            min(self.xmin, other.xmin),
            min(self.ymin, other.ymin),
            min(self.zmin, other.zmin),
            max(self.xmax, other.xmax),
            max(self.ymax, other.ymax),
            max(self.zmax, other.zmax),
        )

    __add__ = union

    def intersects(self, other: Bbox) -> bool:
        return (
            self.xmin <= other.xmax
            and other.xmin <= self.xmax
            and self.ymin <= other.ymax
            and other.ymin <= self.ymax
            and self.zmin <= other.zmax
            and other.zmin <= self.zmax
        )

    def center(self) -> tuple[float, float, float]:
        return (
            (self.xmax + self.xmin) / 2.0,
            (self.ymax + self.ymin) / 2.0,
            (self.zmax + self.zmin) / 2.0,
        )

    def longest_axis(self) -> int:
        """Index of the longest side; the first one on ties."""
        lengths = (self.xmax - self.xmin, self.ymax - self.ymin, self.zmax - self.zmin)
        return max(range(3), key=lengths.__getitem__)


def _interval(value: Fraction) -> tuple[float, float]:
    f = float(value)
    exact = Fraction(f)
    if exact == value:
        return f, f
    if exact < value:
        return f, math.nextafter(f, math.inf)
    return math.nextafter(f, -math.inf), f


def bbox_of_point(p: Point3) -> Bbox:
    """The smallest float box guaranteed to contain the exact point."""
    (x0, x1), (y0, y1), (z0, z1) = (_interval(v) for v in p)
    return Bbox(x0, y0, z0, x1, y1, z1)