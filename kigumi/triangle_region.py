"""Symbolic regions (vertices, edges, faces) of a pair of triangles."""

from __future__ import annotations

import enum


class TriangleRegion(enum.IntFlag):
    LEFT_VERTEX_0 = 1
    LEFT_VERTEX_1 = 2
    LEFT_VERTEX_2 = 4
    LEFT_EDGE_01 = 1 | 2
    LEFT_EDGE_12 = 2 | 4
    LEFT_EDGE_20 = 4 | 1
    LEFT_FACE = 1 | 2 | 4
    RIGHT_VERTEX_0 = 8
    RIGHT_VERTEX_1 = 16
    RIGHT_VERTEX_2 = 32
    RIGHT_EDGE_01 = 8 | 16
    RIGHT_EDGE_12 = 16 | 32
    RIGHT_EDGE_20 = 32 | 8
    RIGHT_FACE = 8 | 16 | 32


R = TriangleRegion

_EDGE_VERTICES = {
    R.LEFT_EDGE_01: (R.LEFT_VERTEX_0, R.LEFT_VERTEX_1),
    R.LEFT_EDGE_12: (R.LEFT_VERTEX_1, R.LEFT_VERTEX_2),
    R.LEFT_EDGE_20: (R.LEFT_VERTEX_2, R.LEFT_VERTEX_0),
    R.RIGHT_EDGE_01: (R.RIGHT_VERTEX_0, R.RIGHT_VERTEX_1),
    R.RIGHT_EDGE_12: (R.RIGHT_VERTEX_1, R.RIGHT_VERTEX_2),
    R.RIGHT_EDGE_20: (R.RIGHT_VERTEX_2, R.RIGHT_VERTEX_0),
}

_FACE_EDGES = {
    R.LEFT_FACE: (R.LEFT_EDGE_01, R.LEFT_EDGE_12, R.LEFT_EDGE_20),
    R.RIGHT_FACE: (R.RIGHT_EDGE_01, R.RIGHT_EDGE_12, R.RIGHT_EDGE_20),
}

_FACE_VERTICES = {
    R.LEFT_FACE: (R.LEFT_VERTEX_0, R.LEFT_VERTEX_1, R.LEFT_VERTEX_2),
    R.RIGHT_FACE: (R.RIGHT_VERTEX_0, R.RIGHT_VERTEX_1, R.RIGHT_VERTEX_2),
}

_DIMENSION = {
    **{v: 0 for vs in _FACE_VERTICES.values() for v in vs},
    **{e: 1 for e in _EDGE_VERTICES},
    **{f: 2 for f in _FACE_EDGES},
}


def convex_hull(r1: TriangleRegion, r2: TriangleRegion) -> TriangleRegion:
    return TriangleRegion(r1 | r2)


def intersection(r1: TriangleRegion, r2: TriangleRegion) -> TriangleRegion:
    return TriangleRegion(r1 & r2)


def edge_vertices(edge: TriangleRegion) -> tuple[TriangleRegion, TriangleRegion]:
    try:
        return _EDGE_VERTICES[edge]
    except KeyError:
        raise ValueError("the region must be an edge") from None


def face_edges(face: TriangleRegion) -> tuple[TriangleRegion, TriangleRegion, TriangleRegion]:
    try:
        return _FACE_EDGES[face]
    except KeyError:
        raise ValueError("the region must be a face") from None


def face_vertices(face: TriangleRegion) -> tuple[TriangleRegion, TriangleRegion, TriangleRegion]:
    try:
        return _FACE_VERTICES[face]
    except KeyError:
        raise ValueError("the region must be a face") from None


def dimension(region: TriangleRegion) -> int:
    try:
        return _DIMENSION[region]
    except KeyError:
        raise ValueError("the region must be a simplex") from None


def is_left_region(region: TriangleRegion) -> bool:
    return convex_hull(region, TriangleRegion.LEFT_FACE) == TriangleRegion.LEFT_FACE