"""An unstructured collection of triangles with per-face data."""

from __future__ import annotations

import operator
import threading
from dataclasses import dataclass
from fractions import Fraction
from functools import reduce
from typing import Any, BinaryIO, Callable, Iterable, Iterator, Optional, Sequence

from kigumi.aabb_tree import AABBLeaf, AABBTree
from kigumi.binary_io import (
    BinaryFormatError,
    read_bool,
    read_double,
    read_int32,
    read_rational,
    write_bool,
    write_double,
    write_int32,
    write_rational,
)
from kigumi.geometry import (
    Bbox,
    Point3,
    bbox_of_point,
    centroid,
    make_point,
    orientation_3d,
)
from kigumi.mesh_indices import FaceIndex, VertexIndex

Face = tuple[VertexIndex, VertexIndex, VertexIndex]


@dataclass(frozen=True)
class SoupLeaf(AABBLeaf):
    """A tree leaf holding the box of one face."""

    face_index: FaceIndex = FaceIndex()


def _as_face(face: Iterable) -> Face:
    vertices = tuple(VertexIndex(operator.index(v)) for v in face)
    if len(vertices) != 3:
        raise ValueError("a face must have exactly three vertices")
    return vertices  # type: ignore[return-value]


def _item(seq: Sequence, index, what: str):
    i = operator.index(index)
    if not 0 <= i < len(seq):
        raise IndexError(f"{what} index out of range: {i}")
    return seq[i]


class TriangleSoup:
    """Points, triangles referring to them by index, and data for each face."""

    def __init__(
        self,
        points: Optional[Iterable[Point3]] = None,
        faces: Optional[Iterable[Iterable]] = None,
        face_data: Optional[Iterable[Any]] = None,
    ) -> None:
        self._points: list[Point3] = list(points or [])
        self._faces: list[Face] = [_as_face(f) for f in faces or []]
        if face_data is None:
            self._face_data: list[Any] = [None] * len(self._faces)
        else:
            self._face_data = list(face_data)
            if len(self._face_data) != len(self._faces):
                raise ValueError("face data must match the faces one to one")
        self._tree: Optional[AABBTree[SoupLeaf]] = None
        self._tree_lock = threading.Lock()

    def add_vertex(self, p: Point3) -> VertexIndex:
        self._points.append(p)
        self._tree = None
        return VertexIndex(len(self._points) - 1)

    def add_face(self, face: Iterable) -> FaceIndex:
        self._faces.append(_as_face(face))
        self._face_data.append(None)
        self._tree = None
        return FaceIndex(len(self._faces) - 1)

    def num_vertices(self) -> int:
        return len(self._points)

    def num_faces(self) -> int:
        return len(self._faces)

    def vertices(self) -> Iterator[VertexIndex]:
        return (VertexIndex(i) for i in range(len(self._points)))

    def faces(self) -> Iterator[FaceIndex]:
        return (FaceIndex(i) for i in range(len(self._faces)))

    def data(self, fi: FaceIndex) -> Any:
        return _item(self._face_data, fi, "face")

    def set_data(self, fi: FaceIndex, value: Any) -> None:
        _item(self._face_data, fi, "face")
        self._face_data[operator.index(fi)] = value

    def face(self, fi: FaceIndex) -> Face:
        return _item(self._faces, fi, "face")

    def point(self, vi: VertexIndex) -> Point3:
        return _item(self._points, vi, "vertex")

    def triangle(self, fi: FaceIndex) -> tuple[Point3, Point3, Point3]:
        a, b, c = self.face(fi)
        return (self.point(a), self.point(b), self.point(c))

    def bbox(self) -> Bbox:
        return reduce(lambda acc, p: acc.union(bbox_of_point(p)), self._points, Bbox())

    def aabb_tree(self) -> AABBTree[SoupLeaf]:
        """The tree over the face boxes, built on first use."""
        with self._tree_lock:
            if self._tree is None:
                leaves = [SoupLeaf(self.face_bbox(fi), fi) for fi in self.faces()]
                self._tree = AABBTree(leaves)
            return self._tree

    def face_bbox(self, fi: FaceIndex) -> Bbox:
        a, b, c = self.triangle(fi)
        return bbox_of_point(a).union(bbox_of_point(b)).union(bbox_of_point(c))

    def face_centroid(self, fi: FaceIndex) -> Point3:
        return centroid(*self.triangle(fi))

    def oriented_side_of_face(self, fi: FaceIndex, p: Point3) -> int:
        """Side of ``p`` relative to the face's supporting plane: 1, 0 or -1."""
        a, b, c = self.triangle(fi)
        return orientation_3d(a, b, c, p)


def _as_doubles(p: Point3) -> Optional[tuple[float, float, float]]:
    try:
        floats = p.to_floats()
    except OverflowError:
        return None
    if all(Fraction(f) == v for f, v in zip(floats, p)):
        return floats
    return None


def _checked_count(value: int) -> int:
    if value < 0:
        raise BinaryFormatError(f"negative value where a size is expected: {value}")
    return value


def write_triangle_soup(
    stream: BinaryIO,
    soup: TriangleSoup,
    write_face_data: Optional[Callable[[BinaryIO, Any], None]] = None,
) -> None:
    """Write a soup; points that are exact doubles are stored as doubles."""
    write_int32(stream, soup.num_vertices())
    write_int32(stream, soup.num_faces())

    for vi in soup.vertices():
        p = soup.point(vi)
        doubles = _as_doubles(p)
        if doubles is not None:
            write_bool(stream, False)
            for value in doubles:
                write_double(stream, value)
        else:
            write_bool(stream, True)
            for value in p:
                write_rational(stream, value)

    for fi in soup.faces():
        for vi in soup.face(fi):
            write_int32(stream, vi.idx)
        if write_face_data is not None:
            write_face_data(stream, soup.data(fi))


def read_triangle_soup(
    stream: BinaryIO,
    read_face_data: Optional[Callable[[BinaryIO], Any]] = None,
) -> TriangleSoup:
    """Read a soup written by :func:`write_triangle_soup`."""
    num_vertices = _checked_count(read_int32(stream))
    num_faces = _checked_count(read_int32(stream))

    soup = TriangleSoup()
    for _ in range(num_vertices):
        if read_bool(stream):
            coords = [read_rational(stream) for _ in range(3)]
        else:
            coords = [read_double(stream) for _ in range(3)]
        try:
            soup.add_vertex(make_point(*coords))
        except (ValueError, OverflowError) as exc:
            raise BinaryFormatError(f"invalid coordinate: {exc}") from exc

    for _ in range(num_faces):
        face = [_checked_count(read_int32(stream)) for _ in range(3)]
        fi = soup.add_face(face)
        if read_face_data is not None:
            soup.set_data(fi, read_face_data(stream))

    return soup