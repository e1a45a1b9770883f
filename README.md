# kigumi

Exact-arithmetic building blocks for working with triangle soups in 3D.
Coordinates are held as `fractions.Fraction`, so orientation tests and
constructed intersection points are exact. Bounding boxes use floats that
are widened just enough to contain the exact points.

## Modules

- `kigumi.geometry` — `Point3`, `Bbox` and `Ray`, with `make_point`,
  `orientation_3d`, `coplanar_orientation`, `compare_lexicographically`,
  `centroid`, `squared_distance`, `line_line_intersection`,
  `plane_line_intersection` and `bbox_of_point`. Predicates return 1, 0 or -1.
- `kigumi.mesh_indices` — `Index`, `FaceIndex` and `VertexIndex`; a
  default-constructed index is invalid (`is_valid()` returns `False`).
- `kigumi.triangle_region` — `TriangleRegion`, a bit flag naming the
  vertices, edges and face of a left and a right triangle, with
  `convex_hull`, `intersection`, `edge_vertices`, `face_edges`,
  `face_vertices`, `dimension` and `is_left_region`.
- `kigumi.point_list` — `PointList`, an indexed point store. Between
  `start_uniqueness_check()` and `stop_uniqueness_check()`, inserting a point
  equal to one inserted earlier in that span returns the existing index.
- `kigumi.face_face_intersection` — `FaceFaceIntersection(points)`; calling it
  with six point indices `(a, b, c, p, q, r)` returns the intersection of
  triangles abc and pqr as a list of `TriangleRegion` values, ordered along
  the boundary of the intersection.
- `kigumi.intersection_point_inserter` — `IntersectionPointInserter(points)`;
  `insert(...)` turns a pair of regions into a point index, returning an
  existing vertex where possible and otherwise constructing (and caching) a
  line-line or plane-line intersection point.
- `kigumi.aabb_tree` — `AABBTree` over `AABBLeaf` objects;
  `get_intersecting_leaves(query)` accepts a `Bbox` or a `Ray`.
  `bbox_intersects` is the underlying test.
- `kigumi.triangle_soup` — `TriangleSoup` with per-face data (`data`,
  `set_data`), a lazily built AABB tree of `SoupLeaf` objects, and
  `face_bbox`, `face_centroid`, `oriented_side_of_face`.
  `write_triangle_soup` / `read_triangle_soup` use a little-endian binary
  format: points that are exactly representable as doubles are stored as
  doubles, others as exact rationals. Optional callbacks read and write the
  face data.
- `kigumi.side_of_triangle_soup` — `side_of_triangle_soup(soup, p)` returns 1
  outside, -1 inside and 0 on the boundary of a closed, outward-oriented
  soup; `ray_triangle_intersection` is the exact ray/triangle test it uses.
  An empty soup raises `ValueError`; a point whose side cannot be found
  raises `RuntimeError`.
- `kigumi.off` — `read_off`, `read_off_file`, `write_off`, `write_off_file`
  for ASCII OFF. Polygons are split into triangle fans; malformed input
  raises `OffFormatError`. Coordinates are written rounded to doubles.
- `kigumi.binary_io` — the primitive encoders (`write_int32`, `read_int32`,
  `write_bool`, `write_double`, `write_rational`, …); errors raise
  `BinaryFormatError`.
- `kigumi.dense_graph` — `DenseUndirectedGraph`, a small multigraph with
  `add_edge`, `degree`, `has_edge`, `is_connected`, `is_simple`,
  `max_degree`.
- `kigumi.parallel` — `parallel_do` (work over a sequence with per-thread
  state) and `parallel_sort` (chunked sort and merge, in place); the thread
  count defaults to the number of CPUs.

## Installing

```
pip install .
```

## Example

```python
from kigumi.geometry import make_point
from kigumi.point_list import PointList
from kigumi.face_face_intersection import FaceFaceIntersection
from kigumi.intersection_point_inserter import IntersectionPointInserter
from kigumi.triangle_region import TriangleRegion, intersection

points = PointList()
a, b, c = (points.insert(make_point(*xyz)) for xyz in [(0, 0, 0), (3, 0, 0), (0, 3, 0)])
p, q, r = (points.insert(make_point(*xyz)) for xyz in [(1, 1, -1), (4, 1, -1), (1, 1, 2)])

regions = FaceFaceIntersection(points)(a, b, c, p, q, r)
inserter = IntersectionPointInserter(points)
for region in regions:
    left = intersection(region, TriangleRegion.LEFT_FACE)
    right = intersection(region, TriangleRegion.RIGHT_FACE)
    print(points.at(inserter.insert(left, a, b, c, right, p, q, r)))
```

Reading a mesh and testing a point:

```python
from kigumi.off import read_off_file
from kigumi.side_of_triangle_soup import side_of_triangle_soup
from kigumi.geometry import make_point

soup = read_off_file("cube.off")
print(side_of_triangle_soup(soup, make_point(0.5, 0.5, 0.5)))
```

## What it does not do

This is a library of building blocks. It has no command-line tool, and it
does not itself perform boolean operations (union, intersection,
difference) on meshes, nor check meshes for defects. The only mesh file
format it reads and writes is ASCII OFF (binary OFF is rejected), besides
its own binary triangle soup format.

## Tests

```
pip install .[test]
pytest
```