from fractions import Fraction

import pytest

from kigumi.aabb_tree import AABBLeaf, AABBTree, bbox_intersects
from kigumi.geometry import Bbox, Ray, make_point


def _grid_leaves(n):
    return [AABBLeaf(Bbox(i, i % 3, 0, i + 1, i % 3 + 1, 1)) for i in range(n)]


SIZES = [0, 1, 2, 3, 4, 5, 7, 16, 33]


@pytest.mark.parametrize("n", SIZES)
def test_box_query_matches_scan(n):
    leaves = _grid_leaves(n)
    tree = AABBTree(leaves)
    query = Bbox(2.5, 0, 0, 6.5, 1.5, 1)
    found = tree.get_intersecting_leaves(query)
    assert len(found) == len(set(found))
    assert set(found) == {leaf for leaf in leaves if leaf.bbox.intersects(query)}


@pytest.mark.parametrize("n", SIZES)
def test_query_covering_everything_returns_all_leaves(n):
    leaves = _grid_leaves(n)
    tree = AABBTree(leaves)
    found = tree.get_intersecting_leaves(Bbox(-1, -1, -1, 100, 100, 100))
    assert sorted(found, key=lambda leaf: leaf.bbox.xmin) == leaves
    assert len(tree) == n


@pytest.mark.parametrize("n", SIZES)
def test_disjoint_query_returns_nothing(n):
    tree = AABBTree(_grid_leaves(n))
    assert tree.get_intersecting_leaves(Bbox(-10, -10, -10, -5, -5, -5)) == []


@pytest.mark.parametrize("n", SIZES)
def test_ray_query_matches_scan(n):
    leaves = _grid_leaves(n)
    tree = AABBTree(leaves)
    half = Fraction(1, 2)
    ray = Ray(make_point(-1, half, half), make_point(0, half, half))
    found = tree.get_intersecting_leaves(ray)
    expected = {leaf for leaf in leaves if bbox_intersects(leaf.bbox, ray)}
    assert set(found) == expected
    assert all(leaf.bbox.ymin <= half <= leaf.bbox.ymax for leaf in found)


def test_ray_hits_box_only_in_front():
    box = Bbox(0, 0, 0, 1, 1, 1)
    half = Fraction(1, 2)
    toward = Ray(make_point(-1, half, half), make_point(0, half, half))
    away = Ray(make_point(-1, half, half), make_point(-2, half, half))
    assert bbox_intersects(box, toward)
    assert not bbox_intersects(box, away)


def test_ray_parallel_to_box_outside_misses():
    box = Bbox(0, 0, 0, 1, 1, 1)
    ray = Ray(make_point(-1, 2, 0), make_point(0, 2, 0))
    assert not bbox_intersects(box, ray)


def test_unsupported_query_type():
    with pytest.raises(TypeError):
        bbox_intersects(Bbox(0, 0, 0, 1, 1, 1), make_point(0, 0, 0))