"""A bounding-volume hierarchy of axis-aligned boxes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction
from functools import reduce
from typing import Generic, Iterable, Optional, TypeVar, Union

from kigumi.geometry import Bbox, Ray


@dataclass(frozen=True)
class AABBLeaf:
    """A leaf of the tree, identified by its bounding box."""

    bbox: Bbox


LeafT = TypeVar("LeafT", bound=AABBLeaf)


@dataclass
class _Node:
    bbox: Bbox
    left: object
    right: object


def _is_empty(box: Bbox) -> bool:
    return box.xmin > box.xmax or box.ymin > box.ymax or box.zmin > box.zmax


def _param(bound: float, s: Fraction, d: Fraction) -> Optional[Fraction]:
    """Ray parameter at which the coordinate reaches ``bound``; None if unbounded."""
    if math.isinf(bound):
        return None
    return (Fraction(bound) - s) / d


def _ray_hits_box(box: Bbox, ray: Ray) -> bool:
    if _is_empty(box):
        return False
    lows = (box.xmin, box.ymin, box.zmin)
    highs = (box.xmax, box.ymax, box.zmax)
    t_low = Fraction(0)
    t_high: Optional[Fraction] = None
    for lo, hi, s, d in zip(lows, highs, ray.source, ray.direction):
        if d == 0:
            if not lo <= s <= hi:
                return False
            continue
        t_enter = _param(lo, s, d)
        t_exit = _param(hi, s, d)
        if d < 0:
            t_enter, t_exit = t_exit, t_enter
        if t_enter is not None and t_enter > t_low:
            t_low = t_enter
        if t_exit is not None and (t_high is None or t_exit < t_high):
            t_high = t_exit
        if t_high is not None and t_low > t_high:
            return False
    return True


def bbox_intersects(bbox: Bbox, query: Union[Bbox, Ray]) -> bool:
    """Whether ``bbox`` meets a box or a ray."""
    if isinstance(query, Bbox):
        return bbox.intersects(query)
    if isinstance(query, Ray):
        return _ray_hits_box(bbox, query)
    raise TypeError(f"unsupported query type: {type(query).__name__}")


def _union_of(leaves: list) -> Bbox:
    return reduce(lambda acc, leaf: acc.union(leaf.bbox), leaves, Bbox())


def _build(leaves: list) -> _Node:
    bbox = _union_of(leaves)
    if len(leaves) == 2:
        return _Node(bbox, leaves[0], leaves[1])

    axis = bbox.longest_axis()
    ordered = sorted(leaves, key=lambda leaf: leaf.bbox.center()[axis])
    if len(ordered) == 3:
        return _Node(bbox, ordered[0], _build(ordered[1:]))

    half = len(ordered) // 2
    return _Node(bbox, _build(ordered[:half]), _build(ordered[half:]))


class AABBTree(Generic[LeafT]):
    """A binary tree over leaves, split at the median along the longest axis."""

    def __init__(self, leaves: Iterable[LeafT]) -> None:
        self._leaves: list[LeafT] = list(leaves)
        self._root: object = None
        if len(self._leaves) == 1:
            self._root = self._leaves[0]
        elif len(self._leaves) > 1:
            self._root = _build(self._leaves)

    def __len__(self) -> int:
        return len(self._leaves)

    def get_intersecting_leaves(self, query: Union[Bbox, Ray]) -> list[LeafT]:
        """All leaves whose boxes meet the query."""
        root = self._root
        if root is None:
            return []
        if not isinstance(root, _Node):
            return [root] if bbox_intersects(root.bbox, query) else []
        found: list[LeafT] = []
        self._traverse(root, query, found)
        return found

    def _traverse(self, node: _Node, query, found: list) -> None:
        for child in (node.left, node.right):
            if not bbox_intersects(child.bbox, query):
                continue
            if isinstance(child, _Node):
                self._traverse(child, query, found)
            else:
                found.append(child)