"""Exact-arithmetic triangle soup geometry: predicates, intersections, AABB trees and I/O."""

__version__ = "0.1.0"