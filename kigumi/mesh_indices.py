"""Typed indices for mesh vertices and faces."""

from __future__ import annotations

from dataclasses import dataclass

INVALID_INDEX = 2**64 - 1


@dataclass(frozen=True, order=True)
class Index:
    """A non-negative index; the default value is invalid."""

    idx: int = INVALID_INDEX

    def __post_init__(self) -> None:
        if self.idx < 0:
            raise ValueError("index must not be negative")

    def is_valid(self) -> bool:
        return self.idx != INVALID_INDEX

    def __index__(self) -> int:
        return self.idx

    def __add__(self, n: int):
        if isinstance(n, Index) or not isinstance(n, int):
            return NotImplemented
        return type(self)(self.idx + n)


class FaceIndex(Index):
    """Index of a face."""


class VertexIndex(Index):
    """Index of a vertex."""