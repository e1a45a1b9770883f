"""Reading and writing triangle soups in the ASCII OFF format."""

from __future__ import annotations

import enum
import re
from pathlib import Path
from typing import Iterable, TextIO, Union

from kigumi.geometry import make_point
from kigumi.mesh_indices import VertexIndex
from kigumi.triangle_soup import TriangleSoup

_FLOAT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_COUNT = re.compile(r"\+?\d+")


class OffFormatError(ValueError):
    """Raised when OFF data cannot be parsed."""


class _State(enum.Enum):
    SIGNATURE = enum.auto()
    NUMBERS = enum.auto()
    VERTICES = enum.auto()
    FACES = enum.auto()
    END = enum.auto()


def _is_blank_or_comment(text: str) -> bool:
    stripped = text.strip()
    return not stripped or stripped.startswith("#")


def _split_first(text: str) -> tuple[str, str]:
    parts = text.split(None, 1)
    if not parts:
        return "", ""
    return parts[0], parts[1] if len(parts) > 1 else ""


def _parse_signature(line: str) -> bool:
    """Check the header keyword; return whether the file claims to be binary."""
    token, rest = _split_first(line)
    if token.startswith("ST"):
        token = token[2:]
    if token.startswith("C"):
        token = token[1:]
    if token.startswith("N"):
        token = token[1:]
    if token != "OFF":
        raise OffFormatError(f"invalid header line: {line}")

    if _is_blank_or_comment(rest):
        return False

    token, rest = _split_first(rest)
    if token != "BINARY" or not _is_blank_or_comment(rest):
        raise OffFormatError(f"invalid header line: {line}")
    return True


def _count(token: str) -> int:
    if not _COUNT.fullmatch(token):
        raise ValueError(token)
    return int(token)


def _double(token: str) -> float:
    if not _FLOAT.fullmatch(token):
        raise ValueError(token)
    return float(token)


def _after_vertices(num_faces: int) -> _State:
    return _State.FACES if num_faces else _State.END


def _parse_lines(lines: Iterable[str]) -> TriangleSoup:
    soup = TriangleSoup()
    num_vertices = 0
    num_faces = 0
    state = _State.SIGNATURE

    for raw in lines:
        line = raw.rstrip("\r\n")
        if _is_blank_or_comment(line):
            continue
        tokens = line.split()

        if state is _State.SIGNATURE:
            if _parse_signature(line):
                raise OffFormatError("binary OFF is not supported")
            state = _State.NUMBERS

        elif state is _State.NUMBERS:
            try:
                num_vertices, num_faces = (_count(t) for t in tokens[:2])
            except ValueError:
                raise OffFormatError(f"invalid header line: {line}") from None
            state = _State.VERTICES if num_vertices else _after_vertices(num_faces)

        elif state is _State.VERTICES:
            try:
                x, y, z = (_double(t) for t in tokens[:3])
            except ValueError:
                raise OffFormatError(f"invalid vertex line: {line}") from None
            soup.add_vertex(make_point(x, y, z))
            num_vertices -= 1
            if num_vertices == 0:
                state = _after_vertices(num_faces)

        elif state is _State.FACES:
            try:
                count = _count(tokens[0])
                indices = [_count(t) for t in tokens[1 : 1 + count]]
            except (ValueError, IndexError):
                raise OffFormatError(f"invalid face line: {line}") from None
            if len(indices) != count:
                raise OffFormatError(f"invalid face line: {line}")
            face = [VertexIndex(i) for i in indices]
            for second, third in zip(face[1:], face[2:]):
                soup.add_face((face[0], second, third))
            num_faces -= 1
            if num_faces == 0:
                state = _State.END

        else:
            raise OffFormatError(f"unexpected line: {line}")

    if state is not _State.END:
        raise OffFormatError("unexpected end of file")
    return soup


def read_off(stream: TextIO) -> TriangleSoup:
    """Read an ASCII OFF mesh; polygons are split into triangle fans."""
    return _parse_lines(stream)


def read_off_file(path: Union[str, Path]) -> TriangleSoup:
    with open(path, encoding="utf-8") as stream:
        return read_off(stream)


def _to_double(value) -> float:
    try:
        return float(value)
    except OverflowError:
        return float("inf") if value > 0 else float("-inf")


def write_off(stream: TextIO, soup: TriangleSoup) -> None:
    """Write a soup as ASCII OFF, rounding coordinates to doubles."""
    stream.write("OFF\n")
    stream.write(f"{soup.num_vertices()} {soup.num_faces()} 0\n")
    for vi in soup.vertices():
        coords = (repr(_to_double(v)) for v in soup.point(vi))
        stream.write(" ".join(coords) + "\n")
    for fi in soup.faces():
        a, b, c = soup.face(fi)
        stream.write(f"3 {a.idx} {b.idx} {c.idx}\n")


def write_off_file(path: Union[str, Path], soup: TriangleSoup) -> None:
    with open(path, "w", encoding="utf-8", newline="\n") as stream:
        write_off(stream, soup)