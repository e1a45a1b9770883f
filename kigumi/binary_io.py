"""Little-endian binary encoding of integers, booleans, doubles and rationals."""

from __future__ import annotations

import struct
from fractions import Fraction
from typing import BinaryIO, Union

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class BinaryFormatError(ValueError):
    """Raised when a value cannot be encoded or the data cannot be decoded."""


def checked_int32(value: int) -> int:
    """Return ``value`` if it fits in a signed 32-bit integer."""
    if not INT32_MIN <= value <= INT32_MAX:
        raise BinaryFormatError(f"value out of int32 range: {value}")
    return value


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) != size:
        raise BinaryFormatError("unexpected end of stream")
    return data


def write_int32(stream: BinaryIO, value: int) -> None:
    stream.write(struct.pack("<i", checked_int32(value)))


def read_int32(stream: BinaryIO) -> int:
    return struct.unpack("<i", _read_exact(stream, 4))[0]


def write_uint8(stream: BinaryIO, value: int) -> None:
    if not 0 <= value <= 0xFF:
        raise BinaryFormatError(f"value out of uint8 range: {value}")
    stream.write(struct.pack("<B", value))


def read_uint8(stream: BinaryIO) -> int:
    return _read_exact(stream, 1)[0]


def write_bool(stream: BinaryIO, value: bool) -> None:
    write_uint8(stream, 1 if value else 0)


def read_bool(stream: BinaryIO) -> bool:
    return read_uint8(stream) != 0


def write_double(stream: BinaryIO, value: float) -> None:
    stream.write(struct.pack("<d", value))


def read_double(stream: BinaryIO) -> float:
    return struct.unpack("<d", _read_exact(stream, 8))[0]


def _write_magnitude(stream: BinaryIO, n: int) -> None:
    data = n.to_bytes((n.bit_length() + 7) // 8, "big")
    write_int32(stream, len(data))
    stream.write(data)


def _read_magnitude(stream: BinaryIO) -> int:
    count = read_int32(stream)
    if count < 0:
        raise BinaryFormatError(f"negative byte count: {count}")
    return int.from_bytes(_read_exact(stream, count), "big")


def write_rational(stream: BinaryIO, value: Union[int, Fraction]) -> None:
    """Write a sign flag, then the big-endian magnitudes of numerator and denominator."""
    value = Fraction(value)
    write_bool(stream, value < 0)
    _write_magnitude(stream, abs(value.numerator))
    _write_magnitude(stream, value.denominator)


def read_rational(stream: BinaryIO) -> Fraction:
    negative = read_bool(stream)
    num = _read_magnitude(stream)
    den = _read_magnitude(stream)
    if den == 0:
        raise BinaryFormatError("zero denominator")
    value = Fraction(num, den)
    return -value if negative else value