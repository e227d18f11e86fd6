"""Byte-order helpers for reading little-endian game data, and alignment."""

import struct

__all__ = ["swap_i32", "swap_u32", "swap_i16", "swap_u16", "swap_float", "align"]


def _swap(value: int, size: int, signed: bool) -> int:
    return int.from_bytes(value.to_bytes(size, "little", signed=signed), "big", signed=signed)


def swap_i32(value: int) -> int:
    """Reverse the byte order of a signed 32-bit integer."""
    return _swap(value, 4, True)


def swap_u32(value: int) -> int:
    """Reverse the byte order of an unsigned 32-bit integer."""
    return _swap(value, 4, False)


def swap_i16(value: int) -> int:
    """Reverse the byte order of a signed 16-bit integer."""
    return _swap(value, 2, True)


def swap_u16(value: int) -> int:
    """Reverse the byte order of an unsigned 16-bit integer."""
    return _swap(value, 2, False)


def swap_float(value: float) -> float:
    """Reverse the byte order of a 32-bit float."""
    return struct.unpack("<f", struct.pack(">f", value))[0]


def align(value: int, alignment: int) -> int:
    """Round ``value`` up to a multiple of ``alignment``, as a 16-bit unsigned value."""
    remainder = value % alignment
    result = value if remainder == 0 else value + (alignment - remainder)
    return result & 0xFFFF