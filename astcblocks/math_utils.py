"""Bit-twiddling helpers."""

from __future__ import annotations

from typing import Optional, Union

from .uint128 import UInt128


def log2_floor(n: int) -> int:
    """Floor of log2(n); -1 for zero."""
    if n < 0:
        raise ValueError("log2_floor needs a non-negative value")
    return n.bit_length() - 1


def count_ones(n: int) -> int:
    """Number of set bits in a non-negative integer."""
    if n < 0:
        raise ValueError("count_ones needs a non-negative value")
    return bin(n).count("1")


def reverse_bits(value: int, width: int = 32) -> int:
    """Reverse the order of the low ``width`` bits of ``value``."""
    if width <= 0:
        raise ValueError("width must be positive")
    value &= (1 << width) - 1
    return int(format(value, f"0{width}b")[::-1], 2)


def get_bits(
    source: Union[int, UInt128],
    offset: int,
    count: int,
    width: Optional[int] = None,
) -> Union[int, UInt128]:
    """Extract ``count`` bits of ``source`` starting at bit ``offset``.

    ``width`` is the size of the source type: 128 for a UInt128, 64 otherwise
    unless given. The result has the same type as ``source``.
    """
    is_wide = isinstance(source, UInt128)
    if width is None:
        width = 128 if is_wide else 64
    if count <= 0:
        raise ValueError("count must be positive")
    if offset < 0 or offset + count > width:
        raise ValueError(f"bits [{offset}, {offset + count}) exceed {width}-bit value")
    value = (int(source) >> offset) & ((1 << count) - 1)
    return UInt128(value) if is_wide else value