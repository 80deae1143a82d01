"""A little-endian stream of bits read and written in arbitrary-sized chunks."""

from __future__ import annotations


def _mask(bits: int) -> int:
    return (1 << bits) - 1


class BitStream:
    """Bits are appended above the current contents and read from the bottom."""

    def __init__(self, data: int = 0, size: int = 0, capacity: int = 64) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        if not 0 <= size <= capacity:
            raise ValueError(f"size {size} does not fit a {capacity}-bit stream")
        self._capacity = capacity
        self._size = size
        self._data = data & _mask(size)

    @property
    def bits(self) -> int:
        """Number of bits currently held."""
        return self._size

    def put_bits(self, value: int, size: int) -> None:
        """Append the low ``size`` bits of ``value``."""
        if size < 0:
            raise ValueError("size must not be negative")
        if self._size + size > self._capacity:
            raise ValueError(
                f"cannot put {size} bits: {self._capacity - self._size} bits free"
            )
        self._data |= (value & _mask(size)) << self._size
        self._size += size

    def get_bits(self, count: int) -> int:
        """Remove and return the lowest ``count`` bits."""
        if count < 0:
            raise ValueError("count must not be negative")
        if count > self._size:
            raise ValueError(f"cannot get {count} bits: only {self._size} held")
        result = self._data & _mask(count)
        self._data >>= count
        self._size -= count
        return result