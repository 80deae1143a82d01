"""An unsigned 128-bit integer with wrap-around arithmetic."""

from __future__ import annotations

_MASK64 = (1 << 64) - 1
_MASK128 = (1 << 128) - 1


def _coerce(value: object) -> int | None:
    if isinstance(value, UInt128):
        return value._value
    if isinstance(value, int):
        return value & _MASK128
    return None


class UInt128:
    """Immutable unsigned 128-bit value; all arithmetic wraps modulo 2**128."""

    __slots__ = ("_value",)

    def __init__(self, value: int | UInt128 = 0) -> None:
        if isinstance(value, UInt128):
            value = value._value
        elif not isinstance(value, int):
            raise TypeError(f"cannot build UInt128 from {type(value).__name__}")
        self._value = value & _MASK128

    @classmethod
    def from_parts(cls, high: int, low: int) -> UInt128:
        """Build a value from its upper and lower 64-bit halves."""
        return cls(((high & _MASK64) << 64) | (low & _MASK64))

    @property
    def low(self) -> int:
        """The lower 64 bits."""
        return self._value & _MASK64

    @property
    def high(self) -> int:
        """The upper 64 bits."""
        return self._value >> 64

    def __int__(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"UInt128(0x{self._value:032x})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, UInt128):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    @staticmethod
    def _check_shift(shift: int) -> int:
        if shift < 0:
            raise ValueError("negative shift count")
        return shift

    def __lshift__(self, shift: int) -> UInt128:
        return UInt128(self._value << self._check_shift(shift))

    def __rshift__(self, shift: int) -> UInt128:
        return UInt128(self._value >> self._check_shift(shift))

    def __or__(self, other: object) -> UInt128:
        value = _coerce(other)
        if value is None:
            return NotImplemented
        return UInt128(self._value | value)

    __ror__ = __or__

    def __and__(self, other: object) -> UInt128:
        value = _coerce(other)
        if value is None:
            return NotImplemented
        return UInt128(self._value & value)

    __rand__ = __and__

    def __xor__(self, other: object) -> UInt128:
        value = _coerce(other)
        if value is None:
            return NotImplemented
        return UInt128(self._value ^ value)

    __rxor__ = __xor__

    def __invert__(self) -> UInt128:
        return UInt128(~self._value)

    def __add__(self, other: object) -> UInt128:
        value = _coerce(other)
        if value is None:
            return NotImplemented
        return UInt128(self._value + value)

    __radd__ = __add__

    def __sub__(self, other: object) -> UInt128:
        value = _coerce(other)
        if value is None:
            return NotImplemented
        return UInt128(self._value - value)

    def __rsub__(self, other: object) -> UInt128:
        value = _coerce(other)
        if value is None:
            return NotImplemented
        return UInt128(value - self._value)