"""Quantization of ASTC color endpoint values and weights.

Values stored in ASTC blocks live in a much smaller range than the one they
are used in: color endpoint values are used in [0, 255] and weights in
[0, 64]. Each stored range is encoded with bits, trits or quints, and each
encoding has its own unquantization procedure from the specification.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .math_utils import count_ones, log2_floor

ENDPOINT_RANGE_MIN_VALUE = 5
"""Smallest legal range for quantized color endpoint values."""

WEIGHT_RANGE_MAX_VALUE = 31
"""Largest legal range for quantized weights."""

_UnquantizeFn = Callable[[int, int, int], int]


def _trit_value(trit: int, bits: int, range_max: int) -> int:
    """Unquantize a trit-encoded color value (Section C.2.13)."""
    a = 0x1FF if bits & 1 else 0
    if range_max == 5:
        b, c = 0, 204
    elif range_max == 11:
        x = (bits >> 1) & 0x1
        b, c = (x << 1) | (x << 2) | (x << 4) | (x << 8), 93
    elif range_max == 23:
        x = (bits >> 1) & 0x3
        b, c = x | (x << 2) | (x << 7), 44
    elif range_max == 47:
        x = (bits >> 1) & 0x7
        b, c = x | (x << 6), 22
    elif range_max == 95:
        x = (bits >> 1) & 0xF
        b, c = (x >> 2) | (x << 5), 11
    elif range_max == 191:
        x = (bits >> 1) & 0x1F
        b, c = (x >> 4) | (x << 4), 5
    else:
        raise ValueError(f"illegal trit encoding for range {range_max}")
    t = (trit * c + b) ^ a
    return (a & 0x80) | (t >> 2)


def _quint_value(quint: int, bits: int, range_max: int) -> int:
    """Unquantize a quint-encoded color value (Section C.2.13)."""
    a = 0x1FF if bits & 1 else 0
    if range_max == 9:
        b, c = 0, 113
    elif range_max == 19:
        x = (bits >> 1) & 0x1
        b, c = (x << 2) | (x << 3) | (x << 8), 54
    elif range_max == 39:
        x = (bits >> 1) & 0x3
        b, c = (x >> 1) | (x << 1) | (x << 7), 26
    elif range_max == 79:
        x = (bits >> 1) & 0x7
        b, c = (x >> 1) | (x << 6), 13
    elif range_max == 159:
        x = (bits >> 1) & 0xF
        b, c = (x >> 3) | (x << 5), 6
    else:
        raise ValueError(f"illegal quint encoding for range {range_max}")
    t = (quint * c + b) ^ a
    return (a & 0x80) | (t >> 2)


def _trit_weight(trit: int, bits: int, range_max: int) -> int:
    """Unquantize a trit-encoded weight (Section C.2.17)."""
    a = 0x7F if bits & 1 else 0
    if range_max == 2:
        return (0, 32, 63)[trit]
    if range_max == 5:
        b, c = 0, 50
    elif range_max == 11:
        b = (bits >> 1) & 1
        b |= (b << 2) | (b << 6)
        c = 23
    elif range_max == 23:
        b = (bits >> 1) & 0x3
        b |= b << 5
        c = 11
    else:
        raise ValueError(f"illegal trit encoding for range {range_max}")
    t = (trit * c + b) ^ a
    return (a & 0x20) | (t >> 2)


def _quint_weight(quint: int, bits: int, range_max: int) -> int:
    """Unquantize a quint-encoded weight (Section C.2.17)."""
    a = 0x7F if bits & 1 else 0
    if range_max == 4:
        return (0, 16, 32, 47, 63)[quint]
    if range_max == 9:
        b, c = 0, 28
    elif range_max == 19:
        b = (bits >> 1) & 0x1
        b = (b << 1) | (b << 6)
        c = 13
    else:
        raise ValueError(f"illegal quint encoding for range {range_max}")
    t = (quint * c + b) ^ a
    return (a & 0x20) | (t >> 2)


@dataclass(frozen=True)
class _QuantizationMap:
    """Lookup tables between quantized and unquantized values."""

    quantization: Tuple[int, ...]
    unquantization: Tuple[int, ...]

    def quantize(self, x: int) -> int:
        return self.quantization[x] if x < len(self.quantization) else 0

    def unquantize(self, x: int) -> int:
        return self.unquantization[x] if x < len(self.unquantization) else 0


def _nearest_quantization(unquantized: Sequence[int]) -> Tuple[int, ...]:
    """For each value in [0, 256), the index of the closest unquantized value."""
    if len(unquantized) <= 1:
        raise ValueError("a quantization map needs at least two values")
    table = []
    for i in range(256):
        best_idx, best_score = 0, 256
        for idx, value in enumerate(unquantized):
            score = (i - value) ** 2
            if score < best_score:
                best_idx, best_score = idx, score
        table.append(best_idx)
    return tuple(table)


def _multi_symbol_map(
    symbols: int, range_max: int, unquantize: _UnquantizeFn
) -> _QuantizationMap:
    """Map for a range encoded with trits (3 symbols) or quints (5 symbols)."""
    if (range_max + 1) % symbols:
        raise ValueError(f"range {range_max} cannot be encoded with {symbols} symbols")
    pow2 = (range_max + 1) // symbols
    num_bits = log2_floor(pow2) if pow2 else 0
    values = tuple(
        unquantize(symbol, bits, range_max)
        for symbol in range(symbols)
        for bits in range(1 << num_bits)
    )
    return _QuantizationMap(_nearest_quantization(values), values)


def _bit_map(total_bits: int, range_max: int) -> _QuantizationMap:
    """Map for a power-of-two range, unquantized by bit replication."""
    if count_ones(range_max + 1) != 1:
        raise ValueError(f"range {range_max} is not one less than a power of two")
    num_bits = log2_floor(range_max + 1)
    unquantized: List[int] = []
    quantized: List[int] = []
    for bits in range(range_max + 1):
        value = bits
        filled = num_bits
        while filled < total_bits:
            shift_up = min(num_bits, total_bits - filled)
            value = (value << shift_up) | (bits >> (num_bits - shift_up))
            filled += shift_up
        unquantized.append(value)

        # Values up to the midpoint round down to the previous level.
        if bits > 0:
            midpoint = (unquantized[bits - 1] + value) // 2
            quantized.extend([bits - 1] * max(0, midpoint + 1 - len(quantized)))
        quantized.extend([bits] * max(0, value + 1 - len(quantized)))

    if len(quantized) != 1 << total_bits:
        raise AssertionError("bit replication did not fill the quantization map")
    return _QuantizationMap(tuple(quantized), tuple(unquantized))


_ENDPOINT_BUILDERS: Dict[int, Callable[[], _QuantizationMap]] = {
    r: (lambda r=r, k=kind: k(r))
    for r, kind in (
        (5, lambda r: _multi_symbol_map(3, r, _trit_value)),
        (7, lambda r: _bit_map(8, r)),
        (9, lambda r: _multi_symbol_map(5, r, _quint_value)),
        (11, lambda r: _multi_symbol_map(3, r, _trit_value)),
        (15, lambda r: _bit_map(8, r)),
        (19, lambda r: _multi_symbol_map(5, r, _quint_value)),
        (23, lambda r: _multi_symbol_map(3, r, _trit_value)),
        (31, lambda r: _bit_map(8, r)),
        (39, lambda r: _multi_symbol_map(5, r, _quint_value)),
        (47, lambda r: _multi_symbol_map(3, r, _trit_value)),
        (63, lambda r: _bit_map(8, r)),
        (79, lambda r: _multi_symbol_map(5, r, _quint_value)),
        (95, lambda r: _multi_symbol_map(3, r, _trit_value)),
        (127, lambda r: _bit_map(8, r)),
        (159, lambda r: _multi_symbol_map(5, r, _quint_value)),
        (191, lambda r: _multi_symbol_map(3, r, _trit_value)),
        (255, lambda r: _bit_map(8, r)),
    )
}

_WEIGHT_BUILDERS: Dict[int, Callable[[], _QuantizationMap]] = {
    r: (lambda r=r, k=kind: k(r))
    for r, kind in (
        (1, lambda r: _bit_map(6, r)),
        (2, lambda r: _multi_symbol_map(3, r, _trit_weight)),
        (3, lambda r: _bit_map(6, r)),
        (4, lambda r: _multi_symbol_map(5, r, _quint_weight)),
        (5, lambda r: _multi_symbol_map(3, r, _trit_weight)),
        (7, lambda r: _bit_map(6, r)),
        (9, lambda r: _multi_symbol_map(5, r, _quint_weight)),
        (11, lambda r: _multi_symbol_map(3, r, _trit_weight)),
        (15, lambda r: _bit_map(6, r)),
        (19, lambda r: _multi_symbol_map(5, r, _quint_weight)),
        (23, lambda r: _multi_symbol_map(3, r, _trit_weight)),
        (31, lambda r: _bit_map(6, r)),
    )
}

_ENDPOINT_RANGES = sorted(_ENDPOINT_BUILDERS)
_WEIGHT_RANGES = sorted(_WEIGHT_BUILDERS)


def _largest_at_most(ranges: Sequence[int], r: int) -> Optional[int]:
    pos = bisect.bisect_right(ranges, r)
    return ranges[pos - 1] if pos else None


@lru_cache(maxsize=None)
def _endpoint_map(r: int) -> Optional[_QuantizationMap]:
    key = _largest_at_most(_ENDPOINT_RANGES, r)
    return _ENDPOINT_BUILDERS[key]() if key is not None else None


@lru_cache(maxsize=None)
def _weight_map(r: int) -> Optional[_QuantizationMap]:
    key = _largest_at_most(_WEIGHT_RANGES, r)
    return _WEIGHT_BUILDERS[key]() if key is not None else None


def _check(condition: bool, message: str) -> None:
    if not condition:
        raise ValueError(message)


def _check_endpoint_range(range_max_value: int) -> None:
    _check(
        ENDPOINT_RANGE_MIN_VALUE <= range_max_value <= 255,
        f"endpoint range {range_max_value} outside "
        f"[{ENDPOINT_RANGE_MIN_VALUE}, 255]",
    )


def _check_weight_range(range_max_value: int) -> None:
    _check(
        1 <= range_max_value <= WEIGHT_RANGE_MAX_VALUE,
        f"weight range {range_max_value} outside [1, {WEIGHT_RANGE_MAX_VALUE}]",
    )


def quantize_ce_value_to_range(value: int, range_max_value: int) -> int:
    """Quantize a color value in [0, 255] to [0, range_max_value]."""
    _check_endpoint_range(range_max_value)
    _check(0 <= value <= 255, f"color value {value} outside [0, 255]")
    qmap = _endpoint_map(range_max_value)
    return qmap.quantize(value) if qmap else 0


def unquantize_ce_value_from_range(value: int, range_max_value: int) -> int:
    """Unquantize a color value in [0, range_max_value] to [0, 255]."""
    _check_endpoint_range(range_max_value)
    _check(
        0 <= value <= range_max_value,
        f"quantized value {value} outside [0, {range_max_value}]",
    )
    qmap = _endpoint_map(range_max_value)
    return qmap.unquantize(value) if qmap else 0


def quantize_weight_to_range(weight: int, range_max_value: int) -> int:
    """Quantize a weight in [0, 64] to [0, range_max_value]."""
    _check_weight_range(range_max_value)
    _check(0 <= weight <= 64, f"weight {weight} outside [0, 64]")
    # The maps work in [0, 64); undo the spec's stretch to [0, 64] first.
    if weight > 33:
        weight -= 1
    qmap = _weight_map(range_max_value)
    return qmap.quantize(weight) if qmap else 0


def unquantize_weight_from_range(weight: int, range_max_value: int) -> int:
    """Unquantize a weight in [0, range_max_value] to [0, 64]."""
    _check_weight_range(range_max_value)
    _check(
        0 <= weight <= range_max_value,
        f"quantized weight {weight} outside [0, {range_max_value}]",
    )
    qmap = _weight_map(range_max_value)
    dq = qmap.unquantize(weight) if qmap else 0
    # Stretch [0, 64) to [0, 64] as described in C.2.17.
    if dq > 32:
        dq += 1
    return dq