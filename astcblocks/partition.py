"""Partitions of ASTC blocks into disjoint texel subsets.

A partition gives each texel of a block a label. Texels that share a label
belong to the same subset and use the same pair of color endpoints. ASTC
derives a partition from a 10-bit partition ID with a fixed hash function
(Section C.2.21). This module generates those partitions and compares them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from .footprint import Footprint

MAX_NUM_SUBSETS = 4
"""The largest number of subsets an ASTC block can be divided into."""

PARTITION_ID_BITS = 10
"""Width of the partition ID stored in multi-subset blocks."""

_MASK32 = 0xFFFFFFFF


@dataclass(frozen=True, eq=False)
class Partition:
    """A per-texel labelling of a block, in raster order.

    ``partition_id`` is the 10-bit ID of a valid ASTC partition, or None when
    the labelling is not known to be one. Two partitions compare equal when
    one can be relabelled into the other, that is when their metric is zero.
    """

    footprint: Footprint
    num_parts: int
    partition_id: Optional[int]
    assignment: Tuple[int, ...] = field(default=())

    def __post_init__(self) -> None:
        assignment = tuple(self.assignment)
        object.__setattr__(self, "assignment", assignment)
        if len(assignment) != self.footprint.num_pixels:
            raise ValueError(
                f"assignment has {len(assignment)} labels, footprint "
                f"{self.footprint} needs {self.footprint.num_pixels}"
            )

    def canonical_key(self) -> Tuple[int, ...]:
        """The assignment relabelled so that labels appear in order 0, 1, ...

        Partitions that are equal share the same key.
        """
        mapping: dict = {}
        for label in self.assignment:
            if label not in mapping:
                mapping[label] = len(mapping)
        return tuple(mapping[label] for label in self.assignment)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Partition):
            return NotImplemented
        if self.footprint != other.footprint:
            return False
        return partition_metric(self, other) == 0

    def __hash__(self) -> int:
        return hash((self.footprint, self.canonical_key()))


def partition_metric(a: Partition, b: Partition) -> int:
    """Number of texels mismatched under the best label mapping from a to b.

    The mapping between labels is chosen greedily, matching the most common
    label pairs first. Raises ValueError if the footprints differ or either
    partition has more than four subsets.
    """
    if a.footprint != b.footprint:
        raise ValueError(
            f"cannot compare partitions of footprints {a.footprint} and {b.footprint}"
        )
    for part in (a, b):
        if part.num_parts > MAX_NUM_SUBSETS:
            raise ValueError(
                f"partition has {part.num_parts} subsets, at most "
                f"{MAX_NUM_SUBSETS} are allowed"
            )

    counts = [[0] * MAX_NUM_SUBSETS for _ in range(MAX_NUM_SUBSETS)]
    for a_val, b_val in zip(a.assignment, b.assignment):
        if not (0 <= a_val < MAX_NUM_SUBSETS and 0 <= b_val < MAX_NUM_SUBSETS):
            raise ValueError(f"label pair ({a_val}, {b_val}) out of range")
        counts[a_val][b_val] += 1

    pairs = sorted(
        (
            (a_label, b_label, counts[a_label][b_label])
            for b_label in range(MAX_NUM_SUBSETS)
            for a_label in range(MAX_NUM_SUBSETS)
        ),
        key=lambda pair: -pair[2],
    )

    used_a: set = set()
    used_b: set = set()
    matched = 0
    for a_label, b_label, count in pairs:
        if a_label in used_a or b_label in used_b:
            continue
        used_a.add(a_label)
        used_b.add(b_label)
        matched += count

    width = a.footprint.width
    height = b.footprint.height
    return width * height - matched


def select_astc_partition(
    seed: int, x: int, y: int, z: int, partition_count: int, num_pixels: int
) -> int:
    """The subset of texel (x, y, z) for a partition seed (Section C.2.21)."""
    if partition_count <= 1:
        return 0

    if num_pixels < 31:
        x <<= 1
        y <<= 1
        z <<= 1

    seed += (partition_count - 1) * 1024

    rnum = seed & _MASK32
    rnum ^= rnum >> 15
    rnum = (rnum - (rnum << 17)) & _MASK32
    rnum = (rnum + (rnum << 7)) & _MASK32
    rnum = (rnum + (rnum << 4)) & _MASK32
    rnum ^= rnum >> 5
    rnum = (rnum + (rnum << 16)) & _MASK32
    rnum ^= rnum >> 7
    rnum ^= rnum >> 3
    rnum = (rnum ^ (rnum << 6)) & _MASK32
    rnum ^= rnum >> 17

    shifts = (0, 4, 8, 12, 16, 20, 24, 28, 18, 22, 26)
    seeds = [((rnum >> s) & 0xF) ** 2 for s in shifts]
    seeds.append((((rnum >> 30) | (rnum << 2)) & 0xF) ** 2)

    if seed & 1:
        sh1 = 4 if seed & 2 else 5
        sh2 = 6 if partition_count == 3 else 5
    else:
        sh1 = 6 if partition_count == 3 else 5
        sh2 = 4 if seed & 2 else 5
    sh3 = sh1 if seed & 0x10 else sh2

    s1, s2, s3, s4, s5, s6, s7, s8 = (
        value >> (sh1 if i % 2 == 0 else sh2) for i, value in enumerate(seeds[:8])
    )
    s9, s10, s11, s12 = (value >> sh3 for value in seeds[8:])

    a = (s1 * x + s2 * y + s11 * z + (rnum >> 14)) & 0x3F
    b = (s3 * x + s4 * y + s12 * z + (rnum >> 10)) & 0x3F
    c = (s5 * x + s6 * y + s9 * z + (rnum >> 6)) & 0x3F
    d = (s7 * x + s8 * y + s10 * z + (rnum >> 2)) & 0x3F

    if partition_count <= 3:
        d = 0
    if partition_count <= 2:
        c = 0

    if a >= b and a >= c and a >= d:
        return 0
    if b >= c and b >= d:
        return 1
    if c >= d:
        return 2
    return 3


def get_astc_partition(
    footprint: Footprint, num_parts: int, partition_id: int
) -> Partition:
    """The ASTC partition for a footprint, subset count and partition ID."""
    if not 0 <= num_parts <= MAX_NUM_SUBSETS:
        raise ValueError(
            f"number of subsets {num_parts} outside [0, {MAX_NUM_SUBSETS}]"
        )
    if not 0 <= partition_id < (1 << PARTITION_ID_BITS):
        raise ValueError(
            f"partition ID {partition_id} does not fit in {PARTITION_ID_BITS} bits"
        )
    num_pixels = footprint.num_pixels
    assignment: Sequence[int] = tuple(
        select_astc_partition(partition_id, x, y, 0, num_parts, num_pixels)
        for y in range(footprint.height)
        for x in range(footprint.width)
    )
    return Partition(footprint, num_parts, partition_id, assignment)