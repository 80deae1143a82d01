"""Nearest-neighbour search over ASTC partitions.

The partition metric is a true metric, so the valid partitions of a footprint
can be organised in a vantage-point tree. This lets an arbitrary labelling be
matched to the closest partitions that ASTC can actually encode.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .bottom_n import BottomN
from .footprint import Footprint
from .partition import (
    MAX_NUM_SUBSETS,
    PARTITION_ID_BITS,
    Partition,
    get_astc_partition,
    partition_metric,
)

_CLOSEST_SEARCH_ITEMS = 4


@dataclass
class _Node:
    index: int
    split_dist: int = -1
    left: Optional[_Node] = None
    right: Optional[_Node] = None


class PartitionTree:
    """A vantage-point tree over a fixed collection of partitions."""

    def __init__(self, partitions: Iterable[Partition]) -> None:
        self._partitions: Tuple[Partition, ...] = tuple(partitions)
        if not self._partitions:
            raise ValueError("a partition tree needs at least one partition")
        self._root = self._build(list(range(len(self._partitions))))

    def __len__(self) -> int:
        return len(self._partitions)

    def __iter__(self) -> Iterator[Partition]:
        return iter(self._partitions)

    def _build(self, indices: List[int]) -> _Node:
        vantage = indices[0]
        vantage_point = self._partitions[vantage]
        dists = [
            (idx, dist)
            for idx in indices[1:]
            if (dist := partition_metric(vantage_point, self._partitions[idx])) > 0
        ]
        node = _Node(vantage)
        if not dists:
            return node

        dists.sort(key=lambda pair: pair[1])
        mid = len(dists) // 2
        node.split_dist = dists[mid][1]

        farther = [idx for idx, _ in dists[mid:]]
        if farther:
            node.right = self._build(farther)
        closer = [idx for idx, _ in dists[:mid]]
        if closer:
            node.left = self._build(closer)
        return node

    def _search_node(
        self,
        node: Optional[_Node],
        partition: Partition,
        heap: BottomN[Tuple[int, int]],
    ) -> None:
        if node is None:
            return
        dist = partition_metric(self._partitions[node.index], partition)
        heap.push((node.index, dist))

        if node.split_dist < 0:
            return

        tau = heap.top()[1]
        split = node.split_dist
        if dist + tau < split or dist - tau < split:
            self._search_node(node.left, partition, heap)
        if dist + tau > split or dist - tau > split:
            self._search_node(node.right, partition, heap)

    def search(self, partition: Partition, k: int) -> List[Partition]:
        """The ``k`` stored partitions closest to ``partition``, nearest first.

        Raises ValueError if ``k`` is not positive, if the tree cannot supply
        ``k`` distinct partitions, or if the footprints differ.
        """
        if k < 1:
            raise ValueError("k must be positive")
        heap: BottomN[Tuple[int, int]] = BottomN(k, key=lambda result: result[1])
        self._search_node(self._root, partition, heap)
        results = heap.pop()
        if len(results) < k:
            raise ValueError(
                f"asked for {k} partitions but only {len(results)} are reachable"
            )
        return [self._partitions[idx] for idx, _ in results]


def _is_valid(partition: Partition) -> bool:
    labels = set(partition.assignment)
    return all(label in labels for label in range(partition.num_parts))


def generate_astc_partition_tree(footprint: Footprint) -> PartitionTree:
    """A tree of every distinct, non-degenerate ASTC partition of a footprint."""
    unique: Dict[Partition, None] = {}
    for num_parts in range(2, MAX_NUM_SUBSETS + 1):
        for partition_id in range(1 << PARTITION_ID_BITS):
            part = get_astc_partition(footprint, num_parts, partition_id)
            # A subset with no texels would waste an endpoint pair.
            if _is_valid(part) and part not in unique:
                unique[part] = None
    return PartitionTree(unique)


@lru_cache(maxsize=None)
def _tree_for(footprint: Footprint) -> PartitionTree:
    return generate_astc_partition_tree(footprint)


def find_k_closest_astc_partitions(candidate: Partition, k: int) -> List[Partition]:
    """The ``k`` valid ASTC partitions closest to ``candidate``, nearest first."""
    return _tree_for(candidate.footprint).search(candidate, k)


def find_closest_astc_partition(candidate: Partition) -> Partition:
    """The closest valid ASTC partition with at most as many subsets.

    Partitions with the same number of subsets are preferred. Ties between
    equally close partitions are broken arbitrarily. Raises LookupError when
    none of the nearest few partitions has an acceptable subset count.
    """
    results = find_k_closest_astc_partitions(candidate, _CLOSEST_SEARCH_ITEMS)
    for result in results:
        if result.num_parts == candidate.num_parts:
            return result
    for result in results:
        if result.num_parts < candidate.num_parts:
            return result
    raise LookupError("no close partition with an acceptable number of subsets")