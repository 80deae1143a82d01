import pytest

from astcblocks.footprint import Footprint
from astcblocks.partition import Partition, get_astc_partition, partition_metric
from astcblocks.partition_tree import (
    PartitionTree,
    find_closest_astc_partition,
    find_k_closest_astc_partitions,
    generate_astc_partition_tree,
)

FP = Footprint.BLOCK_4X4


@pytest.fixture(scope="module")
def tree():
    return generate_astc_partition_tree(FP)


def _valid_astc(num_parts):
    for pid in range(1024):
        part = get_astc_partition(FP, num_parts, pid)
        if set(part.assignment) == set(range(num_parts)):
            return part
    raise AssertionError("no valid partition found")


def _custom():
    # Left half label 0, right half label 1, with one odd texel.
    labels = [0, 0, 1, 1] * 4
    labels[5] = 2
    return Partition(FP, 3, None, tuple(labels))


def test_generated_tree_holds_distinct_valid_partitions(tree):
    parts = list(tree)
    assert len(tree) == len(parts) > 0
    assert len({p.canonical_key() for p in parts}) == len(parts)
    for p in parts:
        assert 2 <= p.num_parts <= 4
        assert set(p.assignment) == set(range(p.num_parts))
        assert p.partition_id is not None


def test_search_matches_brute_force_distances(tree):
    candidate = _custom()
    k = 5
    results = tree.search(candidate, k)
    assert len(results) == k
    found = [partition_metric(r, candidate) for r in results]
    expected = sorted(partition_metric(p, candidate) for p in tree)[:k]
    assert found == expected


def test_search_exact_member_is_first(tree):
    member = next(iter(tree))
    results = tree.search(member, 3)
    assert partition_metric(results[0], member) == 0


def test_find_closest_returns_valid_partition_itself():
    candidate = _valid_astc(2)
    closest = find_closest_astc_partition(candidate)
    assert closest == candidate
    assert closest.num_parts == 2


def test_find_closest_has_at_most_candidate_subsets():
    candidate = _custom()
    closest = find_closest_astc_partition(candidate)
    assert closest.num_parts <= candidate.num_parts
    assert closest.partition_id is not None


def test_find_k_closest_sorted_by_distance():
    candidate = _custom()
    results = find_k_closest_astc_partitions(candidate, 6)
    dists = [partition_metric(r, candidate) for r in results]
    assert len(results) == 6
    assert dists == sorted(dists)


def test_single_partition_tree():
    part = _valid_astc(3)
    t = PartitionTree([part])
    assert t.search(_custom(), 1) == [part]


def test_duplicates_are_unreachable():
    a = Partition(FP, 2, None, (0,) * 8 + (1,) * 8)
    b = Partition(FP, 2, None, (1,) * 8 + (0,) * 8)
    t = PartitionTree([a, b])
    assert len(t) == 2
    with pytest.raises(ValueError):
        t.search(a, 2)


def test_bad_k_raises(tree):
    with pytest.raises(ValueError):
        tree.search(_custom(), 0)
    small = PartitionTree([_valid_astc(2)])
    with pytest.raises(ValueError):
        small.search(_custom(), 2)


def test_footprint_mismatch_raises(tree):
    other = get_astc_partition(Footprint.BLOCK_5X4, 2, 3)
    with pytest.raises(ValueError):
        tree.search(other, 1)


def test_empty_tree_rejected():
    with pytest.raises(ValueError):
        PartitionTree([])