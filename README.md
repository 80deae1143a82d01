# astcblocks

Pure-Python building blocks for working with ASTC (Adaptive Scalable Texture
Compression) data. It has no third-party dependencies.

## What is included

- `astcblocks.uint128.UInt128`: an immutable 128-bit unsigned integer.
  - `UInt128(value)` and `UInt128.from_parts(high, low)` build values.
  - The `high` and `low` properties give the two 64-bit halves.
  - Shifts, `&`, `|`, `^`, `~`, `+` and `-` all wrap modulo 2**128.
  - A negative shift count raises `ValueError`.
- `astcblocks.bit_stream.BitStream`: a little-endian stream of bits with a fixed capacity (64 bits by default).
  - `put_bits(value, size)` appends the low `size` bits of `value`.
  - `get_bits(count)` removes and returns the lowest `count` bits.
  - The `bits` property is the number of bits held.
  - Writing past the capacity or reading more bits than are held raises `ValueError`.
- `astcblocks.bottom_n.BottomN`: keeps the `max_size` smallest values pushed into it, optionally ordered by a `key` function.
  - `push(value)` offers a value.
  - `top()` returns the largest value kept.
  - `pop()` empties it and returns the kept values in ascending order.
- `astcblocks.math_utils`: bit helpers.
  - `log2_floor(n)` returns -1 for zero.
  - `count_ones(n)`
  - `reverse_bits(value, width=32)`
  - `get_bits(source, offset, count, width=None)` works on plain integers and on `UInt128` values.
- `astcblocks.string_utils`: two text helpers.
  - `split(text, separator)` keeps empty fields and returns an empty list for an empty separator.
  - `parse_int32(text, default)` reads a leading integer the way C's `strtol` does with base 0, so decimal, `0x` hex and leading-`0` octal are accepted. It clamps the result to the signed 32-bit range and returns `default` when no digits can be read.
- `astcblocks.footprint.Footprint`: an enum of the fourteen valid ASTC block footprints, from 4x4 to 12x12.
  - Each member has `width`, `height` and `num_pixels`.
  - `Footprint.from_dimensions(width, height)` looks a footprint up and raises `ValueError` for an unknown size.
- `astcblocks.quantization`: maps values into the quantized ranges that ASTC supports, and back.
  - `quantize_ce_value_to_range` and `unquantize_ce_value_from_range` handle colour endpoint values in [0, 255], for ranges 5 to 255.
  - `quantize_weight_to_range` and `unquantize_weight_from_range` handle weights in [0, 64], for ranges 1 to 31.
  - Arguments out of range raise `ValueError`.
- `astcblocks.partition`: partitions of a block into texel subsets.
  - `Partition` is a per-texel labelling in raster order. Two partitions are equal when one can be relabelled into the other. `canonical_key()` gives the relabelled form.
  - `partition_metric(a, b)` counts the texels that are mismatched under the best greedy label mapping.
  - `select_astc_partition` is the ASTC partition hash.
  - `get_astc_partition(footprint, num_parts, partition_id)` builds the partition for a 10-bit partition ID.
- `astcblocks.partition_tree`: nearest-partition search with a vantage-point tree.
  - `PartitionTree(partitions)` builds a tree, and `search(partition, k)` returns the nearest `k` partitions, closest first.
  - `generate_astc_partition_tree(footprint)` builds the tree of every distinct, non-degenerate ASTC partition with 2 to 4 subsets.
  - `find_k_closest_astc_partitions(candidate, k)` searches that tree.
  - `find_closest_astc_partition(candidate)` returns the nearest partition with the same number of subsets as the candidate, or failing that one with fewer. It raises `LookupError` if none of the nearest four qualifies.

## Installing

```
pip install .
```

To also install the test dependency:

```
pip install .[test]
```

## Examples

Quantizing a colour endpoint value:

```python
from astcblocks.quantization import (
    quantize_ce_value_to_range,
    unquantize_ce_value_from_range,
)

q = quantize_ce_value_to_range(200, 31)
print(unquantize_ce_value_from_range(q, 31))
```

Working with partitions:

```python
from astcblocks.footprint import Footprint
from astcblocks.partition import get_astc_partition, partition_metric
from astcblocks.partition_tree import find_closest_astc_partition

fp = Footprint.from_dimensions(6, 6)
part = get_astc_partition(fp, 2, 17)
closest = find_closest_astc_partition(part)
print(closest.partition_id, partition_metric(part, closest))
```

The first search for a footprint builds the partition tree for that footprint. Building it generates about three thousand partitions, so it takes noticeably longer than later searches. The tree is cached, and later searches reuse it.

## What this package does not do

This is a library of parts. It does not:

- parse whole 128-bit ASTC blocks;
- decode compressed images to RGBA pixels;
- read ASTC files.

It also has no command-line program.

## Running the tests

```
pytest
```