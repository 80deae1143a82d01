import pytest

from astcblocks.bit_stream import BitStream

ALL_BITS = 0xFFFFFFFFFFFFFFFF
BITS_40 = 0x000000FFFFFFFFFF


def test_decode_single_bit_then_exhausted():
    stream = BitStream(0, 1)
    assert stream.get_bits(1) == 0
    with pytest.raises(ValueError):
        stream.get_bits(1)


def test_decode_chunks():
    stream = BitStream(0b1010101010101010, 32)
    assert stream.bits == 32
    assert stream.get_bits(1) == 0
    assert stream.get_bits(3) == 0b101
    assert stream.get_bits(8) == 0b10101010
    assert stream.bits == 20
    assert stream.get_bits(20) == 0b1010
    assert stream.bits == 0


def test_decode_full_width():
    stream = BitStream(ALL_BITS, 64)
    assert stream.bits == 64
    assert stream.get_bits(64) == ALL_BITS
    assert stream.bits == 0


def test_decode_partial():
    stream = BitStream(ALL_BITS, 64)
    assert stream.get_bits(40) == BITS_40
    assert stream.bits == 24


def test_decode_zero_counts():
    stream = BitStream(ALL_BITS, 32)
    assert stream.get_bits(0) == 0
    assert stream.get_bits(32) == BITS_40 & 0xFFFFFFFF
    assert stream.get_bits(0) == 0
    assert stream.bits == 0


def test_encode_small():
    stream = BitStream()
    stream.put_bits(0, 1)
    stream.put_bits(0b11, 2)
    assert stream.bits == 3
    assert stream.get_bits(3) == 0b110


def test_encode_full_width():
    stream = BitStream()
    stream.put_bits(ALL_BITS, 64)
    assert stream.bits == 64
    assert stream.get_bits(64) == ALL_BITS
    assert stream.bits == 0


def test_encode_truncates_value():
    stream = BitStream()
    stream.put_bits(ALL_BITS, 40)
    assert stream.get_bits(40) == BITS_40
    assert stream.bits == 0


def test_encode_zero_sizes():
    stream = BitStream()
    stream.put_bits(0, 0)
    stream.put_bits(ALL_BITS, 32)
    stream.put_bits(0, 0)
    assert stream.get_bits(32) == BITS_40 & 0xFFFFFFFF
    assert stream.bits == 0


def test_put_beyond_capacity_rejected():
    stream = BitStream(capacity=8)
    stream.put_bits(0xFF, 8)
    with pytest.raises(ValueError):
        stream.put_bits(1, 1)
    assert stream.bits == 8


def test_size_beyond_capacity_rejected():
    with pytest.raises(ValueError):
        BitStream(0, 65)