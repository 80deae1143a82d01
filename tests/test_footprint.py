import pytest

from astcblocks.footprint import Footprint

_SPEC_DIMENSIONS = [
    (4, 4), (5, 4), (5, 5), (6, 5), (6, 6), (8, 5), (8, 6),
    (10, 5), (10, 6), (8, 8), (10, 8), (10, 10), (12, 10), (12, 12),
]


def test_specification_order():
    expected = [Footprint.from_dimensions(w, h) for w, h in _SPEC_DIMENSIONS]
    assert list(Footprint) == expected


@pytest.mark.parametrize("footprint", list(Footprint))
def test_round_trip_through_dimensions(footprint):
    assert Footprint.from_dimensions(footprint.width, footprint.height) is footprint


@pytest.mark.parametrize(
    "width, height, pixels",
    [(4, 4, 16), (5, 4, 20), (6, 5, 30), (8, 6, 48), (10, 8, 80), (12, 10, 120)],
)
def test_num_pixels_is_area(width, height, pixels):
    footprint = Footprint.from_dimensions(width, height)
    assert footprint.num_pixels == pixels


def test_largest_footprint_pixels():
    assert Footprint.from_dimensions(12, 12).num_pixels == 144


def test_text_form():
    assert str(Footprint.from_dimensions(10, 6)) == "10x6"


@pytest.mark.parametrize("width, height", [(7, 7), (4, 5), (0, 0), (12, 8)])
def test_unknown_dimensions_rejected(width, height):
    with pytest.raises(ValueError):
        Footprint.from_dimensions(width, height)