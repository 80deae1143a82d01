import pytest

from astcblocks.string_utils import parse_int32, split


def test_split_empty_text():
    assert split("", "abc") == [""]


def test_split_empty_separator():
    assert split("abc", "") == []


def test_split_leading_separator():
    assert split("abc", "a") == ["", "bc"]


def test_split_only_separators():
    assert split("aaa", "a") == ["", "", "", ""]


def test_split_simple():
    assert split("1a2a3a4", "a") == ["1", "2", "3", "4"]


def test_split_adjacent_separators():
    assert split("1a2aa3a4", "a") == ["1", "2", "", "3", "4"]


def test_split_sentence():
    assert split("The quick brown fox jumped over the lazy dog", " ") == [
        "The", "quick", "brown", "fox", "jumped", "over", "the", "lazy", "dog",
    ]


def test_split_multichar_separator():
    assert split("a; b; c; d", "; ") == ["a", "b", "c", "d"]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("0", 0),
        ("100", 100),
        ("-100", -100),
        ("", -1),
        ("a", -1),
        ("10x1", 10),
        ("2147483647", 2147483647),
        ("2147483648", 2147483647),
        ("-2147483648", -2147483648),
        ("-2147483649", -2147483648),
    ],
)
def test_parse_int32(text, expected):
    assert parse_int32(text, -1) == expected


def test_parse_int32_prefixes():
    assert parse_int32("0x1A", -1) == 26
    assert parse_int32("010", -1) == 8
    assert parse_int32("  +7", -1) == 7
    assert parse_int32("0x", -1) == 0