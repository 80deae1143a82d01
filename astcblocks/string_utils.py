"""String splitting and lenient integer parsing."""

from __future__ import annotations

from typing import List

_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1
_WHITESPACE = " \t\n\v\f\r"
_HEX_DIGITS = "0123456789abcdefABCDEF"


def split(text: str, separator: str) -> List[str]:
    """Split ``text`` on ``separator``; an empty separator yields nothing."""
    if not separator:
        return []
    return text.split(separator)


def parse_int32(text: str, default: int) -> int:
    """Parse a leading integer the way C's strtol does with base 0.

    Accepts leading whitespace, a sign, and a ``0x`` (hex) or ``0`` (octal)
    prefix; stops at the first character that is not a digit. The result is
    clamped to the signed 32-bit range. Returns ``default`` when no digits
    can be read.
    """
    pos = 0
    length = len(text)
    while pos < length and text[pos] in _WHITESPACE:
        pos += 1

    negative = False
    if pos < length and text[pos] in "+-":
        negative = text[pos] == "-"
        pos += 1

    if (
        text[pos : pos + 2] in ("0x", "0X")
        and pos + 2 < length
        and text[pos + 2] in _HEX_DIGITS
    ):
        base, digits_allowed = 16, _HEX_DIGITS
        pos += 2
    elif pos < length and text[pos] == "0":
        base, digits_allowed = 8, "01234567"
    else:
        base, digits_allowed = 10, "0123456789"

    end = pos
    while end < length and text[end] in digits_allowed:
        end += 1
    if end == pos:
        return default

    value = int(text[pos:end], base)
    if negative:
        value = -value
    return max(_INT32_MIN, min(_INT32_MAX, value))