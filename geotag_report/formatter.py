"""Formatter: render an EXIF degree/minute/second triplet as a display string."""
from typing import Sequence, Tuple
import struct

DEGREE_SYMBOL = "°"
MINUTE_SYMBOL = "'"
SECOND_SYMBOL = "''"
UNAVAILABLE = "0"


def _truncating_div(num: int, den: int) -> int:
    # exact integer truncation toward zero, no float round-trip
    q = abs(num) // abs(den)
    return -q if (num < 0) != (den < 0) else q


def _whole(part: Tuple[int, int]) -> str:
    num, den = part
    if den == 0:
        return UNAVAILABLE
    return str(_truncating_div(num, den))


def _single(value: float) -> float:
    # round to IEEE 754 single precision
    return struct.unpack("f", struct.pack("f", value))[0]


def _fractional(part: Tuple[int, int]) -> str:
    num, den = part
    if den == 0:
        return UNAVAILABLE
    # seconds are divided in single precision, so 45/1000 renders as 0.05
    return f"{_single(_single(num) / _single(den)):.2f}"


def format_coordinate(triplet: Sequence[Tuple[int, int]]) -> str:
    """Return e.g. ``34°5'12.00''`` for ((34, 1), (5, 1), (1200, 100)).

    Degrees and minutes use truncating integer division, seconds keep two
    decimals computed in single precision. A zero denominator renders that
    component as ``0``.
    """
    if len(triplet) != 3:
        raise ValueError(f"expected degrees, minutes and seconds, got {len(triplet)} values")
    deg, minute, sec = triplet
    return (
        f"{_whole(deg)}{DEGREE_SYMBOL}"
        f"{_whole(minute)}{MINUTE_SYMBOL}"
        f"{_fractional(sec)}{SECOND_SYMBOL}"
    )
