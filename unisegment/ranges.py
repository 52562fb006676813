"""
Turns ranges of Unicode scalar values into matchers over UTF-16 code units

Text is examined one UTF-16 code unit at a time, which means a
codepoint above the `Basic Multilingual Plane
<https://en.wikipedia.org/wiki/Plane_(Unicode)#Basic_Multilingual_Plane>`__
is seen as a leading (high) surrogate followed by a trailing (low)
surrogate.  A range of such codepoints can't be expressed as a single
character class.  It is instead decomposed into "boxes" in high/low
surrogate space, each of which is a pair of character classes.

Suppose ``ch1`` and ``ch2`` have surrogate pairs ``(hi1, lo1)`` and
``(hi2, lo2)``.  Then the range ``ch1`` to ``ch2`` is the disjunction
of::

    [hi1 - hi1][lo1 - DFFF]
    [hi1+1 - hi2-1][DC00 - DFFF]
    [hi2 - hi2][DC00 - lo2]

which often collapses further, for example when ``hi1 == hi2``.
"""

from __future__ import annotations

import functools
import logging
import re

from dataclasses import dataclass
from typing import Iterable, Union

SURROGATE_MIN = 0xD800
SURROGATE_MAX = 0xDFFF
LEADING_MIN = 0xD800
LEADING_MAX = 0xDBFF
TRAILING_MIN = 0xDC00
TRAILING_MAX = 0xDFFF
BMP_MAX = 0xFFFF
SCALAR_MAX = 0x10FFFF

RANGE = Union[int, "tuple[int, int]", "list[int]"]
"A single scalar value, or an inclusive pair of them"


class ConstructionError(ValueError):
    """Raised when a range can't be turned into a matcher

    This only happens when building tables, which should consist of
    vetted data, so it indicates the table itself is wrong.
    """

    message: str
    "Description of the problem"
    range: tuple[int, int]
    "The offending range"

    def __init__(self, message: str, range: tuple[int, int]):
        super().__init__(f"{ message }: { range[0]:04X}-{ range[1]:04X}")
        self.message = message
        self.range = range


@dataclass(frozen=True)
class SurrogateBox:
    """Pairs whose leading surrogate is in :attr:`hi` and trailing in :attr:`lo`"""

    hi: tuple[int, int]
    "Inclusive range of leading surrogates"
    lo: tuple[int, int]
    "Inclusive range of trailing surrogates"


def is_leading_surrogate(unit: str | None) -> bool:
    "Returns True if the code unit is the first half of a surrogate pair"
    return unit is not None and len(unit) == 1 and LEADING_MIN <= ord(unit) <= LEADING_MAX


def is_trailing_surrogate(unit: str | None) -> bool:
    "Returns True if the code unit is the second half of a surrogate pair"
    return unit is not None and len(unit) == 1 and TRAILING_MIN <= ord(unit) <= TRAILING_MAX


def surrogate_pair(codepoint: int) -> tuple[int, int]:
    "Returns the leading and trailing code units encoding a codepoint above the BMP"
    assert BMP_MAX < codepoint <= SCALAR_MAX
    offset = codepoint - 0x10000
    return LEADING_MIN + (offset >> 10), TRAILING_MIN + (offset & 0x3FF)


def scalar_value(codepoint: str) -> int:
    """Returns the integer value of a codepoint made of one or two code units

    A lone surrogate gives its own code unit value"""
    if len(codepoint) == 2:
        hi, lo = ord(codepoint[0]), ord(codepoint[1])
        return 0x10000 + ((hi - LEADING_MIN) << 10) + (lo - TRAILING_MIN)
    return ord(codepoint)


def check_range(item: RANGE) -> tuple[int, int]:
    """Returns the range as a ``(min, max)`` tuple

    :raises ConstructionError: if the range overlaps surrogates, is
         inverted, or goes beyond the last scalar value
    """
    if isinstance(item, int):
        low = high = item
    else:
        low, high = item
    if low > high:
        raise ConstructionError("min > max", (low, high))
    if low < 0 or high > SCALAR_MAX:
        raise ConstructionError("Character code out of range", (low, high))
    if high >= SURROGATE_MIN and low <= SURROGATE_MAX:
        raise ConstructionError("Range includes surrogates", (low, high))
    return low, high


def surrogate_boxes(ch1: int, ch2: int) -> list[SurrogateBox]:
    """Boxes in high/low surrogate space exactly covering ``ch1`` to ``ch2`` inclusive

    Both must be above the BMP with ``ch1 <= ch2``.  At most three boxes
    are returned - a partial one under the leading surrogate of
    ``ch1``, a full width one for every leading surrogate in between,
    and a partial one under the leading surrogate of ``ch2``.
    """
    assert BMP_MAX < ch1 <= ch2 <= SCALAR_MAX

    hi1, lo1 = surrogate_pair(ch1)
    hi2, lo2 = surrogate_pair(ch2)

    if hi1 == hi2:
        return [SurrogateBox(hi=(hi1, hi2), lo=(lo1, lo2))]

    boxes: list[SurrogateBox] = []

    # lowest leading surrogate all of whose codepoints are >= ch1
    hi_min_above = LEADING_MIN + ((ch1 - 0x10000 + 0x3FF) >> 10)
    # highest leading surrogate all of whose codepoints are <= ch2
    hi_max_below = LEADING_MIN + ((ch2 - 0x10000 - 0x3FF) >> 10)

    if hi1 < hi_min_above:
        boxes.append(SurrogateBox(hi=(hi1, hi1), lo=(lo1, TRAILING_MAX)))
    if hi_min_above <= hi_max_below:
        boxes.append(SurrogateBox(hi=(hi_min_above, hi_max_below), lo=(TRAILING_MIN, TRAILING_MAX)))
    if hi_max_below < hi2:
        boxes.append(SurrogateBox(hi=(hi2, hi2), lo=(TRAILING_MIN, lo2)))
    return boxes


def _escape(unit: int) -> str:
    return f"\\u{unit:04x}"


def _unit_range(low: int, high: int, bracket: bool = False) -> str:
    # a single code unit is never bracketed
    if low == high:
        return _escape(low)
    value = f"{ _escape(low) }-{ _escape(high) }"
    return f"[{ value }]" if bracket else value


def char_range_array_regexp(ranges: Iterable[RANGE]) -> str:
    """Makes a regular expression source string matching the ranges

    Each range is a single scalar value or an inclusive pair.  BMP
    values end up in one character class, while values above the BMP
    become alternatives matching surrogate pairs.  An empty string is
    returned when there are no ranges.

    :raises ConstructionError: for a range that can't be matched - see
         :func:`check_range`
    """
    character_class: list[str] = []
    disjunction: list[str] = []

    for item in ranges:
        low, high = check_range(item)

        if high <= BMP_MAX:
            character_class.append(_unit_range(low, high))
            continue

        if low <= BMP_MAX:
            # straddles the end of the BMP
            character_class.append(_unit_range(low, BMP_MAX))
            low = BMP_MAX + 1

        for box in surrogate_boxes(low, high):
            disjunction.append(_unit_range(*box.hi, bracket=True) + _unit_range(*box.lo, bracket=True))

    if len(character_class) == 1 and "-" not in character_class[0]:
        disjunction.insert(0, character_class[0])
    elif character_class:
        disjunction.insert(0, "[" + "".join(character_class) + "]")

    return "|".join(disjunction)


class RangeMatcher:
    """Accepts exactly the UTF-16 encodings of scalar values in some ranges

    Use :func:`compile_ranges` to get instances, which are immutable and
    can be shared.
    """

    ranges: tuple[tuple[int, int], ...]
    "The validated ranges"
    pattern: str
    "Regular expression source, see :func:`char_range_array_regexp`"

    # used when there are no ranges
    _match_nothing = "(?!)"

    def __init__(self, ranges: Iterable[RANGE]):
        self.ranges = tuple(check_range(r) for r in ranges)
        self.pattern = char_range_array_regexp(self.ranges)
        self._regex = re.compile(self.pattern or self._match_nothing)

    def matches(self, codepoint: str | None) -> bool:
        "Returns True if the codepoint (one or two code units) is entirely accepted"
        if not codepoint:
            return False
        return self._regex.fullmatch(codepoint) is not None

    def findall(self, units: str) -> list[str]:
        "Returns every accepted codepoint in code unit text, left to right"
        return self._regex.findall(units)

    def __contains__(self, codepoint: str) -> bool:
        return self.matches(codepoint)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RangeMatcher):
            return NotImplemented
        return self.pattern == other.pattern

    def __hash__(self) -> int:
        return hash(self.pattern)

    def __repr__(self) -> str:
        return f"<RangeMatcher { len(self.ranges) } ranges /{ self.pattern[:40] }{ '...' if len(self.pattern) > 40 else '' }/>"


@functools.lru_cache(maxsize=None)
def _compile(ranges: tuple[tuple[int, int], ...]) -> RangeMatcher:
    matcher = RangeMatcher(ranges)
    logging.getLogger(__name__).debug("compiled %d ranges into %d character pattern", len(ranges), len(matcher.pattern))
    return matcher


def compile_ranges(ranges: Iterable[RANGE]) -> RangeMatcher:
    """Returns a :class:`RangeMatcher` for the ranges

    Identical range lists share the same matcher.

    :raises ConstructionError: for a range that can't be matched
    """
    return _compile(tuple(check_range(r) for r in ranges))
