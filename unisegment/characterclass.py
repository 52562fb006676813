"""
Unicode aware equivalents of regular expression character classes

The ``word`` class follows the ``\\w`` definition in `Unicode Technical
Standard #18 <https://www.unicode.org/reports/tr18/#Compatibility_Properties>`__,
restricted to what the bundled tables carry.  It is Alphabetic, general
category M (marks), the ASCII digits, general category Pc (connector
punctuation) and the join controls.  Digits outside ASCII are not
included.
"""

from __future__ import annotations

from .properties import UnicodeTables, default_tables
from .ranges import RangeMatcher, compile_ranges

BASIC_LATIN_DIGITS = (0x30, 0x39)
JOIN_CONTROLS = (0x200C, 0x200D)


def word_ranges(tables: UnicodeTables) -> list[tuple[int, int]]:
    "Ranges making up the word character class"
    return [
        *tables.derived_core["Alphabetic"],
        *tables.general_category["M"],
        BASIC_LATIN_DIGITS,
        *tables.general_category["Pc"],
        JOIN_CONTROLS,
    ]


def patterns(tables: UnicodeTables | None = None) -> dict[str, str]:
    "Regular expression source for each character class, keyed by class name"
    return {"word": word_matcher(tables).pattern}


def word_matcher(tables: UnicodeTables | None = None) -> RangeMatcher:
    "Matcher accepting a single word character"
    return compile_ranges(word_ranges(tables or default_tables()))
