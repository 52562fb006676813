#!/usr/bin/env python3

"""
:mod:`unisegment.unicode` - Grapheme cluster and word segmentation

Editors need to move the cursor by user perceived characters, select
whole words, and match word characters in any script.  Python's
:class:`str` indexes codepoints, which is wrong for all three.

* Multiple consecutive codepoints can combine into a single user
  perceived character (grapheme cluster), such as combining accents,
  Hangul syllables made of jamo, emoji joined by ZWJ, and pairs of
  regional indicators forming flags.

* Word boundaries depend on the neighbourhood of each position - for
  example the apostrophe in ``can't`` or the period in ``3.14`` does
  not break a word.

See :data:`unicode_version` for the implemented version.

Offsets

    All offsets taken and returned are UTF-16 code unit offsets, as
    used by editors and browsers.  Codepoints above the Basic
    Multilingual Plane (most emoji, many historic scripts) count as
    two.  Text returned is always a slice of the text you provided.

Grapheme cluster and word splitting

    `Unicode Technical Report #29
    <https://www.unicode.org/reports/tr29/>`__ default rules are
    implemented, without locale tailoring.  Break points can be found
    via :func:`grapheme_next_break`, :func:`word_next_break` and
    :func:`word_prev_break`, or tested via :func:`is_grapheme_break`
    and :func:`is_word_break`.

    Building on those are iterators providing optional offsets and the
    text.

Unicode lookups

   * Word break property :func:`word_break_property`
   * Grapheme break property :func:`grapheme_break_property`
   * Is an emoji or similar :func:`is_extended_pictographic`
   * Flag characters :func:`is_regional_indicator`

Command line

    Use ``python3 -m unisegment.unicode --help`` to run Unicode test
    files, show how text is segmented, and look up codepoints.
"""

from __future__ import annotations

import bisect
import functools

from dataclasses import dataclass
from typing import Iterator

from . import _ucddb
from .graphemebreak import GraphemeBreak
from .textstring import TextString, code_unit_offsets, slice_units
from .wordbreak import ALPHANUMERIC, WordBreak

unicode_version = _ucddb.unicode_version
"""The `Unicode version <https://www.unicode.org/versions/enumeratedversions.html>`__
that the rules and data tables implement"""


@functools.lru_cache(maxsize=None)
def _grapheme() -> GraphemeBreak:
    return GraphemeBreak()


@functools.lru_cache(maxsize=None)
def _word() -> WordBreak:
    return WordBreak()


def _cursor(text: str, offset: int | None = None) -> TextString:
    if not isinstance(text, str):
        raise TypeError(f"Expected str not { type(text) }")
    cursor = TextString(text)
    if offset is not None and not 0 <= offset <= len(cursor):
        raise ValueError(f"{offset=} is out of bounds 0 - { len(cursor) }")
    return cursor


def _slicer(text: str, cursor: TextString):
    "Returns function taking code unit start and end, giving the text between"
    if len(cursor) == len(text):
        return lambda start, end: text[start:end]
    offsets = code_unit_offsets(text)
    return lambda start, end: text[bisect.bisect_left(offsets, start) : bisect.bisect_left(offsets, end)]


def _codepoint(codepoint: int | str) -> int | str:
    if isinstance(codepoint, str):
        if len(codepoint) != 1:
            raise ValueError(f"Expected a single codepoint not { len(codepoint) }")
        return ord(codepoint)
    if not isinstance(codepoint, int):
        raise TypeError(f"Expected int or str not { type(codepoint) }")
    return codepoint


def word_break_property(codepoint: int | str) -> str | None:
    "Returns the word break property (eg ``ALetter``, ``MidNum``) or None for Other"
    return _word().property(_codepoint(codepoint))


def grapheme_break_property(codepoint: int | str) -> str | None:
    "Returns the grapheme break property (eg ``Extend``, ``LV``) or None for Other"
    return _grapheme().classifier.classify(_codepoint(codepoint))


def is_extended_pictographic(text: str) -> bool:
    "Returns True if any of the text has the extended pictographic property (Emoji and similar)"
    return bool(_grapheme().extended_pictographic.findall(_cursor(text).text))


def is_regional_indicator(text: str) -> bool:
    "Returns True if any of the text is one of the 26 `regional indicators <https://en.wikipedia.org/wiki/Regional_indicator_symbol>`__ used in pairs to represent country flags"
    return bool(_grapheme().tables.regional_indicator.findall(_cursor(text).text))


def is_grapheme_break(text: str, offset: int) -> bool:
    "Returns True if offset is a grapheme cluster boundary"
    return _grapheme().is_break(_cursor(text, offset), offset)


def grapheme_next_break(text: str, offset: int = 0) -> int:
    """Returns end of Grapheme cluster /  User Perceived Character

    For example regional indicators are in pairs, and a base codepoint
    can be combined with zero or more additional codepoints providing
    diacritics, marks, and variations.  Break points are defined in
    the `TR29 rules
    <https://www.unicode.org/reports/tr29/#Grapheme_Cluster_Boundary_Rules>`__.

    :param text: The text to examine
    :param offset: The first code unit to examine

    :returns:  Offset of first code unit not part of the grapheme cluster
        starting at offset.
    """
    return _grapheme().next_break_offset(_cursor(text, offset), offset)


def grapheme_next(text: str, offset: int = 0) -> tuple[int, int]:
    "Returns span of next grapheme cluster"
    end = grapheme_next_break(text, offset)
    return offset, end


def _iter_spans(cursor: TextString, offset: int, next_break) -> Iterator[tuple[int, int]]:
    while offset < len(cursor):
        end = next_break(cursor, offset)
        yield offset, end
        offset = end


def grapheme_iter(text: str, offset: int = 0) -> Iterator[str]:
    "Iterator providing text of each grapheme cluster"
    for _, _, cluster in grapheme_iter_with_offsets(text, offset):
        yield cluster


def grapheme_iter_with_offsets(text: str, offset: int = 0) -> Iterator[tuple[int, int, str]]:
    "Iterator providing start, end, text of each grapheme cluster"
    cursor = _cursor(text, offset)
    slicer = _slicer(text, cursor)
    for start, end in _iter_spans(cursor, offset, _grapheme().next_break_offset):
        yield start, end, slicer(start, end)


def grapheme_length(text: str, offset: int = 0) -> int:
    "Returns number of grapheme clusters in the text.  Unicode aware version of len"
    cursor = _cursor(text, offset)
    return sum(1 for _ in _iter_spans(cursor, offset, _grapheme().next_break_offset))


def split_clusters(text: str) -> list[str]:
    """Returns the text split into grapheme clusters

    Joining the result gives back the text.  Empty text gives an empty list.
    """
    cursor = _cursor(text)
    ends = [end for _, end in _iter_spans(cursor, 0, _grapheme().next_break_offset)]
    return list(slice_units(text, [0] + ends))


def is_word_break(text: str, offset: int) -> bool:
    "Returns True if offset is a word boundary"
    return _word().is_break(_cursor(text, offset), offset)


def word_next_break(text: str, offset: int = 0, only_alphanumeric: bool = False) -> int:
    """Returns end of next word or non-word

    Finds the next break point according to the `TR29 rules
    <https://www.unicode.org/reports/tr29/#Word_Boundary_Rules>`__.
    Note that the segment returned may be a word, or a non-word
    (spaces, punctuation etc).  Use :func:`word_next` to get words.

    :param text: The text to examine
    :param offset: Code unit offset to start from
    :param only_alphanumeric: Skip over break points until one that
        follows a letter or number, giving the end of the next word

    :returns:  Next break point
    """
    return _word().next_break_offset(_cursor(text, offset), offset, only_alphanumeric)


def word_prev_break(text: str, offset: int | None = None, only_alphanumeric: bool = False) -> int:
    """Returns start of previous word or non-word

    :param text: The text to examine
    :param offset: Code unit offset to start from, defaulting to the end
    :param only_alphanumeric: Skip over break points until one that
        precedes a letter or number, giving the start of the previous word
    """
    cursor = _cursor(text, offset)
    if offset is None:
        offset = len(cursor)
    return _word().prev_break_offset(cursor, offset, only_alphanumeric)


def _word_spans(
    text: str, offset: int, emoji: bool, regional_indicator: bool
) -> Iterator[tuple[int, int, TextString]]:
    word = _word()
    cursor = _cursor(text, offset)
    wanted = set(ALPHANUMERIC)
    if regional_indicator:
        wanted.add("Regional_Indicator")

    for start, end in _iter_spans(cursor, offset, word.next_break_offset):
        pos = start
        while pos < end:
            codepoint = cursor.next_codepoint(pos)
            if word.property(codepoint) in wanted or (emoji and word.extended_pictographic.matches(codepoint)):
                yield start, end, cursor
                break
            pos += len(codepoint)


def word_next(text: str, offset: int = 0, *, emoji: bool = False, regional_indicator: bool = False) -> tuple[int, int]:
    """Returns span of next word

    A segment is considered a word if it contains at least one letter or
    number (word break property ``ALetter``, ``Hebrew_Letter``,
    ``Katakana`` or ``Numeric``), plus optionally:

    * emoji (Extended_Pictographic in Unicode specs)
    * regional indicator - two character sequence for flags like 🇧🇷🇨🇦

    Returns an empty span at the end of the text if there are no more
    words.
    """
    for start, end, _ in _word_spans(text, offset, emoji, regional_indicator):
        return start, end
    end = len(_cursor(text))
    return end, end


def word_iter(text: str, offset: int = 0, *, emoji: bool = False, regional_indicator: bool = False) -> Iterator[str]:
    "Iterator providing text of each word"
    for _, _, word in word_iter_with_offsets(text, offset, emoji=emoji, regional_indicator=regional_indicator):
        yield word


def word_iter_with_offsets(
    text: str, offset: int = 0, *, emoji: bool = False, regional_indicator: bool = False
) -> Iterator[tuple[int, int, str]]:
    "Iterator providing start, end, text of each word"
    slicer = None
    for start, end, cursor in _word_spans(text, offset, emoji, regional_indicator):
        if slicer is None:
            slicer = _slicer(text, cursor)
        yield start, end, slicer(start, end)


BREAK = "÷"
NO_BREAK = "×"


@dataclass
class BreakTest:
    "One line of a Unicode break test file"

    text: str
    "The test text as UTF-16 code units"
    expected: list[bool]
    "Whether a break is expected at each code unit offset, from zero to the length inclusive"
    comment: str = ""
    "Text following ``#`` on the line"


def parse_break_test(line: str) -> BreakTest | None:
    """Parses a line from ``GraphemeBreakTest.txt`` or ``WordBreakTest.txt``

    Lines look like ``÷ 0061 × 0308 ÷ 0020 ÷  #  comment``, alternating
    break markers and hex codepoints.  Blank and comment only lines
    give None.  A codepoint above the BMP adds a ``False`` expectation
    for the position between its surrogates.

    :raises ValueError: if the line doesn't follow the grammar
    """
    data, _, comment = line.partition("#")
    tokens = data.split()
    if not tokens:
        return None
    if len(tokens) % 2 != 1:
        raise ValueError(f"Expected an odd number of tokens in { line!r}")

    text: list[str] = []
    expected: list[bool] = []
    for i, token in enumerate(tokens):
        if i % 2 == 0:
            if token not in (BREAK, NO_BREAK):
                raise ValueError(f"Expected { BREAK } or { NO_BREAK } not { token !r} in { line!r}")
            expected.append(token == BREAK)
        else:
            codepoint = int(token, 16)
            text.append(chr(codepoint))
            if codepoint > 0xFFFF:
                expected.append(False)
    return BreakTest(TextString("".join(text)).text, expected, comment.strip())


def break_test_results(kind: str, test: BreakTest) -> list[bool]:
    "Evaluates every offset of the test text with the grapheme or word evaluator"
    evaluator = _grapheme() if kind == "grapheme" else _word()
    cursor = TextString(test.text, converted=True)
    return [evaluator.is_break(cursor, i) for i in range(len(cursor) + 1)]


if __name__ == "__main__":
    import argparse
    import atexit
    import logging
    import sys
    import time

    # We output text non unicode compatible can't handle
    sys.stdout.reconfigure(errors="replace")

    parser = argparse.ArgumentParser(prog="python3 -m unisegment.unicode")
    parser.add_argument(
        "-v", "--verbose", default=False, action="store_true", help="Log table loading and matcher compilation"
    )
    parser.add_argument(
        "-cc",
        "--compact-codepoints",
        dest="compact_codepoints",
        action="store_true",
        default=False,
        help="Only show hex codepoint values, not full details",
    )

    subparsers = parser.add_subparsers(required=True)
    p = subparsers.add_parser("breaktest", help="Run Unicode test file")
    p.set_defaults(function="breaktest")
    p.add_argument(
        "--show-lines", default=False, action="store_true", help="Show each line as it is tested"
    )
    p.add_argument("--fail-fast", default=False, action="store_true", help="Exit on first test failure")
    p.add_argument("test", choices=("grapheme", "word"), help="What to test")
    p.add_argument(
        "file",
        help="break test text file.  They can be downloaded from https://www.unicode.org/Public/UCD/latest/ucd/auxiliary/",
        type=argparse.FileType("rt", encoding="utf8"),
    )

    p = subparsers.add_parser("show", help="Run against provided text")
    p.set_defaults(function="show")
    p.add_argument("show", choices=("grapheme", "word"), help="What to show")
    p.add_argument("--text-file", type=argparse.FileType("rt", encoding="utf8"))
    p.add_argument(
        "--emoji",
        default=False,
        action="store_true",
        help="For word, if emoji segments are included [%(default)s]",
    )
    p.add_argument(
        "--regional-indicator",
        default=False,
        action="store_true",
        help="For word, if regional indicator segments are included [%(default)s]",
    )
    p.add_argument("text", nargs="*", help="Text to segment unless --text-file used")

    p = subparsers.add_parser("codepoint", help="Show break properties of codepoints")
    p.add_argument("text", nargs="+", help="If a hex constant then use that value, otherwise treat as text")
    p.set_defaults(function="codepoint")

    p = subparsers.add_parser(
        "benchmark",
        help="Measure how long segmentation takes to iterate each segment",
    )
    p.set_defaults(function="benchmark")
    p.add_argument(
        "--size",
        type=float,
        default=1,
        help="How many million characters (codepoints) of text to use [%(default)s]",
    )
    p.add_argument("--seed", type=int, default=0, help="Random seed to use [%(default)s]")
    p.add_argument(
        "text_file",
        type=argparse.FileType("rt", encoding="utf8"),
        help="Text source to use.  It is repeatedly shuffled and appended until the sized amount of text is available.",
    )

    options = parser.parse_args()

    if options.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    def codepoint_details(kind: str, c: str, counter=None) -> str:
        if options.compact_codepoints:
            return f"U+{ord(c):04x}"
        counter = f"#{counter}:" if counter is not None else ""
        prop = word_break_property(c) if kind == "word" else grapheme_break_property(c)
        return "{" + f"{counter}U+" + ("%04X" % ord(c)) + f" : { prop or 'Other' }" + "}"

    if options.function == "show":
        if not options.text_file and not options.text:
            parser.error("You must specify at least --text-file or text arguments")

        text = ""
        if options.text_file:
            text += options.text_file.read()
        if options.text:
            if text:
                text += " "
            text += " ".join(options.text)

        if options.show == "word":
            segments = word_iter_with_offsets(
                text, emoji=options.emoji, regional_indicator=options.regional_indicator
            )
        else:
            segments = grapheme_iter_with_offsets(text)

        for counter, (begin, end, segment) in enumerate(segments):
            print(f"#{ counter } span { begin }-{ end } code units { end - begin } value: { segment }")
            for c in segment:
                print(" ", codepoint_details(options.show, c))

    elif options.function == "breaktest":
        # stop debug interpreter whining about file not being closed
        atexit.register(lambda: options.file.close())

        passed: int = 0
        fails: list[str] = []
        for line_num, line in enumerate(options.file, 1):
            test = parse_break_test(line)
            if test is None:
                continue
            if options.show_lines:
                print(f"{ line_num }: { line.rstrip() }")
            got = break_test_results(options.test, test)
            if got != test.expected:
                fails.append(f"Line { line_num } got breaks at { [i for i, b in enumerate(got) if b] } expected at { [i for i, b in enumerate(test.expected) if b] }")
                fails.append(line.strip())
                codepoints = [codepoint_details(options.test, c, counter) for counter, c in enumerate(test.text)]
                fails.append(" ".join(codepoints))
                fails.append("")
                if options.fail_fast:
                    break
                continue
            passed += 1

        if fails:
            print(f"{ len(fails)//4 } tests failed, {passed:,} passed:", file=sys.stderr)
            for fail in fails:
                print(fail, file=sys.stderr)
            sys.exit(2)
        else:
            print(f"{passed:,} passed")

    elif options.function == "codepoint":
        codepoints = []
        for t in options.text:
            try:
                codepoints.append(int(t, 16))
            except ValueError:
                codepoints.extend(ord(c) for c in t)

        for i, cp in enumerate(codepoints):
            print(f"#{ i } U+{ cp:04X} - ", end="")
            try:
                print(chr(cp))
            except UnicodeEncodeError:
                print()
            c = chr(cp)
            print(
                f"TR29 grapheme: { grapheme_break_property(cp) or 'Other' }   "
                f"word: { word_break_property(cp) or 'Other' }   "
                f"Extended_Pictographic: { is_extended_pictographic(c) }"
            )
            print()

    elif options.function == "benchmark":
        import random

        random.seed(options.seed)

        # break test codepoints that exercise the less common rules
        interesting = "".join(
            chr(int(x, 16))
            for x in """0300 0308 05D0 0600 0903 0915 094D 1100 1160 11A8 200D 2018 2019
                201C 201D 2060 231A 2701 3031 AC00 AC01 1F1E6 1F1E7 1F1E8 1F1E9 1F3FF
                1F476 1F6D1""".split()
        )

        base_text = options.text_file.read() + interesting
        text = ""
        while len(text) < options.size * 1_000_000:
            text += "".join(random.sample(base_text, len(base_text)))
        text = text[: int(options.size * 1_000_000)]

        print(f"Unicode version { unicode_version }.  Results in codepoints per second processed, returning each segment.")
        for kind, func in (("grapheme", grapheme_iter), ("word", word_iter)):
            print(f"{kind:>8}", end=" ", flush=True)
            start = time.process_time_ns()
            count = sum(1 for _ in func(text))
            end = time.process_time_ns()
            seconds = max(end - start, 1) / 1e9
            print(f"codepoints per second: { int(len(text)/seconds): 12,d}    segments: {count: 11,d}")
