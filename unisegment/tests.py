#!/usr/bin/env python3

# Tests for segmentation and the range compiler.  If the environment
# variable UNISEGMENT_UCD_DIR names a directory containing
# GraphemeBreakTest.txt and WordBreakTest.txt from the matching Unicode
# version then the full official break tests are also run.

import math
import os
import pathlib
import subprocess
import sys
import tempfile
import unittest

import unisegment
import unisegment.characterclass
import unisegment.unicode

from unisegment import _ucddb
from unisegment.graphemebreak import GraphemeBreak
from unisegment.properties import PropertyClassifier, PropertyTable, UnicodeTables, default_tables
from unisegment.ranges import (
    ConstructionError,
    SurrogateBox,
    char_range_array_regexp,
    compile_ranges,
    is_leading_surrogate,
    is_trailing_surrogate,
    scalar_value,
    surrogate_boxes,
    surrogate_pair,
)
from unisegment.textstring import TextString, code_unit_offsets, from_code_units, slice_units, to_code_units
from unisegment.wordbreak import WordBreak


class Ranges(unittest.TestCase):
    def testRegexp(self):
        "Verifies regular expression source for range lists"
        for ranges, expected, message in (
            ([0x0040], "\\u0040", "single BMP character"),
            ([0xFFFF], "\\uffff", "highest BMP character"),
            (
                [0x005F, (0x203F, 0x2040), 0x2054, (0xFE33, 0xFE34), (0xFE4D, 0xFE4F), 0xFF3F],
                "[\\u005f\\u203f-\\u2040\\u2054\\ufe33-\\ufe34\\ufe4d-\\ufe4f\\uff3f]",
                "multiple BMP ranges",
            ),
            ([0xD7FF], "\\ud7ff", "just below surrogate range"),
            ([0xE000], "\\ue000", "just above surrogate range"),
            ([0x10000], "\\ud800\\udc00", "lowest non-BMP character"),
            ([0x10001], "\\ud800\\udc01", "second-lowest non-BMP character"),
            ([0x103FF], "\\ud800\\udfff", "highest character with D800 leading surrogate"),
            ([0x10400], "\\ud801\\udc00", "lowest character with D801 leading surrogate"),
            ([(0xFF00, 0xFFFF)], "[\\uff00-\\uffff]", "single range at top of BMP"),
            ([(0xFF00, 0x10000)], "[\\uff00-\\uffff]|\\ud800\\udc00", "single range spanning BMP and non-BMP"),
            ([0xFFFF, 0x10000, 0x10002], "\\uffff|\\ud800\\udc00|\\ud800\\udc02", "single characters"),
            ([(0x0300, 0x0400), 0x10FFFF], "[\\u0300-\\u0400]|\\udbff\\udfff", "BMP range and non-BMP character"),
            (
                [(0xFF00, 0x103FF)],
                "[\\uff00-\\uffff]|\\ud800[\\udc00-\\udfff]",
                "range to top of D800 leading surrogate range",
            ),
            (
                [(0xFF00, 0x10400)],
                "[\\uff00-\\uffff]|\\ud800[\\udc00-\\udfff]|\\ud801\\udc00",
                "range to start of D801 leading surrogate range",
            ),
            (
                [(0xFF00, 0x10401)],
                "[\\uff00-\\uffff]|\\ud800[\\udc00-\\udfff]|\\ud801[\\udc00-\\udc01]",
                "range past start of D801 leading surrogate range",
            ),
            (
                [(0xFF00, 0x15555)],
                "[\\uff00-\\uffff]|[\\ud800-\\ud814][\\udc00-\\udfff]|\\ud815[\\udc00-\\udd55]",
                "range spanning multiple leading surrogate ranges",
            ),
            (
                [(0x10454, 0x10997)],
                "\\ud801[\\udc54-\\udfff]|\\ud802[\\udc00-\\udd97]",
                "range ending in the next leading surrogate range",
            ),
            (
                [(0x20222, 0x29999)],
                "\\ud840[\\ude22-\\udfff]|[\\ud841-\\ud865][\\udc00-\\udfff]|\\ud866[\\udc00-\\udd99]",
                "range ending in a distant leading surrogate range",
            ),
            (
                [
                    0x00AD,
                    (0x0600, 0x0604),
                    0x06DD,
                    0x070F,
                    (0x200E, 0x200F),
                    (0x202A, 0x202E),
                    (0x2060, 0x2064),
                    (0x206A, 0x206F),
                    0xFEFF,
                    (0xFFF9, 0xFFFB),
                    0x110BD,
                    (0x1D173, 0x1D17A),
                    0xE0001,
                    (0xE0020, 0xE007F),
                ],
                "[\\u00ad\\u0600-\\u0604\\u06dd\\u070f"
                "\\u200e-\\u200f\\u202a-\\u202e\\u2060-\\u2064"
                "\\u206a-\\u206f\\ufeff\\ufff9-\\ufffb]"
                "|\\ud804\\udcbd|\\ud834[\\udd73-\\udd7a]|\\udb40\\udc01"
                "|\\udb40[\\udc20-\\udc7f]",
                "multiple BMP and non-BMP ranges",
            ),
            (
                [(0x0, 0xD7FF), (0xE000, 0xFFFF), (0x10000, 0x10FFFF)],
                "[\\u0000-\\ud7ff\\ue000-\\uffff]|[\\ud800-\\udbff][\\udc00-\\udfff]",
                "largest possible range",
            ),
            ([], "", "nothing"),
        ):
            self.assertEqual(char_range_array_regexp(ranges), expected, message)
            # lists are accepted as well as tuples
            self.assertEqual(
                char_range_array_regexp([list(r) if isinstance(r, tuple) else r for r in ranges]), expected, message
            )

    def testConstructionErrors(self):
        "Ranges that can't be matched"
        for ranges, bad in (
            ([0xD800], (0xD800, 0xD800)),
            ([0xDFFF], (0xDFFF, 0xDFFF)),
            ([0x110000], (0x110000, 0x110000)),
            ([(0xCCCC, 0xDDDD)], (0xCCCC, 0xDDDD)),
            ([(0xDDDD, 0xEEEE)], (0xDDDD, 0xEEEE)),
            ([(0xDDDD, 0xEEEEE)], (0xDDDD, 0xEEEEE)),
            ([(0xCCCC, 0xEEEE)], (0xCCCC, 0xEEEE)),
            ([(0x2, 0x1)], (0x2, 0x1)),
            ([(0x10FFFF, 0x110000)], (0x10FFFF, 0x110000)),
            ([0x41, -1], (-1, -1)),
            ([(0xD800, 0xDFFF)], (0xD800, 0xDFFF)),
        ):
            self.assertRaises(ConstructionError, char_range_array_regexp, ranges)
            with self.assertRaises(ConstructionError) as cm:
                compile_ranges(ranges)
            self.assertEqual(cm.exception.range, bad)
            self.assertTrue(cm.exception.message)
            self.assertIsInstance(cm.exception, ValueError)

    def testSurrogateBoxes(self):
        self.assertEqual(surrogate_boxes(0x10000, 0x10000), [SurrogateBox(hi=(0xD800, 0xD800), lo=(0xDC00, 0xDC00))])
        self.assertEqual(
            surrogate_boxes(0x10454, 0x10997),
            [
                SurrogateBox(hi=(0xD801, 0xD801), lo=(0xDC54, 0xDFFF)),
                SurrogateBox(hi=(0xD802, 0xD802), lo=(0xDC00, 0xDD97)),
            ],
        )
        self.assertEqual(
            surrogate_boxes(0x10000, 0x10FFFF), [SurrogateBox(hi=(0xD800, 0xDBFF), lo=(0xDC00, 0xDFFF))]
        )
        self.assertEqual(len(surrogate_boxes(0x20222, 0x29999)), 3)

    def testMatcher(self):
        "Matchers accept exactly the encodings of their ranges"
        matcher = compile_ranges([(0xFF00, 0x10401)])
        for codepoint in (0xFF00, 0xFFFF, 0x10000, 0x10200, 0x103FF, 0x10400, 0x10401):
            self.assertTrue(matcher.matches(to_code_units(chr(codepoint))), f"{codepoint=:04X}")
        for units in ("\ud801\udc02", "\udc00\ud800", "\ud800", "\udc00", "\ufeff", "a", "", None, "\uff00\uff00"):
            self.assertFalse(matcher.matches(units), repr(units))
        self.assertIn("\uff10", matcher)
        self.assertEqual(matcher.findall("a\uff01b\ud800\udc00\ud801\udc02"), ["\uff01", "\ud800\udc00"])

        nothing = compile_ranges([])
        self.assertEqual(nothing.pattern, "")
        self.assertFalse(nothing.matches("a"))
        self.assertEqual(nothing.findall("abc"), [])

    def testIdempotence(self):
        "Compiling the same ranges gives the same matcher"
        ranges = [0x41, (0x61, 0x7A), (0x1F600, 0x1F64F)]
        first = compile_ranges(ranges)
        self.assertIs(first, compile_ranges(tuple(ranges)))
        self.assertEqual(first.pattern, compile_ranges([(0x41, 0x41), [0x61, 0x7A], (0x1F600, 0x1F64F)]).pattern)
        self.assertEqual(first.pattern, char_range_array_regexp(ranges))
        self.assertEqual(first.ranges, ((0x41, 0x41), (0x61, 0x7A), (0x1F600, 0x1F64F)))
        self.assertIn("RangeMatcher", repr(first))

    def testSurrogateHelpers(self):
        for codepoint in (0x10000, 0x10001, 0x103FF, 0x10400, 0x1F600, 0x282E2, 0x10FFFF):
            hi, lo = surrogate_pair(codepoint)
            self.assertTrue(is_leading_surrogate(chr(hi)))
            self.assertTrue(is_trailing_surrogate(chr(lo)))
            self.assertFalse(is_leading_surrogate(chr(lo)))
            self.assertFalse(is_trailing_surrogate(chr(hi)))
            self.assertEqual(scalar_value(chr(hi) + chr(lo)), codepoint)
            self.assertEqual(to_code_units(chr(codepoint)), chr(hi) + chr(lo))
            self.assertEqual(from_code_units(chr(hi) + chr(lo)), chr(codepoint))
        self.assertEqual(surrogate_pair(0x282E2), (0xD860, 0xDEE2))
        self.assertEqual(scalar_value("a"), 0x61)
        self.assertEqual(scalar_value("\udc00"), 0xDC00)
        for value in (None, "", "a", "\U00010000"):
            self.assertFalse(is_leading_surrogate(value))
            self.assertFalse(is_trailing_surrogate(value))


class Properties(unittest.TestCase):
    def testPriority(self):
        "Earlier values and tables win when ranges overlap"
        first = PropertyTable("first", {"A": [(0x41, 0x5A)], "B": [(0x40, 0x60)]})
        second = PropertyTable("second", {"C": [(0x0, 0x7F)], "D": [0x10FFFF]})

        classifier = PropertyClassifier(first)
        self.assertEqual(classifier.classify("M"), "A")
        self.assertEqual(classifier.classify("@"), "B")
        self.assertEqual(classifier.classify("["), "B")
        self.assertEqual(classifier.classify(0x60), "B")
        self.assertIsNone(classifier.classify("a"))
        self.assertIsNone(classifier.classify(" "))

        classifier = PropertyClassifier(first, second)
        self.assertEqual(classifier.classify("M"), "A")
        self.assertEqual(classifier.classify(" "), "C")
        self.assertEqual(classifier.classify("a"), "C")
        self.assertEqual(classifier.classify(chr(0x10FFFF)), "D")
        self.assertEqual(classifier.classify("\U0010FFFF"), "D")
        self.assertIsNone(classifier.classify(0x80))

        classifier = PropertyClassifier(second, first)
        self.assertEqual(classifier.classify("M"), "C")
        self.assertEqual(classifier.names, ("C", "D", "A", "B"))

    def testNothing(self):
        "None, lone surrogates and unlisted codepoints have no property"
        classifier = default_tables().word_break_classifier
        for codepoint in (None, "", "\ud800", "\udfff", 0xD800, "!", 0x10FFFF):
            self.assertIsNone(classifier.classify(codepoint), repr(codepoint))

    def testTable(self):
        table = default_tables().word_break
        self.assertEqual(list(table)[:3], ["Double_Quote", "Single_Quote", "Hebrew_Letter"])
        self.assertIn("ALetter", table)
        self.assertNotIn("Other", table)
        self.assertEqual(table["Single_Quote"], ((0x27, 0x27),))
        self.assertTrue(table.matcher("Regional_Indicator").matches(to_code_units("\U0001F1E6")))
        self.assertRaises(KeyError, table.__getitem__, "Other")
        self.assertRaises(ConstructionError, PropertyTable, "bad", {"X": [(0xD800, 0xD801)]})

    def testLookups(self):
        for codepoint, word, grapheme in (
            ("a", "ALetter", None),
            (0x1F1E6, "Regional_Indicator", "Regional_Indicator"),
            (" ", "WSegSpace", None),
            ("\u00ad", "Format", "Control"),
            ("\u0308", "Extend", "Extend"),
            ("\u200d", "ZWJ", "ZWJ"),
            ("\r", "CR", "CR"),
            ("\n", "LF", "LF"),
            ("\u0085", "Newline", "Control"),
            ("'", "Single_Quote", None),
            ('"', "Double_Quote", None),
            ("\u05d0", "Hebrew_Letter", None),
            ("\u30a2", "Katakana", None),
            ("1", "Numeric", None),
            (",", "MidNum", None),
            (".", "MidNumLet", None),
            (":", "MidLetter", None),
            ("_", "ExtendNumLet", None),
            (0xAC00, "ALetter", "LV"),
            (0xAC01, "ALetter", "LVT"),
            (0x1100, "ALetter", "L"),
            (0x1161, "ALetter", "V"),
            (0x11A8, "ALetter", "T"),
            (0x0600, "Format", "Prepend"),
            (0x0903, "Extend", "SpacingMark"),
            ("!", None, None),
            (0xD800, None, None),
        ):
            self.assertEqual(unisegment.unicode.word_break_property(codepoint), word, repr(codepoint))
            self.assertEqual(unisegment.unicode.grapheme_break_property(codepoint), grapheme, repr(codepoint))

        self.assertRaises(TypeError, unisegment.unicode.word_break_property, 3.0)
        self.assertRaises(ValueError, unisegment.unicode.word_break_property, "ab")

        self.assertTrue(unisegment.unicode.is_extended_pictographic("hello \U0001F607"))
        self.assertTrue(unisegment.unicode.is_extended_pictographic("\u2139"))
        self.assertFalse(unisegment.unicode.is_extended_pictographic("hello"))
        self.assertFalse(unisegment.unicode.is_extended_pictographic(""))
        self.assertTrue(unisegment.unicode.is_regional_indicator("flag \U0001F1E6"))
        self.assertFalse(unisegment.unicode.is_regional_indicator("A"))
        self.assertRaises(TypeError, unisegment.unicode.is_regional_indicator, b"A")

    def testLogging(self):
        "Table loading is logged"
        with self.assertLogs("unisegment.properties", level="DEBUG") as cm:
            tables = UnicodeTables.from_module(_ucddb)
            tables.grapheme_break_classifier
        self.assertTrue(any("14.0" in line for line in cm.output))
        self.assertTrue(any("grapheme_break" in line for line in cm.output))

    def testCustomTables(self):
        "Evaluators use the tables they are given"
        tables = UnicodeTables(
            "test",
            PropertyTable("word_break", {"ALetter": [(0x61, 0x7A)]}),
            PropertyTable("grapheme_break", {"Extend": [0x2D]}),
            PropertyTable("emoji", {"Extended_Pictographic": []}),
            PropertyTable("derived_core", {"Alphabetic": [(0x61, 0x7A)]}),
            PropertyTable("general_category", {"M": [], "Pc": []}),
        )
        self.assertIn("test", repr(tables))
        word = WordBreak(tables)
        self.assertFalse(word.is_break(TextString("ab"), 1))
        self.assertTrue(word.is_break(TextString("a1"), 1))
        self.assertFalse(WordBreak().is_break(TextString("a1"), 1))
        grapheme = GraphemeBreak(tables)
        self.assertEqual(grapheme.split_clusters("a-b\u0308"), ["a-", "b", "\u0308"])
        self.assertEqual(unisegment.characterclass.word_matcher(tables).findall("a1_\u0301z"), ["a", "1", "z"])


class TextStrings(unittest.TestCase):
    def testPrevNext(self):
        for text, next_values, prev_values, message in (
            ("XYZ", ["X", "Y", "Z", None], [None, "X", "Y", "Z"], "no surrogate"),
            (
                "X\ud800\udc00YZ",
                ["X", "\ud800\udc00", "\udc00", "Y", "Z", None],
                [None, "X", "\ud800", "\ud800\udc00", "Y", "Z"],
                "pair",
            ),
            (
                "\ud800WX\ud800YZ\ud800",
                ["\ud800", "W", "X", "\ud800", "Y", "Z", "\ud800", None],
                [None, "\ud800", "W", "X", "\ud800", "Y", "Z", "\ud800"],
                "unpaired leading",
            ),
            (
                "\udc00WX\udc00YZ\udc00",
                ["\udc00", "W", "X", "\udc00", "Y", "Z", "\udc00", None],
                [None, "\udc00", "W", "X", "\udc00", "Y", "Z", "\udc00"],
                "unpaired trailing",
            ),
        ):
            s = TextString(text, converted=True)
            for i, value in enumerate(next_values):
                self.assertEqual(s.next_codepoint(i), value, f"{message}: next_codepoint({i})")
            for i, value in enumerate(prev_values):
                self.assertEqual(s.prev_codepoint(i), value, f"{message}: prev_codepoint({i})")

        s = TextString("ab")
        self.assertIsNone(s.read(-1))
        self.assertIsNone(s.read(2))
        self.assertIsNone(s.next_codepoint(-1))
        self.assertIsNone(s.prev_codepoint(0))

    def testConversion(self):
        plain = "abc\U000282E2def"
        s = TextString(plain)
        self.assertEqual(str(s), "abc\ud860\udee2def")
        self.assertEqual(len(s), 8)
        self.assertEqual(from_code_units(str(s)), plain)
        self.assertEqual(s.next_codepoint(3), "\ud860\udee2")
        self.assertTrue(s.is_mid_surrogate(4))
        self.assertFalse(s.is_mid_surrogate(3))
        self.assertFalse(s.is_mid_surrogate(5))
        self.assertFalse(TextString("\udc00\ud800", converted=True).is_mid_surrogate(1))
        self.assertIn("converted=True", repr(s))
        self.assertRaises(TypeError, TextString, b"abc")

        # lone surrogates survive
        odd = "\ud800a\udc00\udbff"
        self.assertEqual(to_code_units(odd), odd)
        self.assertEqual(from_code_units(odd), odd)

    def testSlicing(self):
        text = "a\U0001F607b"
        self.assertEqual(code_unit_offsets(text), [0, 1, 3, 4])
        self.assertEqual(list(slice_units(text, [0, 1, 3, 4])), ["a", "\U0001F607", "b"])
        self.assertEqual(list(slice_units(text, [0, 2, 4])), ["a\U0001F607", "b"])
        self.assertEqual(list(slice_units(text, [1, 4])), ["\U0001F607b"])
        self.assertEqual(list(slice_units("", [0])), [])


def check_coverage(testcase: unittest.TestCase, evaluator, text: str):
    "Total, breaks at both ends, never inside a pair"
    cursor = TextString(text, converted=True)
    results = [evaluator.is_break(cursor, i) for i in range(len(cursor) + 1)]
    testcase.assertTrue(results[0])
    testcase.assertTrue(results[-1])
    for i in range(len(cursor) + 1):
        if cursor.is_mid_surrogate(i):
            testcase.assertFalse(results[i], f"{text!r} at {i}")


class WordBreaks(unittest.TestCase):
    def setUp(self):
        self.word = WordBreak()

    def testNextPrev(self):
        text = TextString("The quick brown fox")
        breaks = [0, 0, 3, 4, 9, 10, 15, 16, 19, 19]
        offset = 0
        for expected in breaks[2:]:
            offset = self.word.next_break_offset(text, offset)
            self.assertEqual(offset, expected)
        for expected in reversed(breaks[:-2]):
            offset = self.word.prev_break_offset(text, offset)
            self.assertEqual(offset, expected)

    def testOnlyAlphanumeric(self):
        text = TextString(
            "   The qui"
            "ck  brown "
            "..fox jump"
            "s... 3.141"
            "59 \u3059\u3069\u304f\u30b9\u30c9\u30af "
            "\u05e2\u05d1\u05e8\u05d9\u05ea  "
        )
        offset = 0
        for expected in (6, 12, 19, 25, 31, 42, 49, 55, 57):
            offset = self.word.next_break_offset(text, offset, True)
            self.assertEqual(offset, expected)
        for expected in (50, 46, 35, 26, 22, 14, 7, 3, 0):
            offset = self.word.prev_break_offset(text, offset, True)
            self.assertEqual(offset, expected)

    def testMoveBreakOffset(self):
        text = TextString("foo, bar")
        self.assertEqual(self.word.move_break_offset(1, text, 3), 4)
        self.assertEqual(self.word.move_break_offset(1, text, 3, only_alphanumeric=True), 8)
        self.assertEqual(self.word.move_break_offset(-1, text, 5, only_alphanumeric=True), 0)
        self.assertEqual(self.word.move_break_offset(-1, text, 0), 0)
        self.assertEqual(self.word.move_break_offset(1, text, 8), 8)

    def testRules(self):
        "Assorted boundaries checked position by position"
        for text, breaks in (
            ("can't", {0, 5}),
            ("3.14", {0, 4}),
            ("3,456.789", {0, 9}),
            ("a\u0308b", {0, 3}),
            ("\u0308a", {0, 1, 2}),
            ("\r\n", {0, 2}),
            ("a\nb", {0, 1, 2, 3}),
            ("   ", {0, 3}),
            ("\u200d\U0001F6D1", {0, 3}),
            ("a_1", {0, 3}),
            ("\u30a2\u30a4", {0, 2}),
            ("\u05d0'", {0, 2}),
            ('\u05d0"\u05d0', {0, 3}),
            ("a:1", {0, 1, 2, 3}),
            ("a.b.", {0, 3, 4}),
            ("\U0001F1E6\U0001F1E7\U0001F1E8", {0, 4, 6}),
            ("\U0001F1E6\u0308\U0001F1E7", {0, 5}),
            ("", {0}),
        ):
            cursor = TextString(text)
            got = {i for i in range(len(cursor) + 1) if self.word.is_break(cursor, i)}
            self.assertEqual(got, breaks, repr(text))

    def testTotality(self):
        for text in ("", "\ud800", "\udc00\ud800", "a\ud800\u0308", "\u0308\u200d\u00ad", "\U0001F1E6" * 5, "x\ud83c"):
            check_coverage(self, self.word, to_code_units(text))
            for direction in (1, -1):
                start = 0 if direction > 0 else len(to_code_units(text))
                offset = self.word.move_break_offset(direction, TextString(text), start)
                self.assertIn(offset, range(len(to_code_units(text)) + 1))


class GraphemeBreaks(unittest.TestCase):
    def setUp(self):
        self.grapheme = GraphemeBreak()

    def testSplitClusters(self):
        expected = [
            "a",
            " ",
            " ",
            "b",
            "\u30ab",
            "\u30bf",
            "\u30ab",
            "\u30ca",
            "c\u0300\u0327",
            "\U00010308",
            "\U00010308\u0302",
            "\r\n",
            "\n",
            "\u1104\u1173",
            "\u1105\u1161\u11a8",
            "\U0001F1ED\U0001F1F0",
        ]
        self.assertEqual(self.grapheme.split_clusters(TextString("".join(expected))), [to_code_units(c) for c in expected])
        self.assertEqual(self.grapheme.split_clusters(""), [])

    def testRules(self):
        for text, clusters in (
            ("\U0001F476\U0001F3FF\U0001F476", ["\U0001F476\U0001F3FF", "\U0001F476"]),
            ("\U0001F6D1\u200d\U0001F6D1", ["\U0001F6D1\u200d\U0001F6D1"]),
            ("\U0001F6D1\u0308\u0308\u200d\U0001F6D1", ["\U0001F6D1\u0308\u0308\u200d\U0001F6D1"]),
            ("a\u200d\U0001F6D1", ["a\u200d", "\U0001F6D1"]),
            ("\u0600 ", ["\u0600 "]),
            (" \u0903", [" \u0903"]),
            ("\uac00\u11a8\uac01\u11a8", ["\uac00\u11a8", "\uac01\u11a8"]),
            ("\u1100\uac00", ["\u1100\uac00"]),
            ("\n\u0308", ["\n", "\u0308"]),
            ("\ud800\u0308", ["\ud800", "\u0308"]),
            ("a\udc00\ud800b", ["a", "\udc00", "\ud800", "b"]),
            ("a\U0001F1E6\U0001F1E7\U0001F1E8b", ["a", "\U0001F1E6\U0001F1E7", "\U0001F1E8", "b"]),
        ):
            self.assertEqual(self.grapheme.split_clusters(text), [to_code_units(c) for c in clusters], repr(text))
            self.assertEqual(unisegment.unicode.split_clusters(text), clusters, repr(text))

    def testTotality(self):
        for text in ("", "\ud800", "\udc00\ud800", "a\ud800\u0308", "\u200d\u0308", "\U0001F1E6" * 5, "x\ud83c"):
            units = to_code_units(text)
            check_coverage(self, self.grapheme, units)
            self.assertEqual("".join(self.grapheme.split_clusters(units)), units)

    def testFlagParity(self):
        "k regional indicators make ceil(k/2) clusters and words"
        for k in range(1, 8):
            text = "\U0001F1FA" * k
            self.assertEqual(unisegment.unicode.grapheme_length(text), math.ceil(k / 2))
            self.assertEqual(len(list(unisegment.unicode.word_iter(text, regional_indicator=True))), math.ceil(k / 2))
            self.assertEqual(list(unisegment.unicode.word_iter(text)), [])


class CharacterClass(unittest.TestCase):
    def testWord(self):
        word_chars = [
            "a",
            "1",
            "_",
            "\u00e9",
            "\u0175",
            "x",
            "\u0301",
            "\u4e2d",
            "\ufe34",
            "\U000282E2",
            "\u0915",
            "\u094d",
            "\u200c",
            "\u0937",
            "\U0001D538",
        ]
        non_word_chars = [
            "$", "-", ".", "!", " ", '"', "'", "(", ")", "[", "]", "{", "}",
            "\u201c", "\u201d", "\u2018", "\u2019", "\u300c", "\u300d",
            " ", "\r", "\n", "\t", "\u3000",
            "\u0668",
            "\U0001F607", "\U0001D7E0",
        ]
        matcher = unisegment.characterclass.word_matcher()
        self.assertEqual(matcher.findall(to_code_units("".join(word_chars))), [to_code_units(c) for c in word_chars])
        self.assertEqual(matcher.findall(to_code_units("".join(non_word_chars))), [])
        self.assertEqual(unisegment.characterclass.patterns()["word"], matcher.pattern)
        self.assertIs(matcher, unisegment.characterclass.word_matcher(default_tables()))


class Facade(unittest.TestCase):
    # ÷ marks where breaks are expected, with the end of text implied
    break_tests = {
        "grapheme": (
            "a\u0308\u0308÷b",
            "e\u0301÷\U0001F1E6\U0001F1E7÷x",
            "\r\n÷\u0308",
            "\u1100\u1161\u11a8÷\uac00",
            "\U0001F469\u200d\U0001F4BB÷!",
        ),
        "word": (
            "Hello÷,÷ ÷w\u00f6rld",
            "3.14÷ ÷can't",
            "\U0001F1E6\U0001F1E7÷\U0001F1E8",
            "foo_bar÷ ÷\U0001F607",
        ),
    }

    def testBreaks(self):
        "Verifies break locations and the functions built on them"
        marker = "÷"
        for kind in "grapheme", "word":
            meth = getattr(unisegment.unicode, f"{kind}_next_break")
            meth_next = getattr(unisegment.unicode, f"{kind}_next")
            meth_iter_with_offsets = getattr(unisegment.unicode, f"{kind}_iter_with_offsets")
            meth_iter = getattr(unisegment.unicode, f"{kind}_iter")
            meth_is = getattr(unisegment.unicode, f"is_{kind}_break")

            # type and range checking
            self.assertRaises(TypeError, meth)
            self.assertRaises(TypeError, meth, 3)
            self.assertRaises(TypeError, meth, b"abc")
            self.assertRaises(TypeError, meth, "some text", "hello")
            self.assertRaises(ValueError, meth, "some text", -1)
            self.assertRaises(ValueError, meth, "some text", 1000)
            self.assertRaises(ValueError, meth, "some text", sys.maxsize)
            # offsets are code units so one past the end of codepoints is fine
            self.assertEqual(meth("\U0001F607", 2), 2)
            self.assertEqual((4, 4), meth_next("some", 4))
            self.assertEqual(tuple(), tuple(meth_iter("some", 4)))
            self.assertEqual(tuple(), tuple(meth_iter_with_offsets("some", 4)))

            for text in self.break_tests[kind]:
                test = ""
                breaks = []
                for c in text:
                    if c == marker:
                        breaks.append(len(to_code_units(test)))
                    else:
                        test += c
                breaks.append(len(to_code_units(test)))

                offset = 0
                seen = []
                while offset < len(to_code_units(test)):
                    offset = meth(test, offset)
                    seen.append(offset)
                self.assertEqual(seen, breaks, repr(text))

                for b in breaks:
                    self.assertTrue(meth_is(test, b))

                if kind == "grapheme":
                    segments = list(slice_units(test, [0] + breaks))
                    self.assertEqual(list(meth_iter(test)), segments)
                    self.assertEqual(
                        list(meth_iter_with_offsets(test)), list(zip([0] + breaks, breaks, segments))
                    )
                    self.assertEqual(unisegment.unicode.grapheme_length(test), len(breaks))
                    self.assertEqual(meth_next(test, 0), (0, breaks[0]))

    def testWords(self):
        self.assertEqual(list(unisegment.unicode.word_iter("Hello, w\u00f6rld 3.14!")), ["Hello", "w\u00f6rld", "3.14"])
        self.assertEqual(
            list(unisegment.unicode.word_iter_with_offsets("\U0001F607 hi \U0001F607")), [(3, 5, "hi")]
        )
        self.assertEqual(
            list(unisegment.unicode.word_iter_with_offsets("\U0001F607 hi \U0001F607", emoji=True)),
            [(0, 2, "\U0001F607"), (3, 5, "hi"), (6, 8, "\U0001F607")],
        )
        self.assertEqual(unisegment.unicode.word_next("  can't stop"), (2, 7))
        self.assertEqual(unisegment.unicode.word_next("  can't stop", 7), (8, 12))
        self.assertEqual(unisegment.unicode.word_next("  ...  "), (7, 7))
        self.assertEqual(unisegment.unicode.word_next(""), (0, 0))
        self.assertEqual(unisegment.unicode.word_prev_break("foo bar"), 4)
        self.assertEqual(unisegment.unicode.word_prev_break("foo bar", 4), 3)
        self.assertEqual(unisegment.unicode.word_prev_break("foo bar", 4, only_alphanumeric=True), 0)
        self.assertEqual(unisegment.unicode.word_next_break("foo bar", 0, only_alphanumeric=True), 3)
        self.assertEqual(unisegment.unicode.word_next_break("foo bar", 3, only_alphanumeric=True), 7)
        self.assertRaises(ValueError, unisegment.unicode.word_prev_break, "foo", 4)
        self.assertFalse(unisegment.unicode.is_word_break("a\U0001F607", 2))

    def testVersion(self):
        self.assertEqual(unisegment.unicode.unicode_version, "14.0")
        self.assertEqual(default_tables().unicode_version, unisegment.unicode.unicode_version)
        self.assertTrue(unisegment.__version__)


class BreakTestFiles(unittest.TestCase):
    # lines in the same format as the official test files
    grapheme_lines = (
        "÷ 0020 ÷ 0020 ÷\t#  ÷ [0.2] SPACE (Other) ÷ [999.0] SPACE (Other) ÷ [0.3]",
        "÷ 000D × 000A ÷",
        "÷ 000A ÷ 0308 ÷",
        "÷ 0061 × 0308 ÷ 0020 ÷",
        "÷ 1100 × 1161 × 11A8 ÷",
        "÷ AC00 × 11A8 ÷",
        "÷ AC01 × 11A8 ÷",
        "÷ 0600 × 0020 ÷",
        "÷ 0020 × 0903 ÷",
        "÷ D800 ÷ 0308 ÷",
        "÷ 1F1E6 × 1F1E7 ÷ 1F1E8 ÷",
        "÷ 0061 ÷ 1F1E6 × 1F1E7 ÷ 1F1E8 ÷ 0062 ÷",
        "÷ 1F476 × 1F3FF ÷ 1F476 ÷",
        "÷ 1F6D1 × 200D × 1F6D1 ÷",
        "÷ 1F6D1 × 0308 × 200D × 1F6D1 ÷",
        "÷ 0061 × 200D ÷ 1F6D1 ÷",
    )

    word_lines = (
        "÷ 0061 × 0027 × 0061 ÷",
        "÷ 0031 × 002E × 0032 ÷",
        "÷ 0031 × 0308 × 002C × 0031 ÷",
        "÷ 0061 ÷ 003A ÷ 0031 ÷",
        "÷ 05D0 × 0027 ÷",
        "÷ 05D0 × 0022 × 05D0 ÷",
        "÷ 30A2 × 30A4 ÷",
        "÷ 0061 × 005F × 0031 ÷",
        "÷ 0020 × 0020 ÷",
        "÷ 200D × 1F6D1 ÷",
        "÷ 0061 × 0308 × 0062 ÷",
        "÷ 0308 ÷ 0061 ÷",
        "÷ 000D × 000A ÷",
        "÷ 0061 ÷ 0020 ÷ 0062 ÷",
        "÷ 1F1E6 × 1F1E7 ÷ 1F1E8 ÷",
        "÷ 1F1E6 × 0308 × 1F1E7 ÷",
        "÷ 000A ÷ 0308 × 0308 ÷",
    )

    def testParse(self):
        test = unisegment.unicode.parse_break_test("÷ 0061 × 1F1E6 ÷  # comment here\n")
        self.assertEqual(test.text, "a\ud83c\udde6")
        self.assertEqual(test.expected, [True, False, False, True])
        self.assertEqual(test.comment, "comment here")
        self.assertIsNone(unisegment.unicode.parse_break_test("# just a comment"))
        self.assertIsNone(unisegment.unicode.parse_break_test("   \n"))
        self.assertRaises(ValueError, unisegment.unicode.parse_break_test, "÷ 0061 ÷ 0062")
        self.assertRaises(ValueError, unisegment.unicode.parse_break_test, "÷ 0061 + 0062 ÷")
        self.assertRaises(ValueError, unisegment.unicode.parse_break_test, "÷ XYZ ÷")

    def testLines(self):
        for kind, lines in (("grapheme", self.grapheme_lines), ("word", self.word_lines)):
            for line in lines:
                test = unisegment.unicode.parse_break_test(line)
                self.assertEqual(len(test.expected), len(test.text) + 1, line)
                self.assertEqual(unisegment.unicode.break_test_results(kind, test), test.expected, f"{kind}: {line}")

    def exec(self, *args):
        return subprocess.run([sys.executable, "-m", "unisegment.unicode"] + list(args), capture_output=True)

    def write_temp(self, contents: str) -> str:
        f = tempfile.NamedTemporaryFile("wt", encoding="utf8", suffix=".txt", delete=False)
        with f:
            f.write(contents)
        self.addCleanup(os.remove, f.name)
        return f.name

    def testBreaktestCLI(self):
        for kind, lines in (("grapheme", self.grapheme_lines), ("word", self.word_lines)):
            name = self.write_temp("# header comment\n\n" + "\n".join(lines) + "\n")
            proc = self.exec("breaktest", kind, name)
            self.assertEqual(proc.returncode, 0, f"Failed {proc=}")
            self.assertIn(f"{len(lines)} passed", proc.stdout.decode())

        name = self.write_temp("÷ 0061 ÷ 0308 ÷\n÷ 0061 × 0308 ÷\n")
        proc = self.exec("breaktest", "grapheme", name)
        self.assertEqual(proc.returncode, 2, f"Failed {proc=}")
        self.assertIn("1 tests failed, 1 passed", proc.stderr.decode())

    def testCLI(self):
        "Exercise command line interface"
        text = "Hello, w\u00f6rld 3.14 \U0001F1E6\U0001F1E7 e\u0301 \U0001F6D1\u200d\U0001F6D1"
        name = self.write_temp(text)
        for kind in "grapheme", "word":
            proc = self.exec("show", "--text-file", name, kind)
            self.assertEqual(proc.returncode, 0, f"Failed {proc=}")
            proc = self.exec("--compact-codepoints", "show", kind, "can't", "stop")
            self.assertEqual(proc.returncode, 0, f"Failed {proc=}")

        proc = self.exec("show", "word", "--emoji", "--regional-indicator", text)
        self.assertEqual(proc.returncode, 0, f"Failed {proc=}")

        proc = self.exec("show", "word")
        self.assertNotEqual(proc.returncode, 0)

        proc = self.exec("--verbose", "codepoint", "0041", "1F1E6", text)
        self.assertEqual(proc.returncode, 0, f"Failed {proc=}")
        self.assertIn("Regional_Indicator", proc.stdout.decode())
        self.assertIn("unisegment.properties", proc.stderr.decode())

        proc = self.exec("benchmark", "--size", "0.01", name)
        self.assertEqual(proc.returncode, 0, f"Failed {proc=}")

    def testBreaksFull(self):
        "Tests full official break tests (if available)"
        directory = os.environ.get("UNISEGMENT_UCD_DIR")
        if not directory:
            return

        for kind, base in (("grapheme", "Grapheme"), ("word", "Word")):
            path = pathlib.Path(directory) / f"{base}BreakTest.txt"
            if not path.exists():
                continue
            proc = self.exec("breaktest", kind, str(path))
            self.assertEqual(proc.returncode, 0, f"Failed {proc=}")


if __name__ == "__main__":
    unittest.main()
