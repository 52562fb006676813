"""
Default word boundaries from `Unicode Technical Report #29
<https://www.unicode.org/reports/tr29/#Word_Boundaries>`__

Each position is evaluated independently, looking at the word break
property of codepoints either side of it.  Format, Extend and ZWJ are
transparent (rule WB4) and skipped when looking further out.
"""

from __future__ import annotations

from dataclasses import dataclass

from .properties import UnicodeTables, default_tables
from .textstring import TextString

TRANSPARENT = frozenset({"Format", "Extend", "ZWJ"})
AHLETTER = frozenset({"ALetter", "Hebrew_Letter"})
MIDNUMLETQ = frozenset({"MidNumLet", "Single_Quote"})
NEWLINES = frozenset({"Newline", "CR", "LF"})
ALPHANUMERIC = frozenset({"ALetter", "Numeric", "Katakana", "Hebrew_Letter"})
"Properties a codepoint must have to end a word when only alphanumeric words are wanted"


@dataclass
class BreakContext:
    "Word break properties around the position being evaluated"

    left: str | None = None
    "Property of the codepoint ending at the position, after skipping transparent ones"
    right: str | None = None
    "Property of the codepoint starting at the position"
    left2: str | None = None
    "Next non-transparent property further left"
    right2: str | None = None
    "Next non-transparent property further right"


class WordBreak:
    """Word boundary evaluator

    :param tables: Property data to use, defaulting to :func:`~unisegment.properties.default_tables`
    """

    def __init__(self, tables: UnicodeTables | None = None):
        self.tables = tables or default_tables()
        self.classifier = self.tables.word_break_classifier
        self.extended_pictographic = self.tables.extended_pictographic

    def property(self, codepoint: str | int | None) -> str | None:
        "Word break property of a codepoint, or None"
        return self.classifier.classify(codepoint)

    def next_break_offset(self, text: TextString, pos: int, only_alphanumeric: bool = False) -> int:
        "Returns the first word boundary after pos"
        return self.move_break_offset(1, text, pos, only_alphanumeric)

    def prev_break_offset(self, text: TextString, pos: int, only_alphanumeric: bool = False) -> int:
        "Returns the first word boundary before pos"
        return self.move_break_offset(-1, text, pos, only_alphanumeric)

    def move_break_offset(self, direction: int, text: TextString, pos: int, only_alphanumeric: bool = False) -> int:
        """Finds the next word boundary in a direction

        :param direction: ``1`` to go forwards, ``-1`` backwards
        :param text: Text to search
        :param pos: Starting code unit offset, which is not itself considered
        :param only_alphanumeric: Skip boundaries where the codepoint just
            stepped over isn't a letter or number, so the result is always
            the far edge of a word (or the end of text)

        Returns the start or end of text if there are no more boundaries.
        """
        if direction > 0:
            step, crossed = text.next_codepoint, text.prev_codepoint
        else:
            step, crossed = text.prev_codepoint, text.next_codepoint

        while (codepoint := step(pos)) is not None:
            pos += len(codepoint) * direction
            if self.is_break(text, pos):
                if only_alphanumeric and self.property(crossed(pos)) not in ALPHANUMERIC:
                    continue
                break
        return pos

    def is_break(self, text: TextString, pos: int) -> bool:
        "Is there a word boundary at the code unit offset?"

        # WB1, WB2
        if text.read(pos - 1) is None or text.read(pos) is None:
            return True

        if text.is_mid_surrogate(pos):
            return False

        next_codepoint = text.next_codepoint(pos)
        prev_codepoint = text.prev_codepoint(pos)
        context = BreakContext(left=self.property(prev_codepoint), right=self.property(next_codepoint))
        r = len(next_codepoint)
        l = len(prev_codepoint)

        # WB3
        if context.left == "CR" and context.right == "LF":
            return False

        # WB3a
        if context.left in NEWLINES:
            return True

        # WB3b
        if context.right in NEWLINES:
            return True

        # WB3c
        if context.left == "ZWJ" and self.extended_pictographic.matches(next_codepoint):
            return False

        # WB3d
        if context.left == "WSegSpace" and context.right == "WSegSpace":
            return False

        # WB4
        if context.right in TRANSPARENT:
            return False
        while context.left in TRANSPARENT:
            if pos - l <= 0:
                return True
            prev_codepoint = text.prev_codepoint(pos - l)
            context.left = self.property(prev_codepoint)
            l += len(prev_codepoint)

        # WB5
        if context.left in AHLETTER and context.right in AHLETTER:
            return False

        while (codepoint := text.next_codepoint(pos + r)) is not None:
            r += len(codepoint)
            context.right2 = self.property(codepoint)
            if context.right2 not in TRANSPARENT:
                break
        else:
            context.right2 = None

        while (codepoint := text.prev_codepoint(pos - l)) is not None:
            l += len(codepoint)
            context.left2 = self.property(codepoint)
            if context.left2 not in TRANSPARENT:
                break
        else:
            context.left2 = None

        left, right, left2, right2 = context.left, context.right, context.left2, context.right2

        # WB6
        if left in AHLETTER and (right == "MidLetter" or right in MIDNUMLETQ) and right2 in AHLETTER:
            return False

        # WB7
        if left2 in AHLETTER and (left == "MidLetter" or left in MIDNUMLETQ) and right in AHLETTER:
            return False

        # WB7a
        if left == "Hebrew_Letter" and right == "Single_Quote":
            return False

        # WB7b
        if left == "Hebrew_Letter" and right == "Double_Quote" and right2 == "Hebrew_Letter":
            return False

        # WB7c
        if left2 == "Hebrew_Letter" and left == "Double_Quote" and right == "Hebrew_Letter":
            return False

        # WB8
        if left == "Numeric" and right == "Numeric":
            return False

        # WB9
        if left in AHLETTER and right == "Numeric":
            return False

        # WB10
        if left == "Numeric" and right in AHLETTER:
            return False

        # WB11
        if left2 == "Numeric" and (left == "MidNum" or left in MIDNUMLETQ) and right == "Numeric":
            return False

        # WB12
        if left == "Numeric" and (right == "MidNum" or right in MIDNUMLETQ) and right2 == "Numeric":
            return False

        # WB13
        if left == "Katakana" and right == "Katakana":
            return False

        # WB13a
        if right == "ExtendNumLet" and (left in ALPHANUMERIC or left == "ExtendNumLet"):
            return False

        # WB13b
        if left == "ExtendNumLet" and right in ALPHANUMERIC:
            return False

        # WB14 - only present in data before Unicode 11
        if left in ("E_Base", "E_Base_GAZ") and right == "E_Modifier":
            return False

        # WB15, WB16
        if left == "Regional_Indicator" and right == "Regional_Indicator":
            regional = 0
            n = 0
            while (codepoint := text.prev_codepoint(pos - n)) is not None:
                n += len(codepoint)
                prop = self.property(codepoint)
                if prop == "Regional_Indicator":
                    regional += 1
                elif prop not in TRANSPARENT:
                    break
            if regional % 2 == 1:
                return False

        # WB999
        return True
