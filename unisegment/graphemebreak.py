"""
Default extended grapheme cluster boundaries from `Unicode Technical
Report #29 <https://www.unicode.org/reports/tr29/#Grapheme_Cluster_Boundaries>`__
"""

from __future__ import annotations

from .properties import UnicodeTables, default_tables
from .ranges import SURROGATE_MIN, SURROGATE_MAX
from .textstring import TextString

CONTROLS = frozenset({"Control", "CR", "LF"})


class GraphemeBreak:
    """Grapheme cluster boundary evaluator

    :param tables: Property data to use, defaulting to :func:`~unisegment.properties.default_tables`
    """

    def __init__(self, tables: UnicodeTables | None = None):
        self.tables = tables or default_tables()
        self.classifier = self.tables.grapheme_break_classifier
        self.extended_pictographic = self.tables.extended_pictographic

    def property(self, codepoint: str | None) -> str | None:
        "Grapheme break property of a codepoint, with lone surrogates being Control"
        if codepoint is not None and len(codepoint) == 1 and SURROGATE_MIN <= ord(codepoint) <= SURROGATE_MAX:
            return "Control"
        return self.classifier.classify(codepoint)

    def is_break(self, text: TextString, pos: int) -> bool:
        "Is there a grapheme cluster boundary at the code unit offset?"

        # GB1, GB2
        if text.read(pos - 1) is None or text.read(pos) is None:
            return True

        if text.is_mid_surrogate(pos):
            return False

        prev_codepoint = text.prev_codepoint(pos)
        next_codepoint = text.next_codepoint(pos)
        left = self.property(prev_codepoint)
        right = self.property(next_codepoint)

        # GB3
        if left == "CR" and right == "LF":
            return False

        # GB4
        if left in CONTROLS:
            return True

        # GB5
        if right in CONTROLS:
            return True

        # GB6
        if left == "L" and right in ("L", "V", "LV", "LVT"):
            return False

        # GB7
        if left in ("LV", "V") and right in ("V", "T"):
            return False

        # GB8
        if left in ("LVT", "T") and right == "T":
            return False

        # GB9
        if right in ("Extend", "ZWJ"):
            return False

        # GB9a
        if right == "SpacingMark":
            return False

        # GB9b
        if left == "Prepend":
            return False

        # GB11
        if left == "ZWJ" and self.extended_pictographic.matches(next_codepoint):
            n = len(prev_codepoint)
            while (codepoint := text.prev_codepoint(pos - n)) is not None:
                n += len(codepoint)
                if self.property(codepoint) != "Extend":
                    if self.extended_pictographic.matches(codepoint):
                        return False
                    break

        # GB12, GB13
        if left == "Regional_Indicator" and right == "Regional_Indicator":
            regional = 0
            n = 0
            while (codepoint := text.prev_codepoint(pos - n)) is not None:
                if self.property(codepoint) != "Regional_Indicator":
                    break
                regional += 1
                n += len(codepoint)
            if regional % 2 == 1:
                return False

        # GB999
        return True

    def next_break_offset(self, text: TextString, pos: int) -> int:
        "Returns the end of the grapheme cluster starting at pos"
        while (codepoint := text.next_codepoint(pos)) is not None:
            pos += len(codepoint)
            if self.is_break(text, pos):
                break
        return pos

    def split_clusters(self, text: TextString | str) -> list[str]:
        """Splits text into grapheme clusters

        :param text: A :class:`~unisegment.textstring.TextString` or
           ordinary string which is converted to code units first

        Returns the clusters as code unit strings.  Joined together they
        give back all of the code unit text.
        """
        if isinstance(text, str):
            text = TextString(text)
        clusters: list[str] = []
        start = 0
        while start < len(text):
            end = self.next_break_offset(text, start)
            clusters.append(text.text[start:end])
            start = end
        return clusters
