"""
Reading codepoints from UTF-16 code unit text

Segmentation offsets are UTF-16 code unit offsets.  Python strings are
sequences of codepoints, so text is first converted with
:func:`to_code_units` which writes every codepoint above the BMP as
two surrogate characters.  Lone surrogates pass through unchanged and
are treated as codepoints of their own.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from .ranges import BMP_MAX, is_leading_surrogate, is_trailing_surrogate, scalar_value, surrogate_pair


def to_code_units(text: str) -> str:
    "Returns text with each codepoint above the BMP replaced by its surrogate pair"
    if all(ord(c) <= BMP_MAX for c in text):
        return text
    return "".join(c if ord(c) <= BMP_MAX else "".join(map(chr, surrogate_pair(ord(c)))) for c in text)


def from_code_units(units: str) -> str:
    "Joins valid surrogate pairs back into single codepoints, leaving lone surrogates alone"
    res: list[str] = []
    cursor = TextString(units, converted=True)
    pos = 0
    while (codepoint := cursor.next_codepoint(pos)) is not None:
        res.append(chr(scalar_value(codepoint)))
        pos += len(codepoint)
    return "".join(res)


def code_unit_offsets(text: str) -> list[int]:
    """For each index into text plus the end, the corresponding code unit offset

    :param text: An ordinary :class:`str`
    """
    offsets = [0]
    for c in text:
        offsets.append(offsets[-1] + (2 if ord(c) > BMP_MAX else 1))
    return offsets


def slice_units(text: str, offsets: Iterable[int]) -> Iterator[str]:
    """Cuts an ordinary string at increasing code unit offsets

    Yields the text between each consecutive pair of offsets.  An
    offset falling inside the pair for a codepoint above the BMP
    rounds up to the end of that codepoint.
    """
    index = 0
    unit = 0
    start_index: int | None = None
    for offset in offsets:
        while unit < offset and index < len(text):
            unit += 2 if ord(text[index]) > BMP_MAX else 1
            index += 1
        if start_index is not None:
            yield text[start_index:index]
        start_index = index


class TextString:
    """Cursor over code unit text hiding surrogate pairing

    :param text: Text to read
    :param converted: Set if text is already code units, otherwise
        it is converted with :func:`to_code_units`

    All positions are code unit offsets.  Every method is total - out of
    bounds positions give ``None`` or ``False`` and ill-formed UTF-16 is
    fine.
    """

    def __init__(self, text: str, converted: bool = False):
        if not isinstance(text, str):
            raise TypeError(f"Expected str not { type(text) }")
        self.text = text if converted else to_code_units(text)

    def read(self, position: int) -> str | None:
        "Code unit at position, or None if out of bounds"
        if 0 <= position < len(self.text):
            return self.text[position]
        return None

    def next_codepoint(self, position: int) -> str | None:
        """Codepoint starting at position

        This is the code unit at position, unless it starts a valid
        surrogate pair in which case both units are returned.
        """
        unit = self.read(position)
        if is_leading_surrogate(unit):
            following = self.read(position + 1)
            if is_trailing_surrogate(following):
                return unit + following
        return unit

    def prev_codepoint(self, position: int) -> str | None:
        "Codepoint ending at position, with a valid surrogate pair returned whole"
        unit = self.read(position - 1)
        if is_trailing_surrogate(unit):
            preceding = self.read(position - 2)
            if is_leading_surrogate(preceding):
                return preceding + unit
        return unit

    def is_mid_surrogate(self, position: int) -> bool:
        "True if position is between the two halves of a surrogate pair"
        return is_leading_surrogate(self.read(position - 1)) and is_trailing_surrogate(self.read(position))

    def __len__(self) -> int:
        return len(self.text)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"TextString({ self.text!r}, converted=True)"
