"""
Unicode property tables and codepoint classification

The generated :mod:`unisegment._ucddb` module holds, for each
property, the ranges of scalar values having each property value.
:class:`PropertyTable` wraps one of those mappings, and
:class:`PropertyClassifier` answers "which value does this codepoint
have" using a sorted boundary array searched with :mod:`bisect`.

When ranges for different values overlap, the value declared first
wins.  Tables passed earlier to :class:`PropertyClassifier` take
priority over later ones.
"""

from __future__ import annotations

import bisect
import functools
import logging
import types

from typing import Iterable, Iterator, Mapping

from .ranges import RangeMatcher, check_range, compile_ranges, scalar_value, SURROGATE_MIN, SURROGATE_MAX

log = logging.getLogger(__name__)


class PropertyTable:
    """Immutable mapping of property value name to its scalar value ranges

    Iteration order is the declaration order, which is also the
    classification priority.
    """

    name: str
    "Name of the property, such as ``word_break``"

    def __init__(self, name: str, values: Mapping[str, Iterable]):
        self.name = name
        self._values = types.MappingProxyType(
            {value: tuple(check_range(r) for r in ranges) for value, ranges in values.items()}
        )

    def __getitem__(self, value: str) -> tuple[tuple[int, int], ...]:
        return self._values[value]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, value: object) -> bool:
        return value in self._values

    def items(self):
        return self._values.items()

    def matcher(self, value: str) -> RangeMatcher:
        "Compiled matcher for one property value"
        return compile_ranges(self._values[value])

    def __repr__(self) -> str:
        return f"<PropertyTable { self.name } { len(self) } values>"


class PropertyClassifier:
    """Maps codepoints to the first matching property value

    :param tables: Tables to consult, in priority order

    A lone surrogate, an unlisted codepoint, or ``None`` (out of range
    position) all classify as ``None``.
    """

    def __init__(self, *tables: PropertyTable):
        self.tables = tables
        names: list[str] = []

        # start of range, priority, adding?
        events: list[tuple[int, int, bool]] = []
        for table in tables:
            for value, ranges in table.items():
                priority = len(names)
                names.append(value)
                for low, high in ranges:
                    events.append((low, priority, True))
                    events.append((high + 1, priority, False))
        events.sort()
        self.names = tuple(names)

        active = [0] * len(self.names)
        starts: list[int] = []
        values: list[str | None] = []

        i = 0
        while i < len(events):
            point = events[i][0]
            while i < len(events) and events[i][0] == point:
                _, priority, adding = events[i]
                active[priority] += 1 if adding else -1
                i += 1
            current = next((self.names[p] for p, count in enumerate(active) if count), None)
            if values and values[-1] == current:
                continue
            starts.append(point)
            values.append(current)

        self._starts = starts
        self._values = values
        log.debug("classifier for %s has %d boundaries", ", ".join(t.name for t in tables), len(starts))

    def classify(self, codepoint: str | int | None) -> str | None:
        "Returns the property value of a codepoint given as one or two code units, or as an int"
        if codepoint is None:
            return None
        if isinstance(codepoint, str):
            if not codepoint:
                return None
            scalar = scalar_value(codepoint)
        else:
            scalar = codepoint
        if SURROGATE_MIN <= scalar <= SURROGATE_MAX:
            return None
        index = bisect.bisect_right(self._starts, scalar) - 1
        return self._values[index] if index >= 0 else None

    __call__ = classify


class UnicodeTables:
    """All the property data needed for segmentation, for one Unicode version

    Classifiers and matchers are built on first use and then shared.
    """

    unicode_version: str
    "Version of the Unicode Character Database the tables come from"

    def __init__(
        self,
        unicode_version: str,
        word_break: PropertyTable,
        grapheme_break: PropertyTable,
        emoji: PropertyTable,
        derived_core: PropertyTable,
        general_category: PropertyTable,
    ):
        self.unicode_version = unicode_version
        self.word_break = word_break
        self.grapheme_break = grapheme_break
        self.emoji = emoji
        self.derived_core = derived_core
        self.general_category = general_category

    @classmethod
    def from_module(cls, module: types.ModuleType) -> UnicodeTables:
        "Builds tables from a generated data module"
        log.debug("loading Unicode %s tables from %s", module.unicode_version, module.__name__)
        return cls(
            module.unicode_version,
            PropertyTable("word_break", module.word_break),
            PropertyTable("grapheme_break", module.grapheme_break),
            PropertyTable("emoji", module.emoji),
            PropertyTable("derived_core", module.derived_core),
            PropertyTable("general_category", module.general_category),
        )

    @functools.cached_property
    def word_break_classifier(self) -> PropertyClassifier:
        return PropertyClassifier(self.word_break)

    @functools.cached_property
    def grapheme_break_classifier(self) -> PropertyClassifier:
        return PropertyClassifier(self.grapheme_break)

    @functools.cached_property
    def extended_pictographic(self) -> RangeMatcher:
        return self.emoji.matcher("Extended_Pictographic")

    @functools.cached_property
    def regional_indicator(self) -> RangeMatcher:
        return self.grapheme_break.matcher("Regional_Indicator")

    def __repr__(self) -> str:
        return f"<UnicodeTables { self.unicode_version }>"


@functools.lru_cache(maxsize=None)
def default_tables() -> UnicodeTables:
    "Tables from the bundled data, built once"
    from . import _ucddb

    return UnicodeTables.from_module(_ucddb)
