"""Data models produced by the key parser.

The parser emits ``PhoneticKey`` values paired with the ``RawSpan`` of input
each one consumed. Both are immutable so results can be cached or shared across
threads by callers without copying.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import enum

TONE_GLYPHS = ("", "ˉ", "ˊ", "ˇ", "ˋ", "˙")


class Tone(enum.IntEnum):
    """Tone level of a syllable; ``NONE`` means no tone was typed."""

    NONE = 0
    FIRST = 1
    SECOND = 2
    THIRD = 3
    FOURTH = 4
    FIFTH = 5

    @property
    def glyph(self) -> str:
        """Return the Bopomofo tone mark, or an empty string for ``NONE``."""

        return TONE_GLYPHS[self]


@dataclass(frozen=True)
class PhoneticKey:
    """Canonical decoded syllable.

    Components are stored as Bopomofo symbols, with an empty string for an
    absent slot. ``table_index`` points into the canonical content table and is
    used downstream for ambiguity comparison; ``0`` is reserved for an invalid
    key. Tone is attached by the decoder after lookup.
    """

    initial: str = ""
    middle: str = ""
    final: str = ""
    tone: Tone = Tone.NONE
    table_index: int = 0

    @property
    def symbols(self) -> str:
        """Return the Bopomofo symbols of the syllable without tone."""

        return f"{self.initial}{self.middle}{self.final}"

    @property
    def zhuyin(self) -> str:
        """Return the Bopomofo rendering including the tone glyph."""

        return self.symbols + self.tone.glyph


@dataclass(frozen=True)
class RawSpan:
    """Half-open ``[begin, end)`` offset range of raw input for one key."""

    begin: int
    end: int

    @property
    def length(self) -> int:
        """Return the number of raw characters covered by the span."""

        return self.end - self.begin


@dataclass(frozen=True)
class ParseResult:
    """Outcome of segmenting one input line.

    ``keys`` and ``spans`` are index-aligned. ``parsed_length`` is the number
    of leading raw characters consumed, including separators that followed the
    last key; callers own everything after it.
    """

    keys: tuple[PhoneticKey, ...] = field(default_factory=tuple)
    spans: tuple[RawSpan, ...] = field(default_factory=tuple)
    parsed_length: int = 0

    def remainder(self, text: str) -> str:
        """Return the unconsumed tail of ``text``."""

        return text[self.parsed_length :]
