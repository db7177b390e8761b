"""Window decoders: one fixed-length raw window in, at most one key out.

Four strategies cover every supported keyboard family:

- ``ContiguousDecoder``: every key types exactly one symbol (Standard, IBM, ...).
- ``DiscreteDecoder``: one key per ordered role slot (Hsu, ETen26).
- ``AmbiguousDiscreteDecoder``: keys shared between two symbols are resolved by
  how often they repeat inside the window (DaChen CP26).
- ``DirectDecoder``: the window is itself the composed string (Bopomofo or a
  romanization), optionally followed by a tone marker.

All decoders share the same interface: ``max_key_length``, ``in_scheme`` and
``decode_window``. They are immutable; every piece of scratch state is local
to one call.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Mapping

from zhuyin_parser.lookup import search_index
from zhuyin_parser.models import PhoneticKey, Tone
from zhuyin_parser.options import ParseOptions
from zhuyin_parser.segmenter import SEPARATORS
from zhuyin_parser.tables.index import SchemeIndex
from zhuyin_parser.tables.keyboards import SlotLayout

MAX_CHEWING_LENGTH = 4
MAX_DACHEN_CP26_LENGTH = 7


def _strip_tone(
    options: ParseOptions, window: str, tones: Mapping[str, Tone]
) -> tuple[str, Tone, bool] | None:
    """Split a trailing tone key off ``window``.

    Args:
        options: Effective parse options.
        window: Non-empty raw window.
        tones: Key -> tone map of the active scheme.

    Returns:
        ``(body, tone, found)`` where ``found`` tells whether a tone key was
        removed, or ``None`` when ``FORCE_TONE`` demands a tone that is absent.
    """

    if not options & ParseOptions.USE_TONE:
        return window, Tone.NONE, False

    tone = tones.get(window[-1])
    if tone is not None:
        return window[:-1], tone, True
    if options & ParseOptions.FORCE_TONE:
        return None
    return window, Tone.NONE, False


def _tone_fragment(options: ParseOptions, char: str, tones: Mapping[str, Tone]) -> list[str]:
    """Return the tone glyph typed by ``char``.

    Args:
        options: Effective parse options.
        char: One raw key.
        tones: Key -> tone map of the active scheme.

    Returns:
        A one-item list when tones are in use and ``char`` is a tone key,
        otherwise an empty list.
    """

    if options & ParseOptions.USE_TONE and char in tones:
        return [tones[char].glyph]
    return []


def _with_tone(key: PhoneticKey | None, tone: Tone) -> PhoneticKey | None:
    """Return ``key`` carrying ``tone``, passing a failed lookup through."""

    return None if key is None else replace(key, tone=tone)


@dataclass(frozen=True)
class ContiguousDecoder:
    """Decoder for layouts where each key types exactly one Bopomofo symbol."""

    symbols: Mapping[str, str]
    tones: Mapping[str, Tone]
    index: SchemeIndex
    max_key_length: int = MAX_CHEWING_LENGTH

    def in_scheme(self, options: ParseOptions, char: str) -> list[str]:
        if char in self.symbols:
            return [self.symbols[char]]
        return _tone_fragment(options, char, self.tones)

    def decode_window(self, options: ParseOptions, window: str) -> PhoneticKey | None:
        """Concatenate the symbol of every key and look the result up."""

        if not window:
            return None
        options = options.without_ambiguities()

        stripped = _strip_tone(options, window, self.tones)
        if stripped is None:
            return None
        body, tone, _ = stripped

        fragments = []
        for char in body:
            symbol = self.symbols.get(char)
            if symbol is None:
                return None
            fragments.append(symbol)
        if not fragments:
            return None

        return _with_tone(search_index(options, self.index, "".join(fragments)), tone)


@dataclass(frozen=True)
class DiscreteDecoder:
    """Decoder consuming at most one key per slot: initial, middle, final, tone.

    A key that does not fit the current slot simply leaves the slot empty;
    the window is only accepted if every key was consumed by some slot.
    """

    layout: SlotLayout
    index: SchemeIndex
    max_key_length: int = MAX_CHEWING_LENGTH

    def in_scheme(self, options: ParseOptions, char: str) -> list[str]:
        fragments: list[str] = []
        for table in (self.layout.initials, self.layout.middles, self.layout.finals):
            fragments.extend(table.get(char, ()))
        fragments.extend(_tone_fragment(options, char, self.layout.tones))
        return fragments

    def decode_window(self, options: ParseOptions, window: str) -> PhoneticKey | None:
        if not window:
            return None
        options = options.without_ambiguities()

        length = len(window)
        position = 0
        parts: list[str] = []
        tone = Tone.NONE

        for table in (self.layout.initials, self.layout.middles, self.layout.finals):
            if position == length:
                break
            symbols = table.get(window[position])
            if symbols:
                parts.append(symbols[0])
                position += 1
        else:
            if position < length and options & ParseOptions.USE_TONE:
                found = self.layout.tones.get(window[position])
                if found is not None:
                    tone = found
                    position += 1

        if options & ParseOptions.USE_TONE and options & ParseOptions.FORCE_TONE and not tone:
            return None
        if position != length or not parts:
            return None

        return _with_tone(search_index(options, self.index, "".join(parts)), tone)


def _blank_repeats(chars: list[str | None], start: int, char: str) -> int:
    """Blank every occurrence of ``char`` from ``start`` on.

    Args:
        chars: Scratch copy of the window; consumed keys become ``None``.
        start: First position to scan.
        char: Key whose later presses are consumed.

    Returns:
        Number of occurrences blanked.
    """

    count = 0
    for position in range(start, len(chars)):
        if chars[position] == char:
            chars[position] = None
            count += 1
    return count


def _skip_blanks(chars: list[str | None], position: int) -> int:
    """Return the first position at or after ``position`` that is not blanked."""

    while position < len(chars) and chars[position] is None:
        position += 1
    return position


@dataclass(frozen=True)
class AmbiguousDiscreteDecoder:
    """Decoder for DaChen CP26, where one letter key may type two symbols.

    When a key has two readings, the number of later presses of the same key
    inside the window selects the reading by parity, and those later presses
    are consumed with it. ``cycling_keys`` hard-code keys whose presses cycle
    through several (middle, final) readings, such as ``u`` for ㄧ, ㄚ and ㄧㄚ.
    """

    layout: SlotLayout
    cycling_keys: Mapping[str, tuple[tuple[str, str], ...]]
    index: SchemeIndex
    max_key_length: int = MAX_DACHEN_CP26_LENGTH

    def in_scheme(self, options: ParseOptions, char: str) -> list[str]:
        fragments: list[str] = []
        for table in (self.layout.initials, self.layout.middles, self.layout.finals):
            fragments.extend(table.get(char, ()))
        for middle, final in self.cycling_keys.get(char, ()):
            if middle and final:
                fragments.append(middle + final)
        fragments.extend(_tone_fragment(options, char, self.layout.tones))
        return fragments

    @staticmethod
    def _choose(alternates: tuple[str, ...], chars: list[str | None], position: int, char: str) -> str:
        if len(alternates) == 1:
            return alternates[0]
        return alternates[_blank_repeats(chars, position, char) % len(alternates)]

    def decode_window(self, options: ParseOptions, window: str) -> PhoneticKey | None:
        """Resolve repeated keys by parity, then look up the composed symbols.

        Args:
            options: Effective parse options.
            window: Raw window, tone key (if any) last.

        Returns:
            The decoded key, or ``None`` if any key is left unaccounted for.
        """

        if not window:
            return None
        options = options.without_ambiguities()

        stripped = _strip_tone(options, window, self.layout.tones)
        if stripped is None:
            return None
        body, tone, _ = stripped
        if not body:
            return None

        chars: list[str | None] = list(body)
        length = len(chars)
        initial = middle = final = ""
        position = 0

        char = chars[0]
        alternates = self.layout.initials.get(char)
        if alternates:
            position = 1
            initial = self._choose(alternates, chars, position, char)
        position = _skip_blanks(chars, position)

        if position < length:
            char = chars[position]
            cycle = self.cycling_keys.get(char)
            if cycle:
                position += 1
                middle, final = cycle[_blank_repeats(chars, position, char) % len(cycle)]
            elif char in self.layout.middles:
                position += 1
                middle = self.layout.middles[char][0]
            position = _skip_blanks(chars, position)

        if position < length and not final:
            char = chars[position]
            alternates = self.layout.finals.get(char)
            if alternates:
                position += 1
                final = self._choose(alternates, chars, position, char)
            position = _skip_blanks(chars, position)

        if position != length:
            return None

        return _with_tone(search_index(options, self.index, initial + middle + final), tone)


@dataclass(frozen=True)
class DirectDecoder:
    """Decoder treating a whole separator-delimited token as one composed string.

    ``tones`` maps tone markers (Bopomofo tone glyphs, or ASCII digits for
    romanizations) to tones. With tone usage on, an unmarked token gets
    ``unmarked_tone``: the first tone for Bopomofo, where it is never written,
    and ``Tone.NONE`` for romanizations.
    """

    index: SchemeIndex
    tones: Mapping[str, Tone]
    unmarked_tone: Tone = Tone.NONE
    separators: str = SEPARATORS
    max_key_length: int | None = None

    def in_scheme(self, options: ParseOptions, char: str) -> list[str]:
        if char in self.index.alphabet or char in self.separators:
            return [char]
        return _tone_fragment(options, char, self.tones)

    def decode_window(self, options: ParseOptions, window: str) -> PhoneticKey | None:
        if not window:
            return None
        options = options.without_ambiguities()

        stripped = _strip_tone(options, window, self.tones)
        if stripped is None:
            return None
        body, tone, found = stripped
        if not found and options & ParseOptions.USE_TONE:
            tone = self.unmarked_tone
        if not body:
            return None

        return _with_tone(search_index(options, self.index, body), tone)
