"""Greedy segmentation of raw input into decoded keys.

Two loops drive a decoder over the input: ``segment_greedy`` tries the longest
window first at every offset (maximal munch), and ``segment_separated`` splits
direct-entry text on separators. Both stop at the first offset they cannot
decode; callers detect truncation through ``ParseResult.parsed_length``.
"""

from __future__ import annotations

from typing import Protocol

from zhuyin_parser.models import ParseResult, PhoneticKey, RawSpan
from zhuyin_parser.options import ParseOptions
from zhuyin_parser.tables.index import SchemeIndex

SEPARATORS = " '"


class Decoder(Protocol):
    """Window decoder bound to one scheme and the index it looks keys up in."""

    index: SchemeIndex
    max_key_length: int | None

    def in_scheme(self, options: ParseOptions, char: str) -> list[str]: ...

    def decode_window(self, options: ParseOptions, window: str) -> PhoneticKey | None: ...


def probe_prefix(decoder: Decoder, options: ParseOptions, text: str) -> int:
    """Return the length of the longest prefix made only of scheme characters."""

    for position, char in enumerate(text):
        if not decoder.in_scheme(options, char):
            return position
    return len(text)


def segment_greedy(decoder: Decoder, options: ParseOptions, text: str) -> ParseResult:
    """Segment ``text`` with longest-match-first windows.

    Args:
        decoder: Strategy bound to the active scheme.
        options: Effective options, scheme-mandated flags included.
        text: Raw keystrokes.

    Returns:
        Keys and spans for the decoded prefix. Windows never reach past the
        first character outside the scheme (see ``probe_prefix``). Segmentation
        stops at the first offset where no window length decodes; nothing after
        it is attempted.
    """

    limit = probe_prefix(decoder, options, text)
    keys: list[PhoneticKey] = []
    spans: list[RawSpan] = []
    position = 0
    max_length = decoder.max_key_length or limit

    while position < limit:
        for size in range(min(limit - position, max_length), 0, -1):
            key = decoder.decode_window(options, text[position : position + size])
            if key is not None:
                keys.append(key)
                spans.append(RawSpan(position, position + size))
                position += size
                break
        else:
            break

    return ParseResult(tuple(keys), tuple(spans), position)


def segment_separated(
    decoder: Decoder, options: ParseOptions, text: str, separators: str = SEPARATORS
) -> ParseResult:
    """Segment direct-entry ``text`` on separator characters.

    Segmentation is bounded by ``probe_prefix``. Every token between separators
    is decoded exactly once; the first token that fails truncates the parse at
    its start, so input opening with a separator parses nothing. Separators
    following a decoded token count as consumed.
    """

    limit = probe_prefix(decoder, options, text)
    keys: list[PhoneticKey] = []
    spans: list[RawSpan] = []
    position = 0

    while position < limit:
        end = position
        while end < limit and text[end] not in separators:
            end += 1

        # An empty token (leading separator) never decodes.
        key = decoder.decode_window(options, text[position:end])
        if key is None:
            break
        keys.append(key)
        spans.append(RawSpan(position, end))

        position = end
        while position < limit and text[position] in separators:
            position += 1

    return ParseResult(tuple(keys), tuple(spans), position)
