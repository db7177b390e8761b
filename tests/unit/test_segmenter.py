"""Unit tests for greedy and separator-driven segmentation."""

from __future__ import annotations

from dataclasses import dataclass, field

from zhuyin_parser.models import ParseResult, PhoneticKey, RawSpan
from zhuyin_parser.options import ParseOptions
from zhuyin_parser.parser import bind_scheme
from zhuyin_parser.segmenter import Decoder, probe_prefix, segment_greedy, segment_separated
from zhuyin_parser.tables.index import SchemeIndex

TONE = ParseOptions.USE_TONE
STANDARD = bind_scheme("standard").decoder
PINYIN = bind_scheme("hanyu-pinyin").decoder


@dataclass
class _RecordingDecoder:
    """Delegate to a real decoder and remember every window it was asked for."""

    inner: Decoder
    windows: list[str] = field(default_factory=list)

    @property
    def index(self) -> SchemeIndex:
        return self.inner.index

    @property
    def max_key_length(self) -> int | None:
        return self.inner.max_key_length

    def in_scheme(self, options: ParseOptions, char: str) -> list[str]:
        return self.inner.in_scheme(options, char)

    def decode_window(self, options: ParseOptions, window: str) -> PhoneticKey | None:
        self.windows.append(window)
        return self.inner.decode_window(options, window)


def test_probe_prefix_stops_at_first_foreign_character() -> None:
    assert probe_prefix(PINYIN, TONE, "ni3 hao3!") == 8
    assert probe_prefix(PINYIN, ParseOptions.NONE, "ni3 hao3") == 2
    assert probe_prefix(PINYIN, TONE, "") == 0


def test_segment_greedy_prefers_longest_window() -> None:
    result = segment_greedy(STANDARD, ParseOptions.NONE, "ul")

    assert [key.zhuyin for key in result.keys] == ["ㄧㄠ"]
    assert result.spans == (RawSpan(0, 2),)


def test_segment_greedy_spans_are_contiguous() -> None:
    result = segment_greedy(STANDARD, TONE, "su3cl3")

    assert result.spans == (RawSpan(0, 3), RawSpan(3, 6))
    assert result.parsed_length == 6


def test_segment_greedy_stops_without_skipping() -> None:
    result = segment_greedy(STANDARD, TONE, "su3!cl3")

    assert len(result.keys) == 1
    assert result.parsed_length == 3
    assert result.remainder("su3!cl3") == "!cl3"


def test_segment_greedy_empty_input() -> None:
    assert segment_greedy(STANDARD, TONE, "") == ParseResult()


def test_segment_separated_consumes_separator_runs() -> None:
    result = segment_separated(PINYIN, ParseOptions.NONE, "ni  'hao")

    assert result.spans == (RawSpan(0, 2), RawSpan(5, 8))
    assert result.parsed_length == 8


def test_segment_separated_counts_trailing_separators() -> None:
    result = segment_separated(PINYIN, ParseOptions.NONE, "ni ")

    assert len(result.keys) == 1
    assert result.parsed_length == 3


def test_segment_separated_truncates_at_failing_token() -> None:
    result = segment_separated(PINYIN, ParseOptions.NONE, "ni xx hao")

    assert [span.end for span in result.spans] == [2]
    assert result.parsed_length == 3


def test_segment_separated_leading_separator_parses_nothing() -> None:
    result = segment_separated(PINYIN, ParseOptions.NONE, " ni")

    assert result.keys == ()
    assert result.parsed_length == 0


def test_segment_greedy_windows_stop_at_first_foreign_character() -> None:
    decoder = _RecordingDecoder(STANDARD)

    result = segment_greedy(decoder, TONE, "su3!cl3")

    assert result.parsed_length == 3
    assert decoder.windows
    assert all("!" not in window for window in decoder.windows)
    assert max(len(window) for window in decoder.windows) <= 3


def test_segment_greedy_without_tones_stops_before_tone_key() -> None:
    decoder = _RecordingDecoder(STANDARD)

    result = segment_greedy(decoder, ParseOptions.NONE, "su3cl3")

    assert [key.zhuyin for key in result.keys] == ["ㄋㄧ"]
    assert result.parsed_length == 2
    assert all("3" not in window for window in decoder.windows)
