"""Unit tests for the four window-decoding strategies."""

from __future__ import annotations

from dataclasses import replace

import pytest

from zhuyin_parser.decoders import (
    AmbiguousDiscreteDecoder,
    ContiguousDecoder,
    DiscreteDecoder,
)
from zhuyin_parser.models import PhoneticKey, Tone
from zhuyin_parser.options import ParseOptions
from zhuyin_parser.parser import bind_scheme
from zhuyin_parser.tables.index import BOPOMOFO_INDEX, ETEN26_INDEX, HSU_INDEX
from zhuyin_parser.tables.keyboards import (
    DACHEN_CP26,
    DACHEN_CP26_CYCLING_KEYS,
    ETEN26,
    HSU,
    layout_symbols,
    layout_tones,
)
from zhuyin_parser.tables.syllables import key_for

TONE = ParseOptions.USE_TONE
FORCE = ParseOptions.USE_TONE | ParseOptions.FORCE_TONE

STANDARD = ContiguousDecoder(layout_symbols("STANDARD"), layout_tones("STANDARD"), BOPOMOFO_INDEX)
HSU_DECODER = DiscreteDecoder(HSU, HSU_INDEX)
ETEN26_DECODER = DiscreteDecoder(ETEN26, ETEN26_INDEX)
CP26 = AmbiguousDiscreteDecoder(DACHEN_CP26, DACHEN_CP26_CYCLING_KEYS, BOPOMOFO_INDEX)


def _toned(bopomofo: str, tone: Tone) -> PhoneticKey:
    return replace(key_for(bopomofo), tone=tone)


def test_contiguous_decodes_symbols_and_trailing_tone() -> None:
    assert STANDARD.decode_window(TONE, "su3") == _toned("ㄋㄧ", Tone.THIRD)
    assert STANDARD.decode_window(TONE, "su") == key_for("ㄋㄧ")
    assert STANDARD.decode_window(ParseOptions.NONE, "su") == key_for("ㄋㄧ")


def test_contiguous_treats_tone_key_as_foreign_without_tone_usage() -> None:
    assert STANDARD.decode_window(ParseOptions.NONE, "su3") is None
    assert STANDARD.decode_window(TONE, "3") is None
    assert STANDARD.decode_window(TONE, "") is None


def test_force_tone_rejects_untoned_windows() -> None:
    assert STANDARD.decode_window(FORCE, "su") is None
    assert STANDARD.decode_window(FORCE, "su3") == _toned("ㄋㄧ", Tone.THIRD)
    assert HSU_DECODER.decode_window(FORCE | ParseOptions.HSU_CORRECT, "ne") is None


def test_ambiguity_bits_do_not_change_decoding() -> None:
    options = TONE | ParseOptions.AMB_ALL

    assert STANDARD.decode_window(options, "su3") == STANDARD.decode_window(TONE, "su3")


def test_shuffled_symbols_need_shuffle_correction() -> None:
    assert STANDARD.decode_window(ParseOptions.NONE, "lu") is None
    assert STANDARD.decode_window(ParseOptions.SHUFFLE_CORRECT, "lu") == key_for("ㄧㄠ")


def test_contiguous_in_scheme_reports_symbol_or_tone() -> None:
    assert STANDARD.in_scheme(ParseOptions.NONE, "1") == ["ㄅ"]
    assert STANDARD.in_scheme(TONE, "3") == ["ˇ"]
    assert STANDARD.in_scheme(ParseOptions.NONE, "3") == []
    assert STANDARD.in_scheme(TONE, "!") == []


def test_discrete_fills_slots_in_order() -> None:
    options = TONE | ParseOptions.HSU_CORRECT

    assert HSU_DECODER.decode_window(options, "nef") == _toned("ㄋㄧ", Tone.THIRD)
    assert HSU_DECODER.decode_window(options, "hwf") == _toned("ㄏㄠ", Tone.THIRD)
    assert HSU_DECODER.decode_window(options, "ef") == _toned("ㄧ", Tone.THIRD)


def test_discrete_requires_every_key_consumed() -> None:
    options = TONE | ParseOptions.HSU_CORRECT

    assert HSU_DECODER.decode_window(options, "nefh") is None
    assert HSU_DECODER.decode_window(options, "nnn") is None


def test_discrete_corrections_follow_their_flag() -> None:
    assert HSU_DECODER.decode_window(ParseOptions.HSU_CORRECT, "j") == key_for("ㄓ")
    assert HSU_DECODER.decode_window(ParseOptions.ZHUYIN_INCOMPLETE, "j") is None
    assert HSU_DECODER.decode_window(ParseOptions.HSU_CORRECT, "gem") == key_for("ㄐㄧㄢ")
    assert ETEN26_DECODER.decode_window(ParseOptions.ETEN26_CORRECT, "p") == key_for("ㄡ")


def test_discrete_in_scheme_lists_every_role() -> None:
    assert HSU_DECODER.in_scheme(TONE, "d") == ["ㄉ", "ˊ"]
    assert HSU_DECODER.in_scheme(ParseOptions.NONE, "e") == ["ㄧ", "ㄝ"]
    assert HSU_DECODER.in_scheme(TONE, "1") == []


@pytest.mark.parametrize(
    ("window", "expected"),
    [
        ("qi", "ㄅㄛ"),
        ("qqi", "ㄆㄛ"),
        ("qii", "ㄅㄞ"),
        ("wwk", "ㄊㄜ"),
        ("quu", "ㄅㄚ"),
        ("xuuu", "ㄌㄧㄚ"),
        ("amm", "ㄇㄡ"),
        ("m", "ㄩ"),
        ("sul", "ㄋㄧㄠ"),
    ],
)
def test_dachen_cp26_repeats_select_alternates(window: str, expected: str) -> None:
    assert CP26.decode_window(ParseOptions.NONE, window) == key_for(expected)


def test_dachen_cp26_strips_tone_before_folding() -> None:
    assert CP26.decode_window(TONE, "qu ") == _toned("ㄅㄧ", Tone.FIRST)
    assert CP26.decode_window(TONE, "cle") == _toned("ㄏㄠ", Tone.THIRD)
    assert CP26.decode_window(FORCE, "cl") is None


def test_dachen_cp26_rejects_leftover_keys() -> None:
    assert CP26.decode_window(ParseOptions.NONE, "qiz") is None
    assert CP26.decode_window(ParseOptions.NONE, "") is None


def test_dachen_cp26_in_scheme_includes_cycled_digraph() -> None:
    assert CP26.in_scheme(TONE, "u") == ["ㄧ", "ㄧㄚ", "˙"]
    assert CP26.in_scheme(ParseOptions.NONE, "q") == ["ㄅ", "ㄆ"]


def test_direct_pinyin_tone_digits() -> None:
    decoder = bind_scheme("hanyu-pinyin").decoder

    assert decoder.decode_window(TONE, "hao3") == _toned("ㄏㄠ", Tone.THIRD)
    assert decoder.decode_window(TONE, "hao") == key_for("ㄏㄠ")
    assert decoder.decode_window(ParseOptions.NONE, "hao3") is None
    assert decoder.decode_window(FORCE, "hao") is None


def test_direct_zhuyin_unmarked_syllable_is_first_tone() -> None:
    decoder = bind_scheme("zhuyin").decoder

    assert decoder.decode_window(TONE, "ㄋㄧ") == _toned("ㄋㄧ", Tone.FIRST)
    assert decoder.decode_window(TONE, "ㄋㄧˇ") == _toned("ㄋㄧ", Tone.THIRD)
    assert decoder.decode_window(ParseOptions.NONE, "ㄋㄧ") == key_for("ㄋㄧ")


def test_direct_pinyin_incomplete_shengmu() -> None:
    decoder = bind_scheme("hanyu-pinyin").decoder

    assert decoder.decode_window(ParseOptions.ZHUYIN_INCOMPLETE, "zh") == key_for("ㄓ")
    assert decoder.decode_window(ParseOptions.NONE, "zh") is None
    assert decoder.decode_window(ParseOptions.NONE, "zhi") == key_for("ㄓ")


def test_direct_secondary_zhuyin() -> None:
    decoder = bind_scheme("secondary-zhuyin").decoder

    assert decoder.decode_window(ParseOptions.NONE, "jr") == key_for("ㄓ")
    assert decoder.decode_window(TONE, "shiung2") == _toned("ㄒㄩㄥ", Tone.SECOND)
    assert decoder.in_scheme(ParseOptions.NONE, " ") == [" "]


def test_direct_luoma_pinyin() -> None:
    decoder = bind_scheme("luoma-pinyin").decoder

    assert decoder.decode_window(ParseOptions.NONE, "jhih") == key_for("ㄓ")
    assert decoder.decode_window(ParseOptions.NONE, "si") == key_for("ㄒㄧ")
    assert decoder.decode_window(ParseOptions.NONE, "sih") == key_for("ㄙ")
    assert decoder.decode_window(TONE, "jyu4") == _toned("ㄐㄩ", Tone.FOURTH)
    assert decoder.decode_window(ParseOptions.NONE, "xi") is None
