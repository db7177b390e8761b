"""Unit tests for parse option flags."""

from __future__ import annotations

import pytest

from zhuyin_parser.options import ParseOptions


def test_option_bit_values_are_stable() -> None:
    assert ParseOptions.USE_TONE == 1
    assert ParseOptions.FORCE_TONE == 2
    assert ParseOptions.ZHUYIN_INCOMPLETE == 4
    assert ParseOptions.SHUFFLE_CORRECT == 1 << 5
    assert ParseOptions.AMB_C_CH == 1 << 8
    assert ParseOptions.AMB_IN_ING == 1 << 17


def test_from_names_accepts_kebab_case_and_enum_names() -> None:
    options = ParseOptions.from_names(["use-tone", "AMB_C_CH", " Hsu-Correct "])

    assert options == ParseOptions.USE_TONE | ParseOptions.AMB_C_CH | ParseOptions.HSU_CORRECT


def test_from_names_empty_is_none() -> None:
    assert ParseOptions.from_names([]) == ParseOptions.NONE


def test_from_names_rejects_unknown_name() -> None:
    with pytest.raises(ValueError, match="Unknown parse option: 'use-colour'"):
        ParseOptions.from_names(["use-tone", "use-colour"])


def test_without_ambiguities_keeps_other_bits() -> None:
    options = ParseOptions.USE_TONE | ParseOptions.AMB_L_N | ParseOptions.AMB_AN_ANG

    assert options.without_ambiguities() == ParseOptions.USE_TONE
    assert ParseOptions.AMB_ALL.without_ambiguities() == ParseOptions.NONE
