"""Unit tests for canonical-key lookup."""

from __future__ import annotations

import pytest

from zhuyin_parser.errors import SchemeTableError
from zhuyin_parser.lookup import check_entry_options, search_index
from zhuyin_parser.options import ParseOptions
from zhuyin_parser.tables.index import BOPOMOFO_INDEX, HSU_INDEX, IndexEntry, SchemeIndex
from zhuyin_parser.tables.syllables import key_for


def test_search_index_returns_canonical_key() -> None:
    assert search_index(ParseOptions.NONE, BOPOMOFO_INDEX, "ㄋㄧ") == key_for("ㄋㄧ")


def test_search_index_misses_unknown_text() -> None:
    assert search_index(ParseOptions.NONE, BOPOMOFO_INDEX, "ㄅㄩ") is None
    assert search_index(ParseOptions.NONE, BOPOMOFO_INDEX, "") is None


def test_incomplete_entries_require_incomplete_option() -> None:
    assert search_index(ParseOptions.NONE, BOPOMOFO_INDEX, "ㄅ") is None
    assert search_index(ParseOptions.ZHUYIN_INCOMPLETE, BOPOMOFO_INDEX, "ㄅ") == key_for("ㄅ")


def test_correction_entries_require_their_correction_class() -> None:
    assert search_index(ParseOptions.NONE, BOPOMOFO_INDEX, "ㄠㄧ") is None
    assert search_index(ParseOptions.HSU_CORRECT, BOPOMOFO_INDEX, "ㄠㄧ") is None
    assert search_index(ParseOptions.SHUFFLE_CORRECT, BOPOMOFO_INDEX, "ㄠㄧ") == key_for("ㄧㄠ")
    assert search_index(ParseOptions.HSU_CORRECT, HSU_INDEX, "ㄍㄧ") == key_for("ㄐㄧ")


def test_check_entry_options_combines_incomplete_and_correction() -> None:
    entry = IndexEntry("ㄐ", key_for("ㄓ"), incomplete=True, correction=ParseOptions.HSU_CORRECT)

    assert not check_entry_options(ParseOptions.HSU_CORRECT, entry)
    assert not check_entry_options(ParseOptions.ZHUYIN_INCOMPLETE, entry)
    assert check_entry_options(ParseOptions.HSU_CORRECT | ParseOptions.ZHUYIN_INCOMPLETE, entry)


def test_duplicate_index_texts_are_table_corruption() -> None:
    key = key_for("ㄅㄚ")
    index = SchemeIndex("broken", (IndexEntry("ㄅㄚ", key), IndexEntry("ㄅㄚ", key)))

    with pytest.raises(SchemeTableError, match="Index 'broken' has 2 entries for 'ㄅㄚ'"):
        search_index(ParseOptions.NONE, index, "ㄅㄚ")
