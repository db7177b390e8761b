"""Sorted canonical-key indexes, one per family of composed strings.

Every index maps a composed string (Bopomofo symbols or a romanization) to
the canonical key of the content table, together with the flags the lookup
filters on. Indexes are built once at import time and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from itertools import permutations
from typing import Iterable, Mapping

from zhuyin_parser.errors import SchemeTableError
from zhuyin_parser.models import PhoneticKey
from zhuyin_parser.options import ParseOptions
from zhuyin_parser.tables.corrections import ETEN26_RULES, HSU_RULES, expand_rules
from zhuyin_parser.tables.syllables import CONTENT_TABLE, SPECIAL_INITIALS, key_for


@dataclass(frozen=True)
class IndexEntry:
    """One composed string and the canonical key it resolves to.

    ``correction`` holds at most one correction class; the entry is only
    visible when the parse options contain it.
    """

    text: str
    key: PhoneticKey
    incomplete: bool = False
    correction: ParseOptions = ParseOptions.NONE


@dataclass(frozen=True)
class SchemeIndex:
    """Read-only index sorted by ``text`` for binary search."""

    name: str
    entries: tuple[IndexEntry, ...]

    @cached_property
    def texts(self) -> tuple[str, ...]:
        """Return entry texts in index order, parallel to ``entries``."""

        return tuple(entry.text for entry in self.entries)

    @cached_property
    def alphabet(self) -> frozenset[str]:
        """Return every character used by any composed string."""

        return frozenset("".join(self.texts))

    def __len__(self) -> int:
        return len(self.entries)


def _sorted_index(name: str, entries: Iterable[IndexEntry]) -> SchemeIndex:
    """Sort entries by composed text into a named index.

    Args:
        name: Index name used in logs and error messages.
        entries: Unordered index entries.

    Returns:
        Index ready for binary search.
    """

    return SchemeIndex(name=name, entries=tuple(sorted(entries, key=lambda entry: entry.text)))


def _bopomofo_entries() -> dict[str, IndexEntry]:
    """Return one canonical Bopomofo entry per content-table row, keyed by text."""

    return {
        syllable.bopomofo: IndexEntry(
            syllable.bopomofo, key_for(syllable.bopomofo), incomplete=syllable.incomplete
        )
        for syllable in CONTENT_TABLE
    }


def _shuffled_entries(canonical: Mapping[str, IndexEntry]) -> dict[str, IndexEntry]:
    """Return entries accepting the symbols of a syllable in any order."""

    shuffled: dict[str, IndexEntry] = {}
    for text, entry in canonical.items():
        if len(text) < 2:
            continue
        for order in permutations(text):
            variant = "".join(order)
            if variant == text or variant in canonical:
                continue
            shuffled[variant] = IndexEntry(
                variant, entry.key, correction=ParseOptions.SHUFFLE_CORRECT
            )
    return shuffled


def _corrected_entries(
    canonical: Mapping[str, IndexEntry], corrections: Mapping[str, str], flag: ParseOptions
) -> dict[str, IndexEntry]:
    """Merge correction entries over ``canonical``.

    A correction may shadow an incomplete entry (a bare initial), never a
    complete syllable.
    """

    merged = dict(canonical)
    for wrong, correct in corrections.items():
        existing = merged.get(wrong)
        if existing is not None and not existing.incomplete:
            raise SchemeTableError(f"Correction {wrong!r} -> {correct!r} shadows a syllable")
        merged[wrong] = IndexEntry(wrong, key_for(correct), correction=flag)
    return merged


def build_bopomofo_index() -> SchemeIndex:
    canonical = _bopomofo_entries()
    return _sorted_index(
        "bopomofo", list(canonical.values()) + list(_shuffled_entries(canonical).values())
    )


def build_corrected_index(name: str, rules, flag: ParseOptions) -> SchemeIndex:
    canonical = _bopomofo_entries()
    corrections = expand_rules(rules, CONTENT_TABLE)
    return _sorted_index(name, _corrected_entries(canonical, corrections, flag).values())


def build_hanyu_pinyin_index() -> SchemeIndex:
    """Index Hanyu Pinyin syllables plus bare shengmu as incomplete input."""

    entries = [
        IndexEntry(syllable.hanyu, key_for(syllable.bopomofo), incomplete=syllable.incomplete)
        for syllable in CONTENT_TABLE
    ]
    for initial in SPECIAL_INITIALS:
        syllable = next(item for item in CONTENT_TABLE if item.bopomofo == initial)
        entries.append(
            IndexEntry(syllable.hanyu[:-1], key_for(initial), incomplete=True)
        )
    return _sorted_index("hanyu_pinyin", entries)


def build_secondary_zhuyin_index() -> SchemeIndex:
    entries = [
        IndexEntry(syllable.secondary, key_for(syllable.bopomofo))
        for syllable in CONTENT_TABLE
        if syllable.secondary is not None
    ]
    return _sorted_index("secondary_zhuyin", entries)


def build_luoma_pinyin_index() -> SchemeIndex:
    entries = [
        IndexEntry(syllable.luoma, key_for(syllable.bopomofo))
        for syllable in CONTENT_TABLE
        if syllable.luoma is not None
    ]
    return _sorted_index("luoma_pinyin", entries)


BOPOMOFO_INDEX = build_bopomofo_index()
HSU_INDEX = build_corrected_index("hsu_bopomofo", HSU_RULES, ParseOptions.HSU_CORRECT)
ETEN26_INDEX = build_corrected_index("eten26_bopomofo", ETEN26_RULES, ParseOptions.ETEN26_CORRECT)
HANYU_PINYIN_INDEX = build_hanyu_pinyin_index()
SECONDARY_ZHUYIN_INDEX = build_secondary_zhuyin_index()
LUOMA_PINYIN_INDEX = build_luoma_pinyin_index()
