"""Canonical Mandarin syllable inventory and its transliterations.

The inventory is written in Bopomofo, grouped by initial. Hanyu Pinyin,
Mandarin Phonetic Symbols II (MPS2) and Luoma (Tongyong) spellings are derived
by rule so the renderings can never drift apart. The content table assigns every syllable a
stable ``table_index`` (sorted by Hanyu Pinyin, ``0`` reserved for invalid).
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from zhuyin_parser.models import PhoneticKey, Tone
from zhuyin_parser.tables.keyboards import FINALS, INITIALS, MIDDLES

# Initials that form a complete syllable on their own (zhi, chi, shi, ...).
SPECIAL_INITIALS = "ㄓㄔㄕㄖㄗㄘㄙ"

# "-" marks the bare initial of SPECIAL_INITIALS.
_SYLLABLE_RHYMES = {
    "": "ㄚ ㄛ ㄜ ㄝ ㄞ ㄟ ㄠ ㄡ ㄢ ㄣ ㄤ ㄥ ㄦ "
    "ㄧ ㄧㄚ ㄧㄛ ㄧㄝ ㄧㄞ ㄧㄠ ㄧㄡ ㄧㄢ ㄧㄣ ㄧㄤ ㄧㄥ "
    "ㄨ ㄨㄚ ㄨㄛ ㄨㄞ ㄨㄟ ㄨㄢ ㄨㄣ ㄨㄤ ㄨㄥ "
    "ㄩ ㄩㄝ ㄩㄢ ㄩㄣ ㄩㄥ",
    "ㄅ": "ㄚ ㄛ ㄞ ㄟ ㄠ ㄢ ㄣ ㄤ ㄥ ㄧ ㄧㄝ ㄧㄠ ㄧㄢ ㄧㄣ ㄧㄥ ㄨ",
    "ㄆ": "ㄚ ㄛ ㄞ ㄟ ㄠ ㄡ ㄢ ㄣ ㄤ ㄥ ㄧ ㄧㄝ ㄧㄠ ㄧㄢ ㄧㄣ ㄧㄥ ㄨ",
    "ㄇ": "ㄚ ㄛ ㄜ ㄞ ㄟ ㄠ ㄡ ㄢ ㄣ ㄤ ㄥ ㄧ ㄧㄝ ㄧㄠ ㄧㄡ ㄧㄢ ㄧㄣ ㄧㄥ ㄨ",
    "ㄈ": "ㄚ ㄛ ㄟ ㄡ ㄢ ㄣ ㄤ ㄥ ㄨ",
    "ㄉ": "ㄚ ㄜ ㄞ ㄟ ㄠ ㄡ ㄢ ㄣ ㄤ ㄥ ㄧ ㄧㄚ ㄧㄝ ㄧㄠ ㄧㄡ ㄧㄢ ㄧㄥ ㄨ ㄨㄛ ㄨㄟ ㄨㄢ ㄨㄣ ㄨㄥ",
    "ㄊ": "ㄚ ㄜ ㄞ ㄠ ㄡ ㄢ ㄤ ㄥ ㄧ ㄧㄝ ㄧㄠ ㄧㄢ ㄧㄥ ㄨ ㄨㄛ ㄨㄟ ㄨㄢ ㄨㄣ ㄨㄥ",
    "ㄋ": "ㄚ ㄜ ㄞ ㄟ ㄠ ㄡ ㄢ ㄣ ㄤ ㄥ ㄧ ㄧㄝ ㄧㄠ ㄧㄡ ㄧㄢ ㄧㄣ ㄧㄤ ㄧㄥ "
    "ㄨ ㄨㄛ ㄨㄢ ㄨㄣ ㄨㄥ ㄩ ㄩㄝ",
    "ㄌ": "ㄚ ㄛ ㄜ ㄞ ㄟ ㄠ ㄡ ㄢ ㄤ ㄥ ㄧ ㄧㄚ ㄧㄝ ㄧㄠ ㄧㄡ ㄧㄢ ㄧㄣ ㄧㄤ ㄧㄥ "
    "ㄨ ㄨㄛ ㄨㄢ ㄨㄣ ㄨㄥ ㄩ ㄩㄝ",
    "ㄍ": "ㄚ ㄜ ㄞ ㄟ ㄠ ㄡ ㄢ ㄣ ㄤ ㄥ ㄨ ㄨㄚ ㄨㄛ ㄨㄞ ㄨㄟ ㄨㄢ ㄨㄣ ㄨㄤ ㄨㄥ",
    "ㄎ": "ㄚ ㄜ ㄞ ㄟ ㄠ ㄡ ㄢ ㄣ ㄤ ㄥ ㄨ ㄨㄚ ㄨㄛ ㄨㄞ ㄨㄟ ㄨㄢ ㄨㄣ ㄨㄤ ㄨㄥ",
    "ㄏ": "ㄚ ㄜ ㄞ ㄟ ㄠ ㄡ ㄢ ㄣ ㄤ ㄥ ㄨ ㄨㄚ ㄨㄛ ㄨㄞ ㄨㄟ ㄨㄢ ㄨㄣ ㄨㄤ ㄨㄥ",
    "ㄐ": "ㄧ ㄧㄚ ㄧㄝ ㄧㄠ ㄧㄡ ㄧㄢ ㄧㄣ ㄧㄤ ㄧㄥ ㄩ ㄩㄝ ㄩㄢ ㄩㄣ ㄩㄥ",
    "ㄑ": "ㄧ ㄧㄚ ㄧㄝ ㄧㄠ ㄧㄡ ㄧㄢ ㄧㄣ ㄧㄤ ㄧㄥ ㄩ ㄩㄝ ㄩㄢ ㄩㄣ ㄩㄥ",
    "ㄒ": "ㄧ ㄧㄚ ㄧㄝ ㄧㄠ ㄧㄡ ㄧㄢ ㄧㄣ ㄧㄤ ㄧㄥ ㄩ ㄩㄝ ㄩㄢ ㄩㄣ ㄩㄥ",
    "ㄓ": "- ㄚ ㄜ ㄞ ㄟ ㄠ ㄡ ㄢ ㄣ ㄤ ㄥ ㄨ ㄨㄚ ㄨㄛ ㄨㄞ ㄨㄟ ㄨㄢ ㄨㄣ ㄨㄤ ㄨㄥ",
    "ㄔ": "- ㄚ ㄜ ㄞ ㄠ ㄡ ㄢ ㄣ ㄤ ㄥ ㄨ ㄨㄚ ㄨㄛ ㄨㄞ ㄨㄟ ㄨㄢ ㄨㄣ ㄨㄤ ㄨㄥ",
    "ㄕ": "- ㄚ ㄜ ㄞ ㄟ ㄠ ㄡ ㄢ ㄣ ㄤ ㄥ ㄨ ㄨㄚ ㄨㄛ ㄨㄞ ㄨㄟ ㄨㄢ ㄨㄣ ㄨㄤ",
    "ㄖ": "- ㄜ ㄠ ㄡ ㄢ ㄣ ㄤ ㄥ ㄨ ㄨㄚ ㄨㄛ ㄨㄟ ㄨㄢ ㄨㄣ ㄨㄥ",
    "ㄗ": "- ㄚ ㄜ ㄞ ㄟ ㄠ ㄡ ㄢ ㄣ ㄤ ㄥ ㄨ ㄨㄛ ㄨㄟ ㄨㄢ ㄨㄣ ㄨㄥ",
    "ㄘ": "- ㄚ ㄜ ㄞ ㄠ ㄡ ㄢ ㄣ ㄤ ㄥ ㄨ ㄨㄛ ㄨㄟ ㄨㄢ ㄨㄣ ㄨㄥ",
    "ㄙ": "- ㄚ ㄜ ㄞ ㄠ ㄡ ㄢ ㄣ ㄤ ㄥ ㄨ ㄨㄛ ㄨㄟ ㄨㄢ ㄨㄣ ㄨㄥ",
}

HANYU_INITIALS = dict(
    zip(INITIALS, "b p m f d t n l g k h j q x zh ch sh r z c s".split())
)
MPS2_INITIALS = dict(
    zip(INITIALS, "b p m f d t n l g k h j ch sh j ch sh r tz ts s".split())
)
MPS2_BARE_INITIALS = dict(zip(SPECIAL_INITIALS, "jr chr shr r tzy tsy sy".split()))

# (middle, final) -> rhyme spelling after a non-zero initial; "v" stands for ü.
HANYU_RHYMES = {
    ("", "ㄚ"): "a", ("", "ㄛ"): "o", ("", "ㄜ"): "e", ("", "ㄝ"): "ê",
    ("", "ㄞ"): "ai", ("", "ㄟ"): "ei", ("", "ㄠ"): "ao", ("", "ㄡ"): "ou",
    ("", "ㄢ"): "an", ("", "ㄣ"): "en", ("", "ㄤ"): "ang", ("", "ㄥ"): "eng",
    ("", "ㄦ"): "er",
    ("ㄧ", ""): "i", ("ㄧ", "ㄚ"): "ia", ("ㄧ", "ㄛ"): "io", ("ㄧ", "ㄝ"): "ie",
    ("ㄧ", "ㄞ"): "iai", ("ㄧ", "ㄠ"): "iao", ("ㄧ", "ㄡ"): "iu", ("ㄧ", "ㄢ"): "ian",
    ("ㄧ", "ㄣ"): "in", ("ㄧ", "ㄤ"): "iang", ("ㄧ", "ㄥ"): "ing",
    ("ㄨ", ""): "u", ("ㄨ", "ㄚ"): "ua", ("ㄨ", "ㄛ"): "uo", ("ㄨ", "ㄞ"): "uai",
    ("ㄨ", "ㄟ"): "ui", ("ㄨ", "ㄢ"): "uan", ("ㄨ", "ㄣ"): "un", ("ㄨ", "ㄤ"): "uang",
    ("ㄨ", "ㄥ"): "ong",
    ("ㄩ", ""): "v", ("ㄩ", "ㄝ"): "ve", ("ㄩ", "ㄢ"): "van", ("ㄩ", "ㄣ"): "vn",
    ("ㄩ", "ㄥ"): "iong",
}
MPS2_RHYMES = {
    **HANYU_RHYMES,
    ("", "ㄠ"): "au",
    ("ㄧ", "ㄠ"): "iau", ("ㄧ", "ㄡ"): "iou",
    ("ㄨ", "ㄟ"): "uei", ("ㄨ", "ㄣ"): "uen", ("ㄨ", "ㄥ"): "ung",
    ("ㄩ", ""): "iu", ("ㄩ", "ㄝ"): "iue", ("ㄩ", "ㄢ"): "iuan", ("ㄩ", "ㄣ"): "iun",
    ("ㄩ", "ㄥ"): "iung",
}

LUOMA_INITIALS = dict(
    zip(INITIALS, "b p m f d t n l g k h j c s jh ch sh r z c s".split())
)
LUOMA_BARE_INITIALS = dict(zip(SPECIAL_INITIALS, "jhih chih shih rih zih cih sih".split()))
LUOMA_RHYMES = {
    **HANYU_RHYMES,
    ("ㄧ", "ㄡ"): "iou", ("ㄨ", "ㄟ"): "uei",
    ("ㄩ", ""): "yu", ("ㄩ", "ㄝ"): "yue", ("ㄩ", "ㄢ"): "yuan", ("ㄩ", "ㄣ"): "yun",
    ("ㄩ", "ㄥ"): "yong",
}

_HANYU_ZERO_INITIAL = {
    "i": "yi", "in": "yin", "ing": "ying", "iu": "you",
    "u": "wu", "ui": "wei", "un": "wen", "ong": "weng",
    "iong": "yong",
}
_MPS2_ZERO_INITIAL = {"i": "yi", "in": "yin", "ing": "ying", "u": "wu", "ung": "weng"}
_LUOMA_ZERO_INITIAL = {
    "i": "yi", "in": "yin", "ing": "ying", "iou": "you",
    "u": "wu", "uei": "wei", "un": "wun", "ong": "wong",
}


@dataclass(frozen=True)
class Syllable:
    """One content-table row: a Bopomofo reading and its transliterations."""

    bopomofo: str
    initial: str
    middle: str
    final: str
    hanyu: str
    secondary: str | None
    luoma: str | None = None
    incomplete: bool = False


def split_bopomofo(bopomofo: str) -> tuple[str, str, str]:
    """Split a canonical Bopomofo string into initial, middle and final.

    Raises:
        ValueError: If the string is not in initial-middle-final order.
    """

    rest = bopomofo
    initial = rest[0] if rest[:1] and rest[0] in INITIALS else ""
    rest = rest[len(initial) :]
    middle = rest[0] if rest[:1] and rest[0] in MIDDLES else ""
    rest = rest[len(middle) :]
    if len(rest) > 1 or (rest and rest not in FINALS):
        raise ValueError(f"Not a canonical Bopomofo syllable: {bopomofo!r}")
    return initial, middle, rest


def to_hanyu(initial: str, middle: str, final: str) -> str:
    """Spell components in Hanyu Pinyin, writing ü as ``v``."""

    if not middle and not final:
        if not initial:
            return ""
        return HANYU_INITIALS[initial] + ("i" if initial in SPECIAL_INITIALS else "")
    rhyme = HANYU_RHYMES[(middle, final)]
    if initial:
        if middle == "ㄩ" and initial in "ㄐㄑㄒ":
            rhyme = rhyme.replace("v", "u")
        return HANYU_INITIALS[initial] + rhyme
    if rhyme in _HANYU_ZERO_INITIAL:
        return _HANYU_ZERO_INITIAL[rhyme]
    if middle == "ㄧ":
        return "y" + rhyme[1:]
    if middle == "ㄨ":
        return "w" + rhyme[1:]
    if middle == "ㄩ":
        return "yu" + rhyme[1:]
    return rhyme


def to_secondary(initial: str, middle: str, final: str) -> str:
    """Spell components in MPS2 (注音二式)."""

    if not middle and not final:
        return MPS2_BARE_INITIALS.get(initial) or MPS2_INITIALS.get(initial, "")
    rhyme = MPS2_RHYMES[(middle, final)]
    if initial:
        return MPS2_INITIALS[initial] + rhyme
    if rhyme in _MPS2_ZERO_INITIAL:
        return _MPS2_ZERO_INITIAL[rhyme]
    if middle == "ㄧ" or middle == "ㄩ":
        return "y" + rhyme[1:]
    if middle == "ㄨ":
        return "w" + rhyme[1:]
    return rhyme


def to_luoma(initial: str, middle: str, final: str) -> str:
    """Spell components in Luoma (Tongyong) Pinyin.

    Args:
        initial: Initial symbol or ``""``.
        middle: Medial symbol or ``""``.
        final: Final symbol or ``""``.

    Returns:
        Toneless spelling; ㄐㄑㄒ spell ``j c s`` and ü spells ``yu``.
    """

    if not middle and not final:
        return LUOMA_BARE_INITIALS.get(initial) or LUOMA_INITIALS.get(initial, "")
    rhyme = LUOMA_RHYMES[(middle, final)]
    if initial:
        if initial == "ㄈ" and rhyme == "eng":
            rhyme = "ong"
        return LUOMA_INITIALS[initial] + rhyme
    if rhyme in _LUOMA_ZERO_INITIAL:
        return _LUOMA_ZERO_INITIAL[rhyme]
    if middle == "ㄧ":
        return "y" + rhyme[1:]
    if middle == "ㄨ":
        return "w" + rhyme[1:]
    return rhyme


def _iter_syllables():
    for initial, rhymes in _SYLLABLE_RHYMES.items():
        for rhyme in rhymes.split():
            bopomofo = initial + ("" if rhyme == "-" else rhyme)
            parts = split_bopomofo(bopomofo)
            yield Syllable(
                bopomofo,
                *parts,
                hanyu=to_hanyu(*parts),
                secondary=to_secondary(*parts),
                luoma=to_luoma(*parts),
            )

    for initial in INITIALS:
        if initial in SPECIAL_INITIALS:
            continue
        yield Syllable(
            initial, initial, "", "", hanyu=to_hanyu(initial, "", ""), secondary=None,
            incomplete=True,
        )


def _build_content_table() -> tuple[Syllable, ...]:
    return tuple(sorted(_iter_syllables(), key=lambda item: (item.hanyu, item.bopomofo)))


CONTENT_TABLE = _build_content_table()

_KEYS_BY_BOPOMOFO = MappingProxyType(
    {
        syllable.bopomofo: PhoneticKey(
            syllable.initial, syllable.middle, syllable.final, Tone.NONE, table_index
        )
        for table_index, syllable in enumerate(CONTENT_TABLE, start=1)
    }
)


def key_for(bopomofo: str) -> PhoneticKey:
    """Return the canonical toneless key of a Bopomofo syllable.

    Raises:
        KeyError: If ``bopomofo`` is not in the content table.
    """

    return _KEYS_BY_BOPOMOFO[bopomofo]


def hanyu_pinyin(key: PhoneticKey) -> str:
    """Render a key in Hanyu Pinyin with a trailing tone digit when toned."""

    spelling = to_hanyu(key.initial, key.middle, key.final)
    return f"{spelling}{int(key.tone)}" if key.tone else spelling


def secondary_zhuyin(key: PhoneticKey) -> str:
    """Render a complete key in MPS2 with a trailing tone digit when toned."""

    spelling = to_secondary(key.initial, key.middle, key.final)
    return f"{spelling}{int(key.tone)}" if key.tone else spelling


def luoma_pinyin(key: PhoneticKey) -> str:
    """Render a complete key in Luoma Pinyin with a trailing tone digit when toned."""

    spelling = to_luoma(key.initial, key.middle, key.final)
    return f"{spelling}{int(key.tone)}" if key.tone else spelling
