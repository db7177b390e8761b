"""Keyboard layouts mapping physical keys to Bopomofo symbols and tones.

Contiguous layouts are listed positionally against ``BOPOMOFO_SYMBOLS``: the
first 37 keys type symbols and the last five type tones one through five.
Slot layouts (Hsu, ETen26, DaChen CP26) list each role separately because one
physical key may serve several roles.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from zhuyin_parser.models import Tone

INITIALS = "ㄅㄆㄇㄈㄉㄊㄋㄌㄍㄎㄏㄐㄑㄒㄓㄔㄕㄖㄗㄘㄙ"
MIDDLES = "ㄧㄨㄩ"
FINALS = "ㄚㄛㄜㄝㄞㄟㄠㄡㄢㄣㄤㄥㄦ"

BOPOMOFO_SYMBOLS = tuple(INITIALS + MIDDLES + FINALS)
NUM_TONES = 5

KEYBOARD_LAYOUTS: dict[str, tuple[str, ...]] = {
    # 標準注音鍵盤
    "STANDARD": (
        "1", "q", "a", "z", "2", "w", "s", "x", "e", "d", "c", "r", "f", "v",
        "5", "t", "g", "b", "y", "h", "n",
        "u", "j", "m",
        "8", "i", "k", ",", "9", "o", "l", ".", "0", "p", ";", "/", "-",
        " ", "6", "3", "4", "7",
    ),
    # 精業注音鍵盤
    "GINYIEH": (
        "2", "w", "s", "x", "3", "e", "d", "c", "r", "f", "v", "t", "g", "b",
        "6", "y", "h", "n", "u", "j", "m",
        "-", "[", "'",
        "8", "i", "k", ",", "9", "o", "l", ".", "0", "p", ";", "/", "=",
        " ", "q", "a", "z", "1",
    ),
    # 倚天注音鍵盤
    "ETEN": (
        "b", "p", "m", "f", "d", "t", "n", "l", "v", "k", "h", "g", "7", "c",
        ",", ".", "/", "j", ";", "'", "s",
        "e", "x", "u",
        "a", "o", "r", "w", "i", "q", "z", "y", "8", "9", "0", "-", "=",
        " ", "2", "3", "4", "1",
    ),
    # IBM注音鍵盤
    "IBM": (
        "1", "2", "3", "4", "5", "6", "7", "8", "9", "0", "-", "q", "w", "e",
        "r", "t", "y", "u", "i", "o", "p",
        "a", "s", "d",
        "f", "g", "h", "j", "k", "l", ";", "z", "x", "c", "v", "b", "n",
        " ", "m", ",", ".", "/",
    ),
}

# US QWERTY key -> key at the same position on a US Dvorak keyboard.
QWERTY_TO_DVORAK = MappingProxyType(
    dict(
        zip(
            "1234567890-=qwertyuiop[]asdfghjkl;'zxcvbnm,./ ",
            "1234567890[]',.pyfgcrl/=aoeuidhtns-;qjkxbmwvz ",
        )
    )
)

KEYBOARD_LAYOUTS["STANDARD_DVORAK"] = tuple(
    QWERTY_TO_DVORAK[key] for key in KEYBOARD_LAYOUTS["STANDARD"]
)


def layout_symbols(layout: str) -> Mapping[str, str]:
    """Return the key -> Bopomofo symbol map of a contiguous layout."""

    keys = KEYBOARD_LAYOUTS[layout][:-NUM_TONES]
    return MappingProxyType(dict(zip(keys, BOPOMOFO_SYMBOLS)))


def layout_tones(layout: str) -> Mapping[str, Tone]:
    """Return the key -> tone map of a contiguous layout."""

    keys = KEYBOARD_LAYOUTS[layout][-NUM_TONES:]
    return MappingProxyType({key: Tone(level) for level, key in enumerate(keys, start=1)})


class SlotLayout:
    """Per-role key tables of one discrete keyboard.

    Each role table maps a key to one or two alternate symbols. The second
    alternate is only meaningful for the ambiguous DaChen CP26 strategy.
    """

    def __init__(
        self,
        initials: Mapping[str, tuple[str, ...]],
        middles: Mapping[str, tuple[str, ...]],
        finals: Mapping[str, tuple[str, ...]],
        tones: Mapping[str, Tone],
    ) -> None:
        self.initials = MappingProxyType(dict(initials))
        self.middles = MappingProxyType(dict(middles))
        self.finals = MappingProxyType(dict(finals))
        self.tones = MappingProxyType(dict(tones))

    def remapped(self, key_map: Mapping[str, str]) -> SlotLayout:
        """Return the same layout typed on a keyboard described by ``key_map``."""

        def remap(table):
            return {key_map[key]: value for key, value in table.items()}

        return SlotLayout(
            remap(self.initials), remap(self.middles), remap(self.finals), remap(self.tones)
        )


def _single(table: str) -> dict[str, tuple[str, ...]]:
    """Expand ``"bㄅ pㄆ"`` style pairs into a key -> (symbol,) table."""

    return {pair[0]: (pair[1:],) for pair in table.split()}


HSU = SlotLayout(
    initials=_single("bㄅ pㄆ mㄇ fㄈ dㄉ tㄊ nㄋ lㄌ gㄍ kㄎ hㄏ jㄐ vㄑ cㄒ rㄖ zㄗ aㄘ sㄙ"),
    middles=_single("eㄧ xㄨ uㄩ"),
    finals=_single("yㄚ hㄛ gㄜ eㄝ iㄞ aㄟ wㄠ oㄡ mㄢ nㄣ kㄤ lㄥ"),
    tones={" ": Tone.FIRST, "d": Tone.SECOND, "f": Tone.THIRD, "j": Tone.FOURTH, "s": Tone.FIFTH},
)

HSU_DVORAK = HSU.remapped(QWERTY_TO_DVORAK)

ETEN26 = SlotLayout(
    initials=_single("bㄅ pㄆ mㄇ fㄈ dㄉ tㄊ nㄋ lㄌ vㄍ kㄎ hㄏ gㄐ yㄔ cㄒ jㄖ qㄗ wㄘ sㄙ"),
    middles=_single("eㄧ xㄨ uㄩ"),
    finals=_single("aㄚ oㄛ rㄜ wㄝ iㄞ qㄟ zㄠ pㄡ mㄢ nㄣ tㄤ lㄥ hㄦ"),
    tones={" ": Tone.FIRST, "f": Tone.SECOND, "j": Tone.THIRD, "k": Tone.FOURTH, "d": Tone.FIFTH},
)

# DaChen CP26 folds the number row of the standard layout into the letter key
# below it; pressing such a key twice switches to the second symbol.
DACHEN_CP26 = SlotLayout(
    initials={
        "q": ("ㄅ", "ㄆ"),
        "a": ("ㄇ",),
        "z": ("ㄈ",),
        "w": ("ㄉ", "ㄊ"),
        "s": ("ㄋ",),
        "x": ("ㄌ",),
        "e": ("ㄍ",),
        "d": ("ㄎ",),
        "c": ("ㄏ",),
        "r": ("ㄐ",),
        "f": ("ㄑ",),
        "v": ("ㄒ",),
        "t": ("ㄓ", "ㄔ"),
        "g": ("ㄕ",),
        "b": ("ㄖ",),
        "y": ("ㄗ",),
        "h": ("ㄘ",),
        "n": ("ㄙ",),
    },
    middles=_single("uㄧ jㄨ mㄩ"),
    finals={
        "i": ("ㄛ", "ㄞ"),
        "k": ("ㄜ",),
        "b": ("ㄝ",),
        "o": ("ㄟ", "ㄢ"),
        "l": ("ㄠ", "ㄤ"),
        "p": ("ㄣ", "ㄦ"),
        "n": ("ㄥ",),
    },
    tones={" ": Tone.FIRST, "y": Tone.SECOND, "e": Tone.THIRD, "r": Tone.FOURTH, "u": Tone.FIFTH},
)

# Keys whose repeated presses cycle through (middle, final) readings.
DACHEN_CP26_CYCLING_KEYS: Mapping[str, tuple[tuple[str, str], ...]] = MappingProxyType(
    {
        "u": (("ㄧ", ""), ("", "ㄚ"), ("ㄧ", "ㄚ")),
        "m": (("ㄩ", ""), ("", "ㄡ")),
    }
)
