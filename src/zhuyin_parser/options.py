"""Option bits shared by every decoding strategy and the downstream matcher.

The numeric values are part of the public contract: calling code may persist
option values, so existing bits must never be renumbered.
"""

from __future__ import annotations

import enum
from typing import Iterable


class ParseOptions(enum.IntFlag):
    """Immutable bitset controlling one parse call.

    Tone bits select whether a trailing tone key is recognized and whether it
    is mandatory. Correction bits enable index entries that repair common
    mistypes of a specific keyboard scheme. Ambiguity bits are not consulted by
    the parser itself; they are carried through for dictionary matching.
    """

    NONE = 0

    USE_TONE = 1 << 0
    FORCE_TONE = 1 << 1
    ZHUYIN_INCOMPLETE = 1 << 2

    HSU_CORRECT = 1 << 3
    ETEN26_CORRECT = 1 << 4
    SHUFFLE_CORRECT = 1 << 5

    AMB_C_CH = 1 << 8
    AMB_S_SH = 1 << 9
    AMB_Z_ZH = 1 << 10
    AMB_F_H = 1 << 11
    AMB_G_K = 1 << 12
    AMB_L_N = 1 << 13
    AMB_L_R = 1 << 14
    AMB_AN_ANG = 1 << 15
    AMB_EN_ENG = 1 << 16
    AMB_IN_ING = 1 << 17

    CORRECT_ALL = HSU_CORRECT | ETEN26_CORRECT | SHUFFLE_CORRECT
    AMB_ALL = (
        AMB_C_CH
        | AMB_S_SH
        | AMB_Z_ZH
        | AMB_F_H
        | AMB_G_K
        | AMB_L_N
        | AMB_L_R
        | AMB_AN_ANG
        | AMB_EN_ENG
        | AMB_IN_ING
    )

    @classmethod
    def from_names(cls, names: Iterable[str]) -> ParseOptions:
        """Combine kebab-case flag names into one option value.

        Args:
            names: Names such as ``use-tone`` or ``amb-c-ch``; case-insensitive.

        Returns:
            The OR of every named flag, ``NONE`` for an empty iterable.

        Raises:
            ValueError: If any name does not denote a flag.
        """

        options = cls.NONE
        for name in names:
            member = cls.__members__.get(name.strip().replace("-", "_").upper())
            if member is None:
                raise ValueError(f"Unknown parse option: {name!r}")
            options |= member
        return options

    def without_ambiguities(self) -> ParseOptions:
        """Return these options with every ambiguity class cleared."""

        return self & ~ParseOptions.AMB_ALL
