"""Integrity checks for scheme tables, run once when a scheme is bound."""

from __future__ import annotations

from typing import Iterable, Mapping

from zhuyin_parser.errors import SchemeTableError
from zhuyin_parser.models import Tone
from zhuyin_parser.options import ParseOptions
from zhuyin_parser.segmenter import Decoder
from zhuyin_parser.tables.index import SchemeIndex
from zhuyin_parser.tables.keyboards import FINALS, INITIALS, MIDDLES, SlotLayout

MAX_ALTERNATES = 2
MAX_MEMBERSHIP_FRAGMENTS = 3


def _raise_if_errors(label: str, errors: list[str]) -> None:
    """Raise with a preview of collected errors, if any.

    Args:
        label: Name of the validated table.
        errors: Collected error messages.

    Raises:
        SchemeTableError: If ``errors`` is non-empty.
    """

    if errors:
        preview = "\n".join(f"- {item}" for item in errors[:25])
        rest = len(errors) - min(25, len(errors))
        more = f"\n- ... and {rest} more" if rest > 0 else ""
        raise SchemeTableError(f"{label} validation failed with {len(errors)} errors:\n{preview}{more}")


def validate_scheme_index(index: SchemeIndex) -> None:
    """Validate ordering and uniqueness of a scheme index.

    Args:
        index: Index to validate.

    Raises:
        SchemeTableError: If entries are unsorted, duplicated, carry a toned or
            invalid key, or hold more than one correction class.
    """

    errors: list[str] = []
    previous = None
    for idx, entry in enumerate(index.entries):
        if previous is not None:
            if entry.text == previous:
                errors.append(f"Entry {idx}: duplicate text '{entry.text}'")
            elif entry.text < previous:
                errors.append(f"Entry {idx}: '{entry.text}' sorts before '{previous}'")
        previous = entry.text

        if not entry.text:
            errors.append(f"Entry {idx}: empty text")
        if entry.key.table_index <= 0:
            errors.append(f"Entry {idx}: invalid table_index for '{entry.text}'")
        if entry.key.tone != Tone.NONE:
            errors.append(f"Entry {idx}: canonical key for '{entry.text}' carries a tone")
        correction = int(entry.correction)
        if correction & ~int(ParseOptions.CORRECT_ALL) or bin(correction).count("1") > 1:
            errors.append(f"Entry {idx}: invalid correction class {entry.correction!r}")

    _raise_if_errors(f"Index '{index.name}'", errors)


def validate_slot_layout(name: str, layout: SlotLayout) -> None:
    """Validate role tables of a discrete keyboard.

    Every key must type one or two symbols, and each symbol must belong to the
    role it is listed under.

    Raises:
        SchemeTableError: If any role table is malformed.
    """

    errors: list[str] = []
    roles: tuple[tuple[str, Mapping[str, tuple[str, ...]], frozenset[str]], ...] = (
        ("initial", layout.initials, frozenset(INITIALS)),
        ("middle", layout.middles, frozenset(MIDDLES)),
        ("final", layout.finals, frozenset(FINALS)),
    )
    for role, table, allowed in roles:
        for key, symbols in table.items():
            if len(key) != 1:
                errors.append(f"{role} key '{key}': keys must be single characters")
            if not 1 <= len(symbols) <= MAX_ALTERNATES:
                errors.append(f"{role} key '{key}': {len(symbols)} alternates")
            for symbol in symbols:
                if symbol not in allowed:
                    errors.append(f"{role} key '{key}': unexpected symbol '{symbol}'")

    _raise_if_errors(f"Layout '{name}'", errors)


def validate_key_tables(name: str, decoder: Decoder, keys: Iterable[str]) -> None:
    """Validate per-key membership fragments of a bound decoder.

    Args:
        name: Scheme name used in error messages.
        decoder: Decoder exposing ``in_scheme``.
        keys: Every raw key the scheme recognizes.

    Raises:
        SchemeTableError: If a key is not a member of its own scheme or yields
            more fragments than one key may type.
    """

    errors: list[str] = []
    for key in sorted(keys):
        fragments = decoder.in_scheme(ParseOptions.USE_TONE, key)
        if not fragments:
            errors.append(f"Key '{key}': not recognized by its own scheme")
        elif len(fragments) > MAX_MEMBERSHIP_FRAGMENTS:
            errors.append(f"Key '{key}': {len(fragments)} fragments {fragments}")

    _raise_if_errors(f"Scheme '{name}'", errors)
