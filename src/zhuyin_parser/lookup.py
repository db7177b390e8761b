"""Canonical-key lookup over a sorted scheme index."""

from __future__ import annotations

from bisect import bisect_left, bisect_right

from zhuyin_parser.errors import SchemeTableError
from zhuyin_parser.models import PhoneticKey
from zhuyin_parser.options import ParseOptions
from zhuyin_parser.tables.index import IndexEntry, SchemeIndex


def check_entry_options(options: ParseOptions, entry: IndexEntry) -> bool:
    """Return whether ``entry`` is visible under ``options``.

    Incomplete entries (a bare initial) require ``ZHUYIN_INCOMPLETE``. An entry
    carrying a correction class requires that class to be enabled.
    """

    if entry.incomplete and not options & ParseOptions.ZHUYIN_INCOMPLETE:
        return False

    correction = entry.correction & ParseOptions.CORRECT_ALL
    if correction and (options & correction) != correction:
        return False

    return True


def search_index(
    options: ParseOptions, index: SchemeIndex, composed: str
) -> PhoneticKey | None:
    """Find the canonical key for an exact composed string.

    Args:
        options: Effective parse options, already merged with scheme flags.
        index: Sorted scheme index to search.
        composed: Composed phonetic string built by a decoder.

    Returns:
        The canonical toneless key, or ``None`` when no visible entry matches.

    Raises:
        SchemeTableError: If the index holds more than one entry for
            ``composed``.
    """

    texts = index.texts
    lo = bisect_left(texts, composed)
    hi = bisect_right(texts, composed, lo)
    if hi - lo > 1:
        raise SchemeTableError(f"Index {index.name!r} has {hi - lo} entries for {composed!r}")
    if hi == lo:
        return None

    entry = index.entries[lo]
    if not check_entry_options(options, entry):
        return None
    return entry.key
