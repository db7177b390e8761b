"""Scheme selection and the public parsing entry point.

A ``SchemeParser`` is configured once with a keyboard scheme and then reused
for any number of ``parse`` calls. Configuration binds immutable tables to one
of the four decoding strategies and fixes the options the scheme mandates.
"""

from __future__ import annotations

from dataclasses import dataclass
import enum
from functools import lru_cache, partial
import logging
from types import MappingProxyType
from typing import Callable, Mapping

from zhuyin_parser.decoders import (
    AmbiguousDiscreteDecoder,
    ContiguousDecoder,
    DirectDecoder,
    DiscreteDecoder,
)
from zhuyin_parser.errors import SchemeError
from zhuyin_parser.models import ParseResult, PhoneticKey, Tone
from zhuyin_parser.options import ParseOptions
from zhuyin_parser.segmenter import (
    SEPARATORS,
    Decoder,
    segment_greedy,
    segment_separated,
)
from zhuyin_parser.tables.index import (
    BOPOMOFO_INDEX,
    ETEN26_INDEX,
    HANYU_PINYIN_INDEX,
    HSU_INDEX,
    LUOMA_PINYIN_INDEX,
    SECONDARY_ZHUYIN_INDEX,
    SchemeIndex,
)
from zhuyin_parser.tables.keyboards import (
    DACHEN_CP26,
    DACHEN_CP26_CYCLING_KEYS,
    ETEN26,
    HSU,
    HSU_DVORAK,
    SlotLayout,
    layout_symbols,
    layout_tones,
)
from zhuyin_parser.validation import (
    validate_key_tables,
    validate_scheme_index,
    validate_slot_layout,
)

logger = logging.getLogger(__name__)

BOPOMOFO_TONE_MARKS = MappingProxyType({tone.glyph: tone for tone in Tone if tone})
DIGIT_TONE_MARKS = MappingProxyType({str(int(tone)): tone for tone in Tone if tone})


class ZhuyinScheme(enum.Enum):
    """Closed set of supported keyboard schemes."""

    STANDARD = "standard"
    IBM = "ibm"
    GINYIEH = "ginyieh"
    ETEN = "eten"
    STANDARD_DVORAK = "standard-dvorak"
    HSU = "hsu"
    HSU_DVORAK = "hsu-dvorak"
    ETEN26 = "eten26"
    DACHEN_CP26 = "dachen-cp26"
    ZHUYIN = "zhuyin"
    HANYU_PINYIN = "hanyu-pinyin"
    SECONDARY_ZHUYIN = "secondary-zhuyin"
    LUOMA_PINYIN = "luoma-pinyin"


Segmenter = Callable[..., ParseResult]


@dataclass(frozen=True)
class SchemeBinding:
    """Decoder, segmentation loop and mandated options of one scheme.

    ``keys`` lists every raw character the scheme's tables recognize.
    """

    scheme: ZhuyinScheme
    decoder: Decoder
    mandated: ParseOptions
    segment: Segmenter
    keys: frozenset[str]


def _slot_keys(layout: SlotLayout, *extra) -> frozenset[str]:
    """Collect every raw key of a discrete layout.

    Args:
        layout: Role tables of the keyboard.
        *extra: Further key tables, e.g. cycling keys.

    Returns:
        Keys typing any symbol or tone.
    """

    keys = set(layout.initials) | set(layout.middles) | set(layout.finals) | set(layout.tones)
    for table in extra:
        keys |= set(table)
    return frozenset(keys)


def _contiguous(scheme: ZhuyinScheme, layout: str) -> SchemeBinding:
    """Bind a layout where each key types exactly one symbol.

    Args:
        scheme: Scheme being bound.
        layout: Name in ``KEYBOARD_LAYOUTS``.

    Returns:
        Binding over the Bopomofo index with shuffle correction mandated.
    """

    symbols = layout_symbols(layout)
    tones = layout_tones(layout)
    return SchemeBinding(
        scheme,
        ContiguousDecoder(symbols, tones, BOPOMOFO_INDEX),
        ParseOptions.SHUFFLE_CORRECT,
        segment_greedy,
        frozenset(symbols) | frozenset(tones),
    )


def _discrete(
    scheme: ZhuyinScheme, layout: SlotLayout, index: SchemeIndex, mandated: ParseOptions
) -> SchemeBinding:
    """Bind a one-key-per-slot layout such as Hsu or ETen26.

    Args:
        scheme: Scheme being bound.
        layout: Role tables, validated here.
        index: Corrected index of the layout.
        mandated: Correction flag the layout always needs.

    Returns:
        Binding driven by ``segment_greedy``.

    Raises:
        SchemeTableError: If the role tables are malformed.
    """

    validate_slot_layout(scheme.value, layout)
    return SchemeBinding(
        scheme, DiscreteDecoder(layout, index), mandated, segment_greedy, _slot_keys(layout)
    )


def _dachen_cp26(scheme: ZhuyinScheme) -> SchemeBinding:
    """Bind DaChen CP26 with its repeat-resolved keys and cycling keys."""

    validate_slot_layout(scheme.value, DACHEN_CP26)
    return SchemeBinding(
        scheme,
        AmbiguousDiscreteDecoder(DACHEN_CP26, DACHEN_CP26_CYCLING_KEYS, BOPOMOFO_INDEX),
        ParseOptions.NONE,
        segment_greedy,
        _slot_keys(DACHEN_CP26, DACHEN_CP26_CYCLING_KEYS),
    )


def _direct(
    scheme: ZhuyinScheme, index: SchemeIndex, tones: Mapping[str, Tone], unmarked_tone: Tone
) -> SchemeBinding:
    """Bind a direct-entry scheme segmented on separators.

    Args:
        scheme: Scheme being bound.
        index: Index of composed strings.
        tones: Tone marker -> tone map.
        unmarked_tone: Tone of an unmarked token when tones are in use.

    Returns:
        Binding with no mandated options.
    """

    decoder = DirectDecoder(index, tones, unmarked_tone, SEPARATORS)
    return SchemeBinding(
        scheme,
        decoder,
        ParseOptions.NONE,
        partial(segment_separated, separators=decoder.separators),
        index.alphabet | frozenset(SEPARATORS) | frozenset(tones),
    )


_BUILDERS: dict[ZhuyinScheme, Callable[[ZhuyinScheme], SchemeBinding]] = {
    ZhuyinScheme.STANDARD: lambda scheme: _contiguous(scheme, "STANDARD"),
    ZhuyinScheme.IBM: lambda scheme: _contiguous(scheme, "IBM"),
    ZhuyinScheme.GINYIEH: lambda scheme: _contiguous(scheme, "GINYIEH"),
    ZhuyinScheme.ETEN: lambda scheme: _contiguous(scheme, "ETEN"),
    ZhuyinScheme.STANDARD_DVORAK: lambda scheme: _contiguous(scheme, "STANDARD_DVORAK"),
    ZhuyinScheme.HSU: lambda scheme: _discrete(scheme, HSU, HSU_INDEX, ParseOptions.HSU_CORRECT),
    ZhuyinScheme.HSU_DVORAK: lambda scheme: _discrete(
        scheme, HSU_DVORAK, HSU_INDEX, ParseOptions.HSU_CORRECT
    ),
    ZhuyinScheme.ETEN26: lambda scheme: _discrete(
        scheme, ETEN26, ETEN26_INDEX, ParseOptions.ETEN26_CORRECT
    ),
    ZhuyinScheme.DACHEN_CP26: _dachen_cp26,
    ZhuyinScheme.ZHUYIN: lambda scheme: _direct(
        scheme, BOPOMOFO_INDEX, BOPOMOFO_TONE_MARKS, Tone.FIRST
    ),
    ZhuyinScheme.HANYU_PINYIN: lambda scheme: _direct(
        scheme, HANYU_PINYIN_INDEX, DIGIT_TONE_MARKS, Tone.NONE
    ),
    ZhuyinScheme.SECONDARY_ZHUYIN: lambda scheme: _direct(
        scheme, SECONDARY_ZHUYIN_INDEX, DIGIT_TONE_MARKS, Tone.NONE
    ),
    ZhuyinScheme.LUOMA_PINYIN: lambda scheme: _direct(
        scheme, LUOMA_PINYIN_INDEX, DIGIT_TONE_MARKS, Tone.NONE
    ),
}


def resolve_scheme(scheme: ZhuyinScheme | str) -> ZhuyinScheme:
    """Return the enum member for a scheme or its string value.

    Raises:
        SchemeError: If ``scheme`` names no supported scheme.
    """

    if isinstance(scheme, ZhuyinScheme):
        return scheme
    try:
        return ZhuyinScheme(scheme)
    except ValueError as exc:
        raise SchemeError(f"Unknown keyboard scheme: {scheme!r}") from exc


def bind_scheme(scheme: ZhuyinScheme | str) -> SchemeBinding:
    """Build and validate the tables of one scheme.

    Bindings are immutable and cached, so every parser configured with the same
    scheme shares them.

    Args:
        scheme: Scheme member or its string value, e.g. ``"hsu"``.

    Returns:
        The bound decoder, segmenter and mandated options.

    Raises:
        SchemeError: If ``scheme`` is unknown.
        SchemeTableError: If the scheme's tables are corrupt.
    """

    return _bind(resolve_scheme(scheme))


@lru_cache(maxsize=None)
def _bind(member: ZhuyinScheme) -> SchemeBinding:
    """Build, validate and log the binding of one scheme member."""

    binding = _BUILDERS[member](member)
    validate_scheme_index(binding.decoder.index)
    validate_key_tables(member.value, binding.decoder, binding.keys)
    logger.debug(
        "Bound scheme %s: %s over index %s (%d entries)",
        member.value,
        type(binding.decoder).__name__,
        binding.decoder.index.name,
        len(binding.decoder.index),
    )
    return binding


class SchemeParser:
    """Parse raw keystrokes of one configured keyboard scheme into keys.

    Example:
        >>> parser = SchemeParser(ZhuyinScheme.HANYU_PINYIN)
        >>> result = parser.parse(ParseOptions.USE_TONE, "ni3 hao3")
        >>> [key.zhuyin for key in result.keys]
        ['ㄋㄧˇ', 'ㄏㄠˇ']
    """

    def __init__(self, scheme: ZhuyinScheme | str | None = None) -> None:
        self._binding: SchemeBinding | None = None
        if scheme is not None:
            self.configure(scheme)

    @property
    def scheme(self) -> ZhuyinScheme | None:
        return None if self._binding is None else self._binding.scheme

    def configure(self, scheme: ZhuyinScheme | str) -> None:
        """Select the active scheme.

        Raises:
            SchemeError: If ``scheme`` is unknown.
        """

        self._binding = bind_scheme(resolve_scheme(scheme))
        logger.debug("Configured parser for scheme %s", self._binding.scheme.value)

    def _require_binding(self) -> SchemeBinding:
        if self._binding is None:
            raise SchemeError("Parser has no keyboard scheme configured")
        return self._binding

    def effective_options(self, options: ParseOptions) -> ParseOptions:
        """Return ``options`` with the scheme's mandated flags added."""

        return ParseOptions(options) | self._require_binding().mandated

    def parse(self, options: ParseOptions, text: str) -> ParseResult:
        """Segment ``text`` into keys and the raw spans they consumed.

        Args:
            options: Caller options; scheme-mandated flags are always added.
            text: Raw keystrokes.

        Returns:
            Parse result; ``parsed_length < len(text)`` signals that input was
            left undecoded from that offset on.

        Raises:
            SchemeError: If no scheme is configured.
        """

        binding = self._require_binding()
        result = binding.segment(binding.decoder, self.effective_options(options), text)
        if result.parsed_length < len(text):
            logger.debug(
                "Parse truncated at offset %d of %d for scheme %s: %r",
                result.parsed_length,
                len(text),
                binding.scheme.value,
                result.remainder(text),
            )
        return result

    def decode_window(self, options: ParseOptions, window: str) -> PhoneticKey | None:
        """Decode exactly ``window`` as one key, or return ``None``."""

        binding = self._require_binding()
        return binding.decoder.decode_window(self.effective_options(options), window)

    def in_scheme(self, options: ParseOptions, char: str) -> list[str]:
        """Return the phonetic fragments ``char`` can type in this scheme."""

        binding = self._require_binding()
        return binding.decoder.in_scheme(self.effective_options(options), char)
