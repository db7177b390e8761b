"""Multi-scheme Zhuyin keyboard key parser."""

from .errors import SchemeError, SchemeTableError
from .models import ParseResult, PhoneticKey, RawSpan, Tone
from .options import ParseOptions
from .parser import SchemeParser, ZhuyinScheme, bind_scheme

__all__ = [
    "SchemeParser",
    "ZhuyinScheme",
    "bind_scheme",
    "ParseOptions",
    "ParseResult",
    "PhoneticKey",
    "RawSpan",
    "Tone",
    "SchemeError",
    "SchemeTableError",
]
