"""Exception types raised for programming errors in scheme setup.

Window decode failures are never exceptional; they surface as ``None`` or as a
short ``parsed_length``. The exceptions below indicate build-time data bugs or
caller misuse and are not meant to be caught during normal input handling.
"""

from __future__ import annotations


class SchemeError(ValueError):
    """Raised when an unknown scheme is requested or no scheme is configured."""


class SchemeTableError(RuntimeError):
    """Raised when bound scheme tables violate their structural invariants."""
