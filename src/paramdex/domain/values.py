"""Strict text-to-value parsers for PARAMDEF element text.

Each parser raises :class:`ValueError` on malformed or out-of-range input.
Underscore digit separators and other Python-only literal forms are
rejected so that a document means the same thing to every reader.
"""

from __future__ import annotations

import re

U32_MAX = 0xFFFFFFFF
USIZE_MAX = 2**64 - 1

_UINT_PATTERN = re.compile(r"\+?[0-9]+")
_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def _parse_unsigned(text: str, limit: int, label: str) -> int:
    if not _UINT_PATTERN.fullmatch(text):
        msg = f"invalid digit found in {text!r} for {label}"
        raise ValueError(msg)
    value = int(text)
    if value > limit:
        msg = f"number too large to fit in {label}: {text}"
        raise ValueError(msg)
    return value


def parse_u32(text: str) -> int:
    """Parse an unsigned 32-bit decimal integer."""
    return _parse_unsigned(text, U32_MAX, "u32")


def parse_usize(text: str) -> int:
    """Parse an unsigned pointer-width decimal integer."""
    return _parse_unsigned(text, USIZE_MAX, "usize")


def parse_bool(text: str) -> bool:
    """Parse exactly ``true`` or ``false``.

    Examples:
        >>> parse_bool("true")
        True
        >>> parse_bool("false")
        False
    """
    if text == "true":
        return True
    if text == "false":
        return False
    msg = f"provided string was not `true` or `false`: {text!r}"
    raise ValueError(msg)


def parse_f64(text: str) -> float:
    """Parse a decimal float (optional sign, fraction and exponent)."""
    if not _FLOAT_PATTERN.fullmatch(text):
        msg = f"invalid float literal: {text!r}"
        raise ValueError(msg)
    return float(text)
