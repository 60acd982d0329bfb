"""Field definition interpreter: token tree to :class:`FieldDef`.

Walks the tree produced by :func:`paramdex.domain.grammar.tokenize` and
builds a fully resolved, frozen FieldDef.  Suffix numerals are range
checked against their target width; nothing is truncated.
"""

from __future__ import annotations

import logging
from typing import Any

from lark import Token, Tree

from paramdex.domain.errors import (
    BitSizeUnsupportedError,
    Span,
    SuffixRangeError,
    UnrecognizedFieldTypeError,
)
from paramdex.domain.grammar import tokenize
from paramdex.domain.types import (
    MAX_BIT_SIZE,
    MAX_LENGTH,
    DummyType,
    FieldDef,
    FieldKind,
    FixStrType,
    PadBits,
    PadBytes,
    SimpleType,
    UnsignedType,
)

logger = logging.getLogger(__name__)

# Keyword → canonical kind.  ``angle32`` is an alias of ``a32``.
SIMPLE_KINDS: dict[str, FieldKind] = {
    "s8": FieldKind.S8,
    "u8": FieldKind.U8,
    "s16": FieldKind.S16,
    "u16": FieldKind.U16,
    "s32": FieldKind.S32,
    "u32": FieldKind.U32,
    "f32": FieldKind.F32,
    "f64": FieldKind.F64,
    "a32": FieldKind.A32,
    "angle32": FieldKind.A32,
    "b32": FieldKind.B32,
}

_UNSIGNED = frozenset({FieldKind.U8, FieldKind.U16, FieldKind.U32})


def parse_field_def(line: str) -> FieldDef:
    """Parse one field definition line.

    Raises a :class:`~paramdex.domain.errors.DefParseError` subclass on
    failure; never returns a partial definition.
    """
    shape = tokenize(line)
    handler = _SHAPES[shape.data]
    field_def = handler(shape, line)
    logger.debug("Parsed def %r as %s %s", line, field_def.kind, field_def.name)
    return field_def


# ---------------------------------------------------------------------------
# Shapes
# ---------------------------------------------------------------------------


def _parse_simple(shape: Tree, line: str) -> FieldDef:
    type_token, name_token, *suffixes = shape.children
    kind = SIMPLE_KINDS[str(type_token)]

    bit_size: int | None = None
    default: float | None = None
    for suffix in suffixes:
        if suffix.data == "suffix_bitsize":
            if kind not in _UNSIGNED:
                raise BitSizeUnsupportedError(
                    str(type_token), line=line, span=_span(suffix, line)
                )
            bit_size = _uint(suffix, line, MAX_BIT_SIZE)
        elif suffix.data == "suffix_default":
            default = _float(suffix)

    field_type: Any
    if kind in _UNSIGNED:
        field_type = UnsignedType(kind=kind.value, bit_size=bit_size)
    else:
        field_type = SimpleType(kind=kind.value)
    return FieldDef(field_type=field_type, name=str(name_token), default_value=default)


def _parse_dummy(shape: Tree, line: str) -> FieldDef:
    _type_token, name_token, *suffixes = shape.children

    length: PadBytes | PadBits | None = None
    default: float | None = None
    for suffix in suffixes:
        if suffix.data == "suffix_length":
            length = PadBytes(count=_uint(suffix, line, MAX_LENGTH))
        elif suffix.data == "suffix_bitsize":
            length = PadBits(count=_uint(suffix, line, MAX_BIT_SIZE))
        elif suffix.data == "suffix_default":
            default = _float(suffix)

    return FieldDef(
        field_type=DummyType(length=length),
        name=str(name_token),
        default_value=default,
    )


def _parse_fixstr(shape: Tree, line: str) -> FieldDef:
    type_token, name_token, length_suffix = shape.children
    field_type = FixStrType(kind=str(type_token), length=_uint(length_suffix, line, MAX_LENGTH))
    return FieldDef(field_type=field_type, name=str(name_token))


def _parse_unrecognized(shape: Tree, line: str) -> FieldDef:
    token = shape.children[0]
    raise UnrecognizedFieldTypeError(str(token), line=line, span=_span(token, line))


_SHAPES = {
    "def_simple": _parse_simple,
    "def_dummy": _parse_dummy,
    "def_fixstr": _parse_fixstr,
    "def_unrecog": _parse_unrecognized,
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _uint(suffix: Tree, line: str, limit: int) -> int:
    """Read the UINT inside *suffix*, rejecting values above *limit*."""
    token = _only_token(suffix)
    value = int(token)
    if value > limit:
        raise SuffixRangeError(str(token), limit, line=line, span=_span(token, line))
    return value


def _float(suffix: Tree) -> float:
    return float(_only_token(suffix))


def _only_token(suffix: Tree) -> Token:
    token = suffix.children[0]
    assert isinstance(token, Token)
    return token


def _span(node: Tree | Token, line: str) -> Span:
    if isinstance(node, Token):
        return Span.from_chars(line, node.start_pos or 0, node.end_pos or 0)
    meta = node.meta
    if getattr(meta, "empty", True):
        return Span.from_chars(line, len(line), len(line))
    return Span.from_chars(line, meta.start_pos, meta.end_pos)
