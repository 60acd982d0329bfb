"""paramdex: typed models for Paramdex PARAMDEF documents.

Entry points:

- :func:`parse_field_def`: parse one field definition line
  (``"u32 flags:3 = 0"``) into a :class:`FieldDef`.
- :func:`deserialize_def`: parse one PARAMDEF XML document into a
  :class:`ParamDef`.
- :class:`Paramdex`: a param type to ParamDef registry.

Quick start:
    >>> from paramdex import parse_field_def
    >>> parse_field_def("dummy8 pad[3]").field_type.length.count
    3
"""

from __future__ import annotations

from paramdex.domain.errors import (
    BitSizeUnsupportedError,
    DefParseError,
    FieldDefinitionError,
    GrammarSyntaxError,
    ParamdefError,
    ParamdexError,
    Span,
    SuffixRangeError,
    UnrecognizedFieldTypeError,
    XmlStructureError,
    XmlSyntaxError,
    XmlValueError,
)
from paramdex.domain.field_def import parse_field_def
from paramdex.domain.paramdef import deserialize_def
from paramdex.domain.registry import Paramdex
from paramdex.domain.types import (
    DummyType,
    EditFlags,
    Endian,
    FieldDef,
    FieldKind,
    FieldMeta,
    FixStrType,
    PadBits,
    PadBytes,
    ParamDef,
    ParamField,
    SimpleType,
    StringFormat,
    UnsignedType,
)

__version__ = "0.3.0"

__all__ = [
    # Parsers
    "parse_field_def",
    "deserialize_def",
    "Paramdex",
    # Models
    "DummyType",
    "EditFlags",
    "Endian",
    "FieldDef",
    "FieldKind",
    "FieldMeta",
    "FixStrType",
    "PadBits",
    "PadBytes",
    "ParamDef",
    "ParamField",
    "SimpleType",
    "StringFormat",
    "UnsignedType",
    # Errors
    "BitSizeUnsupportedError",
    "DefParseError",
    "FieldDefinitionError",
    "GrammarSyntaxError",
    "ParamdefError",
    "ParamdexError",
    "Span",
    "SuffixRangeError",
    "UnrecognizedFieldTypeError",
    "XmlStructureError",
    "XmlSyntaxError",
    "XmlValueError",
]
