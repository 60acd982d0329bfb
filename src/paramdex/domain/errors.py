"""Parse error taxonomy for definition lines and PARAMDEF documents.

Two families share one root:

- :class:`DefParseError`: a single field definition line failed.
- :class:`ParamdefError`: a whole PARAMDEF document failed.

Every error carries a stable ``code`` string.  The service layer copies it
into ``ServiceError.code`` so CLI and JSON consumers can match on it.
"""

from __future__ import annotations

from dataclasses import dataclass

ERR_DEF_SYNTAX = "ERR_DEF_SYNTAX"
ERR_BIT_SIZE_UNSUPPORTED = "ERR_BIT_SIZE_UNSUPPORTED"
ERR_UNRECOGNIZED_TYPE = "ERR_UNRECOGNIZED_TYPE"
ERR_SUFFIX_RANGE = "ERR_SUFFIX_RANGE"
ERR_XML_SYNTAX = "ERR_XML_SYNTAX"
ERR_XML_STRUCTURE = "ERR_XML_STRUCTURE"
ERR_XML_VALUE = "ERR_XML_VALUE"
ERR_FIELD_DEF = "ERR_FIELD_DEF"


@dataclass(frozen=True)
class Span:
    """Half-open byte range ``[start, end)`` into the UTF-8 encoded line."""

    start: int
    end: int

    @classmethod
    def from_chars(cls, text: str, start: int, end: int) -> Span:
        """Convert character offsets in *text* to byte offsets."""
        start = max(0, min(start, len(text)))
        end = max(start, min(end, len(text)))
        byte_start = len(text[:start].encode("utf-8"))
        return cls(byte_start, byte_start + len(text[start:end].encode("utf-8")))

    def slice(self, text: str) -> str:
        """Return the part of *text* covered by this span."""
        return text.encode("utf-8")[self.start : self.end].decode("utf-8", errors="replace")

    def to_dict(self) -> dict[str, int]:
        return {"start": self.start, "end": self.end}


class ParamdexError(Exception):
    """Base class for every parse failure raised by paramdex."""

    code: str = "ERR_PARAMDEX"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def detail(self) -> dict[str, object]:
        """Structured context for ``ServiceError.detail``."""
        return {}


# ---------------------------------------------------------------------------
# Definition line errors
# ---------------------------------------------------------------------------


class DefParseError(ParamdexError):
    """A field definition line could not be turned into a FieldDef."""

    def __init__(self, message: str, *, line: str, span: Span | None = None) -> None:
        super().__init__(message)
        self.line = line
        self.span = span

    def detail(self) -> dict[str, object]:
        out: dict[str, object] = {"line": self.line}
        if self.span is not None:
            out["span"] = self.span.to_dict()
        return out


class GrammarSyntaxError(DefParseError):
    """The line matches none of the definition shapes."""

    code = ERR_DEF_SYNTAX

    def __init__(self, diagnostic: str, *, line: str, span: Span | None = None) -> None:
        super().__init__(f"failed to parse def line: {line!r}", line=line, span=span)
        self.diagnostic = diagnostic

    def detail(self) -> dict[str, object]:
        out = super().detail()
        out["diagnostic"] = self.diagnostic
        return out


class BitSizeUnsupportedError(DefParseError):
    """A ``:N`` suffix was given on a type without bit-size capability."""

    code = ERR_BIT_SIZE_UNSUPPORTED

    def __init__(self, type_name: str, *, line: str, span: Span | None = None) -> None:
        super().__init__(f"bit size unsupported for type {type_name}", line=line, span=span)
        self.type_name = type_name


class UnrecognizedFieldTypeError(DefParseError):
    """The leading token is not a known field type."""

    code = ERR_UNRECOGNIZED_TYPE

    def __init__(self, token: str, *, line: str, span: Span | None = None) -> None:
        super().__init__(f"unrecognized field type {token!r}", line=line, span=span)
        self.token = token

    def detail(self) -> dict[str, object]:
        out = super().detail()
        out["token"] = self.token
        return out


class SuffixRangeError(DefParseError):
    """A bit-size or length suffix does not fit its target width."""

    code = ERR_SUFFIX_RANGE

    def __init__(self, value: str, limit: int, *, line: str, span: Span | None = None) -> None:
        super().__init__(f"suffix value {value} exceeds maximum {limit}", line=line, span=span)
        self.value = value
        self.limit = limit


# ---------------------------------------------------------------------------
# Document errors
# ---------------------------------------------------------------------------


class ParamdefError(ParamdexError):
    """A PARAMDEF document could not be turned into a ParamDef."""


class XmlSyntaxError(ParamdefError):
    """The document is not well-formed XML."""

    code = ERR_XML_SYNTAX

    def __init__(self, diagnostic: str) -> None:
        super().__init__(f"XML parsing failed: {diagnostic}")
        self.diagnostic = diagnostic


class XmlStructureError(ParamdefError):
    """A required element, attribute or text node is missing."""

    code = ERR_XML_STRUCTURE

    def __init__(self, reason: str, key: str) -> None:
        super().__init__(f"{reason}: {key}")
        self.reason = reason
        self.key = key

    def detail(self) -> dict[str, object]:
        return {"key": self.key}


class XmlValueError(ParamdefError):
    """A value was present but failed its typed parse."""

    code = ERR_XML_VALUE

    def __init__(self, key: str, raw: str, cause: ValueError) -> None:
        super().__init__(f"invalid value for {key}: {raw!r} ({cause})")
        self.key = key
        self.raw = raw
        self.cause = cause

    def detail(self) -> dict[str, object]:
        return {"key": self.key, "raw": self.raw}


class FieldDefinitionError(ParamdefError):
    """A ``Field`` element's ``Def`` attribute failed to parse."""

    code = ERR_FIELD_DEF

    def __init__(self, index: int, def_text: str, cause: DefParseError) -> None:
        super().__init__(f"field {index}: {cause.message}")
        self.index = index
        self.def_text = def_text
        self.cause = cause

    def detail(self) -> dict[str, object]:
        out = self.cause.detail()
        out["field_index"] = self.index
        out["cause"] = self.cause.code
        return out
