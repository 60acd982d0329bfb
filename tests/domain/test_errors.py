"""Tests for error spans and structured detail."""

from __future__ import annotations

from paramdex.domain.errors import (
    ERR_DEF_SYNTAX,
    ERR_FIELD_DEF,
    FieldDefinitionError,
    GrammarSyntaxError,
    ParamdexError,
    Span,
    XmlStructureError,
)


class TestSpan:
    def test_ascii(self) -> None:
        assert Span.from_chars("u32 foo", 4, 7) == Span(4, 7)

    def test_multibyte_offsets(self) -> None:
        line = "f32 ｇx:3"
        span = Span.from_chars(line, 6, 8)
        assert span == Span(8, 10)
        assert span.slice(line) == ":3"

    def test_clamped(self) -> None:
        assert Span.from_chars("abc", 5, 9) == Span(3, 3)

    def test_to_dict(self) -> None:
        assert Span(1, 2).to_dict() == {"start": 1, "end": 2}


class TestErrorDetail:
    def test_base_detail_is_empty(self) -> None:
        assert ParamdexError("x").detail() == {}

    def test_structure_detail(self) -> None:
        err = XmlStructureError("missing required field", "Fields")
        assert str(err) == "missing required field: Fields"
        assert err.detail() == {"key": "Fields"}

    def test_field_error_merges_cause(self) -> None:
        cause = GrammarSyntaxError("boom", line="fixstr x", span=Span(8, 8))
        err = FieldDefinitionError(2, "fixstr x", cause)
        assert err.code == ERR_FIELD_DEF
        assert err.message == "field 2: failed to parse def line: 'fixstr x'"
        detail = err.detail()
        assert detail["cause"] == ERR_DEF_SYNTAX
        assert detail["span"] == {"start": 8, "end": 8}
        assert detail["diagnostic"] == "boom"
