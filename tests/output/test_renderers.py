"""Tests for operation-specific Rich renderers."""

from __future__ import annotations

from paramdex.output.renderers import render_quiet, render_result
from paramdex.services.result import ServiceError, ServiceResult

# ── Helpers ───────────────────────────────────────────────────────────


def _ok(op: str, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str, code: str, message: str, **detail: object) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=dict(detail)),
    )


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        output = render_result(_err("show", "NOT_FOUND", "No such file: x.xml"))
        assert "ERROR" in output
        assert "show" in output
        assert "No such file: x.xml" in output
        assert "NOT_FOUND" not in output

    def test_caret_under_span(self) -> None:
        result = _err(
            "parse_def",
            "ERR_UNRECOGNIZED_TYPE",
            "unrecognized field type 'u64'",
            line="u64 wide",
            span={"start": 0, "end": 3},
        )
        lines = render_result(result).splitlines()
        assert lines[1] == "    u64 wide"
        assert lines[2] == "    ^^^"

    def test_caret_uses_character_columns(self) -> None:
        line = "f32 ｇx:3"
        span = {"start": 8, "end": 10}
        result = _err("parse_def", "ERR_BIT_SIZE_UNSUPPORTED", "bad", line=line, span=span)
        assert render_result(result).splitlines()[2] == "    " + " " * 6 + "^^"

    def test_empty_span_gets_one_caret(self) -> None:
        span = {"start": 8, "end": 8}
        result = _err("parse_def", "ERR_DEF_SYNTAX", "bad", line="fixstr x", span=span)
        assert render_result(result).splitlines()[2] == "    " + " " * 8 + "^"

    def test_verbose_shows_detail(self) -> None:
        result = _err("check", "NOT_FOUND", "Bad", root="/nowhere")
        output = render_result(result, verbose=True)
        assert "code: NOT_FOUND" in output
        assert "detail" in output
        assert "root: /nowhere" in output

    def test_no_error_object(self) -> None:
        output = render_result(ServiceResult(ok=False, op="test"))
        assert "Unknown error" in output


# ── Definition renderers ─────────────────────────────────────────────


class TestParseDefRenderer:
    def test_unsigned(self) -> None:
        result = _ok("parse_def", name="flags", kind="u32", bit_size=3, default=0.0)
        output = render_result(result)
        assert "OK" in output
        assert "name: flags" in output
        assert "kind: u32" in output
        assert "size: 3 bits" in output
        assert "default: 0" in output

    def test_fixstr(self) -> None:
        result = _ok("parse_def", name="s", kind="fixstrW", length=16, length_unit="chars")
        output = render_result(result)
        assert "size: 16 chars" in output
        assert "default" not in output


class TestShowRenderer:
    def test_header_and_table(self) -> None:
        result = _ok(
            "show",
            path="Defs/A.xml",
            param_type="A_ST",
            data_version=1,
            endian="little",
            string_format="shift_jis",
            format_version=203,
            field_count=1,
            fields=[
                {
                    "index": 0,
                    "name": "weight",
                    "kind": "f32",
                    "default": 1.5,
                    "display_name": "Weight",
                    "minimum": 0.0,
                    "description": "How heavy",
                }
            ],
        )
        output = render_result(result)
        assert "param_type: A_ST" in output
        assert "endian: little" in output
        assert "weight" in output
        assert "1.5" in output
        assert "Weight" in output
        assert "How heavy" not in output
        assert "How heavy" in render_result(result, verbose=True)

    def test_no_fields(self) -> None:
        output = render_result(_ok("show", param_type="A_ST", field_count=0, fields=[]))
        assert "field_count: 0" in output


# ── Corpus renderers ─────────────────────────────────────────────────


class TestCheckRenderer:
    def test_clean(self) -> None:
        output = render_result(_ok("check", documents=3, fields=40, issues=[]))
        assert output == "OK  3 documents, 40 fields, no issues found."

    def test_grouped_by_path(self) -> None:
        issues = [
            {
                "path": "a.xml",
                "code": "ERR_FIELD_DEF",
                "message": "field 2: bad",
                "line": "s8 x:1",
            },
            {"path": "b.xml", "code": "ERR_XML_SYNTAX", "message": "XML parsing failed"},
        ]
        output = render_result(
            _ok("check", documents=5, issues=issues, by_code={"ERR_FIELD_DEF": 1})
        )
        assert "a.xml" in output
        assert "ERR_FIELD_DEF: field 2: bad" in output
        assert "    s8 x:1" in output
        assert output.endswith("2 of 5 documents failed")

    def test_verbose_counts_by_code(self) -> None:
        issues = [{"path": "a.xml", "code": "ERR_XML_SYNTAX", "message": "m"}]
        output = render_result(
            _ok("check", documents=1, issues=issues, by_code={"ERR_XML_SYNTAX": 1}),
            verbose=True,
        )
        assert "ERR_XML_SYNTAX: 1" in output


class TestLoadRenderer:
    def test_table(self) -> None:
        items = [{"param_type": "A_ST", "field_count": 4, "data_version": 1, "format_version": 2}]
        output = render_result(_ok("load", items=items, count=1))
        assert "A_ST" in output
        assert output.endswith("1 param types")


class TestGenericRenderer:
    def test_unknown_op(self) -> None:
        output = render_result(_ok("custom", answer=42, nested={"a": 1}))
        assert "answer: 42" in output
        assert 'nested: {"a":1}' in output


class TestTelemetryRendering:
    def test_span_tree(self) -> None:
        result = ServiceResult(
            ok=True,
            op="custom",
            meta={
                "telemetry": {
                    "name": "CheckService.check",
                    "duration_ms": 12.5,
                    "children": [{"name": "parse", "duration_ms": 150.0}],
                    "annotations": {"documents": 4},
                }
            },
        )
        output = render_result(result, verbose=True)
        assert "CheckService.check" in output
        assert "(documents=4)" in output
        assert "parse" in output
        assert "150.00ms" in output


# ── Quiet mode ───────────────────────────────────────────────────────


class TestQuiet:
    def test_error(self) -> None:
        assert render_quiet(_err("show", "NOT_FOUND", "gone")) == "ERROR: show: gone"

    def test_check(self) -> None:
        issues = [{"path": "a.xml", "code": "ERR_XML_SYNTAX"}]
        assert render_quiet(_ok("check", issues=issues)) == "a.xml: ERR_XML_SYNTAX"

    def test_clean_check_is_silent(self) -> None:
        assert render_quiet(_ok("check", issues=[])) == ""

    def test_load(self) -> None:
        items = [{"param_type": "A_ST"}, {"param_type": "B_ST"}]
        assert render_quiet(_ok("load", items=items)) == "A_ST\nB_ST"

    def test_other(self) -> None:
        assert render_quiet(_ok("parse_def", name="x")) == "OK: parse_def"
