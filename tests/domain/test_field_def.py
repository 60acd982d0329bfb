"""Tests for field definition parsing: line to FieldDef."""

from __future__ import annotations

import pytest

from paramdex.domain.errors import (
    BitSizeUnsupportedError,
    DefParseError,
    GrammarSyntaxError,
    Span,
    SuffixRangeError,
    UnrecognizedFieldTypeError,
)
from paramdex.domain.field_def import SIMPLE_KINDS, parse_field_def
from paramdex.domain.types import (
    DummyType,
    FieldDef,
    FieldKind,
    FixStrType,
    PadBits,
    PadBytes,
    SimpleType,
    UnsignedType,
)


class TestSimpleTypes:
    @pytest.mark.parametrize(("keyword", "kind"), sorted(SIMPLE_KINDS.items()))
    def test_type_and_name(self, keyword: str, kind: FieldKind) -> None:
        field_def = parse_field_def(f"{keyword} testingVar")
        assert field_def.kind == kind
        assert field_def.name == "testingVar"
        assert field_def.default_value is None
        assert getattr(field_def.field_type, "bit_size", None) is None

    def test_angle32_alias(self) -> None:
        assert parse_field_def("angle32 heading").kind == FieldKind.A32

    def test_unsigned_bit_size(self) -> None:
        field_def = parse_field_def("u32 testingVar:3")
        assert field_def.field_type == UnsignedType(kind="u32", bit_size=3)

    def test_default(self) -> None:
        field_def = parse_field_def("u32 testingVar = -3.0")
        assert field_def.default_value == -3.0
        assert field_def.field_type == UnsignedType(kind="u32")

    def test_bit_size_and_default(self) -> None:
        field_def = parse_field_def("u32 testingVar:3 = 0")
        assert field_def.field_type == UnsignedType(kind="u32", bit_size=3)
        assert field_def.default_value == 0.0

    def test_default_without_spaces(self) -> None:
        assert parse_field_def("f32 scale=1.5").default_value == 1.5

    def test_default_exponent(self) -> None:
        assert parse_field_def("f64 big = 1e3").default_value == 1000.0

    def test_signed_is_simple(self) -> None:
        assert parse_field_def("s16 offset").field_type == SimpleType(kind="s16")

    def test_non_ascii_name(self) -> None:
        name = "ｇradFactor"
        field_def = parse_field_def(f"f32 {name}")
        assert field_def.name == name
        assert field_def.name.encode("utf-8") == name.encode("utf-8")

    def test_bit_size_max(self) -> None:
        field_def = parse_field_def("u8 flag:255")
        assert field_def.field_type == UnsignedType(kind="u8", bit_size=255)


class TestDummy:
    def test_pad_bytes(self) -> None:
        field_def = parse_field_def("dummy8 reserve_last[32]")
        assert field_def.field_type == DummyType(length=PadBytes(count=32))
        assert field_def.default_value is None

    def test_pad_bits(self) -> None:
        field_def = parse_field_def("dummy8 disableParamReserve1:7")
        assert field_def.field_type == DummyType(length=PadBits(count=7))

    def test_pad_bytes_with_default(self) -> None:
        field_def = parse_field_def("dummy8 pad_3[16] = -1")
        assert field_def.field_type == DummyType(length=PadBytes(count=16))
        assert field_def.default_value == -1.0

    def test_no_length_is_single_byte(self) -> None:
        field_def = parse_field_def("dummy8 pad")
        assert field_def.field_type == DummyType()
        assert field_def.field_type.length is None


class TestFixStr:
    def test_narrow(self) -> None:
        field_def = parse_field_def("fixstr texName_00[16]")
        assert field_def.field_type == FixStrType(kind="fixstr", length=16)
        assert not field_def.field_type.wide

    def test_wide(self) -> None:
        field_def = parse_field_def("fixstrW texName_00[16]")
        assert field_def.field_type == FixStrType(kind="fixstrW", length=16)
        assert field_def.field_type.wide

    @pytest.mark.parametrize(
        "line",
        ["fixstr texName_00[16]:3", "fixstr texName_00[16] = 0", "fixstrW texName_00:3"],
    )
    def test_rejects_bit_size_and_default(self, line: str) -> None:
        with pytest.raises(GrammarSyntaxError):
            parse_field_def(line)


class TestErrors:
    @pytest.mark.parametrize("keyword", ["s8", "s16", "s32", "f32", "f64", "a32", "b32"])
    def test_bit_size_unsupported(self, keyword: str) -> None:
        line = f"{keyword} testingVar:3"
        with pytest.raises(BitSizeUnsupportedError) as exc_info:
            parse_field_def(line)
        err = exc_info.value
        assert err.code == "ERR_BIT_SIZE_UNSUPPORTED"
        assert err.message == f"bit size unsupported for type {keyword}"
        assert err.span is not None
        assert err.span.slice(line) == ":3"

    def test_unrecognized_type(self) -> None:
        line = "u64 wide"
        with pytest.raises(UnrecognizedFieldTypeError) as exc_info:
            parse_field_def(line)
        err = exc_info.value
        assert err.token == "u64"
        assert err.span == Span(0, 3)
        assert err.detail()["token"] == "u64"

    def test_bit_size_overflow(self) -> None:
        line = "u32 flags:256"
        with pytest.raises(SuffixRangeError) as exc_info:
            parse_field_def(line)
        err = exc_info.value
        assert err.limit == 255
        assert err.span is not None
        assert err.span.slice(line) == "256"

    def test_pad_bits_overflow(self) -> None:
        with pytest.raises(SuffixRangeError):
            parse_field_def("dummy8 pad:1000")

    def test_length_overflow(self) -> None:
        with pytest.raises(SuffixRangeError):
            parse_field_def(f"fixstr name[{2**64}]")

    def test_all_errors_share_base(self) -> None:
        for line in ("s32 x:1", "u64 x", "u32 x:999", "fixstr x"):
            with pytest.raises(DefParseError):
                parse_field_def(line)

    def test_detail_carries_line_and_span(self) -> None:
        with pytest.raises(DefParseError) as exc_info:
            parse_field_def("s32 x:1")
        detail = exc_info.value.detail()
        assert detail["line"] == "s32 x:1"
        assert detail["span"] == {"start": 5, "end": 7}


class TestFieldDefParse:
    def test_classmethod_delegates(self) -> None:
        assert FieldDef.parse("u16 count") == parse_field_def("u16 count")

    def test_frozen(self) -> None:
        field_def = parse_field_def("u16 count")
        with pytest.raises(Exception):
            field_def.name = "other"  # type: ignore[misc]
