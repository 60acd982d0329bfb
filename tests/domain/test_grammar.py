"""Tests for the definition line tokenizer."""

from __future__ import annotations

import pytest

from paramdex.domain.errors import GrammarSyntaxError, Span
from paramdex.domain.grammar import SIMPLE_TYPES, get_parser, tokenize


class TestShapes:
    @pytest.mark.parametrize("type_name", SIMPLE_TYPES)
    def test_simple_types(self, type_name: str) -> None:
        assert tokenize(f"{type_name} value").data == "def_simple"

    @pytest.mark.parametrize(
        "line",
        ["dummy8 pad", "dummy8 pad[4]", "dummy8 pad:3", "dummy8 pad[16] = -1"],
    )
    def test_dummy(self, line: str) -> None:
        assert tokenize(line).data == "def_dummy"

    @pytest.mark.parametrize("line", ["fixstr name[16]", "fixstrW name[16]"])
    def test_fixstr(self, line: str) -> None:
        assert tokenize(line).data == "def_fixstr"

    def test_unknown_leading_word(self) -> None:
        tree = tokenize("u64 wide")
        assert tree.data == "def_unrecog"
        assert str(tree.children[0]) == "u64"

    def test_type_prefix_is_not_split(self) -> None:
        """``u32x`` is a word of its own, not ``u32`` followed by ``x``."""
        tree = tokenize("u32x foo")
        assert tree.data == "def_unrecog"
        assert str(tree.children[0]) == "u32x"

    def test_angle32_is_one_keyword(self) -> None:
        tree = tokenize("angle32 heading")
        assert str(tree.children[0]) == "angle32"

    def test_whitespace_around_suffixes(self) -> None:
        tree = tokenize("  u32   flags:3   =   0  ")
        assert tree.data == "def_simple"
        assert [c.data for c in tree.children[2:]] == ["suffix_bitsize", "suffix_default"]


class TestSyntaxErrors:
    def test_empty_line(self) -> None:
        with pytest.raises(GrammarSyntaxError) as exc_info:
            tokenize("")
        assert exc_info.value.span == Span(0, 0)

    def test_fixstr_requires_length(self) -> None:
        line = "fixstr name"
        with pytest.raises(GrammarSyntaxError) as exc_info:
            tokenize(line)
        err = exc_info.value
        assert err.span == Span(len(line), len(line))
        assert err.line == line
        assert "failed to parse def line" in err.message

    @pytest.mark.parametrize("line", ["fixstr name[16]:3", "fixstrW name[16] = 0"])
    def test_fixstr_rejects_suffixes(self, line: str) -> None:
        with pytest.raises(GrammarSyntaxError):
            tokenize(line)

    def test_trailing_garbage_span(self) -> None:
        with pytest.raises(GrammarSyntaxError) as exc_info:
            tokenize("u32 foo:3x")
        span = exc_info.value.span
        assert span is not None
        assert span.start == 9

    def test_type_glued_to_suffix(self) -> None:
        with pytest.raises(GrammarSyntaxError):
            tokenize("u32:3")

    def test_diagnostic_names_the_exception(self) -> None:
        with pytest.raises(GrammarSyntaxError) as exc_info:
            tokenize("dummy8")
        assert exc_info.value.diagnostic.startswith("Unexpected")
        assert exc_info.value.detail()["diagnostic"] == exc_info.value.diagnostic


class TestParserCache:
    def test_parser_is_shared(self) -> None:
        assert get_parser() is get_parser()
