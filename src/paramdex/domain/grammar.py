"""Tokenizer for field definition lines.

The lark grammar below turns one line such as ``u32 flags:3 = 0`` into a
parse tree with one of four top-level shapes:

- ``def_fixstr``: ``fixstr name[16]`` / ``fixstrW name[16]``
- ``def_dummy``: ``dummy8 name``, ``dummy8 name[4]``, ``dummy8 name:3``
- ``def_simple``: ``<numeric type> name[:bits][ = default]``
- ``def_unrecog``: any other leading word, kept so the interpreter can
  name the offending token

Type keywords only match when the next character cannot continue a name,
so ``u32x`` falls through to ``def_unrecog`` instead of splitting.  The
catch-all keyword terminal has the lowest priority, which makes the shapes
an ordered choice.
"""

from __future__ import annotations

import functools

from lark import Lark, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput

from paramdex.domain.errors import GrammarSyntaxError, Span

SIMPLE_TYPES: tuple[str, ...] = (
    "s8",
    "u8",
    "s16",
    "u16",
    "s32",
    "u32",
    "f32",
    "f64",
    "a32",
    "angle32",
    "b32",
)

# Characters that may not appear in a field name.
_NAME_STOP = r"\s:\[="
_SIMPLE_ALT = "|".join(sorted(SIMPLE_TYPES, key=len, reverse=True))

DEF_GRAMMAR = rf"""
start: def_fixstr
     | def_dummy
     | def_simple
     | def_unrecog

def_simple: SIMPLE_TYPE NAME suffix_bitsize? suffix_default?
def_dummy: DUMMY_TYPE NAME (suffix_length | suffix_bitsize)? suffix_default?
def_fixstr: FIXSTR_TYPE NAME suffix_length
def_unrecog: UNKNOWN_TYPE REST?

suffix_bitsize: ":" UINT
suffix_length: "[" UINT "]"
suffix_default: "=" FLOAT

SIMPLE_TYPE.3: /(?:{_SIMPLE_ALT})(?![^{_NAME_STOP}])/
DUMMY_TYPE.3: /dummy8(?![^{_NAME_STOP}])/
FIXSTR_TYPE.3: /fixstrW?(?![^{_NAME_STOP}])/
UNKNOWN_TYPE.1: /\S+/

NAME: /[^{_NAME_STOP}]+/
UINT: /[0-9]+/
FLOAT: /[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?/
REST: /.+/

%import common.WS
%ignore WS
"""


@functools.cache
def get_parser() -> Lark:
    """Build the LALR parser once and share it.

    LALR parsing keeps no state between calls, so the instance is safe to
    reuse from several threads.
    """
    return Lark(
        DEF_GRAMMAR,
        parser="lalr",
        lexer="contextual",
        propagate_positions=True,
    )


def tokenize(line: str) -> Tree:
    """Parse *line* into its top-level shape.

    Returns the ``def_*`` subtree.  Raises :class:`GrammarSyntaxError`
    carrying lark's diagnostic and the byte span where matching stopped.
    """
    try:
        tree = get_parser().parse(line)
    except UnexpectedInput as exc:
        raise GrammarSyntaxError(
            _diagnostic(exc, line),
            line=line,
            span=_error_span(exc, line),
        ) from exc
    return tree.children[0]


def _error_span(exc: UnexpectedInput, line: str) -> Span:
    if isinstance(exc, UnexpectedEOF):
        return Span.from_chars(line, len(line), len(line))
    pos = getattr(exc, "pos_in_stream", None)
    if pos is None or pos < 0:
        return Span.from_chars(line, len(line), len(line))
    if isinstance(exc, UnexpectedCharacters):
        return Span.from_chars(line, pos, pos + 1)
    token = getattr(exc, "token", None)
    if token is not None and token.type == "$END":
        return Span.from_chars(line, len(line), len(line))
    end = getattr(token, "end_pos", None)
    if end is None or end <= pos:
        end = pos + 1
    return Span.from_chars(line, pos, end)


def _diagnostic(exc: UnexpectedInput, line: str) -> str:
    try:
        context = exc.get_context(line).rstrip("\n")
    except (AttributeError, IndexError, TypeError):
        context = ""
    expected = sorted(
        str(name) for name in getattr(exc, "expected", None) or getattr(exc, "allowed", None) or ()
    )
    parts = [type(exc).__name__]
    if expected:
        parts.append("expected one of: " + ", ".join(expected))
    if context:
        parts.append(context)
    return "\n".join(parts)
