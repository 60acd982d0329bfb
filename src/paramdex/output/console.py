"""Rich Console factory and theme for paramdex output.

Consoles render to a StringIO buffer so renderers keep a
``render_result() -> str`` contract.  In non-TTY environments (tests,
pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

PDX_THEME = Theme(
    {
        "pdx.ok": "bold green",
        "pdx.error": "bold red",
        "pdx.warning": "bold yellow",
        "pdx.op": "bold cyan",
        "pdx.key": "dim",
        "pdx.path": "dim",
        "pdx.name": "bold",
        "pdx.code": "magenta",
        "pdx.kind.int": "green",
        "pdx.kind.float": "blue",
        "pdx.kind.string": "yellow",
        "pdx.kind.pad": "dim",
    }
)

_KIND_STYLES: dict[str, str] = {
    "s8": "pdx.kind.int",
    "u8": "pdx.kind.int",
    "s16": "pdx.kind.int",
    "u16": "pdx.kind.int",
    "s32": "pdx.kind.int",
    "u32": "pdx.kind.int",
    "b32": "pdx.kind.int",
    "f32": "pdx.kind.float",
    "a32": "pdx.kind.float",
    "f64": "pdx.kind.float",
    "fixstr": "pdx.kind.string",
    "fixstrW": "pdx.kind.string",
    "dummy8": "pdx.kind.pad",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=PDX_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Return the Rich style name for a field kind."""
    return _KIND_STYLES.get(kind, "")
