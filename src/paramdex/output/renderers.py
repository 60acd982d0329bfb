"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  Renderers
are dispatched by ``result.op`` in :func:`render_result`; unknown ops fall
through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from paramdex.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from rich.console import Console

    from paramdex.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False, width: int | None = None) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal, which is
    the case inside Click's CliRunner and piped output.
    """
    console = create_console(width=width)

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    if result.op == "check":
        return "\n".join(
            f"{issue['path']}: {issue['code']}" for issue in result.data.get("issues", [])
        )
    if result.op == "load":
        return "\n".join(item["param_type"] for item in result.data.get("items", []))
    if result.op == "show":
        return "\n".join(f["name"] for f in result.data.get("fields", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="pdx.ok")
    op = Text(f"  {result.op}", style="pdx.op")
    console.print(label, op, sep="", end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="pdx.key")
    if key in ("path", "root"):
        v = Text(str(value), style="pdx.path")
    elif key in ("name", "param_type"):
        v = Text(str(value), style="pdx.name")
    elif key == "kind":
        v = Text(str(value), style=style_for_kind(str(value)))
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(console: Console, span_data: dict[str, Any], indent: int = 4) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {escape(str(name))}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _size_text(row: dict[str, Any]) -> str:
    """Describe the size payload of a field row (bits, bytes or chars)."""
    if row.get("bit_size") is not None:
        return f"{row['bit_size']} bits"
    length = row.get("length")
    if length is None:
        return ""
    return f"{length} {row.get('length_unit') or ''}".strip()


def _default_text(value: Any) -> str:
    return "" if value is None else f"{value:g}"


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="pdx.error")
    op = Text(f"  {result.op}", style="pdx.op")
    console.print(label, op, Text(": "), Text(msg), sep="")

    if err is None:
        return
    line = err.detail.get("line")
    span = err.detail.get("span")
    if isinstance(line, str):
        console.print(Text(f"    {line}"))
        if isinstance(span, dict):
            console.print(Text("    " + _caret(line, span), style="pdx.error"))
    if verbose and err.detail:
        console.print(Text(f"  code: {err.code}", style="dim"))
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


def _caret(line: str, span: dict[str, int]) -> str:
    """Underline a byte span of *line* with carets, in character columns."""
    raw = line.encode("utf-8")
    start = len(raw[: span.get("start", 0)].decode("utf-8", errors="ignore"))
    end = len(raw[: span.get("end", 0)].decode("utf-8", errors="ignore"))
    return " " * start + "^" * max(1, end - start)


# ── Definition renderers ──────────────────────────────────────────────


def _render_parse_def(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a single parsed definition line."""
    _status_line(console, result)
    d = result.data
    for key in ("name", "kind"):
        _field(console, key, d.get(key))
    size = _size_text(d)
    if size:
        _field(console, "size", size)
    if d.get("default") is not None:
        _field(console, "default", _default_text(d["default"]))
    if verbose:
        _render_meta(console, result)


def _fields_table(rows: list[dict[str, Any]], *, verbose: bool = False) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="pdx.name")
    table.add_column("Type")
    table.add_column("Size", justify="right")
    table.add_column("Default", justify="right")
    table.add_column("Display Name")
    if verbose:
        table.add_column("Min", justify="right")
        table.add_column("Max", justify="right")
        table.add_column("Description", style="dim")

    for row in rows:
        kind = str(row.get("kind", ""))
        cells: list[Any] = [
            str(row.get("index", "")),
            str(row.get("name", "")),
            Text(kind, style=style_for_kind(kind)),
            _size_text(row),
            _default_text(row.get("default")),
            str(row.get("display_name") or ""),
        ]
        if verbose:
            cells.append(_default_text(row.get("minimum")))
            cells.append(_default_text(row.get("maximum")))
            cells.append(str(row.get("description") or ""))
        table.add_row(*cells)
    return table


def _render_show(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a deserialized PARAMDEF: header fields then a field table."""
    _status_line(console, result)
    d = result.data
    for key in (
        "path",
        "param_type",
        "data_version",
        "endian",
        "string_format",
        "format_version",
        "field_count",
    ):
        if key in d:
            _field(console, key, d[key])
    rows = d.get("fields", [])
    if rows:
        console.print()
        console.print(_fields_table(rows, verbose=verbose))
    if verbose:
        _render_meta(console, result)


# ── Corpus renderers ──────────────────────────────────────────────────


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render check results with issues grouped by file."""
    d = result.data
    issues = d.get("issues", [])
    documents = d.get("documents", 0)

    if not issues:
        console.print(
            f"[pdx.ok]OK[/pdx.ok]  {documents} documents, {d.get('fields', 0)} fields, "
            "no issues found."
        )
        if verbose:
            _render_meta(console, result)
        return

    by_path: dict[str, list[dict[str, Any]]] = {}
    for issue in issues:
        by_path.setdefault(str(issue.get("path", "?")), []).append(issue)

    for path, path_issues in by_path.items():
        console.print(Text(path, style="bold"))
        for issue in path_issues:
            code = Text(str(issue.get("code", "")), style="pdx.code")
            console.print(Text("  "), code, Text(f": {issue.get('message', '')}"), sep="")
            if issue.get("line"):
                console.print(Text(f"    {issue['line']}"))

    console.print()
    console.print(f"{len(issues)} of {documents} documents failed")
    by_code = d.get("by_code") or {}
    if verbose and by_code:
        for code, n in by_code.items():
            console.print(f"  {code}: {n}")
        _render_meta(console, result)


def _render_load(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the loaded registry as a table of param types."""
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Param Type", style="pdx.name", no_wrap=True)
    table.add_column("Fields", justify="right")
    table.add_column("Data Ver", justify="right")
    table.add_column("Format Ver", justify="right")
    for item in items:
        table.add_row(
            str(item.get("param_type", "")),
            str(item.get("field_count", "")),
            str(item.get("data_version", "")),
            str(item.get("format_version", "")),
        )
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} param types")
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "parse_def": _render_parse_def,
    "show": _render_show,
    "check": _render_check,
    "load": _render_load,
}
