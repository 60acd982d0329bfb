"""Command: batch-parse a Paramdex corpus and report failures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from paramdex.commands._base import PdxCommand

if TYPE_CHECKING:
    from paramdex.commands._context import AppContext


@click.command(
    cls=PdxCommand,
    examples="""\
  paramdex check
  paramdex check Paramdex/ER/Defs
  paramdex check Paramdex --pattern "**/Defs/*.xml" --workers 8
  paramdex check Paramdex --fail-fast
  paramdex --json check Paramdex""",
)
@click.argument("root", default=".", type=click.Path(file_okay=False))
@click.option("--pattern", default=None, help="Glob for PARAMDEF files (default from config).")
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Parse in N threads.")
@click.option("--fail-fast", is_flag=True, help="Stop at the first failing file.")
@click.pass_obj
def check(
    app: AppContext,
    root: str,
    pattern: str | None,
    workers: int | None,
    fail_fast: bool,
) -> None:
    """Parse every PARAMDEF under ROOT; exit 1 if any fails."""
    from paramdex.services.check import CheckService

    result = CheckService(app.settings).check(
        root, pattern=pattern, workers=workers, fail_fast=fail_fast or None
    )
    app.emit(result, fail=not result.data.get("healthy", True))
