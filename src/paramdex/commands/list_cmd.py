"""Command: load a corpus into a registry and list its param types."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from paramdex.commands._base import PdxCommand

if TYPE_CHECKING:
    from paramdex.commands._context import AppContext


@click.command(
    "list",
    cls=PdxCommand,
    examples="""\
  paramdex list Paramdex/ER/Defs
  paramdex -q list Paramdex/ER/Defs""",
)
@click.argument("root", default=".", type=click.Path(file_okay=False))
@click.option("--pattern", default=None, help="Glob for PARAMDEF files (default from config).")
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Parse in N threads.")
@click.pass_obj
def list_cmd(app: AppContext, root: str, pattern: str | None, workers: int | None) -> None:
    """List the param types defined under ROOT."""
    from paramdex.services.check import CheckService

    app.emit(CheckService(app.settings).load(root, pattern=pattern, workers=workers))
