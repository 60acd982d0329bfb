"""Command: parse one field definition line."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from paramdex.commands._base import PdxCommand

if TYPE_CHECKING:
    from paramdex.commands._context import AppContext


@click.command(
    cls=PdxCommand,
    examples="""\
  paramdex parse "u32 testingVar:3 = 0"
  paramdex parse "dummy8 reserve_last[32]"
  paramdex --json parse "fixstrW texName_00[16]\"""",
)
@click.argument("line")
@click.pass_obj
def parse(app: AppContext, line: str) -> None:
    """Parse LINE as a field definition (TYPE NAME[:BITS][ = DEFAULT])."""
    from paramdex.services.inspect import InspectService

    app.emit(InspectService(app.settings).parse_line(line))
