"""Command: show one PARAMDEF document."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from paramdex.commands._base import PdxCommand

if TYPE_CHECKING:
    from paramdex.commands._context import AppContext


@click.command(
    cls=PdxCommand,
    examples="""\
  paramdex show Paramdex/ER/Defs/EquipParamWeapon.xml
  paramdex -v show Defs/SpEffectParam.xml
  paramdex --json show Defs/SpEffectParam.xml""",
)
@click.argument("path", type=click.Path(dir_okay=False))
@click.pass_obj
def show(app: AppContext, path: str) -> None:
    """Deserialize PATH and print its header and fields."""
    from paramdex.services.inspect import InspectService

    app.emit(InspectService(app.settings).describe(path))
