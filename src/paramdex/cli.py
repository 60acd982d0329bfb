"""paramdex entry point: global flags, settings, and subcommand registration."""

from __future__ import annotations

import click

from paramdex import __version__
from paramdex.commands import register_commands
from paramdex.commands._base import PdxGroup
from paramdex.commands._context import AppContext
from paramdex.config.settings import PdxSettings


@click.group(
    cls=PdxGroup,
    invoke_without_command=True,
    examples="""\
  paramdex parse "u32 testingVar:3 = 0"
  paramdex show Defs/EquipParamWeapon.xml
  paramdex check Paramdex/ER/Defs""",
)
@click.version_option(version=__version__, prog_name="paramdex")
@click.option("--json", "json_output", is_flag=True, help="Print the result as ServiceResult JSON.")
@click.option("-q", "--quiet", is_flag=True, help="One line per issue, param type or field.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logs, extra columns and span timings.")
@click.option("--log-json", is_flag=True, help="Emit stderr logs as JSON lines.")
@click.option("-c", "--config", "config_path", default=None, help="Use this paramdex.toml instead of discovery.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """paramdex: inspect and validate Paramdex PARAMDEF definitions."""
    ctx.ensure_object(dict)
    settings = PdxSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
