"""Subcommand modules for paramdex.

Provides register_commands() which uses deferred imports to keep
``paramdex --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from paramdex.commands.check import check
    from paramdex.commands.list_cmd import list_cmd
    from paramdex.commands.parse import parse
    from paramdex.commands.show import show

    cli.add_command(check)
    cli.add_command(list_cmd)
    cli.add_command(parse)
    cli.add_command(show)
