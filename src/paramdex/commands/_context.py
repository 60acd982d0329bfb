"""Per-invocation state handed from the root group to every subcommand.

The root group builds one :class:`AppContext` and stores it as
``ctx.obj``; commands receive it with ``@click.pass_obj`` and hand their
:class:`ServiceResult` to :meth:`AppContext.emit`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from paramdex.config.logging import configure_logging
from paramdex.output.formatters import OutputSettings, format_result
from paramdex.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from paramdex.config.settings import PdxSettings
    from paramdex.services.result import ServiceResult


class AppContext:
    """Settings plus the stdout/stderr and exit-code policy for results."""

    def __init__(self, settings: PdxSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            width=self.settings.output.width,
        )

    def emit(self, result: ServiceResult, *, fail: bool | None = None) -> None:
        """Print *result* and exit non-zero where the command failed.

        A failed result goes to stderr and exits 1.  A successful one goes
        to stdout with its warnings on stderr (JSON already carries them);
        *fail* still exits 1 afterwards, as ``check`` does when it found
        issues.
        """
        options = self.output_settings
        text = format_result(result, settings=options)

        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        if text:
            click.echo(text)
        if not options.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
        if fail:
            raise SystemExit(1)
