"""Locate and read ``paramdex.toml``.

Lookup order: ``$PARAMDEX_CONFIG`` if set, otherwise the nearest
``paramdex.toml`` in the start directory or any of its parents.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import click

from paramdex.config.models import ParamdexConfig

CONFIG_FILENAME = "paramdex.toml"
CONFIG_ENV_VAR = "PARAMDEX_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start* (default: cwd), if any.

    A ``$PARAMDEX_CONFIG`` pointing at a missing file disables the walk-up
    rather than falling back to it.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML; syntax errors become a CLI-facing error."""
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc


def load_config(path: Path | None = None, cwd: Path | None = None) -> ParamdexConfig:
    """Validate the config sections found at *path* (or discovered from *cwd*).

    No file means an all-defaults configuration.
    """
    path = path or find_config(cwd)
    if path is None or not path.is_file():
        return ParamdexConfig()
    return ParamdexConfig.model_validate(read_toml(path))
