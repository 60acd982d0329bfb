"""PdxSettings: one frozen object for flags, environment and paramdex.toml.

Sources, strongest first:

1. keyword arguments (the CLI flags, via :meth:`PdxSettings.from_cli`)
2. ``PARAMDEX_*`` environment variables, ``__`` for nesting
   (``PARAMDEX_CORPUS__WORKERS=8``)
3. the discovered ``paramdex.toml``
4. defaults from :mod:`paramdex.config.models`
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from paramdex.config.discovery import find_config, read_toml
from paramdex.config.models import CorpusConfig, OutputConfig

# The TOML file for the settings object currently being built.
_toml_in_use: ContextVar[Path | None] = ContextVar("paramdex_toml_in_use", default=None)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by the tables of one TOML file."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None) -> None:
        super().__init__(settings_cls)
        self._tables = read_toml(path) if path is not None and path.is_file() else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._tables.get(field_name), field_name, field_name in self._tables

    def __call__(self) -> dict[str, Any]:
        return dict(self._tables)


class PdxSettings(BaseSettings):
    """Resolved settings shared by the CLI, services and renderers.

    Attributes:
        project_root: Base for relative paths; the config file's directory
            when one was found, else the working directory.
        config_path: The TOML file that was read, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "PARAMDEX_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    corpus: CorpusConfig = Field(default_factory=CorpusConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, _toml_in_use.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **flags: Any,
    ) -> PdxSettings:
        """Build settings for one CLI invocation.

        An explicit *config_path* must exist; otherwise the config is
        discovered by walking up from *project_root* (or the cwd).
        """
        if config_path:
            toml_path: Path | None = Path(config_path)
            if not toml_path.is_file():
                msg = f"Config file not found: {config_path}"
                raise click.ClickException(msg)
        else:
            toml_path = find_config(project_root)

        if project_root is None:
            project_root = toml_path.parent if toml_path is not None else Path.cwd()

        token = _toml_in_use.set(toml_path)
        try:
            return cls(project_root=project_root, config_path=toml_path, **flags)
        finally:
            _toml_in_use.reset(token)

    def resolve(self, path: str | Path) -> Path:
        """Anchor a relative *path* at :attr:`project_root`."""
        return self.project_root / path
