"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, paramdex.toml only contains
overrides.  An empty file (or no file) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CorpusConfig(BaseModel):
    """[corpus] section: how ``paramdex check`` discovers documents."""

    model_config = {"frozen": True}

    pattern: str = "**/*.xml"
    exclude: list[str] = Field(default_factory=list)
    workers: int = Field(default=1, ge=1)
    fail_fast: bool = False


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    width: int = Field(default=120, ge=40)


class ParamdexConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    corpus: CorpusConfig = Field(default_factory=CorpusConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
