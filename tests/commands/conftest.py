"""Fixtures for command tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from the temp directory so config discovery stays local."""
    monkeypatch.chdir(tmp_path)
