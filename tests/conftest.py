"""Shared pytest fixtures and test helpers for paramdex tests."""

from __future__ import annotations

import shutil
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from paramdex.config.settings import PdxSettings
from paramdex.services.telemetry import disable_telemetry

FIXTURES = Path(__file__).parent / "fixtures"

PARAMDEF_TEMPLATE = """\
<?xml version="1.0" encoding="utf-8"?>
<PARAMDEF XmlVersion="2">
  <ParamType>{param_type}</ParamType>
  <DataVersion>1</DataVersion>
  <BigEndian>false</BigEndian>
  <Unicode>true</Unicode>
  <FormatVersion>203</FormatVersion>
  <Fields>
{fields}
  </Fields>
</PARAMDEF>
"""


def make_paramdef(param_type: str = "TEST_PARAM_ST", *defs: str) -> str:
    """Build a minimal PARAMDEF document with one ``Field`` per def line."""
    fields = "\n".join(f'    <Field Def="{d}" />' for d in defs)
    return PARAMDEF_TEMPLATE.format(param_type=param_type, fields=fields)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep host config and leftover telemetry state out of every test."""
    monkeypatch.delenv("PARAMDEX_CONFIG", raising=False)
    monkeypatch.delenv("PARAMDEX_CORPUS__WORKERS", raising=False)
    monkeypatch.delenv("PARAMDEX_CORPUS__PATTERN", raising=False)
    disable_telemetry()
    yield
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def make_doc() -> Callable[..., str]:
    """Expose :func:`make_paramdef` to test modules."""
    return make_paramdef


@pytest.fixture
def weapon_xml() -> str:
    return (FIXTURES / "Defs" / "EquipParamWeapon.xml").read_text(encoding="utf-8")


@pytest.fixture
def settings(tmp_path: Path) -> PdxSettings:
    """Settings rooted at an empty temp directory with code defaults."""
    return PdxSettings.from_cli(project_root=tmp_path)


@pytest.fixture
def corpus(tmp_path: Path) -> Path:
    """Temp corpus with two good documents and two broken ones.

    Layout::

        Defs/EquipParamWeapon.xml
        Defs/SpEffectParam.xml
        broken/BadField.xml
        broken/NotWellFormed.xml
    """
    for sub in ("Defs", "broken"):
        shutil.copytree(FIXTURES / sub, tmp_path / sub)
    return tmp_path


@pytest.fixture
def clean_corpus(tmp_path: Path) -> Path:
    """Temp corpus holding only well-formed documents."""
    shutil.copytree(FIXTURES / "Defs", tmp_path / "Defs")
    return tmp_path
