"""Shared test fixtures for plugkit-cli tests.

Provides CliRunner fixtures and temporary directory helpers
for testing CLI commands.
"""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

from click.testing import CliRunner
import pytest
import structlog

PLUGKIT_YAML_FILENAME = "plugkit.yaml"


@pytest.fixture(autouse=True)
def clean_build_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate tests from SRCDIR / ONLYDIR / NODE_ENV and global logging setup."""
    for name in ("SRCDIR", "ONLYDIR", "NODE_ENV"):
        monkeypatch.delenv(name, raising=False)
    yield
    structlog.reset_defaults()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner with an isolated filesystem.

    Yields:
        CliRunner instance with isolated filesystem.
    """
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def valid_plugkit_yaml(fixtures_dir: Path, tmp_path: Path) -> Path:
    """Return a valid plugkit.yaml copied into tmp_path.

    The build directory defaults to the file's directory, so the copy
    keeps resolved paths inside tmp_path.
    """
    destination = tmp_path / PLUGKIT_YAML_FILENAME
    destination.write_text((fixtures_dir / "valid_plugkit.yaml").read_text())
    return destination


@pytest.fixture
def invalid_plugkit_yaml(fixtures_dir: Path) -> Path:
    return fixtures_dir / "invalid_plugkit.yaml"
