"""Shared pytest fixtures for plugkit-core tests."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest
import structlog

from plugkit_core.compiler.path_resolver import ResolutionRoots


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Send structlog output to stdout so capsys can capture it."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def clean_build_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's SRCDIR / ONLYDIR / NODE_ENV out of tests."""
    for name in ("SRCDIR", "ONLYDIR", "NODE_ENV"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def build_dir(tmp_path: Path) -> Path:
    """Return an empty build directory with a src/ subdirectory."""
    root = tmp_path / "build"
    (root / "src").mkdir(parents=True)
    return root


@pytest.fixture
def roots(build_dir: Path) -> ResolutionRoots:
    """Return resolution roots for build_dir (override) and build_dir/src."""
    return ResolutionRoots.from_build_dir(build_dir)


@pytest.fixture
def sample_plugkit_yaml() -> dict[str, Any]:
    """Return a minimal valid plugkit.yaml configuration."""
    return {
        "name": "starter-kit",
        "version": "1.0.0",
        "entries": {
            "index": ["./index.js"],
        },
        "files": [
            "index.html",
            "manifest.json",
        ],
    }


@pytest.fixture
def sample_plugkit_yaml_sections() -> dict[str, Any]:
    """Return a plugkit.yaml with several sections and a module entry."""
    return {
        "name": "multi-section",
        "version": "2.0.0",
        "entries": {
            "index": ["./index.js", "./index.scss"],
            "other": ["./other.js"],
            "index-extra": ["polyfill", "./extra/index.js"],
        },
        "files": [
            "index.html",
            "other.html",
            "manifest.json",
        ],
        "externals": {"cockpit": "cockpit"},
    }
