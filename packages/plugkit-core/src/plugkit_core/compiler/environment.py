"""Build environment for plugkit.

The environment is read once per compilation from the same variables
the surrounding Makefile sets:
- SRCDIR: build directory (sources are expected in SRCDIR/src)
- ONLYDIR: section filter, a unit name / file path prefix
- NODE_ENV: "production" selects production mode
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from plugkit_core.compiler.path_resolver import ResolutionRoots
from plugkit_core.schemas.pipeline import Mode

SRCDIR_ENV_VAR = "SRCDIR"
SECTION_ENV_VAR = "ONLYDIR"
MODE_ENV_VAR = "NODE_ENV"

PRODUCTION_MARKER = "production"


def mode_from_env(value: str | None) -> Mode:
    """Map a NODE_ENV value to a Mode. Anything but "production" is development."""
    return Mode.PRODUCTION if value == PRODUCTION_MARKER else Mode.DEVELOPMENT


class BuildEnvironment(BaseModel):
    """Immutable per-compilation environment.

    Attributes:
        build_dir: Build directory; also the override resolution root.
        section: Optional unit name / file path prefix.
        mode: Build mode.

    Example:
        >>> env = BuildEnvironment.from_env(Path("."))
        >>> env.roots.canonical_root
        PosixPath('src')
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    build_dir: Path = Field(..., description="Build directory")
    section: str | None = Field(default=None, description="Section filter")
    mode: Mode = Field(default=Mode.DEVELOPMENT, description="Build mode")

    @classmethod
    def from_env(
        cls,
        default_build_dir: Path | str,
        environ: Mapping[str, str] | None = None,
    ) -> BuildEnvironment:
        """Read the environment.

        Args:
            default_build_dir: Used when SRCDIR is unset. Made absolute, so
                resolved entry points never read as module requests.
            environ: Variables to read. Defaults to os.environ.
        """
        environ = os.environ if environ is None else environ
        srcdir = environ.get(SRCDIR_ENV_VAR)
        return cls(
            build_dir=Path(srcdir) if srcdir else Path(default_build_dir).resolve(),
            section=environ.get(SECTION_ENV_VAR) or None,
            mode=mode_from_env(environ.get(MODE_ENV_VAR)),
        )

    @property
    def src_dir(self) -> Path:
        return self.build_dir / "src"

    @property
    def dist_dir(self) -> Path:
        return self.build_dir / "dist"

    @property
    def lib_dir(self) -> Path:
        return self.src_dir / "lib"

    @property
    def node_dir(self) -> str:
        """node_modules relative to the current directory, as the bundler expects."""
        return os.path.relpath(self.build_dir.resolve() / "node_modules", Path.cwd())

    @property
    def roots(self) -> ResolutionRoots:
        return ResolutionRoots(override_root=self.build_dir, canonical_root=self.src_dir)
