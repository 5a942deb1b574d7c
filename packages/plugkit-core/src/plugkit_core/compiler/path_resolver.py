"""Two-root path resolution for plugkit.

Mimics VPATH lookup in GNU make: a file is looked up in the build root
first and, failing that, in the source root. Out-of-tree builds can
therefore override any source file by placing one at the same relative
location under the build root.

Paths are joined with the OS separator rather than normalized, since the
bundler wants entry paths that keep their explicit ``./`` prefix.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ResolutionRoots:
    """Roots searched by resolve(), in lookup order.

    Attributes:
        override_root: Checked first (the build directory).
        canonical_root: Fallback, returned without an existence check
            (the source directory).
    """

    override_root: Path
    canonical_root: Path

    @classmethod
    def from_build_dir(cls, build_dir: Path | str) -> ResolutionRoots:
        """Standard layout: sources live in ``<build_dir>/src``."""
        build_dir = Path(build_dir)
        return cls(override_root=build_dir, canonical_root=build_dir / "src")


def resolve(roots: ResolutionRoots, *segments: str) -> str:
    """Resolve a relative file name against the resolution roots.

    Args:
        roots: Override and canonical roots.
        *segments: Relative path segments, joined with the OS separator.

    Returns:
        The override-root path if something exists there, otherwise the
        canonical-root path. A missing file is not reported here; the
        bundler fails when it tries to read it.

    Example:
        >>> roots = ResolutionRoots(Path("/build"), Path("/build/src"))
        >>> resolve(roots, "src", "index.html")  # /build/src/index.html absent
        '/build/src/src/index.html'
    """
    relative = os.sep.join(segments)

    candidate = f"{roots.override_root}{os.sep}{relative}"
    if os.path.exists(candidate):
        logger.debug("path_resolved", path=relative, root="override")
        return candidate

    return f"{roots.canonical_root}{os.sep}{relative}"
