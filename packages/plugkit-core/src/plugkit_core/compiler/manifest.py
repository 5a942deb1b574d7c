"""Static asset manifest for plugkit.

Static files are copied verbatim by the bundler's copy plugin. Each
declared file is looked up under the ``src`` sub-root of the resolution
roots and copied to the same relative location in the output.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

import structlog

from plugkit_core.compiler.path_resolver import resolve
from plugkit_core.compiler.unit_selector import in_section
from plugkit_core.schemas.assets import StaticAsset

if TYPE_CHECKING:
    from collections.abc import Iterable

    from plugkit_core.compiler.path_resolver import ResolutionRoots

logger = structlog.get_logger(__name__)

# Static files are always looked up below this sub-root
STATIC_SUBROOT = "src"


def build_manifest(
    files: Iterable[str],
    section: str | None,
    roots: ResolutionRoots,
) -> list[StaticAsset]:
    """Build the copy manifest for a section.

    Args:
        files: Declared static file paths, relative.
        section: Optional path prefix.
        roots: Resolution roots.

    Returns:
        StaticAssets in declaration order. Duplicates are kept; the copy
        plugin reports conflicting destinations.
    """
    manifest = [
        StaticAsset(source_path=resolve(roots, STATIC_SUBROOT, path), output_path=path)
        for path in files
        if in_section(path, section)
    ]
    logger.debug("manifest_built", section=section, count=len(manifest))
    return manifest


def find_duplicate_outputs(manifest: Iterable[StaticAsset]) -> list[str]:
    """Return output paths declared more than once, in first-seen order."""
    counts = Counter(asset.output_path for asset in manifest)
    return [path for path, count in counts.items() if count > 1]
