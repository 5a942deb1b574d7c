"""Build unit selection for plugkit.

select_units() narrows the declared units to a section (a name prefix,
typically taken from ONLYDIR) and qualifies every file entry point with
the resolution roots. Entry points without a ``/`` are package module
references and are left for the bundler to resolve.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from plugkit_core.compiler.path_resolver import resolve

if TYPE_CHECKING:
    from collections.abc import Iterable

    from plugkit_core.compiler.path_resolver import ResolutionRoots
    from plugkit_core.schemas.assets import BuildUnit

logger = structlog.get_logger(__name__)


def in_section(name: str, section: str | None) -> bool:
    """Return True if name belongs to section (prefix match).

    A missing section selects everything.
    """
    return not section or name.startswith(section)


def qualify_entry(roots: ResolutionRoots, entry: str) -> str:
    """Resolve a file entry point; leave module references untouched."""
    if "/" not in entry:
        return entry
    return resolve(roots, entry)


def select_units(
    units: Iterable[BuildUnit],
    section: str | None,
    roots: ResolutionRoots,
) -> dict[str, BuildUnit]:
    """Select and resolve the build units belonging to a section.

    Args:
        units: Declared units, in declaration order.
        section: Optional unit name prefix.
        roots: Resolution roots for file entry points.

    Returns:
        Mapping of unit name to resolved unit, in declaration order.
        Empty when no unit matches; that is not an error here.

    Example:
        >>> selected = select_units(spec.units(), "index", roots)
        >>> list(selected)
        ['index']
    """
    selected: dict[str, BuildUnit] = {}

    for unit in units:
        if not in_section(unit.name, section):
            continue
        selected[unit.name] = unit.with_entry_paths(
            [qualify_entry(roots, entry) for entry in unit.entry_paths]
        )

    if not selected:
        logger.warning("no_units_selected", section=section)
    else:
        logger.debug("units_selected", section=section, units=list(selected))

    return selected
