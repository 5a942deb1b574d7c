"""Rich console output utilities for plugkit-cli.

Colored success/error/warning messages and a build plan summary.
The NO_COLOR environment variable and the --no-color flag both
disable colors.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from plugkit_core import CompiledBuildPlan

_force_no_color = os.environ.get("NO_COLOR") is not None


def create_console(no_color: bool = False) -> Console:
    """Create a Rich Console honoring --no-color and NO_COLOR."""
    disabled = no_color or _force_no_color
    return Console(force_terminal=False if disabled else None, no_color=disabled)


console = create_console()


def success(message: str, **kwargs: Any) -> None:
    """Print a success message with a green checkmark."""
    console.print(f"[green]✓[/green] {message}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print an error message with a red X."""
    console.print(f"[red]✗[/red] {message}", **kwargs)


def warning(message: str, **kwargs: Any) -> None:
    """Print a warning message with a yellow triangle."""
    console.print(f"[yellow]⚠[/yellow] {message}", **kwargs)


def info(message: str, **kwargs: Any) -> None:
    console.print(message, **kwargs)


def print_plan_summary(plan: CompiledBuildPlan) -> None:
    """Print the units, plugins and rules of a build plan.

    Args:
        plan: Compiled build plan.
    """
    table = Table(title=f"Build plan ({plan.mode.value})", show_header=True)
    table.add_column("Kind")
    table.add_column("Name")
    table.add_column("Details")

    for name, entries in plan.entry.items():
        table.add_row("unit", name, ", ".join(entries))
    for position, plugin in enumerate(plan.plugins):
        table.add_row("plugin", plugin.name, f"#{position} {plugin.kind}")
    for rule in plan.module_rules:
        table.add_row("rule", rule.test.source, " <- ".join(rule.loaders))

    console.print(table)

    if not plan.entry:
        warning("No build units selected; the bundler will receive no entry points.")


def set_no_color(no_color: bool) -> None:
    """Replace the module-level console to enable/disable colors."""
    global console
    console = create_console(no_color=no_color)
