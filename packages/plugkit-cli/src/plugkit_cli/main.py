"""CLI entry point for plugkit.

The main group loads subcommands lazily so ``plugkit --help`` does not
import pydantic models or the compiler.
"""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick

from plugkit_cli import __version__
from plugkit_cli.logging_config import configure_logging
from plugkit_cli.output import set_no_color

rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True


class LazyGroup(rclick.RichGroup):
    """Click group that imports commands only when they are invoked.

    Attributes:
        lazy_subcommands: Mapping of command names to "module.attribute" paths.
    """

    def __init__(
        self,
        *args: Any,
        lazy_subcommands: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: dict[str, str] = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        commands = set(super().list_commands(ctx))
        commands.update(self.lazy_subcommands.keys())
        return sorted(commands)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        cmd = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if cmd is not None:
            return cmd

        if cmd_name not in self.lazy_subcommands:
            return None

        module_name, attr_name = self.lazy_subcommands[cmd_name].rsplit(".", 1)
        mod = importlib.import_module(module_name)
        return getattr(mod, attr_name)  # type: ignore[no-any-return]


LAZY_COMMANDS = {
    "validate": "plugkit_cli.commands.validate.validate",
    "compile": "plugkit_cli.commands.compile.compile_cmd",
    "schema": "plugkit_cli.commands.schema.schema",
}


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="plugkit")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Log every compilation step to stderr.",
)
def cli(verbose: bool) -> None:
    """plugkit - Build plans for browser plugins.

    Resolve entry points and static files, then assemble the bundler
    pipeline for development or production.

    **Getting Started:**

    - `plugkit validate` - Validate plugkit.yaml
    - `plugkit compile` - Write the build plan
    - `plugkit schema export` - Export JSON Schema for IDE support

    **Environment:**

    - `SRCDIR` - build directory (sources in SRCDIR/src)
    - `ONLYDIR` - build only units and files with this prefix
    - `NODE_ENV=production` - production build
    """
    configure_logging(verbose=verbose)


if __name__ == "__main__":
    cli()
