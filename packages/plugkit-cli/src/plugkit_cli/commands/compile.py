"""plugkit compile command - Write the build plan."""

from __future__ import annotations

from pathlib import Path

import click

from plugkit_cli.output import error, print_plan_summary, success, warning

PLAN_FILE_NAME = "build_plan.json"


@click.command("compile")
@click.option(
    "-f",
    "--file",
    "file_path",
    type=click.Path(exists=False),
    default="./plugkit.yaml",
    help="Path to plugkit.yaml [default: ./plugkit.yaml]",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(),
    default=".plugkit/",
    help="Output directory for build_plan.json [default: .plugkit/]",
)
@click.option(
    "-s",
    "--section",
    type=str,
    default=None,
    help="Only build units and files starting with this prefix [default: $ONLYDIR]",
)
@click.option(
    "-m",
    "--mode",
    type=click.Choice(["development", "production"]),
    default=None,
    help="Build mode [default: production if NODE_ENV=production]",
)
@click.option(
    "--srcdir",
    "build_dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Build directory, sources in <srcdir>/src [default: $SRCDIR or plugkit.yaml's directory]",
)
@click.option(
    "--summary/--no-summary",
    default=False,
    help="Print a table of units, plugins and rules.",
)
def compile_cmd(
    file_path: str,
    output_path: str,
    section: str | None,
    mode: str | None,
    build_dir: str | None,
    summary: bool,
) -> None:
    """Write the build plan for plugkit.yaml.

    Resolves entry points and static files against the build and source
    directories, then assembles plugins and module rules for the mode.

    Examples:

        plugkit compile

        plugkit compile --mode production --output build/

        ONLYDIR=index plugkit compile
    """
    from plugkit_cli.errors import handle_file_not_found, handle_permission_error

    path = Path(file_path)
    output = Path(output_path)

    if not path.exists():
        handle_file_not_found(file_path)

    try:
        from plugkit_core import Compiler, Mode

        compiler = Compiler(
            build_dir=build_dir,
            section=section,
            mode=Mode(mode) if mode is not None else None,
        )
        plan = compiler.compile(path)

        output.mkdir(parents=True, exist_ok=True)
        plan_path = output / PLAN_FILE_NAME
        plan_path.write_text(plan.model_dump_json(indent=2, by_alias=True))

        if summary:
            print_plan_summary(plan)
        elif not plan.entry:
            warning("No build units selected; the bundler will receive no entry points.")

        success(f"Compiled {plan.mode.value} build plan to {plan_path}")

    except PermissionError:
        handle_permission_error(output_path, "write to")

    except Exception as e:
        from pydantic import ValidationError as PydanticValidationError

        from plugkit_cli.errors import handle_plugkit_error, handle_validation_error
        from plugkit_core import PlugkitError

        if isinstance(e, PydanticValidationError):
            handle_validation_error(e, file_path)
        elif isinstance(e, PlugkitError):
            handle_plugkit_error(e)
        error(f"Compilation failed: {e}")
        raise SystemExit(1) from None
