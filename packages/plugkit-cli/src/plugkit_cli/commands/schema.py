"""plugkit schema command - Export JSON Schema."""

from __future__ import annotations

from pathlib import Path

import click

from plugkit_cli.output import error, success


@click.group()
def schema() -> None:
    """Export JSON Schema files.

    **Commands:**

    - `plugkit schema export` - plugkit.yaml schema, for IDE autocomplete
    - `plugkit schema export-plan` - build plan schema, for executor-side validation
    """
    pass


@schema.command("export")
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(),
    default="./schemas/plugkit.schema.json",
    help="Output path [default: ./schemas/plugkit.schema.json]",
)
def export_schema(output_path: str) -> None:
    """Export BuildSpec (plugkit.yaml) JSON Schema.

    Examples:

        plugkit schema export

        plugkit schema export --output custom/path/schema.json
    """
    output = Path(output_path)

    try:
        from plugkit_core import export_build_spec_schema

        export_build_spec_schema(output)
        success(f"Schema exported to {output}")

    except PermissionError:
        from plugkit_cli.errors import handle_permission_error

        handle_permission_error(output_path, "write to")

    except Exception as e:
        error(f"Schema export failed: {e}")
        raise SystemExit(1) from None


@schema.command("export-plan")
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(),
    default="./schemas/build-plan.schema.json",
    help="Output path [default: ./schemas/build-plan.schema.json]",
)
def export_plan_schema(output_path: str) -> None:
    """Export CompiledBuildPlan JSON Schema.

    Examples:

        plugkit schema export-plan
    """
    output = Path(output_path)

    try:
        from plugkit_core import export_build_plan_schema

        export_build_plan_schema(output)
        success(f"Build plan schema exported to {output}")

    except PermissionError:
        from plugkit_cli.errors import handle_permission_error

        handle_permission_error(output_path, "write to")

    except Exception as e:
        error(f"Build plan schema export failed: {e}")
        raise SystemExit(1) from None
