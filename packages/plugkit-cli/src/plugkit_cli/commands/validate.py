"""plugkit validate command - Validate plugkit.yaml."""

from __future__ import annotations

from pathlib import Path

import click

from plugkit_cli.output import error, info, success


@click.command()
@click.option(
    "-f",
    "--file",
    "file_path",
    type=click.Path(exists=False),
    default="./plugkit.yaml",
    help="Path to plugkit.yaml [default: ./plugkit.yaml]",
)
def validate(file_path: str) -> None:
    """Validate plugkit.yaml.

    Checks the build declarations against the BuildSpec schema and
    reports errors with field paths.

    Examples:

        plugkit validate

        plugkit validate --file path/to/plugkit.yaml
    """
    from plugkit_cli.errors import handle_file_not_found

    path = Path(file_path)

    if not path.exists():
        handle_file_not_found(file_path)

    try:
        from plugkit_core import BuildSpec

        spec = BuildSpec.from_yaml(path)
        success("Configuration valid")
        info(f"  {len(spec.entries)} build unit(s), {len(spec.files)} static file(s)")

    except Exception as e:
        import yaml
        from pydantic import ValidationError as PydanticValidationError

        from plugkit_cli.errors import handle_validation_error, handle_yaml_error

        if isinstance(e, yaml.YAMLError):
            handle_yaml_error(e, file_path)
        elif isinstance(e, PydanticValidationError):
            handle_validation_error(e, file_path)
        else:
            error(f"Validation failed: {e}")
            raise SystemExit(1) from None
