"""JSON Schema export functions for plugkit.

This module exports JSON Schema Draft 2020-12 schemas from the Pydantic
models, for IDE autocomplete on plugkit.yaml and for validating build
plans on the bundler side.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from plugkit_core.compiler.models import CompiledBuildPlan
from plugkit_core.schemas import BuildSpec

JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"
SCHEMA_BASE_URL = "https://plugkit.dev/schemas"


def export_build_spec_schema(
    output_path: Path | str | None = None,
) -> dict[str, Any]:
    """Export BuildSpec JSON Schema for IDE autocomplete.

    Args:
        output_path: Optional path to write schema file. If provided,
            creates parent directories as needed.

    Returns:
        Dictionary containing the JSON Schema.

    Example:
        >>> schema = export_build_spec_schema()
        >>> schema["$schema"]
        'https://json-schema.org/draft/2020-12/schema'
    """
    return _export(BuildSpec, "plugkit.schema.json", output_path)


def export_build_plan_schema(
    output_path: Path | str | None = None,
) -> dict[str, Any]:
    """Export CompiledBuildPlan JSON Schema for executor-side validation.

    Args:
        output_path: Optional path to write schema file.

    Returns:
        Dictionary containing the JSON Schema.
    """
    return _export(CompiledBuildPlan, "build-plan.schema.json", output_path)


def _export(
    model: type[BaseModel],
    schema_name: str,
    output_path: Path | str | None,
) -> dict[str, Any]:
    schema = model.model_json_schema(by_alias=True)

    schema["$schema"] = JSON_SCHEMA_DIALECT
    schema["$id"] = f"{SCHEMA_BASE_URL}/{schema_name}"

    # Root-level unknown keys are rejected, matching extra="forbid"
    if "additionalProperties" not in schema:
        schema["additionalProperties"] = False

    if output_path is not None:
        _write_schema_file(schema, output_path)

    return schema


def _write_schema_file(schema: dict[str, Any], path: Path | str) -> None:
    """Write schema to JSON file, creating parent directories."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(schema, indent=2))
