"""Tests for plugkit schema commands."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from plugkit_cli.commands.schema import export_plan_schema, export_schema, schema


class TestSchemaGroup:
    def test_schema_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(schema, ["--help"])

        assert result.exit_code == 0
        assert "export" in result.output
        assert "export-plan" in result.output


class TestSchemaExport:
    """Tests for schema export."""

    def test_export_creates_json_schema(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        output_file = tmp_path / "schema.json"

        result = cli_runner.invoke(export_schema, ["--output", str(output_file)])

        assert result.exit_code == 0
        content = json.loads(output_file.read_text())
        assert content["$schema"] == "https://json-schema.org/draft/2020-12/schema"
        assert "entries" in content["properties"]

    def test_export_default_path(self, isolated_runner: CliRunner) -> None:
        result = isolated_runner.invoke(export_schema)

        assert result.exit_code == 0
        assert Path("schemas/plugkit.schema.json").exists()


class TestSchemaExportPlan:
    """Tests for schema export-plan."""

    def test_export_plan(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        output_file = tmp_path / "nested" / "plan.json"

        result = cli_runner.invoke(export_plan_schema, ["--output", str(output_file)])

        assert result.exit_code == 0
        content = json.loads(output_file.read_text())
        assert content["$id"].endswith("build-plan.schema.json")
        assert "module_rules" in content["properties"]
