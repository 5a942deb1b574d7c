"""Tests for plugkit compile command."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner, Result

from plugkit_cli.commands.compile import PLAN_FILE_NAME, compile_cmd


def _invoke(cli_runner: CliRunner, spec: Path, output_dir: Path, *extra: str) -> Result:
    return cli_runner.invoke(
        compile_cmd,
        ["--file", str(spec), "--output", str(output_dir), *extra],
    )


def _read_plan(output_dir: Path) -> dict[str, Any]:
    return json.loads((output_dir / PLAN_FILE_NAME).read_text())


class TestCompileCommand:
    """Tests for compile command."""

    def test_compile_valid_file(
        self, cli_runner: CliRunner, valid_plugkit_yaml: Path, tmp_path: Path
    ) -> None:
        output_dir = tmp_path / ".plugkit"
        result = _invoke(cli_runner, valid_plugkit_yaml, output_dir)

        assert result.exit_code == 0
        assert "compiled development build plan" in result.output.lower()

        plan = _read_plan(output_dir)
        assert plan["version"] == "1.0.0"
        assert plan["mode"] == "development"
        assert list(plan["entry"]) == ["index", "tools"]

    def test_compile_creates_output_directory(
        self, cli_runner: CliRunner, valid_plugkit_yaml: Path, tmp_path: Path
    ) -> None:
        output_dir = tmp_path / "nested" / "output" / ".plugkit"
        result = _invoke(cli_runner, valid_plugkit_yaml, output_dir)

        assert result.exit_code == 0
        assert (output_dir / PLAN_FILE_NAME).exists()

    def test_compile_missing_file(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(compile_cmd, ["--file", str(tmp_path / "nonexistent.yaml")])

        assert result.exit_code == 2
        assert "not found" in result.output.lower()

    def test_compile_invalid_file(
        self, cli_runner: CliRunner, invalid_plugkit_yaml: Path, tmp_path: Path
    ) -> None:
        result = _invoke(cli_runner, invalid_plugkit_yaml, tmp_path / ".plugkit")

        assert result.exit_code == 1
        assert "Validation failed" in result.output
        assert not (tmp_path / ".plugkit" / PLAN_FILE_NAME).exists()

    def test_compile_invalid_yaml(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        spec = tmp_path / "plugkit.yaml"
        spec.write_text("name: [unclosed\n")

        result = _invoke(cli_runner, spec, tmp_path / ".plugkit")

        assert result.exit_code == 1
        assert "Invalid YAML" in result.output

    def test_compile_default_output(self, isolated_runner: CliRunner, fixtures_dir: Path) -> None:
        Path("plugkit.yaml").write_text((fixtures_dir / "valid_plugkit.yaml").read_text())

        result = isolated_runner.invoke(compile_cmd)

        assert result.exit_code == 0
        assert Path(".plugkit/build_plan.json").exists()


class TestCompileModeOption:
    """Tests for --mode and NODE_ENV."""

    def test_production_mode(
        self, cli_runner: CliRunner, valid_plugkit_yaml: Path, tmp_path: Path
    ) -> None:
        output_dir = tmp_path / ".plugkit"
        result = _invoke(cli_runner, valid_plugkit_yaml, output_dir, "--mode", "production")

        assert result.exit_code == 0
        plan = _read_plan(output_dir)
        assert plan["mode"] == "production"
        assert plan["devtool"] is None
        assert plan["source_maps_enabled"] is False
        assert plan["plugins"][0]["kind"] == "compression"

    def test_node_env(self, cli_runner: CliRunner, valid_plugkit_yaml: Path, tmp_path: Path) -> None:
        output_dir = tmp_path / ".plugkit"
        result = cli_runner.invoke(
            compile_cmd,
            ["--file", str(valid_plugkit_yaml), "--output", str(output_dir)],
            env={"NODE_ENV": "production"},
        )

        assert result.exit_code == 0
        assert _read_plan(output_dir)["mode"] == "production"

    def test_invalid_mode(
        self, cli_runner: CliRunner, valid_plugkit_yaml: Path, tmp_path: Path
    ) -> None:
        result = _invoke(cli_runner, valid_plugkit_yaml, tmp_path / ".plugkit", "--mode", "staging")
        assert result.exit_code == 2


class TestCompileSectionOption:
    """Tests for --section and ONLYDIR."""

    def test_section(self, cli_runner: CliRunner, valid_plugkit_yaml: Path, tmp_path: Path) -> None:
        output_dir = tmp_path / ".plugkit"
        result = _invoke(cli_runner, valid_plugkit_yaml, output_dir, "--section", "tools")

        assert result.exit_code == 0
        plan = _read_plan(output_dir)
        assert list(plan["entry"]) == ["tools"]
        assert [p["to"] for p in plan["plugins"][1]["options"]["patterns"]] == [
            "tools/index.html"
        ]

    def test_onlydir(self, cli_runner: CliRunner, valid_plugkit_yaml: Path, tmp_path: Path) -> None:
        output_dir = tmp_path / ".plugkit"
        result = cli_runner.invoke(
            compile_cmd,
            ["--file", str(valid_plugkit_yaml), "--output", str(output_dir)],
            env={"ONLYDIR": "index"},
        )

        assert result.exit_code == 0
        assert list(_read_plan(output_dir)["entry"]) == ["index"]

    def test_unmatched_section_warns(
        self, cli_runner: CliRunner, valid_plugkit_yaml: Path, tmp_path: Path
    ) -> None:
        output_dir = tmp_path / ".plugkit"
        result = _invoke(cli_runner, valid_plugkit_yaml, output_dir, "--section", "missing")

        assert result.exit_code == 0
        assert "No build units selected" in result.output
        assert _read_plan(output_dir)["entry"] == {}


class TestCompileSrcdirOption:
    """Tests for --srcdir."""

    def test_srcdir(self, cli_runner: CliRunner, valid_plugkit_yaml: Path, tmp_path: Path) -> None:
        output_dir = tmp_path / ".plugkit"
        build_dir = tmp_path / "elsewhere"

        result = _invoke(cli_runner, valid_plugkit_yaml, output_dir, "--srcdir", str(build_dir))

        assert result.exit_code == 0
        plan = _read_plan(output_dir)
        assert plan["entry"]["tools"] == [f"{build_dir}{os.sep}src{os.sep}./tools/index.js"]
        assert plan["output"]["path"] == str(build_dir / "dist")


class TestCompileSummaryOption:
    def test_summary_table(
        self, cli_runner: CliRunner, valid_plugkit_yaml: Path, tmp_path: Path
    ) -> None:
        result = _invoke(cli_runner, valid_plugkit_yaml, tmp_path / ".plugkit", "--summary")

        assert result.exit_code == 0
        assert "Build plan" in result.output


class TestCompileErrors:
    """Tests for error routing and exit codes."""

    def test_unwritable_output(
        self,
        cli_runner: CliRunner,
        valid_plugkit_yaml: Path,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        def _deny(self: Path, *args: object, **kwargs: object) -> None:
            raise PermissionError(str(self))

        monkeypatch.setattr(Path, "mkdir", _deny)

        result = _invoke(cli_runner, valid_plugkit_yaml, tmp_path / "locked")

        assert result.exit_code == 2
        assert "Permission denied" in result.output

    def test_invalid_yaml_reports_line(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        spec = tmp_path / "plugkit.yaml"
        spec.write_text("name: starter-kit\nentries: [unclosed\n")

        result = _invoke(cli_runner, spec, tmp_path / ".plugkit")

        assert result.exit_code == 1
        assert "line" in result.output
