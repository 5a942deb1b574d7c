"""Unit tests for the plugkit-core exception hierarchy."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from plugkit_core.errors import (
    CompilationError,
    ConfigurationError,
    PlugkitError,
)


class TestPlugkitError:
    """Tests for the base exception."""

    def test_message(self) -> None:
        error = PlugkitError("Build declarations invalid")
        assert str(error) == "Build declarations invalid"
        assert error.user_message == "Build declarations invalid"

    def test_internal_details_logged_not_shown(self) -> None:
        with capture_logs() as logs:
            error = PlugkitError("Something failed", internal_details="stack detail")

        assert "stack detail" not in str(error)
        assert logs[0]["event"] == "plugkit_error"
        assert logs[0]["internal_details"] == "stack detail"
        assert logs[0]["error_type"] == "PlugkitError"

    def test_no_log_without_details(self) -> None:
        with capture_logs() as logs:
            PlugkitError("quiet")
        assert logs == []

    @pytest.mark.parametrize("cls", [CompilationError, ConfigurationError])
    def test_subclasses(self, cls: type[PlugkitError]) -> None:
        with pytest.raises(PlugkitError):
            raise cls("failed")


class TestConfigurationError:
    """Tests for file and field context in messages."""

    def test_full_context(self) -> None:
        error = ConfigurationError(
            "Invalid YAML",
            file_path="plugkit.yaml",
            line_number=3,
            field_path="entries.index",
        )

        assert str(error) == "Invalid YAML (in plugkit.yaml, line 3, field 'entries.index')"
        assert error.file_path == "plugkit.yaml"
        assert error.line_number == 3
        assert error.field_path == "entries.index"

    def test_no_context(self) -> None:
        assert str(ConfigurationError("Invalid YAML")) == "Invalid YAML"
