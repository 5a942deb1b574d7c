"""Build unit and static asset models for plugkit.

This module defines the two kinds of build input:
- BuildUnit: A named bundle with an ordered list of entry points
- StaticAsset: A file copied verbatim into the output directory
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BuildUnit(BaseModel):
    """A named build unit (one output bundle).

    Entry order is significant: the bundler concatenates entry points
    in the order they are declared.

    Attributes:
        name: Unit name, unique within a unit map. Used for section filtering.
        entry_paths: Ordered entry point references. Paths containing a
            directory separator are files; bare names are package modules.

    Example:
        >>> unit = BuildUnit(name="index", entry_paths=["./index.js"])
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(
        ...,
        min_length=1,
        description="Unit name (unique within the unit map)",
    )
    entry_paths: list[str] = Field(
        default_factory=list,
        description="Ordered entry point references",
    )

    def with_entry_paths(self, entry_paths: list[str]) -> BuildUnit:
        """Return a copy of this unit with different entry paths."""
        return self.model_copy(update={"entry_paths": list(entry_paths)})


class StaticAsset(BaseModel):
    """A file copied verbatim into the build output.

    Attributes:
        source_path: Location to copy from (absolute once resolved).
        output_path: Destination relative to the output directory.

    Example:
        >>> asset = StaticAsset(source_path="/build/src/index.html", output_path="index.html")
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    source_path: str = Field(
        ...,
        min_length=1,
        alias="from",
        description="Source location of the file",
    )
    output_path: str = Field(
        ...,
        min_length=1,
        alias="to",
        description="Destination relative to the output directory",
    )

    @field_validator("output_path")
    @classmethod
    def _output_path_is_relative(cls, value: str) -> str:
        if value.startswith(("/", "\\")):
            raise ValueError(f"output path must be relative, got '{value}'")
        return value
