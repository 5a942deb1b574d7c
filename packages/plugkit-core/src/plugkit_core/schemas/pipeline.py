"""Pipeline models for plugkit build plans.

This module defines the building blocks of an assembled pipeline:
- Mode: Development or production build
- Pattern: Regular expression carried into the plan verbatim
- LoaderSpec: One sub-stage of a loader chain
- ModuleRule: File pattern plus the loader chain applied to matches
- PluginStage: One output plugin in the plugin sequence
- OutputPolicy, ResolveConfig, OptimizationConfig: Plan root settings

Patterns use the bundler's regular expression syntax, which for the
expressions plugkit emits is also valid Python ``re`` syntax. They are
compiled on construction so a malformed pattern fails early.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Regex flags understood by Pattern (bundler-style single letters)
PATTERN_FLAGS = {
    "g": 0,
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
}


class Mode(str, Enum):
    """Build mode, fixed for the lifetime of one compilation."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"

    @property
    def is_production(self) -> bool:
        return self is Mode.PRODUCTION


class Pattern(BaseModel):
    """A regular expression as consumed by the bundler.

    Attributes:
        source: Expression source text.
        flags: Flag letters. ``g`` replaces every match instead of the first.

    Example:
        >>> Pattern(source=r"\\.(js|jsx)$").search("index.jsx")
        True
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: str = Field(..., min_length=1, description="Regular expression source")
    flags: str = Field(default="", description="Flag letters (g, i, m)")

    @field_validator("flags")
    @classmethod
    def _known_flags(cls, value: str) -> str:
        unknown = sorted(set(value) - set(PATTERN_FLAGS))
        if unknown:
            raise ValueError(f"unsupported pattern flags: {''.join(unknown)}")
        return value

    @model_validator(mode="after")
    def _compiles(self) -> Pattern:
        # re.error surfaces as a pydantic validation error
        try:
            self.compile()
        except re.error as e:
            raise ValueError(f"invalid pattern '{self.source}': {e}") from e
        return self

    @property
    def is_global(self) -> bool:
        return "g" in self.flags

    def compile(self) -> re.Pattern[str]:
        """Compile to a Python regular expression."""
        flags = 0
        for letter in self.flags:
            flags |= PATTERN_FLAGS[letter]
        return re.compile(self.source, flags)

    def search(self, text: str) -> bool:
        """Return True if the pattern matches anywhere in text."""
        return self.compile().search(text) is not None

    def sub(self, replacement: str, text: str) -> str:
        """Replace matches with a literal replacement string.

        Every match is replaced for global patterns, only the first otherwise.
        """
        count = 0 if self.is_global else 1
        return self.compile().sub(lambda _match: replacement, text, count=count)


class LoaderSpec(BaseModel):
    """One sub-stage in a loader chain.

    Attributes:
        loader: Loader module name as known to the bundler.
        options: Loader options, passed through untouched.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    loader: str = Field(..., min_length=1, description="Loader module name")
    options: dict[str, Any] | None = Field(
        default=None,
        description="Loader options",
    )


class ModuleRule(BaseModel):
    """A module rule: which files a loader chain applies to.

    Rules are evaluated in declaration order and the first matching
    rule wins, so narrower rules must be declared before broader ones.

    Attributes:
        test: Pattern the file name must match.
        exclude: Optional pattern that vetoes a match.
        use: Ordered loader chain.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    test: Pattern = Field(..., description="Pattern the file name must match")
    exclude: Pattern | None = Field(default=None, description="Pattern that vetoes a match")
    use: list[LoaderSpec] = Field(..., min_length=1, description="Ordered loader chain")

    def matches(self, filename: str) -> bool:
        """Return True if this rule applies to filename."""
        if not self.test.search(filename):
            return False
        return self.exclude is None or not self.exclude.search(filename)

    @property
    def loaders(self) -> list[str]:
        return [spec.loader for spec in self.use]


def match_rule(rules: list[ModuleRule], filename: str) -> ModuleRule | None:
    """Return the first rule matching filename, or None."""
    for rule in rules:
        if rule.matches(filename):
            return rule
    return None


PluginKind = Literal[
    "environment",
    "copy",
    "stylesheet-extract",
    "lint",
    "translations",
    "compression",
]


class PluginStage(BaseModel):
    """An output plugin in the plugin sequence.

    Attributes:
        kind: Role of the plugin in the pipeline.
        name: Plugin implementation name as known to the bundler.
        options: Plugin options, passed through untouched.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: PluginKind = Field(..., description="Role of the plugin")
    name: str = Field(..., min_length=1, description="Plugin implementation name")
    options: dict[str, Any] = Field(default_factory=dict, description="Plugin options")


class OutputPolicy(BaseModel):
    """Output directory handling.

    Previous output is always cleared and files are always rewritten,
    so no stale artifact survives between builds.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = Field(..., description="Output directory")
    clean: Literal[True] = Field(default=True, description="Clear previous output")
    compare_before_emit: Literal[False] = Field(
        default=False,
        description="Compare files before overwriting",
    )


class ResolveConfig(BaseModel):
    """Module resolution search paths and aliases."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    modules: list[str] = Field(default_factory=list, description="Search directories")
    alias: dict[str, str] = Field(default_factory=dict, description="Module aliases")


class OptimizationConfig(BaseModel):
    """Minification settings.

    Attributes:
        minimize: Whether minimizers run at all.
        minimizers: Minimizer plugin names, in order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    minimize: bool = Field(default=False, description="Run minimizers")
    minimizers: list[str] = Field(default_factory=list, description="Minimizer plugins")
