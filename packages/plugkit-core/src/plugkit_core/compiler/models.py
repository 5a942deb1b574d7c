"""Compiler output models for plugkit.

This module defines the build plan contract produced by the Compiler and
consumed by the bundler executor.

Version History:
- v1.0.0: Initial release
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from plugkit_core.schemas.pipeline import (
    Mode,
    ModuleRule,
    OptimizationConfig,
    OutputPolicy,
    PluginStage,
    ResolveConfig,
)


class PlanMetadata(BaseModel):
    """Compilation metadata for tracking plan provenance.

    Attributes:
        compiled_at: Timestamp when compilation occurred (UTC).
        plugkit_core_version: Version of plugkit-core that produced the plan.
        source_hash: SHA-256 hash of the source plugkit.yaml content.
        section: Section filter in effect, if any.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    compiled_at: datetime = Field(..., description="Timestamp when compilation occurred (UTC)")
    plugkit_core_version: str = Field(
        ...,
        min_length=1,
        description="Version of plugkit-core that produced the plan",
    )
    source_hash: str = Field(
        ...,
        min_length=1,
        description="SHA-256 hash of source plugkit.yaml content",
    )
    section: str | None = Field(default=None, description="Section filter in effect")


class CompiledBuildPlan(BaseModel):
    """Immutable build plan handed to the bundler executor.

    Contract Rules:
    - Model is immutable (frozen=True)
    - Unknown fields are rejected (extra="forbid")
    - Plugin order is execution order
    - Module rules are first-match-wins

    Attributes:
        version: Contract version (semver).
        metadata: Compilation metadata.
        mode: Build mode.
        entry: Unit name -> resolved entry points. May be empty.
        resolve: Module search paths and aliases.
        resolve_loader: Loader search paths.
        externals: Modules provided by the host at runtime.
        plugins: Output plugins, in execution order.
        module_rules: Module rules, first match wins.
        devtool: Source map style, or None when disabled.
        source_maps_enabled: True exactly when devtool is set.
        output: Output directory policy.
        optimization: Minification settings.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: str = Field(default="1.0.0", description="Contract version (semver)")
    metadata: PlanMetadata = Field(..., description="Compilation metadata")
    mode: Mode = Field(..., description="Build mode")
    entry: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Unit name -> resolved entry points",
    )
    resolve: ResolveConfig = Field(
        default_factory=ResolveConfig,
        description="Module search paths and aliases",
    )
    resolve_loader: ResolveConfig = Field(
        default_factory=ResolveConfig,
        description="Loader search paths",
    )
    externals: dict[str, str] = Field(
        default_factory=dict,
        description="Modules provided by the host at runtime",
    )
    plugins: list[PluginStage] = Field(
        default_factory=list,
        description="Output plugins, in execution order",
    )
    module_rules: list[ModuleRule] = Field(
        default_factory=list,
        description="Module rules, first match wins",
    )
    devtool: Literal["source-map"] | None = Field(
        default=None,
        description="Source map style (None disables source maps)",
    )
    source_maps_enabled: bool = Field(
        default=False,
        description="Whether source maps are emitted (mirrors devtool)",
    )
    output: OutputPolicy = Field(..., description="Output directory policy")
    optimization: OptimizationConfig = Field(
        default_factory=OptimizationConfig,
        description="Minification settings",
    )

    def plugin_kinds(self) -> list[str]:
        return [plugin.kind for plugin in self.plugins]

    @model_validator(mode="after")
    def _source_maps_match_devtool(self) -> CompiledBuildPlan:
        if self.source_maps_enabled != (self.devtool is not None):
            raise ValueError("source_maps_enabled must be true exactly when devtool is set")
        return self
