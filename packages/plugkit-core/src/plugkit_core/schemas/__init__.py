"""Pydantic schemas for plugkit declarations and build plans."""

from __future__ import annotations

from plugkit_core.schemas.assets import BuildUnit, StaticAsset
from plugkit_core.schemas.build_spec import (
    DEFAULT_ENTRIES,
    DEFAULT_EXTERNALS,
    DEFAULT_FILES,
    BuildSpec,
)
from plugkit_core.schemas.pipeline import (
    LoaderSpec,
    Mode,
    ModuleRule,
    OptimizationConfig,
    OutputPolicy,
    Pattern,
    PluginStage,
    ResolveConfig,
    match_rule,
)

__all__: list[str] = [
    # Declarations
    "BuildSpec",
    "DEFAULT_ENTRIES",
    "DEFAULT_FILES",
    "DEFAULT_EXTERNALS",
    # Build inputs
    "BuildUnit",
    "StaticAsset",
    # Pipeline
    "Mode",
    "Pattern",
    "LoaderSpec",
    "ModuleRule",
    "PluginStage",
    "OutputPolicy",
    "ResolveConfig",
    "OptimizationConfig",
    "match_rule",
]
