"""plugkit-core: Build plan compilation for browser plugins.

This package provides:
- BuildSpec: Pydantic schema for plugkit.yaml
- CompiledBuildPlan: Output contract consumed by the bundler executor
- Compiler: Transform BuildSpec + environment -> CompiledBuildPlan
- JSON Schema export utilities
"""

from __future__ import annotations

__version__ = "0.1.0"

# Compiler and output models
from plugkit_core.compiler import (
    BuildEnvironment,
    CompiledBuildPlan,
    Compiler,
    PlanMetadata,
    ResolutionRoots,
)

# Error types
from plugkit_core.errors import (
    CompilationError,
    ConfigurationError,
    PlugkitError,
)

# JSON Schema export functions
from plugkit_core.export import (
    export_build_plan_schema,
    export_build_spec_schema,
)

# Schema models
from plugkit_core.schemas import (
    BuildSpec,
    BuildUnit,
    Mode,
    ModuleRule,
    PluginStage,
    StaticAsset,
)

__all__ = [
    "__version__",
    # Compiler
    "Compiler",
    "CompiledBuildPlan",
    "PlanMetadata",
    "BuildEnvironment",
    "ResolutionRoots",
    # Errors
    "PlugkitError",
    "CompilationError",
    "ConfigurationError",
    # JSON Schema exports
    "export_build_spec_schema",
    "export_build_plan_schema",
    # Schema models
    "BuildSpec",
    "BuildUnit",
    "StaticAsset",
    "Mode",
    "ModuleRule",
    "PluginStage",
]
