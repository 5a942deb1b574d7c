"""Compiler module for plugkit.

This module exports the Compiler class, the resolution and assembly
functions it is built from, and the output models:
- Compiler: Main compiler class
- BuildEnvironment: SRCDIR / ONLYDIR / NODE_ENV snapshot
- ResolutionRoots, resolve: Two-root path lookup
- select_units: Section filtering of build units
- build_manifest: Static file copy manifest
- assemble: Plugin sequence and module rules
- build_chain, apply_patches: Stylesheet loader chains
- CompiledBuildPlan, PlanMetadata: Output contract models
"""

from __future__ import annotations

from plugkit_core.compiler.compiler import PLUGKIT_CORE_VERSION, Compiler
from plugkit_core.compiler.environment import (
    MODE_ENV_VAR,
    SECTION_ENV_VAR,
    SRCDIR_ENV_VAR,
    BuildEnvironment,
    mode_from_env,
)
from plugkit_core.compiler.manifest import build_manifest, find_duplicate_outputs
from plugkit_core.compiler.models import CompiledBuildPlan, PlanMetadata
from plugkit_core.compiler.path_resolver import ResolutionRoots, resolve
from plugkit_core.compiler.pipeline_assembler import (
    AssembledPipeline,
    PluginSequence,
    assemble,
    build_plugins,
    build_rules,
)
from plugkit_core.compiler.stylesheet_chain import (
    SPECIAL_STYLESHEET,
    apply_patches,
    build_chain,
)
from plugkit_core.compiler.unit_selector import select_units

__all__: list[str] = [
    # Compiler class
    "Compiler",
    "PLUGKIT_CORE_VERSION",
    # Environment
    "BuildEnvironment",
    "mode_from_env",
    "SRCDIR_ENV_VAR",
    "SECTION_ENV_VAR",
    "MODE_ENV_VAR",
    # Resolution
    "ResolutionRoots",
    "resolve",
    "select_units",
    "build_manifest",
    "find_duplicate_outputs",
    # Assembly
    "AssembledPipeline",
    "PluginSequence",
    "assemble",
    "build_plugins",
    "build_rules",
    "SPECIAL_STYLESHEET",
    "build_chain",
    "apply_patches",
    # Output models
    "CompiledBuildPlan",
    "PlanMetadata",
]
