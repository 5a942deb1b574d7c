"""Compiler class for plugkit.

This module implements the Compiler that transforms BuildSpec
(plugkit.yaml) plus the build environment into a CompiledBuildPlan.

Compilation steps:
- Parse and validate plugkit.yaml
- Read SRCDIR / ONLYDIR / NODE_ENV (explicit overrides win)
- Select and resolve the build units of the section
- Resolve the static file manifest
- Assemble plugins and module rules for the mode
"""

from __future__ import annotations

import hashlib
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError as PydanticValidationError

from plugkit_core.compiler.environment import BuildEnvironment
from plugkit_core.compiler.manifest import build_manifest, find_duplicate_outputs
from plugkit_core.compiler.models import CompiledBuildPlan, PlanMetadata
from plugkit_core.compiler.pipeline_assembler import assemble
from plugkit_core.compiler.unit_selector import select_units
from plugkit_core.errors import CompilationError, ConfigurationError
from plugkit_core.schemas import BuildSpec
from plugkit_core.schemas.pipeline import Mode, OptimizationConfig, OutputPolicy, ResolveConfig

logger = structlog.get_logger(__name__)

# Package version - kept in sync with pyproject.toml
PLUGKIT_CORE_VERSION = "0.1.0"

FONT_AWESOME_ALIAS = "font-awesome"
FONT_AWESOME_STYLESHEETS = "font-awesome-sass/assets/stylesheets"

PRODUCTION_MINIMIZERS = ["TerserPlugin", "CssMinimizerPlugin"]


class Compiler:
    """Compile plugkit.yaml to a CompiledBuildPlan.

    Environment values are read once per compile() call. Explicit
    constructor arguments take precedence over the environment.

    Example:
        >>> compiler = Compiler()
        >>> plan = compiler.compile(Path("plugkit.yaml"))
        >>>
        >>> # One section of a production build
        >>> plan = Compiler(section="index", mode=Mode.PRODUCTION).compile("plugkit.yaml")
    """

    def __init__(
        self,
        *,
        build_dir: Path | str | None = None,
        section: str | None = None,
        mode: Mode | None = None,
    ) -> None:
        """Initialize the Compiler.

        Args:
            build_dir: Build directory override (else SRCDIR, else the
                directory holding plugkit.yaml).
            section: Section filter override (else ONLYDIR).
            mode: Mode override (else derived from NODE_ENV).
        """
        self.build_dir = Path(build_dir) if build_dir is not None else None
        self.section = section
        self.mode = mode
        self._log = logger.bind(component="compiler")

    def compile(self, spec_path: Path | str) -> CompiledBuildPlan:
        """Compile plugkit.yaml to a CompiledBuildPlan.

        Args:
            spec_path: Path to plugkit.yaml file.

        Returns:
            Immutable CompiledBuildPlan ready for the bundler executor.

        Raises:
            FileNotFoundError: If plugkit.yaml not found.
            ConfigurationError: If YAML is invalid.
            pydantic.ValidationError: If spec validation fails.
            CompilationError: If the assembled plan is inconsistent.
        """
        spec_path = Path(spec_path)

        if not spec_path.exists():
            raise FileNotFoundError(f"File not found: {spec_path}")

        source_content = spec_path.read_text()
        try:
            raw_data: dict[str, Any] = yaml.safe_load(source_content) or {}
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            raise ConfigurationError(
                "Invalid YAML",
                file_path=str(spec_path),
                line_number=mark.line + 1 if mark is not None else None,
                internal_details=str(e),
            ) from e
        spec = BuildSpec.model_validate(raw_data)

        environment = self.resolve_environment(spec_path.parent)
        return self.compile_spec(
            spec,
            environment,
            source_hash=self._compute_hash(source_content),
        )

    def resolve_environment(self, default_build_dir: Path) -> BuildEnvironment:
        """Read the environment and apply constructor overrides."""
        environment = BuildEnvironment.from_env(default_build_dir)

        overrides: dict[str, Any] = {}
        if self.build_dir is not None:
            overrides["build_dir"] = self.build_dir
        if self.section is not None:
            overrides["section"] = self.section or None
        if self.mode is not None:
            overrides["mode"] = self.mode

        if overrides:
            environment = environment.model_copy(update=overrides)
        return environment

    def compile_spec(
        self,
        spec: BuildSpec,
        environment: BuildEnvironment,
        *,
        source_hash: str | None = None,
    ) -> CompiledBuildPlan:
        """Compile an already loaded BuildSpec.

        Args:
            spec: Validated build declarations.
            environment: Build environment for this compilation.
            source_hash: Hash of the source file. Computed from the spec
                when not given.

        Returns:
            Immutable CompiledBuildPlan.
        """
        mode = environment.mode
        roots = environment.roots
        section = environment.section

        self._log.info(
            "compile_started",
            spec=spec.name,
            mode=mode.value,
            section=section,
            build_dir=str(environment.build_dir),
        )

        units = select_units(spec.units(), section, roots)
        manifest = build_manifest(spec.files, section, roots)

        duplicates = find_duplicate_outputs(manifest)
        if duplicates:
            self._log.warning("duplicate_copy_destinations", outputs=duplicates)

        pipeline = assemble(mode, units, manifest)

        node_dir = environment.node_dir
        search_paths = [node_dir, str(environment.lib_dir)]
        font_awesome_dir = str(Path(node_dir).resolve() / FONT_AWESOME_STYLESHEETS)

        if source_hash is None:
            source_hash = self._compute_hash(spec.model_dump_json())

        try:
            metadata = PlanMetadata(
                compiled_at=datetime.now(timezone.utc),
                plugkit_core_version=PLUGKIT_CORE_VERSION,
                source_hash=source_hash,
                section=section,
            )

            plan = CompiledBuildPlan(
                metadata=metadata,
                mode=mode,
                entry=pipeline.entry,
                resolve=ResolveConfig(
                    modules=search_paths,
                    alias={FONT_AWESOME_ALIAS: font_awesome_dir},
                ),
                resolve_loader=ResolveConfig(modules=list(search_paths)),
                externals=dict(spec.externals),
                plugins=pipeline.plugins.to_list(),
                module_rules=pipeline.rules,
                devtool=None if mode.is_production else "source-map",
                source_maps_enabled=not mode.is_production,
                output=OutputPolicy(path=str(environment.dist_dir)),
                optimization=OptimizationConfig(
                    minimize=mode.is_production,
                    minimizers=list(PRODUCTION_MINIMIZERS) if mode.is_production else [],
                ),
            )
        except PydanticValidationError as e:
            raise CompilationError(
                "Assembled build plan is invalid",
                internal_details=str(e),
            ) from e

        self._log.info(
            "compile_completed",
            units=list(plan.entry),
            assets=len(manifest),
            plugins=plan.plugin_kinds(),
        )
        return plan

    def _compute_hash(self, content: str) -> str:
        """Compute SHA-256 hash of content.

        Args:
            content: String content to hash.

        Returns:
            Hex-encoded SHA-256 hash.
        """
        return hashlib.sha256(content.encode("utf-8")).hexdigest()
