"""Pipeline assembly for plugkit.

assemble() turns the selected units and the copy manifest into the
three order-sensitive parts of a build plan:

- entry: unit name -> resolved entry points
- plugins: output plugins, in execution order
- rules: module rules, first match wins

The plugin backbone is the same in every mode. Production prepends a
compression plugin so it runs before the others and nothing later
reprocesses compressed output.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from plugkit_core.compiler.stylesheet_chain import SPECIAL_STYLESHEET, build_chain
from plugkit_core.schemas.pipeline import LoaderSpec, Mode, ModuleRule, Pattern, PluginStage

if TYPE_CHECKING:
    from collections.abc import Iterator

    from plugkit_core.schemas.assets import BuildUnit, StaticAsset

logger = structlog.get_logger(__name__)

# Directories never linted
VENDORED_LIB_DIR = "src/lib"
DEPENDENCY_DIR = "node_modules"

COMPRESSION_MIN_RATIO = 0.9


class PluginSequence:
    """Ordered plugin list with an explicit insert-at-front operation.

    The declarative backbone is built with append(); mode-dependent
    stages that must run first are added with prepend().
    """

    def __init__(self) -> None:
        self._stages: list[PluginStage] = []

    def append(self, stage: PluginStage) -> None:
        self._stages.append(stage)

    def prepend(self, stage: PluginStage) -> None:
        self._stages.insert(0, stage)

    def kinds(self) -> list[str]:
        return [stage.kind for stage in self._stages]

    def to_list(self) -> list[PluginStage]:
        return list(self._stages)

    def __iter__(self) -> Iterator[PluginStage]:
        return iter(self._stages)

    def __len__(self) -> int:
        return len(self._stages)

    def __getitem__(self, index: int) -> PluginStage:
        return self._stages[index]


@dataclass(frozen=True)
class AssembledPipeline:
    """Output of assemble().

    Attributes:
        entry: Unit name -> resolved entry points, in declaration order.
        plugins: Output plugins in execution order.
        rules: Module rules, first match wins.
    """

    entry: dict[str, list[str]]
    plugins: PluginSequence
    rules: list[ModuleRule] = field(default_factory=list)


def environment_stage(mode: Mode) -> PluginStage:
    """Embed the mode string for conditional code in the bundle."""
    return PluginStage(
        kind="environment",
        name="DefinePlugin",
        options={"process.env": {"NODE_ENV": json.dumps(mode.value)}},
    )


def copy_stage(manifest: list[StaticAsset]) -> PluginStage:
    return PluginStage(
        kind="copy",
        name="CopyPlugin",
        options={"patterns": [asset.model_dump(by_alias=True) for asset in manifest]},
    )


def stylesheet_extract_stage() -> PluginStage:
    return PluginStage(
        kind="stylesheet-extract",
        name="MiniCssExtractPlugin",
        options={"filename": "[name].css"},
    )


def lint_stage() -> PluginStage:
    return PluginStage(
        kind="lint",
        name="ESLintPlugin",
        options={"extensions": ["js", "jsx"], "exclude": [DEPENDENCY_DIR, VENDORED_LIB_DIR]},
    )


def translations_stage() -> PluginStage:
    # Finds its own inputs
    return PluginStage(kind="translations", name="CockpitPoPlugin")


def compression_stage() -> PluginStage:
    return PluginStage(
        kind="compression",
        name="CompressionPlugin",
        options={
            "test": Pattern(source=r"\.(js|html)$").model_dump(),
            "minRatio": COMPRESSION_MIN_RATIO,
            "deleteOriginalAssets": True,
        },
    )


def build_plugins(mode: Mode, manifest: list[StaticAsset]) -> PluginSequence:
    """Build the plugin sequence for a mode."""
    plugins = PluginSequence()
    plugins.append(environment_stage(mode))
    plugins.append(copy_stage(manifest))
    plugins.append(stylesheet_extract_stage())
    plugins.append(lint_stage())
    plugins.append(translations_stage())

    if mode.is_production:
        plugins.prepend(compression_stage())

    return plugins


def build_rules() -> list[ModuleRule]:
    """Build the module rules.

    The special stylesheet rule precedes the generic stylesheet rule,
    since both match ``.scss`` files.
    """
    special = SPECIAL_STYLESHEET.replace(".", r"\.")
    return [
        ModuleRule(
            test=Pattern(source=r"\.(js|jsx)$"),
            exclude=Pattern(source=DEPENDENCY_DIR),
            use=[LoaderSpec(loader="babel-loader")],
        ),
        ModuleRule(
            test=Pattern(source=f"{special}$"),
            use=build_chain(is_special_sheet=True),
        ),
        ModuleRule(
            test=Pattern(source=r"\.s?css$"),
            exclude=Pattern(source=special),
            use=build_chain(is_special_sheet=False),
        ),
    ]


def assemble(
    mode: Mode,
    units: dict[str, BuildUnit],
    manifest: list[StaticAsset],
) -> AssembledPipeline:
    """Assemble entry config, plugin sequence and module rules.

    Args:
        mode: Build mode.
        units: Selected, resolved units.
        manifest: Copy manifest.

    Returns:
        AssembledPipeline for the build plan.

    Example:
        >>> pipeline = assemble(Mode.PRODUCTION, units, manifest)
        >>> pipeline.plugins[0].kind
        'compression'
    """
    pipeline = AssembledPipeline(
        entry={name: list(unit.entry_paths) for name, unit in units.items()},
        plugins=build_plugins(mode, manifest),
        rules=build_rules(),
    )
    logger.debug(
        "pipeline_assembled",
        mode=mode.value,
        plugins=pipeline.plugins.kinds(),
        rules=len(pipeline.rules),
    )
    return pipeline
