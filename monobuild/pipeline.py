"""Print and diff pipelines: load -> select -> scope -> top-level -> strong -> output."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from monobuild.analysis import Selection, filter_components, impacted
from monobuild.git import Git
from monobuild.graph import Graph, to_dot, to_dot_schedule, to_github_matrix, to_text
from monobuild.manifests import ManifestError, find_manifests, read_manifests, read_repo_manifest
from monobuild.models import DiffMode, Kind, MonobuildConfig, OutputFormat, OutputOptions, OutputType

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Graphs and selected components produced by a pipeline run."""
    components: list[str]
    dependencies: Graph
    schedule: Graph
    selection: list[str]


def load_graph(config: MonobuildConfig) -> tuple[list[str], Graph]:
    """Load and validate manifests. Raises ManifestError on any problem."""
    if config.repo_manifest is not None:
        try:
            text = config.repo_manifest.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestError([f"cannot read repository manifest {config.repo_manifest}: {e}"]) from e
        components, dependencies, errors = read_repo_manifest(text)
    else:
        try:
            paths = find_manifests(config.root, config.dependency_files)
        except (ValueError, NotImplementedError) as e:
            raise ManifestError([f"error finding dependency manifests: {e}"]) from e
        logger.debug("found %d manifest(s) matching %s", len(paths), config.dependency_files)
        components, dependencies, errors = read_manifests(paths, root=config.root)

    if errors:
        raise ManifestError(errors)

    return components, dependencies.as_graph()


def _refine(selection: Selection, config: MonobuildConfig, dependencies: Graph) -> Selection:
    if config.scope.component:
        selection = selection.scope_to(config.scope.component, dependencies)
        logger.debug("scoped to %s: %d component(s)", config.scope.component, len(selection.selected))

    if config.scope.top_level:
        selection = selection.only_top(dependencies)
        logger.debug("top-level only: %d component(s)", len(selection.selected))

    return selection


def run_print(config: MonobuildConfig) -> PipelineResult:
    """Select every component, optionally scoped."""
    components, dependencies = load_graph(config)
    schedule = dependencies.filter_edges([Kind.STRONG])

    selection = Selection.of(components, dependencies.vertices())
    selection = _refine(selection, config, dependencies)

    return PipelineResult(components, dependencies, schedule, selection.sorted())


def run_diff(config: MonobuildConfig, git: Git | None = None) -> PipelineResult:
    """Select components impacted by the changed files."""
    components, dependencies = load_graph(config)

    if config.mode is DiffMode.DIRECT:
        changes = list(config.changed_files)
    else:
        git = git or Git(config.root)
        changes = git.changed_files(config.mode, config.base_branch, config.base_commit)

    changed = filter_components(components, changes)
    logger.debug("%d changed file(s) in %d component(s)", len(changes), len(changed))

    schedule = dependencies.filter_edges([Kind.STRONG])

    selection = Selection.of(components, impacted(changed, dependencies))
    selection = _refine(selection, config, dependencies)

    # must come after scoping and top-level filtering
    if config.rebuild_strong:
        selection = selection.add_strong(schedule)
        logger.debug("with strong dependencies: %d component(s)", len(selection.selected))

    return PipelineResult(components, dependencies, schedule, selection.sorted())


def format_output(result: PipelineResult, options: OutputOptions) -> str:
    """Render a pipeline result for the command line."""
    if options.format is OutputFormat.GITHUB_MATRIX:
        return to_github_matrix(result.selection)

    if options.format is OutputFormat.DOT:
        if options.type is OutputType.SCHEDULE:
            return to_dot_schedule(result.schedule, result.selection)
        return to_dot(result.dependencies, result.selection)

    if options.type is OutputType.FULL:
        return to_text(result.dependencies, result.selection, full=True)
    if options.type is OutputType.DEPENDENCIES:
        return to_text(result.dependencies, result.selection)
    return to_text(result.schedule, result.selection)
