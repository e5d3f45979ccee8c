"""Click CLI with print, diff, and serve subcommands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable

import click

from monobuild.analysis import ScopeError
from monobuild.git import GitError
from monobuild.manifests import ManifestError
from monobuild.models import (
    DiffMode,
    MonobuildConfig,
    OutputFormat,
    OutputOptions,
    OutputType,
    Scope,
)
from monobuild.pipeline import PipelineResult, format_output, run_diff, run_print


def _input_options(fn: Callable) -> Callable:
    fn = click.option(
        "--root", type=click.Path(exists=True, file_okay=False, path_type=Path),
        default=".", help="Repository root to search and diff in",
    )(fn)
    fn = click.option(
        "--dependency-files", default="**/Dependencies", show_default=True,
        help="Search pattern for dependency files",
    )(fn)
    fn = click.option(
        "-f", "--file", "repo_manifest", type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Full manifest file (as produced by 'print --full')",
    )(fn)
    return fn


def _output_options(fn: Callable) -> Callable:
    fn = click.option("--dependencies", is_flag=True, help="Output the dependencies, not the build schedule")(fn)
    fn = click.option("--dot", is_flag=True, help="Print in DOT format for GraphViz")(fn)
    fn = click.option("--full", is_flag=True, help="Print the full dependency graph including strengths")(fn)
    fn = click.option("--scope", help="Scope output to a single component and its dependencies")(fn)
    fn = click.option("--top-level", is_flag=True, help="Only list top-level components that nothing depends on")(fn)
    return fn


def _output_type(dependencies: bool, full: bool) -> OutputType:
    if full:
        return OutputType.FULL
    if dependencies:
        return OutputType.DEPENDENCIES
    return OutputType.SCHEDULE


def _run(pipeline: Callable[[], PipelineResult], options: OutputOptions) -> None:
    try:
        result = pipeline()
    except (ManifestError, ScopeError, GitError) as e:
        raise click.ClickException(str(e))

    click.echo(format_output(result, options), nl=False)


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Log debug information to stderr")
def cli(verbose: bool):
    """monobuild: decide what to build in a monorepo, given a set of changes."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )


@cli.command("print")
@_input_options
@_output_options
def print_(
    root: Path,
    dependency_files: str,
    repo_manifest: Path | None,
    dependencies: bool,
    dot: bool,
    full: bool,
    scope: str | None,
    top_level: bool,
):
    """Print the full build schedule or dependency graph.

    Each line of text output is a component and its dependencies:

    <component>: <dependency>, <dependency>, ...
    """
    config = MonobuildConfig(
        root=root,
        dependency_files=dependency_files,
        repo_manifest=repo_manifest,
        scope=Scope(component=scope, top_level=top_level),
    )
    options = OutputOptions(
        format=OutputFormat.DOT if dot else OutputFormat.TEXT,
        type=_output_type(dependencies, full),
    )
    _run(lambda: run_print(config), options)


@cli.command()
@click.argument("source", required=False, type=click.Choice(["-"]))
@_input_options
@_output_options
@click.option("--base-branch", default="master", show_default=True, help="Base branch to use for comparison")
@click.option("--base-commit", default="HEAD^1", show_default=True,
              help="Base commit to compare with in main-branch mode")
@click.option("--main-branch", is_flag=True, help="Run in main branch mode (only compare with the base commit)")
@click.option("--rebuild-strong", is_flag=True, help="Include all strong dependencies of affected components")
@click.option("--github-matrix", is_flag=True, help="Output a JSON list usable as a GitHub Actions build matrix")
def diff(
    source: str | None,
    root: Path,
    dependency_files: str,
    repo_manifest: Path | None,
    dependencies: bool,
    dot: bool,
    full: bool,
    scope: str | None,
    top_level: bool,
    base_branch: str,
    base_commit: str,
    main_branch: bool,
    rebuild_strong: bool,
    github_matrix: bool,
):
    """Build schedule for components affected by changes.

    Changed files are taken from git by default. Pass "-" to read them
    from stdin instead, one path per line.
    """
    changed_files: list[str] = []
    if source == "-":
        mode = DiffMode.DIRECT
        stdin = click.get_text_stream("stdin")
        changed_files = [line.strip() for line in stdin if line.strip()]
    elif main_branch:
        mode = DiffMode.MAIN_BRANCH
    else:
        mode = DiffMode.FEATURE_BRANCH

    if dot:
        output_format = OutputFormat.DOT
    elif github_matrix:
        output_format = OutputFormat.GITHUB_MATRIX
    else:
        output_format = OutputFormat.TEXT

    config = MonobuildConfig(
        root=root,
        dependency_files=dependency_files,
        repo_manifest=repo_manifest,
        scope=Scope(component=scope, top_level=top_level),
        mode=mode,
        base_branch=base_branch,
        base_commit=base_commit,
        changed_files=changed_files,
        rebuild_strong=rebuild_strong,
    )
    options = OutputOptions(format=output_format, type=_output_type(dependencies, full))
    _run(lambda: run_diff(config), options)


@cli.command()
@click.option("--port", "-p", default=8421, help="Port number")
@click.option("--host", default="127.0.0.1", help="Host address")
def serve(port: int, host: str):
    """Start the HTTP API."""
    try:
        import uvicorn
    except ImportError:
        raise click.ClickException(
            "uvicorn is required for the HTTP API. "
            "Install with: pip install 'monobuild[web]'"
        )

    from monobuild.web import create_app

    click.echo(f"Starting monobuild API at http://{host}:{port}")
    uvicorn.run(create_app(), host=host, port=port, log_level="info")


if __name__ == "__main__":
    cli()
