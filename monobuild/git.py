"""Changed-file discovery using git."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable

from monobuild.models import DiffMode

logger = logging.getLogger(__name__)

# Runs a command and returns its stdout, raising CommandError on failure
Executor = Callable[[list[str]], str]


class CommandError(RuntimeError):
    """A command exited with a non-zero status or could not be started."""


class GitError(RuntimeError):
    """Changed files could not be determined."""


def run_command(args: list[str], cwd: Path | None = None) -> str:
    try:
        proc = subprocess.run(args, cwd=cwd, capture_output=True, text=True, check=False)
    except OSError as e:
        raise CommandError(str(e)) from e
    if proc.returncode != 0:
        raise CommandError(proc.stderr.strip() or f"exit status {proc.returncode}")
    return proc.stdout


class Git:
    """Thin wrapper around the two git commands monobuild needs.

    Changed paths are reported relative to ``root`` so they line up with
    component names even when ``root`` is a subdirectory of the repository.
    """

    def __init__(self, root: Path | None = None, executor: Executor | None = None):
        self.root = root
        self._executor = executor or (lambda args: run_command(args, cwd=self.root))

    def diff_base(self, mode: DiffMode, base_branch: str = "master", base_commit: str = "HEAD^1") -> str:
        """Commit to compare HEAD against."""
        if mode is DiffMode.MAIN_BRANCH:
            return _revision(base_commit)

        branch = _revision(base_branch)
        try:
            merge_base = self._executor(["git", "merge-base", "--end-of-options", branch, "HEAD"])
        except CommandError as e:
            raise GitError(f"cannot find merge base with branch '{branch}': {e}") from e

        logger.info("merge base with %s is %s", branch, merge_base.strip())
        return _revision(merge_base)

    def changed_files(self, mode: DiffMode, base_branch: str = "master", base_commit: str = "HEAD^1") -> list[str]:
        base = self.diff_base(mode, base_branch, base_commit)

        try:
            out = self._executor([
                "git", "diff", "--no-commit-id", "--name-only", "--relative", "-r",
                "--end-of-options", base,
            ])
        except CommandError as e:
            raise GitError(f"cannot find changed files: {e}") from e

        files = [line for line in out.splitlines() if line.strip()]
        logger.debug("%d file(s) changed since %s", len(files), base)
        return files


def _revision(ref: str) -> str:
    """A revision safe to hand to git: never read as an option."""
    ref = ref.strip()
    if not ref or ref.startswith("-"):
        raise GitError(f"invalid revision '{ref}'")
    return ref
