"""Data models for the monobuild pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path


class Kind(enum.Enum):
    """Strength of a dependency, doubling as the colour of a graph edge."""
    WEAK = 1
    STRONG = 2


class DiffMode(enum.Enum):
    FEATURE_BRANCH = "feature-branch"
    MAIN_BRANCH = "main-branch"
    DIRECT = "direct"  # changed files supplied by the caller


class OutputFormat(enum.Enum):
    TEXT = "text"
    DOT = "dot"
    GITHUB_MATRIX = "github-matrix"


class OutputType(enum.Enum):
    SCHEDULE = "schedule"
    DEPENDENCIES = "dependencies"
    FULL = "full"


@dataclass(frozen=True)
class Edge:
    """Outgoing edge of a vertex. The target is the de-duplication key."""
    target: str
    kind: Kind = Kind.WEAK


@dataclass(frozen=True)
class Dependency:
    """A dependency declared in a manifest."""
    name: str
    kind: Kind = Kind.WEAK


@dataclass
class Scope:
    component: str | None = None
    top_level: bool = False


@dataclass
class MonobuildConfig:
    """Configuration for the print and diff pipelines."""
    root: Path = field(default_factory=lambda: Path("."))
    dependency_files: str = "**/Dependencies"
    repo_manifest: Path | None = None
    scope: Scope = field(default_factory=Scope)
    mode: DiffMode = DiffMode.FEATURE_BRANCH
    base_branch: str = "master"
    base_commit: str = "HEAD^1"
    changed_files: list[str] = field(default_factory=list)
    rebuild_strong: bool = False


@dataclass
class OutputOptions:
    format: OutputFormat = OutputFormat.TEXT
    type: OutputType = OutputType.SCHEDULE
