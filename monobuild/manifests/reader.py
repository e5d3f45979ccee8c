"""Manifest model: parse declared dependencies and validate them.

Two input formats are understood:

* per-component manifests, one file per component directory, one
  dependency per line (``!name`` for a strong dependency, ``#`` comments);
* a whole-repository manifest, one ``component: dep, !dep, ...`` line per
  component, as produced by ``monobuild print --full``.

Problems are accumulated rather than raised one at a time, so a single run
reports every broken manifest. Readers return ``(components, dependencies,
errors)`` and callers must not use the graph when ``errors`` is non-empty.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Iterable

from monobuild.graph import Graph
from monobuild.models import Dependency, Edge, Kind

logger = logging.getLogger(__name__)


class ManifestError(Exception):
    """Every problem found while loading manifests."""

    def __init__(self, errors: list[str], message: str = "cannot load dependencies:"):
        self.errors = list(errors)
        self.message = message
        super().__init__("\n".join([message, *self.errors]))


@dataclass
class Dependencies:
    """Declared dependencies per component, before graph normalisation."""
    deps: dict[str, list[Dependency]] = field(default_factory=dict)

    def as_graph(self) -> Graph:
        return Graph({
            component: [Edge(d.name, d.kind) for d in declared]
            for component, declared in self.deps.items()
        })


def parse_dependency(token: str) -> Dependency | None:
    """Parse one declaration. Returns None for blank lines and comments.

    Raises ValueError when a strong marker has no name after it.
    """
    dep = token.strip()
    if not dep or dep.startswith("#"):
        return None

    kind = Kind.WEAK
    if dep.startswith("!"):
        kind = Kind.STRONG
        dep = dep[1:].strip()

    dep = dep.rstrip("/")
    if not dep:
        raise ValueError(f"malformed dependency: {token.strip()}")

    return Dependency(dep, kind)


def parse_manifest(text: str) -> tuple[list[Dependency], list[str]]:
    """Parse the body of a per-component manifest."""
    dependencies: list[Dependency] = []
    errors: list[str] = []

    for number, line in enumerate(text.splitlines(), start=1):
        try:
            dep = parse_dependency(line)
        except ValueError as e:
            errors.append(f"line {number}: {e}")
            continue
        if dep is not None:
            dependencies.append(dep)

    return dependencies, errors


def component_of(manifest_path: str | PurePosixPath) -> str:
    """The component a manifest belongs to is the directory containing it."""
    return PurePosixPath(manifest_path).parent.as_posix()


def read_manifest(path: str, root: Path | None = None) -> tuple[str, list[Dependency], list[str]]:
    """Read a single manifest file at ``path`` (relative to ``root``)."""
    component = component_of(path)
    full_path = (root or Path(".")) / path

    try:
        text = full_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return component, [], [f"cannot open dependency manifest {path}: {e}"]

    dependencies, errors = parse_manifest(text)
    errors = [f"bad dependency manifest {path}, {err}" for err in errors]
    return component, dependencies, errors


def validate(components: Iterable[str], dependencies: Dependencies) -> list[str]:
    """Report every dependency that names an unknown component."""
    known = set(components)
    return [
        f"unknown dependency '{dep.name}' of '{component}'"
        for component, declared in dependencies.deps.items()
        for dep in declared
        if dep.name not in known
    ]


def read_manifests(
    paths: Iterable[str],
    root: Path | None = None,
    depend_on_self: bool = False,
) -> tuple[list[str], Dependencies, list[str]]:
    """Read per-component manifests and validate them together."""
    components: list[str] = []
    dependencies = Dependencies()
    errors: list[str] = []

    paths = list(paths)
    for path in paths:
        component, deps, problems = read_manifest(path, root)
        if problems:
            errors.extend(problems)
            continue

        if depend_on_self:
            deps = [Dependency(component, Kind.WEAK), *deps]

        components.append(component)
        dependencies.deps[component] = deps

    errors.extend(validate(components, dependencies))

    logger.debug(
        "read %d manifest(s): %d component(s), %d error(s)",
        len(paths), len(components), len(errors),
    )
    return components, dependencies, errors


def read_repo_manifest(
    manifest: str,
    depend_on_self: bool = False,
) -> tuple[list[str], Dependencies, list[str]]:
    """Read a whole-repository manifest (``component: dep, !dep, ...``)."""
    components: list[str] = []
    dependencies = Dependencies()
    errors: list[str] = []

    for line in manifest.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        parts = line.split(":")
        if len(parts) != 2:
            errors.append(
                f"bad line format: '{line}' expected 'component: dependency, dependency, ...'"
            )
            continue

        component = parts[0].strip()
        if component not in dependencies.deps:
            components.append(component)

        deps: list[Dependency] = []
        for token in parts[1].split(","):
            if not token.strip():
                continue
            try:
                dep = parse_dependency(token)
            except ValueError as e:
                errors.append(f"{e} (in '{line}')")
                continue
            if dep is not None:
                deps.append(dep)

        if depend_on_self:
            deps = [Dependency(component, Kind.WEAK), *deps]

        dependencies.deps[component] = deps

    errors.extend(validate(components, dependencies))
    return components, dependencies, errors
