"""Impact analysis: which components a set of changed files affects."""

from __future__ import annotations

from typing import Iterable

from monobuild.graph import Graph


def filter_components(components: Iterable[str], changed_files: Iterable[str]) -> list[str]:
    """Components containing at least one of the changed files.

    The component must match whole path segments, so ``a/component`` does
    not own ``a/component-v2/file``. The root component ``.`` owns every
    file. Order follows ``components``.
    """
    changed = list(changed_files)
    return [
        component
        for component in components
        if (changed and component == ".")
        or any(path.startswith(component + "/") for path in changed)
    ]


def impacted(changed_components: Iterable[str], dependencies: Graph) -> list[str]:
    """Changed components plus everything that transitively depends on them."""
    changed = set(changed_components)
    dependents = dependencies.reverse().descendants(changed)
    return sorted(dependents | changed)
