"""Selection refinements applied before output.

Each refinement returns a new Selection. Callers apply them in a fixed
order: scope, then top-level, then strong widening, which must come last.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from monobuild.graph import Graph


class ScopeError(ValueError):
    """Raised when scoping to something that is not a component."""


@dataclass(frozen=True)
class Selection:
    components: frozenset[str]
    selected: frozenset[str]

    @classmethod
    def of(cls, components: Iterable[str], selected: Iterable[str]) -> Selection:
        return cls(frozenset(components), frozenset(selected))

    def scope_to(self, component: str, dependencies: Graph) -> Selection:
        """Restrict to ``component`` and everything it depends on."""
        if component not in self.components:
            raise ScopeError(f"cannot scope to '{component}', not a component")

        scoped = dependencies.descendants({component}) | {component}
        return replace(self, selected=self.selected & scoped)

    def only_top(self, dependencies: Graph) -> Selection:
        """Restrict to components nothing depends on."""
        return replace(self, selected=self.selected & dependencies.roots())

    def add_strong(self, build_schedule: Graph) -> Selection:
        """Add every component the selection transitively depends on strongly.

        ``build_schedule`` is the strong-only dependency graph.
        """
        strong = build_schedule.descendants(self.selected)
        return replace(self, selected=self.selected | strong)

    def sorted(self) -> list[str]:
        return sorted(self.selected)
