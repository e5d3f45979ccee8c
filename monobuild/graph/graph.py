"""Dependency graph core: coloured directed graph over component names.

The graph may contain cycles. Every transformation returns a new Graph and
queries never fail: vertices the graph does not know simply have no edges.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping

from monobuild.models import Edge, Kind


class Graph:
    """Immutable mapping of vertex -> outgoing edges, always normalised.

    Every vertex referenced as a source or as an edge target has an entry,
    so enumerating vertices never needs a pass over edge targets.
    """

    __slots__ = ("_edges",)

    def __init__(self, edges: Mapping[str, Iterable[Edge]] | None = None):
        normalised: dict[str, dict[str, Kind]] = {}

        for vertex, vertex_edges in (edges or {}).items():
            targets = normalised.setdefault(vertex, {})
            for edge in vertex_edges:
                # first edge to a target wins
                targets.setdefault(edge.target, edge.kind)
                normalised.setdefault(edge.target, {})

        self._edges = normalised

    @classmethod
    def from_adjacency(
        cls,
        adjacency: Mapping[str, Iterable[str]],
        kind: Kind = Kind.WEAK,
    ) -> Graph:
        """Build a graph from uncoloured adjacency lists using a single kind."""
        return cls({
            vertex: [Edge(target, kind) for target in targets]
            for vertex, targets in adjacency.items()
        })

    # ── Inspection ────────────────────────────────────────────

    def vertices(self) -> list[str]:
        return sorted(self._edges)

    def edges(self, vertex: str) -> list[Edge]:
        """Outgoing edges of a vertex, sorted by target."""
        targets = self._edges.get(vertex, {})
        return [Edge(t, targets[t]) for t in sorted(targets)]

    def as_strings(self) -> dict[str, list[str]]:
        return {v: sorted(targets) for v, targets in self._edges.items()}

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._edges

    def __iter__(self) -> Iterator[str]:
        return iter(self.vertices())

    def __len__(self) -> int:
        return len(self._edges)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return self._edges == other._edges

    def __repr__(self) -> str:
        parts = []
        for vertex in self.vertices():
            deps = ", ".join(
                f"!{e.target}" if e.kind is Kind.STRONG else e.target
                for e in self.edges(vertex)
            )
            parts.append(f"{vertex}: [{deps}]")
        return f"Graph({'; '.join(parts)})"

    # ── Reachability ──────────────────────────────────────────

    def children(self, vertices: Iterable[str]) -> set[str]:
        """Union of the direct edge targets of the given vertices."""
        result: set[str] = set()
        for vertex in vertices:
            result.update(self._edges.get(vertex, ()))
        return result

    def descendants(self, vertices: Iterable[str]) -> set[str]:
        """All vertices reachable by a path of length >= 1.

        A starting vertex is only included when a cycle leads back to it.
        """
        descendants = self.children(vertices)
        discovered = set(descendants)

        while discovered:
            discovered = self.children(discovered) - descendants
            descendants |= discovered

        return descendants

    def roots(self) -> set[str]:
        """Vertices with no incoming edge."""
        targets = self.children(self._edges)
        return {v for v in self._edges if v not in targets}

    # ── Transformations ───────────────────────────────────────

    def reverse(self) -> Graph:
        reversed_edges: dict[str, list[Edge]] = {v: [] for v in self._edges}

        for vertex, targets in self._edges.items():
            for target, kind in targets.items():
                reversed_edges[target].append(Edge(vertex, kind))

        return Graph(reversed_edges)

    def subgraph(self, nodes: Iterable[str]) -> Graph:
        """Keep only the given vertices and the edges between them."""
        keep = set(nodes)
        return Graph({
            vertex: [Edge(t, k) for t, k in targets.items() if t in keep]
            for vertex, targets in self._edges.items()
            if vertex in keep
        })

    def filter_edges(self, kinds: Iterable[Kind]) -> Graph:
        """Keep every vertex but only edges of the given kinds."""
        allowed = set(kinds)
        return Graph({
            vertex: [Edge(t, k) for t, k in targets.items() if k in allowed]
            for vertex, targets in self._edges.items()
        })
