"""Text and GraphViz DOT renderings of a graph, restricted to a selection."""

from __future__ import annotations

import json
from typing import Iterable

from monobuild.graph.graph import Graph
from monobuild.models import Edge, Kind


def _visible(graph: Graph, selection: Iterable[str]) -> list[tuple[str, list[Edge]]]:
    """Selected vertices in sorted order with their edges into the selection."""
    selected = set(selection)
    return [
        (vertex, [e for e in graph.edges(vertex) if e.target in selected])
        for vertex in graph.vertices()
        if vertex in selected
    ]


def to_text(graph: Graph, selection: Iterable[str], full: bool = False) -> str:
    """One ``component: dep, dep`` line per selected component.

    With ``full`` strong dependencies carry a ``!`` prefix so the output can
    be read back as a repository manifest.
    """
    lines = []
    for vertex, edges in _visible(graph, selection):
        names = [
            f"!{e.target}" if full and e.kind is Kind.STRONG else e.target
            for e in edges
        ]
        lines.append(f"{vertex}: {', '.join(names)}\n")
    return "".join(lines)


def to_dot(graph: Graph, selection: Iterable[str]) -> str:
    """Dependency view. Weak edges are dashed, strong edges solid."""
    lines = ["digraph dependencies {\n"]

    for vertex, edges in _visible(graph, selection):
        if not edges:
            lines.append(f'  "{vertex}"\n')

        for edge in edges:
            style = " [style=dashed]" if edge.kind is Kind.WEAK else ""
            lines.append(f'  "{vertex}" -> "{edge.target}"{style}\n')

    lines.append("}\n")
    return "".join(lines)


def to_dot_schedule(graph: Graph, selection: Iterable[str]) -> str:
    """Build schedule view, drawn left to right.

    Edges are reversed so a prerequisite points at what builds after it.
    """
    lines = ['digraph schedule {\n  rankdir="LR"\n  node [shape=box]\n']

    for vertex, edges in _visible(graph, selection):
        if not edges:
            lines.append(f'  "{vertex}"\n')

        for edge in edges:
            lines.append(f'  "{edge.target}" -> "{vertex}"\n')

    lines.append("}\n")
    return "".join(lines)


def to_github_matrix(selection: Iterable[str]) -> str:
    """JSON list usable as a GitHub Actions build matrix."""
    return json.dumps(sorted(set(selection))) + "\n"
