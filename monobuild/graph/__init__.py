"""Dependency graph and its renderers."""

from monobuild.graph.graph import Graph
from monobuild.graph.render import to_dot, to_dot_schedule, to_github_matrix, to_text

__all__ = ["Graph", "to_dot", "to_dot_schedule", "to_github_matrix", "to_text"]
