"""Impact analysis and output selection."""

from monobuild.analysis.impact import filter_components, impacted
from monobuild.analysis.selection import ScopeError, Selection

__all__ = ["ScopeError", "Selection", "filter_components", "impacted"]
