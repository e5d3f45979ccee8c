"""monobuild: decide what to build in a monorepo, given a set of changes."""

__version__ = "0.1.0"
