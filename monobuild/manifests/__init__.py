"""Manifest discovery and parsing."""

from monobuild.manifests.discovery import find_manifests
from monobuild.manifests.reader import (
    Dependencies,
    ManifestError,
    parse_dependency,
    parse_manifest,
    read_manifest,
    read_manifests,
    read_repo_manifest,
    validate,
)

__all__ = [
    "Dependencies",
    "ManifestError",
    "find_manifests",
    "parse_dependency",
    "parse_manifest",
    "read_manifest",
    "read_manifests",
    "read_repo_manifest",
    "validate",
]
