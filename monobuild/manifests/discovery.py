"""Find dependency manifests below a repository root."""

from __future__ import annotations

import fnmatch
from pathlib import Path

DEFAULT_SKIP_DIRS = [".git", "node_modules"]


def find_manifests(
    root: Path,
    pattern: str = "**/Dependencies",
    skip_dirs: list[str] | None = None,
) -> list[str]:
    """Return POSIX paths relative to ``root`` of files matching ``pattern``."""
    skip = DEFAULT_SKIP_DIRS if skip_dirs is None else skip_dirs
    found: list[str] = []

    for path in root.glob(pattern):
        if not path.is_file():
            continue
        relative = path.relative_to(root)
        if _should_skip(relative, skip):
            continue
        found.append(relative.as_posix())

    return sorted(found)


def _should_skip(path: Path, skip_dirs: list[str]) -> bool:
    for part in path.parts[:-1]:
        for pattern in skip_dirs:
            if fnmatch.fnmatch(part, pattern):
                return True
    return False
