"""Source discovery: find the PHP files an analysis run visits."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from attr_validator.exceptions import InvalidPathError

SOURCE_EXTENSION = ".php"


def is_source_file(path: str | Path) -> bool:
    return str(path).lower().endswith(SOURCE_EXTENSION)


def resolve_root(path: str | Path) -> Path:
    """Resolve a root relative to the working directory and check it exists."""
    root = Path(path).expanduser()
    if not root.is_absolute():
        root = Path.cwd() / root
    if not root.exists():
        raise InvalidPathError(str(root), "is not valid")
    return root


def discover_sources(path: str | Path, exclude_dirs: Iterable[str] = ()) -> list[Path]:
    """Return the PHP files under ``path`` in sorted, deterministic order.

    A file root must itself be a ``.php`` file. Directories are walked
    recursively; any file whose name ends in ``.php`` (any case) is kept.
    Directories named in ``exclude_dirs`` are pruned.
    """
    root = resolve_root(path)
    if root.is_file():
        if not is_source_file(root):
            raise InvalidPathError(str(root), "is not a valid php file")
        return [root]

    skip = set(exclude_dirs)
    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in skip)
        for f in sorted(filenames):
            if is_source_file(f):
                files.append(Path(dirpath) / f)
    return files
