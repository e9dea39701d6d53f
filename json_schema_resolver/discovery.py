"""
Enumeration of schema files from command line paths.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


def discover_schema_files(paths: Iterable[Path | str], pattern: str = "*.json", recursive: bool = True) -> list[Path]:
    """
    Expand files and directories into a list of schema files.

    Files are kept as given. Directories are searched with pattern and
    their matches sorted, so runs are reproducible.

    Args:
        paths: Files and/or directories
        pattern: Glob pattern applied inside directories
        recursive: Whether to search directories recursively

    Returns:
        Schema files without duplicates, in discovery order
    """
    found: list[Path] = []
    for path in map(Path, paths):
        if path.is_dir():
            matches = path.rglob(pattern) if recursive else path.glob(pattern)
            found.extend(sorted(p for p in matches if p.is_file()))
        else:
            found.append(path)
    return list(dict.fromkeys(found))
