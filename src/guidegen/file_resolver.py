"""Discovery of guide sources under a sources root."""

import fnmatch
import pathlib
from typing import List, Optional

from .constants import DEFAULT_IGNORE_PATTERNS, DEFAULT_INCLUDE_PATTERNS


def matches_patterns(
    rel_path: pathlib.PurePath,
    include_patterns: List[str],
    ignore_patterns: Optional[List[str]] = None,
) -> bool:
    """Check if a root-relative path matches include and not ignore patterns."""
    file_str = rel_path.as_posix()

    if ignore_patterns:
        for part in rel_path.parts:
            for pattern in ignore_patterns:
                if fnmatch.fnmatch(part, pattern):
                    return False

        for pattern in ignore_patterns:
            if fnmatch.fnmatch(file_str, pattern):
                return False

    return any(
        fnmatch.fnmatch(file_str, pattern) or fnmatch.fnmatch(rel_path.name, pattern)
        for pattern in include_patterns
    )


def find_sources(
    sources_root: pathlib.Path,
    include: Optional[List[str]] = None,
    ignore: Optional[List[str]] = None,
) -> List[pathlib.Path]:
    """Find candidate guide sources below ``sources_root``, sorted by path.

    Deprecated formats are included by default so that the pipeline can
    reject them instead of leaving them out silently.
    """
    if include is None:
        include = list(DEFAULT_INCLUDE_PATTERNS)
    if ignore is None:
        ignore = list(DEFAULT_IGNORE_PATTERNS)

    files = set()
    for pattern in include:
        for file_path in sources_root.rglob(pattern):
            rel_path = file_path.relative_to(sources_root)
            if file_path.is_file() and matches_patterns(rel_path, include, ignore):
                files.add(file_path)

    return sorted(files)
