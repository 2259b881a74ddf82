"""Path and namespace helpers shared by the pipeline and the class-name report."""

import pathlib

from .constants import EXAMPLES_NAMESPACE, INDEX_PADDING

ESCAPE = "`"


def relative_dir(root: pathlib.Path, file: pathlib.Path) -> pathlib.PurePosixPath:
    """Return the parent directory of ``file`` relative to ``root``.

    A file directly inside ``root`` yields the empty path.
    """
    rel = pathlib.PurePath(file).relative_to(root)
    return pathlib.PurePosixPath(*rel.parent.parts)


def dir_string(rel_dir: pathlib.PurePath) -> str:
    """Render a relative directory with ``/`` separators, ``""`` when empty."""
    return "/".join(rel_dir.parts)


def escape_segment(segment: str) -> str:
    """Wrap a path segment in backticks unless it is purely alphabetic.

    Segments that are already wrapped are returned unchanged.
    """
    if len(segment) > 1 and segment.startswith(ESCAPE) and segment.endswith(ESCAPE):
        return segment
    if any(not ch.isalpha() for ch in segment):
        return f"{ESCAPE}{segment}{ESCAPE}"
    return segment


def escape_path(rel_dir: pathlib.PurePath) -> str:
    """Join the escaped segments of ``rel_dir`` with dots."""
    return ".".join(escape_segment(part) for part in rel_dir.parts)


def examples_namespace(rel_dir: pathlib.PurePath) -> str:
    label = escape_path(rel_dir)
    return EXAMPLES_NAMESPACE + (f".{label}" if label else "")


def strip_escapes(label: str) -> str:
    return label.replace(ESCAPE, "")


def padded_index(index: int) -> str:
    return str(index).zfill(INDEX_PADDING)
