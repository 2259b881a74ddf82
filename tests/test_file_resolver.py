"""Test discovery of guide sources."""

import pathlib

from guidegen.file_resolver import find_sources, matches_patterns


def touch(path: pathlib.Path) -> pathlib.Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("")
    return path


def test_find_sources_is_recursive_and_sorted(tmp_path):
    b = touch(tmp_path / "b.kt")
    a = touch(tmp_path / "20_Shapes" / "a.kt")
    legacy = touch(tmp_path / "10_Basics" / "legacy.md")
    touch(tmp_path / "notes.txt")

    assert find_sources(tmp_path) == [legacy, a, b]


def test_find_sources_default_ignores(tmp_path):
    source = touch(tmp_path / "intro.kt")
    touch(tmp_path / "build" / "generated.kt")
    touch(tmp_path / ".gradle" / "cache.kt")

    assert find_sources(tmp_path) == [source]


def test_find_sources_custom_patterns(tmp_path):
    keep = touch(tmp_path / "shapes" / "C10_Circles.kt")
    touch(tmp_path / "shapes" / "draft_C20_Squares.kt")
    touch(tmp_path / "shapes" / "legacy.md")

    found = find_sources(tmp_path, include=["*.kt"], ignore=["draft_*"])

    assert found == [keep]


def test_matches_patterns_uses_relative_path():
    rel = pathlib.PurePosixPath("drafts/intro.kt")

    assert matches_patterns(rel, ["*.kt"])
    assert not matches_patterns(rel, ["*.kt"], ["drafts"])
    assert not matches_patterns(rel, ["*.md"])
    assert matches_patterns(rel, ["drafts/*.kt"])
