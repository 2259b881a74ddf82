"""Test watch mode."""

import pathlib
from unittest.mock import patch

from watchfiles import Change

from guidegen.model import GenerationReport
from guidegen.pipeline import GenerateConfig
from guidegen.watcher import watch_and_generate


def make_config(tmp_path: pathlib.Path) -> GenerateConfig:
    root = tmp_path / "docs"
    root.mkdir()
    return GenerateConfig(
        sources_root=root,
        docs_output_dir=tmp_path / "out" / "docs",
        examples_output_dir=tmp_path / "out" / "examples",
        export_output_dir=root / "exported",
    )


def test_regenerates_on_source_change(tmp_path):
    config = make_config(tmp_path)
    changes = [{(Change.modified, str(config.sources_root / "intro.kt"))}]
    reports = []

    with patch("guidegen.watcher.watch", return_value=iter(changes)), patch(
        "guidegen.watcher.generate_all", return_value=GenerationReport()
    ) as mock_generate:
        watch_and_generate(config, on_report=reports.append)

    # Initial run plus one per change
    assert mock_generate.call_count == 2
    assert len(reports) == 2


def test_ignores_unrelated_and_output_changes(tmp_path):
    config = make_config(tmp_path)
    changes = [
        {(Change.modified, str(config.sources_root / "notes.txt"))},
        {(Change.added, str(config.export_output_dir / "intro000.kt"))},
        {(Change.modified, str(config.sources_root / "build" / "intro.kt"))},
    ]

    with patch("guidegen.watcher.watch", return_value=iter(changes)), patch(
        "guidegen.watcher.generate_all", return_value=GenerationReport()
    ) as mock_generate:
        watch_and_generate(config)

    assert mock_generate.call_count == 1


def test_failed_run_keeps_watching(tmp_path):
    config = make_config(tmp_path)
    changes = [{(Change.modified, str(config.sources_root / "intro.kt"))}]
    reports = []

    with patch("guidegen.watcher.watch", return_value=iter(changes)), patch(
        "guidegen.watcher.generate_all",
        side_effect=[OSError("disk full"), GenerationReport()],
    ) as mock_generate:
        watch_and_generate(config, on_report=reports.append)

    assert mock_generate.call_count == 2
    assert len(reports) == 1
