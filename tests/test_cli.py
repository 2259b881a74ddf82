"""Tests for the CLI interface."""

import pathlib
import shutil
from unittest.mock import patch

from click.testing import CliRunner

from guidegen.cli import main

examples_dir = pathlib.Path(__file__).parent / "examples"


def output_args(tmp_path: pathlib.Path):
    return [
        "--docs-out",
        str(tmp_path / "out" / "docs"),
        "--examples-out",
        str(tmp_path / "out" / "examples"),
        "--export-out",
        str(tmp_path / "out" / "export"),
    ]


class TestCLIGenerate:
    """Test the 'generate' command."""

    def test_generate_directory(self, tmp_path):
        root = tmp_path / "docs"
        shutil.copytree(examples_dir, root)
        runner = CliRunner()

        result = runner.invoke(main, ["generate", str(root), *output_args(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "Generated 2 sources (5 files)" in result.output
        assert (tmp_path / "out" / "docs" / "animation" / "basicAnimations.markdown").exists()
        assert (tmp_path / "out" / "docs" / "index.markdown").exists()
        assert (
            tmp_path / "out" / "export" / "50_Animation" / "C50_BasicAnimation000.kt"
        ).exists()

    def test_generate_with_web_root_url(self, tmp_path):
        root = tmp_path / "docs"
        shutil.copytree(examples_dir, root)
        runner = CliRunner()

        result = runner.invoke(
            main,
            [
                "generate",
                str(root),
                *output_args(tmp_path),
                "--web-root-url",
                "https://example.org/repo",
                "--source-label",
                "src/main/kotlin/docs",
            ],
        )

        assert result.exit_code == 0, result.output
        exported = tmp_path / "out" / "export" / "50_Animation" / "C50_BasicAnimation000.kt"
        assert (
            "https://example.org/repo/examples/50_Animation/C50_BasicAnimation000.kt"
            in exported.read_text()
        )
        page = tmp_path / "out" / "docs" / "index.markdown"
        assert "# Edit 'src/main/kotlin/docs/home.kt' instead." in page.read_text()

    def test_generate_reports_skipped_sources(self, tmp_path):
        root = tmp_path / "docs"
        shutil.copytree(examples_dir, root)
        (root / "broken.kt").write_text('@file:URL("broken")\n\nfun main() {\n    @Text 1\n}\n')
        runner = CliRunner()

        result = runner.invoke(main, ["generate", str(root), *output_args(tmp_path)])

        assert result.exit_code == 1
        assert "Skipped broken.kt" in result.output
        # The other sources are still generated
        assert (tmp_path / "out" / "docs" / "index.markdown").exists()

    def test_generate_rejects_markdown_sources(self, tmp_path):
        root = tmp_path / "docs"
        shutil.copytree(examples_dir, root)
        (root / "old.md").write_text("# Old guide\n")
        runner = CliRunner()

        result = runner.invoke(main, ["generate", str(root), *output_args(tmp_path)])

        assert result.exit_code == 1
        assert "Please convert it to .kt" in result.output

    def test_generate_nonexistent_root(self):
        runner = CliRunner()
        result = runner.invoke(main, ["generate", "nonexistent-dir"])

        assert result.exit_code != 0
        assert "does not exist" in result.output.lower()


class TestCLIClassNames:
    """Test the 'class-names' command."""

    def test_class_names(self, tmp_path):
        root = tmp_path / "docs"
        shutil.copytree(examples_dir, root)
        runner = CliRunner()

        result = runner.invoke(main, ["class-names", str(root)])

        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            "examples.50_Animation.C50_BasicAnimationKt",
            "examples.homeKt",
        ]


class TestCLIWatch:
    """Test the 'watch' command."""

    def test_watch_builds_config(self, tmp_path):
        root = tmp_path / "docs"
        root.mkdir()
        runner = CliRunner()

        with patch("guidegen.cli.watcher.watch_and_generate") as mock_watch:
            result = runner.invoke(
                main,
                ["watch", str(root), *output_args(tmp_path), "--include", "*.kt"],
            )

        assert result.exit_code == 0, result.output
        mock_watch.assert_called_once()
        config = mock_watch.call_args.args[0]
        assert config.sources_root == root
        assert config.include == ["*.kt"]
        assert config.docs_output_dir == tmp_path / "out" / "docs"
