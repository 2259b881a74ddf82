"""CLI interface for guidegen."""

import pathlib
from typing import Optional, Tuple

import click

from . import pipeline, watcher
from .constants import DEFAULT_IGNORE_PATTERNS, DEFAULT_INCLUDE_PATTERNS
from .errors import GuidegenError
from .file_resolver import find_sources
from .logging import configure_logging


def _output_options(f):
    options = [
        click.option(
            "--docs-out",
            type=click.Path(file_okay=False, path_type=pathlib.Path),
            default="build/docs",
            show_default=True,
            help="Directory for generated markdown pages",
        ),
        click.option(
            "--examples-out",
            type=click.Path(file_okay=False, path_type=pathlib.Path),
            default="build/examples",
            show_default=True,
            help="Directory for runnable examples that produce media",
        ),
        click.option(
            "--export-out",
            type=click.Path(file_okay=False, path_type=pathlib.Path),
            default="build/examples-export",
            show_default=True,
            help="Directory for examples published to the examples repository",
        ),
        click.option(
            "--web-root-url",
            type=str,
            help="Public URL of the examples repository, used to link exported examples",
        ),
        click.option(
            "--source-label",
            type=str,
            help="Prefix for source paths cited in page headers (default: the sources directory name)",
        ),
        click.option(
            "--include",
            type=str,
            multiple=True,
            help=f"File patterns to include (default: {', '.join(DEFAULT_INCLUDE_PATTERNS)}). Can be specified multiple times.",
        ),
        click.option(
            "--ignore",
            type=str,
            multiple=True,
            help=f"File patterns to ignore (default: {', '.join(DEFAULT_IGNORE_PATTERNS)}). Can be specified multiple times.",
        ),
        click.option("--verbose", "-v", is_flag=True, help="Verbose output"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def _make_config(
    sources_root: pathlib.Path,
    docs_out: pathlib.Path,
    examples_out: pathlib.Path,
    export_out: pathlib.Path,
    web_root_url: Optional[str],
    source_label: Optional[str],
    include: Tuple[str, ...],
    ignore: Tuple[str, ...],
    verbose: bool,
) -> pipeline.GenerateConfig:
    return pipeline.GenerateConfig(
        sources_root=sources_root,
        docs_output_dir=docs_out,
        examples_output_dir=examples_out,
        export_output_dir=export_out,
        web_root_url=web_root_url,
        source_label=source_label,
        include=list(include) if include else list(DEFAULT_INCLUDE_PATTERNS),
        ignore=list(ignore) if ignore else list(DEFAULT_IGNORE_PATTERNS),
        verbose=verbose,
    )


@click.group()
@click.version_option(package_name="guidegen")
def main():
    """Generate documentation pages and examples from annotated Kotlin guides."""
    pass


@main.command()
@click.argument(
    "sources_root",
    type=click.Path(exists=True, file_okay=False, path_type=pathlib.Path),
)
@_output_options
def generate(sources_root: pathlib.Path, verbose: bool, **options):
    """Generate pages and examples for every guide source in SOURCES_ROOT."""
    configure_logging(verbose)
    config = _make_config(sources_root, verbose=verbose, **options)

    try:
        report = pipeline.generate_all(config)
    except GuidegenError as e:
        raise click.ClickException(str(e))

    click.echo(
        f"Generated {len(report.generated)} sources ({len(report.written)} files)"
    )
    if report.skipped:
        for skipped in report.skipped:
            click.echo(f"Skipped {skipped.source.rel_path}: {skipped.reason}", err=True)
        raise SystemExit(1)


@main.command()
@click.argument(
    "sources_root",
    type=click.Path(exists=True, file_okay=False, path_type=pathlib.Path),
)
@_output_options
def watch(sources_root: pathlib.Path, verbose: bool, **options):
    """Watch SOURCES_ROOT and regenerate everything on change."""
    configure_logging(verbose)
    config = _make_config(sources_root, verbose=verbose, **options)

    def summarize(report):
        click.echo(
            f"Generated {len(report.generated)} sources, skipped {len(report.skipped)}"
        )

    watcher.watch_and_generate(config, on_report=summarize)


@main.command("class-names")
@click.argument(
    "sources_root",
    type=click.Path(exists=True, file_okay=False, path_type=pathlib.Path),
)
@click.option(
    "--include",
    type=str,
    multiple=True,
    help="File patterns to include. Can be specified multiple times.",
)
@click.option(
    "--ignore",
    type=str,
    multiple=True,
    help="File patterns to ignore. Can be specified multiple times.",
)
def class_names(sources_root: pathlib.Path, include: tuple, ignore: tuple):
    """Print the main class name of every guide source, one per line."""
    sources = find_sources(
        sources_root,
        include=list(include) if include else None,
        ignore=list(ignore) if ignore else None,
    )
    for name in pipeline.get_examples_class_names(sources, sources_root):
        click.echo(name)


if __name__ == "__main__":
    main()
