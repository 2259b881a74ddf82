"""Regenerate guide artifacts whenever the sources change."""

import logging
import pathlib
from typing import Callable, Optional

from watchfiles import watch

from .file_resolver import matches_patterns
from .model import GenerationReport
from .pipeline import GenerateConfig, generate_all, is_output_path

logger = logging.getLogger(__name__)


def _is_relevant(path: pathlib.Path, config: GenerateConfig) -> bool:
    # Our own output must not trigger another run
    if is_output_path(path, config):
        return False
    try:
        rel_path = path.resolve().relative_to(config.sources_root.resolve())
    except ValueError:
        return False
    return matches_patterns(rel_path, config.include, config.ignore)


def watch_and_generate(
    config: GenerateConfig,
    on_report: Optional[Callable[[GenerationReport], None]] = None,
    **watch_kwargs,
) -> None:
    """Generate once, then regenerate everything on every relevant change.

    Errors that end a run are logged and the watch goes on, so that a
    fixed source is picked up on the next save.

    Args:
        config: GenerateConfig with the sources root and output directories
        on_report: Called with the report of every completed run
        **watch_kwargs: Passed on to ``watchfiles.watch``
    """

    def run() -> None:
        try:
            report = generate_all(config)
        except Exception as e:
            logger.error(f"Generation failed: {e}")
            if config.verbose:
                logger.exception("Traceback")
            return
        if on_report is not None:
            on_report(report)

    logger.info(f"Watching {config.sources_root} for changes...")
    run()

    for changes in watch(config.sources_root, **watch_kwargs):
        changed = sorted(
            {
                pathlib.Path(path)
                for _, path in changes
                if _is_relevant(pathlib.Path(path), config)
            }
        )
        if not changed:
            continue
        logger.info(f"Changes detected: {', '.join(str(p) for p in changed)}")
        run()
