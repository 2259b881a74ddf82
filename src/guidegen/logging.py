"""Console logging setup based on Rich."""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

_console: Optional[Console] = None


def rich_console() -> Console:
    """Return the shared stderr console."""
    global _console
    if _console is None:
        _console = Console(stderr=True)
    return _console


def configure_logging(verbose: bool = False) -> logging.Handler:
    """Route guidegen log records to the Rich console.

    Progress lines are INFO records, verbose mode adds DEBUG records.
    """
    handler = RichHandler(
        console=rich_console(),
        show_time=False,
        show_path=verbose,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    package_logger = logging.getLogger("guidegen")
    for existing in list(package_logger.handlers):
        if isinstance(existing, RichHandler):
            package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return handler
