"""Console logging configuration for the CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER_NAME = "contract2markdown"

_VERBOSITY_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def verbosity_level(verbosity: int) -> int:
    """Map the number of ``-v`` flags to a logging level."""
    return _VERBOSITY_LEVELS.get(verbosity, logging.DEBUG)


def configure_logging(verbosity: int = 0, *, console: Console | None = None) -> logging.Handler:
    """Route package log records to a rich handler on stderr.

    Handlers installed by an earlier call are replaced, so repeated CLI
    invocations in one process do not duplicate output.

    Args:
      verbosity: 0 for warnings only, 1 for info, 2 or more for debug.
      console: Console to render to; defaults to a new stderr console.

    Returns:
      The installed handler.
    """
    level = verbosity_level(verbosity)
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    for existing in list(package_logger.handlers):
        if isinstance(existing, RichHandler):
            package_logger.removeHandler(existing)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=verbosity > 1,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return handler
