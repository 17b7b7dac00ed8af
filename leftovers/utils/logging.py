"""Logging setup for the CLI.

The cleanup engine writes its semantic lines (prompts aside) to the
"leftovers" logger; this module decides how they reach the terminal.
"""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from ..cleanup.kind import LOGGER_NAME

# Third-party loggers that are only interesting when debugging.
NOISY_LOGGERS = ("boto3", "botocore", "urllib3", "googleapiclient", "google.auth")


def setup_logging(level: str = "INFO", verbose: bool = False, console: Optional[Console] = None) -> logging.Logger:
    """Configure the "leftovers" logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        verbose: Show timestamps, levels and source locations, and let SDK loggers through
        console: Rich console to write to (default: rich's global console)

    Returns:
        The configured "leftovers" logger
    """
    handler = RichHandler(
        console=console,
        show_time=verbose,
        show_level=verbose,
        show_path=verbose,
        markup=False,
        rich_tracebacks=verbose,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)

    return logger
