"""Logging setup for the herochat CLI.

Library modules log through ``logging.getLogger(__name__)``; only the CLI
installs a handler, so embedding herochat elsewhere stays silent by default.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "herochat"


def configure_logging(level: int = logging.WARNING, console: Console | None = None) -> logging.Logger:
    """Route herochat log records to stderr through Rich.

    Args:
        level: Minimum level to emit
        console: Console to write to (defaults to a stderr console)

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
