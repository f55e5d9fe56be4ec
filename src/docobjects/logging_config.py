"""
Logging setup for docobjects sessions.

Registry writes and re-keys are logged at DEBUG by module loggers under the
``docobjects`` namespace. ``setup_logging`` wires that namespace to a rich
console handler (and optionally a file) according to a RegistryConfig, so
the same config that picks separators also picks how chatty a session is.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

from .config import RegistryConfig

LOGGER_NAME = "docobjects"

LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}


def setup_logging(config: RegistryConfig) -> logging.Logger:
    """
    Attach handlers to the ``docobjects`` logger for one session.

    Handlers installed by an earlier call are replaced, so calling this once
    per CLI invocation (or per test) never duplicates output.

    Args:
        config: Session configuration; ``verbosity`` sets the level and
            ``log_file``, when given, also receives every record

    Returns:
        The configured ``docobjects`` logger
    """
    level = LEVELS[config.verbosity]
    verbose = config.verbosity == "verbose"

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_path=verbose,
    )
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s")
        )
        logger.addHandler(file_handler)

    # The file handler sees DEBUG records even when the console is quieter
    logger.setLevel(logging.DEBUG if config.log_file else level)
    logger.propagate = False
    return logger
