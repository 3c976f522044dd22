"""Logging setup for the CLI.

Console output for the user goes through a Rich `Console` on stdout; diagnostic
logging goes through the stdlib `logging` tree, rendered by `RichHandler` on
stderr so both streams stay readable.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAMES = ("core", "adapters", "cli")
VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_handler: RichHandler | None = None


def _normalize_level(level: str) -> str | None:
    normalized = (level or "").strip().upper()
    return normalized if normalized in VALID_LEVELS else None


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a single RichHandler to the project loggers and set their level.

    Safe to call more than once: the handler is created once and only the
    level changes on later calls.
    """

    global _handler

    normalized = _normalize_level(level)
    if _handler is None:
        _handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        _handler.setFormatter(logging.Formatter("%(name)s: %(message)s", datefmt="[%X]"))

    for name in ROOT_LOGGER_NAMES:
        logger = logging.getLogger(name)
        if _handler not in logger.handlers:
            logger.addHandler(_handler)
        logger.setLevel(getattr(logging, normalized or "WARNING"))
        logger.propagate = False

    cli_logger = logging.getLogger("cli")
    if normalized is None:
        cli_logger.warning("Invalid logging level: %r. Using WARNING.", level)
    return cli_logger
