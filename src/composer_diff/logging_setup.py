"""Loguru setup for the CLI."""

from __future__ import annotations

import sys

from loguru import logger


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Route loguru to stderr.

    WARNING+ by default so report output stays clean, INFO with
    ``--verbose`` and DEBUG (with source locations) with ``--debug``.
    """
    logger.remove()

    if debug:
        logger.add(
            sys.stderr,
            level="DEBUG",
            format="<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
            "{name}:{function}:{line} - {message}",
            colorize=True,
        )
        return

    logger.add(
        sys.stderr,
        level="INFO" if verbose else "WARNING",
        format="<level>{level}</level>: {message}",
        colorize=True,
    )
