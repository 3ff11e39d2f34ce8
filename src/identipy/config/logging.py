"""Logging setup for the command line."""

from __future__ import annotations

import logging
import sys

_QUIET_LOGGERS = ("sqlalchemy.engine",)


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger on stderr.

    Logger names are only shown at DEBUG, where they help trace an
    identification pass through the engine, proof pass and adapters.
    """

    fmt = (
        "%(asctime)s %(levelname)s [%(name)s] %(message)s"
        if level <= logging.DEBUG
        else "%(levelname)s %(message)s"
    )
    # narration owns stdout
    logging.basicConfig(
        level=level,
        format=fmt,
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=force,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
