"""Logging setup for the idxsync CLI.

Library modules log under names such as `store/cache` and `sync/engine`.
This module routes those records to stderr, colored when stderr is a
terminal, and keeps third-party chatter quiet unless running verbose.
"""

from __future__ import annotations

import logging
import os
import sys

import colorlog

_FORMAT = "[%(asctime)s] <%(name)s> %(levelname)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Libraries whose DEBUG and INFO output only helps when diagnosing
# connection or locking problems
_NOISY_LOGGERS = ("urllib3", "filelock")

_LEVEL_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


def _stderr_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    if os.getenv("NO_COLOR") is None and sys.stderr.isatty():
        handler.setFormatter(
            colorlog.ColoredFormatter(
                fmt="%(log_color)s" + _FORMAT.replace("%(message)s", "%(reset)s%(message)s"),
                datefmt=_DATEFMT,
                log_colors=_LEVEL_COLORS,
            )
        )
    else:
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
    return handler


def configure_logging(verbose: bool) -> None:
    """Install the stderr handler on the root logger.

    Verbose mode shows DEBUG records from every logger, including the
    libraries listed in _NOISY_LOGGERS.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        handlers=[_stderr_handler()],
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET if verbose else logging.WARNING)
