"""Logging for spritec.

Records on the ``spritec`` logger are forwarded to the active reporter so
that warnings raised deep in the walker show up in the same stream as
progress and summaries.
"""

from __future__ import annotations

import logging
from .reporting import get_reporter

_LOGGER_NAME = "spritec"
_STEP_PREFIX = "  ->"

__all__ = [
    "get_logger",
    "configure_logging",
    "step",
]


def get_logger() -> logging.Logger:
    return logging.getLogger(_LOGGER_NAME)


class ReporterHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        rep = get_reporter()
        msg = self.format(record)
        if record.levelno >= logging.ERROR:
            rep.error(msg)
        elif record.levelno >= logging.WARNING:
            rep.warning(msg)
        elif record.levelno >= logging.INFO:
            rep.status(msg)
        else:
            rep.verbose(msg)


def configure_logging(verbosity: int = 0) -> None:
    logger = get_logger()
    logger.setLevel(logging.DEBUG if verbosity >= 1 else logging.INFO)
    for h in list(logger.handlers):
        logger.removeHandler(h)
    handler = ReporterHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)


def step(message: str) -> None:
    get_reporter().status(f"{_STEP_PREFIX} {message}")

