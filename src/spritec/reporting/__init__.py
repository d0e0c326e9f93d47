"""Progress and status reporting backends (plain, rich, json, silent)."""

from .base import (
    COMPILE_TASK,
    WRITE_TASK,
    Reporter,
    TaskStatus,
    format_stats,
    get_reporter,
    get_verbosity,
    set_reporter,
    set_verbosity,
    task,
)
from .jsonl import JsonLinesReporter
from .plain import PlainReporter
from .rich_reporter import RichReporter
from .silent import SilentReporter

REPORTERS = {
    "plain": PlainReporter,
    "rich": RichReporter,
    "json": JsonLinesReporter,
    "silent": SilentReporter,
}

__all__ = [
    "COMPILE_TASK",
    "WRITE_TASK",
    "Reporter",
    "TaskStatus",
    "format_stats",
    "get_reporter",
    "set_reporter",
    "task",
    "set_verbosity",
    "get_verbosity",
    "PlainReporter",
    "JsonLinesReporter",
    "SilentReporter",
    "RichReporter",
    "REPORTERS",
]
