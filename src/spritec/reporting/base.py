"""Reporter interface shared by the plain, rich, json and silent backends.

The compiler reports two tasks: ``COMPILE_TASK`` advances once per
document, ``WRITE_TASK`` wraps the resource file write. Task records are
kept by the base class so backends only decide how a transition looks.
"""

from __future__ import annotations

import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional

__all__ = [
    "COMPILE_TASK",
    "WRITE_TASK",
    "TaskStatus",
    "TaskRecord",
    "Reporter",
    "set_reporter",
    "get_reporter",
    "set_verbosity",
    "get_verbosity",
    "task",
    "format_stats",
]

COMPILE_TASK = "compile.documents"
WRITE_TASK = "write.resources"

# Task meta keys shown after a finished task, in this order.
STAT_KEYS = ("documents", "groups", "sprites", "images", "bytes")


class TaskStatus(Enum):
    RUNNING = auto()
    SUCCESS = auto()
    FAILED = auto()
    SKIPPED = auto()


@dataclass(slots=True)
class TaskRecord:
    task_id: str
    name: str
    total: Optional[int] = None
    completed: int = 0
    status: TaskStatus = TaskStatus.RUNNING
    start_time: float = field(default_factory=time.time)
    end_time: float | None = None
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def duration(self) -> float:
        return (self.end_time or time.time()) - self.start_time

    @property
    def counts(self) -> str:
        """`` 3/5`` for counted tasks, empty otherwise."""
        return f" {self.completed}/{self.total}" if self.total is not None else ""

    def summary(self) -> str:
        """One-line completion text, e.g. ``Compile documents 2/2 (0.01s) [images=3]``."""
        return (
            f"{self.name}{self.counts} ({self.duration:.2f}s)"
            f"{format_stats(self.meta)}"
        )


def format_stats(meta: Dict[str, Any]) -> str:
    stats = [f"{k}={meta[k]}" for k in STAT_KEYS if k in meta]
    return f" [{' '.join(stats)}]" if stats else ""


_VERBOSITY: int = 0  # -v count from the CLI


def set_verbosity(level: int) -> None:
    global _VERBOSITY
    _VERBOSITY = max(0, level)


def get_verbosity() -> int:
    return _VERBOSITY


class Reporter:
    supports_progress: bool = False

    def __init__(self) -> None:
        self._tasks: Dict[str, TaskRecord] = {}

    def _open(
        self, task_id: str, name: str, total: int | None, meta: Dict[str, Any]
    ) -> TaskRecord:
        rec = TaskRecord(task_id, name, total, meta=dict(meta))
        self._tasks[task_id] = rec
        return rec

    def _step(
        self, task_id: str, step: int, meta: Dict[str, Any]
    ) -> TaskRecord | None:
        # Advancing an unknown task is ignored.
        rec = self._tasks.get(task_id)
        if rec is not None:
            rec.completed += step
            rec.meta.update(meta)
        return rec

    def _close(
        self, task_id: str, status: TaskStatus, meta: Dict[str, Any]
    ) -> TaskRecord | None:
        rec = self._tasks.pop(task_id, None)
        if rec is not None:
            rec.status = status
            rec.end_time = time.time()
            rec.meta.update(meta)
        return rec

    def start_task(
        self, task_id: str, name: str, total: int | None = None, **meta: Any
    ) -> None:
        raise NotImplementedError

    def advance(self, task_id: str, step: int = 1, **meta: Any) -> None:
        raise NotImplementedError

    def end_task(
        self,
        task_id: str,
        status: TaskStatus = TaskStatus.SUCCESS,
        **final_meta: Any,
    ) -> None:
        raise NotImplementedError

    def status(self, message: str, **fields: Any) -> None:
        raise NotImplementedError

    def verbose(self, message: str, *, level: int = 1, **fields: Any) -> None:
        pass

    def error(self, message: str, **fields: Any) -> None:
        raise NotImplementedError

    def warning(self, message: str, **fields: Any) -> None:
        self.status(message, **fields)

    def section(self, title: str) -> None:
        raise NotImplementedError

    def flush(self) -> None:
        pass


_ACTIVE_REPORTER: Reporter | None = None


def set_reporter(rep: Reporter) -> None:
    global _ACTIVE_REPORTER
    _ACTIVE_REPORTER = rep


def get_reporter() -> Reporter:
    global _ACTIVE_REPORTER
    if _ACTIVE_REPORTER is None:
        from .plain import PlainReporter  # local import to avoid cycle

        _ACTIVE_REPORTER = PlainReporter(stream=sys.stderr)
    return _ACTIVE_REPORTER


@contextmanager
def task(task_id: str, name: str, total: int | None = None, **meta: Any):
    """Run a block as a reported task; the yielded dict becomes final meta."""
    rep = get_reporter()
    rep.start_task(task_id, name, total, **meta)
    final: Dict[str, Any] = {}
    try:
        yield final
    except Exception:
        rep.end_task(task_id, TaskStatus.FAILED, **final)
        raise
    else:
        rep.end_task(task_id, TaskStatus.SUCCESS, **final)
