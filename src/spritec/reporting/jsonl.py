from __future__ import annotations

import json
import sys
from typing import Any, Dict
from .base import Reporter, TaskStatus, get_verbosity

# "<Prefix> summary: k=v k=v" status lines also produce a structured event.
SUMMARY_TYPES = {
    "document summary": "document",
    "compile summary": "compile",
    "write summary": "write",
    "manifest summary": "manifest",
    "inspect summary": "inspect",
}


def parse_summary(message: str) -> tuple[str, Dict[str, str]] | None:
    head, sep, tail = message.partition(":")
    if not sep:
        return None
    stype = SUMMARY_TYPES.get(head.strip().lower())
    if stype is None:
        return None
    pairs = dict(
        token.split("=", 1) for token in tail.split() if "=" in token
    )
    return stype, pairs


class JsonLinesReporter(Reporter):
    """One JSON object per line, for tooling that drives the compiler."""

    def __init__(self, stream=None):
        super().__init__()
        self.stream = stream or sys.stdout

    def _emit(self, obj: dict) -> None:
        self.stream.write(json.dumps(obj, sort_keys=True) + "\n")

    def start_task(
        self, task_id: str, name: str, total: int | None = None, **meta: Any
    ) -> None:
        self._open(task_id, name, total, meta)
        self._emit(
            {"event": "task_start", "id": task_id, "name": name, "total": total, **meta}
        )

    def advance(self, task_id: str, step: int = 1, **meta: Any) -> None:
        rec = self._step(task_id, step, meta)
        if rec is None:
            return
        self._emit(
            {"event": "task_progress", "id": task_id, "completed": rec.completed, **meta}
        )

    def end_task(
        self,
        task_id: str,
        status: TaskStatus = TaskStatus.SUCCESS,
        **final_meta: Any,
    ) -> None:
        rec = self._close(task_id, status, final_meta)
        if rec is None:
            return
        self._emit(
            {
                "event": "task_end",
                "id": task_id,
                "status": status.name.lower(),
                "completed": rec.completed,
                "total": rec.total,
                "duration_seconds": rec.duration,
                **rec.meta,
            }
        )

    def _message(self, message: str, level: str, **fields: Any) -> None:
        self._emit({"event": "status", "message": message, "level": level, **fields})

    def status(self, message: str, **fields: Any) -> None:
        summary = parse_summary(message)
        if summary is not None:
            stype, pairs = summary
            self._emit(
                {
                    "event": "summary",
                    "summary_type": stype,
                    "level": "info",
                    "raw": message,
                    **pairs,
                    **fields,
                }
            )
        self._message(message, "info", **fields)

    def verbose(self, message: str, *, level: int = 1, **fields: Any) -> None:
        if get_verbosity() < level:
            return
        self._message(message, f"verbose{level}", vlevel=level, **fields)

    def error(self, message: str, **fields: Any) -> None:
        self._message(message, "error", **fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._message(message, "warning", **fields)

    def section(self, title: str) -> None:
        self._emit({"event": "section", "title": title})
