from __future__ import annotations

import sys
from typing import Any
from .base import Reporter, TaskStatus, get_verbosity

ICONS = {
    TaskStatus.SUCCESS: "✔",
    TaskStatus.FAILED: "✖",
    TaskStatus.SKIPPED: "→",
}


class PlainReporter(Reporter):
    """Line-oriented reporter for logs and CI; colors only on a TTY."""

    def __init__(self, stream=None, use_color: bool | None = None):
        super().__init__()
        self.stream = stream or sys.stderr
        if use_color is None:
            use_color = getattr(self.stream, "isatty", lambda: False)()
        self.use_color = use_color

    def _c(self, code: str, text: str) -> str:
        return f"\x1b[{code}m{text}\x1b[0m" if self.use_color else text

    def _line(self, text: str) -> None:
        self.stream.write(text + "\n")

    def start_task(
        self, task_id: str, name: str, total: int | None = None, **meta: Any
    ) -> None:
        self._open(task_id, name, total, meta)

    def advance(self, task_id: str, step: int = 1, **meta: Any) -> None:
        rec = self._step(task_id, step, meta)
        if rec is None:
            return
        item = meta.get("current_item", f"item#{rec.completed}")
        total = rec.total if rec.total is not None else "?"
        self._line(f"   · {rec.name}: {item} ({rec.completed}/{total})")

    def end_task(
        self,
        task_id: str,
        status: TaskStatus = TaskStatus.SUCCESS,
        **final_meta: Any,
    ) -> None:
        rec = self._close(task_id, status, final_meta)
        if rec is not None:
            self._line(f" {ICONS.get(status, '?')} {rec.summary()}")

    def status(self, message: str, **fields: Any) -> None:
        self._line(f"{self._c('32', 'INFO')}: {message}")

    def verbose(self, message: str, *, level: int = 1, **fields: Any) -> None:
        if get_verbosity() < level:
            return
        self._line(f"{self._c('36', f'VERB{level}')}: {message}")

    def error(self, message: str, **fields: Any) -> None:
        self._line(f"{self._c('31', 'ERROR')}: {message}")

    def warning(self, message: str, **fields: Any) -> None:
        self._line(f"{self._c('33', 'WARN')}: {message}")

    def section(self, title: str) -> None:
        self._line(f"\n[{title}]")
