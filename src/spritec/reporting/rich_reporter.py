from __future__ import annotations

import os
from typing import Any, Dict

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

from .base import Reporter, TaskStatus, get_verbosity

_STATUS_ICON = {
    TaskStatus.SUCCESS: "[green]✔[/]",
    TaskStatus.FAILED: "[red]✖[/]",
    TaskStatus.SKIPPED: "→",
}


def _transient_from_env() -> bool:
    return os.getenv("SPRITEC_PROGRESS_TRANSIENT", "0").lower() in (
        "1",
        "true",
        "yes",
    )


class RichReporter(Reporter):
    """Interactive reporter: one progress bar per counted task."""

    supports_progress = True

    def __init__(self, console: Console | None = None):
        super().__init__()
        self.console = console or Console(stderr=True, highlight=False)
        self._transient = _transient_from_env()
        self.progress: Progress | None = None
        self._bars: Dict[str, TaskID] = {}

    def _ensure_progress(self) -> Progress:
        if self.progress is None:
            self.progress = Progress(
                SpinnerColumn(spinner_name="dots"),
                TextColumn("{task.description}"),
                BarColumn(bar_width=None),
                TextColumn("{task.completed}/{task.total}"),
                TextColumn("[dim]{task.fields[item]}"),
                TimeElapsedColumn(),
                console=self.console,
                transient=self._transient,
                expand=True,
            )
            self.progress.start()
        return self.progress

    def start_task(
        self, task_id: str, name: str, total: int | None = None, **meta: Any
    ) -> None:
        self._open(task_id, name, total, meta)
        if total is None:
            # Uncounted tasks only get a heading.
            self.console.rule(name)
            return
        progress = self._ensure_progress()
        self._bars[task_id] = progress.add_task(name, total=total, item="")

    def advance(self, task_id: str, step: int = 1, **meta: Any) -> None:
        rec = self._step(task_id, step, meta)
        if rec is None:
            return
        bar = self._bars.get(task_id)
        if bar is not None and self.progress is not None:
            self.progress.update(
                bar,
                completed=rec.completed,
                item=str(meta.get("current_item", "")),
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
        bar = self._bars.pop(task_id, None)
        if bar is not None and self.progress is not None:
            self.progress.update(bar, completed=rec.completed, item="")
        self.console.print(f"{_STATUS_ICON.get(status, '')} {rec.summary()}")
        if not self._bars:
            self.flush()

    def status(self, message: str, **fields: Any) -> None:
        self.console.print(f"[green]INFO[/]: {message}")

    def verbose(self, message: str, *, level: int = 1, **fields: Any) -> None:
        if get_verbosity() < level:
            return
        self.console.print(f"[cyan]VERB{level}[/]: {message}")

    def error(self, message: str, **fields: Any) -> None:
        self.console.print(f"[bold red]ERROR[/]: {message}")

    def warning(self, message: str, **fields: Any) -> None:
        self.console.print(f"[yellow]WARN[/]: {message}")

    def section(self, title: str) -> None:
        self.console.rule(title)

    def flush(self) -> None:
        if self.progress is not None:
            try:
                self.progress.stop()
            finally:
                self.progress = None
