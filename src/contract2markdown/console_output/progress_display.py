"""Rich progress bar reporting generated files."""

from __future__ import annotations

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TaskID, TextColumn


class FileProgressDisplay:
    """Progress bar advanced once per written file, usable as a context manager."""

    def __init__(self, console: Console | None = None) -> None:
        self._progress = Progress(
            TextColumn("[cyan]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            console=console or Console(stderr=True),
            transient=True,
        )
        self._task: TaskID | None = None

    def __enter__(self) -> FileProgressDisplay:
        self._progress.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._progress.stop()

    def started(self, total_files: int) -> None:
        self._task = self._progress.add_task("Generating markdown...", total=total_files)

    def file_written(self, file_name: str) -> None:
        if self._task is None:
            return
        self._progress.update(self._task, advance=1, description=file_name)

    @property
    def completed(self) -> int:
        if self._task is None:
            return 0
        return int(self._progress.tasks[0].completed)
