"""Rich-based task list display driven by pipeline reporter callbacks.

This module bridges the :class:`~create_farm_app.core.protocols.TaskReporter`
callbacks with a Rich spinner for the running task and a one-line
summary for each finished one.

Design
------
* :class:`RichTaskReporter` owns at most one live spinner at a time.
* Shutdown-safe: :meth:`RichTaskReporter.stop` is idempotent and also
  runs when used as a context manager, so a crash mid-task never leaves
  the terminal in spinner mode.
* No ``print()``; Rich handles all rendering.
"""

from __future__ import annotations

from typing import Any

from create_farm_app.cli.console import escape_markup, get_rich_console
from create_farm_app.exceptions import CreateFarmAppError

_DONE = "[green]✔[/green]"
_SKIPPED = "[dim]↓[/dim]"
_FAILED = "[red]✖[/red]"


class RichTaskReporter:
    """Concrete :class:`TaskReporter` rendered with Rich.

    Usage::

        with RichTaskReporter() as reporter:
            TaskPipeline(filesystem, runner, reporter).run(options)
    """

    def __init__(self) -> None:
        self._console: Any = get_rich_console()
        self._status: Any = None

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> RichTaskReporter:
        return self

    def __exit__(self, *_args: object) -> None:
        self.stop()

    def stop(self) -> None:
        """Stop the running spinner, if any (idempotent)."""
        if self._status is not None:
            self._status.stop()
            self._status = None

    # ------------------------------------------------------------------
    # Reporter callbacks
    # ------------------------------------------------------------------

    def task_started(self, title: str) -> None:
        self.stop()
        self._status = self._console.status(f"[bold blue]{escape_markup(title)}[/bold blue]")
        self._status.start()

    def task_skipped(self, title: str) -> None:
        self.stop()
        self._console.print(f"{_SKIPPED} {escape_markup(title)} [dim](skipped)[/dim]")

    def task_succeeded(self, title: str) -> None:
        self.stop()
        self._console.print(f"{_DONE} {escape_markup(title)}")

    def task_failed(self, title: str, error: CreateFarmAppError) -> None:
        self.stop()
        self._console.print(f"{_FAILED} {escape_markup(title)}")
        self._console.print(f"  [red]→ {escape_markup(error)}[/red]")
