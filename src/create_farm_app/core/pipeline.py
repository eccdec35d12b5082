"""Core task pipeline: the ordered setup steps of a scaffold run.

The pipeline delegates all side effects to a
:class:`~create_farm_app.core.protocols.FileSystem` and a
:class:`~create_farm_app.core.protocols.CommandRunner` injected at
construction time.  It is responsible for:

* Checking the template precondition once, before any task.
* Building the four tasks in their fixed order.
* Running enabled tasks one at a time and stopping at the first failure.

Guarantees
----------
* No ``print()``; progress goes to the optional reporter.
* No rollback.  Files written before a failure stay on disk.
* Only :class:`~create_farm_app.exceptions.CreateFarmAppError` subclasses
  become a failed :class:`PipelineResult`; anything else propagates.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from create_farm_app.core.models import Options, PipelineResult, Task
from create_farm_app.core.protocols import CommandRunner, FileSystem, TaskReporter
from create_farm_app.exceptions import (
    BackendInitFailedError,
    CreateFarmAppError,
    FrontendInitFailedError,
    GitInitFailedError,
    TaskError,
    TemplateUnavailableError,
)

logger = logging.getLogger(__name__)

COPY_TITLE: str = "Copy project files"
FRONTEND_TITLE: str = "Initialize frontend app"
BACKEND_TITLE: str = "Initialize backend app"
GIT_TITLE: str = "Initialize git repo"

FRONTEND_COMMAND: tuple[str, ...] = (
    "yarn", "create", "react-app", "frontend", "--template", "sammy-libraries",
)
BACKEND_COMMAND: tuple[str, ...] = ("pipenv", "install", "-r", "requirements.txt")
GIT_COMMAND: tuple[str, ...] = ("git", "init")

BACKEND_SUBDIRECTORY: str = "backend"


def _resolved_paths(options: Options) -> tuple[Path, Path]:
    """Return ``(template, target)`` or raise when options are unresolved."""
    template = options.template_directory
    target = options.target_directory
    if template is None or target is None:
        raise TemplateUnavailableError(
            "Options must be resolved before the pipeline runs.",
        )
    return template, target


class _SilentReporter:
    """Reporter used when the caller does not want progress events."""

    def task_started(self, title: str) -> None:
        pass

    def task_skipped(self, title: str) -> None:
        pass

    def task_succeeded(self, title: str) -> None:
        pass

    def task_failed(self, title: str, error: CreateFarmAppError) -> None:
        pass


class TaskPipeline:
    """Builds and runs the scaffold tasks for a resolved :class:`Options`.

    Parameters
    ----------
    filesystem:
        Any object satisfying the :class:`FileSystem` protocol.
    runner:
        Any object satisfying the :class:`CommandRunner` protocol.
    reporter:
        Optional :class:`TaskReporter` notified of each task transition.
    """

    def __init__(
        self,
        filesystem: FileSystem,
        runner: CommandRunner,
        reporter: TaskReporter | None = None,
    ) -> None:
        self._filesystem: FileSystem = filesystem
        self._runner: CommandRunner = runner
        self._reporter: TaskReporter = reporter if reporter is not None else _SilentReporter()

    # ------------------------------------------------------------------
    # Precondition
    # ------------------------------------------------------------------

    def check_template(self, options: Options) -> Path:
        """Return the template path, or raise if it cannot be read.

        Raises
        ------
        TemplateUnavailableError
            When directories were never resolved or the template is not
            a readable directory.
        """
        template, _ = _resolved_paths(options)
        if not self._filesystem.is_readable(template):
            raise TemplateUnavailableError(
                f"Cannot access template directory {template}",
                hint="Reinstall create-farm-app; the bundled template is missing.",
            )
        return template

    # ------------------------------------------------------------------
    # Task construction
    # ------------------------------------------------------------------

    def build_tasks(self, options: Options) -> list[Task]:
        """Return the four tasks for *options* in execution order."""
        template, target = _resolved_paths(options)

        return [
            Task(
                title=COPY_TITLE,
                action=lambda: self._filesystem.copy_tree(template, target),
            ),
            Task(
                title=FRONTEND_TITLE,
                action=lambda: self._run_command(
                    FRONTEND_COMMAND,
                    target,
                    FrontendInitFailedError,
                    "Failed to initialize frontend app",
                ),
            ),
            Task(
                title=BACKEND_TITLE,
                action=lambda: self._run_command(
                    BACKEND_COMMAND,
                    target / BACKEND_SUBDIRECTORY,
                    BackendInitFailedError,
                    "Failed to install backend dependencies",
                ),
                enabled=lambda: not options.disable_install,
            ),
            Task(
                title=GIT_TITLE,
                action=lambda: self._run_command(
                    GIT_COMMAND,
                    target,
                    GitInitFailedError,
                    "Failed to initialize git repo",
                ),
                enabled=lambda: not options.disable_git,
            ),
        ]

    def _run_command(
        self,
        command: Sequence[str],
        cwd: Path,
        error_class: type[TaskError],
        message: str,
    ) -> None:
        result = self._runner.run(command, cwd=cwd)
        if result.failed:
            detail = result.stderr_tail()
            if result.returncode is None:
                hint = f"Is '{command[0]}' installed and on PATH?"
            else:
                hint = detail or f"'{' '.join(command)}' exited with status {result.returncode}."
            raise error_class(message, hint=hint)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(self, options: Options) -> PipelineResult:
        """Run every enabled task in order.

        Raises
        ------
        TemplateUnavailableError
            Before any task is attempted, when the template is unreadable.
        """
        self.check_template(options)

        completed: list[str] = []
        skipped: list[str] = []
        for task in self.build_tasks(options):
            if not task.enabled():
                logger.debug("Skipping task %r", task.title)
                skipped.append(task.title)
                self._reporter.task_skipped(task.title)
                continue

            logger.debug("Starting task %r", task.title)
            self._reporter.task_started(task.title)
            try:
                task.action()
            except CreateFarmAppError as exc:
                logger.debug("Task %r failed: %s", task.title, exc)
                self._reporter.task_failed(task.title, exc)
                return PipelineResult(
                    completed=tuple(completed),
                    skipped=tuple(skipped),
                    failed_task=task.title,
                    error=exc,
                )
            completed.append(task.title)
            self._reporter.task_succeeded(task.title)

        return PipelineResult(completed=tuple(completed), skipped=tuple(skipped))
