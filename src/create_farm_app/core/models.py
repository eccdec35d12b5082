"""Domain models for create-farm-app.

All models are **frozen** dataclasses: immutable value objects with no
behaviour beyond data access.  ``Options`` is re-derived with
:func:`dataclasses.replace` rather than mutated, so a resolved value can
be handed to the pipeline without fear of later changes.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from create_farm_app.exceptions import CreateFarmAppError


def _always() -> bool:
    return True


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Options:
    """User-selected settings for a single scaffold run."""

    project_name: str
    """Leaf name of the target directory."""

    skip_prompts: bool = False
    """When set, no interactive questions are asked."""

    disable_git: bool = False
    """Skip the ``git init`` task."""

    disable_install: bool = False
    """Skip the backend dependency install task."""

    name_explicit: bool = False
    """``True`` when the project name came from ``--name``."""

    target_directory: Path | None = None
    """Absolute destination path, ``None`` until resolved."""

    template_directory: Path | None = None
    """Absolute path of the bundled template, ``None`` until resolved."""

    @property
    def is_resolved(self) -> bool:
        return self.target_directory is not None and self.template_directory is not None


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Task:
    """One named unit of setup work.

    ``enabled`` is evaluated by the pipeline immediately before the task
    would run, not when the task list is built.
    """

    title: str
    action: Callable[[], None]
    enabled: Callable[[], bool] = field(default=_always)


# ---------------------------------------------------------------------------
# External command outcome
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of a single external command invocation."""

    command: tuple[str, ...]
    cwd: Path
    returncode: int | None
    """Process exit status, or ``None`` when the binary could not be launched."""

    stdout: str = ""
    stderr: str = ""

    @property
    def failed(self) -> bool:
        return self.returncode != 0

    def stderr_tail(self, lines: int = 5) -> str:
        """Return the last *lines* non-blank lines of stderr."""
        tail = [line for line in self.stderr.splitlines() if line.strip()]
        return "\n".join(tail[-lines:])


# ---------------------------------------------------------------------------
# Pipeline outcome
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Terminal outcome of a pipeline run."""

    completed: tuple[str, ...] = ()
    skipped: tuple[str, ...] = ()
    failed_task: str | None = None
    """Title of the task that aborted the run."""

    error: CreateFarmAppError | None = None

    @property
    def ok(self) -> bool:
        return self.failed_task is None
