"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure and CLI adapters must
satisfy.  Core code depends ONLY on these protocols, never on concrete
implementations, so the pipeline can be driven by in-memory fakes.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from create_farm_app.core.models import CommandResult
from create_farm_app.exceptions import CreateFarmAppError


class FileSystem(Protocol):
    """Contract for the filesystem operations the pipeline needs."""

    def is_readable(self, path: Path) -> bool:
        """Return ``True`` when *path* is an existing, readable directory."""
        ...  # pragma: no cover

    def copy_tree(self, source: Path, destination: Path) -> None:
        """Recursively copy *source* into *destination*.

        Files that already exist at the destination must be left
        untouched.

        Raises
        ------
        CopyFailedError
            When any part of the copy fails.
        """
        ...  # pragma: no cover


class CommandRunner(Protocol):
    """Contract for running external commands.

    Failure is reported through :attr:`CommandResult.failed`; a binary
    that cannot be launched is a failed result, not an exception.
    """

    def run(self, command: Sequence[str], *, cwd: Path) -> CommandResult:
        """Run *command* with *cwd* as working directory and wait for it."""
        ...  # pragma: no cover


class TaskReporter(Protocol):
    """Receives task state transitions from the pipeline."""

    def task_started(self, title: str) -> None: ...  # pragma: no cover

    def task_skipped(self, title: str) -> None: ...  # pragma: no cover

    def task_succeeded(self, title: str) -> None: ...  # pragma: no cover

    def task_failed(self, title: str, error: CreateFarmAppError) -> None: ...  # pragma: no cover
