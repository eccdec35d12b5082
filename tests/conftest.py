"""Shared pytest fixtures and configuration for the create-farm-app test suite.

Guidelines
----------
* No network access and no real ``yarn`` / ``pipenv`` / ``git`` calls.
* External commands are faked at the ``CommandRunner`` boundary.
* Filesystem tests use ``tmp_path`` only.
* Tests must not depend on OS state.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest

from create_farm_app.core.models import CommandResult, Options
from create_farm_app.exceptions import CopyFailedError


class CallLog:
    """Ordered record of every collaborator call made during a run."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    @property
    def programs(self) -> list[str]:
        """Call names in order: ``"copy"`` or the command's program name."""
        return [call[1][0] if call[0] == "run" else call[0] for call in self.calls]


class FakeFileSystem:
    """In-memory :class:`FileSystem` that records copies."""

    def __init__(self, log: CallLog, *, readable: bool = True, fail_copy: bool = False) -> None:
        self.log = log
        self.readable = readable
        self.fail_copy = fail_copy

    def is_readable(self, path: Path) -> bool:
        return self.readable

    def copy_tree(self, source: Path, destination: Path) -> None:
        self.log.calls.append(("copy", source, destination))
        if self.fail_copy:
            raise CopyFailedError(f"Failed to copy project files to {destination}")


class FakeRunner:
    """:class:`CommandRunner` returning canned exit codes per program."""

    def __init__(self, log: CallLog, exit_codes: dict[str, int | None] | None = None) -> None:
        self.log = log
        self.exit_codes = exit_codes or {}

    def run(self, command: Sequence[str], *, cwd: Path) -> CommandResult:
        argv = tuple(command)
        self.log.calls.append(("run", argv, cwd))
        returncode = self.exit_codes.get(argv[0], 0)
        stderr = "" if returncode == 0 else f"{argv[0]}: something went wrong"
        return CommandResult(command=argv, cwd=cwd, returncode=returncode, stderr=stderr)


def make_options(tmp_path: Path, **overrides: Any) -> Options:
    """Build resolved options pointing into *tmp_path*."""
    defaults: dict[str, Any] = {
        "project_name": "demo",
        "skip_prompts": True,
        "target_directory": tmp_path / "demo",
        "template_directory": tmp_path / "template",
    }
    defaults.update(overrides)
    return Options(**defaults)


@pytest.fixture
def call_log() -> CallLog:
    return CallLog()
