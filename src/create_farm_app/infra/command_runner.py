"""``subprocess``-backed implementation of :class:`~create_farm_app.core.protocols.CommandRunner`.

This module is the **only** place in the codebase that starts external
processes.  Launch failures (missing binary, missing working directory,
permission problems) are reported as a failed
:class:`~create_farm_app.core.models.CommandResult`, never raised.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from create_farm_app.core.models import CommandResult

logger = logging.getLogger(__name__)


def _resolve_argv(argv: tuple[str, ...]) -> tuple[str, ...]:
    """Resolve ``argv[0]`` on PATH for cross-platform execution.

    On Windows ``yarn`` and ``pipenv`` are usually ``.cmd`` shims, which
    ``CreateProcess`` cannot start directly, so they run via ``cmd.exe /c``.
    """
    program = argv[0]
    if any(sep and sep in program for sep in ("/", "\\", os.path.sep, os.path.altsep)):
        return argv

    resolved = shutil.which(program)
    if resolved is None:
        return argv

    if os.name == "nt" and os.path.splitext(resolved)[1].lower() in {".cmd", ".bat"}:
        comspec = os.environ.get("ComSpec", "cmd.exe")
        return (comspec, "/d", "/c", resolved, *argv[1:])
    return (resolved, *argv[1:])


class SubprocessCommandRunner:
    """Concrete :class:`CommandRunner` using :func:`subprocess.run`.

    Output is captured so it does not interleave with the task display;
    it is logged at DEBUG level and kept on the result for diagnostics.
    """

    def run(self, command: Sequence[str], *, cwd: Path) -> CommandResult:
        argv = tuple(command)
        launch = _resolve_argv(argv)
        logger.debug("+ (%s) %s", cwd, " ".join(launch))
        try:
            completed = subprocess.run(
                launch,
                cwd=str(cwd),
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as exc:
            logger.debug("Could not launch %s: %s", argv[0], exc)
            return CommandResult(command=argv, cwd=cwd, returncode=None, stderr=str(exc))

        logger.debug("%s exited with status %d", argv[0], completed.returncode)
        if completed.stdout:
            logger.debug("stdout:\n%s", completed.stdout.rstrip())
        if completed.stderr:
            logger.debug("stderr:\n%s", completed.stderr.rstrip())
        return CommandResult(
            command=argv,
            cwd=cwd,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
