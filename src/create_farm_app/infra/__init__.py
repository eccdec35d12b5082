"""Infrastructure layer: external system integration.

This layer wraps all interaction with the local filesystem, external
processes and the system PATH.  Every raw OS exception must be caught
here and re-raised as a
:class:`~create_farm_app.exceptions.CreateFarmAppError` subclass (or, for
commands, reported as a failed result).

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from create_farm_app.infra.command_runner import SubprocessCommandRunner
from create_farm_app.infra.filesystem import LocalFileSystem
from create_farm_app.infra.tool_detector import ToolStatus, detect_tool

__all__: list[str] = [
    "LocalFileSystem",
    "SubprocessCommandRunner",
    "ToolStatus",
    "detect_tool",
]
