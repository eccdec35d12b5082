"""Core / service layer: option derivation and the task pipeline.

Rules
-----
* No ``print()`` calls.
* No direct filesystem or process access; side effects go through the
  protocols in :mod:`create_farm_app.core.protocols`.
* No imports from ``cli`` or ``infra``.
"""

from create_farm_app.core.models import CommandResult, Options, PipelineResult, Task
from create_farm_app.core.options import DEFAULT_PROJECT_NAME, resolve_directories
from create_farm_app.core.pipeline import TaskPipeline
from create_farm_app.core.protocols import CommandRunner, FileSystem, TaskReporter

__all__: list[str] = [
    "DEFAULT_PROJECT_NAME",
    "CommandResult",
    "CommandRunner",
    "FileSystem",
    "Options",
    "PipelineResult",
    "Task",
    "TaskPipeline",
    "TaskReporter",
    "resolve_directories",
]
