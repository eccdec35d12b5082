"""Custom exception hierarchy for create-farm-app.

All exceptions that cross layer boundaries must inherit from
:class:`CreateFarmAppError`.  Raw OS and library exceptions (``OSError``,
``shutil.Error``) must NEVER propagate beyond the infrastructure layer.
They must be caught and re-raised as a typed subclass defined here.

Hierarchy
---------
CreateFarmAppError
├── ArgumentError
├── TemplateUnavailableError
├── TaskError
│   ├── CopyFailedError
│   ├── FrontendInitFailedError
│   ├── BackendInitFailedError
│   └── GitInitFailedError
└── EnvironmentError
"""

from __future__ import annotations


class CreateFarmAppError(Exception):
    """Base exception for all create-farm-app errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Option resolution -----------------------------------------------------

class ArgumentError(CreateFarmAppError):
    """Raised when the command line contains an unknown or malformed flag."""


# --- Preconditions ---------------------------------------------------------

class TemplateUnavailableError(CreateFarmAppError):
    """Raised when the bundled template directory cannot be read."""


# --- Pipeline tasks --------------------------------------------------------

class TaskError(CreateFarmAppError):
    """Base class for failures raised by an individual pipeline task."""


class CopyFailedError(TaskError):
    """Raised when the template tree cannot be copied to the target."""


class FrontendInitFailedError(TaskError):
    """Raised when the frontend scaffolding command fails."""


class BackendInitFailedError(TaskError):
    """Raised when the backend dependency install command fails."""


class GitInitFailedError(TaskError):
    """Raised when ``git init`` fails."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(CreateFarmAppError):
    """Raised when a required runtime dependency is not available."""
