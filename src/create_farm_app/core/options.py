"""Option defaults and directory derivation.

Directory derivation is kept separate from argument parsing and
prompting: it runs exactly once, after all user input has been merged,
and produces the ``Options`` value handed to the pipeline.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path

from create_farm_app.core.models import Options

DEFAULT_PROJECT_NAME: str = "farm-stack-app"

TEMPLATE_DIRECTORY: Path = Path(__file__).resolve().parent.parent / "template"
"""Template tree bundled inside the installed package."""


def project_name_problem(name: str) -> str | None:
    """Return why *name* cannot be a target directory leaf, or ``None``."""
    if not name.strip():
        return "Project name must not be blank."
    if name in {".", ".."} or "/" in name or "\\" in name or Path(name).name != name:
        return f"Project name {name!r} must be a single directory name, not a path."
    return None


def resolve_directories(
    options: Options,
    *,
    cwd: Path | None = None,
    template_directory: Path | None = None,
) -> Options:
    """Return a copy of *options* with both directories filled in.

    ``target_directory`` keeps an explicitly supplied value and is
    otherwise ``cwd / project_name``.  ``template_directory`` always
    points at the bundled template; the keyword exists for tests.
    """
    base = Path.cwd() if cwd is None else cwd
    target = options.target_directory or base / options.project_name
    return dataclasses.replace(
        options,
        target_directory=target.absolute(),
        template_directory=(template_directory or TEMPLATE_DIRECTORY).resolve(),
    )
