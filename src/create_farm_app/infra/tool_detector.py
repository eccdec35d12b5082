"""Infrastructure: external tool detection and platform guidance.

This module locates the binaries the pipeline shells out to (``yarn``,
``pipenv``, ``git``) and provides platform-specific installation
guidance when one is missing.

Rules
-----
* Detection via :func:`shutil.which` only; no subprocess.
* No automatic installation.
* No ``print()``; callers handle user-facing output.
"""

from __future__ import annotations

import platform
import shutil
from dataclasses import dataclass
from pathlib import Path


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToolStatus:
    """Result of a PATH probe for one tool.

    Attributes
    ----------
    name : str
        Command name that was probed.
    found : bool
        Whether the command was located on PATH.
    path : Path | None
        Absolute path to the binary, or ``None``.
    install_commands : tuple[str, ...]
        Suggested shell commands for installing the tool on the current
        platform.  Empty when the tool is already present.
    """

    name: str
    found: bool
    path: Path | None
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Install guidance
# ---------------------------------------------------------------------------

_INSTALL_COMMANDS: dict[str, dict[str, tuple[str, ...]]] = {
    "yarn": {
        "windows": ("npm install --global yarn", "winget install Yarn.Yarn"),
        "linux": ("npm install --global yarn", "corepack enable"),
        "darwin": ("brew install yarn", "corepack enable"),
    },
    "pipenv": {
        "windows": ("pip install --user pipenv",),
        "linux": ("pip install --user pipenv", "sudo apt install pipenv"),
        "darwin": ("brew install pipenv", "pip install --user pipenv"),
    },
    "git": {
        "windows": ("winget install Git.Git",),
        "linux": ("sudo apt install git", "sudo dnf install git"),
        "darwin": ("brew install git", "xcode-select --install"),
    },
}


def _platform_install_commands(name: str) -> tuple[str, ...]:
    """Return install commands for *name* appropriate for the current OS."""
    system = platform.system().lower()
    commands = _INSTALL_COMMANDS.get(name, {}).get(system)
    if commands:
        return commands
    return (f"Please install {name} and make sure it is on your PATH.",)


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_tool(name: str) -> ToolStatus:
    """Probe the system PATH for *name*.

    Returns a :class:`ToolStatus` regardless of whether the tool is
    present; the caller decides whether to abort or merely warn.
    """
    result = shutil.which(name)
    if result is not None:
        return ToolStatus(
            name=name,
            found=True,
            path=Path(result).resolve(),
            install_commands=(),
        )
    return ToolStatus(
        name=name,
        found=False,
        path=None,
        install_commands=_platform_install_commands(name),
    )
