"""``create-farm-app --doctor``: environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment can run every pipeline task.

This module lives in the CLI layer; it may import from ``infra``
and ``core``, and it renders via Rich.  It purely collects and displays
diagnostic data.
"""

from __future__ import annotations

import platform
import sys

from create_farm_app.cli import exit_codes
from create_farm_app.cli.console import console
from create_farm_app.core.options import TEMPLATE_DIRECTORY
from create_farm_app.infra.filesystem import LocalFileSystem
from create_farm_app.infra.tool_detector import ToolStatus, detect_tool
from create_farm_app.version import __version__

Check = tuple[str, str, str]

REQUIRED_TOOLS: tuple[str, ...] = ("yarn",)
"""Tools whose task cannot be disabled."""

OPTIONAL_TOOLS: tuple[str, ...] = ("pipenv", "git")
"""Tools whose task can be turned off with ``--no-install`` / ``--no-git``."""


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> Check:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _tool_check(status: ToolStatus, *, required: bool) -> Check:
    """Return (label, value, status) for one external tool."""
    if status.found:
        path_str = str(status.path) if status.path else "found"
        return status.name, path_str, "[green]OK[/green]"
    if required:
        return status.name, "not found", "[red]FAIL[/red]"
    return status.name, "not found", "[yellow]WARN[/yellow]"


def _template_check() -> Check:
    """Return (label, value, status) for the bundled template row."""
    if LocalFileSystem().is_readable(TEMPLATE_DIRECTORY):
        return "template", str(TEMPLATE_DIRECTORY), "[green]OK[/green]"
    return "template", str(TEMPLATE_DIRECTORY), "[red]FAIL (unreadable)[/red]"


def _os_check() -> Check:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, "[green]OK[/green]"


def _version_check() -> Check:
    return "create-farm-app", __version__, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[Check]) -> None:
    """Render doctor output without Rich."""
    print("\ncreate-farm-app doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<16} {'Value':<38} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<16} {value:<38} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.  Missing optional
        tools only warn.
    """
    tools = [(detect_tool(name), True) for name in REQUIRED_TOOLS]
    tools += [(detect_tool(name), False) for name in OPTIONAL_TOOLS]

    checks = [
        _version_check(),
        _python_version_check(),
        _os_check(),
        _template_check(),
        *(_tool_check(status, required=required) for status, required in tools),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
    else:
        table = Table(
            title="create-farm-app doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)
        for label, value, status in checks:
            table.add_row(label, value, status)
        console.print()
        console.print(table)
        console.print()

    # Install guidance for anything missing.
    for status, _ in tools:
        if status.found:
            continue
        console.print(f"{status.name} is not installed. Install using one of:")
        for cmd in status.install_commands:
            console.print(f"  {cmd}")
        console.print()

    if has_failure:
        console.print("Some checks failed.")
        return exit_codes.GENERAL_ERROR
    console.print("All checks passed.")
    return exit_codes.SUCCESS
