"""CLI application entry point and command routing for create-farm-app.

This module is the **sole error boundary** for the entire application.
It catches :class:`~create_farm_app.exceptions.CreateFarmAppError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here.  Option derivation and the task
  pipeline live in ``core``, side effects in ``infra``.
* ``print()`` is forbidden outside the CLI layer; the Rich console proxy
  is used for all output.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence

from create_farm_app.cli import exit_codes
from create_farm_app.cli.console import configure_logging, console, escape_markup
from create_farm_app.cli.options import options_from_namespace, parse_namespace
from create_farm_app.core.models import Options, PipelineResult
from create_farm_app.exceptions import CreateFarmAppError


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_create(options: Options) -> int:
    """Run the scaffold pipeline for fully resolved *options*.

    Raises
    ------
    TemplateUnavailableError
        Propagated from the pipeline before any task runs.
    """
    from create_farm_app.cli.progress import RichTaskReporter
    from create_farm_app.core.pipeline import TaskPipeline
    from create_farm_app.infra.command_runner import SubprocessCommandRunner
    from create_farm_app.infra.filesystem import LocalFileSystem

    console.print(f"\n[bold]Creating project in[/bold] {escape_markup(options.target_directory)}\n")

    with RichTaskReporter() as reporter:
        pipeline = TaskPipeline(
            LocalFileSystem(),
            SubprocessCommandRunner(),
            reporter=reporter,
        )
        result = pipeline.run(options)

    if not result.ok:
        _report_failure(result)
        return exit_codes.GENERAL_ERROR

    console.print("\n[bold green]DONE[/bold green] Project ready")
    return exit_codes.SUCCESS


def _report_failure(result: PipelineResult) -> None:
    """Tell the user which task stopped the run and what is left on disk."""
    console.print(
        f"\n[bold red]Error:[/bold red] task '{escape_markup(result.failed_task)}' failed: "
        f"{escape_markup(result.error)}"
    )
    if result.error is not None and result.error.hint:
        console.print(f"[yellow]Hint:[/yellow] {escape_markup(result.error.hint)}")
    if result.completed:
        console.print(
            "[dim]Completed steps were left in place: "
            f"{escape_markup(', '.join(result.completed))}[/dim]"
        )


def _handle_doctor() -> int:
    """Dispatch the ``--doctor`` diagnostics command."""
    from create_farm_app.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: Sequence[str] | None = None) -> int:
    """Run the create-farm-app CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    from create_farm_app.cli.prompts import prompt_for_missing_options
    from create_farm_app.core.options import resolve_directories

    args = parse_namespace(argv)
    configure_logging(args.verbose)

    if args.doctor:
        return _handle_doctor()

    options = options_from_namespace(args)
    options = prompt_for_missing_options(options)
    options = resolve_directories(options)
    return _handle_create(options)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except CreateFarmAppError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape_markup(exc)}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape_markup(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape_markup(exc)}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
