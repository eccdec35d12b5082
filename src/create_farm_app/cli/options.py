"""Command-line parsing into :class:`~create_farm_app.core.models.Options`.

Parsing is pure: no prompting, no filesystem access and no directory
derivation happen here.  Every argparse failure is raised as
:class:`~create_farm_app.exceptions.ArgumentError` instead of exiting,
so nothing has happened on disk when a bad flag is reported.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from typing import NoReturn

from create_farm_app.core.models import Options
from create_farm_app.core.options import DEFAULT_PROJECT_NAME, project_name_problem
from create_farm_app.exceptions import ArgumentError
from create_farm_app.version import __version__


class _RaisingArgumentParser(argparse.ArgumentParser):
    """``ArgumentParser`` that raises instead of printing usage and exiting."""

    def error(self, message: str) -> NoReturn:
        raise ArgumentError(message, hint=f"Run '{self.prog} --help' for usage.")


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``create-farm-app [--name NAME] [--no-git] [-i] [-y]``: scaffold
    * ``create-farm-app --doctor``: environment diagnostics
    * ``create-farm-app --version``
    """
    parser = _RaisingArgumentParser(
        prog="create-farm-app",
        description="Scaffold a FARM stack (FastAPI, React, MongoDB) project.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--name",
        default=None,
        metavar="NAME",
        help=f"Project name and target directory (default: {DEFAULT_PROJECT_NAME}).",
    )
    parser.add_argument(
        "--no-git",
        dest="no_git",
        action="store_true",
        help="Do not initialize a git repository.",
    )
    parser.add_argument(
        "-i",
        "--no-install",
        dest="no_install",
        action="store_true",
        help="Do not install backend dependencies.",
    )
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Skip all prompts and use defaults for anything not given.",
    )
    parser.add_argument(
        "--doctor",
        action="store_true",
        help="Check the environment for the tools the scaffold needs, then exit.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging, including external command output.",
    )
    return parser


def options_from_namespace(args: argparse.Namespace) -> Options:
    """Map parsed arguments onto an unresolved :class:`Options`.

    Raises
    ------
    ArgumentError
        When ``--name`` is blank or is a path rather than a directory name.
    """
    name: str | None = args.name
    if name:
        problem = project_name_problem(name)
        if problem is not None:
            raise ArgumentError(problem, hint="Pass a plain name such as --name my-app.")
    return Options(
        project_name=name or DEFAULT_PROJECT_NAME,
        skip_prompts=bool(args.yes),
        disable_git=bool(args.no_git),
        disable_install=bool(args.no_install),
        name_explicit=bool(name),
    )


def parse_namespace(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse *argv* (default ``sys.argv[1:]``) into a raw namespace.

    Raises
    ------
    ArgumentError
        For unknown flags or a missing ``--name`` value.
    """
    return build_parser().parse_args(None if argv is None else list(argv))


def parse_arguments(argv: Sequence[str] | None = None) -> Options:
    """Parse *argv* into an unresolved :class:`Options`."""
    return options_from_namespace(parse_namespace(argv))
