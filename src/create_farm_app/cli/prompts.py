"""Interactive prompting for options not fixed on the command line.

Questions are expressed as questionary question dicts and asked in a
single call, so a test can replace the ``ask`` primitive with any
callable mapping a question list to an answers dict.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from typing import Any

from create_farm_app.core.models import Options
from create_farm_app.core.options import DEFAULT_PROJECT_NAME, project_name_problem
from create_farm_app.exceptions import ArgumentError, EnvironmentError

Questions = list[dict[str, Any]]
Ask = Callable[[Questions], dict[str, Any]]


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompting."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _questionary_ask(questions: Questions) -> dict[str, Any]:
    # unsafe_prompt lets Ctrl+C escape as KeyboardInterrupt.
    questionary = _import_questionary()
    return questionary.unsafe_prompt(questions)


def _validate_name_answer(text: str) -> bool | str:
    # A blank answer keeps the default name.
    if not text.strip():
        return True
    return project_name_problem(text.strip()) or True


def build_questions(options: Options) -> Questions:
    """Return the questions still worth asking for *options*.

    The project name is always asked, even after ``--name``; only the
    yes/no questions are dropped when their flag was given.
    """
    questions: Questions = [
        {
            "type": "text",
            "name": "project_name",
            "message": "What is the name of the project?",
            "default": DEFAULT_PROJECT_NAME,
            "validate": _validate_name_answer,
        },
    ]
    if not options.disable_git:
        questions.append(
            {
                "type": "confirm",
                "name": "disable_git",
                "message": "Disable git repo?",
                "default": False,
            },
        )
    if not options.disable_install:
        questions.append(
            {
                "type": "confirm",
                "name": "disable_install",
                "message": "Don't install dependencies automatically?",
                "default": False,
            },
        )
    return questions


def merge_answers(options: Options, answers: dict[str, Any]) -> Options:
    """Merge *answers* into *options*; values set by flags win.

    Raises
    ------
    ArgumentError
        When the answered project name is a path.
    """
    if options.name_explicit:
        project_name = options.project_name
    else:
        answered = str(answers.get("project_name") or "").strip()
        project_name = answered or options.project_name
        problem = project_name_problem(project_name)
        if problem is not None:
            raise ArgumentError(problem)
    return dataclasses.replace(
        options,
        project_name=project_name,
        disable_git=options.disable_git or bool(answers.get("disable_git", False)),
        disable_install=options.disable_install or bool(answers.get("disable_install", False)),
    )


def prompt_for_missing_options(options: Options, ask: Ask | None = None) -> Options:
    """Ask for anything not fixed by flags, unless prompts are skipped.

    Returns *options* unchanged when ``skip_prompts`` is set.

    Raises
    ------
    KeyboardInterrupt
        If the user presses Ctrl+C while answering.
    EnvironmentError
        If questionary is not installed and prompting is needed.
    """
    if options.skip_prompts:
        return options
    ask_fn = ask or _questionary_ask
    answers = ask_fn(build_questions(options))
    return merge_answers(options, answers)
