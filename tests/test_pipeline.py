"""Tests for the task pipeline (core/pipeline.py).

All collaborators are in-memory fakes from ``conftest``; nothing is
copied and no process is started.

Coverage:
* Template precondition.
* Fixed task order and working directories.
* Enable/disable predicates.
* First-failure short-circuit and failure tagging.
* Reporter notifications.
"""

from __future__ import annotations

import dataclasses
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from create_farm_app.core.models import CommandResult, Task
from create_farm_app.core.pipeline import (
    BACKEND_COMMAND,
    BACKEND_TITLE,
    COPY_TITLE,
    FRONTEND_COMMAND,
    FRONTEND_TITLE,
    GIT_COMMAND,
    GIT_TITLE,
    TaskPipeline,
)
from create_farm_app.exceptions import (
    BackendInitFailedError,
    CopyFailedError,
    FrontendInitFailedError,
    GitInitFailedError,
    TemplateUnavailableError,
)
from tests.conftest import CallLog, FakeFileSystem, FakeRunner, make_options


def _pipeline(
    log: CallLog,
    *,
    readable: bool = True,
    fail_copy: bool = False,
    exit_codes: dict[str, int | None] | None = None,
    reporter: object | None = None,
) -> TaskPipeline:
    return TaskPipeline(
        FakeFileSystem(log, readable=readable, fail_copy=fail_copy),
        FakeRunner(log, exit_codes),
        reporter=reporter,  # type: ignore[arg-type]
    )


# ---------------------------------------------------------------------------
# Precondition
# ---------------------------------------------------------------------------

class TestTemplatePrecondition:
    def test_unreadable_template_raises_before_any_task(
        self, tmp_path: Path, call_log: CallLog,
    ) -> None:
        pipeline = _pipeline(call_log, readable=False)

        with pytest.raises(TemplateUnavailableError) as exc_info:
            pipeline.run(make_options(tmp_path))

        assert str(tmp_path / "template") in str(exc_info.value)
        assert call_log.calls == []

    def test_unresolved_options_raise(self, call_log: CallLog) -> None:
        pipeline = _pipeline(call_log)
        options = make_options(Path("/unused"), target_directory=None, template_directory=None)

        with pytest.raises(TemplateUnavailableError):
            pipeline.run(options)
        assert call_log.calls == []

    @pytest.mark.parametrize("missing", ["target_directory", "template_directory"])
    def test_half_resolved_options_raise(
        self, tmp_path: Path, call_log: CallLog, missing: str,
    ) -> None:
        options = make_options(tmp_path, **{missing: None})

        with pytest.raises(TemplateUnavailableError, match="must be resolved"):
            _pipeline(call_log).build_tasks(options)
        assert call_log.calls == []

    def test_check_template_returns_path(self, tmp_path: Path, call_log: CallLog) -> None:
        pipeline = _pipeline(call_log)
        assert pipeline.check_template(make_options(tmp_path)) == tmp_path / "template"


# ---------------------------------------------------------------------------
# Task construction
# ---------------------------------------------------------------------------

class TestBuildTasks:
    def test_four_tasks_in_fixed_order(self, tmp_path: Path, call_log: CallLog) -> None:
        tasks = _pipeline(call_log).build_tasks(make_options(tmp_path))
        assert [t.title for t in tasks] == [COPY_TITLE, FRONTEND_TITLE, BACKEND_TITLE, GIT_TITLE]

    def test_building_tasks_has_no_side_effects(self, tmp_path: Path, call_log: CallLog) -> None:
        _pipeline(call_log).build_tasks(make_options(tmp_path))
        assert call_log.calls == []

    def test_enabled_predicates_follow_options(self, tmp_path: Path, call_log: CallLog) -> None:
        options = make_options(tmp_path, disable_git=True, disable_install=True)
        enabled = [t.enabled() for t in _pipeline(call_log).build_tasks(options)]
        assert enabled == [True, True, False, False]

    def test_task_default_is_enabled(self) -> None:
        assert Task(title="x", action=lambda: None).enabled() is True


# ---------------------------------------------------------------------------
# Execution
# ---------------------------------------------------------------------------

class TestRun:
    def test_all_tasks_run_in_order(self, tmp_path: Path, call_log: CallLog) -> None:
        result = _pipeline(call_log).run(make_options(tmp_path))

        target = tmp_path / "demo"
        assert result.ok
        assert result.completed == (COPY_TITLE, FRONTEND_TITLE, BACKEND_TITLE, GIT_TITLE)
        assert result.skipped == ()
        assert call_log.calls == [
            ("copy", tmp_path / "template", target),
            ("run", FRONTEND_COMMAND, target),
            ("run", BACKEND_COMMAND, target / "backend"),
            ("run", GIT_COMMAND, target),
        ]

    def test_no_git_skips_only_git(self, tmp_path: Path, call_log: CallLog) -> None:
        result = _pipeline(call_log).run(make_options(tmp_path, disable_git=True))

        assert result.ok
        assert result.skipped == (GIT_TITLE,)
        assert call_log.programs == ["copy", "yarn", "pipenv"]

    def test_no_install_skips_only_backend(self, tmp_path: Path, call_log: CallLog) -> None:
        result = _pipeline(call_log).run(make_options(tmp_path, disable_install=True))

        assert result.ok
        assert result.skipped == (BACKEND_TITLE,)
        assert call_log.programs == ["copy", "yarn", "git"]

    def test_both_disabled_runs_copy_and_frontend(self, tmp_path: Path, call_log: CallLog) -> None:
        options = make_options(tmp_path, disable_git=True, disable_install=True)
        result = _pipeline(call_log).run(options)

        assert result.ok
        assert result.completed == (COPY_TITLE, FRONTEND_TITLE)
        assert call_log.programs == ["copy", "yarn"]

    def test_enabled_is_evaluated_at_execution_time(
        self, tmp_path: Path, call_log: CallLog,
    ) -> None:
        pipeline = _pipeline(call_log)
        original_build = pipeline.build_tasks

        def _tracking_build(options):  # type: ignore[no-untyped-def]
            return [
                dataclasses.replace(
                    t,
                    enabled=lambda t=t: call_log.calls.append(("enabled", t.title)) or t.enabled(),
                )
                for t in original_build(options)
            ]

        pipeline.build_tasks = _tracking_build  # type: ignore[method-assign]
        pipeline.run(make_options(tmp_path, disable_git=True))

        assert call_log.programs == [
            "enabled", "copy", "enabled", "yarn", "enabled", "pipenv", "enabled",
        ]


class TestFailureShortCircuit:
    def test_copy_failure_stops_everything(self, tmp_path: Path, call_log: CallLog) -> None:
        result = _pipeline(call_log, fail_copy=True).run(make_options(tmp_path))

        assert not result.ok
        assert result.failed_task == COPY_TITLE
        assert isinstance(result.error, CopyFailedError)
        assert call_log.programs == ["copy"]

    def test_frontend_failure_stops_backend_and_git(
        self, tmp_path: Path, call_log: CallLog,
    ) -> None:
        result = _pipeline(call_log, exit_codes={"yarn": 1}).run(make_options(tmp_path))

        assert not result.ok
        assert result.failed_task == "Initialize frontend app"
        assert isinstance(result.error, FrontendInitFailedError)
        assert result.completed == (COPY_TITLE,)
        assert call_log.programs == ["copy", "yarn"]

    def test_backend_failure_stops_git(self, tmp_path: Path, call_log: CallLog) -> None:
        result = _pipeline(call_log, exit_codes={"pipenv": 2}).run(make_options(tmp_path))

        assert result.failed_task == BACKEND_TITLE
        assert isinstance(result.error, BackendInitFailedError)
        assert call_log.programs == ["copy", "yarn", "pipenv"]

    def test_git_failure_is_reported(self, tmp_path: Path, call_log: CallLog) -> None:
        result = _pipeline(call_log, exit_codes={"git": 128}).run(make_options(tmp_path))

        assert result.failed_task == GIT_TITLE
        assert isinstance(result.error, GitInitFailedError)
        assert result.completed == (COPY_TITLE, FRONTEND_TITLE, BACKEND_TITLE)

    def test_skipped_tasks_recorded_before_failure(self, tmp_path: Path, call_log: CallLog) -> None:
        options = make_options(tmp_path, disable_install=True)
        result = _pipeline(call_log, exit_codes={"git": 1}).run(options)

        assert result.skipped == (BACKEND_TITLE,)
        assert result.failed_task == GIT_TITLE

    def test_failure_hint_carries_stderr(self, tmp_path: Path, call_log: CallLog) -> None:
        result = _pipeline(call_log, exit_codes={"yarn": 1}).run(make_options(tmp_path))

        assert result.error is not None
        assert result.error.hint == "yarn: something went wrong"

    def test_unlaunchable_command_hint_mentions_path(
        self, tmp_path: Path, call_log: CallLog,
    ) -> None:
        result = _pipeline(call_log, exit_codes={"yarn": None}).run(make_options(tmp_path))

        assert result.failed_task == FRONTEND_TITLE
        assert result.error is not None
        assert "on PATH" in (result.error.hint or "")

    def test_non_domain_exception_propagates(self, tmp_path: Path) -> None:
        filesystem = MagicMock()
        filesystem.is_readable.return_value = True
        filesystem.copy_tree.side_effect = RuntimeError("boom")
        pipeline = TaskPipeline(filesystem, MagicMock())

        with pytest.raises(RuntimeError, match="boom"):
            pipeline.run(make_options(tmp_path))


# ---------------------------------------------------------------------------
# Reporter
# ---------------------------------------------------------------------------

class TestReporter:
    def test_reporter_sees_each_transition(self, tmp_path: Path, call_log: CallLog) -> None:
        reporter = MagicMock()
        options = make_options(tmp_path, disable_git=True)

        _pipeline(call_log, exit_codes={"pipenv": 1}, reporter=reporter).run(options)

        names = [c[0] for c in reporter.method_calls]
        assert names == [
            "task_started", "task_succeeded",
            "task_started", "task_succeeded",
            "task_started", "task_failed",
        ]
        failed_call = reporter.task_failed.call_args
        assert failed_call.args[0] == BACKEND_TITLE
        assert isinstance(failed_call.args[1], BackendInitFailedError)

    def test_no_reporter_still_reports_failure(self, tmp_path: Path, call_log: CallLog) -> None:
        options = make_options(tmp_path, disable_install=True)

        result = _pipeline(call_log, exit_codes={"git": 128}).run(options)

        assert result.failed_task == GIT_TITLE
        assert result.completed == (COPY_TITLE, FRONTEND_TITLE)
        assert result.skipped == (BACKEND_TITLE,)

    def test_reporter_notified_of_skips(self, tmp_path: Path, call_log: CallLog) -> None:
        reporter = MagicMock()
        options = make_options(tmp_path, disable_git=True, disable_install=True)

        _pipeline(call_log, reporter=reporter).run(options)

        skipped = [c.args[0] for c in reporter.task_skipped.call_args_list]
        assert skipped == [BACKEND_TITLE, GIT_TITLE]


# ---------------------------------------------------------------------------
# CommandResult
# ---------------------------------------------------------------------------

class TestCommandResult:
    def test_zero_exit_is_not_failed(self) -> None:
        assert not CommandResult(command=("git",), cwd=Path("."), returncode=0).failed

    def test_nonzero_exit_is_failed(self) -> None:
        assert CommandResult(command=("git",), cwd=Path("."), returncode=3).failed

    def test_unlaunched_is_failed(self) -> None:
        assert CommandResult(command=("git",), cwd=Path("."), returncode=None).failed

    def test_stderr_tail_keeps_last_lines(self) -> None:
        stderr = "\n".join(f"line {i}" for i in range(10)) + "\n\n"
        result = CommandResult(command=("git",), cwd=Path("."), returncode=1, stderr=stderr)
        assert result.stderr_tail(2) == "line 8\nline 9"
