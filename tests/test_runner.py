"""Tests for script pre-flight checks and the release/run/reacquire bracket."""

from __future__ import annotations

import shlex
import subprocess
import time
from unittest.mock import patch

import pytest
from textual.app import SuspendNotSupported

from linux_toolbox.runner import (
    NotAFileError,
    NotExecutableError,
    ScriptNotFoundError,
    ScriptRunner,
    check_script,
)


def _runner(terminal, **kwargs) -> ScriptRunner:
    return ScriptRunner(suspend=terminal.suspend, **kwargs)


@pytest.fixture
def quiet_terminal():
    """Keep clear/input from touching the real terminal."""
    with patch("linux_toolbox.runner.os.system") as system, patch("builtins.input", return_value="") as prompt:
        yield system, prompt


class TestCheckScript:
    def test_missing(self, tmp_path):
        with pytest.raises(ScriptNotFoundError, match="not found"):
            check_script(tmp_path / "missing.sh")

    def test_directory(self, tmp_path):
        with pytest.raises(NotAFileError, match="not a file"):
            check_script(tmp_path)

    def test_not_executable(self, write_script):
        with pytest.raises(NotExecutableError, match="not executable"):
            check_script(write_script(executable=False))

    def test_executable(self, write_script):
        path = write_script()
        assert check_script(str(path)) == path


class TestScriptRunner:
    def test_precondition_failure_never_releases_display(self, fake_terminal, write_script):
        script = write_script("locked.sh", executable=False)

        with patch("linux_toolbox.runner.subprocess.run") as run:
            outcome = _runner(fake_terminal).run(script)

        assert not outcome.succeeded
        assert "not executable" in outcome.message
        assert outcome.exit_code is None
        assert fake_terminal.events == []
        run.assert_not_called()

    def test_missing_script_reports_not_found(self, fake_terminal, tmp_path):
        outcome = _runner(fake_terminal).run(tmp_path / "gone.sh")
        assert not outcome.succeeded
        assert "not found" in outcome.message
        assert fake_terminal.events == []

    def test_successful_run_brackets_the_child(self, fake_terminal, write_script, quiet_terminal):
        script = write_script()
        calls = []

        def fake_run(args):
            calls.append((list(fake_terminal.events), args))
            return subprocess.CompletedProcess(args, 0)

        with patch("linux_toolbox.runner.subprocess.run", side_effect=fake_run):
            outcome = _runner(fake_terminal).run(script)

        assert outcome.succeeded
        assert outcome.exit_code == 0
        assert outcome.message == "Script executed successfully"
        assert calls == [(["release"], ["bash", "-c", shlex.quote(str(script))])]
        assert fake_terminal.events == ["release", "reacquire"]
        _, prompt = quiet_terminal
        prompt.assert_called_once()

    def test_non_zero_exit_is_not_a_failure_to_run(self, fake_terminal, write_script, quiet_terminal):
        script = write_script()
        with patch(
            "linux_toolbox.runner.subprocess.run",
            return_value=subprocess.CompletedProcess([], 3),
        ):
            outcome = _runner(fake_terminal).run(script)

        assert outcome.succeeded
        assert outcome.exit_code == 3
        assert "status 3" in outcome.message
        assert fake_terminal.events == ["release", "reacquire"]

    def test_spawn_error_still_reacquires_display(self, fake_terminal, write_script, quiet_terminal):
        script = write_script()
        with patch(
            "linux_toolbox.runner.subprocess.run",
            side_effect=FileNotFoundError("bash"),
        ):
            outcome = _runner(fake_terminal).run(script)

        assert not outcome.succeeded
        assert outcome.message.startswith("Error running script")
        assert fake_terminal.events == ["release", "reacquire"]

    def test_unexpected_error_propagates_after_reacquire(self, fake_terminal, write_script, quiet_terminal):
        script = write_script()
        with patch("linux_toolbox.runner.subprocess.run", side_effect=RuntimeError("boom")):
            with pytest.raises(RuntimeError):
                _runner(fake_terminal).run(script)
        assert fake_terminal.events == ["release", "reacquire"]

    def test_suspend_not_supported(self, write_script):
        def refuse():
            raise SuspendNotSupported("no terminal")

        runner = ScriptRunner(suspend=refuse)
        with patch("linux_toolbox.runner.subprocess.run") as run:
            outcome = runner.run(write_script())

        assert not outcome.succeeded
        assert "cannot be suspended" in outcome.message
        run.assert_not_called()

    def test_returns_as_soon_as_script_exits(self, fake_terminal, write_script, quiet_terminal):
        with patch(
            "linux_toolbox.runner.subprocess.run",
            return_value=subprocess.CompletedProcess([], 0),
        ):
            started = time.monotonic()
            _runner(fake_terminal, wait_for_key=False).run(write_script())
            elapsed = time.monotonic() - started

        assert elapsed < 0.5

    def test_no_prompt_when_disabled(self, fake_terminal, write_script, quiet_terminal):
        with patch(
            "linux_toolbox.runner.subprocess.run",
            return_value=subprocess.CompletedProcess([], 0),
        ):
            _runner(fake_terminal, wait_for_key=False).run(write_script())
        _, prompt = quiet_terminal
        prompt.assert_not_called()

    def test_closed_stdin_does_not_break_prompt(self, fake_terminal, write_script):
        with (
            patch("linux_toolbox.runner.os.system"),
            patch("builtins.input", side_effect=EOFError),
            patch(
                "linux_toolbox.runner.subprocess.run",
                return_value=subprocess.CompletedProcess([], 0),
            ),
        ):
            outcome = _runner(fake_terminal).run(write_script())
        assert outcome.succeeded
