"""Run catalog scripts with the real terminal handed to the child process."""

import logging
import os
import shlex
import stat
import subprocess
from contextlib import AbstractContextManager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from textual.app import SuspendNotSupported

logger = logging.getLogger(__name__)

DEFAULT_SHELL = "bash"
RETURN_PROMPT = "Press Enter to return to the menu..."


class ScriptError(Exception):
    """A script failed its pre-flight checks and was not started."""

    reason = "cannot be run"

    def __init__(self, script: Path):
        super().__init__(f"Script {self.reason}: {script}")
        self.script = script


class ScriptNotFoundError(ScriptError):
    reason = "not found"


class NotAFileError(ScriptError):
    reason = "is not a file"


class NotExecutableError(ScriptError):
    reason = "is not executable"


@dataclass(frozen=True)
class ExecutionOutcome:
    """Result of one run() call.

    ``succeeded`` is False only when the script could not be started;
    a script that ran and exited non-zero still succeeded, with its
    status in ``exit_code``.
    """

    succeeded: bool
    message: str
    exit_code: Optional[int] = None


def check_script(script: Union[str, Path]) -> Path:
    """Verify the script exists, is a regular file and has an execute bit."""
    path = Path(script)
    if not path.exists():
        raise ScriptNotFoundError(path)
    mode = path.stat().st_mode
    if not stat.S_ISREG(mode):
        raise NotAFileError(path)
    if not mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH):
        raise NotExecutableError(path)
    return path


class ScriptRunner:
    """Release the display, run a script in a shell, then take the display back.

    ``suspend`` is a context manager factory that gives up exclusive control
    of the terminal on enter and restores it on exit, whatever happens in
    between (``App.suspend`` in the running application).
    """

    def __init__(
        self,
        suspend: Callable[[], AbstractContextManager],
        shell: str = DEFAULT_SHELL,
        wait_for_key: bool = True,
    ):
        self.suspend = suspend
        self.shell = shell
        self.wait_for_key = wait_for_key

    def run(self, script: Union[str, Path]) -> ExecutionOutcome:
        """Run a script and report what happened; never raises for script problems."""
        try:
            path = check_script(script)
        except ScriptError as e:
            logger.info("Refusing to run %s: %s", script, e.reason)
            return ExecutionOutcome(False, str(e))
        except OSError as e:
            return ExecutionOutcome(False, f"Error running script: {e}")

        try:
            with self.suspend():
                exit_code = self._execute(path)
        except SuspendNotSupported:
            logger.warning("Terminal cannot be handed over to %s", path)
            return ExecutionOutcome(False, "Error running script: terminal cannot be suspended")
        except OSError as e:
            logger.warning("Failed to start %s: %s", path, e)
            return ExecutionOutcome(False, f"Error running script: {e}")

        if exit_code == 0:
            return ExecutionOutcome(True, "Script executed successfully", exit_code)
        return ExecutionOutcome(True, f"Script exited with status {exit_code}", exit_code)

    def _execute(self, path: Path) -> int:
        os.system("clear")
        result = subprocess.run([self.shell, "-c", shlex.quote(str(path))])
        if result.returncode != 0:
            print()
            print(f"Script exited with non-zero status code {result.returncode}")
        if self.wait_for_key:
            print()
            print(RETURN_PROMPT)
            try:
                input()
            except EOFError:
                pass
            os.system("clear")
        return result.returncode
