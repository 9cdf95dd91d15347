from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Sequence

from pancakes.dispatch.errors import CommandTimedOut

from .escape import escape_shell_arg, is_windows

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionResult:
    command_line: str
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class CommandRunner:
    """Runs shell command lines and remembers the last exit status.

    Arguments are joined verbatim; callers escape them first with
    :func:`pancakes.shell.escape.escape_shell_arg`.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout
        self.last_exit_code: int | None = None

    def run(self, command: str, arguments: str | Sequence[str] = ()) -> ExecutionResult:
        if isinstance(arguments, str):
            arguments = [arguments]
        command_line = " ".join([command, *arguments]) if arguments else command

        logger.debug("Executing: %s", command_line)
        try:
            proc = subprocess.run(
                command_line,
                shell=True,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            self.last_exit_code = None
            raise CommandTimedOut(
                code="COMMAND_TIMEOUT",
                message=f"command did not finish within {self.timeout}s: {command_line}",
            ) from e

        self.last_exit_code = proc.returncode
        return ExecutionResult(
            command_line=command_line,
            exit_code=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
        )

    def which(self, command: str) -> bool:
        if is_windows():
            result = self.run("where", [escape_shell_arg(command), ">NUL", "2>&1"])
        else:
            result = self.run("command -v", [escape_shell_arg(command), ">/dev/null", "2>&1"])
        return result.exit_code == 0
