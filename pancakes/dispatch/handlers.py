from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, Sequence

from pancakes.context import LaunchContext
from pancakes.shell.escape import escape_shell_arg, flag
from pancakes.shell.runner import ExecutionResult

from .errors import LaunchFailed


class LauncherHandler(Protocol):
    label: str
    aliases: tuple[str, ...]

    def run(self, args: Sequence[str], options: dict[str, Any]) -> None: ...


class BaseLauncher:
    """Shared plumbing for launchers: process execution, temp files, escaping.

    Subclasses set ``label`` and ``aliases`` and implement ``run``. A
    ``validate`` method is optional; without one the launcher is always a
    candidate.
    """

    label: str = ""
    aliases: tuple[str, ...] = ()

    def __init__(self, context: LaunchContext) -> None:
        self.context = context

    @property
    def connection(self):
        return self.context.connection

    def run(self, args: Sequence[str], options: dict[str, Any]) -> None:
        raise NotImplementedError(f"{type(self).__name__}.run must be implemented")

    def exec_command(self, command: str, arguments: str | Sequence[str] = ()) -> ExecutionResult:
        return self.context.runner.run(command, arguments)

    def exec_or_fail(self, command: str, arguments: str | Sequence[str] = ()) -> ExecutionResult:
        result = self.exec_command(command, arguments)
        if not result.ok:
            detail = result.stderr.strip() or f"exit code {result.exit_code}"
            raise LaunchFailed(code="LAUNCH_FAILED", message=f"{self.label} failed to start: {detail}")
        return result

    def which(self, command: str) -> bool:
        return self.context.runner.which(command)

    def write_file(self, data: bytes | str, suffix: str | None = None) -> Path:
        if isinstance(data, str):
            data = data.encode("utf-8")
        return self.context.temp_writer.write(data, suffix)

    @staticmethod
    def escape(value: str, raw: bool = False) -> str:
        return escape_shell_arg(value, raw)

    @staticmethod
    def flag(name: str) -> str:
        return flag(name)

    def __str__(self) -> str:
        return self.label
