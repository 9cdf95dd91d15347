from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Sequence

from pancakes.dispatch.handlers import BaseLauncher
from pancakes.dispatch.registry import register_handler
from pancakes.shell.escape import is_windows

MAC_BINARY = Path("/Applications/MySQLWorkbench.app/Contents/MacOS/MySQLWorkbench")
WINDOWS_BINARY = Path(r"C:\Program Files\MySQL\MySQL Workbench 8.0\MySQLWorkbench.exe")


@register_handler
class MySQLWorkbench(BaseLauncher):
    label = "MySQL Workbench"
    aliases = ("workbench", "wb", "mysql-workbench")

    def executable(self) -> str | None:
        if sys.platform == "darwin" and MAC_BINARY.exists():
            return str(MAC_BINARY)
        if is_windows() and WINDOWS_BINARY.exists():
            return str(WINDOWS_BINARY)
        if self.which("mysql-workbench"):
            return "mysql-workbench"
        return None

    def validate(self, args: Sequence[str], options: dict[str, Any]) -> bool:
        return self.executable() is not None

    def run(self, args: Sequence[str], options: dict[str, Any]) -> None:
        conn = self.connection
        target = f"{conn.username}@{conn.host}:{conn.port}" if conn.username else f"{conn.host}:{conn.port}"
        arguments = [self.flag("query"), self.escape(target)]

        executable = self.executable() or "mysql-workbench"
        if is_windows():
            self.exec_or_fail('start ""', [self.escape(executable), *arguments])
        else:
            # Workbench stays in the foreground; detach it from this process.
            self.exec_or_fail(self.escape(executable), [*arguments, ">/dev/null", "2>&1", "&"])
