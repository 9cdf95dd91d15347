from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

from pancakes.dispatch.handlers import BaseLauncher
from pancakes.dispatch.registry import register_handler
from pancakes.shell.escape import is_windows

INSTALL_PATHS = (
    Path(r"C:\Program Files\HeidiSQL\heidisql.exe"),
    Path(r"C:\Program Files (x86)\HeidiSQL\heidisql.exe"),
)


@register_handler
class HeidiSQL(BaseLauncher):
    label = "HeidiSQL"
    aliases = ("heidi", "heidisql")

    def executable(self) -> str | None:
        for p in INSTALL_PATHS:
            if p.exists():
                return str(p)
        if self.which("heidisql"):
            return "heidisql"
        return None

    def validate(self, args: Sequence[str], options: dict[str, Any]) -> bool:
        return is_windows() and self.executable() is not None

    def run(self, args: Sequence[str], options: dict[str, Any]) -> None:
        conn = self.connection
        arguments = [
            f"{self.flag('h')}={self.escape(conn.host)}",
            f"{self.flag('P')}={conn.port}",
            f"{self.flag('u')}={self.escape(conn.username)}",
            f"{self.flag('p')}={self.escape(conn.password)}",
            f"{self.flag('d')}={self.escape(conn.display_name())}",
        ]
        self.exec_or_fail('start ""', [self.escape(self.executable() or "heidisql"), *arguments])
