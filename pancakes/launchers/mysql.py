from __future__ import annotations

import sys
from typing import Any, Sequence

from pancakes.dispatch.errors import LaunchFailed
from pancakes.dispatch.handlers import BaseLauncher
from pancakes.dispatch.registry import register_handler


# Escapes understood inside a quoted option-file value.
_OPTION_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t", "\b": "\\b"}


def option_value(value: str) -> str:
    if "\0" in value:
        raise LaunchFailed(code="LAUNCH_FAILED", message="connection settings may not contain NUL characters")
    return '"' + "".join(_OPTION_ESCAPES.get(ch, ch) for ch in value) + '"'


def client_options_file(connection) -> str:
    lines = [
        "[client]",
        f"host={option_value(connection.host)}",
        f"port={int(connection.port)}",
    ]
    if connection.username:
        lines.append(f"user={option_value(connection.username)}")
    if connection.password:
        lines.append(f"password={option_value(connection.password)}")
    return "\n".join(lines) + "\n"


@register_handler
class MySQLClient(BaseLauncher):
    """Runs the passthrough arguments as a statement through the ``mysql`` client.

    Only a candidate when there is something to execute; credentials go through
    a temporary options file rather than the command line.
    """

    label = "MySQL CLI"
    aliases = ("mysql", "cli")

    def validate(self, args: Sequence[str], options: dict[str, Any]) -> bool:
        return bool(args) and self.which("mysql")

    def run(self, args: Sequence[str], options: dict[str, Any]) -> None:
        options_file = self.write_file(client_options_file(self.connection), "cnf")
        try:
            arguments = [f"--defaults-extra-file={self.escape(str(options_file))}"]
            if self.connection.database:
                arguments.append(self.escape(self.connection.database))
            arguments += ["--execute", self.escape(" ".join(args))]
            result = self.exec_or_fail("mysql", arguments)
        finally:
            options_file.unlink(missing_ok=True)
        sys.stdout.write(result.stdout)
