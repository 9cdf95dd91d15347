from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from pancakes.shell.runner import CommandRunner
from pancakes.shell.tempfiles import TempFileWriter


@dataclass(frozen=True)
class ConnectionInfo:
    host: str = "127.0.0.1"
    port: int = 3306
    username: str = ""
    password: str = ""
    database: str = ""
    site_label: str = ""

    @classmethod
    def from_dict(cls, raw: dict[str, Any] | None) -> "ConnectionInfo":
        raw = raw or {}
        return cls(
            host=str(raw.get("host") or cls.host),
            port=int(raw.get("port") or cls.port),
            username=str(raw.get("username") or ""),
            password=str(raw.get("password") or ""),
            database=str(raw.get("database") or ""),
            site_label=str(raw.get("site_label") or ""),
        )

    def display_name(self) -> str:
        return self.site_label or self.database or self.host


@dataclass(frozen=True)
class LaunchContext:
    """Shared, read-only bundle handed to every launcher for one dispatch."""

    connection: ConnectionInfo
    runner: CommandRunner = field(default_factory=CommandRunner)
    temp_writer: TempFileWriter = field(default_factory=TempFileWriter)
    log: logging.Logger = field(default_factory=lambda: logging.getLogger("pancakes.launch"))
