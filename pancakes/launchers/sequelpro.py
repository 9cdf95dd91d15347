from __future__ import annotations

import plistlib
import sys
from pathlib import Path
from typing import Any, Sequence

from pancakes.dispatch.handlers import BaseLauncher
from pancakes.dispatch.registry import register_handler

APP_PATH = Path("/Applications/Sequel Pro.app")


def build_bookmark(connection, name: str) -> bytes:
    """Sequel Pro ``.spf`` connection bookmark (an XML plist)."""
    doc = {
        "ContentFilters": {},
        "auto_connect": True,
        "data": {
            "connection": {
                "database": connection.database,
                "host": connection.host,
                "name": name,
                "password": connection.password,
                "port": connection.port,
                "rdbms_type": "mysql",
                "sslCACertFileLocation": "",
                "sslCACertFileLocationEnabled": 0,
                "sslCertificateFileLocation": "",
                "sslCertificateFileLocationEnabled": 0,
                "sslKeyFileLocation": "",
                "sslKeyFileLocationEnabled": 0,
                "type": "SPTCPIPConnection",
                "useSSL": 0,
                "user": connection.username,
            },
        },
        "encrypted": False,
        "format": "connection",
        "queryFavorites": [],
        "queryHistory": [],
        "rdbms_type": "mysql",
        "version": 1,
    }
    return plistlib.dumps(doc, fmt=plistlib.FMT_XML)


@register_handler
class SequelPro(BaseLauncher):
    label = "Sequel Pro"
    aliases = ("sequelpro", "sp", "sequel")

    def validate(self, args: Sequence[str], options: dict[str, Any]) -> bool:
        return sys.platform == "darwin" and APP_PATH.exists()

    def run(self, args: Sequence[str], options: dict[str, Any]) -> None:
        bookmark = build_bookmark(self.connection, self.connection.display_name())
        path = self.write_file(bookmark, "spf")
        self.context.log.debug("Sequel Pro bookmark written to %s", path)
        self.exec_or_fail("open", [self.escape(str(path))])
