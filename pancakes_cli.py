from __future__ import annotations

import argparse
import logging
from pathlib import Path

from pancakes.app import run_dispatch
from pancakes.dispatch.errors import PancakesError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def main(argv: list[str] | None = None, *, runner=run_dispatch) -> None:
    p = argparse.ArgumentParser(prog="pancakes", description="Open a site database in your favorite MySQL editor")
    p.add_argument("--app", default=None, help="Launcher to use, matched against its aliases (e.g. sequelpro, wb, heidi)")
    p.add_argument("--config", default=Path("pancakes.json"), type=Path, help="Path to launcher config JSON")
    p.add_argument("--host", default=None)
    p.add_argument("--port", default=None, type=int)
    p.add_argument("--user", dest="username", default=None)
    p.add_argument("--password", default=None)
    p.add_argument("--database", default=None)
    p.add_argument("--site-label", default=None, help="Human-readable name shown by the launcher")
    p.add_argument(
        "--handler-module",
        action="append",
        default=[],
        help="Python module registering extra launchers (repeatable)",
    )
    p.add_argument("--timeout", default=None, type=float, help="Seconds before an external command is abandoned")
    p.add_argument("--list", dest="list_only", action="store_true", help="List launchers and exit")
    p.add_argument("-v", "--verbose", action="store_true")
    p.add_argument("args", nargs=argparse.REMAINDER, help="Passed through to the chosen launcher")
    ns = p.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if ns.verbose else logging.INFO, format=LOG_FORMAT)

    passthrough = ns.args[1:] if ns.args[:1] == ["--"] else ns.args
    try:
        runner(
            config_path=ns.config,
            app=ns.app,
            args=passthrough,
            connection_overrides={
                "host": ns.host,
                "port": ns.port,
                "username": ns.username,
                "password": ns.password,
                "database": ns.database,
                "site_label": ns.site_label,
            },
            handler_modules=ns.handler_module,
            timeout=ns.timeout,
            list_only=ns.list_only,
        )
    except PancakesError as e:
        p.exit(1, f"pancakes: {e.message}\n")


if __name__ == "__main__":
    main()
