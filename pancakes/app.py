from __future__ import annotations

import dataclasses
import logging
import sys
from pathlib import Path
from typing import Any, Sequence, TextIO

from .config import LauncherConfig, load_config
from .context import ConnectionInfo, LaunchContext
from .dispatch.controller import DispatchController
from .dispatch.registry import REGISTRY, HandlerRegistry, load_entry_point_handlers, load_handler_modules
from .shell.runner import CommandRunner
from .shell.tempfiles import TempFileWriter

logger = logging.getLogger(__name__)

# Registration order is discovery order, so this list fixes the fallback choice.
BUILTIN_LAUNCHER_MODULES = (
    "pancakes.launchers.sequelpro",
    "pancakes.launchers.workbench",
    "pancakes.launchers.heidi",
    "pancakes.launchers.mysql",
)


def load_launchers(extra_modules: Sequence[str] = ()) -> None:
    load_handler_modules(BUILTIN_LAUNCHER_MODULES)
    load_handler_modules(extra_modules)
    loaded = load_entry_point_handlers(REGISTRY)
    if loaded:
        logger.debug("Loaded launcher entry points: %s", ", ".join(loaded))


def build_context(config: LauncherConfig, overrides: dict[str, Any] | None = None) -> LaunchContext:
    changes = {k: v for k, v in (overrides or {}).items() if v is not None}
    connection: ConnectionInfo = dataclasses.replace(config.connection, **changes)
    return LaunchContext(
        connection=connection,
        runner=CommandRunner(timeout=config.command_timeout_seconds),
        temp_writer=TempFileWriter(prefix=config.temp_prefix),
    )


def list_launchers(controller: DispatchController, args: Sequence[str], options: dict[str, Any], out: TextIO) -> None:
    """One line per registered launcher; ``*`` marks those valid for this call."""
    eligible = {c.label for c in controller.candidates(args, options)}
    for entry in controller.registry.discover():
        handler = entry.factory(controller.context)
        mark = "*" if entry.label in eligible else " "
        out.write(f"{mark} {entry.label}: {', '.join(handler.aliases)}\n")


def run_dispatch(
    *,
    config_path: Path | None,
    app: str | None,
    args: Sequence[str],
    connection_overrides: dict[str, Any] | None = None,
    handler_modules: Sequence[str] = (),
    timeout: float | None = None,
    list_only: bool = False,
    out: TextIO | None = None,
    registry: HandlerRegistry | None = None,
) -> None:
    config = load_config(config_path)
    if timeout is not None:
        config = dataclasses.replace(config, command_timeout_seconds=timeout)
    if registry is None:
        load_launchers([*config.handler_modules, *handler_modules])
        registry = REGISTRY

    context = build_context(config, connection_overrides)
    controller = DispatchController(context, registry)
    options: dict[str, Any] = {"app": app if app is not None else config.default_app}

    if list_only:
        list_launchers(controller, args, options, out or sys.stdout)
        return
    controller.dispatch(list(args), options)
