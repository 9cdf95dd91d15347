from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from pancakes.context import ConnectionInfo
from pancakes.dispatch.errors import ConfigInvalid, SchemaInvalid
from pancakes.schema import SchemaRegistry, read_json

CONFIG_SCHEMA = "launcher_config.schema.json"
DEFAULT_TIMEOUT_SECONDS = 300.0


@dataclass(frozen=True)
class LauncherConfig:
    schema_version: str = "1.0"
    command_timeout_seconds: float | None = DEFAULT_TIMEOUT_SECONDS
    temp_prefix: str = "pancakes"
    handler_modules: list[str] = field(default_factory=list)
    default_app: str | None = None
    connection: ConnectionInfo = field(default_factory=ConnectionInfo)


def load_config(config_path: Path | None, schemas_base_dir: Path | None = None) -> LauncherConfig:
    if config_path is None or not config_path.exists():
        return LauncherConfig()

    try:
        raw = read_json(config_path)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigInvalid(code="CONFIG_INVALID", message=f"{config_path}: {e}") from e

    reg = SchemaRegistry(schemas_base_dir) if schemas_base_dir else SchemaRegistry()
    try:
        reg.validate(raw, CONFIG_SCHEMA)
    except SchemaInvalid as e:
        raise ConfigInvalid(code="CONFIG_INVALID", message=f"{config_path}: {e.message}") from e

    timeout = raw.get("command_timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
    modules = raw.get("handler_modules") or []

    return LauncherConfig(
        schema_version=str(raw["schema_version"]),
        command_timeout_seconds=float(timeout) if timeout is not None else None,
        temp_prefix=str(raw.get("temp_prefix") or "pancakes"),
        handler_modules=[str(m) for m in modules],
        default_app=raw.get("default_app"),
        connection=ConnectionInfo.from_dict(raw.get("connection")),
    )
